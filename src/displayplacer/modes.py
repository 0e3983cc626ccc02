"""Mode matching: resolve a requested resolution to a platform mode index."""

from __future__ import annotations

from .models import DisplayMode, ScreenConfig, format_res


def find_mode(
    modes: list[DisplayMode],
    width: int,
    height: int,
    *,
    scaled: bool = False,
    hz: int = 0,
) -> DisplayMode | None:
    """Return the first mode matching the request, in enumeration order.

    ``scaled`` requires density 2.0; when False any density matches.
    ``hz`` of 0 matches any refresh rate.  The list is never re-sorted:
    on ties the platform's earliest mode wins.
    """
    for mode in modes:
        if mode.width != width or mode.height != height:
            continue
        if scaled and not mode.scaled:
            continue
        if hz and mode.hz != hz:
            continue
        return mode
    return None


def resolve_mode(config: ScreenConfig, modes: list[DisplayMode]) -> int | None:
    """Mode index to apply for *config*, or None when nothing matches.

    An explicit ``mode`` is returned as-is without checking the list.
    """
    if config.has_mode:
        return config.mode
    mode = find_mode(modes, config.width, config.height, scaled=config.scaled, hz=config.hz)
    return mode.index if mode else None


def describe_request(config: ScreenConfig) -> str:
    """Human-readable form of the requested resolution for diagnostics."""
    label = f"res={format_res(config.width, config.height, config.hz)}"
    if config.scaled:
        label += ", scaled"
    return label
