"""Data models: ScreenConfig, DisplayMode, ScreenInfo, MirrorState."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class ParseError(ValueError):
    """A screen argument could not be parsed."""


# ── Enums ────────────────────────────────────────────────────────────────

class MirrorRole(Enum):
    STANDALONE = "standalone"
    PRIMARY = "primary"
    MIRROR = "mirror"


@dataclass
class MirrorState:
    """Where a screen sits in the current mirroring arrangement."""

    role: MirrorRole = MirrorRole.STANDALONE
    mirrors: list[int] = field(default_factory=list)   # PRIMARY only
    mirror_of: int | None = None                       # MIRROR only


# ── Leaf formatting ──────────────────────────────────────────────────────

def format_res(width: int, height: int, hz: int = 0) -> str:
    """Format ``WxH``, appending ``xHZ`` only for a non-zero refresh rate."""
    if hz:
        return f"{width}x{height}x{hz}"
    return f"{width}x{height}"


def _to_int(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        return None


# ── DisplayMode ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DisplayMode:
    """A platform-enumerated mode; ``index`` is its position in the list."""

    index: int
    width: int
    height: int
    hz: int = 0              # 0 when the framerate is fixed/unreported
    density: float = 1.0

    @property
    def scaled(self) -> bool:
        """True for HiDPI modes (density factor 2.0)."""
        return self.density == 2.0

    def res_label(self) -> str:
        return format_res(self.width, self.height, self.hz)


# ── ScreenInfo ───────────────────────────────────────────────────────────

@dataclass
class ScreenInfo:
    """Snapshot of one online screen as reported by the platform."""

    id: int
    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0
    degree: int = 0
    builtin: bool = False
    main: bool = False
    physical_width_mm: float = 0.0
    physical_height_mm: float = 0.0
    mirror_of: int = 0       # 0 = not mirroring another screen
    modes: list[DisplayMode] = field(default_factory=list)
    current_mode: int | None = None

    @property
    def diagonal_inches(self) -> int:
        """Diagonal size estimated from the physical size in millimeters."""
        diagonal_mm = math.hypot(self.physical_width_mm, self.physical_height_mm)
        return round(diagonal_mm / 25.4)

    @property
    def current(self) -> DisplayMode | None:
        """The currently active mode, if the platform reported one."""
        if self.current_mode is None:
            return None
        for mode in self.modes:
            if mode.index == self.current_mode:
                return mode
        return None


# ── ScreenConfig ─────────────────────────────────────────────────────────

@dataclass
class ScreenConfig:
    """Requested arrangement for one screen, parsed from one CLI argument."""

    id: int = 0
    mirrors: list[int] = field(default_factory=list)

    # Resolution
    width: int = 0
    height: int = 0
    hz: int = 0              # 0 = any refresh rate
    scaled: bool = False

    # Explicit mode index, overrides width/height/hz/scaled when set
    mode: int | None = None

    # Origin; (0, 0) makes this the main screen
    x: int = 0
    y: int = 0

    degree: int = 0

    # Malformed tokens by key; a non-empty map fails this screen only
    invalid: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    KEYS: ClassVar[tuple[str, ...]] = ("id", "res", "scaling", "origin", "mode", "degree")
    DEGREES: ClassVar[tuple[int, ...]] = (0, 90, 180, 270)

    @property
    def has_mode(self) -> bool:
        return self.mode is not None

    @classmethod
    def from_arg(cls, arg: str) -> ScreenConfig:
        """Parse a property group like ``"id:5+6 res:1920x1080x60 origin:(0,0)"``.

        Tokens are whitespace separated ``key:value`` pairs.  A repeated key
        overrides the earlier value.  Raises ParseError for an unknown key
        or a group without a numeric ``id``.  Any other malformed value is
        recorded in ``invalid`` and leaves the field at its default.
        """
        config = cls()
        seen_id = False

        for token in arg.split():
            key, _, value = token.partition(":")
            if key not in cls.KEYS:
                raise ParseError(f"unknown property {key!r}")
            config.invalid.pop(key, None)

            if key == "id":
                ids = [_to_int(p) for p in value.split("+") if p]
                if not ids or ids[0] is None:
                    raise ParseError(f"invalid screen id {value!r}")
                config.id = ids[0]
                config.mirrors = [i for i in ids[1:] if i is not None]
                if len(config.mirrors) != len(ids) - 1:
                    config.invalid[key] = token
                seen_id = True
            elif key == "res":
                parts = [_to_int(p) for p in value.split("x") if p][:3]
                if len(parts) < 2 or None in parts:
                    config.invalid[key] = token
                    continue
                config.width, config.height = parts[:2]
                config.hz = parts[2] if len(parts) > 2 else 0
            elif key == "scaling":
                config.scaled = value == "on"
            elif key == "origin":
                coords = [_to_int(c) for c in value.strip("()").split(",")]
                if len(coords) != 2 or None in coords:
                    config.invalid[key] = token
                    continue
                config.x, config.y = coords
            elif key == "mode":
                mode = _to_int(value)
                if mode is None:
                    config.invalid[key] = token
                    continue
                config.mode = mode
            else:
                degree = _to_int(value)
                config.degree = degree if degree in cls.DEGREES else 0

        if not seen_id:
            raise ParseError(f"missing id in {arg!r}")
        return config

    def to_arg(self) -> str:
        """Serialize back into a property group accepted by from_arg."""
        ids = "+".join(str(i) for i in [self.id, *self.mirrors])
        parts = [f"id:{ids}"]
        if self.has_mode:
            parts.append(f"mode:{self.mode}")
        else:
            parts.append(f"res:{format_res(self.width, self.height, self.hz)}")
            parts.append(f"scaling:{'on' if self.scaled else 'off'}")
        parts.append(f"origin:({self.x},{self.y})")
        parts.append(f"degree:{self.degree}")
        return " ".join(parts)
