"""Current-state reporting: mirror sets, the re-runnable profile, and `list` output."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import MirrorRole, MirrorState, ScreenConfig, ScreenInfo

PROGRAM = "displayplacer"


def resolve_mirror_states(screens: list[ScreenInfo]) -> dict[int, MirrorState]:
    """Rebuild mirror sets from what each screen reports it mirrors.

    Mirrors are listed under their primary in online-list order.  A screen
    claiming to mirror a screen that is not online stays standalone so it
    still appears in the profile.  The first role a screen takes is kept,
    so a chain of mirrors never drops a screen from the profile.
    """
    states = {s.id: MirrorState() for s in screens}

    for screen in screens:
        primary = states.get(screen.mirror_of) if screen.mirror_of else None
        if primary is None or screen.mirror_of == screen.id:
            continue
        if states[screen.id].role != MirrorRole.STANDALONE or primary.role == MirrorRole.MIRROR:
            continue
        states[screen.id] = MirrorState(role=MirrorRole.MIRROR, mirror_of=screen.mirror_of)
        primary.role = MirrorRole.PRIMARY
        primary.mirrors.append(screen.id)

    return states


# ── Profile ──────────────────────────────────────────────────────────────

@dataclass
class Profile:
    """The current arrangement as one ScreenConfig per top-level screen."""

    configs: list[ScreenConfig] = field(default_factory=list)

    @classmethod
    def from_screens(cls, screens: list[ScreenInfo]) -> Profile:
        states = resolve_mirror_states(screens)
        configs: list[ScreenConfig] = []
        for screen in screens:
            state = states[screen.id]
            if state.role == MirrorRole.MIRROR:
                continue
            current = screen.current
            configs.append(ScreenConfig(
                id=screen.id,
                mirrors=list(state.mirrors),
                width=screen.width,
                height=screen.height,
                hz=current.hz if current else 0,
                scaled=current.scaled if current else False,
                x=screen.x,
                y=screen.y,
                degree=screen.degree,
            ))
        return cls(configs=configs)

    def to_args(self) -> list[str]:
        return [c.to_arg() for c in self.configs]

    def to_command(self) -> str:
        """Shell command that restores this arrangement."""
        return PROGRAM + "".join(f' "{arg}"' for arg in self.to_args())


# ── `list` report ────────────────────────────────────────────────────────

def format_screen(screen: ScreenInfo) -> str:
    """Describe one screen and the modes available for its current rotation."""
    lines = [f"Screen ID: {screen.id}"]

    if screen.builtin:
        lines.append("Type: MacBook built in screen")
    else:
        lines.append(f"Type: {screen.diagonal_inches} inch external screen")

    lines.append(f"Resolution: {screen.width}x{screen.height}")

    origin = f"Origin: ({screen.x},{screen.y})"
    if screen.main:
        origin += " - main display"
    lines.append(origin)

    rotation = f"Rotation: {screen.degree}"
    if screen.builtin:
        rotation += (
            " - rotate internal screen example (may crash computer, but will be rotated"
            f' after rebooting): `{PROGRAM} "id:{screen.id} degree:90"`'
        )
    lines.append(rotation)

    lines.append(f"Resolutions for rotation {screen.degree}:")
    for mode in screen.modes:
        line = f"  mode {mode.index}: res={mode.res_label()}"
        if mode.scaled:
            line += ", scaled"
        if mode.index == screen.current_mode:
            line += " <-- current mode"
        lines.append(line)

    return "\n".join(lines)


def format_listing(screens: list[ScreenInfo]) -> str:
    """Full `list` output: every screen, then the command restoring the layout."""
    blocks = [format_screen(s) + "\n" for s in screens]
    blocks.append("Execute the command below to set your screens to the current arrangement:\n")
    blocks.append(Profile.from_screens(screens).to_command())
    return "\n".join(blocks)
