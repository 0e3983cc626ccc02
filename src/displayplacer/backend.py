"""Display platform capability interface and backend detection."""

from __future__ import annotations

import logging
import platform
from typing import Protocol

from .models import DisplayMode, ScreenInfo

log = logging.getLogger(__name__)


class DisplayError(RuntimeError):
    """A platform display call failed."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class UnsupportedPlatformError(DisplayError):
    """No display backend exists for the running operating system."""


class DisplayTransaction(Protocol):
    """A configuration session: changes take effect together on commit."""

    def set_mode(self, screen_id: int, mode: int) -> None: ...

    def set_origin(self, screen_id: int, x: int, y: int) -> None: ...

    def set_mirror(self, mirror_id: int, primary_id: int) -> None: ...

    def commit(self) -> None: ...


class DisplayBackend(Protocol):
    """Queries and mutations the placer needs from the operating system."""

    def online_screens(self) -> list[int]: ...

    def screen_info(self, screen_id: int) -> ScreenInfo: ...

    def rotation(self, screen_id: int) -> int: ...

    def modes(self, screen_id: int) -> list[DisplayMode]: ...

    def rotate(self, screen_id: int, degree: int) -> None: ...

    def begin_configuration(self) -> DisplayTransaction: ...


def screens(backend: DisplayBackend) -> list[ScreenInfo]:
    """Snapshot every online screen, in the platform's online-list order."""
    return [backend.screen_info(screen_id) for screen_id in backend.online_screens()]


def detect_backend() -> DisplayBackend:
    """Return the display backend for the running operating system."""
    system = platform.system()
    if system == "Darwin":
        from .quartz import QuartzDisplays
        log.debug("Using Quartz display backend")
        return QuartzDisplays()
    raise UnsupportedPlatformError(f"Unsupported platform: {system or 'unknown'}")
