"""macOS display backend built on the Quartz Display Services API."""

from __future__ import annotations

import logging

from Quartz import (
    CGBeginDisplayConfiguration,
    CGCompleteDisplayConfiguration,
    CGConfigureDisplayMirrorOfDisplay,
    CGConfigureDisplayOrigin,
    CGDisplayBounds,
    CGDisplayIsBuiltin,
    CGDisplayIsInMirrorSet,
    CGDisplayIsMain,
    CGDisplayMirrorsDisplay,
    CGDisplayPixelsHigh,
    CGDisplayPixelsWide,
    CGDisplayRotation,
    CGDisplayScreenSize,
    CGGetOnlineDisplayList,
    kCGConfigurePermanently,
    kCGErrorSuccess,
)

from . import cgs
from .backend import DisplayError
from .models import DisplayMode, ScreenInfo

log = logging.getLogger(__name__)


class QuartzTransaction:
    """Wraps a CGDisplayConfigRef; committed exactly once."""

    def __init__(self, config_ref) -> None:
        self._ref = config_ref
        self._done = False

    def _check_open(self) -> None:
        if self._done:
            raise DisplayError("Display configuration already finished")

    def set_mode(self, screen_id: int, mode: int) -> None:
        self._check_open()
        cgs.configure_mode(self._ref.__pointer__, screen_id, mode)

    def set_origin(self, screen_id: int, x: int, y: int) -> None:
        self._check_open()
        err = CGConfigureDisplayOrigin(self._ref, screen_id, x, y)
        if err != kCGErrorSuccess:
            raise DisplayError(f"Unable to move screen {screen_id}", err)

    def set_mirror(self, mirror_id: int, primary_id: int) -> None:
        self._check_open()
        err = CGConfigureDisplayMirrorOfDisplay(self._ref, mirror_id, primary_id)
        if err != kCGErrorSuccess:
            raise DisplayError(f"Unable to mirror screen {primary_id} on {mirror_id}", err)

    def commit(self) -> None:
        self._check_open()
        self._done = True
        err = CGCompleteDisplayConfiguration(self._ref, kCGConfigurePermanently)
        if err != kCGErrorSuccess:
            raise DisplayError("Unable to complete display configuration", err)


class QuartzDisplays:
    """Query and configure screens through CoreGraphics."""

    MAX_DISPLAYS = 128

    def online_screens(self) -> list[int]:
        err, screen_ids, count = CGGetOnlineDisplayList(self.MAX_DISPLAYS, None, None)
        if err != kCGErrorSuccess:
            raise DisplayError("Unable to list online screens", err)
        return [int(s) for s in screen_ids[:count]]

    def rotation(self, screen_id: int) -> int:
        return int(CGDisplayRotation(screen_id))

    def modes(self, screen_id: int) -> list[DisplayMode]:
        return cgs.all_modes(screen_id)

    def screen_info(self, screen_id: int) -> ScreenInfo:
        bounds = CGDisplayBounds(screen_id)
        size = CGDisplayScreenSize(screen_id)

        # CGDisplayMirrorsDisplay is only meaningful inside a mirror set
        mirror_of = 0
        if CGDisplayIsInMirrorSet(screen_id):
            mirror_of = int(CGDisplayMirrorsDisplay(screen_id))

        return ScreenInfo(
            id=screen_id,
            width=int(CGDisplayPixelsWide(screen_id)),
            height=int(CGDisplayPixelsHigh(screen_id)),
            x=int(bounds.origin.x),
            y=int(bounds.origin.y),
            degree=self.rotation(screen_id),
            builtin=bool(CGDisplayIsBuiltin(screen_id)),
            main=bool(CGDisplayIsMain(screen_id)),
            physical_width_mm=float(size.width),
            physical_height_mm=float(size.height),
            mirror_of=mirror_of,
            modes=self.modes(screen_id),
            current_mode=cgs.current_mode(screen_id),
        )

    def rotate(self, screen_id: int, degree: int) -> None:
        log.debug("Requesting rotation of screen %s to %s degrees", screen_id, degree)
        cgs.request_rotation(screen_id, degree)

    def begin_configuration(self) -> QuartzTransaction:
        err, config_ref = CGBeginDisplayConfiguration(None)
        if err != kCGErrorSuccess:
            raise DisplayError("Unable to begin display configuration", err)
        return QuartzTransaction(config_ref)
