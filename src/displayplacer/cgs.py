"""Private CoreGraphics (CGS) display-mode calls and the IOKit rotation probe.

These entry points have no PyObjC bindings, so they are reached through
ctypes.  The libraries are loaded on first use.
"""

from __future__ import annotations

import ctypes
import ctypes.util
from functools import lru_cache

from .backend import DisplayError
from .models import DisplayMode

# Bytes requested from CGSGetDisplayModeDescriptionOfLength
MODE_DESCRIPTION_LENGTH = 0xD4

# IOServiceRequestProbe option requesting a transform change
_PROBE_TRANSFORM = 0x00000400

# IOGraphicsTypes.h: kIOScaleSwapAxes = 0x10, kIOScaleInvertX = 0x20, kIOScaleInvertY = 0x40
_ROTATE_BITS: dict[int, int] = {
    0: 0x00,
    90: 0x30,
    180: 0x60,
    270: 0x50,
}


class _ModeFields(ctypes.Structure):
    _fields_ = [
        ("mode", ctypes.c_uint32),
        ("flags", ctypes.c_uint32),
        ("width", ctypes.c_uint32),
        ("height", ctypes.c_uint32),
        ("depth", ctypes.c_uint32),
        ("_unknown1", ctypes.c_uint32 * 42),
        ("_unknown2", ctypes.c_uint16),
        ("freq", ctypes.c_uint16),
        ("_unknown3", ctypes.c_uint32 * 4),
        ("density", ctypes.c_float),
    ]


class ModeDescription(ctypes.Union):
    """Layout filled in by CGSGetDisplayModeDescriptionOfLength."""

    _fields_ = [
        ("raw", ctypes.c_uint8 * 0xDC),
        ("fields", _ModeFields),
    ]

    def to_mode(self, index: int) -> DisplayMode:
        f = self.fields
        return DisplayMode(
            index=index,
            width=f.width,
            height=f.height,
            hz=f.freq,
            density=f.density,
        )


def _load(name: str) -> ctypes.CDLL:
    path = ctypes.util.find_library(name)
    if not path:
        raise DisplayError(f"{name} framework not found")
    return ctypes.CDLL(path)


@lru_cache(maxsize=None)
def _core_graphics() -> ctypes.CDLL:
    lib = _load("CoreGraphics")

    lib.CGSGetNumberOfDisplayModes.argtypes = [ctypes.c_uint32, ctypes.POINTER(ctypes.c_int)]
    lib.CGSGetNumberOfDisplayModes.restype = ctypes.c_int

    lib.CGSGetDisplayModeDescriptionOfLength.argtypes = [
        ctypes.c_uint32, ctypes.c_int, ctypes.POINTER(ModeDescription), ctypes.c_int,
    ]
    lib.CGSGetDisplayModeDescriptionOfLength.restype = ctypes.c_int

    lib.CGSGetCurrentDisplayMode.argtypes = [ctypes.c_uint32, ctypes.POINTER(ctypes.c_int)]
    lib.CGSGetCurrentDisplayMode.restype = ctypes.c_int

    lib.CGSConfigureDisplayMode.argtypes = [ctypes.c_void_p, ctypes.c_uint32, ctypes.c_int]
    lib.CGSConfigureDisplayMode.restype = ctypes.c_int

    lib.CGDisplayIOServicePort.argtypes = [ctypes.c_uint32]
    lib.CGDisplayIOServicePort.restype = ctypes.c_uint32
    return lib


@lru_cache(maxsize=None)
def _iokit() -> ctypes.CDLL:
    lib = _load("IOKit")
    lib.IOServiceRequestProbe.argtypes = [ctypes.c_uint32, ctypes.c_uint32]
    lib.IOServiceRequestProbe.restype = ctypes.c_int
    return lib


def all_modes(screen_id: int) -> list[DisplayMode]:
    """Every mode the screen supports for its current rotation, in platform order."""
    cg = _core_graphics()
    count = ctypes.c_int(0)
    err = cg.CGSGetNumberOfDisplayModes(screen_id, ctypes.byref(count))
    if err != 0:
        raise DisplayError(f"Unable to count modes of screen {screen_id}", err)

    modes: list[DisplayMode] = []
    for index in range(count.value):
        desc = ModeDescription()
        err = cg.CGSGetDisplayModeDescriptionOfLength(
            screen_id, index, ctypes.byref(desc), MODE_DESCRIPTION_LENGTH,
        )
        if err != 0:
            raise DisplayError(f"Unable to read mode {index} of screen {screen_id}", err)
        modes.append(desc.to_mode(index))
    return modes


def current_mode(screen_id: int) -> int:
    cg = _core_graphics()
    mode = ctypes.c_int(-1)
    err = cg.CGSGetCurrentDisplayMode(screen_id, ctypes.byref(mode))
    if err != 0:
        raise DisplayError(f"Unable to read current mode of screen {screen_id}", err)
    return mode.value


def configure_mode(config_ref: int, screen_id: int, mode: int) -> None:
    """Stage *mode* for *screen_id* in the configuration at address *config_ref*."""
    err = _core_graphics().CGSConfigureDisplayMode(ctypes.c_void_p(config_ref), screen_id, mode)
    if err != 0:
        raise DisplayError(f"Unable to set mode {mode} on screen {screen_id}", err)


def rotation_options(degree: int) -> int:
    """IOServiceRequestProbe options for *degree*; unknown degrees mean 0."""
    return _PROBE_TRANSFORM | (_ROTATE_BITS.get(degree, 0) << 16)


def request_rotation(screen_id: int, degree: int) -> None:
    """Ask the display driver to rotate *screen_id*.  Takes effect outside any transaction."""
    service = _core_graphics().CGDisplayIOServicePort(screen_id)
    err = _iokit().IOServiceRequestProbe(service, rotation_options(degree))
    if err != 0:
        raise DisplayError(f"Unable to rotate screen {screen_id}", err)
