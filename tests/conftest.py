"""Shared fixtures: an in-memory display backend."""

from __future__ import annotations

import pytest

from displayplacer.backend import DisplayError
from displayplacer.models import DisplayMode, ScreenInfo


class FakeTransaction:
    def __init__(self, backend: FakeBackend) -> None:
        self._backend = backend

    def _call(self, *call) -> None:
        if call in self._backend.failures or call[:2] in self._backend.failures:
            raise DisplayError(f"fake failure: {call}", -1)
        self._backend.calls.append(call)

    def set_mode(self, screen_id: int, mode: int) -> None:
        self._call("set_mode", screen_id, mode)

    def set_origin(self, screen_id: int, x: int, y: int) -> None:
        self._call("set_origin", screen_id, x, y)

    def set_mirror(self, mirror_id: int, primary_id: int) -> None:
        self._call("set_mirror", mirror_id, primary_id)

    def commit(self) -> None:
        self._backend.commits += 1
        if ("commit",) in self._backend.failures:
            raise DisplayError("fake commit failure", -1)


class FakeBackend:
    """Implements DisplayBackend over a dict of ScreenInfo.

    Every mutation is recorded in ``calls``.  Adding ``("rotate", id)``,
    ``("set_origin", id)`` and the like to ``failures`` makes that call raise.
    """

    def __init__(self, screens: list[ScreenInfo]) -> None:
        self.screens = {s.id: s for s in screens}
        self.calls: list[tuple] = []
        self.failures: set[tuple] = set()
        self.commits = 0
        self.transactions = 0

    def online_screens(self) -> list[int]:
        return list(self.screens)

    def screen_info(self, screen_id: int) -> ScreenInfo:
        return self.screens[screen_id]

    def rotation(self, screen_id: int) -> int:
        return self.screens[screen_id].degree

    def modes(self, screen_id: int) -> list[DisplayMode]:
        return list(self.screens[screen_id].modes)

    def rotate(self, screen_id: int, degree: int) -> None:
        if ("rotate", screen_id) in self.failures:
            raise DisplayError("fake rotation failure", -1)
        self.calls.append(("rotate", screen_id, degree))
        self.screens[screen_id].degree = degree

    def begin_configuration(self) -> FakeTransaction:
        self.transactions += 1
        return FakeTransaction(self)

    def mutations(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


LAPTOP_MODES = [
    DisplayMode(0, 1440, 900, 0, 2.0),
    DisplayMode(1, 1680, 1050, 0, 2.0),
    DisplayMode(2, 2880, 1800, 0, 1.0),
    DisplayMode(3, 1440, 900, 0, 1.0),
]

MONITOR_MODES = [
    DisplayMode(0, 1920, 1080, 60, 1.0),
    DisplayMode(1, 1920, 1080, 60, 2.0),
    DisplayMode(2, 1920, 1080, 0, 2.0),
    DisplayMode(3, 2560, 1440, 60, 1.0),
    DisplayMode(4, 2560, 1440, 30, 1.0),
]


def make_laptop(**overrides) -> ScreenInfo:
    values = dict(
        id=69731906, width=1440, height=900, x=0, y=0, degree=0,
        builtin=True, main=True, physical_width_mm=286.0, physical_height_mm=179.0,
        modes=list(LAPTOP_MODES), current_mode=0,
    )
    values.update(overrides)
    return ScreenInfo(**values)


def make_monitor(**overrides) -> ScreenInfo:
    values = dict(
        id=374164677, width=2560, height=1440, x=1440, y=0, degree=0,
        builtin=False, main=False, physical_width_mm=597.0, physical_height_mm=336.0,
        modes=list(MONITOR_MODES), current_mode=3,
    )
    values.update(overrides)
    return ScreenInfo(**values)


@pytest.fixture
def laptop() -> ScreenInfo:
    return make_laptop()


@pytest.fixture
def monitor() -> ScreenInfo:
    return make_monitor()


@pytest.fixture
def backend(laptop: ScreenInfo, monitor: ScreenInfo) -> FakeBackend:
    return FakeBackend([laptop, monitor])
