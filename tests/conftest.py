from __future__ import annotations

import pytest

from floatwm.core.host import VirtualHost
from floatwm.core.manager import SurfaceManager
from floatwm.core.surface import Surface, SurfaceOptions


class CallbackRecorder:
    """Collects the names of surface callbacks as they fire."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def options(self, **kwargs) -> SurfaceOptions:
        kwargs.setdefault("title", "Test")
        kwargs.setdefault("content", object())
        return SurfaceOptions(
            on_close=lambda: self.calls.append("close"),
            on_focus=lambda: self.calls.append("focus"),
            on_move_or_resize=lambda: self.calls.append("move"),
            **kwargs,
        )

    def count(self, name: str) -> int:
        return self.calls.count(name)


def header_point(surface: Surface) -> tuple[int, int]:
    """A point on the header, clear of the control buttons and resize handles."""
    rect = surface.rendered_rect
    return rect.x + 150, rect.y + 10


@pytest.fixture
def host() -> VirtualHost:
    return VirtualHost(1280, 720)


@pytest.fixture
def wm(host: VirtualHost) -> SurfaceManager:
    return SurfaceManager(host)


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def window(wm: SurfaceManager, recorder: CallbackRecorder) -> Surface:
    """A surface at (100, 100, 600, 400) with recorded callbacks."""
    surface = wm.open(recorder.options(x=100, y=100, width=600, height=400))
    assert surface is not None
    recorder.calls.clear()
    return surface


@pytest.fixture
def header():
    return header_point
