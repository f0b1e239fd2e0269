from __future__ import annotations

import pytest

from floatwm.core.gestures import (
    ResizeDirection,
    drag_exceeds_threshold,
    pop_out_rect,
    resize_rect,
)
from floatwm.geometry.rect import Rect

ORIGIN = Rect(100, 100, 600, 400)


def test_drag_threshold_is_strict() -> None:
    assert not drag_exceeds_threshold(0, 0, 5)
    assert not drag_exceeds_threshold(5, -5, 5)
    assert drag_exceeds_threshold(6, 0, 5)
    assert drag_exceeds_threshold(0, -6, 5)


def test_resize_direction_edges() -> None:
    assert ResizeDirection("nw").moves_left_edge
    assert ResizeDirection("nw").moves_top_edge
    assert not ResizeDirection("nw").moves_right_edge
    assert ResizeDirection.SE.moves_right_edge and ResizeDirection.SE.moves_bottom_edge
    with pytest.raises(ValueError):
        ResizeDirection("q")


@pytest.mark.parametrize(
    ("direction", "expected"),
    [
        (ResizeDirection.E, Rect(100, 100, 650, 400)),
        (ResizeDirection.S, Rect(100, 100, 600, 430)),
        (ResizeDirection.SE, Rect(100, 100, 650, 430)),
        (ResizeDirection.W, Rect(150, 100, 550, 400)),
        (ResizeDirection.N, Rect(100, 130, 600, 370)),
        (ResizeDirection.NW, Rect(150, 130, 550, 370)),
        (ResizeDirection.NE, Rect(100, 130, 650, 370)),
        (ResizeDirection.SW, Rect(150, 100, 550, 430)),
    ],
)
def test_resize_rect_per_direction(direction: ResizeDirection, expected: Rect) -> None:
    assert resize_rect(ORIGIN, direction, 50, 30, 300, 200) == expected


def test_resize_nw_clamp_keeps_bottom_right_fixed() -> None:
    rect = resize_rect(ORIGIN, ResizeDirection.NW, 500, 350, 300, 200)
    assert (rect.w, rect.h) == (300, 200)
    assert (rect.right, rect.bottom) == (ORIGIN.right, ORIGIN.bottom)


def test_resize_se_clamp_keeps_top_left_fixed() -> None:
    rect = resize_rect(ORIGIN, ResizeDirection.SE, -1000, -1000, 300, 200)
    assert rect == Rect(100, 100, 300, 200)


def test_pop_out_keeps_relative_pointer_position() -> None:
    maximized = Rect(0, 0, 1280, 720)
    restore = Rect(200, 150, 640, 400)
    # Grabbed at 3/4 of the maximized width
    rect = pop_out_rect(maximized, restore, 960, 10, 960, 40)
    assert rect == Rect(480, 30, 640, 400)
    assert (960 - rect.x) / rect.w == pytest.approx(0.75)
