from __future__ import annotations

import pytest

from floatwm.config.settings import DEFAULT_SETTINGS
from floatwm.core.gestures import ResizeDirection
from floatwm.core.hittest import (
    Hit,
    SurfacePart,
    button_rects,
    content_rect,
    hit_test,
)
from floatwm.geometry.rect import Rect

RECT = Rect(100, 100, 600, 400)


def test_outside_is_none() -> None:
    assert hit_test(RECT, 50, 50, DEFAULT_SETTINGS) is None
    assert hit_test(RECT, 701, 300, DEFAULT_SETTINGS) is None


@pytest.mark.parametrize(
    ("px", "py", "direction"),
    [
        (400, 101, ResizeDirection.N),
        (400, 499, ResizeDirection.S),
        (699, 300, ResizeDirection.E),
        (101, 300, ResizeDirection.W),
        (101, 101, ResizeDirection.NW),
        (699, 101, ResizeDirection.NE),
        (101, 499, ResizeDirection.SW),
        (699, 499, ResizeDirection.SE),
    ],
)
def test_resize_handles(px: int, py: int, direction: ResizeDirection) -> None:
    assert hit_test(RECT, px, py, DEFAULT_SETTINGS) == Hit(SurfacePart.RESIZE_HANDLE, direction)


def test_header_buttons_and_content() -> None:
    close, maximize = button_rects(RECT, DEFAULT_SETTINGS)
    assert hit_test(RECT, close.center_x, close.center_y, DEFAULT_SETTINGS).part == SurfacePart.CLOSE_BUTTON
    assert hit_test(RECT, maximize.center_x, maximize.center_y, DEFAULT_SETTINGS).part == SurfacePart.MAXIMIZE_BUTTON
    assert hit_test(RECT, 250, 110, DEFAULT_SETTINGS) == Hit(SurfacePart.HEADER)
    assert hit_test(RECT, 400, 300, DEFAULT_SETTINGS) == Hit(SurfacePart.CONTENT)


def test_buttons_sit_left_in_header() -> None:
    close, maximize = button_rects(RECT, DEFAULT_SETTINGS)
    assert close == Rect(108, 109, 14, 14)
    assert maximize == Rect(130, 109, 14, 14)


def test_handles_disabled_when_not_resizable() -> None:
    hit = hit_test(RECT, 400, 101, DEFAULT_SETTINGS, resizable=False)
    assert hit == Hit(SurfacePart.HEADER)
    hit = hit_test(RECT, 699, 499, DEFAULT_SETTINGS, resizable=False)
    assert hit == Hit(SurfacePart.CONTENT)


def test_content_rect_below_header() -> None:
    assert content_rect(RECT, DEFAULT_SETTINGS) == Rect(100, 132, 600, 368)
