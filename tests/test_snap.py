from __future__ import annotations

import pytest

from floatwm.geometry.rect import Rect
from floatwm.geometry.snap import SnapZone, detect_snap_zone, snap_rect

VIEWPORT = Rect(0, 0, 1280, 720)


@pytest.mark.parametrize(
    ("px", "py", "expected"),
    [
        (0, 300, SnapZone.LEFT),
        (20, 300, SnapZone.LEFT),
        (21, 300, None),
        (1260, 300, SnapZone.RIGHT),
        (1280, 300, SnapZone.RIGHT),
        (640, 0, SnapZone.TOP),
        (640, 20, SnapZone.TOP),
        (640, 21, None),
        (640, 360, None),
    ],
)
def test_detect_snap_zone(px: int, py: int, expected: SnapZone | None) -> None:
    assert detect_snap_zone(px, py, VIEWPORT, 20) == expected


def test_side_zone_wins_in_top_corner() -> None:
    assert detect_snap_zone(5, 5, VIEWPORT, 20) == SnapZone.LEFT
    assert detect_snap_zone(1275, 5, VIEWPORT, 20) == SnapZone.RIGHT


def test_pointer_outside_viewport_still_snaps() -> None:
    assert detect_snap_zone(-40, 300, VIEWPORT, 20) == SnapZone.LEFT
    assert detect_snap_zone(640, -10, VIEWPORT, 20) == SnapZone.TOP


def test_snap_rects() -> None:
    assert snap_rect(SnapZone.TOP, VIEWPORT) == VIEWPORT
    assert snap_rect(SnapZone.LEFT, VIEWPORT) == Rect(0, 0, 640, 720)
    assert snap_rect(SnapZone.RIGHT, VIEWPORT) == Rect(640, 0, 640, 720)
