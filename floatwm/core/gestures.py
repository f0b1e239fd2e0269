"""
floatwm.core.gestures - Pointer gesture states and their geometry.

A Surface interprets a pointer-down / move... / pointer-up sequence as one
of three gestures:

    1. A click: the pointer never travels past the drag threshold.
    2. A drag: started on the header, moves the window (and may snap it).
    3. A resize: started on one of the eight edge/corner handles.

The gesture in progress is modeled as an explicit tagged state
(Idle, Dragging, Resizing) rather than independent booleans, so a Surface
can never be dragging and resizing at the same time.  The functions at the
bottom are the pure geometry each gesture applies; they never touch a
Surface.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from floatwm.geometry.rect import Rect
from floatwm.geometry.snap import SnapZone


# ============================================================================
# Resize handles
# ============================================================================
class ResizeDirection(enum.Enum):
    """The eight resize handles, named by compass direction."""
    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def moves_left_edge(self) -> bool:
        return "w" in self.value

    @property
    def moves_right_edge(self) -> bool:
        return "e" in self.value

    @property
    def moves_top_edge(self) -> bool:
        return "n" in self.value

    @property
    def moves_bottom_edge(self) -> bool:
        return "s" in self.value


# ============================================================================
# Gesture states
# ============================================================================
@dataclass(frozen=True, slots=True)
class Idle:
    """No pointer gesture in progress."""


@dataclass(frozen=True, slots=True)
class Dragging:
    """
    Header drag in progress.

    offset_x/offset_y is the pointer position relative to the window's
    top-left corner; it is fixed for the whole drag except when a maximized
    window pops out under the cursor.
    """

    pointer_id: int
    origin_x: int
    origin_y: int
    origin_rect: Rect
    offset_x: int
    offset_y: int
    moved_enough: bool = False
    snap_zone: Optional[SnapZone] = None


@dataclass(frozen=True, slots=True)
class Resizing:
    """Edge or corner resize in progress."""

    pointer_id: int
    direction: ResizeDirection
    origin_x: int
    origin_y: int
    origin_rect: Rect


GestureState = Union[Idle, Dragging, Resizing]

IDLE = Idle()


# ============================================================================
# Gesture geometry
# ============================================================================
def drag_exceeds_threshold(dx: int, dy: int, threshold: int) -> bool:
    """True once the pointer has travelled more than *threshold* px on either axis."""
    return abs(dx) > threshold or abs(dy) > threshold


def resize_rect(
    origin: Rect,
    direction: ResizeDirection,
    dx: int,
    dy: int,
    min_w: int,
    min_h: int,
) -> Rect:
    """
    Compute the geometry for a resize handle dragged by (dx, dy).

    Edges containing e/s grow away from the fixed opposite edge; edges
    containing w/n also translate the origin coordinate.  Sizes clamp to
    (min_w, min_h); when clamped, the dragged edge stops at the minimum and
    the opposite edge stays exactly where it was.

    Args:
        origin:    Geometry at resize start.
        direction: Which handle is being dragged.
        dx, dy:    Pointer delta since resize start.
        min_w:     Minimum width.
        min_h:     Minimum height.

    Returns:
        The new Rect.
    """
    x, y, w, h = origin.x, origin.y, origin.w, origin.h

    if direction.moves_right_edge:
        w = origin.w + dx
    elif direction.moves_left_edge:
        w = origin.w - dx
        x = origin.x + dx

    if direction.moves_bottom_edge:
        h = origin.h + dy
    elif direction.moves_top_edge:
        h = origin.h - dy
        y = origin.y + dy

    if w < min_w:
        w = min_w
        if direction.moves_left_edge:
            x = origin.right - min_w

    if h < min_h:
        h = min_h
        if direction.moves_top_edge:
            y = origin.bottom - min_h

    return Rect(x, y, w, h)


def pop_out_rect(
    maximized: Rect,
    restore: Rect,
    origin_x: int,
    origin_y: int,
    pointer_x: int,
    pointer_y: int,
) -> Rect:
    """
    Geometry for a maximized (or snapped) window dragged back to normal.

    The pointer keeps its relative horizontal position inside the window,
    so the restored window appears under the cursor instead of jumping to
    its old position:

        ratio    = (origin_x - maximized.x) / maximized.w
        new_left = pointer_x - restore.w * ratio

    Vertically the pointer keeps its distance from the top edge (it is
    holding the header).

    Args:
        maximized: Rendered geometry at drag start.
        restore:   Saved geometry to restore (only its size is used).
        origin_x, origin_y:   Pointer position at drag start.
        pointer_x, pointer_y: Pointer position now.
    """
    ratio = (origin_x - maximized.x) / maximized.w if maximized.w > 0 else 0.5
    new_x = round(pointer_x - restore.w * ratio)
    new_y = pointer_y - (origin_y - maximized.y)
    return Rect(new_x, new_y, restore.w, restore.h)
