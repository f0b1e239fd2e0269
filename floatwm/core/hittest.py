"""
floatwm.core.hittest - Which part of a surface is under the pointer.

A surface only accepts pointer-down through its own chrome: the header
(drag), the control buttons, and the eight resize handles.  This module is
the single source of truth for where that chrome sits inside the surface
rectangle.  Chrome layout, outermost first:

    - Resize handles: a band of `handle_size` px along every edge; where two
      bands meet the handle is a corner (ne, nw, se, sw).
    - Header: the top `header_height` px.
    - Control buttons: at the left of the header, close first then maximize,
      each a `button_size` square separated by `button_gap`.
    - Everything else is the content area.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from floatwm.config.settings import Settings
from floatwm.core.gestures import ResizeDirection
from floatwm.geometry.rect import Rect


class SurfacePart(enum.Enum):
    """Chrome regions of a surface."""
    HEADER = "header"
    CLOSE_BUTTON = "close_button"
    MAXIMIZE_BUTTON = "maximize_button"
    RESIZE_HANDLE = "resize_handle"
    CONTENT = "content"


@dataclass(frozen=True, slots=True)
class Hit:
    """Result of a hit test.  direction is set only for RESIZE_HANDLE."""

    part: SurfacePart
    direction: Optional[ResizeDirection] = None


def button_rects(rect: Rect, settings: Settings) -> tuple[Rect, Rect]:
    """Return (close, maximize) button rectangles for a surface at *rect*."""
    size = settings.button_size
    top = rect.y + max(0, (settings.header_height - size) // 2)
    close_x = rect.x + settings.button_gap
    maximize_x = close_x + size + settings.button_gap
    return Rect(close_x, top, size, size), Rect(maximize_x, top, size, size)


def header_rect(rect: Rect, settings: Settings) -> Rect:
    return Rect(rect.x, rect.y, rect.w, min(settings.header_height, rect.h))


def content_rect(rect: Rect, settings: Settings) -> Rect:
    """The area the content provider is anchored in (below the header)."""
    header_h = min(settings.header_height, rect.h)
    return Rect(rect.x, rect.y + header_h, rect.w, rect.h - header_h)


def _handle_direction(rect: Rect, px: float, py: float, band: int) -> Optional[ResizeDirection]:
    """Resize handle under (px, py), assuming the point is inside *rect*."""
    north = py < rect.top + band
    south = py > rect.bottom - band
    west = px < rect.left + band
    east = px > rect.right - band

    vertical = "n" if north else "s" if south else ""
    horizontal = "w" if west else "e" if east else ""
    if not vertical and not horizontal:
        return None
    return ResizeDirection(vertical + horizontal)


def hit_test(
    rect: Rect,
    px: float,
    py: float,
    settings: Settings,
    resizable: bool = True,
) -> Optional[Hit]:
    """
    Classify a point against the chrome of a surface rendered at *rect*.

    Args:
        rect:      The surface's rendered rectangle.
        px, py:    Pointer position in host coordinates.
        settings:  Chrome dimensions.
        resizable: False while maximized; handles then fall through to
                   the header/content underneath.

    Returns:
        A Hit, or None if the point is outside the surface.
    """
    if not rect.contains(px, py):
        return None

    if resizable:
        direction = _handle_direction(rect, px, py, settings.handle_size)
        if direction is not None:
            return Hit(SurfacePart.RESIZE_HANDLE, direction)

    if header_rect(rect, settings).contains(px, py):
        close, maximize = button_rects(rect, settings)
        if close.contains(px, py):
            return Hit(SurfacePart.CLOSE_BUTTON)
        if maximize.contains(px, py):
            return Hit(SurfacePart.MAXIMIZE_BUTTON)
        return Hit(SurfacePart.HEADER)

    return Hit(SurfacePart.CONTENT)
