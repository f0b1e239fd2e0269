"""
floatwm.core.surface - The Surface: one floating window.

A Surface owns its geometry, its visual state (normal, maximized, snapped
to a half of the viewport) and every pointer gesture that can change them:
dragging by the header, resizing from one of eight handles, edge snapping
and maximize/restore.  It never talks to other surfaces; focus and z-order
are assigned from the outside by the SurfaceManager.

Geometry exists in two flavours:

  - committed geometry: what get_geometry_snapshot() reports and what the
    surface returns to after the gesture ends;
  - in-flight geometry: the rectangle shown while a drag or resize is in
    progress.  It only becomes committed on pointer-up.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from floatwm.config.settings import DEFAULT_SETTINGS, Settings
from floatwm.core.gestures import (
    IDLE,
    Dragging,
    GestureState,
    Idle,
    Resizing,
    drag_exceeds_threshold,
    pop_out_rect,
    resize_rect,
)
from floatwm.core.hittest import Hit, SurfacePart, hit_test
from floatwm.core.host import Host, PointerEvent, PointerKind, PointerSubscription
from floatwm.geometry.rect import Rect
from floatwm.geometry.snap import SnapZone, detect_snap_zone, snap_rect

log = logging.getLogger(__name__)


# Type for surface callbacks: called with no arguments
SurfaceCallback = Callable[[], None]


# ============================================================================
# Visual state
# ============================================================================
class SnapSide(enum.Enum):
    """Which half of the viewport a snapped surface occupies."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class Normal:
    """Geometry is whatever the user dragged/resized it to."""


@dataclass(frozen=True, slots=True)
class Maximized:
    """Geometry is the whole viewport."""


@dataclass(frozen=True, slots=True)
class Snapped:
    """Geometry is the left or right half of the viewport, full height."""

    side: SnapSide


VisualState = Union[Normal, Maximized, Snapped]

NORMAL = Normal()
MAXIMIZED = Maximized()

_ZONE_TO_SIDE: dict[SnapZone, SnapSide] = {
    SnapZone.LEFT: SnapSide.LEFT,
    SnapZone.RIGHT: SnapSide.RIGHT,
}


# ============================================================================
# Persistence record
# ============================================================================
@dataclass(frozen=True, slots=True)
class GeometrySnapshot:
    """
    Plain geometry record exchanged with the caller's persistence layer.

    For a maximized surface x/y/width/height are the geometry it restores
    to, so a snapshot round-trip keeps both the maximize state and the
    restore position.
    """

    x: int
    y: int
    width: int
    height: int
    z_index: int = 0
    is_maximized: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys of the persistence contract."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "zIndex": self.z_index,
            "isMaximized": self.is_maximized,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GeometrySnapshot:
        """
        Build a snapshot from a mapping produced by to_dict().

        Missing z-index/maximize keys default to 0/False; snake_case keys
        are accepted too.
        """
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
            z_index=int(data.get("zIndex", data.get("z_index", 0))),
            is_maximized=bool(data.get("isMaximized", data.get("is_maximized", False))),
        )


# ============================================================================
# Options
# ============================================================================
@dataclass(slots=True)
class SurfaceOptions:
    """
    Everything a caller supplies to open a surface.

    content is opaque: the surface only anchors it inside its content area.
    x/y are only honoured when both are given; otherwise the surface is
    centered in the viewport.
    """

    title: str
    content: Any
    width: Optional[int] = None
    height: Optional[int] = None
    x: Optional[int] = None
    y: Optional[int] = None
    on_close: Optional[SurfaceCallback] = None
    on_focus: Optional[SurfaceCallback] = None
    on_move_or_resize: Optional[SurfaceCallback] = None


# ============================================================================
# Surface
# ============================================================================
class Surface:
    """
    A single floating window inside a host container.

    Surfaces are normally created by SurfaceManager.open(), which wires the
    close/focus callbacks back into the manager.  The surface holds no
    reference to the manager, only those callbacks.

    Equality is identity; the id is unique per manager.
    """

    __slots__ = (
        "_id",
        "_host",
        "_settings",
        "_title",
        "_content",
        "_on_close",
        "_on_focus",
        "_on_move_or_resize",
        "_geometry",
        "_saved_geometry",
        "_live",
        "_visual",
        "_gesture",
        "_z_index",
        "_focused",
        "_closed",
        "_subscription",
    )

    def __init__(
        self,
        surface_id: int,
        host: Host,
        options: SurfaceOptions,
        settings: Settings = DEFAULT_SETTINGS,
    ) -> None:
        self._id = surface_id
        self._host = host
        self._settings = settings
        self._title = options.title
        self._content = options.content
        self._on_close = options.on_close
        self._on_focus = options.on_focus
        self._on_move_or_resize = options.on_move_or_resize

        width = options.width if options.width is not None else settings.default_width
        height = options.height if options.height is not None else settings.default_height
        rect = Rect(0, 0, width, height).with_min_size(settings.min_width, settings.min_height)
        if options.x is not None and options.y is not None:
            rect = rect.moved_to(options.x, options.y)
        else:
            rect = rect.centered_in(host.viewport)

        # Committed geometry while NORMAL
        self._geometry: Rect = rect
        # Pre-transition geometry while MAXIMIZED or SNAPPED
        self._saved_geometry: Optional[Rect] = None
        # In-flight geometry during a drag/resize
        self._live: Optional[Rect] = None

        self._visual: VisualState = NORMAL
        self._gesture: GestureState = IDLE
        self._z_index: int = 0
        self._focused: bool = False
        self._closed: bool = False

        # Move/up must be observed outside our own bounds: listen at host scope
        # for the whole lifetime of the surface, released only by close().
        self._subscription: Optional[PointerSubscription] = host.subscribe(
            self._on_pointer,
            kinds=(PointerKind.MOVE, PointerKind.UP),
            description=f"surface {surface_id} gestures",
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def content(self) -> Any:
        return self._content

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def visual_state(self) -> VisualState:
        return self._visual

    @property
    def gesture_state(self) -> GestureState:
        return self._gesture

    @property
    def is_maximized(self) -> bool:
        return isinstance(self._visual, Maximized)

    @property
    def is_snapped(self) -> bool:
        return isinstance(self._visual, Snapped)

    @property
    def z_index(self) -> int:
        return self._z_index

    @property
    def focused(self) -> bool:
        return self._focused

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def geometry(self) -> Rect:
        """Committed geometry.  Derived from the viewport when maximized/snapped."""
        viewport = self._host.viewport
        if isinstance(self._visual, Maximized):
            return viewport
        if isinstance(self._visual, Snapped):
            zone = SnapZone.LEFT if self._visual.side == SnapSide.LEFT else SnapZone.RIGHT
            return snap_rect(zone, viewport).with_min_size(
                self._settings.min_width, self._settings.min_height
            )
        return self._geometry

    @property
    def saved_geometry(self) -> Optional[Rect]:
        """Geometry restored when leaving MAXIMIZED/SNAPPED (None while NORMAL)."""
        return self._saved_geometry

    @property
    def rendered_rect(self) -> Rect:
        """What is on screen right now, including an in-flight gesture."""
        if self._live is not None:
            return self._live
        return self.geometry

    def hit_test(self, px: float, py: float) -> Optional[Hit]:
        """Which chrome part of this surface is at (px, py), if any."""
        return hit_test(
            self.rendered_rect, px, py, self._settings,
            resizable=not self.is_maximized,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def close(self) -> None:
        """
        Close the surface.

        Releases the pointer subscription, detaches from the host and fires
        on_close exactly once.  Calling it again does nothing.
        """
        if self._closed:
            return
        self._closed = True
        self._gesture = IDLE
        self._live = None

        if self._subscription is not None:
            self._host.unsubscribe(self._subscription)
            self._subscription = None

        self._host.hide_snap_preview(self)
        self._host.unmount(self)
        log.info("CLOSE   surface %d %r", self._id, self._title)

        self._notify(self._on_close, "on_close")

    def focus(self) -> None:
        """Ask to be focused.  Z-order is assigned by whoever handles on_focus."""
        if self._closed:
            return
        self._notify(self._on_focus, "on_focus")

    def set_stacking(self, z_index: int, focused: bool) -> None:
        """Apply the z-index and active marker assigned by the manager."""
        if self._closed:
            return
        self._z_index = z_index
        self._focused = focused
        self._host.render(self)

    def maximize(self) -> bool:
        """NORMAL/SNAPPED -> MAXIMIZED.  Returns False if nothing changed."""
        if self._closed or not isinstance(self._gesture, Idle):
            return False
        if isinstance(self._visual, Maximized):
            return False

        # A snapped surface keeps the geometry it had before snapping
        if self._saved_geometry is None:
            self._saved_geometry = self._geometry
        self._visual = MAXIMIZED
        log.info("MAXIMIZE surface %d (restore to %s)", self._id, self._saved_geometry)
        self._host.render(self)
        self._notify(self._on_move_or_resize, "on_move_or_resize")
        return True

    def restore(self) -> bool:
        """MAXIMIZED/SNAPPED -> NORMAL at the saved geometry.  Returns False if already NORMAL."""
        if self._closed or not isinstance(self._gesture, Idle):
            return False
        if isinstance(self._visual, Normal):
            return False

        if self._saved_geometry is not None:
            self._geometry = self._saved_geometry
        self._saved_geometry = None
        self._visual = NORMAL
        log.info("RESTORE surface %d -> %s", self._id, self._geometry)
        self._host.render(self)
        self._notify(self._on_move_or_resize, "on_move_or_resize")
        return True

    def toggle_maximize(self) -> None:
        """NORMAL/SNAPPED -> MAXIMIZED, MAXIMIZED -> NORMAL."""
        if isinstance(self._visual, Maximized):
            self.restore()
        else:
            self.maximize()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def get_geometry_snapshot(self) -> GeometrySnapshot:
        """Committed geometry for external persistence (never in-flight values)."""
        if isinstance(self._visual, Maximized):
            rect = self._saved_geometry or self._geometry
        else:
            rect = self.geometry
        return GeometrySnapshot(
            x=rect.x,
            y=rect.y,
            width=rect.w,
            height=rect.h,
            z_index=self._z_index,
            is_maximized=self.is_maximized,
        )

    def apply_geometry_snapshot(
        self, snapshot: Union[GeometrySnapshot, Mapping[str, Any]]
    ) -> bool:
        """
        Restore geometry and maximize state from a snapshot.

        The z-index in the snapshot is informational only: stacking belongs
        to the manager.  Ignored while a gesture is in progress.

        Returns:
            True if the snapshot was applied.
        """
        if self._closed or not isinstance(self._gesture, Idle):
            return False
        if not isinstance(snapshot, GeometrySnapshot):
            try:
                snapshot = GeometrySnapshot.from_dict(snapshot)
            except (KeyError, TypeError, ValueError) as exc:
                log.warning(
                    "Snapshot for surface %d ignored, bad record %r: %s",
                    self._id, snapshot, exc,
                )
                return False

        rect = Rect(snapshot.x, snapshot.y, snapshot.width, snapshot.height).with_min_size(
            self._settings.min_width, self._settings.min_height
        )
        self._geometry = rect
        if snapshot.is_maximized:
            self._saved_geometry = rect
            self._visual = MAXIMIZED
        else:
            self._saved_geometry = None
            self._visual = NORMAL

        log.debug("Snapshot applied to surface %d: %s", self._id, snapshot)
        self._host.render(self)
        return True

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def handle_pointer_down(self, event: PointerEvent, hit: Optional[Hit] = None) -> bool:
        """
        Handle a pointer-down that landed on this surface.

        Every press focuses the surface; the chrome part under the pointer
        decides what else happens.

        Returns:
            True if the press was on this surface and was handled.
        """
        if self._closed or event.kind != PointerKind.DOWN:
            return False
        if hit is None:
            hit = self.hit_test(event.x, event.y)
        if hit is None:
            return False
        if not isinstance(self._gesture, Idle):
            # One gesture at a time; a second pointer cannot start another
            return False

        self.focus()
        if self._closed:
            return True

        if hit.part == SurfacePart.CLOSE_BUTTON:
            self.close()
        elif hit.part == SurfacePart.MAXIMIZE_BUTTON:
            self.toggle_maximize()
        elif hit.part == SurfacePart.HEADER:
            if event.clicks >= 2:
                self.toggle_maximize()
            else:
                self._start_drag(event)
        elif hit.part == SurfacePart.RESIZE_HANDLE and hit.direction is not None:
            if not self.is_maximized:
                self._start_resize(event, hit)
        return True

    def _on_pointer(self, event: PointerEvent) -> None:
        """Host-scope move/up listener.  Ignores events from other pointers."""
        gesture = self._gesture
        if isinstance(gesture, Idle) or self._closed:
            return
        if event.pointer_id != gesture.pointer_id:
            return

        if isinstance(gesture, Dragging):
            if event.kind == PointerKind.MOVE:
                self._drag_move(event, gesture)
            elif event.kind == PointerKind.UP:
                self._drag_end(gesture)
        elif isinstance(gesture, Resizing):
            if event.kind == PointerKind.MOVE:
                self._resize_move(event, gesture)
            elif event.kind == PointerKind.UP:
                self._resize_end(gesture)

    # ------------------------------------------------------------------
    # Drag
    # ------------------------------------------------------------------
    def _start_drag(self, event: PointerEvent) -> None:
        rect = self.rendered_rect
        self._gesture = Dragging(
            pointer_id=event.pointer_id,
            origin_x=event.x,
            origin_y=event.y,
            origin_rect=rect,
            offset_x=event.x - rect.x,
            offset_y=event.y - rect.y,
        )
        log.debug("Drag start surface %d at (%d, %d)", self._id, event.x, event.y)

    def _drag_move(self, event: PointerEvent, gesture: Dragging) -> None:
        if not gesture.moved_enough:
            dx = event.x - gesture.origin_x
            dy = event.y - gesture.origin_y
            if not drag_exceeds_threshold(dx, dy, self._settings.drag_threshold):
                return
            gesture = replace(gesture, moved_enough=True)
            log.debug("Drag threshold crossed surface %d", self._id)

            if not isinstance(self._visual, Normal):
                gesture = self._pop_out(event, gesture)

        base = self._live if self._live is not None else self._geometry
        self._live = base.moved_to(event.x - gesture.offset_x, event.y - gesture.offset_y)

        viewport = self._host.viewport
        zone = detect_snap_zone(event.x, event.y, viewport, self._settings.snap_threshold)
        if zone is not None:
            preview = snap_rect(zone, viewport)
            self._host.show_snap_preview(self, preview)
        elif gesture.snap_zone is not None:
            self._host.hide_snap_preview(self)
        if zone != gesture.snap_zone:
            gesture = replace(gesture, snap_zone=zone)

        self._gesture = gesture
        self._host.render(self)

    def _pop_out(self, event: PointerEvent, gesture: Dragging) -> Dragging:
        """Leave MAXIMIZED/SNAPPED on the first real drag move, under the cursor."""
        restore = self._saved_geometry or self._geometry
        rect = pop_out_rect(
            gesture.origin_rect,
            restore,
            gesture.origin_x,
            gesture.origin_y,
            event.x,
            event.y,
        )
        self._geometry = restore
        self._saved_geometry = None
        self._visual = NORMAL
        self._live = rect
        log.debug("Pop-out surface %d -> %s", self._id, rect)
        return replace(gesture, offset_x=event.x - rect.x, offset_y=event.y - rect.y)

    def _drag_end(self, gesture: Dragging) -> None:
        self._gesture = IDLE
        self._host.hide_snap_preview(self)

        if not gesture.moved_enough:
            # A click on the header, not a drag
            self._live = None
            return

        live = self._live if self._live is not None else self._geometry
        self._live = None
        zone = gesture.snap_zone

        if zone == SnapZone.TOP:
            self._saved_geometry = self._geometry
            self._visual = MAXIMIZED
            log.info("SNAP    surface %d -> maximized", self._id)
        elif zone is not None:
            self._saved_geometry = self._geometry
            self._visual = Snapped(_ZONE_TO_SIDE[zone])
            log.info("SNAP    surface %d -> %s half", self._id, zone.value)
        else:
            self._geometry = live.with_min_size(
                self._settings.min_width, self._settings.min_height
            )

        log.debug("Drag end surface %d -> %s", self._id, self.geometry)
        self._host.render(self)
        if self.geometry != gesture.origin_rect:
            self._notify(self._on_move_or_resize, "on_move_or_resize")

    # ------------------------------------------------------------------
    # Resize
    # ------------------------------------------------------------------
    def _start_resize(self, event: PointerEvent, hit: Hit) -> None:
        self._gesture = Resizing(
            pointer_id=event.pointer_id,
            direction=hit.direction,
            origin_x=event.x,
            origin_y=event.y,
            origin_rect=self.rendered_rect,
        )
        log.debug(
            "Resize start surface %d handle=%s", self._id, hit.direction.value
        )

    def _resize_move(self, event: PointerEvent, gesture: Resizing) -> None:
        if not isinstance(self._visual, Normal):
            # Resizing a snapped half turns it back into a free window
            self._geometry = gesture.origin_rect
            self._saved_geometry = None
            self._visual = NORMAL

        self._live = resize_rect(
            gesture.origin_rect,
            gesture.direction,
            event.x - gesture.origin_x,
            event.y - gesture.origin_y,
            self._settings.min_width,
            self._settings.min_height,
        )
        self._host.render(self)

    def _resize_end(self, gesture: Resizing) -> None:
        self._gesture = IDLE
        if self._live is not None:
            self._geometry = self._live
            self._live = None

        log.debug("Resize end surface %d -> %s", self._id, self._geometry)
        self._host.render(self)
        if self.geometry != gesture.origin_rect:
            self._notify(self._on_move_or_resize, "on_move_or_resize")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self, callback: Optional[SurfaceCallback], name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            log.exception("Error in %s callback of surface %d", name, self._id)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"Surface(id={self._id}, title={self._title!r}, "
            f"{type(self._visual).__name__.lower()}, {self.geometry}, z={self._z_index})"
        )
