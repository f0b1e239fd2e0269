"""
floatwm.core.manager - SurfaceManager: the single focus/z-order authority.

SurfaceManager:

  1. Opens surfaces: builds each Surface, wires its close/focus/geometry
     callbacks back into manager bookkeeping, mounts it in the host and
     focuses it.
  2. Owns the ordered collection of live surfaces and the highest_z
     counter.  Focusing a surface always hands it a z-index strictly greater
     than any value assigned before.
  3. Routes pointer-down events from the host to the topmost surface under
     the pointer.
  4. Exposes an event/callback system so that higher-level code (a dock,
     persistence, diagnostics) can react to surfaces coming and going
     without wrapping every open() call.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Optional

from floatwm.config.settings import DEFAULT_SETTINGS, Settings
from floatwm.core.host import Host, PointerEvent, PointerKind, PointerSubscription
from floatwm.core.surface import Surface, SurfaceOptions

log = logging.getLogger(__name__)


# ============================================================================
# Event types emitted by SurfaceManager
# ============================================================================
class WMEvent(enum.Enum):
    """Events that the SurfaceManager can emit to subscribers."""

    # A surface was opened and mounted.
    SURFACE_OPENED = "surface_opened"

    # A surface was closed and unmounted.
    SURFACE_CLOSED = "surface_closed"

    # A surface received focus and the top z-index.
    FOCUS_CHANGED = "focus_changed"

    # A surface committed a new geometry or visual state.
    GEOMETRY_CHANGED = "geometry_changed"


# Type alias for event callbacks.
# All callbacks receive (event, surface, manager).
EventCallback = Callable[["WMEvent", Optional[Surface], "SurfaceManager"], None]


# ============================================================================
# SurfaceManager
# ============================================================================
class SurfaceManager:
    """
    Tracks every live surface in one host and assigns focus/z-order.

    Usage:
        host = VirtualHost(1280, 720)
        wm = SurfaceManager(host)
        wm.on(WMEvent.SURFACE_CLOSED, my_callback)
        notes = wm.open(SurfaceOptions(title="Notes", content=node))
        wm.close_all()
    """

    def __init__(
        self,
        host: Optional[Host],
        settings: Settings = DEFAULT_SETTINGS,
    ) -> None:
        self._host = host
        self._settings = settings

        # Live surfaces in open order
        self._surfaces: list[Surface] = []

        # Currently focused surface (or None)
        self._focused: Optional[Surface] = None

        # Monotonic z counter; only ever increases
        self._highest_z: int = settings.initial_z

        # Auto-incrementing surface id (starting at 1)
        self._next_id: int = 1

        # Event subscribers: event -> list of callbacks
        self._subscribers: dict[WMEvent, list[EventCallback]] = {
            ev: [] for ev in WMEvent
        }

        # Host-scope pointer-down listener used for routing
        self._down_subscription: Optional[PointerSubscription] = None
        if host is not None:
            self._down_subscription = host.subscribe(
                self._on_pointer_down,
                kinds=(PointerKind.DOWN,),
                description="manager pointer-down routing",
            )
        else:
            log.warning("SurfaceManager created without a host container")

    # ------------------------------------------------------------------
    # Public: surface access
    # ------------------------------------------------------------------
    @property
    def host(self) -> Optional[Host]:
        return self._host

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def surfaces(self) -> list[Surface]:
        """Live surfaces in the order they were opened."""
        return list(self._surfaces)

    @property
    def focused(self) -> Optional[Surface]:
        return self._focused

    @property
    def highest_z(self) -> int:
        return self._highest_z

    @property
    def count(self) -> int:
        return len(self._surfaces)

    def get(self, surface_id: int) -> Optional[Surface]:
        """Get a live surface by id, or None."""
        for surface in self._surfaces:
            if surface.id == surface_id:
                return surface
        return None

    def topmost_at(self, x: int, y: int) -> Optional[Surface]:
        """The live surface with the highest z-index whose rect contains (x, y)."""
        hits = [s for s in self._surfaces if s.rendered_rect.contains(x, y)]
        if not hits:
            return None
        return max(hits, key=lambda s: s.z_index)

    # ------------------------------------------------------------------
    # Public: event subscription
    # ------------------------------------------------------------------
    def on(self, event: WMEvent, callback: EventCallback) -> None:
        """Register a callback for a specific event."""
        self._subscribers[event].append(callback)

    def off(self, event: WMEvent, callback: EventCallback) -> None:
        """Unregister a callback."""
        try:
            self._subscribers[event].remove(callback)
        except ValueError:
            pass

    def on_all(self, callback: EventCallback) -> None:
        """Register a callback for ALL events."""
        for ev in WMEvent:
            self._subscribers[ev].append(callback)

    # ------------------------------------------------------------------
    # Internal: emit events
    # ------------------------------------------------------------------
    def _emit(self, event: WMEvent, surface: Optional[Surface] = None) -> None:
        for cb in list(self._subscribers[event]):
            try:
                cb(event, surface, self)
            except Exception:
                log.exception(
                    "Error in event callback for %s on %s", event.value, surface
                )

    @staticmethod
    def _call(callback: Optional[Callable[[], None]], name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            log.exception("Error in caller %s callback", name)

    # ------------------------------------------------------------------
    # Public: lifecycle
    # ------------------------------------------------------------------
    def open(self, options: SurfaceOptions) -> Optional[Surface]:
        """
        Open a new surface, mount it and focus it.

        The caller's on_close/on_focus/on_move_or_resize callbacks run after
        the manager's own bookkeeping.

        Returns:
            The new Surface, or None if there is no host or no content.
        """
        if self._host is None:
            log.warning("open(%r): no host container, ignored", options.title)
            return None
        if options.content is None:
            log.warning("open(%r): no content, ignored", options.title)
            return None

        surface_id = self._next_id
        self._next_id += 1

        # The surface only sees these closures, never the manager itself
        def _closed() -> None:
            self._remove(surface)
            self._call(options.on_close, "on_close")
            self._emit(WMEvent.SURFACE_CLOSED, surface)

        def _focused() -> None:
            self._raise(surface)
            self._call(options.on_focus, "on_focus")
            self._emit(WMEvent.FOCUS_CHANGED, surface)

        def _moved() -> None:
            self._call(options.on_move_or_resize, "on_move_or_resize")
            self._emit(WMEvent.GEOMETRY_CHANGED, surface)

        wired = replace(
            options,
            on_close=_closed,
            on_focus=_focused,
            on_move_or_resize=_moved,
        )
        surface = Surface(surface_id, self._host, wired, self._settings)

        self._surfaces.append(surface)
        self._host.mount(surface)
        log.info("OPEN    %r", surface)
        self._emit(WMEvent.SURFACE_OPENED, surface)

        self.focus(surface)
        return surface

    def close_all(self) -> None:
        """Close every live surface (each fires its own on_close), then clear."""
        # An on_close may open another surface; keep going until none is left
        closed = 0
        while self._surfaces:
            surface = self._surfaces[0]
            surface.close()
            if self._surfaces and self._surfaces[0] is surface:
                self._surfaces.pop(0)
            closed += 1
        self._focused = None
        log.info("All surfaces closed (%d total)", closed)

    def shutdown(self) -> None:
        """Close everything and release the manager's own pointer subscription."""
        self.close_all()
        if self._down_subscription is not None and self._host is not None:
            self._host.unsubscribe(self._down_subscription)
            self._down_subscription = None

    # ------------------------------------------------------------------
    # Public: focus
    # ------------------------------------------------------------------
    def focus(self, surface: Optional[Surface]) -> bool:
        """
        Focus *surface*: it gets the next z-index and the active marker.

        Returns:
            False if the surface is not live in this manager.
        """
        if surface is None or surface not in self._surfaces:
            log.warning("focus(%r): not a live surface, ignored", surface)
            return False
        surface.focus()
        return True

    # ------------------------------------------------------------------
    # Internal: bookkeeping driven by surface callbacks
    # ------------------------------------------------------------------
    def _raise(self, surface: Surface) -> None:
        if surface not in self._surfaces:
            return
        self._highest_z += 1
        for other in self._surfaces:
            if other is surface:
                other.set_stacking(self._highest_z, True)
            elif other.focused:
                other.set_stacking(other.z_index, False)
        self._focused = surface
        log.debug("FOCUS -> surface %d z=%d", surface.id, self._highest_z)

    def _remove(self, surface: Surface) -> None:
        try:
            self._surfaces.remove(surface)
        except ValueError:
            return
        if self._focused is surface:
            self._focused = None

    # ------------------------------------------------------------------
    # Internal: pointer routing
    # ------------------------------------------------------------------
    def _on_pointer_down(self, event: PointerEvent) -> None:
        surface = self.topmost_at(event.x, event.y)
        if surface is None:
            return
        surface.handle_pointer_down(event)

    # ------------------------------------------------------------------
    # Debug helpers
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        """Return a formatted string of all live surfaces, top of the stack first."""
        lines = [
            f"=== SurfaceManager: {len(self._surfaces)} surfaces ===",
            f"    Focused: {self._focused}",
            f"    Highest z: {self._highest_z}",
            "",
        ]
        for s in sorted(self._surfaces, key=lambda s: s.z_index, reverse=True):
            marker = " >> " if s is self._focused else "    "
            lines.append(f"{marker}{s!r}")
        return "\n".join(lines)
