"""
floatwm.core.host - Host container boundary and pointer input plumbing.

Centralizes everything a Surface needs from the outside world so that no
other module talks to a concrete UI toolkit directly:

    - PointerEvent / PointerKind : toolkit-neutral pointer input
    - PointerBus                 : id-keyed registry of broad-scope pointer
                                   subscriptions (acquire / release / dispatch)
    - Host                       : abstract host container (viewport, mount,
                                   render, snap preview, pointer subscriptions)
    - VirtualHost                : in-memory host for tests and scripting

Coordinates are always host coordinates: (0, 0) is the top-left corner of
the container, and the viewport is the rectangle used for centering,
maximize and snap geometry.
"""

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from floatwm.geometry.rect import Rect

if TYPE_CHECKING:
    from floatwm.core.surface import Surface, VisualState

log = logging.getLogger(__name__)


# ============================================================================
# Pointer events
# ============================================================================
class PointerKind(enum.Enum):
    """Phase of a pointer interaction."""
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """
    A single pointer sample in host coordinates.

    pointer_id distinguishes concurrent pointers (touch, pen); a mouse is
    always pointer 0.  clicks is 2 for the second press of a double click.
    """

    kind: PointerKind
    x: int
    y: int
    pointer_id: int = 0
    clicks: int = 1


# Type for pointer callbacks: called with the event, return value ignored
PointerCallback = Callable[[PointerEvent], None]

ALL_KINDS: frozenset[PointerKind] = frozenset(PointerKind)


@dataclass(frozen=True, slots=True)
class PointerSubscription:
    """Represents one registered broad-scope pointer listener."""

    id: int
    kinds: frozenset[PointerKind]
    callback: PointerCallback
    description: str


# ============================================================================
# PointerBus
# ============================================================================
class PointerBus:
    """
    Registry of pointer subscriptions.

    Each subscription gets a unique id.  dispatch() walks a snapshot of the
    registry, so a callback may unsubscribe itself (or others) while an
    event is being delivered; removed subscriptions never see the rest of
    that event.
    """

    def __init__(self) -> None:
        # subscription_id -> PointerSubscription
        self._subscriptions: dict[int, PointerSubscription] = {}
        # Auto-incrementing ID counter (starting at 1)
        self._next_id: int = 1

    @property
    def count(self) -> int:
        """Number of live subscriptions."""
        return len(self._subscriptions)

    @property
    def subscriptions(self) -> list[PointerSubscription]:
        return list(self._subscriptions.values())

    def subscribe(
        self,
        callback: PointerCallback,
        kinds: Iterable[PointerKind] = ALL_KINDS,
        description: str = "",
    ) -> PointerSubscription:
        """
        Register a pointer listener.

        Args:
            callback:    Function called with every matching PointerEvent.
            kinds:       Which pointer phases to receive.
            description: Human-readable description for logging/debug.

        Returns:
            The PointerSubscription handle needed to unsubscribe.
        """
        subscription = PointerSubscription(
            id=self._next_id,
            kinds=frozenset(kinds),
            callback=callback,
            description=description,
        )
        self._subscriptions[subscription.id] = subscription
        self._next_id += 1

        log.debug(
            "Pointer subscription acquired: id=%d kinds=%s  %s",
            subscription.id,
            sorted(k.value for k in subscription.kinds),
            description,
        )
        return subscription

    def unsubscribe(self, subscription: PointerSubscription) -> bool:
        """Release a subscription.  Returns False if it was already gone."""
        removed = self._subscriptions.pop(subscription.id, None)
        if removed is None:
            return False
        log.debug(
            "Pointer subscription released: id=%d  %s",
            removed.id,
            removed.description,
        )
        return True

    def clear(self) -> None:
        """Release every subscription. Call this on host teardown."""
        count = len(self._subscriptions)
        self._subscriptions.clear()
        log.debug("All pointer subscriptions released (%d total)", count)

    def dispatch(self, event: PointerEvent) -> int:
        """
        Deliver *event* to every subscription interested in its kind.

        Returns:
            Number of callbacks invoked.
        """
        delivered = 0
        for subscription in list(self._subscriptions.values()):
            if event.kind not in subscription.kinds:
                continue
            if subscription.id not in self._subscriptions:
                continue
            delivered += 1
            try:
                subscription.callback(event)
            except Exception:
                log.exception(
                    "Error in pointer callback: %s", subscription.description
                )
        return delivered


# ============================================================================
# Host (abstract base)
# ============================================================================
class Host(abc.ABC):
    """
    Abstract host container.

    A host anchors every surface, defines the coordinate space and the
    viewport, and is the broadest scope that observes pointer movement.
    Concrete hosts implement the presentation hooks; subscription
    bookkeeping is shared through a PointerBus.
    """

    def __init__(self) -> None:
        self._bus = PointerBus()

    # ------------------------------------------------------------------
    # Coordinate space
    # ------------------------------------------------------------------
    @property
    @abc.abstractmethod
    def viewport(self) -> Rect:
        """Visible area of the container, origin at (0, 0)."""

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    @abc.abstractmethod
    def mount(self, surface: Surface) -> None:
        """Attach the surface's root node as a direct child of the container."""

    @abc.abstractmethod
    def unmount(self, surface: Surface) -> None:
        """Detach the surface's root node.  Must tolerate unknown surfaces."""

    @abc.abstractmethod
    def render(self, surface: Surface) -> None:
        """Push the surface's rendered rect, z-index and visual state."""

    @abc.abstractmethod
    def show_snap_preview(self, surface: Surface, rect: Rect) -> None:
        """Show (or move) the snap preview overlay for *surface*."""

    @abc.abstractmethod
    def hide_snap_preview(self, surface: Surface) -> None:
        """Hide the snap preview overlay for *surface*, if any."""

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    @property
    def subscription_count(self) -> int:
        return self._bus.count

    def subscribe(
        self,
        callback: PointerCallback,
        kinds: Iterable[PointerKind] = ALL_KINDS,
        description: str = "",
    ) -> PointerSubscription:
        return self._bus.subscribe(callback, kinds, description)

    def unsubscribe(self, subscription: PointerSubscription) -> bool:
        return self._bus.unsubscribe(subscription)

    def dispatch_pointer(self, event: PointerEvent) -> int:
        """Feed a pointer event from the toolkit into every subscriber."""
        return self._bus.dispatch(event)


# ============================================================================
# VirtualHost
# ============================================================================
@dataclass(frozen=True, slots=True)
class RenderedFrame:
    """What a VirtualHost last displayed for one surface."""

    rect: Rect
    z_index: int
    focused: bool
    visual_state: VisualState


class VirtualHost(Host):
    """
    In-memory host container.

    Keeps the mounted surfaces, the last rendered frame of each one and
    the active snap previews, and offers press/move/release helpers to
    script pointer gestures without a display.

    Usage:
        host = VirtualHost(1280, 720)
        manager = SurfaceManager(host)
        surface = manager.open(SurfaceOptions(title="Notes", content=node))
        host.drag([(120, 110), (170, 130)])
    """

    def __init__(self, width: int = 1280, height: int = 720) -> None:
        super().__init__()
        self._viewport = Rect(0, 0, width, height)
        self._mounted: dict[int, Surface] = {}
        self._frames: dict[int, RenderedFrame] = {}
        self._previews: dict[int, Rect] = {}
        self._render_count: int = 0

    # ------------------------------------------------------------------
    # Host implementation
    # ------------------------------------------------------------------
    @property
    def viewport(self) -> Rect:
        return self._viewport

    def mount(self, surface: Surface) -> None:
        self._mounted[surface.id] = surface
        log.debug("VirtualHost: mounted surface %d", surface.id)

    def unmount(self, surface: Surface) -> None:
        if self._mounted.pop(surface.id, None) is None:
            return
        self._frames.pop(surface.id, None)
        self._previews.pop(surface.id, None)
        log.debug("VirtualHost: unmounted surface %d", surface.id)

    def render(self, surface: Surface) -> None:
        if surface.id not in self._mounted:
            return
        self._frames[surface.id] = RenderedFrame(
            rect=surface.rendered_rect,
            z_index=surface.z_index,
            focused=surface.focused,
            visual_state=surface.visual_state,
        )
        self._render_count += 1

    def show_snap_preview(self, surface: Surface, rect: Rect) -> None:
        self._previews[surface.id] = rect

    def hide_snap_preview(self, surface: Surface) -> None:
        self._previews.pop(surface.id, None)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def mounted(self) -> list[Surface]:
        return list(self._mounted.values())

    @property
    def render_count(self) -> int:
        return self._render_count

    def frame(self, surface: Surface) -> Optional[RenderedFrame]:
        """Last frame rendered for *surface*, or None if not mounted."""
        return self._frames.get(surface.id)

    def snap_preview(self, surface: Surface) -> Optional[Rect]:
        """Currently displayed snap preview for *surface*, or None."""
        return self._previews.get(surface.id)

    def resize_viewport(self, width: int, height: int) -> None:
        """Simulate the container being resized.  Surfaces re-render on their next change."""
        self._viewport = Rect(0, 0, width, height)

    # ------------------------------------------------------------------
    # Scripting helpers
    # ------------------------------------------------------------------
    def press(self, x: int, y: int, pointer_id: int = 0, clicks: int = 1) -> int:
        return self.dispatch_pointer(
            PointerEvent(PointerKind.DOWN, x, y, pointer_id, clicks)
        )

    def move_to(self, x: int, y: int, pointer_id: int = 0) -> int:
        return self.dispatch_pointer(PointerEvent(PointerKind.MOVE, x, y, pointer_id))

    def release(self, x: int, y: int, pointer_id: int = 0) -> int:
        return self.dispatch_pointer(PointerEvent(PointerKind.UP, x, y, pointer_id))

    def drag(self, path: list[tuple[int, int]], pointer_id: int = 0) -> None:
        """
        Press at the first point, move through the rest, release at the last.

        A single-point path is a plain click.
        """
        if not path:
            return
        x, y = path[0]
        self.press(x, y, pointer_id)
        for x, y in path[1:]:
            self.move_to(x, y, pointer_id)
        self.release(x, y, pointer_id)
