"""
floatwm.backends.tk - Host container built on tkinter.

Each mounted surface becomes a placed Frame inside one container Frame:

    +-----------------------------------------+
    | (x) (+)  Title                           |  <- header, header_height px
    +-----------------------------------------+
    |                                         |
    |  content                                |  <- content area
    |                                         |
    +-----------------------------------------+

Chrome widgets are purely visual: pointer presses are captured with
bind_all, translated to container coordinates and fed through the host's
PointerBus, and the SurfaceManager hit-tests them geometrically.  The
control buttons are placed exactly where floatwm.core.hittest expects them.

Content for this host is either a callable taking the parent Frame and
returning a widget, or a string shown in a Label.
"""

from __future__ import annotations

import logging
import tkinter as tk
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from floatwm.core.hittest import button_rects
from floatwm.core.host import Host, PointerEvent, PointerKind
from floatwm.geometry.rect import Rect

if TYPE_CHECKING:
    from floatwm.core.surface import Surface

log = logging.getLogger(__name__)


# Colors
DESKTOP_BG = "#0f1110"
WINDOW_BG = "#1b1d1c"
HEADER_BG = "#2a2d2b"
HEADER_ACTIVE_BG = "#1f4d32"
TITLE_FG = "#e6e6e6"
CLOSE_BG = "#e0443e"
MAXIMIZE_BG = "#1aab29"
PREVIEW_BG = "#3d7a55"


@dataclass(slots=True)
class _SurfaceView:
    """The tk widgets backing one surface."""

    frame: tk.Frame
    header: tk.Frame
    title: tk.Label
    close_button: tk.Frame
    maximize_button: tk.Frame
    body: tk.Frame
    preview: tk.Frame


class TkHost(Host):
    """
    Host container backed by a tkinter Frame.

    Usage:
        root = tk.Tk()
        host = TkHost(root, 1280, 720)
        wm = SurfaceManager(host)
        wm.open(SurfaceOptions(title="Notes", content=lambda parent: tk.Text(parent)))
        root.mainloop()
    """

    def __init__(self, root: tk.Misc, width: int = 1280, height: int = 720) -> None:
        super().__init__()
        self._root = root
        self._container = tk.Frame(root, width=width, height=height, bg=DESKTOP_BG)
        self._container.pack(fill="both", expand=True)
        self._container.pack_propagate(False)
        self._views: dict[int, _SurfaceView] = {}
        self._surfaces: dict[int, Surface] = {}

        root.bind_all("<ButtonPress-1>", self._on_press, add="+")
        root.bind_all("<Double-Button-1>", self._on_double_press, add="+")
        root.bind_all("<B1-Motion>", self._on_motion, add="+")
        root.bind_all("<ButtonRelease-1>", self._on_release, add="+")
        self._container.bind("<Configure>", self._on_configure, add="+")

    # ------------------------------------------------------------------
    # Host implementation
    # ------------------------------------------------------------------
    @property
    def container(self) -> tk.Frame:
        return self._container

    @property
    def viewport(self) -> Rect:
        # Before the first map winfo_* reports 1x1; fall back to the requested size
        width = self._container.winfo_width()
        height = self._container.winfo_height()
        if width <= 1 or height <= 1:
            width = int(self._container.cget("width"))
            height = int(self._container.cget("height"))
        return Rect(0, 0, width, height)

    def mount(self, surface: Surface) -> None:
        if surface.id in self._views:
            return
        settings = surface.settings
        frame = tk.Frame(self._container, bg=WINDOW_BG, highlightthickness=1,
                         highlightbackground=HEADER_BG)
        header = tk.Frame(frame, bg=HEADER_BG, height=settings.header_height)
        header.place(x=0, y=0, relwidth=1, height=settings.header_height)

        # Button positions are relative to the surface's own top-left corner
        close_rect, maximize_rect = button_rects(
            Rect(0, 0, surface.geometry.w, surface.geometry.h), settings
        )
        close_button = tk.Frame(header, bg=CLOSE_BG)
        close_button.place(x=close_rect.x, y=close_rect.y,
                           width=close_rect.w, height=close_rect.h)
        maximize_button = tk.Frame(header, bg=MAXIMIZE_BG)
        maximize_button.place(x=maximize_rect.x, y=maximize_rect.y,
                              width=maximize_rect.w, height=maximize_rect.h)

        title = tk.Label(header, text=surface.title, bg=HEADER_BG, fg=TITLE_FG, anchor="w")
        title.place(x=maximize_rect.right + settings.button_gap, y=0,
                    relwidth=1, height=settings.header_height)

        body = tk.Frame(frame, bg=WINDOW_BG)
        body.place(x=0, y=settings.header_height, relwidth=1,
                   relheight=1, height=-settings.header_height)
        self._build_content(surface, body)

        preview = tk.Frame(self._container, bg=PREVIEW_BG)

        self._views[surface.id] = _SurfaceView(
            frame=frame,
            header=header,
            title=title,
            close_button=close_button,
            maximize_button=maximize_button,
            body=body,
            preview=preview,
        )
        self._surfaces[surface.id] = surface
        log.debug("TkHost: mounted surface %d", surface.id)

    def unmount(self, surface: Surface) -> None:
        view = self._views.pop(surface.id, None)
        self._surfaces.pop(surface.id, None)
        if view is None:
            return
        view.preview.destroy()
        view.frame.destroy()
        log.debug("TkHost: unmounted surface %d", surface.id)

    def render(self, surface: Surface) -> None:
        view = self._views.get(surface.id)
        if view is None:
            return
        rect = surface.rendered_rect
        view.frame.place(x=rect.x, y=rect.y, width=rect.w, height=rect.h)

        header_bg = HEADER_ACTIVE_BG if surface.focused else HEADER_BG
        view.header.configure(bg=header_bg)
        view.title.configure(bg=header_bg)
        self._restack()

    def show_snap_preview(self, surface: Surface, rect: Rect) -> None:
        view = self._views.get(surface.id)
        if view is None:
            return
        view.preview.place(x=rect.x, y=rect.y, width=rect.w, height=rect.h)
        # The preview sits just under the dragged surface
        view.preview.lift()
        view.frame.lift()

    def hide_snap_preview(self, surface: Surface) -> None:
        view = self._views.get(surface.id)
        if view is None:
            return
        view.preview.place_forget()

    # ------------------------------------------------------------------
    # Internal: widgets
    # ------------------------------------------------------------------
    @staticmethod
    def _build_content(surface: Surface, body: tk.Frame) -> Optional[tk.Widget]:
        content = surface.content
        if callable(content):
            widget = content(body)
        else:
            widget = tk.Label(body, text=str(content), bg=WINDOW_BG, fg=TITLE_FG)
        if isinstance(widget, tk.Widget):
            widget.pack(fill="both", expand=True)
            return widget
        log.warning("TkHost: content of surface %d produced no widget", surface.id)
        return None

    def _restack(self) -> None:
        """
        Lift surface frames in z-index order so the highest ends on top.

        A visible snap preview is lifted right before its own surface, so it
        stays above every other window and under the dragged one.
        """
        ordered = sorted(
            (s for s in self._surfaces.values() if s.id in self._views),
            key=lambda s: s.z_index,
        )
        for surface in ordered:
            view = self._views[surface.id]
            if view.preview.winfo_manager():
                view.preview.lift()
            view.frame.lift()

    # ------------------------------------------------------------------
    # Internal: pointer translation
    # ------------------------------------------------------------------
    def _to_local(self, event: tk.Event) -> tuple[int, int]:
        return (
            event.x_root - self._container.winfo_rootx(),
            event.y_root - self._container.winfo_rooty(),
        )

    def _on_press(self, event: tk.Event) -> None:
        x, y = self._to_local(event)
        self.dispatch_pointer(PointerEvent(PointerKind.DOWN, x, y))

    def _on_double_press(self, event: tk.Event) -> None:
        x, y = self._to_local(event)
        self.dispatch_pointer(PointerEvent(PointerKind.DOWN, x, y, clicks=2))

    def _on_motion(self, event: tk.Event) -> None:
        x, y = self._to_local(event)
        self.dispatch_pointer(PointerEvent(PointerKind.MOVE, x, y))

    def _on_release(self, event: tk.Event) -> None:
        x, y = self._to_local(event)
        self.dispatch_pointer(PointerEvent(PointerKind.UP, x, y))

    def _on_configure(self, _event: tk.Event) -> None:
        # Maximized/snapped geometry follows the viewport
        for surface in list(self._surfaces.values()):
            self.render(surface)
