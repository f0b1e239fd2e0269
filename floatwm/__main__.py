"""
floatwm - Demo desktop.

Run with:  python -m floatwm
"""

import logging
import sys
import tkinter as tk

from floatwm.backends.tk import TkHost
from floatwm.config.settings import load_settings
from floatwm.core.manager import SurfaceManager, WMEvent
from floatwm.core.surface import Surface, SurfaceOptions


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            safe = msg.encode(enc, errors="replace").decode(enc, errors="replace")
            self.stream.write(safe + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(level: int = logging.DEBUG) -> None:
    """Configure logging for the demo."""
    fmt = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # Quiet down noisy loggers
    logging.getLogger("floatwm.core.host").setLevel(logging.INFO)


def on_event(event: WMEvent, surface: Surface | None, wm: SurfaceManager) -> None:
    """Global event handler that prints everything."""
    if surface is not None:
        snap = surface.get_geometry_snapshot()
        print(
            f"  EVENT: {event.value:<18s} | "
            f"id={surface.id:<3d} | {surface.title!r} | {snap.to_dict()}"
        )
    else:
        print(f"  EVENT: {event.value}")


def _notes(parent: tk.Misc) -> tk.Widget:
    text = tk.Text(parent, bg="#141615", fg="#e6e6e6", insertbackground="#e6e6e6",
                   relief="flat", wrap="word")
    text.insert("1.0", "Drag me by the header, resize from any edge,\n"
                       "drop near an edge to snap.\n")
    return text


def main() -> None:
    setup_logging()

    root = tk.Tk()
    root.title("floatwm")

    host = TkHost(root, 1280, 720)
    wm = SurfaceManager(host, settings=load_settings({"initial_z": 100}))
    wm.on_all(on_event)

    wm.open(SurfaceOptions(title="Notes", content=_notes, x=80, y=60))
    wm.open(SurfaceOptions(
        title="About",
        content="floatwm demo desktop",
        width=400,
        height=260,
    ))
    wm.open(SurfaceOptions(title="Scratch", content=_notes, width=500, height=300,
                           x=640, y=360))

    print("\n" + wm.dump_state() + "\n")
    print("=" * 60)
    print("  floatwm demo running. Close the Tk window to stop.")
    print("    Header drag          Move")
    print("    Edge/corner drag     Resize")
    print("    Double-click header  Maximize / restore")
    print("    Drop at left/right   Snap to half")
    print("    Drop at top          Maximize")
    print("=" * 60 + "\n")

    def _quit() -> None:
        print("\n" + wm.dump_state())
        wm.shutdown()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", _quit)
    root.mainloop()


if __name__ == "__main__":
    main()
