"""
floatwm - Floating window manager engine.

Several independent surfaces share one host container; each one can be
dragged, resized, maximized and snapped to the viewport edges, and a single
SurfaceManager decides focus and stacking order.

Run the demo desktop with:  python -m floatwm
"""

from floatwm.config.settings import DEFAULT_SETTINGS, Settings, load_settings
from floatwm.core import (
    GeometrySnapshot,
    Host,
    PointerEvent,
    PointerKind,
    Surface,
    SurfaceManager,
    SurfaceOptions,
    VirtualHost,
    WMEvent,
)
from floatwm.geometry import Rect, SnapZone

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SETTINGS", "Settings", "load_settings",
    "GeometrySnapshot", "Host", "PointerEvent", "PointerKind",
    "Surface", "SurfaceManager", "SurfaceOptions", "VirtualHost", "WMEvent",
    "Rect", "SnapZone",
]
