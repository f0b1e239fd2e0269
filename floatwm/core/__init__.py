"""
floatwm.core - Floating surfaces and the manager that stacks them.

This package contains:
    - host     : Host container boundary, pointer events and VirtualHost
    - gestures : Gesture states (idle / dragging / resizing) and their geometry
    - hittest  : Which chrome part of a surface is under the pointer
    - surface  : Surface - one floating window
    - manager  : SurfaceManager - focus, z-order and pointer routing
"""

from floatwm.core.host import Host, PointerEvent, PointerKind, VirtualHost
from floatwm.core.surface import (
    GeometrySnapshot,
    Maximized,
    Normal,
    Snapped,
    SnapSide,
    Surface,
    SurfaceOptions,
)
from floatwm.core.manager import SurfaceManager, WMEvent

__all__ = [
    "Host", "PointerEvent", "PointerKind", "VirtualHost",
    "GeometrySnapshot", "Maximized", "Normal", "Snapped", "SnapSide",
    "Surface", "SurfaceOptions",
    "SurfaceManager", "WMEvent",
]
