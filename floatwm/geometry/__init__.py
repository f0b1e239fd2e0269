"""
floatwm.geometry - Geometria de superficies flotantes.

Este paquete contiene:
    - rect : Estructura Rect para geometria de areas
    - snap : Zonas de snap en los bordes del viewport
"""

from floatwm.geometry.rect import Rect
from floatwm.geometry.snap import SnapZone, detect_snap_zone, snap_rect

__all__ = [
    "Rect",
    "SnapZone",
    "detect_snap_zone",
    "snap_rect",
]
