"""
floatwm.geometry.snap - Zonas de snap en los bordes del viewport.

Una zona de snap no se guarda: se calcula en vivo a partir de la
posicion del puntero y del viewport mientras dura un arrastre.

Zonas disponibles:
    - TOP   : Puntero cerca del borde superior -> maximizar.
    - LEFT  : Puntero cerca del borde izquierdo -> mitad izquierda.
    - RIGHT : Puntero cerca del borde derecho -> mitad derecha.
"""

from __future__ import annotations

import enum
from typing import Optional

from floatwm.geometry.rect import Rect


# ============================================================================
# SnapZone enum
# ============================================================================
class SnapZone(enum.Enum):
    """Identificador de cada zona de snap."""
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"


def detect_snap_zone(
    px: float,
    py: float,
    viewport: Rect,
    threshold: int,
) -> Optional[SnapZone]:
    """
    Determina la zona de snap candidata para la posicion del puntero.

    Los bordes laterales tienen prioridad sobre el superior: en una
    esquina superior el puntero elige la mitad, no el maximizado.

    Args:
        px, py:    Posicion del puntero en coordenadas del host.
        viewport:  Area visible del contenedor.
        threshold: Distancia en pixeles al borde que activa la zona.

    Returns:
        La SnapZone activa, o None si el puntero no esta cerca de un borde.
    """
    if px <= viewport.left + threshold:
        return SnapZone.LEFT
    if px >= viewport.right - threshold:
        return SnapZone.RIGHT
    if py <= viewport.top + threshold:
        return SnapZone.TOP
    return None


def snap_rect(zone: SnapZone, viewport: Rect) -> Rect:
    """
    Calcula la geometria destino de una zona de snap.

    TOP ocupa todo el viewport; LEFT/RIGHT ocupan la mitad
    correspondiente con el alto completo.
    """
    if zone == SnapZone.TOP:
        return viewport
    left, right = viewport.split_horizontal(0.5)
    return left if zone == SnapZone.LEFT else right
