"""
floatwm.config.settings - Parametros ajustables del gestor de ventanas.

Define todos los valores numericos que gobiernan las superficies:
    Tamano:
        min_width / min_height        -> Tamano minimo comprometido (300x200)
        default_width / default_height -> Tamano al abrir sin dimensiones

    Gestos:
        drag_threshold  -> Pixeles de tolerancia antes de mover (click vs drag)
        snap_threshold  -> Distancia al borde que activa una zona de snap

    Orden z:
        initial_z       -> Valor inicial del contador highest_z

    Chrome (solo para hit-testing y backends):
        header_height, handle_size, button_size, button_gap

El llamador puede pasar un mapping plano (p. ej. leido de su propio
archivo de configuracion) a load_settings(); las claves desconocidas o
los valores invalidos se registran en el log y se ignoran.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Settings:
    """Configuracion inmutable compartida por el manager y sus superficies."""

    min_width: int = 300
    min_height: int = 200
    default_width: int = 600
    default_height: int = 400
    drag_threshold: int = 5
    snap_threshold: int = 20
    initial_z: int = 100
    header_height: int = 32
    handle_size: int = 6
    button_size: int = 14
    button_gap: int = 8


DEFAULT_SETTINGS = Settings()

# initial_z puede ser 0; el resto debe ser estrictamente positivo
_ALLOW_ZERO: frozenset[str] = frozenset({"initial_z", "drag_threshold", "snap_threshold"})


def load_settings(values: Optional[Mapping[str, Any]] = None) -> Settings:
    """
    Construye un Settings a partir de un mapping plano.

    Args:
        values: Claves con el mismo nombre que los campos de Settings.
                None o un mapping vacio retorna DEFAULT_SETTINGS.

    Returns:
        Settings con los valores validos aplicados sobre los defaults.
    """
    if not values:
        return DEFAULT_SETTINGS

    known = {f.name for f in fields(Settings)}
    overrides: dict[str, int] = {}

    for key, raw in values.items():
        if key not in known:
            log.warning("Settings: clave desconocida %r, ignorada", key)
            continue

        # bool es subclase de int: no lo aceptamos como numero
        if isinstance(raw, bool) or not isinstance(raw, int):
            log.warning("Settings: %s=%r no es entero, se usa el default", key, raw)
            continue

        value = raw
        minimum = 0 if key in _ALLOW_ZERO else 1
        if value < minimum:
            log.warning("Settings: %s=%r fuera de rango, se usa el default", key, raw)
            continue

        overrides[key] = value

    settings = replace(DEFAULT_SETTINGS, **overrides)
    log.debug("Settings cargados: %s", settings)
    return settings
