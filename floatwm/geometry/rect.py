"""
floatwm.geometry.rect - Estructura geometrica Rect.

Define un rectangulo inmutable que representa un area del host.
Se usa para describir tanto el viewport del contenedor como la
geometria comprometida de cada superficie flotante.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Rectangulo inmutable definido por posicion (x, y) y dimensiones (w, h).

    Todas las coordenadas estan en pixeles. El origen (0, 0) es la esquina
    superior-izquierda del contenedor host. x/y pueden ser negativos: una
    ventana puede arrastrarse parcialmente fuera del viewport.

    Atributos:
        x: Coordenada horizontal de la esquina superior-izquierda.
        y: Coordenada vertical de la esquina superior-izquierda.
        w: Ancho en pixeles.
        h: Alto en pixeles.
    """

    x: int
    y: int
    w: int
    h: int

    # ------------------------------------------------------------------
    # Propiedades derivadas
    # ------------------------------------------------------------------
    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def center_x(self) -> int:
        return self.x + self.w // 2

    @property
    def center_y(self) -> int:
        return self.y + self.h // 2

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------
    def contains(self, px: float, py: float) -> bool:
        """True si el punto (px, py) cae dentro del rectangulo (bordes incluidos)."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    # ------------------------------------------------------------------
    # Operaciones geometricas
    # ------------------------------------------------------------------
    def split_horizontal(self, ratio: float = 0.5) -> tuple[Rect, Rect]:
        """
        Divide el rectangulo verticalmente (mitad izquierda / derecha).

        Args:
            ratio: Fraccion del ancho para la parte izquierda (0.0 - 1.0).

        Returns:
            Tupla (izquierda, derecha). La derecha absorbe el pixel sobrante.
        """
        left_w = int(self.w * ratio)
        right_w = self.w - left_w
        left = Rect(self.x, self.y, left_w, self.h)
        right = Rect(self.x + left_w, self.y, right_w, self.h)
        return left, right

    def moved_to(self, x: int, y: int) -> Rect:
        """Mismo tamano, nueva esquina superior-izquierda."""
        return Rect(x, y, self.w, self.h)

    def with_min_size(self, min_w: int, min_h: int) -> Rect:
        """
        Garantiza un tamano minimo sin mover la esquina superior-izquierda.

        Se usa al comprometer geometria: los valores por debajo del minimo
        se corrigen en el lugar, nunca se rechazan.
        """
        if self.w >= min_w and self.h >= min_h:
            return self
        return Rect(self.x, self.y, max(self.w, min_w), max(self.h, min_h))

    def centered_in(self, area: Rect) -> Rect:
        """
        Centra este rectangulo dentro de *area* conservando su tamano.

        Si el rectangulo es mas grande que el area, la esquina se fija
        en el origen del area (nunca coordenadas negativas al centrar).
        """
        x = area.x + max(0, (area.w - self.w) // 2)
        y = area.y + max(0, (area.h - self.h) // 2)
        return Rect(x, y, self.w, self.h)

    # ------------------------------------------------------------------
    # Representacion
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"Rect({self.w}x{self.h}+{self.x}+{self.y})"
