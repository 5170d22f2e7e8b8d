# rubik_anim/core/geometry.py
from __future__ import annotations

import math
from typing import Dict, List, Literal, Tuple

from pyquaternion import Quaternion

Axis = Literal["x", "y", "z"]
Vec3i = Tuple[int, int, int]
Vec3f = Tuple[float, float, float]

AXES: Tuple[Axis, Axis, Axis] = ("x", "y", "z")
LAYERS: Tuple[int, int, int] = (-1, 0, 1)

AXIS_VECTORS: Dict[Axis, Vec3f] = {
    "x": (1.0, 0.0, 0.0),
    "y": (0.0, 1.0, 0.0),
    "z": (0.0, 0.0, 1.0),
}

QUARTER_TURN: float = math.pi / 2


def axis_index(axis: str) -> int:
    """Índice (0, 1, 2) de un eje principal.

    Args:
        axis: 'x', 'y' o 'z'.

    Returns:
        Posición del eje dentro de una tupla (x, y, z).

    Raises:
        ValueError: Si el eje no es uno de los tres principales.
    """
    try:
        return AXES.index(axis)  # type: ignore[arg-type]
    except ValueError:
        raise ValueError(f"Eje no soportado: {axis!r}") from None


def quarter_turn_angle(clockwise: bool) -> float:
    """Ángulo (radianes) de un cuarto de vuelta: -π/2 horario, +π/2 antihorario."""
    return -QUARTER_TURN if clockwise else QUARTER_TURN


def all_positions() -> List[Vec3i]:
    """Las 27 celdas de {-1,0,1}³ en orden lexicográfico."""
    return [(x, y, z) for x in LAYERS for y in LAYERS for z in LAYERS]


def is_valid_position(p: Vec3i) -> bool:
    """Indica si `p` es una de las 27 celdas del cubo."""
    return len(p) == 3 and all(isinstance(c, int) and c in LAYERS for c in p)


def rotate_quarter_turn(position: Vec3i, axis: Axis, clockwise: bool) -> Vec3i:
    """Rota una posición discreta 90° alrededor de un eje principal.

    El sentido horario es el que se ve mirando desde el lado positivo del eje
    hacia el origen (ángulo -π/2, regla de la mano derecha). El vector rotado
    se redondea componente a componente para volver a {-1,0,1}³; sin ese
    redondeo cuatro giros seguidos no devuelven la posición exacta.

    Args:
        position: Coordenada (x, y, z) con componentes en {-1, 0, 1}.
        axis: Eje de rotación ('x', 'y' o 'z').
        clockwise: True para horario, False para antihorario.

    Returns:
        La nueva coordenada discreta.

    Raises:
        ValueError: Si el eje no es válido.
    """
    axis_index(axis)
    q = Quaternion(axis=list(AXIS_VECTORS[axis]), angle=quarter_turn_angle(clockwise))
    x, y, z = q.rotate([float(c) for c in position])
    return (int(round(x)), int(round(y)), int(round(z)))
