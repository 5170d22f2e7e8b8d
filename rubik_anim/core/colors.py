# rubik_anim/core/colors.py
from __future__ import annotations

from typing import Dict, List, Literal, Sequence, Set, Tuple

from rubik_anim.core.geometry import Axis, Vec3f, Vec3i, axis_index

Color = str  # hex "#rrggbb"
FaceName = Literal["right", "left", "top", "bottom", "front", "back"]
FaceColors = Tuple[Color, Color, Color, Color, Color, Color]

COLORS: Dict[str, Color] = {
    "front": "#ff0000",   # rojo
    "back": "#ff8c00",    # naranja
    "top": "#ffffff",     # blanco
    "bottom": "#ffff00",  # amarillo
    "right": "#00ff00",   # verde
    "left": "#0000ff",    # azul
    "inner": "#1a1a1a",   # gris oscuro (caras interiores)
}

INNER: Color = COLORS["inner"]

# Orden fijo de slots: +x, -x, +y, -y, +z, -z
FACE_SLOTS: Tuple[FaceName, ...] = ("right", "left", "top", "bottom", "front", "back")
RIGHT, LEFT, TOP, BOTTOM, FRONT, BACK = range(6)

FACE_NORMALS: Tuple[Vec3i, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)

# Ciclo de caras laterales por eje, en el orden en que un giro horario
# (convención de `rotate_quarter_turn`) lleva cada cara a la siguiente.
FACE_CYCLES: Dict[Axis, Tuple[int, int, int, int]] = {
    "x": (TOP, BACK, BOTTOM, FRONT),
    "y": (FRONT, LEFT, BACK, RIGHT),
    "z": (TOP, RIGHT, BOTTOM, LEFT),
}


def visible_slots(position: Vec3i) -> Set[int]:
    """Slots de cara que quedan hacia afuera del cubo en una posición dada.

    Args:
        position: Coordenada discreta (x, y, z).

    Returns:
        Conjunto de índices de slot (0..5) cuyo eje está en el extremo
        correspondiente (+1 para slots "+", -1 para slots "-").
    """
    out: Set[int] = set()
    for i, c in enumerate(position):
        if c == 1:
            out.add(2 * i)
        elif c == -1:
            out.add(2 * i + 1)
    return out


def initial_face_colors(position: Vec3i) -> FaceColors:
    """Colores del cubito en estado resuelto: color de cara afuera, interior adentro."""
    visible = visible_slots(position)
    return tuple(  # type: ignore[return-value]
        COLORS[name] if i in visible else INNER
        for i, name in enumerate(FACE_SLOTS)
    )


def permute_face_colors(
    colors: Sequence[Color], axis: Axis, clockwise: bool
) -> FaceColors:
    """Reubica los colores de un cubito tras un cuarto de vuelta.

    Las cuatro caras laterales del eje rotan entre sí; las dos caras del
    propio eje pasan sin cambios.

    Args:
        colors: 6 colores en el orden de `FACE_SLOTS`.
        axis: Eje del giro.
        clockwise: True para horario, False para antihorario.

    Returns:
        Nueva tupla de 6 colores.

    Raises:
        ValueError: Si el eje no es válido o no hay exactamente 6 colores.
    """
    axis_index(axis)
    if len(colors) != 6:
        raise ValueError(f"Se esperaban 6 colores, hay {len(colors)}")

    cycle = FACE_CYCLES[axis]
    new: List[Color] = list(colors)
    for i in range(4):
        src, dst = cycle[i], cycle[(i + 1) % 4]
        if clockwise:
            new[dst] = colors[src]
        else:
            new[src] = colors[dst]
    return tuple(new)  # type: ignore[return-value]


def hex_to_rgb(color: Color) -> Vec3f:
    """Convierte "#rrggbb" a (r, g, b) en rango [0, 1]."""
    h = color.lstrip("#")
    return (
        int(h[0:2], 16) / 255.0,
        int(h[2:4], 16) / 255.0,
        int(h[4:6], 16) / 255.0,
    )
