# rubik_anim/logic/moves.py
from __future__ import annotations

from typing import Dict, NamedTuple, Set, Tuple

from rubik_anim.core.geometry import Axis

VALID_SUFFIX: Set[str] = {"", "'"}


class SliceMove(NamedTuple):
    """Parámetros de `CubeState.rotate_slice` para un movimiento."""

    axis: Axis
    layer: int
    clockwise: bool


# Movimiento base (sin sufijo) -> (eje, capa, horario)
# Horario = visto desde el lado positivo del eje (-90°). L, D, B y los
# slices M/E se miran desde el lado negativo, por eso su giro base es antihorario.
BASE_MOVES: Dict[str, SliceMove] = {
    "R": SliceMove("x", 1, True),
    "L": SliceMove("x", -1, False),
    "M": SliceMove("x", 0, False),
    "U": SliceMove("y", 1, True),
    "D": SliceMove("y", -1, False),
    "E": SliceMove("y", 0, False),
    "F": SliceMove("z", 1, True),
    "B": SliceMove("z", -1, False),
    "S": SliceMove("z", 0, True),
}

_SLICE_TO_BASE: Dict[Tuple[str, int], str] = {
    (m.axis, m.layer): base for base, m in BASE_MOVES.items()
}


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta una cara o slice (U D L R F B M E S) con sufijo opcional "'".
    - No acepta giros dobles ("R2"): el motor no encola movimientos.

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", " m ").

    Returns:
        Token normalizado (por ejemplo: "m" -> "M").

    Raises:
        ValueError: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    base = tok[0].upper()
    suf = tok[1:]

    if base not in BASE_MOVES:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def parse_move(tok: str) -> SliceMove:
    """Traduce un token a los parámetros de un giro de capa.

    Args:
        tok: Movimiento, por ejemplo "R" o "E'".

    Returns:
        `SliceMove(axis, layer, clockwise)`.

    Raises:
        ValueError: Si el token está vacío o no es válido.
    """
    m = normalize_token(tok)
    if not m:
        raise ValueError("Movimiento vacío")

    base = BASE_MOVES[m[0]]
    if m.endswith("'"):
        return base._replace(clockwise=not base.clockwise)
    return base


def inverse_move(m: str) -> str:
    """Devuelve el movimiento inverso de un token.

    Ejemplos:
        - "R"  -> "R'"
        - "R'" -> "R"

    Args:
        m: Movimiento en notación estándar (o normalizable).

    Returns:
        El movimiento inverso. Si `m` es un string vacío, retorna "".

    Raises:
        ValueError: Si `m` no es un token válido.
    """
    m = normalize_token(m)
    if not m:
        return m
    return m[0] if m.endswith("'") else m + "'"


def move_for_slice(axis: Axis, layer: int, clockwise: bool) -> str:
    """Nombre en notación de un giro de capa (inversa de `parse_move`).

    Raises:
        ValueError: Si (axis, layer) no corresponde a ninguna capa.
    """
    try:
        base = _SLICE_TO_BASE[(axis, layer)]
    except KeyError:
        raise ValueError(f"Capa inválida: eje={axis!r} capa={layer!r}") from None
    return base if BASE_MOVES[base].clockwise == clockwise else base + "'"
