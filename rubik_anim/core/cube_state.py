# rubik_anim/core/cube_state.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from rubik_anim.config import DEFAULT_CONFIG, CubeConfig
from rubik_anim.core.colors import (
    COLORS,
    FACE_SLOTS,
    INNER,
    FaceColors,
    initial_face_colors,
    permute_face_colors,
    visible_slots,
)
from rubik_anim.core.geometry import (
    LAYERS,
    Axis,
    Vec3f,
    Vec3i,
    all_positions,
    axis_index,
    is_valid_position,
    quarter_turn_angle,
    rotate_quarter_turn,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Listener = Callable[[], None]


def monotonic_ms() -> float:
    """Reloj monotónico en milisegundos (misma unidad que la duración de animación)."""
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class SliceAnimation:
    """Animación en curso de un cubito: interpolación lineal de su orientación.

    Attributes:
        start_rotation: Orientación al momento de aceptar el movimiento.
        target_rotation: Orientación de reposo al terminar.
        start_time: Marca de tiempo (ms) en que empezó el movimiento.
        duration: Duración total (ms).
        axis: Eje del movimiento.
    """

    start_rotation: Vec3f
    target_rotation: Vec3f
    start_time: float
    duration: float
    axis: Axis

    def progress(self, now: float) -> float:
        """Fracción completada en `now`, acotada a [0, 1]."""
        p = (now - self.start_time) / self.duration
        return max(0.0, min(1.0, p))

    def interpolate(self, progress: float) -> Vec3f:
        """Orientación intermedia para un avance dado."""
        s = self.start_rotation
        t = self.target_rotation
        return (
            s[0] + (t[0] - s[0]) * progress,
            s[1] + (t[1] - s[1]) * progress,
            s[2] + (t[2] - s[2]) * progress,
        )


@dataclass(frozen=True)
class Cubie:
    """Uno de los 27 cubitos.

    `home` es la identidad (celda en estado resuelto) y nunca cambia; el resto
    se reemplaza entero en cada transición.
    """

    home: Vec3i
    position: Vec3i
    orientation: Vec3f
    face_colors: FaceColors
    animation: Optional[SliceAnimation] = None

    @property
    def is_animating(self) -> bool:
        return self.animation is not None


def _solved_cubies() -> Dict[Vec3i, Cubie]:
    return {
        p: Cubie(
            home=p,
            position=p,
            orientation=(0.0, 0.0, 0.0),
            face_colors=initial_face_colors(p),
        )
        for p in all_positions()
    }


class CubeState:
    """Estado lógico del cubo 3x3x3 con giros de capa animados.

    Representación:
        - 27 `Cubie` inmutables en un dict indexado por su identidad (`home`).
        - Cada transición construye un dict nuevo y lo reemplaza: quien tenga
          un `snapshot()` anterior nunca ve un estado a medio actualizar.

    Movimientos:
        - `rotate_slice` actualiza posición y colores de inmediato y arma una
          animación por cubito; solo un movimiento puede estar en curso.
        - `tick` (una vez por frame) avanza las animaciones y libera el
          candado `is_animating` cuando todas terminan.

    Vista:
        - `rotation_x` / `rotation_y` son ángulos de cámara, no estado lógico.
    """

    def __init__(
        self,
        config: Optional[CubeConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Crea el cubo en estado resuelto.

        Args:
            config: Parámetros de animación y vista; `DEFAULT_CONFIG` si es None.
            clock: Callable sin argumentos que retorna milisegundos; por
                defecto `monotonic_ms`.
        """
        self.config: CubeConfig = config or DEFAULT_CONFIG
        self._clock: Clock = clock or monotonic_ms
        self._cubies: Dict[Vec3i, Cubie] = _solved_cubies()
        self._is_animating: bool = False
        self.rotation_x, self.rotation_y = self.config.default_view
        self._listeners: List[Listener] = []

    # --------------------------
    # Lectura
    # --------------------------
    @property
    def is_animating(self) -> bool:
        return self._is_animating

    def now(self) -> float:
        """Lectura del reloj del estado; es la base de tiempo que espera `tick`."""
        return self._clock()

    def snapshot(self) -> Mapping[Vec3i, Cubie]:
        """Vista de solo lectura de los 27 cubitos, indexados por identidad."""
        return MappingProxyType(self._cubies)

    def positions(self) -> Dict[Vec3i, Vec3i]:
        """Mapa identidad -> posición actual."""
        return {k: c.position for k, c in self._cubies.items()}

    def cubie_at(self, position: Vec3i) -> Cubie:
        """Retorna el cubito que ocupa una celda.

        Raises:
            KeyError: Si ningún cubito ocupa `position`.
        """
        for c in self._cubies.values():
            if c.position == position:
                return c
        raise KeyError(position)

    def is_solved(self) -> bool:
        """True si cada cara visible tiene el color de su lado (ignora orientación)."""
        for c in self._cubies.values():
            for slot in visible_slots(c.position):
                if c.face_colors[slot] != COLORS[FACE_SLOTS[slot]]:
                    return False
        return True

    # --------------------------
    # Listeners
    # --------------------------
    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    # --------------------------
    # Movimientos de capa
    # --------------------------
    def rotate_slice(self, axis: Axis, layer: int, clockwise: bool) -> bool:
        """Gira 90° la capa `layer` alrededor de `axis`.

        Si ya hay un movimiento en curso la llamada se ignora (no se encola).

        Args:
            axis: Eje de rotación ('x', 'y' o 'z').
            layer: Capa a rotar (-1, 0 o 1).
            clockwise: True para horario (visto desde el lado positivo del eje).

        Returns:
            True si el movimiento se aceptó; False si se descartó por haber
            una animación activa.

        Raises:
            ValueError: Si el eje o la capa están fuera de dominio.
        """
        idx = axis_index(axis)
        if layer not in LAYERS:
            raise ValueError(f"Capa no soportada: {layer!r}")

        if self._is_animating:
            logger.debug("Movimiento %s%+d descartado: animación en curso", axis, layer)
            return False

        now = self._clock()
        delta = quarter_turn_angle(clockwise)
        new_cubies = dict(self._cubies)

        for key, cubie in self._cubies.items():
            if int(round(cubie.position[idx])) != layer:
                continue

            start = cubie.orientation
            target = list(start)
            target[idx] += delta

            new_cubies[key] = replace(
                cubie,
                position=rotate_quarter_turn(cubie.position, axis, clockwise),
                face_colors=permute_face_colors(cubie.face_colors, axis, clockwise),
                animation=SliceAnimation(
                    start_rotation=start,
                    target_rotation=(target[0], target[1], target[2]),
                    start_time=now,
                    duration=self.config.animation_duration,
                    axis=axis,
                ),
            )

        self._cubies = new_cubies
        self._is_animating = True
        logger.info(
            "Movimiento aceptado: eje=%s capa=%d %s",
            axis,
            layer,
            "horario" if clockwise else "antihorario",
        )
        self._notify()
        return True

    def tick(self, now: float) -> None:
        """Avanza las animaciones en curso hasta el instante `now` (ms).

        Se llama una vez por frame, haya o no animación. Los frames sin nada
        que animar no modifican el estado ni notifican.

        Args:
            now: Marca de tiempo monotónica, en la unidad de `animation_duration`.
        """
        still_animating = False
        new_cubies: Optional[Dict[Vec3i, Cubie]] = None

        for key, cubie in self._cubies.items():
            anim = cubie.animation
            if anim is None:
                continue
            if new_cubies is None:
                new_cubies = dict(self._cubies)

            progress = anim.progress(now)
            if progress < 1.0:
                still_animating = True
                new_cubies[key] = replace(cubie, orientation=anim.interpolate(progress))
            else:
                # Snap exacto al destino para no acumular error de punto flotante
                new_cubies[key] = replace(
                    cubie, orientation=anim.target_rotation, animation=None
                )

        if self._is_animating != still_animating or still_animating:
            if new_cubies is not None:
                self._cubies = new_cubies
            self._is_animating = still_animating
            if not still_animating:
                logger.debug("Animación terminada")
            self._notify()

    def reset(self) -> bool:
        """Vuelve al estado resuelto con orientación cero.

        Returns:
            False (sin cambios) si hay una animación en curso; True si se reseteó.
        """
        if self._is_animating:
            logger.debug("Reset descartado: animación en curso")
            return False
        self._cubies = _solved_cubies()
        logger.info("Cubo reseteado")
        self._notify()
        return True

    # --------------------------
    # Vista (cámara)
    # --------------------------
    def rotate_left(self) -> None:
        self.rotation_y -= self.config.view_step
        self._notify()

    def rotate_right(self) -> None:
        self.rotation_y += self.config.view_step
        self._notify()

    def rotate_up(self) -> None:
        self.rotation_x -= self.config.view_step
        self._notify()

    def rotate_down(self) -> None:
        self.rotation_x += self.config.view_step
        self._notify()

    def reset_view(self) -> None:
        """Restaura los ángulos de vista por defecto."""
        self.rotation_x, self.rotation_y = self.config.default_view
        self._notify()

    # --------------------------
    # Auditoría
    # --------------------------
    def audit(self) -> None:
        """Verifica los invariantes del cubo sin modificarlo.

        Raises:
            AssertionError: Si las posiciones no son una biyección sobre las
                27 celdas, o si algún cubito tiene colores visibles en caras
                interiores (o interiores en caras visibles).
        """
        cubies = list(self._cubies.values())
        if len(cubies) != 27:
            raise AssertionError(f"Se esperaban 27 cubitos, hay {len(cubies)}")

        positions = [c.position for c in cubies]
        if any(not is_valid_position(p) for p in positions):
            raise AssertionError("Posición fuera de {-1,0,1}³")
        if set(positions) != set(all_positions()):
            raise AssertionError("Las posiciones no son una permutación de las 27 celdas")

        for c in cubies:
            visible = visible_slots(c.position)
            for slot, color in enumerate(c.face_colors):
                if (slot in visible) == (color == INNER):
                    raise AssertionError(
                        f"Colores inconsistentes en {c.home} (posición {c.position})"
                    )

        if not self._is_animating and any(c.is_animating for c in cubies):
            raise AssertionError("Hay animaciones activas con is_animating=False")
