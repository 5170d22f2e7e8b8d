# rubik_anim/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

LOG_LEVEL_ENV = "RUBIK_ANIM_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s - %(name)s - %(message)s"


@dataclass(frozen=True)
class CubeConfig:
    """Parámetros de animación y de vista del cubo.

    Attributes:
        animation_duration: Duración de un cuarto de vuelta, en milisegundos.
        view_step: Radianes que avanza la vista por cada pulsación de botón.
        default_view: Ángulos `(rotation_x, rotation_y)` iniciales y de reset.
        frame_interval_ms: Intervalo del timer de render (~60fps con 16).
    """

    animation_duration: float = 500.0
    view_step: float = 0.5
    default_view: Tuple[float, float] = (0.5, 0.5)
    frame_interval_ms: int = 16

    def __post_init__(self) -> None:
        if self.animation_duration <= 0:
            raise ValueError(
                f"animation_duration debe ser > 0: {self.animation_duration}"
            )
        if self.frame_interval_ms <= 0:
            raise ValueError(
                f"frame_interval_ms debe ser > 0: {self.frame_interval_ms}"
            )


DEFAULT_CONFIG = CubeConfig()


def setup_logging(level: Optional[str] = None) -> None:
    """Configura el logging de la aplicación.

    El nivel se toma de `level`, o de la variable de entorno
    `RUBIK_ANIM_LOG_LEVEL`, o INFO por defecto.

    Args:
        level: Nombre del nivel ("DEBUG", "INFO", ...), opcional.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
    )
