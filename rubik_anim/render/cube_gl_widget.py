# rubik_anim/render/cube_gl_widget.py
from __future__ import annotations

import math
from typing import Tuple

from PySide6.QtCore import QPoint, QTimer, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glPopMatrix,
    glPushMatrix,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from rubik_anim.core.colors import hex_to_rgb
from rubik_anim.core.cube_state import Cubie, CubeState
from rubik_anim.core.geometry import AXIS_VECTORS, Vec3f, axis_index

# Medio lado de un cubito (deja una ranura entre piezas)
HALF: float = 0.475

# Vértices de cada cara en el orden de FACE_SLOTS (+x, -x, +y, -y, +z, -z)
_FACE_QUADS: Tuple[Tuple[Vec3f, Vec3f, Vec3f, Vec3f], ...] = (
    ((HALF, -HALF, -HALF), (HALF, HALF, -HALF), (HALF, HALF, HALF), (HALF, -HALF, HALF)),
    ((-HALF, -HALF, -HALF), (-HALF, -HALF, HALF), (-HALF, HALF, HALF), (-HALF, HALF, -HALF)),
    ((-HALF, HALF, -HALF), (-HALF, HALF, HALF), (HALF, HALF, HALF), (HALF, HALF, -HALF)),
    ((-HALF, -HALF, -HALF), (HALF, -HALF, -HALF), (HALF, -HALF, HALF), (-HALF, -HALF, HALF)),
    ((-HALF, -HALF, HALF), (HALF, -HALF, HALF), (HALF, HALF, HALF), (-HALF, HALF, HALF)),
    ((-HALF, -HALF, -HALF), (-HALF, HALF, -HALF), (HALF, HALF, -HALF), (HALF, -HALF, -HALF)),
)


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja un `CubeState` y mueve su reloj de animación.

    Características:
    - Render OpenGL clásico (sin shaders), un cubo de 6 caras por cubito.
    - Un QTimer por frame llama a `CubeState.tick` y redibuja.
    - Vista del cubo según `rotation_x` / `rotation_y` del estado.
    - Orbit con botón derecho y zoom con la rueda (solo cámara).
    """

    def __init__(self, state: CubeState, parent=None) -> None:
        """Crea el widget OpenGL y arranca el timer de frames.

        Args:
            state: Estado del cubo (se comparte con la ventana principal).
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.state: CubeState = state

        # Cámara / orbit
        self.yaw: float = 0.0
        self.pitch: float = 0.0
        self.distance: float = 8.5

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        self.state.add_listener(self.update)

        self._frame_timer: QTimer = QTimer(self)
        self._frame_timer.setInterval(self.state.config.frame_interval_ms)
        self._frame_timer.timeout.connect(self._on_frame)
        self._frame_timer.start()

        self.setFocusPolicy(Qt.ClickFocus)
        self.setMinimumSize(400, 400)

    # --------------------------
    # Frame loop
    # --------------------------
    def _on_frame(self) -> None:
        """Tick del timer: avanza las animaciones del estado.

        El estado notifica (y este widget se redibuja) solo si algo cambió.
        """
        self.state.tick(self.state.now())

    def stop(self) -> None:
        """Detiene el timer de frames (al cerrar la ventana)."""
        self._frame_timer.stop()

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(0.10, 0.10, 0.12, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        aspect = fb_w / float(fb_h)
        gluPerspective(45.0, aspect, 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual: los 27 cubitos del snapshot del estado."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        self._apply_camera()

        for cubie in self.state.snapshot().values():
            self._draw_cubie(cubie)

    def _apply_camera(self) -> None:
        """Aplica cámara (orbit + zoom) y luego la vista del cubo del estado."""
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.yaw, 0.0, 1.0, 0.0)

        glRotatef(math.degrees(self.state.rotation_x), 1.0, 0.0, 0.0)
        glRotatef(math.degrees(self.state.rotation_y), 0.0, 1.0, 0.0)

    # --------------------------
    # Render helpers
    # --------------------------
    def _draw_cubie(self, cubie: Cubie) -> None:
        """Dibuja un cubito en su posición lógica.

        Durante una animación la posición y los colores ya son los de destino;
        se rota el cubito alrededor del eje del movimiento por
        `orientation - target_rotation`, que va de ∓90° (pose anterior) a 0.
        """
        glPushMatrix()

        anim = cubie.animation
        if anim is not None:
            i = axis_index(anim.axis)
            angle = cubie.orientation[i] - anim.target_rotation[i]
            glRotatef(math.degrees(angle), *AXIS_VECTORS[anim.axis])

        x, y, z = cubie.position
        glTranslatef(float(x), float(y), float(z))

        glBegin(GL_QUADS)
        for color, quad in zip(cubie.face_colors, _FACE_QUADS):
            glColor3f(*self._color_rgb(color))
            for v in quad:
                glVertex3f(*v)
        glEnd()

        glPopMatrix()

    def _color_rgb(self, c: str) -> Vec3f:
        """Convierte un color "#rrggbb" del modelo a RGB (0..1)."""
        return hex_to_rgb(c)

    # --------------------------
    # Interacción (solo cámara)
    # --------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Botón derecho inicia el orbit de cámara.

        Args:
            event: Evento de mouse de Qt.
        """
        if event.button() == Qt.RightButton:
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Orbit de cámara mientras se arrastra con botón derecho.

        Args:
            event: Evento de mouse de Qt.
        """
        if self._orbiting:
            dx = event.position().x() - self._last_mouse_pos.x()
            dy = event.position().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()

            sens = 0.4
            self.yaw += dx * sens
            self.pitch += dy * sens
            self.pitch = max(-89.0, min(89.0, self.pitch))

            self.update()
            event.accept()
            return

        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Finaliza el orbit al soltar el botón derecho.

        Args:
            event: Evento de mouse de Qt.
        """
        if event.button() == Qt.RightButton and self._orbiting:
            self._orbiting = False
            event.accept()
            return

        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse.

        Args:
            event: Evento de rueda de Qt.
        """
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.3
        self.distance = max(4.0, min(20.0, self.distance))
        self.update()
        event.accept()
