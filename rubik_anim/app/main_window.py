# rubik_anim/app/main_window.py
from __future__ import annotations

import logging
from typing import List

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from rubik_anim.core.cube_state import CubeState
from rubik_anim.core.geometry import AXES, LAYERS, Axis
from rubik_anim.logic.moves import move_for_slice, parse_move
from rubik_anim.render.cube_gl_widget import CubeGLWidget

logger = logging.getLogger(__name__)

SLICE_LABELS = {
    ("x", -1): "Left Face",
    ("x", 0): "Middle X",
    ("x", 1): "Right Face",
    ("y", -1): "Bottom Face",
    ("y", 0): "Middle Y",
    ("y", 1): "Top Face",
    ("z", -1): "Back Face",
    ("z", 0): "Middle Z",
    ("z", 1): "Front Face",
}


class MainWindow(QMainWindow):
    """Ventana principal de la aplicación (UI) para el cubo Rubik animado.

    Esta clase coordina:
    - El estado lógico del cubo (`CubeState`), creado una sola vez aquí
    - La visualización y el reloj de animación (`CubeGLWidget`)
    - Los controles de vista, de capas y el historial de movimientos
    """

    def __init__(self) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales."""
        super().__init__()
        self.setWindowTitle("Rubik 3D - PySide6")

        # --- Estado + render ---
        self.state: CubeState = CubeState()
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.state, self)

        # --- Historial ---
        self.history: List[str] = []

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(360)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)

        # Vista
        panel_layout.addWidget(QLabel("Vista"))
        row_view = QHBoxLayout()
        self.btn_reset_view = QPushButton("Reset vista")
        self.btn_left = QPushButton("←")
        self.btn_right = QPushButton("→")
        self.btn_up = QPushButton("↑")
        self.btn_down = QPushButton("↓")
        for b in (self.btn_reset_view, self.btn_left, self.btn_right, self.btn_up, self.btn_down):
            row_view.addWidget(b)
        panel_layout.addLayout(row_view)

        # Capas: una fila por eje, una celda por capa
        panel_layout.addWidget(QLabel("Capas (↻ horario / ↺ antihorario)"))
        grid = QGridLayout()
        for row, axis in enumerate(AXES):
            for col, layer in enumerate(LAYERS):
                grid.addWidget(self._make_slice_controls(axis, layer), row, col)
        panel_layout.addLayout(grid)

        # Movimiento en notación
        panel_layout.addWidget(QLabel("Movimiento (ej: R, U', M)"))
        row_move = QHBoxLayout()
        self.txt_move = QLineEdit()
        self.txt_move.setPlaceholderText("Ej: R'")
        self.btn_apply = QPushButton("Aplicar")
        row_move.addWidget(self.txt_move, 1)
        row_move.addWidget(self.btn_apply)
        panel_layout.addLayout(row_move)

        self.btn_reset = QPushButton("Reset cubo")
        panel_layout.addWidget(self.btn_reset)

        # Historial (movimientos)
        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_reset_view.clicked.connect(self.state.reset_view)
        self.btn_left.clicked.connect(self.state.rotate_left)
        self.btn_right.clicked.connect(self.state.rotate_right)
        self.btn_up.clicked.connect(self.state.rotate_up)
        self.btn_down.clicked.connect(self.state.rotate_down)

        self.btn_apply.clicked.connect(self.on_apply_move)
        self.txt_move.returnPressed.connect(self.on_apply_move)
        self.btn_reset.clicked.connect(self.on_reset)

        # Atajos
        self.btn_reset.setShortcut("Ctrl+R")

        self.state.add_listener(self._refresh_state_label)
        self._refresh_state_label()

    # -------------------
    # Helpers UI
    # -------------------
    def _make_slice_controls(self, axis: Axis, layer: int) -> QWidget:
        """Crea la celda de una capa: etiqueta + botones ↻ / ↺.

        Args:
            axis: Eje de la capa.
            layer: Capa (-1, 0, 1).

        Returns:
            Widget con los controles de la capa.
        """
        box = QWidget()
        lay = QVBoxLayout(box)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(QLabel(SLICE_LABELS[(axis, layer)]))

        row = QHBoxLayout()
        btn_cw = QPushButton("↻")
        btn_ccw = QPushButton("↺")
        btn_cw.clicked.connect(lambda: self.on_slice(axis, layer, True))
        btn_ccw.clicked.connect(lambda: self.on_slice(axis, layer, False))
        row.addWidget(btn_cw)
        row.addWidget(btn_ccw)
        lay.addLayout(row)
        return box

    def _refresh_state_label(self) -> None:
        """Actualiza el label de estado del cubo."""
        if self.state.is_animating:
            text = "Estado: girando…"
        elif self.state.is_solved():
            text = "Estado: resuelto ✅"
        else:
            text = "Estado: mezclado 🔄"
        if self.lbl_state.text() != text:
            self.lbl_state.setText(text)

    def _push_history(self, move: str) -> None:
        """Agrega un movimiento al historial y actualiza la lista visual.

        Args:
            move: Movimiento en notación del cubo (ej: "R", "U'").
        """
        self.history.append(move)
        self.list_history.addItem(move)
        self.list_history.scrollToBottom()

    def _show_status(self, msg: str, timeout: int = 1500) -> None:
        self.statusBar().showMessage(msg, timeout)

    # -------------------
    # Movimientos
    # -------------------
    def on_slice(self, axis: Axis, layer: int, clockwise: bool) -> None:
        """Pide al estado un giro de capa y registra el resultado.

        Args:
            axis: Eje del giro.
            layer: Capa (-1, 0, 1).
            clockwise: True para horario.
        """
        move = move_for_slice(axis, layer, clockwise)
        if not self.state.rotate_slice(axis, layer, clockwise):
            self._show_status(f"Movimiento {move} ignorado: hay una animación en curso")
            return
        self._push_history(move)
        self._show_status(f"Move: {move}", 1200)

    def on_apply_move(self) -> None:
        """Aplica el movimiento escrito por el usuario (un solo token)."""
        text = self.txt_move.text().strip()
        if not text:
            return

        try:
            axis, layer, clockwise = parse_move(text)
        except ValueError as exc:
            QMessageBox.warning(self, "Movimiento inválido", str(exc))
            return

        self.txt_move.clear()
        self.on_slice(axis, layer, clockwise)

    def on_reset(self) -> None:
        """Resetea el cubo y el historial (no durante una animación)."""
        if not self.state.reset():
            self._show_status("Reset ignorado: hay una animación en curso")
            return
        self.history.clear()
        self.list_history.clear()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre de ventana: detiene el timer de frames.

        Args:
            event: Evento de cierre de Qt.
        """
        self.gl_widget.stop()
        logger.debug("Ventana cerrada")
        event.accept()
