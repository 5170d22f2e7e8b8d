# main.py
from __future__ import annotations

import sys
from typing import NoReturn

from PySide6.QtWidgets import QApplication

from rubik_anim.app.main_window import MainWindow
from rubik_anim.config import setup_logging


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Configura logging, crea la instancia de `QApplication`, construye la
    ventana principal (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    setup_logging()
    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
