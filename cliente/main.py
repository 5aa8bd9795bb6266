"""Inicializacion de la aplicacion de cliente."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from cliente.backend.controller import AppController, load_or_seed_machine
from cliente.backend.state_store import JsonStateStore
from cliente.frontend.main_window import MainWindow

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Ejecuta la aplicacion grafica."""
    app = QApplication(sys.argv)

    store = JsonStateStore()
    machine = load_or_seed_machine(store)
    controller = AppController(machine=machine, store=store)
    app.aboutToQuit.connect(controller.on_shutdown)

    window = MainWindow(controller=controller)
    window.show()

    LOGGER.info("Aplicacion iniciada. Estado en: %s", store.path)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
