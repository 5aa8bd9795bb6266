"""Helpers de dialogos para frontend."""

from __future__ import annotations

from PyQt6.QtWidgets import QMessageBox, QWidget

from cliente.backend.formatters import format_receipt
from shared.protocol import Receipt


def show_receipt(parent: QWidget | None, receipt: Receipt) -> None:
    """Muestra el comprobante de una compra exitosa."""
    QMessageBox.information(parent, "Compra realizada", format_receipt(receipt))


def show_warning(parent: QWidget | None, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)


def show_error(parent: QWidget | None, title: str, message: str) -> None:
    """Muestra un dialogo de error."""
    QMessageBox.critical(parent, title, message)
