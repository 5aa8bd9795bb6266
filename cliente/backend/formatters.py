"""Formato de montos e inventario para la interfaz."""

from __future__ import annotations

from parametros import CURRENCY_SUFFIX
from shared.protocol import InventoryLine, Receipt


def format_price(amount: int) -> str:
    """Formatea un monto sin decimales con separador de miles."""
    return f"{amount:,}{CURRENCY_SUFFIX}"


def format_inventory_line(line: InventoryLine) -> str:
    """Texto de una fila de inventario; marca las bebidas agotadas."""
    text = f"{line.beverage.name} ({format_price(line.beverage.price)}) - {line.count} u."
    if line.count == 0:
        return f"{text} [agotado]"
    return text


def format_receipt(receipt: Receipt) -> str:
    return f"{receipt.name} comprado por {format_price(receipt.price)}"
