"""Validaciones para entradas del cliente."""

from __future__ import annotations

import re

from shared.errors import InvalidAmountError, ValidationError

_AMOUNT_PATTERN = re.compile(r"\d{1,3}(?:[.,]\d{3})+|\d+")


def parse_amount(text: str) -> int:
    """Convierte texto de monto a entero positivo.

    Acepta separador de miles ``.`` o ``,`` solo entre grupos de tres digitos.
    """
    cleaned = text.strip()
    if not cleaned:
        raise InvalidAmountError("Ingresa un monto.")
    if not _AMOUNT_PATTERN.fullmatch(cleaned):
        raise InvalidAmountError(f"Monto invalido: {cleaned}")

    amount = int(re.sub(r"[.,]", "", cleaned))
    if amount <= 0:
        raise InvalidAmountError("El monto debe ser mayor a 0.")
    return amount


def validate_stock_count(count: int) -> int:
    """Valida una cantidad de stock ingresada por el administrador."""
    if count <= 0:
        raise ValidationError("La cantidad debe ser mayor a 0.")
    return count
