"""Modelos de dominio de la maquina expendedora."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from shared.errors import ValidationError

BeveragePredicate = Callable[["Beverage", int], bool]


@dataclass(frozen=True, slots=True)
class Beverage:
    """Tipo de bebida vendible. Inmutable una vez creado."""

    name: str
    price: int
    category: str = ""

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValidationError("El nombre de la bebida no puede estar vacio.")
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValidationError(f"Precio invalido para {self.name}: {self.price!r}")
        if self.price <= 0:
            raise ValidationError(f"El precio de {self.name} debe ser mayor a 0.")


@dataclass(slots=True)
class StockEntry:
    """Relaciona una bebida con la cantidad disponible."""

    beverage: Beverage
    count: int = 0


@dataclass(frozen=True, slots=True)
class PurchaseRecord:
    """Venta completada; ordinal es la posicion en el historial."""

    beverage: Beverage
    ordinal: int


def purchasable(balance: int) -> BeveragePredicate:
    """Bebidas con stock cuyo precio no supera el saldo."""

    def _predicate(beverage: Beverage, count: int) -> bool:
        return count > 0 and beverage.price <= balance

    return _predicate


def in_category(category: str) -> BeveragePredicate:
    """Bebidas de una categoria (sin mayusculas ni espacios en los bordes)."""
    target = category.strip().casefold()

    def _predicate(beverage: Beverage, _count: int) -> bool:
        return beverage.category.strip().casefold() == target

    return _predicate


def in_stock() -> BeveragePredicate:
    """Bebidas con al menos una unidad."""
    return lambda _beverage, count: count > 0
