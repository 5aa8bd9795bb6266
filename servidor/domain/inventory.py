"""Inventario de bebidas con orden de insercion."""

from __future__ import annotations

import logging

from servidor.domain.models import Beverage, BeveragePredicate, StockEntry
from shared.errors import InsufficientStockError, ValidationError
from shared.protocol import InventoryLine

LOGGER = logging.getLogger(__name__)


class Inventory:
    """Administra el stock por tipo de bebida sin permitir cantidades negativas."""

    def __init__(self) -> None:
        self._entries: dict[Beverage, StockEntry] = {}
        self._by_name: dict[str, Beverage] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, beverage: object) -> bool:
        return beverage in self._entries

    def register(self, beverage: Beverage) -> None:
        """Crea la entrada con stock cero si la bebida no existe.

        El nombre identifica al tipo de bebida: otra bebida con el mismo nombre
        y distinto precio o categoria se rechaza.
        """
        registered = self._by_name.get(beverage.name)
        if registered is not None and registered != beverage:
            raise ValidationError(
                f"Ya existe una bebida llamada {beverage.name} con otro precio o categoria."
            )
        if beverage not in self._entries:
            self._entries[beverage] = StockEntry(beverage=beverage)
            self._by_name[beverage.name] = beverage
            LOGGER.debug("Nueva bebida en inventario: %s", beverage.name)

    def add_stock(self, beverage: Beverage, count: int) -> None:
        """Suma unidades; crea la entrada si la bebida no existe. Cero no hace nada."""
        self._validate_count(count)
        if count == 0:
            return

        self.register(beverage)
        self._entries[beverage].count += count

    def remove_stock(self, beverage: Beverage, count: int) -> None:
        """Retira unidades o falla sin modificar nada si no alcanzan."""
        self._validate_count(count)
        if count == 0:
            return

        available = self.count_of(beverage)
        if count > available:
            raise InsufficientStockError(
                f"Stock insuficiente de {beverage.name}: "
                f"solicitado={count}, disponible={available}"
            )
        self._entries[beverage].count -= count

    def count_of(self, beverage: Beverage) -> int:
        """Retorna la cantidad disponible (0 si la bebida no esta registrada)."""
        entry = self._entries.get(beverage)
        return 0 if entry is None else entry.count

    def filter(self, predicate: BeveragePredicate) -> list[Beverage]:
        """Bebidas que cumplen la condicion, en orden de insercion."""
        return [
            entry.beverage
            for entry in self._entries.values()
            if predicate(entry.beverage, entry.count)
        ]

    def list_all(self) -> list[InventoryLine]:
        return [
            InventoryLine(beverage=entry.beverage, count=entry.count)
            for entry in self._entries.values()
        ]

    def fetch_beverage(self, index: int) -> Beverage | None:
        """Resuelve un indice de pantalla; None si esta fuera de rango."""
        if index < 0 or index >= len(self._entries):
            return None
        return list(self._entries)[index]

    @staticmethod
    def _validate_count(count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError(f"Cantidad invalida: {count!r}")
        if count < 0:
            raise ValidationError(f"La cantidad no puede ser negativa: {count}")
