"""Historial de compras de solo agregado."""

from __future__ import annotations

from servidor.domain.models import Beverage, PurchaseRecord


class PurchaseLog:
    """Registro ordenado de compras completadas, del mas antiguo al mas nuevo."""

    def __init__(self) -> None:
        self._records: list[PurchaseRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def append(self, beverage: Beverage) -> PurchaseRecord:
        """Agrega una compra al final. La validacion corresponde al llamador."""
        record = PurchaseRecord(beverage=beverage, ordinal=len(self._records))
        self._records.append(record)
        return record

    def all(self) -> list[Beverage]:
        return [record.beverage for record in self._records]

    def records(self) -> list[PurchaseRecord]:
        return list(self._records)
