"""DTOs que cruzan la frontera del nucleo de la maquina."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from servidor.domain.models import Beverage


@dataclass(frozen=True, slots=True)
class Receipt:
    """Comprobante de compra: nombre y precio pagado."""

    name: str
    price: int


@dataclass(frozen=True, slots=True)
class InventoryLine:
    """Linea de inventario para mostrar: bebida y cantidad."""

    beverage: Beverage
    count: int


@dataclass(slots=True)
class MachineSnapshot:
    """Estado completo persistible: saldo, inventario e historial."""

    balance: int = 0
    stock: list[InventoryLine] = field(default_factory=list)
    history: list[Beverage] = field(default_factory=list)
