"""Maquina expendedora: saldo, inventario e historial de compras."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from servidor.domain.inventory import Inventory
from servidor.domain.models import Beverage, BeveragePredicate, purchasable
from servidor.domain.purchase_log import PurchaseLog
from servidor.services.notifications import MachineEvent, NotificationCenter
from shared.errors import InvalidAmountError, ServiceError
from shared.protocol import InventoryLine, MachineSnapshot, Receipt

LOGGER = logging.getLogger(__name__)


class UserMode(Protocol):
    """Vista restringida para quien compra en la maquina."""

    def show_balance(self) -> int:
        """Saldo disponible."""

    def show_inventory(self) -> list[InventoryLine]:
        """Inventario completo para mostrar."""

    def fetch_beverage(self, index: int) -> Beverage | None:
        """Bebida segun indice de pantalla."""

    def insert_money(self, amount: int) -> None:
        """Inserta dinero en la maquina."""

    def purchase(self, beverage: Beverage) -> Receipt | None:
        """Compra una bebida si es posible."""

    def fetch_purchasable_beverages(self) -> list[Beverage]:
        """Bebidas comprables con el saldo actual."""


class ManagerMode(Protocol):
    """Vista restringida para la administracion del stock."""

    def show_balance(self) -> int:
        """Saldo disponible."""

    def show_inventory(self) -> list[InventoryLine]:
        """Inventario completo para mostrar."""

    def fetch_beverage(self, index: int) -> Beverage | None:
        """Bebida segun indice de pantalla."""

    def add_stock(self, beverage: Beverage, count: int) -> None:
        """Agrega stock de una bebida."""

    def remove_stock(self, beverage: Beverage, count: int) -> None:
        """Retira stock de una bebida."""

    def fetch_filtered_beverages(self, predicate: BeveragePredicate) -> list[Beverage]:
        """Bebidas que cumplen una condicion."""

    def fetch_purchase_history(self) -> list[Beverage]:
        """Historial de compras."""


class VendingMachine:
    """Coordina saldo, inventario e historial como una unidad consistente."""

    def __init__(
        self,
        inventory: Inventory | None = None,
        purchase_log: PurchaseLog | None = None,
        balance: int = 0,
        notifier: NotificationCenter | None = None,
    ) -> None:
        if balance < 0:
            raise ServiceError(f"El saldo inicial no puede ser negativo: {balance}")
        self._inventory = inventory if inventory is not None else Inventory()
        self._purchase_log = purchase_log if purchase_log is not None else PurchaseLog()
        self._balance = balance
        self._notifier = notifier if notifier is not None else NotificationCenter()
        self._lock = threading.RLock()

    @property
    def notifier(self) -> NotificationCenter:
        return self._notifier

    @classmethod
    def from_snapshot(
        cls,
        snapshot: MachineSnapshot,
        notifier: NotificationCenter | None = None,
    ) -> VendingMachine:
        """Reconstruye la maquina desde un estado persistido."""
        inventory = Inventory()
        for line in snapshot.stock:
            inventory.register(line.beverage)
            inventory.add_stock(line.beverage, line.count)

        purchase_log = PurchaseLog()
        for beverage in snapshot.history:
            purchase_log.append(beverage)

        return cls(
            inventory=inventory,
            purchase_log=purchase_log,
            balance=snapshot.balance,
            notifier=notifier,
        )

    def snapshot(self) -> MachineSnapshot:
        """Copia consistente del estado completo."""
        with self._lock:
            return MachineSnapshot(
                balance=self._balance,
                stock=self._inventory.list_all(),
                history=self._purchase_log.all(),
            )

    # Consultas

    def show_balance(self) -> int:
        return self._balance

    def show_inventory(self) -> list[InventoryLine]:
        with self._lock:
            return self._inventory.list_all()

    def fetch_beverage(self, index: int) -> Beverage | None:
        with self._lock:
            return self._inventory.fetch_beverage(index)

    def fetch_purchasable_beverages(self) -> list[Beverage]:
        """Bebidas con stock y precio menor o igual al saldo."""
        with self._lock:
            return self._inventory.filter(purchasable(self._balance))

    def fetch_filtered_beverages(self, predicate: BeveragePredicate) -> list[Beverage]:
        with self._lock:
            return self._inventory.filter(predicate)

    def fetch_purchase_history(self) -> list[Beverage]:
        with self._lock:
            return self._purchase_log.all()

    # Usuario

    def insert_money(self, amount: int) -> None:
        """Aumenta el saldo; montos no positivos se rechazan sin cambios."""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(f"El monto a insertar debe ser mayor a 0: {amount!r}")

        with self._lock:
            self._balance += amount
            balance = self._balance

        LOGGER.info("Dinero insertado: monto=%s, saldo=%s", amount, balance)
        self._notifier.post(MachineEvent.BALANCE_CHANGED, balance)
        self._notifier.post(MachineEvent.HISTORY_CHANGED, None)

    def purchase(self, beverage: Beverage) -> Receipt | None:
        """Compra una unidad. Retorna None si la bebida no es comprable."""
        with self._lock:
            if beverage not in self._inventory.filter(purchasable(self._balance)):
                LOGGER.debug(
                    "Compra rechazada: bebida=%s, saldo=%s, stock=%s",
                    beverage.name,
                    self._balance,
                    self._inventory.count_of(beverage),
                )
                return None

            # Validado arriba: ninguna de las tres escrituras puede fallar.
            self._inventory.remove_stock(beverage, 1)
            self._balance -= beverage.price
            self._purchase_log.append(beverage)
            balance = self._balance

        LOGGER.info(
            "Compra realizada: bebida=%s, precio=%s, saldo=%s",
            beverage.name,
            beverage.price,
            balance,
        )
        receipt = Receipt(name=beverage.name, price=beverage.price)
        self._notifier.post(MachineEvent.BALANCE_CHANGED, balance)
        self._notifier.post(MachineEvent.PURCHASE_COMPLETED, receipt)
        self._notifier.post(MachineEvent.HISTORY_CHANGED, None)
        return receipt

    # Administracion

    def add_stock(self, beverage: Beverage, count: int) -> None:
        with self._lock:
            self._inventory.add_stock(beverage, count)
            current = self._inventory.count_of(beverage)

        LOGGER.info("Stock agregado: bebida=%s, cantidad=%s, total=%s", beverage.name, count, current)
        self._notifier.post(MachineEvent.STOCK_CHANGED, beverage)

    def remove_stock(self, beverage: Beverage, count: int) -> None:
        """Retira stock sin tocar saldo ni historial."""
        with self._lock:
            self._inventory.remove_stock(beverage, count)
            current = self._inventory.count_of(beverage)

        LOGGER.info("Stock retirado: bebida=%s, cantidad=%s, total=%s", beverage.name, count, current)
        self._notifier.post(MachineEvent.STOCK_CHANGED, beverage)
