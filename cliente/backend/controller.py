"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from parametros import DEFAULT_STOCK_COUNT
from servidor.domain.models import Beverage, in_category
from servidor.services.notifications import NotificationCenter
from servidor.services.vending_machine import ManagerMode, UserMode, VendingMachine
from shared.errors import ServiceError, ValidationError
from shared.protocol import Receipt

from .beverage_catalog import DEFAULT_BEVERAGES, category_display_name
from .formatters import format_inventory_line, format_price
from .state_store import StateStore
from .validators import parse_amount, validate_stock_count

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

LOGGER = logging.getLogger(__name__)


def load_or_seed_machine(
    store: StateStore,
    seed: Iterable[Beverage] = DEFAULT_BEVERAGES,
    seed_count: int = DEFAULT_STOCK_COUNT,
    notifier: NotificationCenter | None = None,
) -> VendingMachine:
    """Restaura la maquina desde el almacen o crea una nueva con stock inicial."""
    try:
        snapshot = store.load_snapshot()
    except ServiceError:
        LOGGER.warning("Estado guardado ilegible; se inicializa maquina nueva.", exc_info=True)
        # Si no se puede apartar, el error se propaga para no sobrescribirlo al salir.
        store.quarantine_snapshot()
        snapshot = None

    if snapshot is not None:
        return VendingMachine.from_snapshot(snapshot, notifier=notifier)

    machine = VendingMachine(notifier=notifier)
    for beverage in seed:
        machine.add_stock(beverage, seed_count)
    LOGGER.info("Maquina inicializada con stock por defecto.")
    return machine


class AppController:
    """Coordina acciones de UI con la maquina y su persistencia."""

    def __init__(self, machine: VendingMachine, store: StateStore) -> None:
        self._machine = machine
        self._store = store

    @property
    def notifier(self) -> NotificationCenter:
        return self._machine.notifier

    def user_mode(self) -> UserMode:
        return self._machine

    def manager_mode(self) -> ManagerMode:
        return self._machine

    def balance_text(self) -> str:
        return format_price(self._machine.show_balance())

    def on_insert_money(self, text: str) -> int:
        """Valida el texto ingresado e inserta el monto. Retorna el saldo."""
        return self.on_insert_amount(parse_amount(text))

    def on_insert_amount(self, amount: int) -> int:
        user = self.user_mode()
        user.insert_money(amount)
        return user.show_balance()

    def on_purchase(self, index: int) -> Receipt | None:
        """Compra la bebida del indice de pantalla; None si no es comprable."""
        user = self.user_mode()
        beverage = user.fetch_beverage(index)
        if beverage is None:
            raise ValidationError("Selecciona una bebida de la lista.")

        receipt = user.purchase(beverage)
        if receipt is None:
            LOGGER.info("Bebida no comprable con saldo actual: %s", beverage.name)
        return receipt

    def on_add_stock(self, index: int, count: int) -> None:
        manager = self.manager_mode()
        manager.add_stock(self._require_beverage(index), validate_stock_count(count))

    def on_remove_stock(self, index: int, count: int) -> None:
        manager = self.manager_mode()
        manager.remove_stock(self._require_beverage(index), validate_stock_count(count))

    def inventory_rows(self) -> list[str]:
        return [format_inventory_line(line) for line in self._machine.show_inventory()]

    def purchasable_names(self) -> list[str]:
        return [beverage.name for beverage in self.user_mode().fetch_purchasable_beverages()]

    def history_rows(self) -> list[str]:
        history = self.manager_mode().fetch_purchase_history()
        return [
            f"{position}. {beverage.name} ({format_price(beverage.price)})"
            for position, beverage in enumerate(history, start=1)
        ]

    def list_categories(self) -> list[tuple[str, str]]:
        """Categorias presentes en inventario como pares (categoria, nombre visible)."""
        categories: list[str] = []
        for line in self._machine.show_inventory():
            if line.beverage.category not in categories:
                categories.append(line.beverage.category)
        return [(category, category_display_name(category)) for category in categories]

    def beverages_in_category(self, category: str) -> list[str]:
        beverages = self.manager_mode().fetch_filtered_beverages(in_category(category))
        return [beverage.name for beverage in beverages]

    def save(self) -> None:
        """Guarda el estado; el snapshot se toma bajo lock y se escribe fuera de el."""
        self._store.save_snapshot(self._machine.snapshot())

    def on_shutdown(self) -> None:
        """Guardado final antes de terminar el proceso."""
        try:
            self.save()
        except ServiceError:
            LOGGER.exception("No fue posible guardar el estado al salir.")

    def on_exit(
        self,
        app: QApplication | Callable[[], None] | None,
    ) -> None:
        """Cierra la aplicacion; el guardado final ocurre en on_shutdown."""
        LOGGER.info("Accion ejecutada: salir")

        if callable(app):
            app()
            return

        if app is not None:
            app.quit()

    def _require_beverage(self, index: int) -> Beverage:
        beverage = self._machine.fetch_beverage(index)
        if beverage is None:
            raise ValidationError("Selecciona una bebida de la lista.")
        return beverage
