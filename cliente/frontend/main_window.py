"""Ventana principal de la maquina expendedora."""

from __future__ import annotations

from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QGuiApplication
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from cliente.backend.controller import AppController
from cliente.backend.formatters import format_price
from cliente.frontend.dialogs import show_error, show_receipt, show_warning
from parametros import INSERTABLE_AMOUNTS
from servidor.services.notifications import MachineEvent
from shared.errors import ServiceError, ValidationError


class MainWindow(QMainWindow):
    """Ventana con pestañas de compra y de administracion de stock."""

    def __init__(self, controller: AppController) -> None:
        super().__init__()
        self._controller = controller

        self._balance_label: QLabel
        self._inventory_list: QListWidget
        self._purchasable_label: QLabel
        self._buy_button: QPushButton
        self._manager_inventory_list: QListWidget
        self._count_spin: QSpinBox
        self._category_combo: QComboBox
        self._category_result: QLabel
        self._history_list: QListWidget
        self._exit_button: QPushButton

        self.setWindowTitle("Maquina expendedora")
        screen = QGuiApplication.primaryScreen()
        geo = screen.availableGeometry()
        self.resize(int(geo.width() * 0.45), int(geo.height() * 0.70))
        self._build_ui()
        self._connect_signals()
        self._refresh_all()

    def _build_ui(self) -> None:
        """Construye pestañas de usuario y administrador."""
        central = QWidget(self)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(24, 24, 24, 24)

        self._balance_label = QLabel(central)
        self._balance_label.setFont(QFont("Segoe UI", 20, QFont.Weight.Bold))
        self._balance_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        tabs = QTabWidget(central)
        tabs.addTab(self._build_user_page(), "Comprar")
        tabs.addTab(self._build_manager_page(), "Administrar")

        self._exit_button = QPushButton("Salir", central)

        root_layout.addWidget(self._balance_label)
        root_layout.addWidget(tabs)
        root_layout.addWidget(self._exit_button)
        self.setCentralWidget(central)

    def _build_user_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)

        money_layout = QHBoxLayout()
        for amount in INSERTABLE_AMOUNTS:
            button = QPushButton(f"+{format_price(amount)}", page)
            button.clicked.connect(lambda _checked=False, value=amount: self._on_insert(value))
            money_layout.addWidget(button)

        self._inventory_list = QListWidget(page)
        self._purchasable_label = QLabel(page)
        self._purchasable_label.setWordWrap(True)
        self._buy_button = QPushButton("Comprar seleccionada", page)

        layout.addLayout(money_layout)
        layout.addWidget(self._inventory_list)
        layout.addWidget(self._purchasable_label)
        layout.addWidget(self._buy_button)
        return page

    def _build_manager_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)

        self._manager_inventory_list = QListWidget(page)

        stock_layout = QHBoxLayout()
        self._count_spin = QSpinBox(page)
        self._count_spin.setRange(1, 99)
        add_button = QPushButton("Agregar stock", page)
        remove_button = QPushButton("Retirar stock", page)
        add_button.clicked.connect(self._on_add_stock_clicked)
        remove_button.clicked.connect(self._on_remove_stock_clicked)
        stock_layout.addWidget(self._count_spin)
        stock_layout.addWidget(add_button)
        stock_layout.addWidget(remove_button)

        self._category_combo = QComboBox(page)
        self._category_result = QLabel(page)
        self._category_result.setWordWrap(True)

        self._history_list = QListWidget(page)

        layout.addWidget(self._manager_inventory_list)
        layout.addLayout(stock_layout)
        layout.addWidget(QLabel("Filtrar por categoria", page))
        layout.addWidget(self._category_combo)
        layout.addWidget(self._category_result)
        layout.addWidget(QLabel("Historial de compras", page))
        layout.addWidget(self._history_list)
        return page

    def _connect_signals(self) -> None:
        """Conecta botones y eventos de la maquina."""
        self._buy_button.clicked.connect(self._on_buy_clicked)
        self._category_combo.currentIndexChanged.connect(self._refresh_category_filter)
        self._exit_button.clicked.connect(self._on_exit_clicked)

        notifier = self._controller.notifier
        notifier.subscribe(MachineEvent.BALANCE_CHANGED, self._on_machine_event)
        notifier.subscribe(MachineEvent.HISTORY_CHANGED, self._on_machine_event)
        notifier.subscribe(MachineEvent.STOCK_CHANGED, self._on_machine_event)

    def _on_machine_event(self, _event: MachineEvent, _payload: Any) -> None:
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._balance_label.setText(f"Saldo: {self._controller.balance_text()}")
        rows = self._controller.inventory_rows()
        for widget in (self._inventory_list, self._manager_inventory_list):
            selected = widget.currentRow()
            widget.clear()
            widget.addItems(rows)
            if 0 <= selected < len(rows):
                widget.setCurrentRow(selected)

        purchasable = self._controller.purchasable_names()
        self._purchasable_label.setText(
            "Comprables: " + (", ".join(purchasable) if purchasable else "ninguna")
        )

        self._history_list.clear()
        self._history_list.addItems(self._controller.history_rows())

        current_category = self._category_combo.currentData()
        self._category_combo.blockSignals(True)
        self._category_combo.clear()
        for category, display_name in self._controller.list_categories():
            self._category_combo.addItem(display_name, category)
        restored = self._category_combo.findData(current_category)
        self._category_combo.setCurrentIndex(max(restored, 0))
        self._category_combo.blockSignals(False)
        self._refresh_category_filter()

    def _refresh_category_filter(self, _index: int = 0) -> None:
        category = self._category_combo.currentData()
        if category is None:
            self._category_result.clear()
            return
        names = self._controller.beverages_in_category(category)
        self._category_result.setText(", ".join(names))

    def _on_insert(self, amount: int) -> None:
        try:
            self._controller.on_insert_amount(amount)
        except ValidationError as exc:
            show_error(self, "Monto invalido", str(exc))

    def _on_buy_clicked(self, _checked: bool = False) -> None:
        try:
            receipt = self._controller.on_purchase(self._inventory_list.currentRow())
        except ValidationError as exc:
            show_warning(self, "Compra", str(exc))
            return

        if receipt is None:
            show_warning(self, "Compra", "Saldo o stock insuficiente para esta bebida.")
            return
        show_receipt(self, receipt)

    def _on_add_stock_clicked(self, _checked: bool = False) -> None:
        self._run_stock_action(self._controller.on_add_stock)

    def _on_remove_stock_clicked(self, _checked: bool = False) -> None:
        self._run_stock_action(self._controller.on_remove_stock)

    def _run_stock_action(self, action) -> None:
        try:
            action(self._manager_inventory_list.currentRow(), self._count_spin.value())
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error de stock", str(exc))

    def _on_exit_clicked(self) -> None:
        """Solicita al controller el cierre de la app."""
        self._controller.on_exit(QApplication.instance())
