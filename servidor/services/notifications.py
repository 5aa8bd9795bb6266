"""Notificaciones de cambios de estado para observadores (refresco de UI)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

LOGGER = logging.getLogger(__name__)

EventHandler = Callable[["MachineEvent", Any], None]


class MachineEvent(Enum):
    """Eventos emitidos por la maquina despues de cambiar su estado."""

    BALANCE_CHANGED = "balance_changed"
    PURCHASE_COMPLETED = "purchase_completed"
    HISTORY_CHANGED = "history_changed"
    STOCK_CHANGED = "stock_changed"


class NotificationCenter:
    """Registro de observadores por evento. Los avisos no esperan respuesta."""

    def __init__(self) -> None:
        self._handlers: dict[MachineEvent, list[EventHandler]] = {}

    def subscribe(self, event: MachineEvent, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: MachineEvent, handler: EventHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def post(self, event: MachineEvent, payload: Any = None) -> None:
        """Notifica a cada observador; un observador con error no afecta al resto."""
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(event, payload)
            except Exception:
                LOGGER.exception("Fallo un observador del evento %s.", event.value)
