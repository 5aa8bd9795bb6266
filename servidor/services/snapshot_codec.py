"""Codificacion del estado de la maquina a estructuras serializables."""

from __future__ import annotations

from typing import Any

from parametros import SNAPSHOT_SCHEMA_VERSION
from servidor.domain.models import Beverage
from shared.errors import ServiceError, ValidationError
from shared.protocol import InventoryLine, MachineSnapshot


def encode_snapshot(snapshot: MachineSnapshot) -> dict[str, Any]:
    """Convierte un snapshot a dict apto para JSON.

    Las bebidas se guardan una sola vez en ``stock``; el historial las
    referencia por nombre.
    """
    return {
        "schema_version": SNAPSHOT_SCHEMA_VERSION,
        "balance": snapshot.balance,
        "stock": [
            {
                "name": line.beverage.name,
                "price": line.beverage.price,
                "category": line.beverage.category,
                "count": line.count,
            }
            for line in snapshot.stock
        ],
        "history": [beverage.name for beverage in snapshot.history],
        "history_catalog": _encode_unlisted_history(snapshot),
    }


def decode_snapshot(data: Any) -> MachineSnapshot:
    """Reconstruye un snapshot validando forma y valores."""
    if not isinstance(data, dict):
        raise ServiceError("El estado guardado debe ser un objeto JSON.")

    version = data.get("schema_version")
    if version != SNAPSHOT_SCHEMA_VERSION:
        raise ServiceError(f"Version de estado no soportada: {version!r}")

    balance = data.get("balance")
    if isinstance(balance, bool) or not isinstance(balance, int) or balance < 0:
        raise ServiceError(f"Saldo invalido en estado guardado: {balance!r}")

    stock: list[InventoryLine] = []
    catalog: dict[str, Beverage] = {}
    for raw_line in _require_list(data, "stock"):
        beverage = _decode_beverage(raw_line)
        if beverage.name in catalog:
            raise ServiceError(f"Bebida duplicada en estado guardado: {beverage.name}")
        count = raw_line.get("count")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ServiceError(f"Cantidad invalida para {beverage.name}: {count!r}")
        catalog[beverage.name] = beverage
        stock.append(InventoryLine(beverage=beverage, count=count))

    for raw_beverage in _require_list(data, "history_catalog", required=False):
        beverage = _decode_beverage(raw_beverage)
        catalog.setdefault(beverage.name, beverage)

    history: list[Beverage] = []
    for name in _require_list(data, "history"):
        beverage = catalog.get(name) if isinstance(name, str) else None
        if beverage is None:
            raise ServiceError(f"Historial referencia bebida desconocida: {name!r}")
        history.append(beverage)

    return MachineSnapshot(balance=balance, stock=stock, history=history)


def _encode_unlisted_history(snapshot: MachineSnapshot) -> list[dict[str, Any]]:
    """Bebidas del historial que ya no estan en el inventario."""
    listed = {line.beverage.name for line in snapshot.stock}
    unlisted: dict[str, Beverage] = {}
    for beverage in snapshot.history:
        if beverage.name not in listed:
            unlisted.setdefault(beverage.name, beverage)
    return [
        {"name": beverage.name, "price": beverage.price, "category": beverage.category}
        for beverage in unlisted.values()
    ]


def _require_list(data: dict[str, Any], key: str, required: bool = True) -> list[Any]:
    value = data.get(key, None if required else [])
    if not isinstance(value, list):
        raise ServiceError(f"Campo '{key}' invalido en estado guardado.")
    return value


def _decode_beverage(raw: Any) -> Beverage:
    if not isinstance(raw, dict):
        raise ServiceError(f"Bebida invalida en estado guardado: {raw!r}")
    try:
        return Beverage(
            name=str(raw.get("name", "")),
            price=raw.get("price"),
            category=str(raw.get("category", "")),
        )
    except ValidationError as exc:
        raise ServiceError(f"Bebida invalida en estado guardado: {raw!r}") from exc
