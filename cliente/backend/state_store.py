"""Persistencia local del estado de la maquina en JSON."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from parametros import STATE_JSON
from servidor.services.snapshot_codec import decode_snapshot, encode_snapshot
from shared.errors import ServiceError
from shared.protocol import MachineSnapshot

LOGGER = logging.getLogger(__name__)


class StateStore(Protocol):
    """Almacen externo del estado de la maquina."""

    def load_snapshot(self) -> MachineSnapshot | None:
        """Retorna el ultimo estado guardado o None si no existe."""

    def save_snapshot(self, snapshot: MachineSnapshot) -> None:
        """Guarda el estado completo."""

    def quarantine_snapshot(self) -> Path | None:
        """Aparta un estado ilegible para poder recuperarlo; retorna su nueva ruta."""


class JsonStateStore:
    """Guarda el snapshot en un archivo JSON con escritura segura (temp + replace)."""

    def __init__(self, path: Path = STATE_JSON) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load_snapshot(self) -> MachineSnapshot | None:
        if not self._path.exists():
            LOGGER.info("No existe estado guardado en: %s", self._path)
            return None

        try:
            raw_text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ServiceError(f"No fue posible leer el estado guardado: {self._path}") from exc

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ServiceError(f"Estado guardado con JSON invalido: {self._path}") from exc

        snapshot = decode_snapshot(data)
        LOGGER.info(
            "Estado cargado: saldo=%s, bebidas=%d, compras=%d",
            snapshot.balance,
            len(snapshot.stock),
            len(snapshot.history),
        )
        return snapshot

    def save_snapshot(self, snapshot: MachineSnapshot) -> None:
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            serialized = json.dumps(encode_snapshot(snapshot), ensure_ascii=False, indent=2)
            temp_path.write_text(serialized + "\n", encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as exc:
            raise ServiceError(f"No fue posible guardar el estado: {self._path}") from exc
        finally:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)

        LOGGER.info("Estado guardado en: %s", self._path)

    def quarantine_snapshot(self) -> Path | None:
        """Renombra el archivo actual a ``<nombre>.<timestamp>.corrupt``."""
        if not self._path.exists():
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        corrupt_path = self._path.with_name(f"{self._path.name}.{timestamp}.corrupt")
        try:
            self._path.replace(corrupt_path)
        except OSError as exc:
            raise ServiceError(
                f"No fue posible apartar el estado ilegible: {self._path}"
            ) from exc

        LOGGER.warning("Estado ilegible apartado en: %s", corrupt_path)
        return corrupt_path
