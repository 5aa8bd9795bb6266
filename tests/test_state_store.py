"""Tests para la persistencia JSON del estado."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from cliente.backend.state_store import JsonStateStore
from servidor.domain.models import Beverage
from shared.errors import ServiceError
from shared.protocol import InventoryLine, MachineSnapshot

COKE = Beverage(name="Coca-Cola", price=1100, category="gaseosa")


class JsonStateStoreTests(unittest.TestCase):
    """Valida carga y guardado seguro del snapshot."""

    def test_load_returns_none_when_file_missing(self) -> None:
        """Sin archivo no hay estado previo."""
        with tempfile.TemporaryDirectory() as temp_dir:
            store = JsonStateStore(Path(temp_dir) / "state" / "machine.json")
            self.assertIsNone(store.load_snapshot())

    def test_save_then_load_round_trip(self) -> None:
        """load(save(s)) reconstruye s exactamente y no deja archivo temporal."""
        snapshot = MachineSnapshot(
            balance=100,
            stock=[InventoryLine(beverage=COKE, count=0)],
            history=[COKE],
        )
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state" / "machine.json"
            store = JsonStateStore(path)

            store.save_snapshot(snapshot)
            loaded = store.load_snapshot()
            leftovers = sorted(p.name for p in path.parent.iterdir())

        self.assertEqual(loaded, snapshot)
        self.assertEqual(leftovers, ["machine.json"])

    def test_saved_file_is_readable_json(self) -> None:
        """El archivo guardado es JSON con nombres legibles."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "machine.json"
            JsonStateStore(path).save_snapshot(MachineSnapshot(balance=7))
            data = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(data["balance"], 7)
        self.assertEqual(data["stock"], [])

    def test_load_corrupt_json_raises_service_error(self) -> None:
        """JSON invalido se reporta como ServiceError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "machine.json"
            path.write_text("{no es json", encoding="utf-8")

            with self.assertRaises(ServiceError):
                JsonStateStore(path).load_snapshot()

    def test_failed_write_keeps_previous_file_and_cleans_temp(self) -> None:
        """Si falla el reemplazo, el archivo previo queda intacto y sin .tmp."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "machine.json"
            store = JsonStateStore(path)
            store.save_snapshot(MachineSnapshot(balance=1))

            with mock.patch.object(Path, "replace", side_effect=OSError("disco lleno")):
                with self.assertRaises(ServiceError):
                    store.save_snapshot(MachineSnapshot(balance=2))

            loaded = store.load_snapshot()
            temp_exists = path.with_name("machine.json.tmp").exists()

        self.assertEqual(loaded, MachineSnapshot(balance=1))
        self.assertFalse(temp_exists)


    def test_quarantine_moves_file_aside(self) -> None:
        """Apartar el estado conserva su contenido y libera la ruta original."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "machine.json"
            store = JsonStateStore(path)
            self.assertIsNone(store.quarantine_snapshot())

            path.write_text("{roto", encoding="utf-8")
            corrupt_path = store.quarantine_snapshot()

            self.assertFalse(path.exists())
            self.assertIsNotNone(corrupt_path)
            self.assertTrue(corrupt_path.name.endswith(".corrupt"))
            self.assertEqual(corrupt_path.read_text(encoding="utf-8"), "{roto")
            self.assertIsNone(store.load_snapshot())

if __name__ == "__main__":
    unittest.main()
