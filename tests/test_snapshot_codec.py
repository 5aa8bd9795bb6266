"""Tests para codificacion del estado de la maquina."""

from __future__ import annotations

import json
import unittest

from parametros import SNAPSHOT_SCHEMA_VERSION
from servidor.domain.models import Beverage
from servidor.services.snapshot_codec import decode_snapshot, encode_snapshot
from servidor.services.vending_machine import VendingMachine
from shared.errors import ServiceError, ValidationError
from shared.protocol import InventoryLine, MachineSnapshot

COKE = Beverage(name="Coke", price=1100, category="carbonated")
MILK = Beverage(name="Leche de frutilla", price=1000, category="dairy")


class SnapshotCodecTests(unittest.TestCase):
    """Valida fidelidad de ida y vuelta y rechazo de datos corruptos."""

    def test_round_trip_through_json_preserves_state(self) -> None:
        """Saldo, cantidades (incluida cero) y orden del historial se conservan."""
        snapshot = MachineSnapshot(
            balance=100,
            stock=[InventoryLine(beverage=COKE, count=0), InventoryLine(beverage=MILK, count=4)],
            history=[MILK, COKE, MILK],
        )

        decoded = decode_snapshot(json.loads(json.dumps(encode_snapshot(snapshot))))

        self.assertEqual(decoded, snapshot)

    def test_history_entries_share_inventory_beverage(self) -> None:
        """El historial decodificado referencia las mismas bebidas del inventario."""
        snapshot = MachineSnapshot(
            balance=0,
            stock=[InventoryLine(beverage=COKE, count=1)],
            history=[COKE, COKE],
        )

        decoded = decode_snapshot(encode_snapshot(snapshot))

        self.assertIs(decoded.history[0], decoded.stock[0].beverage)
        self.assertIs(decoded.history[1], decoded.stock[0].beverage)

    def test_history_beverage_missing_from_stock_round_trips(self) -> None:
        """Bebidas vendidas que ya no estan en stock se guardan aparte."""
        snapshot = MachineSnapshot(balance=5, stock=[], history=[COKE])

        self.assertEqual(decode_snapshot(encode_snapshot(snapshot)), snapshot)

    def test_round_trip_after_rejected_reprice_of_sold_out_beverage(self) -> None:
        """Tras vender todo y rechazar un re-precio, el estado sigue siendo codificable."""
        machine = VendingMachine()
        machine.add_stock(COKE, 1)
        machine.insert_money(5000)
        machine.purchase(COKE)

        with self.assertRaises(ValidationError):
            machine.add_stock(Beverage(name="Coke", price=1200, category="carbonated"), 2)

        snapshot = machine.snapshot()
        self.assertEqual(decode_snapshot(encode_snapshot(snapshot)), snapshot)
        self.assertEqual(len(snapshot.stock), 1)

    def test_empty_snapshot_round_trip(self) -> None:
        """Una maquina vacia tambien se reconstruye."""
        self.assertEqual(decode_snapshot(encode_snapshot(MachineSnapshot())), MachineSnapshot())

    def test_rejects_invalid_payloads(self) -> None:
        """Datos con forma o valores invalidos lanzan ServiceError."""
        valid = encode_snapshot(
            MachineSnapshot(balance=10, stock=[InventoryLine(beverage=COKE, count=1)])
        )
        invalid_payloads = [
            [],
            {**valid, "schema_version": SNAPSHOT_SCHEMA_VERSION + 1},
            {**valid, "balance": -1},
            {**valid, "balance": "10"},
            {**valid, "stock": "Coke"},
            {**valid, "stock": [{"name": "Coke", "price": 0, "count": 1}]},
            {**valid, "stock": [{"name": "Coke", "price": 1100, "count": -2}]},
            {**valid, "stock": valid["stock"] * 2},
            {**valid, "history": ["Fanta"]},
        ]

        for payload in invalid_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(ServiceError):
                    decode_snapshot(payload)


if __name__ == "__main__":
    unittest.main()
