"""Parametros globales de la maquina expendedora."""

from __future__ import annotations

import logging
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
STATE_DIR = DATA_DIR / "state"
STATE_JSON = STATE_DIR / "vending_machine.json"
SNAPSHOT_SCHEMA_VERSION = 1
DEFAULT_STOCK_COUNT = 1
INSERTABLE_AMOUNTS: tuple[int, ...] = (100, 500, 1000, 5000)
CURRENCY_SUFFIX = "원"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
