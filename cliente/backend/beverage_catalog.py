"""Catalogo de bebidas con que se inicializa una maquina nueva."""

from __future__ import annotations

from servidor.domain.models import Beverage

DAIRY = "lacteo"
CARBONATED = "gaseosa"
COFFEE = "cafe"

STRAWBERRY_MILK = Beverage(name="Leche de frutilla", price=1000, category=DAIRY)
CHOCOLATE_MILK = Beverage(name="Leche chocolatada", price=1000, category=DAIRY)
COKE = Beverage(name="Coca-Cola", price=1100, category=CARBONATED)
AMERICANO = Beverage(name="Americano", price=1500, category=COFFEE)

DEFAULT_BEVERAGES: tuple[Beverage, ...] = (
    STRAWBERRY_MILK,
    CHOCOLATE_MILK,
    COKE,
    AMERICANO,
)

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    DAIRY: "Lácteos",
    CARBONATED: "Gaseosas",
    COFFEE: "Café",
}


def category_display_name(category: str) -> str:
    """Nombre visible de una categoria, o el texto original capitalizado."""
    normalized = category.strip().lower()
    return CATEGORY_DISPLAY_NAMES.get(normalized, normalized.replace("-", " ").title())
