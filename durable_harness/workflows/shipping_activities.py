"""Shipping sample: data types and the activities its orchestrations call.

Updates:
    v0.1.0 - 2026-10-19 - Continent support, courier selection and courier prices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

logger = logging.getLogger(__name__)

SUPPORTED_CONTINENTS = ("North America", "South America", "Europe")

COURIER_BY_CONTINENT = {
    "North America": "CourierA",
    "South America": "CourierA",
    "Europe": "CourierB",
}

COURIER_PRICES = {
    "CourierA": Decimal(100),
    "CourierB": Decimal(120),
}

UNSHIPPABLE_MESSAGE = "We aren't able to ship to your location"


@dataclass(slots=True)
class SagaContext:
    """Shipping address the price orchestration receives as input."""

    street: str | None = None
    city: str | None = None
    country: str | None = None
    continent: str | None = None


@dataclass(slots=True)
class ShippingPrice:
    """Result of a shipping price orchestration."""

    shippable: bool
    price: Decimal = Decimal(0)
    message: str | None = None


def is_continent_supported(continent: str | None) -> bool:
    return continent in SUPPORTED_CONTINENTS


def get_supplier_orchestrator_for_continent(continent: str | None) -> str:
    """Return the courier serving ``continent``, or ``""`` when none does."""

    return COURIER_BY_CONTINENT.get(continent or "", "")


def courier_price(courier: str) -> Decimal:
    """Return the flat price a courier orchestration quotes.

    Raises:
        KeyError: If the courier is unknown.
    """

    return COURIER_PRICES[courier]


def publish_calculated_price(saga: SagaContext, price: Decimal) -> None:
    logger.info(
        "price_published",
        extra={"continent": saga.continent, "price": str(price)},
    )
