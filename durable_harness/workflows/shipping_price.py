"""Shipping price orchestration.

Updates:
    v0.1.0 - 2026-10-19 - Continent check, courier selection and price publishing.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Generator

from .shipping_activities import UNSHIPPABLE_MESSAGE, SagaContext, ShippingPrice

IS_CONTINENT_SUPPORTED = "IsContinentSupported"
GET_SUPPLIER_ORCHESTRATOR = "GetSupplierOrchestratorForContinent"
PUBLISH_CALCULATED_PRICE = "PublishCalculatedPriceActivity"
COURIER_ORCHESTRATOR_SUFFIX = "Orchestrator"


@dataclass
class ShippingPriceOrchestration:
    name: str = "SagaToTestOrchestrator"

    def run(self, context: Any) -> Generator[Any, Any, ShippingPrice]:
        """Price a shipment for the address in the orchestration input.

        Args:
            context (Any): Orchestration context providing a ``SagaContext`` input.

        Returns:
            ShippingPrice: Unshippable with a message when the continent is not
                served, otherwise the courier's price.
        """

        saga = context.get_input(SagaContext)

        supported = yield context.call_activity(
            IS_CONTINENT_SUPPORTED, saga.continent, returns=bool
        )
        if not supported:
            return ShippingPrice(shippable=False, message=UNSHIPPABLE_MESSAGE)

        courier = yield context.call_activity(
            GET_SUPPLIER_ORCHESTRATOR, saga.continent, returns=str
        )
        price = yield context.call_sub_orchestrator(
            f"{courier}{COURIER_ORCHESTRATOR_SUFFIX}", saga, returns=Decimal
        )

        # sales and marketing listen for published prices
        yield context.call_activity(PUBLISH_CALCULATED_PRICE, (saga, price))

        return ShippingPrice(shippable=True, price=price)
