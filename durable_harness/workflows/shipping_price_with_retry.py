"""Shipping price orchestration issuing every call with a retry policy.

Updates:
    v0.1.0 - 2026-10-19 - Retry-variant twin of the shipping price orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generator

from ..services.simulated_context import RetryOptions
from .shipping_activities import UNSHIPPABLE_MESSAGE, SagaContext, ShippingPrice

IS_CONTINENT_SUPPORTED = "IsContinentSupportedWithRetry"
GET_SUPPLIER_ORCHESTRATOR = "GetSupplierOrchestratorForContinentWithRetry"
PUBLISH_CALCULATED_PRICE = "PublishCalculatedPriceActivityWithRetry"
COURIER_ORCHESTRATOR_SUFFIX = "OrchestratorWithRetry"

DEFAULT_RETRY_OPTIONS = RetryOptions(
    first_retry_interval_in_milliseconds=5000, max_number_of_attempts=3
)


@dataclass
class ShippingPriceWithRetryOrchestration:
    name: str = "SagaToTestOrchestratorWithRetry"
    retry_options: RetryOptions = field(default=DEFAULT_RETRY_OPTIONS)

    def run(self, context: Any) -> Generator[Any, Any, ShippingPrice]:
        saga = context.get_input(SagaContext)

        supported = yield context.call_activity_with_retry(
            IS_CONTINENT_SUPPORTED, self.retry_options, saga.continent, returns=bool
        )
        if not supported:
            return ShippingPrice(shippable=False, message=UNSHIPPABLE_MESSAGE)

        courier = yield context.call_activity_with_retry(
            GET_SUPPLIER_ORCHESTRATOR, self.retry_options, saga.continent, returns=str
        )
        price = yield context.call_sub_orchestrator_with_retry(
            f"{courier}{COURIER_ORCHESTRATOR_SUFFIX}",
            self.retry_options,
            saga,
            returns=Decimal,
        )
        yield context.call_activity_with_retry(
            PUBLISH_CALCULATED_PRICE, self.retry_options, (saga, price)
        )

        return ShippingPrice(shippable=True, price=price)
