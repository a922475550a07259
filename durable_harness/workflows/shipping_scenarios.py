"""Canned bindings that run the shipping orchestrations end to end.

Updates:
    v0.1.0 - 2026-10-19 - Bindings backed by the sample activities.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.mock_registry import MockRegistry
from . import shipping_price, shipping_price_with_retry
from .shipping_activities import (
    COURIER_PRICES,
    courier_price,
    get_supplier_orchestrator_for_continent,
    is_continent_supported,
)


@dataclass(slots=True, frozen=True)
class ShippingCallNames:
    is_continent_supported: str
    get_supplier_orchestrator: str
    publish_calculated_price: str
    courier_suffix: str

    def courier_orchestrator(self, courier: str) -> str:
        return f"{courier}{self.courier_suffix}"


PLAIN_CALLS = ShippingCallNames(
    is_continent_supported=shipping_price.IS_CONTINENT_SUPPORTED,
    get_supplier_orchestrator=shipping_price.GET_SUPPLIER_ORCHESTRATOR,
    publish_calculated_price=shipping_price.PUBLISH_CALCULATED_PRICE,
    courier_suffix=shipping_price.COURIER_ORCHESTRATOR_SUFFIX,
)

RETRY_CALLS = ShippingCallNames(
    is_continent_supported=shipping_price_with_retry.IS_CONTINENT_SUPPORTED,
    get_supplier_orchestrator=shipping_price_with_retry.GET_SUPPLIER_ORCHESTRATOR,
    publish_calculated_price=shipping_price_with_retry.PUBLISH_CALCULATED_PRICE,
    courier_suffix=shipping_price_with_retry.COURIER_ORCHESTRATOR_SUFFIX,
)


def call_names(retry: bool) -> ShippingCallNames:
    return RETRY_CALLS if retry else PLAIN_CALLS


def bind_shipping_calls(
    registry: MockRegistry, continent: str, *, supported: bool | None = None, retry: bool = False
) -> ShippingCallNames:
    """Bind every call the shipping orchestration can make for ``continent``.

    Results come from the sample activities, so the run behaves like the real
    engine would. ``supported`` overrides the continent check.

    Args:
        registry (MockRegistry): Registry to configure.
        continent (str): Continent the shipment goes to.
        supported (bool | None): Forced result of the continent check.
        retry (bool): Bind the retry-variant call names instead of the plain ones.

    Returns:
        ShippingCallNames: The names that were bound.
    """

    names = call_names(retry)
    if retry:
        bind_activity = registry.bind_activity_with_retry
        bind_sub_orchestrator = registry.bind_sub_orchestrator_with_retry
    else:
        bind_activity = registry.bind_activity
        bind_sub_orchestrator = registry.bind_sub_orchestrator

    is_supported = is_continent_supported(continent) if supported is None else supported
    bind_activity(
        names.is_continent_supported,
        lambda: is_supported,
        "supported" if is_supported else "unsupported",
        result_type=bool,
    )
    bind_activity(
        names.get_supplier_orchestrator,
        lambda: get_supplier_orchestrator_for_continent(continent),
        result_type=str,
    )
    for courier in COURIER_PRICES:
        bind_sub_orchestrator(
            names.courier_orchestrator(courier),
            lambda courier=courier: courier_price(courier),
            courier,
        )
    bind_activity(names.publish_calculated_price, annotation="publish")
    return names
