"""Run the shipping sample through the harness from the command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from durable_harness.cli.renderers import (
    render_call_counts,
    render_diagram,
    render_error,
    render_payloads,
    render_result,
)
from durable_harness.cli.utils import apply_log_override, load_settings
from durable_harness.core.errors import HarnessConfigurationError
from durable_harness.core.orchestrator import Orchestrator
from durable_harness.services.mock_registry import MockRegistry
from durable_harness.workflows.shipping_activities import COURIER_PRICES, SagaContext
from durable_harness.workflows.shipping_price import ShippingPriceOrchestration
from durable_harness.workflows.shipping_price_with_retry import (
    ShippingPriceWithRetryOrchestration,
)
from durable_harness.workflows.shipping_scenarios import ShippingCallNames, bind_shipping_calls

logger = logging.getLogger(__name__)


def _call_counts(
    registry: MockRegistry, names: ShippingCallNames, retry: bool
) -> list[tuple[str, str, int]]:
    activities = [
        names.is_continent_supported,
        names.get_supplier_orchestrator,
        names.publish_calculated_price,
    ]
    rows = [
        (name, "activity", registry.call_count(name, retry=retry)) for name in activities
    ]
    rows.extend(
        (
            names.courier_orchestrator(courier),
            "sub-orchestrator",
            registry.call_count(
                names.courier_orchestrator(courier), sub_orchestrator=True, retry=retry
            ),
        )
        for courier in COURIER_PRICES
    )
    return rows


def scenario(
    continent: str = typer.Argument(..., help="Continent the shipment goes to."),
    supported: Optional[bool] = typer.Option(
        None,
        "--supported/--unsupported",
        help="Force the continent check instead of using the sample activity.",
    ),
    retry: bool = typer.Option(
        False, "--retry", help="Run the orchestration that calls with retry options."
    ),
    dump_payloads: Optional[bool] = typer.Option(
        None, "--dump/--no-dump", help="Show a dump of every value returned to the orchestration."
    ),
    document: bool = typer.Option(
        False, "--document", help="Wrap the diagram in @startuml/@enduml."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config-path", help="Directory containing harness.yaml."
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation (e.g., DEBUG, INFO).",
    ),
) -> None:
    """Run the shipping price orchestration against canned bindings."""

    settings = load_settings(config_path)
    apply_log_override(log_level)

    payloads: list[str] = []
    registry = MockRegistry(
        orchestration_input=SagaContext(continent=continent),
        output=payloads.append,
        dump_payloads=settings.dump_payloads if dump_payloads is None else dump_payloads,
        indent_size=settings.indent_size,
    )
    names = bind_shipping_calls(registry, continent, supported=supported, retry=retry)

    orchestration = (
        ShippingPriceWithRetryOrchestration() if retry else ShippingPriceOrchestration()
    )
    orchestrator = Orchestrator()
    orchestrator.register(orchestration)

    try:
        result = orchestrator.execute(orchestration.name, registry.context)
    except HarnessConfigurationError as exc:
        render_error(str(exc))
        render_call_counts(_call_counts(registry, names, retry))
        raise typer.Exit(code=1) from exc

    render_payloads(payloads)
    render_result(result)
    render_call_counts(_call_counts(registry, names, retry))
    if document:
        render_diagram(registry.build_diagram_document())
    else:
        render_diagram(registry.build_diagram())
    logger.info(
        "scenario_completed",
        extra={"continent": continent, "retry": retry, "orchestration": orchestration.name},
    )


__all__ = ["scenario"]
