"""Chainable wrapper around ``MockRegistry``.

Updates:
    v0.1.0 - 2026-10-19 - Delegates generated from the registry's own methods.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

from ..core.orchestrator import OrchestrationLike
from .mock_registry import MockRegistry


def _chained(method_name: str) -> Callable[..., "FluentMocker"]:
    target = getattr(MockRegistry, method_name)

    @functools.wraps(target)
    def delegate(self: "FluentMocker", *args: Any, **kwargs: Any) -> "FluentMocker":
        getattr(self.registry, method_name)(*args, **kwargs)
        return self

    return delegate


class FluentMocker:
    """Reads configure, run and verify as one expression.

    Every method forwards immediately to the wrapped registry and returns this
    same builder; the builder keeps no state of its own.

    Example::

        (
            FluentMocker(registry)
            .with_()
            .activity("IsContinentSupported", lambda: True)
            .and_()
            .sub_orchestrator("CourierBOrchestrator", lambda: Decimal(120))
            .run_orchestration(shipping_price_orchestrator)
            .check_that()
            .sub_orchestrator_called("CourierBOrchestrator", Times.once)
        )
    """

    __slots__ = ("registry",)

    def __init__(self, registry: MockRegistry) -> None:
        self.registry = registry

    def with_(self) -> "FluentMocker":
        return self

    def and_(self) -> "FluentMocker":
        return self

    def check_that(self) -> "FluentMocker":
        return self

    def input(self, value: Any) -> "FluentMocker":
        self.registry.set_input(value)
        return self

    activity = _chained("bind_activity")
    activity_with_retry = _chained("bind_activity_with_retry")
    sub_orchestrator = _chained("bind_sub_orchestrator")
    sub_orchestrator_with_retry = _chained("bind_sub_orchestrator_with_retry")

    was_called = _chained("verify")
    was_called_with_retry = _chained("verify_retry")
    sub_orchestrator_called = _chained("verify_sub_orchestrator")
    sub_orchestrator_called_with_retry = _chained("verify_sub_orchestrator_retry")

    build_diagram = _chained("build_diagram")

    def run(self, action: Callable[[], Any]) -> "FluentMocker":
        """Call ``action`` now and continue the chain."""

        action()
        return self

    def run_orchestration(self, orchestration: OrchestrationLike) -> "FluentMocker":
        self.registry.run_orchestration(orchestration)
        return self

    @property
    def result(self) -> Any:
        """Result of the last orchestration run through the registry."""
        return self.registry.last_result
