"""Driving orchestration functions against a simulated context.

Updates:
    v0.1.0 - 2026-10-19 - Generator, coroutine and plain orchestrations with duration logging.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable, Coroutine, Generator, Protocol, Union

from ..services.simulated_context import CallTask
from .errors import OrchestrationDriverError


class Orchestration(Protocol):
    """An orchestration exposing a name and a ``run`` entry point."""

    name: str

    def run(self, context: Any) -> Any:
        """Execute against ``context``; may be a generator or coroutine function.

        Args:
            context (Any): Orchestration context supplied by the harness.

        Returns:
            Any: The orchestration result, or a generator/coroutine producing it.
        """

        ...


OrchestrationLike = Union[Orchestration, Callable[[Any], Any]]


def run_orchestration(orchestration: OrchestrationLike, context: Any) -> Any:
    """Run ``orchestration`` to completion and return its result.

    Generator orchestrations yield ``CallTask`` objects and receive each task's
    result back. Coroutine orchestrations await them. Both complete without an
    event loop because every harness call is already resolved.

    Args:
        orchestration (OrchestrationLike): Object with ``run(context)`` or a
            callable taking the context.
        context (Any): Usually a ``SimulatedContext``.

    Returns:
        Any: Value returned by the orchestration.

    Raises:
        TypeError: If ``orchestration`` is not runnable.
        OrchestrationDriverError: If it yields or awaits something other than
            a harness call.
    """

    entry = getattr(orchestration, "run", orchestration)
    if not callable(entry):
        raise TypeError(f"{orchestration!r} is not a runnable orchestration.")

    outcome = entry(context)
    if inspect.isgenerator(outcome):
        return _drive_generator(outcome)
    if inspect.iscoroutine(outcome):
        return _drive_coroutine(outcome)
    return outcome


def _drive_generator(generator: Generator[Any, Any, Any]) -> Any:
    try:
        pending = next(generator)
        while True:
            if not isinstance(pending, CallTask):
                generator.close()
                raise OrchestrationDriverError(
                    f"Orchestration yielded {pending!r}; only context calls can be yielded."
                )
            pending = generator.send(pending.result)
    except StopIteration as stop:
        return stop.value


def _drive_coroutine(coroutine: Coroutine[Any, Any, Any]) -> Any:
    try:
        awaited = coroutine.send(None)
    except StopIteration as stop:
        return stop.value
    coroutine.close()
    raise OrchestrationDriverError(
        f"Orchestration awaited {awaited!r}, which the harness cannot resolve."
    )


def orchestration_name(orchestration: OrchestrationLike) -> str:
    name = getattr(orchestration, "name", None) or getattr(orchestration, "__name__", None)
    if not name:
        raise ValueError(f"Cannot determine a name for {orchestration!r}.")
    return str(name)


@dataclass(slots=True)
class Orchestrator:
    orchestrations: dict[str, OrchestrationLike] = field(default_factory=dict)

    _logger = logging.getLogger(__name__)

    def execute(self, orchestration_name: str, context: Any) -> Any:
        """Run a registered orchestration against ``context``.

        Args:
            orchestration_name (str): Name the orchestration was registered under.
            context (Any): Simulated context handed to the orchestration.

        Returns:
            Any: Result produced by the orchestration.

        Raises:
            KeyError: If the name is unknown.
        """

        orchestration = self.orchestrations.get(orchestration_name)
        if orchestration is None:
            raise KeyError(f"Orchestration '{orchestration_name}' is not registered.")
        started = perf_counter()
        try:
            result = run_orchestration(orchestration, context)
        except Exception as exc:
            self._logger.error(
                "orchestration_failed",
                extra={
                    "orchestration": orchestration_name,
                    "duration_ms": round((perf_counter() - started) * 1000, 2),
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise

        self._logger.info(
            "orchestration_completed",
            extra={
                "orchestration": orchestration_name,
                "duration_ms": round((perf_counter() - started) * 1000, 2),
            },
        )
        return result

    def register(self, orchestration: OrchestrationLike) -> None:
        """Make ``orchestration`` available under its ``name`` (or ``__name__``)."""

        self.orchestrations[orchestration_name(orchestration)] = orchestration
