"""Deterministic test harness for durable orchestration functions."""

from __future__ import annotations

from durable_harness.core.errors import (
    BindingKindMismatchError,
    HarnessConfigurationError,
    HarnessError,
    OrchestrationDriverError,
    UnboundCallError,
    VerificationError,
)
from durable_harness.core.orchestrator import Orchestrator, run_orchestration
from durable_harness.services.call_recorder import CallRecord, CallRecorder
from durable_harness.services.diagram_renderer import DiagramRenderer
from durable_harness.services.fluent_mocker import FluentMocker
from durable_harness.services.mock_registry import MockBinding, MockRegistry, ResultKind
from durable_harness.services.simulated_context import (
    CallTask,
    RetryOptions,
    SimulatedContext,
)
from durable_harness.services.times import Times
from durable_harness.services.value_dumper import dump

__version__ = "0.1.0"

__all__ = [
    "BindingKindMismatchError",
    "CallRecord",
    "CallRecorder",
    "CallTask",
    "DiagramRenderer",
    "FluentMocker",
    "HarnessConfigurationError",
    "HarnessError",
    "MockBinding",
    "MockRegistry",
    "OrchestrationDriverError",
    "Orchestrator",
    "ResultKind",
    "RetryOptions",
    "SimulatedContext",
    "Times",
    "UnboundCallError",
    "VerificationError",
    "dump",
    "run_orchestration",
]
