from __future__ import annotations

import pytest

from durable_harness.core.errors import (
    BindingKindMismatchError,
    UnboundCallError,
    VerificationError,
)
from durable_harness.services.mock_registry import MockRegistry, ResultKind
from durable_harness.services.settings_service import HarnessSettings
from durable_harness.services.simulated_context import CallShape, RetryOptions
from durable_harness.services.times import Times

RETRY = RetryOptions(first_retry_interval_in_milliseconds=100, max_number_of_attempts=2)


@pytest.mark.parametrize("name", ["", "   "])
def test_bind_rejects_empty_names(registry: MockRegistry, name: str) -> None:
    with pytest.raises(ValueError):
        registry.bind_activity(name, lambda: 1)


def test_bind_rejects_non_callable_producer(registry: MockRegistry) -> None:
    with pytest.raises(TypeError):
        registry.bind_activity("Value", 42)  # type: ignore[arg-type]


def test_fire_and_forget_cannot_declare_result_type(registry: MockRegistry) -> None:
    with pytest.raises(ValueError):
        registry.bind_activity("Publish", result_type=str)


def test_bind_does_not_record_anything(registry: MockRegistry) -> None:
    binding = registry.bind_activity("Quote", lambda: 10, "price")

    assert binding.kind is ResultKind.TYPED
    assert binding.shape is CallShape.ACTIVITY
    assert len(registry.recorder) == 0
    assert registry.invocations == ()


def test_typed_activity_returns_and_records_produced_value(registry: MockRegistry) -> None:
    registry.bind_activity("Quote", lambda: 10, "price")

    task = registry.context.call_activity("Quote", {"sku": "A"}, returns=int)

    assert task.result == 10
    assert task.is_completed and not task.is_faulted
    [record] = registry.recorder.drain_all()
    assert (record.name, record.payload, record.annotation) == ("Quote", 10, "price")


def test_producer_runs_once_per_invocation(registry: MockRegistry) -> None:
    produced: list[int] = []

    def producer() -> int:
        produced.append(len(produced) + 1)
        return produced[-1]

    registry.bind_activity("Counter", producer)
    first = registry.context.call_activity("Counter", returns=int).result
    second = registry.context.call_activity("Counter", returns=int).result

    assert (first, second) == (1, 2)
    assert [record.payload for record in registry.recorder.drain_all()] == [1, 2]


def test_rebinding_replaces_previous_binding(registry: MockRegistry) -> None:
    registry.bind_activity("Quote", lambda: 1)
    registry.bind_activity("Quote", lambda: 2)

    assert registry.context.call_activity("Quote", returns=int).result == 2


def test_fire_and_forget_records_none(registry: MockRegistry) -> None:
    registry.bind_activity("Publish", annotation="publish")

    assert registry.context.call_activity("Publish", ("payload",)).result is None
    [record] = registry.recorder.drain_all()
    assert record.payload is None
    assert record.annotation == "publish"


def test_drain_follows_invocation_order(registry: MockRegistry) -> None:
    for name, value in [("A", 1), ("B", 2), ("C", 3)]:
        registry.bind_activity(name, lambda value=value: value)

    for name in ["C", "A", "B"]:
        registry.context.call_activity(name, returns=int)

    drained = registry.recorder.drain_all()
    assert [(record.name, record.payload) for record in drained] == [
        ("C", 3),
        ("A", 1),
        ("B", 2),
    ]


def test_unbound_call_is_a_configuration_error(registry: MockRegistry) -> None:
    with pytest.raises(UnboundCallError) as excinfo:
        registry.context.call_activity("Missing", returns=bool)

    assert excinfo.value.name == "Missing"
    assert "Missing" in str(excinfo.value)
    assert "bind_activity" in str(excinfo.value)
    assert len(registry.recorder) == 0
    registry.verify("Missing", Times.once())


def test_typed_call_on_fire_and_forget_binding_is_rejected(registry: MockRegistry) -> None:
    registry.bind_activity("Publish")

    with pytest.raises(BindingKindMismatchError) as excinfo:
        registry.context.call_activity("Publish", returns=bool)

    assert "fire-and-forget" in str(excinfo.value)


def test_untyped_call_on_typed_binding_is_rejected(registry: MockRegistry) -> None:
    registry.bind_activity("Quote", lambda: 1)

    with pytest.raises(BindingKindMismatchError):
        registry.context.call_activity("Quote")


def test_declared_result_type_must_match_request(registry: MockRegistry) -> None:
    registry.bind_activity("Name", lambda: "Courier", result_type=str)

    with pytest.raises(BindingKindMismatchError):
        registry.context.call_activity("Name", returns=int)
    assert registry.context.call_activity("Name", returns=str).result == "Courier"
    assert registry.context.call_activity("Name", returns=object).result == "Courier"


def test_produced_value_must_match_declared_type(registry: MockRegistry) -> None:
    registry.bind_activity("Name", lambda: 7, result_type=str)

    with pytest.raises(BindingKindMismatchError):
        registry.context.call_activity("Name", returns=str)


def test_retry_and_plain_bindings_are_independent(registry: MockRegistry) -> None:
    registry.bind_activity_with_retry("X", lambda: 1)

    assert registry.context.call_activity_with_retry("X", RETRY, returns=int).result == 1
    with pytest.raises(UnboundCallError) as excinfo:
        registry.context.call_activity("X", returns=int)

    assert excinfo.value.retry is False
    registry.verify_retry("X", Times.once())
    registry.verify("X", Times.once())
    assert registry.call_count("X", retry=True) == 1
    assert registry.call_count("X") == 1


def test_plain_binding_does_not_satisfy_retry_call(registry: MockRegistry) -> None:
    registry.bind_activity("X", lambda: 1)

    with pytest.raises(UnboundCallError) as excinfo:
        registry.context.call_activity_with_retry("X", RETRY, returns=int)

    assert excinfo.value.retry is True
    assert "bind_activity_with_retry" in str(excinfo.value)
    registry.verify("X", Times.never())


def test_sub_orchestrator_instance_id_is_a_wildcard(registry: MockRegistry) -> None:
    registry.bind_sub_orchestrator("Courier", lambda: 100)

    first = registry.context.call_sub_orchestrator("Courier", None, "id-1", returns=int)
    second = registry.context.call_sub_orchestrator("Courier", None, "id-2", returns=int)

    assert (first.result, second.result) == (100, 100)
    registry.verify_sub_orchestrator("Courier", 2)
    assert [inv.instance_id for inv in registry.invocations] == ["id-1", "id-2"]


def test_activity_and_sub_orchestrator_namespaces_differ(registry: MockRegistry) -> None:
    registry.bind_activity("Shared", lambda: 1)

    with pytest.raises(UnboundCallError) as excinfo:
        registry.context.call_sub_orchestrator("Shared", returns=int)

    assert excinfo.value.shape == "sub_orchestrator"
    registry.verify("Shared", Times.never())
    registry.verify_sub_orchestrator("Shared", Times.once())


def test_sub_orchestrator_with_retry_binding(registry: MockRegistry) -> None:
    registry.bind_sub_orchestrator_with_retry("Courier", lambda: 5)

    task = registry.context.call_sub_orchestrator_with_retry("Courier", RETRY, returns=int)

    assert task.result == 5
    registry.verify_sub_orchestrator_retry("Courier", Times.once)
    registry.verify_sub_orchestrator("Courier", Times.never)
    assert registry.invocations[0].retry_options == RETRY


def test_verification_failure_is_an_assertion_error(registry: MockRegistry) -> None:
    registry.bind_activity("Quote", lambda: 1)
    registry.context.call_activity("Quote", returns=int)

    with pytest.raises(AssertionError) as excinfo:
        registry.verify("Quote", Times.never())

    error = excinfo.value
    assert isinstance(error, VerificationError)
    assert (error.name, error.expected, error.actual) == ("Quote", "never", 1)
    assert str(error) == (
        "Expected activity 'Quote' to be called never, but it was called 1 time."
    )


def test_verification_message_names_the_call_variant(registry: MockRegistry) -> None:
    with pytest.raises(VerificationError) as excinfo:
        registry.verify_sub_orchestrator_retry("Courier", Times.once())

    assert "sub-orchestrator with retry 'Courier'" in str(excinfo.value)
    assert "exactly once" in str(excinfo.value)


def test_input_must_be_configured(registry: MockRegistry) -> None:
    with pytest.raises(UnboundCallError):
        registry.context.get_input()

    registry.set_input({"continent": "Europe"})

    assert registry.context.get_input() == {"continent": "Europe"}
    assert registry.context.get_input(dict) == {"continent": "Europe"}
    with pytest.raises(BindingKindMismatchError):
        registry.context.get_input(list)


def test_dump_payloads_writes_to_output(output: list[str]) -> None:
    registry = MockRegistry(output=output.append, dump_payloads=True)
    registry.bind_activity("Quote", lambda: "fast")
    registry.bind_activity("Publish")

    registry.context.call_activity("Quote", returns=str)
    registry.context.call_activity("Publish")

    assert output == ["Calling Quote", '"fast"', "Calling Publish"]


def test_build_diagram_writes_lines_and_drains(
    registry: MockRegistry, output: list[str]
) -> None:
    registry.bind_activity("Check", lambda: True, "check")
    registry.bind_activity("Publish")
    registry.context.call_activity("Check", returns=bool)
    registry.context.call_activity("Publish")

    lines = registry.build_diagram()

    assert lines == ['(*) --> [check] "Check"', ' -->  "Publish"', "--> (*)"]
    assert output == lines
    assert registry.build_diagram() == ["(*) --> (*)"]


def test_build_diagram_document(registry: MockRegistry, output: list[str]) -> None:
    registry.bind_activity("Check", lambda: True)
    registry.context.call_activity("Check", returns=bool)

    document = registry.build_diagram_document()

    assert document.startswith("@startuml\n")
    assert output == [document]


def test_from_settings_applies_dump_configuration(output: list[str]) -> None:
    settings = HarnessSettings(indent_size=4, dump_payloads=True)
    registry = MockRegistry.from_settings(
        settings, output=output.append, orchestration_input="input"
    )
    registry.bind_activity("Pair", lambda: {"a": 1})

    registry.context.call_activity("Pair", returns=dict)

    assert output == ["Calling Pair", "{dict}\n    a: 1"]
    assert registry.context.get_input() == "input"


def test_binding_for_returns_installed_binding(registry: MockRegistry) -> None:
    registry.bind_sub_orchestrator("Courier")

    binding = registry.binding_for("Courier", sub_orchestrator=True)

    assert binding is not None
    assert binding.kind is ResultKind.FIRE_AND_FORGET
    assert registry.binding_for("Courier") is None


def test_dumping_does_not_consume_iterator_results(output: list[str]) -> None:
    registry = MockRegistry(output=output.append, dump_payloads=True)
    registry.bind_activity("Items", lambda: iter([1, 2, 3]))

    items = registry.context.call_activity("Items", returns=object).result

    assert list(items) == [1, 2, 3]
    assert output == ["Calling Items", "{list_iterator}"]


def test_union_result_types_accept_any_arm(registry: MockRegistry) -> None:
    registry.bind_activity("Maybe", lambda: 1, result_type=int | None)
    registry.bind_activity("Missing", lambda: None, result_type=int | None)

    assert registry.context.call_activity("Maybe", returns=object).result == 1
    assert registry.context.call_activity("Maybe", returns=int | None).result == 1
    assert registry.context.call_activity("Missing", returns=int | None).result is None
    with pytest.raises(BindingKindMismatchError):
        registry.context.call_activity("Maybe", returns=int)


def test_union_declared_type_rejects_values_outside_it(registry: MockRegistry) -> None:
    registry.bind_activity("Maybe", lambda: "one", result_type=int | None)

    with pytest.raises(BindingKindMismatchError):
        registry.context.call_activity("Maybe", returns=object)


def test_produced_value_must_match_requested_type(registry: MockRegistry) -> None:
    registry.bind_activity("Count", lambda: "not-an-int")

    with pytest.raises(BindingKindMismatchError) as excinfo:
        registry.context.call_activity("Count", returns=int)

    assert "a value of type str" in str(excinfo.value)
    assert len(registry.recorder) == 0
    assert registry.context.call_activity("Count", returns=str).result == "not-an-int"
