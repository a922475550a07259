"""Call bindings, interception and verification for orchestration tests.

Updates:
    v0.1.0 - 2026-10-19 - Typed and fire-and-forget bindings for activities and
        sub-orchestrations, each with an independent retry variant.
"""

from __future__ import annotations

import enum
import logging
import types
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from ..core.errors import BindingKindMismatchError, UnboundCallError, VerificationError
from ..core.orchestrator import OrchestrationLike, run_orchestration
from .call_recorder import CallRecorder
from .diagram_renderer import DiagramRenderer
from .simulated_context import (
    DEFAULT_INSTANCE_ID,
    CallShape,
    Invocation,
    SimulatedContext,
)
from .times import TimesLike, as_times
from .value_dumper import DEFAULT_INDENT_SIZE, dump

if TYPE_CHECKING:
    from .settings_service import HarnessSettings

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]

_UNSET: Any = object()


class ResultKind(str, enum.Enum):
    TYPED = "typed"
    FIRE_AND_FORGET = "fire_and_forget"


@dataclass(slots=True, frozen=True)
class MockBinding:
    """What a call name resolves to while one test runs."""

    shape: CallShape
    name: str
    kind: ResultKind
    producer: Callable[[], Any] | None = None
    annotation: str = ""
    retry: bool = False
    result_type: type | None = None

    @property
    def key(self) -> tuple[CallShape, str, bool]:
        return (self.shape, self.name, self.retry)

    def describe(self) -> str:
        if self.kind is ResultKind.FIRE_AND_FORGET:
            return "no result (fire-and-forget)"
        if self.result_type is None:
            return "a typed result"
        return f"a result of type {_type_label(self.result_type)}"


class MockRegistry:
    """Owns the bindings, invocation log and call recorder of one test case.

    Orchestrations receive ``registry.context``; every call they make through
    it is looked up here, recorded, and answered synchronously.

    Example::

        registry = MockRegistry(orchestration_input=SagaContext(continent="Europe"))
        registry.bind_activity("IsContinentSupported", lambda: True)
        result = registry.run_orchestration(shipping_price_orchestrator)
        registry.verify("IsContinentSupported", Times.once())
    """

    def __init__(
        self,
        *,
        orchestration_input: Any = _UNSET,
        output: OutputSink | None = None,
        dump_payloads: bool = False,
        indent_size: int = DEFAULT_INDENT_SIZE,
        instance_id: str = DEFAULT_INSTANCE_ID,
    ) -> None:
        """Create an empty registry and the context bound to it.

        Args:
            orchestration_input (Any): Value ``context.get_input()`` returns.
            output (OutputSink | None): Receives payload dumps and diagram lines,
                for example ``print`` or a test-output writer.
            dump_payloads (bool): Write ``Calling <name>`` and a dump of each
                produced value to ``output``.
            indent_size (int): Indentation used by payload dumps.
            instance_id (str): Instance id the simulated context reports.
        """

        self._bindings: dict[tuple[CallShape, str, bool], MockBinding] = {}
        self._invocations: list[Invocation] = []
        self._recorder = CallRecorder()
        self._renderer = DiagramRenderer()
        self._output: OutputSink = output or (lambda _message: None)
        self._dump_payloads = dump_payloads
        self._indent_size = indent_size
        self._input = orchestration_input
        self.context = SimulatedContext(self, instance_id=instance_id)
        self.last_result: Any = None

    @classmethod
    def from_settings(
        cls,
        settings: "HarnessSettings",
        *,
        output: OutputSink | None = None,
        orchestration_input: Any = _UNSET,
    ) -> "MockRegistry":
        return cls(
            orchestration_input=orchestration_input,
            output=output,
            dump_payloads=settings.dump_payloads,
            indent_size=settings.indent_size,
        )

    # Configuration -----------------------------------------------------------

    def set_input(self, value: Any) -> None:
        self._input = value

    def bind_activity(
        self,
        name: str,
        producer: Callable[[], Any] | None = None,
        annotation: str = "",
        *,
        result_type: type | None = None,
    ) -> MockBinding:
        """Bind an activity called without retry options.

        Args:
            name (str): Activity name.
            producer (Callable[[], Any] | None): Called once per invocation to
                produce the result. Omit it for a fire-and-forget activity.
            annotation (str): Label for the activity's edge in the diagram.
            result_type (type | None): Declared result type; calls requesting an
                incompatible type fail instead of receiving the value.

        Returns:
            MockBinding: The installed binding, replacing any previous one.

        Raises:
            ValueError: If ``name`` is empty or a type is given without a producer.
            TypeError: If ``producer`` is not callable.
        """

        return self._bind(CallShape.ACTIVITY, name, producer, annotation, False, result_type)

    def bind_activity_with_retry(
        self,
        name: str,
        producer: Callable[[], Any] | None = None,
        annotation: str = "",
        *,
        result_type: type | None = None,
    ) -> MockBinding:
        """Bind an activity called with retry options; see ``bind_activity``."""

        return self._bind(CallShape.ACTIVITY, name, producer, annotation, True, result_type)

    def bind_sub_orchestrator(
        self,
        name: str,
        producer: Callable[[], Any] | None = None,
        annotation: str = "",
        *,
        result_type: type | None = None,
    ) -> MockBinding:
        """Bind a sub-orchestration; any instance id matches."""

        return self._bind(
            CallShape.SUB_ORCHESTRATOR, name, producer, annotation, False, result_type
        )

    def bind_sub_orchestrator_with_retry(
        self,
        name: str,
        producer: Callable[[], Any] | None = None,
        annotation: str = "",
        *,
        result_type: type | None = None,
    ) -> MockBinding:
        return self._bind(
            CallShape.SUB_ORCHESTRATOR, name, producer, annotation, True, result_type
        )

    def _bind(
        self,
        shape: CallShape,
        name: str,
        producer: Callable[[], Any] | None,
        annotation: str,
        retry: bool,
        result_type: type | None,
    ) -> MockBinding:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Call name must be a non-empty string.")
        if producer is not None and not callable(producer):
            raise TypeError(
                f"Producer for '{name}' must be callable; wrap constants as `lambda: value`."
            )
        if producer is None and result_type is not None:
            raise ValueError(
                f"Fire-and-forget binding '{name}' cannot declare a result type."
            )

        binding = MockBinding(
            shape=shape,
            name=name,
            kind=ResultKind.TYPED if producer is not None else ResultKind.FIRE_AND_FORGET,
            producer=producer,
            annotation=annotation or "",
            retry=retry,
            result_type=result_type,
        )
        replaced = self._bindings.get(binding.key)
        self._bindings[binding.key] = binding
        logger.debug(
            "binding_replaced" if replaced else "binding_registered",
            extra={
                "call": name,
                "shape": shape.value,
                "retry": retry,
                "kind": binding.kind.value,
            },
        )
        return binding

    def binding_for(
        self, name: str, *, sub_orchestrator: bool = False, retry: bool = False
    ) -> MockBinding | None:
        return self._bindings.get((_shape(sub_orchestrator), name, retry))

    # Interception ------------------------------------------------------------

    def intercept(self, invocation: Invocation) -> Any:
        """Answer one call issued through ``self.context``.

        The invocation is logged for verification before lookup, so unbound
        calls still count.

        Raises:
            UnboundCallError: If nothing is bound for the call's name, shape and
                retry variant.
            BindingKindMismatchError: If the call and binding disagree on
                whether, or which type of, a result is produced.
        """

        self._invocations.append(invocation)
        binding = self._bindings.get((invocation.shape, invocation.name, invocation.retry))
        if binding is None:
            logger.warning(
                "unbound_call",
                extra={
                    "call": invocation.name,
                    "shape": invocation.shape.value,
                    "retry": invocation.retry,
                },
            )
            raise UnboundCallError(
                invocation.name, shape=invocation.shape.value, retry=invocation.retry
            )

        _check_call_matches_binding(invocation, binding)
        value = binding.producer() if binding.producer is not None else None
        if binding.result_type is not None and not _is_instance(value, binding.result_type):
            raise BindingKindMismatchError(
                invocation.name,
                expected=f"a result of type {_type_label(binding.result_type)}",
                actual=f"a value of type {type(value).__name__}",
            )
        if invocation.typed and not _is_instance(value, invocation.returns):
            raise BindingKindMismatchError(
                invocation.name,
                expected=f"a result of type {_type_label(invocation.returns)}",
                actual=f"a value of type {type(value).__name__}",
            )

        if self._dump_payloads:
            self._output(f"Calling {invocation.name}")
            if binding.kind is ResultKind.TYPED:
                self._output(dump(value, self._indent_size))

        self._recorder.record(invocation.name, value, binding.annotation)
        logger.debug(
            "call_intercepted",
            extra={
                "call": invocation.name,
                "shape": invocation.shape.value,
                "retry": invocation.retry,
                "sequence": len(self._invocations),
            },
        )
        return value

    def resolve_input(self, input_type: type | None = None) -> Any:
        if self._input is _UNSET:
            raise UnboundCallError(
                "orchestration input",
                shape="input",
                hint="Configure it with set_input(...) or orchestration_input=.",
            )
        if input_type is not None and not _is_instance(self._input, input_type):
            raise BindingKindMismatchError(
                "get_input",
                expected=f"input of type {_type_label(input_type)}",
                actual=f"a value of type {type(self._input).__name__}",
            )
        return self._input

    # Execution ---------------------------------------------------------------

    def run_orchestration(self, orchestration: OrchestrationLike) -> Any:
        """Run ``orchestration`` against ``self.context`` and keep its result."""

        self.last_result = run_orchestration(orchestration, self.context)
        return self.last_result

    # Verification ------------------------------------------------------------

    @property
    def invocations(self) -> tuple[Invocation, ...]:
        return tuple(self._invocations)

    @property
    def recorder(self) -> CallRecorder:
        return self._recorder

    def call_count(
        self, name: str, *, sub_orchestrator: bool = False, retry: bool = False
    ) -> int:
        shape = _shape(sub_orchestrator)
        return sum(
            1
            for invocation in self._invocations
            if invocation.shape is shape
            and invocation.name == name
            and invocation.retry == retry
        )

    def verify(self, name: str, times: TimesLike) -> None:
        """Assert how often the plain activity ``name`` was called.

        Args:
            name (str): Activity name.
            times (TimesLike): ``Times`` matcher, ``Times.once``-style factory,
                or exact count.

        Raises:
            VerificationError: If the observed count does not satisfy ``times``.
        """

        self._verify(name, times, sub_orchestrator=False, retry=False)

    def verify_retry(self, name: str, times: TimesLike) -> None:
        """Assert how often the activity ``name`` was called with retry options."""

        self._verify(name, times, sub_orchestrator=False, retry=True)

    def verify_sub_orchestrator(self, name: str, times: TimesLike) -> None:
        self._verify(name, times, sub_orchestrator=True, retry=False)

    def verify_sub_orchestrator_retry(self, name: str, times: TimesLike) -> None:
        self._verify(name, times, sub_orchestrator=True, retry=True)

    def _verify(
        self, name: str, times: TimesLike, *, sub_orchestrator: bool, retry: bool
    ) -> None:
        expected = as_times(times)
        actual = self.call_count(name, sub_orchestrator=sub_orchestrator, retry=retry)
        if expected.matches(actual):
            return
        call_kind = _shape(sub_orchestrator).value.replace("_", "-")
        if retry:
            call_kind += " with retry"
        logger.info(
            "verification_failed",
            extra={"call": name, "expected": expected.describe(), "actual": actual},
        )
        raise VerificationError(
            name, expected=expected.describe(), actual=actual, call_kind=call_kind
        )

    # Diagram -----------------------------------------------------------------

    def build_diagram(self) -> list[str]:
        """Drain the recorded calls into PlantUML lines and write them to ``output``."""

        lines = self._renderer.render(self._recorder)
        for line in lines:
            self._output(line)
        logger.debug("diagram_rendered", extra={"transitions": len(lines)})
        return lines

    def build_diagram_document(self) -> str:
        document = self._renderer.render_document(self._recorder)
        self._output(document)
        return document


def _shape(sub_orchestrator: bool) -> CallShape:
    return CallShape.SUB_ORCHESTRATOR if sub_orchestrator else CallShape.ACTIVITY


def _check_call_matches_binding(invocation: Invocation, binding: MockBinding) -> None:
    if binding.kind is ResultKind.FIRE_AND_FORGET:
        if invocation.typed:
            raise BindingKindMismatchError(
                invocation.name,
                expected=f"a result of type {_type_label(invocation.returns)}",
                actual=binding.describe(),
            )
        return

    if not invocation.typed:
        raise BindingKindMismatchError(
            invocation.name, expected="no result (fire-and-forget)", actual=binding.describe()
        )
    if binding.result_type is None:
        return
    requested = _runtime_types(invocation.returns)
    declared = _runtime_types(binding.result_type)
    if object not in requested and not all(issubclass(arm, requested) for arm in declared):
        raise BindingKindMismatchError(
            invocation.name,
            expected=f"a result of type {_type_label(invocation.returns)}",
            actual=binding.describe(),
        )


def _runtime_types(annotation: Any) -> tuple[type, ...]:
    if annotation is Any:
        return (object,)
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return tuple(
            runtime for arm in typing.get_args(annotation) for runtime in _runtime_types(arm)
        )
    if isinstance(origin, type):
        return (origin,)
    return (annotation,)


def _is_instance(value: Any, annotation: Any) -> bool:
    return isinstance(value, _runtime_types(annotation))


def _type_label(annotation: Any) -> str:
    return getattr(annotation, "__qualname__", None) or repr(annotation)
