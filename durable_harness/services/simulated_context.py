"""Stand-in for a durable orchestration context.

Updates:
    v0.1.0 - 2026-10-19 - Activity and sub-orchestration calls resolved from bindings.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generator, Generic, Protocol, TypeVar

T = TypeVar("T")

DEFAULT_INSTANCE_ID = "harness-instance"


class CallShape(str, enum.Enum):
    ACTIVITY = "activity"
    SUB_ORCHESTRATOR = "sub_orchestrator"


@dataclass(slots=True, frozen=True)
class RetryOptions:
    """Retry policy an orchestration passes with retry-variant calls.

    The harness only carries it through to the invocation log; nothing is
    retried.
    """

    first_retry_interval_in_milliseconds: int
    max_number_of_attempts: int

    def __post_init__(self) -> None:
        if self.first_retry_interval_in_milliseconds <= 0:
            raise ValueError("first_retry_interval_in_milliseconds must be positive.")
        if self.max_number_of_attempts < 1:
            raise ValueError("max_number_of_attempts must be at least 1.")


@dataclass(slots=True, frozen=True)
class Invocation:
    """One call issued by the orchestration, bound or not."""

    shape: CallShape
    name: str
    retry: bool = False
    returns: type | None = None
    input: Any = None
    instance_id: str | None = None
    retry_options: Any = None

    @property
    def typed(self) -> bool:
        return self.returns is not None


class CallInterceptor(Protocol):
    """What a ``SimulatedContext`` delegates every call to."""

    def intercept(self, invocation: Invocation) -> Any:
        ...

    def resolve_input(self, input_type: type | None = None) -> Any:
        ...


class CallTask(Generic[T]):
    """An already-completed call result.

    Generator orchestrations ``yield`` it and receive ``result`` back from the
    driver; coroutine orchestrations ``await`` it, which completes without
    suspending.
    """

    __slots__ = ("name", "_result")

    def __init__(self, name: str, result: T) -> None:
        self.name = name
        self._result = result

    @property
    def result(self) -> T:
        return self._result

    @property
    def is_completed(self) -> bool:
        return True

    @property
    def is_faulted(self) -> bool:
        return False

    def __await__(self) -> Generator[Any, None, T]:
        yield from ()
        return self._result

    def __repr__(self) -> str:
        return f"CallTask(name={self.name!r}, result={self._result!r})"


class SimulatedContext:
    """Orchestration context whose calls resolve immediately from test bindings.

    Method names and argument order follow the durable-functions context so an
    orchestration written for the real engine runs unchanged. Pass
    ``returns=<type>`` when the orchestration consumes the result; omit it for
    fire-and-forget calls.
    """

    def __init__(
        self, interceptor: CallInterceptor, instance_id: str = DEFAULT_INSTANCE_ID
    ) -> None:
        self._interceptor = interceptor
        self.instance_id = instance_id
        self.is_replaying = False

    def get_input(self, input_type: type | None = None) -> Any:
        return self._interceptor.resolve_input(input_type)

    def call_activity(
        self, name: str, input_: Any = None, *, returns: type[T] | None = None
    ) -> CallTask[T]:
        return self._dispatch(
            Invocation(CallShape.ACTIVITY, name, returns=returns, input=input_)
        )

    def call_activity_with_retry(
        self,
        name: str,
        retry_options: Any,
        input_: Any = None,
        *,
        returns: type[T] | None = None,
    ) -> CallTask[T]:
        return self._dispatch(
            Invocation(
                CallShape.ACTIVITY,
                name,
                retry=True,
                returns=returns,
                input=input_,
                retry_options=retry_options,
            )
        )

    def call_sub_orchestrator(
        self,
        name: str,
        input_: Any = None,
        instance_id: str | None = None,
        *,
        returns: type[T] | None = None,
    ) -> CallTask[T]:
        return self._dispatch(
            Invocation(
                CallShape.SUB_ORCHESTRATOR,
                name,
                returns=returns,
                input=input_,
                instance_id=instance_id,
            )
        )

    def call_sub_orchestrator_with_retry(
        self,
        name: str,
        retry_options: Any,
        input_: Any = None,
        instance_id: str | None = None,
        *,
        returns: type[T] | None = None,
    ) -> CallTask[T]:
        return self._dispatch(
            Invocation(
                CallShape.SUB_ORCHESTRATOR,
                name,
                retry=True,
                returns=returns,
                input=input_,
                instance_id=instance_id,
                retry_options=retry_options,
            )
        )

    def task_all(self, tasks: list[CallTask[Any]]) -> CallTask[list[Any]]:
        """Join already-issued calls; results keep the order the calls were made."""

        return CallTask("task_all", [task.result for task in tasks])

    def _dispatch(self, invocation: Invocation) -> CallTask[Any]:
        return CallTask(invocation.name, self._interceptor.intercept(invocation))
