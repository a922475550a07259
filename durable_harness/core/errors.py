"""Exception hierarchy for the orchestration harness.

Updates:
    v0.1.0 - 2026-10-19 - Split configuration errors from verification failures.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base exception for every error raised by the harness."""


class HarnessConfigurationError(HarnessError):
    """Raised when a test has not configured the harness for a call it makes."""


class UnboundCallError(HarnessConfigurationError):
    """Raised when an orchestration invokes a call that has no binding."""

    def __init__(
        self,
        name: str,
        *,
        shape: str = "activity",
        retry: bool = False,
        hint: str | None = None,
    ) -> None:
        self.name = name
        self.shape = shape
        self.retry = retry
        suffix = "_with_retry" if retry else ""
        if hint is None:
            hint = f"Configure it with bind_{shape}{suffix}('{name}', ...)."
        variant = " with retry" if retry else ""
        super().__init__(f"No binding registered for {shape}{variant} '{name}'. {hint}")


class BindingKindMismatchError(HarnessConfigurationError):
    """Raised when a call expects a different result shape than its binding offers."""

    def __init__(self, name: str, *, expected: str, actual: str) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Call '{name}' expects {expected} but its binding provides {actual}."
        )


class VerificationError(HarnessError, AssertionError):
    """Raised when an expected call count does not hold after a run."""

    def __init__(
        self, name: str, *, expected: str, actual: int, call_kind: str = "call"
    ) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        times = "time" if actual == 1 else "times"
        super().__init__(
            f"Expected {call_kind} '{name}' to be called {expected}, "
            f"but it was called {actual} {times}."
        )


class OrchestrationDriverError(HarnessError):
    """Raised when an orchestration suspends on something the harness cannot resolve."""
