"""Call-count expectations used by verification queries.

Updates:
    v0.1.0 - 2026-10-19 - Exact, bounded and open-ended matchers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union


@dataclass(slots=True, frozen=True)
class Times:
    """Inclusive range of acceptable call counts; ``maximum=None`` is unbounded."""

    minimum: int
    maximum: int | None

    def __post_init__(self) -> None:
        if self.minimum < 0:
            raise ValueError("Call counts cannot be negative.")
        if self.maximum is not None and self.maximum < self.minimum:
            raise ValueError(
                f"Upper bound {self.maximum} is below lower bound {self.minimum}."
            )

    @classmethod
    def never(cls) -> "Times":
        return cls(0, 0)

    @classmethod
    def once(cls) -> "Times":
        return cls(1, 1)

    @classmethod
    def exactly(cls, count: int) -> "Times":
        return cls(count, count)

    @classmethod
    def at_least(cls, count: int) -> "Times":
        return cls(count, None)

    @classmethod
    def at_least_once(cls) -> "Times":
        return cls(1, None)

    @classmethod
    def at_most(cls, count: int) -> "Times":
        return cls(0, count)

    @classmethod
    def at_most_once(cls) -> "Times":
        return cls(0, 1)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> "Times":
        return cls(minimum, maximum)

    def matches(self, count: int) -> bool:
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    def describe(self) -> str:
        """Human-readable form used in verification failures."""

        if self.maximum is None:
            return f"at least {_count(self.minimum)}"
        if self.minimum == self.maximum:
            return "never" if self.minimum == 0 else f"exactly {_count(self.minimum)}"
        if self.minimum == 0:
            return f"at most {_count(self.maximum)}"
        return f"between {self.minimum} and {self.maximum} times"

    def __str__(self) -> str:
        return self.describe()


TimesLike = Union[Times, int, Callable[[], Times]]


def as_times(expected: TimesLike) -> Times:
    """Normalise an expectation given as ``Times``, an exact count, or a factory.

    ``Times.once`` (the bound method, uncalled) is accepted so expectations
    read the same whether or not the caller adds parentheses.

    Raises:
        TypeError: If ``expected`` is none of the accepted forms.
    """

    if isinstance(expected, Times):
        return expected
    if isinstance(expected, bool):
        raise TypeError("Use Times.once()/Times.never() instead of a bool.")
    if isinstance(expected, int):
        return Times.exactly(expected)
    if callable(expected):
        produced = expected()
        if isinstance(produced, Times):
            return produced
    raise TypeError(f"Unsupported call-count expectation: {expected!r}")


def _count(value: int) -> str:
    return "once" if value == 1 else f"{value} times"
