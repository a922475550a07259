"""Ordered log of intercepted calls.

Updates:
    v0.1.0 - 2026-10-19 - FIFO recorder drained by the diagram renderer.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class CallRecord:
    """One intercepted call as it completed."""

    name: str
    payload: Any = None
    annotation: str = ""


class CallRecorder:
    """Append-only call log consumed in FIFO order.

    The owning ``MockRegistry`` is the only writer and ``DiagramRenderer`` the
    only reader; entries leave the recorder exactly once.
    """

    def __init__(self) -> None:
        self._records: deque[CallRecord] = deque()

    def __len__(self) -> int:
        return len(self._records)

    def record(self, name: str, payload: Any = None, annotation: str = "") -> CallRecord:
        """Append a call to the tail of the log.

        Args:
            name (str): Activity or sub-orchestration name.
            payload (Any): Value returned to the orchestration, ``None`` for
                fire-and-forget calls.
            annotation (str): Free text shown on the diagram edge.

        Returns:
            CallRecord: The stored record.
        """

        entry = CallRecord(name=name, payload=payload, annotation=annotation or "")
        self._records.append(entry)
        return entry

    def drain_all(self) -> list[CallRecord]:
        """Remove and return every pending record, oldest first."""

        drained = list(self._records)
        self._records.clear()
        return drained
