"""Rich renderers for harness CLI output."""

from __future__ import annotations

from typing import Any, Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from durable_harness.cli.io import console
from durable_harness.services.value_dumper import dump


def render_result(result: Any, *, title: str = "Orchestration Result") -> None:
    """Display the orchestration result as a structural dump."""

    console.print(Panel(Text(dump(result)), title=title))


def render_call_counts(counts: Iterable[tuple[str, str, int]]) -> None:
    """Display how often each bound call was invoked.

    Args:
        counts (Iterable[tuple[str, str, int]]): ``(name, kind, count)`` rows.
    """

    table = Table(title="Calls")
    table.add_column("Call", style="bold")
    table.add_column("Kind")
    table.add_column("Count", justify="right")
    for name, kind, count in counts:
        style = None if count else "dim"
        table.add_row(name, kind, str(count), style=style)
    console.print(table)


def render_diagram(lines: list[str] | str) -> None:
    """Display PlantUML text verbatim; annotations in brackets are not markup."""

    content = lines if isinstance(lines, str) else "\n".join(lines)
    console.print(Panel(Text(content), title="Call Diagram"))


def render_payloads(messages: list[str]) -> None:
    if not messages:
        return
    console.print(Panel(Text("\n".join(messages)), title="Payloads"))


def render_error(message: str) -> None:
    console.print(Panel(Text(message, style="red"), title="Configuration Error"))
