"""Durable harness CLI package."""

from __future__ import annotations

import logging

import typer

from durable_harness.cli.commands.scenario import scenario
from durable_harness.cli.commands.settings import settings_show
from durable_harness.cli.io import console
from durable_harness.cli.utils import apply_log_override, load_settings
from durable_harness.core.logging_setup import configure_logging, set_runtime_level
from durable_harness.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Deterministic orchestration test harness")

app.command()(scenario)
app.command("settings")(settings_show)


def main() -> None:
    """CLI entry point."""

    app()


__all__: list[str] = [
    "app",
    "main",
    "console",
    "logger",
    "scenario",
    "settings_show",
    "apply_log_override",
    "load_settings",
    "configure_logging",
    "set_runtime_level",
    "SettingsService",
]
