"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from durable_harness.services.settings_service import HarnessSettings

logger = logging.getLogger(__name__)


def _cli():
    return sys.modules["durable_harness.cli"]


def apply_log_override(log_level: Optional[str]) -> None:
    """Override the logging level for the current invocation."""

    if not log_level or not isinstance(log_level, str):
        return
    try:
        _cli().set_runtime_level(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    logger.info("Log level overridden to %s", log_level.upper())


def load_settings(config_path: Optional[Path] = None) -> HarnessSettings:
    """Load settings and configure logging, using defaults when no config exists."""

    cli_module = _cli()
    try:
        service = cli_module.SettingsService(config_path=config_path)
    except FileNotFoundError as exc:
        if config_path is not None:
            raise typer.BadParameter(str(exc)) from exc
        logger.debug("No configuration directory found; using default settings.")
        settings = HarnessSettings()
        cli_module.configure_logging({"level": settings.log_level})
        return settings

    cli_module.configure_logging(service.logging_config)
    return service.settings()


__all__ = ["apply_log_override", "load_settings"]
