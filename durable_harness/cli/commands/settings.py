"""Settings inspection for the harness CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from durable_harness.cli.io import console
from durable_harness.cli.utils import load_settings


def settings_show(
    config_path: Optional[Path] = typer.Option(
        None, "--config-path", help="Directory containing harness.yaml."
    ),
) -> None:
    """Display the resolved harness settings."""

    console.print_json(data=load_settings(config_path).as_dict())
