"""Typed access to the harness configuration.

Updates:
    v0.1.0 - 2026-10-19 - Added dumper and registry sections.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from ..core.config_loader import ConfigLoader

SETTINGS_DOCUMENT = "harness"


@dataclass(slots=True, frozen=True)
class HarnessSettings:
    """Resolved harness settings with defaults for every key."""

    app_name: str = "durable-harness"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    indent_size: int = 2
    dump_payloads: bool = False

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class SettingsService:
    """Loads ``harness.yaml`` and exposes its sections."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Read the settings document.

        Args:
            config_path (Path | None): Optional override for the configuration directory.
        """

        self._loader = ConfigLoader(base_path=config_path)
        self._settings = self._loader.load(SETTINGS_DOCUMENT)

    def _section(self, name: str) -> dict[str, Any]:
        section = self._settings.get(name, {})
        return dict(section) if isinstance(section, dict) else {}

    @property
    def app_metadata(self) -> dict[str, Any]:
        """Return the ``app`` section."""
        return self._section("app")

    @property
    def logging_config(self) -> dict[str, Any]:
        """Return the ``logging`` section."""
        return self._section("logging")

    def settings(self) -> HarnessSettings:
        """Build the typed settings, falling back to defaults for missing keys.

        Returns:
            HarnessSettings: Frozen settings snapshot.

        Raises:
            ValueError: If ``dumper.indent_size`` is negative.
        """

        defaults = HarnessSettings()
        app = self.app_metadata
        dumper = self._section("dumper")
        registry = self._section("registry")

        indent_size = int(dumper.get("indent_size", defaults.indent_size))
        if indent_size < 0:
            raise ValueError("dumper.indent_size must not be negative.")

        return HarnessSettings(
            app_name=str(app.get("name", defaults.app_name)),
            app_version=str(app.get("version", defaults.app_version)),
            log_level=str(self.logging_config.get("level", defaults.log_level)).upper(),
            indent_size=indent_size,
            dump_payloads=bool(registry.get("dump_payloads", defaults.dump_payloads)),
        )
