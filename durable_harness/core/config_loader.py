"""YAML configuration loading.

Updates:
    v0.1.0 - 2026-10-19 - Harness settings read from DURABLE_HARNESS_CONFIG_PATH.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml

CONFIG_PATH_ENV = "DURABLE_HARNESS_CONFIG_PATH"
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class ConfigLoader:
    """Reads ``<name>.yaml`` documents from one configuration directory."""

    def __init__(self, base_path: Path | None = None) -> None:
        """Resolve the configuration directory.

        Args:
            base_path (Path | None): Explicit directory; otherwise the
                environment variable, then ``config/`` under the project root.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """

        env_path = os.environ.get(CONFIG_PATH_ENV)
        if base_path is not None:
            resolved = Path(base_path)
        elif env_path:
            resolved = Path(env_path)
        else:
            resolved = PROJECT_ROOT / "config"
        self._base_path = resolved.resolve()
        if not self._base_path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {self._base_path}")
        self._cache: dict[str, Dict[str, Any]] = {}

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, name: str) -> Path:
        candidate = self._base_path / name
        if candidate.suffix not in {".yaml", ".yml"}:
            candidate = candidate.with_suffix(".yaml")
        if not candidate.exists():
            raise FileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    def load(self, name: str) -> Dict[str, Any]:
        """Load a YAML document, caching it for the loader's lifetime.

        Args:
            name (str): Document name with or without the ``.yaml`` suffix.

        Returns:
            dict[str, Any]: Parsed mapping, empty for an empty file.

        Raises:
            FileNotFoundError: If the document does not exist.
            ValueError: If the document is not a mapping.
        """

        if name not in self._cache:
            path = self._resolve(name)
            with path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file {path} must contain a mapping.")
            self._cache[name] = data
        return self._cache[name]


def load_config(name: str, base_path: Path | None = None) -> Dict[str, Any]:
    """Load one configuration document without keeping a loader around."""

    return ConfigLoader(base_path=base_path).load(name)
