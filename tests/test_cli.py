from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from rich.panel import Panel
from typer.testing import CliRunner

import durable_harness.cli as cli


@pytest.fixture()
def printed(monkeypatch: pytest.MonkeyPatch) -> list[Any]:
    captured: list[Any] = []
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.console, "print", lambda *args, **kwargs: captured.extend(args))
    monkeypatch.setattr(
        cli.console, "print_json", lambda *args, **kwargs: captured.append(kwargs["data"])
    )
    return captured


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _panel_text(printed: list[Any], title: str) -> str:
    panels = [item for item in printed if isinstance(item, Panel) and item.title == title]
    assert panels, f"no panel titled {title!r}"
    return panels[-1].renderable.plain


def test_scenario_prices_europe(runner: CliRunner, printed: list[Any]) -> None:
    result = runner.invoke(cli.app, ["scenario", "Europe"])

    assert result.exit_code == 0, result.output
    assert _panel_text(printed, "Call Diagram").splitlines() == [
        '(*) --> [supported] "IsContinentSupported"',
        ' -->  "GetSupplierOrchestratorForContinent"',
        ' --> [CourierB] "CourierBOrchestrator"',
        ' --> [publish] "PublishCalculatedPriceActivity"',
        "--> (*)",
    ]
    summary = _panel_text(printed, "Orchestration Result")
    assert "shippable: True" in summary
    assert "price: 120" in summary


def test_scenario_unsupported_continent(runner: CliRunner, printed: list[Any]) -> None:
    result = runner.invoke(cli.app, ["scenario", "Antarctica"])

    assert result.exit_code == 0, result.output
    assert "shippable: False" in _panel_text(printed, "Orchestration Result")
    assert _panel_text(printed, "Call Diagram").splitlines() == [
        '(*) --> [unsupported] "IsContinentSupported"',
        "--> (*)",
    ]


def test_scenario_reports_unbound_calls(runner: CliRunner, printed: list[Any]) -> None:
    result = runner.invoke(cli.app, ["scenario", "Asia", "--supported"])

    assert result.exit_code == 1
    assert "sub_orchestrator 'Orchestrator'" in _panel_text(printed, "Configuration Error")
    assert not any(
        isinstance(item, Panel) and item.title == "Orchestration Result" for item in printed
    )


def test_scenario_with_retry_and_document(runner: CliRunner, printed: list[Any]) -> None:
    result = runner.invoke(cli.app, ["scenario", "North America", "--retry", "--document"])

    assert result.exit_code == 0, result.output
    diagram = _panel_text(printed, "Call Diagram").splitlines()
    assert diagram[0] == "@startuml"
    assert diagram[-1] == "@enduml"
    assert ' --> [CourierA] "CourierAOrchestratorWithRetry"' in diagram


def test_scenario_dumps_payloads(runner: CliRunner, printed: list[Any]) -> None:
    result = runner.invoke(cli.app, ["scenario", "Europe", "--dump"])

    assert result.exit_code == 0, result.output
    payloads = _panel_text(printed, "Payloads").splitlines()
    assert payloads[:2] == ["Calling IsContinentSupported", "True"]
    assert "Calling PublishCalculatedPriceActivity" in payloads


def test_scenario_rejects_invalid_log_level(runner: CliRunner, printed: list[Any]) -> None:
    result = runner.invoke(cli.app, ["scenario", "Europe", "--log-level", "loud"])

    assert result.exit_code == 2


def test_settings_show_uses_config_path(
    runner: CliRunner, printed: list[Any], tmp_path: Path
) -> None:
    (tmp_path / "harness.yaml").write_text(
        "app: {name: cli-test}\ndumper: {indent_size: 3}\n", encoding="utf-8"
    )

    result = runner.invoke(cli.app, ["settings", "--config-path", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert printed[-1]["app_name"] == "cli-test"
    assert printed[-1]["indent_size"] == 3


def test_settings_show_rejects_missing_directory(
    runner: CliRunner, printed: list[Any], tmp_path: Path
) -> None:
    result = runner.invoke(cli.app, ["settings", "--config-path", str(tmp_path / "absent")])

    assert result.exit_code == 2
