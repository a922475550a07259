from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from durable_harness.services.mock_registry import MockRegistry  # noqa: E402
from durable_harness.workflows.shipping_activities import SagaContext  # noqa: E402


@pytest.fixture()
def output() -> list[str]:
    return []


@pytest.fixture()
def registry(output: list[str]) -> MockRegistry:
    return MockRegistry(output=output.append)


@pytest.fixture()
def europe() -> SagaContext:
    return SagaContext(city="Paris", country="France", continent="Europe")
