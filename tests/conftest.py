"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from perl_critic_sarif.models import Violation

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def violation_data() -> dict[str, Any]:
    """Return one violation as Perl::Critic would serialize it."""
    return {
        "filename": "lib/Foo.pm",
        "line_number": 10,
        "column_number": 4,
        "severity": 5,
        "source": "my $x = 1;",
        "policy": "Perl::Critic::Policy::TestingAndDebugging::RequireUseStrict",
        "description": "Code before strictures are enabled",
        "explanation": "See page 429 of PBP",
        "diagnostics": "Code before strictures are enabled at line 10, column 4.",
    }


@pytest.fixture
def make_violation(violation_data: dict[str, Any]) -> Callable[..., Violation]:
    """Return a factory building violations from ``violation_data`` plus overrides."""

    def _make(**overrides: Any) -> Violation:
        return Violation.model_validate({**violation_data, **overrides})

    return _make


@pytest.fixture
def report_data(violation_data: dict[str, Any]) -> dict[str, Any]:
    return {"perl_critic_version": "1.152", "violations": [violation_data]}
