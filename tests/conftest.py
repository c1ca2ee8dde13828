"""Shared test fixtures for gitvcs tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from rich.console import Console

from gitvcs.cli import CLIContext
from gitvcs.client import memory_registry

_ENV_VARS = (
    "GITVCS_DEBUG",
    "GITVCS_LOG_LEVEL",
    "GITVCS_AUTHOR_NAME",
    "GITVCS_AUTHOR_EMAIL",
)


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    memory_registry.clear()
    CLIContext.reset()
    yield
    memory_registry.clear()
    CLIContext.reset()


@pytest.fixture
def author_env(monkeypatch: pytest.MonkeyPatch) -> tuple[str, str]:
    """Pin the commit identity used when no author option is given."""
    monkeypatch.setenv("GITVCS_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GITVCS_AUTHOR_EMAIL", "test@example.com")
    return "Test User", "test@example.com"


@pytest.fixture
def repo_path(tmp_path: Path) -> Path:
    return tmp_path / "repo"


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
