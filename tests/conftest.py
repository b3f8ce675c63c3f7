"""Shared fixtures for the test suite."""

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, cast
from unittest.mock import patch

import pytest

from steamcmd_script.config import LoggingConfig, get_settings
from steamcmd_script.logger import setup_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"

BASE_ENV = {
    "STEAM_API_KEY": "test_api_key_123",
    "STEAM_PROFILE_ID": "76561197960287930",
}


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Send structlog output to stderr so stdout only carries the script."""
    setup_logging(LoggingConfig(level="DEBUG", format="console", include_timestamp=False))


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Reload settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def set_env() -> Iterator[Any]:
    """
    Replace the environment for one test.

    Returns a function taking extra variables on top of the required ones.
    """
    patchers: list[Any] = []

    def _apply(extra: dict[str, str] | None = None, *, base: bool = True) -> None:
        env = {**BASE_ENV} if base else {}
        env.update(extra or {})
        patcher = patch.dict(os.environ, env, clear=True)
        patcher.start()
        patchers.append(patcher)
        get_settings.cache_clear()

    yield _apply

    for patcher in reversed(patchers):
        patcher.stop()


@pytest.fixture
def mock_env(set_env: Any) -> None:
    """Only the required variables."""
    set_env()


@pytest.fixture
def owned_games_response() -> dict[str, Any]:
    """Load owned games API response fixture."""
    return load_fixture("owned_games_response.json")


@pytest.fixture
def family_library_response() -> dict[str, Any]:
    """Load family shared library API response fixture."""
    return load_fixture("family_library_response.json")
