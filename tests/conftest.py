"""Shared fixtures for lightform tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

import lightform.settings as settings_module
from lightform import FormSettings

TAKEN_NAMES = ("AAA", "BBB", "CCC", "DDD", "EEE")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run every test in an empty directory with no cached settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, "_settings", None)
    yield


@pytest.fixture
def settings() -> FormSettings:
    return FormSettings()


@pytest.fixture
def max_length_rule() -> Callable[[str], tuple[bool, str]]:
    def rule(value: str) -> tuple[bool, str]:
        return len(value) < 5, "maxLength error"

    return rule


@pytest.fixture
def name_available_rule() -> Callable[[str], Any]:
    """Async rule backed by a fake lookup service."""

    async def check_is_available(value: str) -> bool:
        await asyncio.sleep(0.01)
        return value not in TAKEN_NAMES

    async def rule(value: str) -> tuple[bool, str]:
        return await check_is_available(value), "already exists"

    return rule


@pytest.fixture
def settings_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a .lightform.yaml in the working directory."""
    config_file = tmp_path / ".lightform.yaml"
    config_file.write_text(
        """
form:
  required_message: This field is required.
  invalid_message: Please check this value.
  log_json: true
""",
        encoding="utf-8",
    )
    yield config_file
