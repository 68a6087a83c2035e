"""Shared fixtures: tool specs and settings isolation."""

import os
from typing import Any

import pytest

from toolrun.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop cached settings and any TOOLRUN_ env vars around each test."""
    for name in list(os.environ):
        if name.startswith("TOOLRUN_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def valid_tool_spec() -> dict[str, Any]:
    return {
        "name": "test_tool",
        "description": "A test tool",
        "input_schema": {
            "type": "object",
            "properties": {"param": {"type": "string", "description": "A parameter"}},
            "required": ["param"],
        },
    }


@pytest.fixture
def simple_tool_spec() -> dict[str, Any]:
    return {"name": "simple", "description": "Simple tool", "input_schema": {}}


@pytest.fixture
def echo_tool_spec() -> dict[str, Any]:
    return {"name": "echo", "description": "Echo", "input_schema": {}}
