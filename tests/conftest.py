"""Pytest configuration for quant-env tests."""

from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import pytest

from quant_env.actions import OutputWriter
from quant_env.client.api import ApiError, VariablesApi
from quant_env.client.remote import RemoteEnvironment
from quant_env.config import Operation, RunConfig


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    """Keep the runner's environment out of unit tests."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)


@pytest.fixture
def api() -> MagicMock:
    """Return a VariablesApi double where every call succeeds.

    Returns
    -------
        MagicMock constrained to the VariablesApi interface

    """
    mock_api = MagicMock(spec=VariablesApi)
    mock_api.list_environment_variables.return_value = {}
    return mock_api


@pytest.fixture
def remote(api) -> RemoteEnvironment:
    return RemoteEnvironment(api, "acme", "web", "staging")


@pytest.fixture
def make_config() -> Callable[..., RunConfig]:
    """Return a factory for RunConfig with test connection settings."""

    def _make(**overrides: Any) -> RunConfig:
        settings: Dict[str, Any] = {
            "api_key": "test-token",
            "organization": "acme",
            "app_name": "web",
            "environment_name": "staging",
            "operation": Operation.LIST,
        }
        settings.update(overrides)
        return RunConfig(**settings)

    return _make


@pytest.fixture
def output_file(tmp_path, monkeypatch):
    """Point GITHUB_OUTPUT at a temporary file and return its path."""
    path = tmp_path / "github_output"
    path.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


@pytest.fixture
def writer(tmp_path) -> OutputWriter:
    return OutputWriter(output_path=str(tmp_path / "outputs"))


@pytest.fixture
def api_error() -> Callable[..., ApiError]:
    """Return a builder for ApiError as raised by the HTTP client."""

    def _build(status_code: int, message: str = "boom") -> ApiError:
        return ApiError(message, status_code)

    return _build


def _parse_outputs(path) -> Dict[str, str]:
    outputs: Dict[str, str] = {}
    lines = path.read_text().split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        if "<<" in line:
            name, delimiter = line.split("<<", 1)
            value_lines = []
            i += 1
            while lines[i] != delimiter:
                value_lines.append(lines[i])
                i += 1
            outputs[name] = "\n".join(value_lines)
        i += 1
    return outputs


@pytest.fixture
def read_outputs() -> Callable[..., Dict[str, str]]:
    """Return a parser for GITHUB_OUTPUT files written with heredoc delimiters."""
    return _parse_outputs
