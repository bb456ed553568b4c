"""Shared fixtures for Signal MCP server tests."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from signal_mcp.config import Settings
from signal_mcp.signal_cli import ChatEntry, SignalCli

ACCOUNT = "+15550000000"
SIGNAL_CLI_PATH = Path("/opt/signal-cli/bin/signal-cli")


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process."""

    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode

    async def communicate(self):
        return self.stdout, self.stderr


def json_process(records) -> FakeProcess:
    return FakeProcess(stdout=json.dumps(records).encode("utf-8"))


@pytest.fixture
def settings():
    return Settings(account=ACCOUNT, signal_cli_path=SIGNAL_CLI_PATH, storage=Path("./var"))


@pytest.fixture
def signal_cli(settings):
    return SignalCli.from_settings(settings)


@pytest.fixture
def fake_exec():
    """
    Patch asyncio.create_subprocess_exec.

    Tests set `fake_exec.side_effect` to a list of FakeProcess objects (one
    per expected invocation) or to an exception.
    """
    with patch(
        "signal_mcp.signal_cli.asyncio.create_subprocess_exec",
        new_callable=AsyncMock,
    ) as mock_exec:
        yield mock_exec


@pytest.fixture
def mock_signal_cli():
    """A SignalCli double with async list_chats/send_message."""
    cli = MagicMock(spec=SignalCli)
    cli.list_chats = AsyncMock(return_value=[
        ChatEntry(id="+15551234567", name="Alice"),
        ChatEntry(id="+15559876543", name=None),
        ChatEntry(id="g1", name="Book Club"),
    ])
    cli.send_message = AsyncMock(return_value="1700000000000")
    return cli


@pytest.fixture
def make_process():
    """Factory for FakeProcess objects."""
    return FakeProcess


@pytest.fixture
def make_json_process():
    """Factory for a successful process printing a JSON document."""
    return json_process
