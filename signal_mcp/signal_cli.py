"""
signal-cli integration for the Signal MCP server.

Runs the signal-cli executable as a subprocess to list contacts and groups
and to send messages. Every call starts a fresh process; nothing is cached
between calls.

Known gap: no timeout is applied, so a hung signal-cli hangs the call.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from .utils.errors import ErrorKind, SignalMcpError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatEntry:
    """A contact (phone number) or group known to the account."""

    id: str
    name: Optional[str] = None


def _clean_name(value: Any) -> Optional[str]:
    """Trim a display name; empty or non-string names count as absent."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def parse_contacts(records: List[Any]) -> List[ChatEntry]:
    """
    Convert listContacts records into chat entries.

    Records without a string `number` are skipped; source order is kept.
    """
    chats = []
    for record in records:
        if not isinstance(record, dict):
            continue
        number = record.get("number")
        if not isinstance(number, str):
            continue
        chats.append(ChatEntry(id=number, name=_clean_name(record.get("name"))))
    return chats


def parse_groups(records: List[Any]) -> List[ChatEntry]:
    """
    Convert listGroups records into chat entries.

    Records without a string `id` are skipped. Groups always get a display
    name: the trimmed `name`, or the group id when that is empty.
    """
    chats = []
    for record in records:
        if not isinstance(record, dict):
            continue
        group_id = record.get("id")
        if not isinstance(group_id, str):
            continue
        chats.append(ChatEntry(id=group_id, name=_clean_name(record.get("name")) or group_id))
    return chats


class SignalCli:
    """
    Thin async wrapper around the signal-cli executable.

    Stateless after construction, so a single instance can be shared by
    concurrent requests.
    """

    def __init__(self, executable: Path, account: str):
        """
        Initialize signal-cli wrapper.

        Args:
            executable: Path to the signal-cli binary
            account: Account identifier passed as --account (E.164 number)
        """
        self.executable = Path(executable)
        self.account = account
        logger.info(f"Initialized SignalCli for account {account} using {self.executable}")

    @classmethod
    def from_settings(cls, settings) -> "SignalCli":
        return cls(settings.signal_cli_path, settings.account)

    async def _run(self, operation: str, *args: str) -> str:
        """
        Run signal-cli with the account prefix and return decoded stdout.

        Args:
            operation: Subcommand name used in error messages
            *args: Arguments following `--account <account>`

        Raises:
            SignalMcpError: LAUNCH if the process cannot start,
                EXIT_STATUS if it exits non-zero (message carries stderr)
        """
        argv = [str(self.executable), "--account", self.account, *args]
        logger.debug(f"Running signal-cli {operation}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            raise SignalMcpError(
                ErrorKind.LAUNCH,
                f"failed to execute signal-cli {operation}: {e}",
            ) from e

        if process.returncode != 0:
            error_text = stderr.decode("utf-8", errors="replace").strip()
            logger.warning(
                f"signal-cli {operation} exited with status {process.returncode}: {error_text}"
            )
            raise SignalMcpError(
                ErrorKind.EXIT_STATUS,
                f"signal-cli {operation} exited with status {process.returncode}: {error_text}",
            )

        return stdout.decode("utf-8", errors="replace")

    async def _run_json_list(self, operation: str) -> List[Any]:
        """Run a `-o json` listing subcommand and parse the JSON array it prints."""
        output = await self._run(operation, "-o", "json", operation)

        try:
            records = json.loads(output)
        except json.JSONDecodeError as e:
            raise SignalMcpError(
                ErrorKind.PARSE,
                f"failed to parse signal-cli {operation} response: {e}",
            ) from e

        if not isinstance(records, list):
            raise SignalMcpError(
                ErrorKind.PARSE,
                f"failed to parse signal-cli {operation} response: "
                f"expected a JSON array, got {type(records).__name__}",
            )

        return records

    async def list_chats(self) -> List[ChatEntry]:
        """
        List contacts followed by groups.

        Returns:
            All contacts in source order, then all groups in source order

        Raises:
            SignalMcpError: If either subcommand fails or prints unexpected output
        """
        chats = parse_contacts(await self._run_json_list("listContacts"))
        chats.extend(parse_groups(await self._run_json_list("listGroups")))

        logger.debug(f"signal-cli contacts/groups listed: {len(chats)}")
        return chats

    async def send_message(self, recipient: str, message: str) -> str:
        """
        Send a text message.

        Args:
            recipient: Phone number (E.164) or group ID
            message: Message body

        Returns:
            Trimmed stdout of signal-cli send (may be empty)

        Raises:
            SignalMcpError: If signal-cli cannot start or rejects the send
        """
        output = await self._run("send", "send", "-m", message, recipient)
        logger.debug(f"signal-cli send succeeded for {recipient}")
        return output.strip()
