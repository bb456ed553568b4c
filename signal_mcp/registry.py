"""
Tool and resource declarations for the Signal MCP server.

The registry is fixed at startup: two tools and one static overview
document. Names are resolved through the ToolName and ResourceUri
enumerations so dispatch never compares raw strings at call sites.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mcp import types

MARKDOWN_MIME_TYPE = "text/markdown"


class ToolName(str, Enum):
    LIST_CONVERSATIONS = "signal_list_conversations"
    SEND_MESSAGE = "signal_send_message"

    @classmethod
    def lookup(cls, name: str) -> Optional["ToolName"]:
        """Return the matching tool, or None for an unknown name."""
        try:
            return cls(name)
        except ValueError:
            return None


class ResourceUri(str, Enum):
    OVERVIEW = "resource://signal/overview"

    @classmethod
    def lookup(cls, uri: str) -> Optional["ResourceUri"]:
        """Exact-match lookup; returns None for an unknown URI."""
        try:
            return cls(uri)
        except ValueError:
            return None


@dataclass(frozen=True)
class ResourceEntry:
    """A resource descriptor together with its static body."""

    uri: ResourceUri
    descriptor: types.Resource
    body: str


OVERVIEW_BODY = """
# Signal MCP Server Overview

This MCP server bridges a linked Signal account via `signal-cli`.

## Current Tools

- `signal_list_conversations` — lists known contacts and group chats using `signal-cli listContacts`/`listGroups`.
- `signal_send_message` — sends a text message to a phone number or group ID via `signal-cli send`.

## Configuration

Provide a `config/mcp_server.json` (or `SIGNAL_MCP__*` environment variables) with:

```
{
  "account": "+1XXXXXXXXXX",
  "signal_cli_path": "/path/to/signal-cli",
  "storage": "./var"
}
```

The Signal account must already be linked or registered using `signal-cli`.

## Roadmap Highlights

- Fetch and normalize conversation/message history.
- Stream live events from `signal-cli jsonRpc` and expose MCP notifications.
- Attachment handling, search, health checks, and richer telemetry.
""".strip()


def build_tools() -> list[types.Tool]:
    """Build the fixed tool descriptor list."""
    return [
        types.Tool(
            name=ToolName.LIST_CONVERSATIONS.value,
            title="List Signal Conversations",
            description=(
                "Return known Signal contacts and groups using "
                "signal-cli listContacts/listGroups."
            ),
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            },
            annotations=types.ToolAnnotations(
                readOnlyHint=True,
                destructiveHint=False,
            ),
        ),
        types.Tool(
            name=ToolName.SEND_MESSAGE.value,
            title="Send Signal Message",
            description="Send a Signal message using signal-cli",
            inputSchema={
                "type": "object",
                "properties": {
                    "recipient": {
                        "type": "string",
                        "description": "Signal recipient in E.164 form or group ID"
                    },
                    "message": {
                        "type": "string",
                        "description": "Message body to send"
                    }
                },
                "required": ["recipient", "message"]
            },
            annotations=types.ToolAnnotations(
                readOnlyHint=False,
                destructiveHint=False,
            ),
        ),
    ]


def build_resources() -> list[ResourceEntry]:
    """Build the fixed resource list (descriptor plus body)."""
    overview = types.Resource(
        uri=ResourceUri.OVERVIEW.value,
        name="signal.overview",
        title="Signal MCP Overview",
        description="Overview of available Signal MCP capabilities and configuration.",
        mimeType=MARKDOWN_MIME_TYPE,
    )
    return [ResourceEntry(uri=ResourceUri.OVERVIEW, descriptor=overview, body=OVERVIEW_BODY)]
