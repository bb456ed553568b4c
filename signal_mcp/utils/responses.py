"""
Response formatting utilities for MCP tool handlers.

Provides standardized response builders for common scenarios.
"""

from typing import Optional

from mcp import types

UNNAMED_PLACEHOLDER = "<unnamed>"


def text_response(text: str) -> list[types.TextContent]:
    """Create a simple text response."""
    return [types.TextContent(type="text", text=text)]


def empty_result(item_type: str, hint: Optional[str] = None) -> list[types.TextContent]:
    """
    Create an empty result response.

    Args:
        item_type: Type of items being listed (e.g., "Signal conversations")
        hint: Optional helpful hint appended on its own paragraph
    """
    message = f"No {item_type} found."
    if hint:
        message += f"\n\nNote: {hint}"
    return text_response(message)


def format_chat_list(chats) -> str:
    """
    Format chat entries one per line as "<id> — <name>".

    Entries without a display name get UNNAMED_PLACEHOLDER.
    """
    lines = []
    for chat in chats:
        label = chat.name if chat.name is not None else UNNAMED_PLACEHOLDER
        lines.append(f"{chat.id} — {label}")
    return "\n".join(lines)


def format_send_receipt(recipient: str, receipt: str) -> str:
    """
    Format the confirmation for a delivered message.

    Args:
        recipient: Phone number or group ID the message went to
        receipt: Trimmed stdout of `signal-cli send`, possibly empty
    """
    lines = [
        f"Message delivered to {recipient}",
        f"signal-cli response: {receipt}",
    ]
    if not receipt:
        lines.append("No response payload from signal-cli")
    return "\n".join(lines)
