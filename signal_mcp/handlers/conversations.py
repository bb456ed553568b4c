"""
Conversation Handlers

Handles tools for reading the account's contacts and groups:
- signal_list_conversations: one line per contact/group
"""

import logging

from mcp import types

from ..utils.errors import SignalMcpError
from ..utils.responses import text_response, empty_result, format_chat_list

logger = logging.getLogger(__name__)


async def handle_list_conversations(
    arguments: dict,
    signal_cli
) -> list[types.TextContent]:
    """
    Handle signal_list_conversations tool call.

    Args:
        arguments: {} (no arguments needed)
        signal_cli: SignalCli instance

    Returns:
        Newline-separated "<id> — <name>" lines, or a no-conversations note

    Raises:
        SignalMcpError: If signal-cli fails; the original cause is kept
    """
    try:
        chats = await signal_cli.list_chats()
    except SignalMcpError as e:
        logger.warning(f"signal-cli listChats failed from tool invocation: {e}")
        raise e.with_context("signal-cli listChats failed") from e

    if not chats:
        return empty_result("Signal conversations")

    return text_response(format_chat_list(chats))
