"""
MCP Tool Handlers Package

Organized by domain:
- conversations: signal_list_conversations
- messaging: signal_send_message
"""

from . import conversations
from . import messaging

__all__ = [
    "conversations",
    "messaging",
]
