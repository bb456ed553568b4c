"""
Signal MCP Server - expose a signal-cli account to MCP clients.

Tools:
- signal_list_conversations: contacts and groups known to the account
- signal_send_message: send a text message to a number or group

Usage:
    signal-mcp-server --config config/mcp_server.json
"""

__version__ = "0.1.0"

SERVER_NAME = "signal-mcp-server"
SERVER_TITLE = "Signal MCP Server"
