"""
Tool and resource dispatcher for the Signal MCP server.

Maps tool names to their handlers using the registry pattern and resolves
resource URIs to their static bodies.
"""

import logging
from typing import Optional

from mcp import types

from .handlers import conversations, messaging
from .registry import ResourceUri, ToolName, build_resources, build_tools
from .utils.errors import unknown_resource, unknown_tool

logger = logging.getLogger(__name__)

# Tool registry: Maps tools to their handlers.
# Every handler takes (arguments, signal_cli).
TOOL_REGISTRY = {
    ToolName.LIST_CONVERSATIONS: conversations.handle_list_conversations,
    ToolName.SEND_MESSAGE: messaging.handle_send_message,
}


class Dispatcher:
    """
    Routes tool calls and resource reads.

    Owns the tool and resource descriptors for the lifetime of the process;
    the SignalCli adapter is shared and read-only.
    """

    def __init__(self, signal_cli):
        self.signal_cli = signal_cli
        self.tools = build_tools()
        self.resources = build_resources()

    def list_tools(self) -> list[types.Tool]:
        return list(self.tools)

    def list_resources(self) -> list[types.Resource]:
        return [entry.descriptor for entry in self.resources]

    async def dispatch_call(
        self,
        tool_name: str,
        arguments: Optional[dict] = None
    ) -> list[types.TextContent]:
        """
        Run a tool by name.

        Args:
            tool_name: Name requested by the client
            arguments: Tool arguments (None treated as empty)

        Returns:
            List of TextContent for the tool result

        Raises:
            SignalMcpError: UNKNOWN_TOOL for an unregistered name, or whatever
                the handler raises
        """
        tool = ToolName.lookup(tool_name)
        if tool is None:
            raise unknown_tool(tool_name)

        handler = TOOL_REGISTRY[tool]
        return await handler(arguments or {}, self.signal_cli)

    def dispatch_read(self, resource_uri: str) -> str:
        """
        Return the body of a static resource.

        Raises:
            SignalMcpError: UNKNOWN_RESOURCE if the URI does not match exactly
        """
        resource = ResourceUri.lookup(resource_uri)
        if resource is not None:
            for entry in self.resources:
                if entry.uri is resource:
                    return entry.body

        raise unknown_resource(resource_uri)
