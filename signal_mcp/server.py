"""
Signal MCP Server - protocol request handling.

Wires the dispatcher into the MCP low-level Server:
- tools/list and resources/list return the fixed descriptor lists
- tools/call failures come back as tool error results (isError=True)
- resources/read failures are JSON-RPC INVALID_PARAMS errors

Each request first checks that the matching capability is enabled.
"""

import logging
from typing import Optional

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from . import SERVER_NAME, __version__
from .config import Settings
from .dispatcher import Dispatcher
from .registry import MARKDOWN_MIME_TYPE, ResourceUri, ToolName
from .signal_cli import SignalCli
from .utils.errors import SignalMcpError, capability_not_supported, invalid_params

logger = logging.getLogger(__name__)

TOOL_METHODS = ("tools/list", "tools/call")
RESOURCE_METHODS = ("resources/list", "resources/read")


class SignalMcpServer:
    """
    MCP server exposing one Signal account.

    Stateless per request; the dispatcher and SignalCli adapter are built once
    and shared by all requests.
    """

    def __init__(
        self,
        settings: Settings,
        signal_cli: Optional[SignalCli] = None,
        enable_tools: bool = True,
        enable_resources: bool = True,
    ):
        """
        Initialize server components.

        Args:
            settings: Loaded settings
            signal_cli: Adapter to use (built from settings when omitted)
            enable_tools: Advertise and serve the tools capability
            enable_resources: Advertise and serve the resources capability
        """
        logger.info("Initializing server components")
        self.settings = settings
        self.signal_cli = signal_cli or SignalCli.from_settings(settings)
        self.dispatcher = Dispatcher(self.signal_cli)
        self.capabilities = self._server_capabilities(enable_tools, enable_resources)

        self.app = Server(
            SERVER_NAME,
            version=__version__,
            instructions=self.instructions(),
        )
        self._register_handlers()

    @staticmethod
    def _server_capabilities(enable_tools: bool, enable_resources: bool) -> types.ServerCapabilities:
        tools = types.ToolsCapability(listChanged=False) if enable_tools else None
        resources = (
            types.ResourcesCapability(subscribe=False, listChanged=False)
            if enable_resources else None
        )
        return types.ServerCapabilities(tools=tools, resources=resources)

    def instructions(self) -> str:
        return (
            f"Expose Signal conversations for account {self.settings.account}. "
            f"Use `{ToolName.LIST_CONVERSATIONS.value}` to fetch metadata, "
            f"`{ToolName.SEND_MESSAGE.value}` to send messages, "
            f"or read `{ResourceUri.OVERVIEW.value}` for setup guidance."
        )

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=SERVER_NAME,
            server_version=__version__,
            capabilities=self.capabilities,
            instructions=self.instructions(),
        )

    def _assert_capability(self, method: str) -> None:
        """
        Raise McpError(METHOD_NOT_FOUND) if `method` belongs to a disabled capability.
        """
        if method in TOOL_METHODS and self.capabilities.tools is None:
            raise McpError(capability_not_supported(method))
        if method in RESOURCE_METHODS and self.capabilities.resources is None:
            raise McpError(capability_not_supported(method))

    # =========================================================================
    # REQUEST HANDLERS
    # =========================================================================

    def list_tools(self) -> list[types.Tool]:
        self._assert_capability("tools/list")
        return self.dispatcher.list_tools()

    def list_resources(self) -> list[types.Resource]:
        self._assert_capability("resources/list")
        return self.dispatcher.list_resources()

    async def call_tool(self, name: str, arguments: Optional[dict]) -> list[types.TextContent]:
        """
        Run a tool call.

        Errors are re-raised so the MCP runtime turns them into a tool error
        result rather than a transport failure.
        """
        self._assert_capability("tools/call")
        logger.info(f"Tool called: {name}")

        try:
            return await self.dispatcher.dispatch_call(name, arguments or {})
        except SignalMcpError as e:
            logger.warning(f"Tool {name} failed ({e.kind.value}): {e.message}")
            raise

    async def read_resource(self, uri: str) -> list[ReadResourceContents]:
        """
        Read a static resource.

        Raises:
            McpError: INVALID_PARAMS for an unknown URI
        """
        self._assert_capability("resources/read")

        try:
            body = self.dispatcher.dispatch_read(uri)
        except SignalMcpError as e:
            raise McpError(invalid_params(e)) from e

        return [ReadResourceContents(content=body, mime_type=MARKDOWN_MIME_TYPE)]

    def _register_handlers(self) -> None:
        app = self.app

        @app.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        @app.list_resources()
        async def handle_list_resources() -> list[types.Resource]:
            return self.list_resources()

        @app.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

        @app.read_resource()
        async def handle_read_resource(uri) -> list[ReadResourceContents]:
            return await self.read_resource(str(uri))

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    async def run(self) -> None:
        """Serve MCP over stdio until the client closes the transport."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Signal MCP server runtime started; waiting for MCP client initialization")
            await self.app.run(
                read_stream,
                write_stream,
                self.initialization_options()
            )
