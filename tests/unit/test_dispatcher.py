"""
Unit tests for the tool/resource dispatcher.

The SignalCli adapter is replaced with an AsyncMock double (see
conftest.mock_signal_cli) so these tests only cover routing, validation
and formatting.
"""

import pytest

from signal_mcp.dispatcher import Dispatcher
from signal_mcp.registry import OVERVIEW_BODY, ResourceUri, ToolName
from signal_mcp.utils.errors import ErrorKind, SignalMcpError


@pytest.fixture
def dispatcher(mock_signal_cli):
    return Dispatcher(mock_signal_cli)


class TestRegistry:

    def test_exactly_two_tools(self, dispatcher):
        names = [tool.name for tool in dispatcher.list_tools()]
        assert names == ["signal_list_conversations", "signal_send_message"]

    def test_list_conversations_annotations(self, dispatcher):
        tool = dispatcher.list_tools()[0]
        assert tool.annotations.readOnlyHint is True
        assert tool.annotations.destructiveHint is False
        assert tool.inputSchema["properties"] == {}

    def test_send_message_schema(self, dispatcher):
        tool = dispatcher.list_tools()[1]
        assert tool.annotations.readOnlyHint is False
        assert tool.annotations.destructiveHint is False
        assert sorted(tool.inputSchema["required"]) == ["message", "recipient"]
        assert tool.inputSchema["properties"]["recipient"]["type"] == "string"
        assert tool.inputSchema["properties"]["message"]["type"] == "string"

    def test_single_overview_resource(self, dispatcher):
        resources = dispatcher.list_resources()
        assert len(resources) == 1
        assert str(resources[0].uri) == "resource://signal/overview"
        assert resources[0].mimeType == "text/markdown"

    def test_lookup(self):
        assert ToolName.lookup("signal_send_message") is ToolName.SEND_MESSAGE
        assert ToolName.lookup("foo") is None
        assert ResourceUri.lookup("resource://signal/overview") is ResourceUri.OVERVIEW
        assert ResourceUri.lookup("resource://signal/overview/") is None


class TestDispatchCall:

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher):
        with pytest.raises(SignalMcpError) as exc_info:
            await dispatcher.dispatch_call("foo", {})

        assert exc_info.value.kind is ErrorKind.UNKNOWN_TOOL
        assert "foo" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_list_conversations(self, dispatcher):
        result = await dispatcher.dispatch_call("signal_list_conversations", {})

        assert len(result) == 1
        assert result[0].text.split("\n") == [
            "+15551234567 — Alice",
            "+15559876543 — <unnamed>",
            "g1 — Book Club",
        ]

    @pytest.mark.asyncio
    async def test_list_conversations_empty(self, dispatcher, mock_signal_cli):
        mock_signal_cli.list_chats.return_value = []

        result = await dispatcher.dispatch_call("signal_list_conversations", None)

        assert result[0].text == "No Signal conversations found."

    @pytest.mark.asyncio
    async def test_list_conversations_failure_keeps_cause(self, dispatcher, mock_signal_cli):
        mock_signal_cli.list_chats.side_effect = SignalMcpError(
            ErrorKind.EXIT_STATUS, "signal-cli listContacts exited with status 1: not registered"
        )

        with pytest.raises(SignalMcpError) as exc_info:
            await dispatcher.dispatch_call("signal_list_conversations", {})

        assert exc_info.value.kind is ErrorKind.EXIT_STATUS
        assert exc_info.value.message.startswith("signal-cli listChats failed: ")
        assert "not registered" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_send_message(self, dispatcher, mock_signal_cli):
        result = await dispatcher.dispatch_call(
            "signal_send_message",
            {"recipient": "+15551234567", "message": "Hello"},
        )

        mock_signal_cli.send_message.assert_awaited_once_with("+15551234567", "Hello")
        assert result[0].text == (
            "Message delivered to +15551234567\n"
            "signal-cli response: 1700000000000"
        )

    @pytest.mark.asyncio
    async def test_send_message_empty_receipt(self, dispatcher, mock_signal_cli):
        mock_signal_cli.send_message.return_value = ""

        result = await dispatcher.dispatch_call(
            "signal_send_message",
            {"recipient": "+15551234567", "message": "Hello"},
        )

        assert "No response payload from signal-cli" in result[0].text

    @pytest.mark.asyncio
    async def test_blank_message_never_reaches_signal_cli(self, dispatcher, mock_signal_cli):
        with pytest.raises(SignalMcpError) as exc_info:
            await dispatcher.dispatch_call(
                "signal_send_message",
                {"recipient": "+15551234567", "message": "  "},
            )

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT
        mock_signal_cli.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_recipient(self, dispatcher, mock_signal_cli):
        with pytest.raises(SignalMcpError) as exc_info:
            await dispatcher.dispatch_call("signal_send_message", {"message": "Hello"})

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT
        assert "recipient" in exc_info.value.message
        mock_signal_cli.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_failure_keeps_stderr(self, dispatcher, mock_signal_cli):
        mock_signal_cli.send_message.side_effect = SignalMcpError(
            ErrorKind.EXIT_STATUS, "signal-cli send exited with status 1: Untrusted identity"
        )

        with pytest.raises(SignalMcpError) as exc_info:
            await dispatcher.dispatch_call(
                "signal_send_message",
                {"recipient": "+15551234567", "message": "Hello"},
            )

        assert "Untrusted identity" in exc_info.value.message
        assert exc_info.value.message.startswith("signal-cli send failed: ")


class TestDispatchRead:

    def test_overview(self, dispatcher):
        body = dispatcher.dispatch_read("resource://signal/overview")

        assert body == OVERVIEW_BODY
        assert body.startswith("# Signal MCP Server Overview")

    def test_unknown_resource(self, dispatcher):
        with pytest.raises(SignalMcpError) as exc_info:
            dispatcher.dispatch_read("resource://signal/missing")

        assert exc_info.value.kind is ErrorKind.UNKNOWN_RESOURCE
        assert "resource://signal/missing" in exc_info.value.message
