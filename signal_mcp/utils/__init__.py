"""
MCP Server Utilities

Shared validation, response formatting, and error handling utilities
for the Signal MCP server.
"""

from .validation import (
    SendArguments,
    validate_string,
    validate_non_empty_string,
    parse_send_arguments,
)

from .responses import (
    UNNAMED_PLACEHOLDER,
    text_response,
    empty_result,
    format_chat_list,
    format_send_receipt,
)

from .errors import (
    ErrorKind,
    SignalMcpError,
    unknown_tool,
    unknown_resource,
    invalid_argument,
    invalid_params,
    capability_not_supported,
)

__all__ = [
    # Validation
    "SendArguments",
    "validate_string",
    "validate_non_empty_string",
    "parse_send_arguments",
    # Responses
    "UNNAMED_PLACEHOLDER",
    "text_response",
    "empty_result",
    "format_chat_list",
    "format_send_receipt",
    # Errors
    "ErrorKind",
    "SignalMcpError",
    "unknown_tool",
    "unknown_resource",
    "invalid_argument",
    "invalid_params",
    "capability_not_supported",
]
