"""
Error taxonomy for the Signal MCP server.

Every failure that can happen while serving a tool call or resource read is
represented by a SignalMcpError tagged with an ErrorKind. The original cause
text is always kept in the message so the client sees what signal-cli said.
"""

import logging
from enum import Enum

from mcp import types

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Categories of per-call failures."""

    LAUNCH = "launch"                      # signal-cli could not be started
    EXIT_STATUS = "exit_status"            # signal-cli exited non-zero
    PARSE = "parse"                        # stdout did not match the expected shape
    INVALID_ARGUMENT = "invalid_argument"  # rejected before any subprocess call
    UNKNOWN_TOOL = "unknown_tool"
    UNKNOWN_RESOURCE = "unknown_resource"


class SignalMcpError(Exception):
    """Domain error carrying an ErrorKind and the underlying cause text."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def with_context(self, prefix: str) -> "SignalMcpError":
        """Return a new error of the same kind with `prefix: ` prepended."""
        return SignalMcpError(self.kind, f"{prefix}: {self.message}")

    def __repr__(self) -> str:
        return f"SignalMcpError(kind={self.kind.value!r}, message={self.message!r})"


def unknown_tool(name: str) -> SignalMcpError:
    return SignalMcpError(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {name}")


def unknown_resource(uri: str) -> SignalMcpError:
    return SignalMcpError(ErrorKind.UNKNOWN_RESOURCE, f"Unknown resource URI: {uri}")


def invalid_argument(message: str) -> SignalMcpError:
    return SignalMcpError(ErrorKind.INVALID_ARGUMENT, message)


def invalid_params(error: SignalMcpError) -> types.ErrorData:
    """
    Convert a resource lookup failure into JSON-RPC error data.

    Args:
        error: The error raised by the dispatcher

    Returns:
        ErrorData with the INVALID_PARAMS code and the original message
    """
    logger.warning(f"Rejecting resource read: {error.message}")
    return types.ErrorData(code=types.INVALID_PARAMS, message=error.message)


def capability_not_supported(method: str) -> types.ErrorData:
    """Error data for a request whose capability the server does not advertise."""
    return types.ErrorData(
        code=types.METHOD_NOT_FOUND,
        message=f"Server does not support {method} (capability not enabled)",
    )
