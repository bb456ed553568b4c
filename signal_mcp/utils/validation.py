"""
Validation utilities for MCP tool arguments.

Provides standardized validation functions that return (value, error) tuples.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class SendArguments:
    """Arguments accepted by the send-message tool."""

    recipient: str
    message: str


def validate_string(value: Any, name: str) -> tuple[str | None, str | None]:
    """
    Validate that a required value is present and is a string.

    Args:
        value: Value to validate
        name: Parameter name for error messages

    Returns:
        Tuple of (validated_value, error_message). If valid, error_message is None.
    """
    if value is None:
        return None, f"Missing required parameter: {name}"

    if not isinstance(value, str):
        return None, f"Invalid {name}: must be a string, got {type(value).__name__}"

    return value, None


def validate_non_empty_string(value: Any, name: str) -> tuple[str | None, str | None]:
    """
    Validate that a value is a string that is non-empty after trimming.

    The original (untrimmed) string is returned on success.
    """
    text, error = validate_string(value, name)
    if error:
        return None, error

    if not text.strip():
        return None, f"Invalid {name}: cannot be empty"

    return text, None


def parse_send_arguments(
    arguments: Optional[dict],
) -> tuple[SendArguments | None, str | None]:
    """
    Deserialize send-message arguments.

    `message` must be non-empty after trimming; it is passed to signal-cli
    exactly as given.

    Args:
        arguments: The arguments dict from the tool call (None treated as empty)

    Returns:
        Tuple of (SendArguments, error_message).
    """
    arguments = arguments or {}

    recipient, error = validate_string(arguments.get("recipient"), "recipient")
    if error:
        return None, error

    message, error = validate_non_empty_string(arguments.get("message"), "message")
    if error:
        return None, error

    return SendArguments(recipient=recipient, message=message), None
