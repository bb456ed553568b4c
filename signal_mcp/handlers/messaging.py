"""
Messaging Handlers

Handles tools for sending Signal messages:
- signal_send_message: Send to a phone number or group ID
"""

import logging

from mcp import types

from ..utils.errors import SignalMcpError, invalid_argument
from ..utils.responses import text_response, format_send_receipt
from ..utils.validation import parse_send_arguments

logger = logging.getLogger(__name__)


async def handle_send_message(
    arguments: dict,
    signal_cli
) -> list[types.TextContent]:
    """
    Handle signal_send_message tool call.

    Arguments are validated before signal-cli is started; an empty message
    never reaches the subprocess.

    Args:
        arguments: {"recipient": str, "message": str}
        signal_cli: SignalCli instance

    Returns:
        Delivery confirmation including the raw signal-cli response

    Raises:
        SignalMcpError: INVALID_ARGUMENT for bad input, otherwise the
            signal-cli failure with its original cause
    """
    args, error = parse_send_arguments(arguments)
    if error:
        raise invalid_argument(error)

    try:
        receipt = await signal_cli.send_message(args.recipient, args.message)
    except SignalMcpError as e:
        logger.warning(f"signal-cli send failed from tool invocation: {e}")
        raise e.with_context("signal-cli send failed") from e

    logger.info(f"Message sent successfully to {args.recipient}")
    return text_response(format_send_receipt(args.recipient, receipt))
