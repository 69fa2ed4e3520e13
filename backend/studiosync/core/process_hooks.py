"""
Process-level error logging.

Errors that escape a request (unretrieved asyncio task exceptions, crashed
background threads) are logged instead of taking the process down. The
process holds no in-memory domain state that such an error could corrupt.
"""

import asyncio
import logging
import threading
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exc is not None:
        logger.error("Unhandled async error: %s", message, exc_info=exc)
    else:
        logger.error("Unhandled async error: %s", message)


def _log_thread_exception(args: threading.ExceptHookArgs) -> None:
    thread_name = args.thread.name if args.thread else "unknown"
    logger.error(
        "Uncaught exception in thread %s",
        thread_name,
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


def install_process_error_logging(loop: asyncio.AbstractEventLoop) -> None:
    """Route unhandled loop and thread exceptions to the application log."""
    loop.set_exception_handler(_log_loop_exception)
    threading.excepthook = _log_thread_exception
    logger.debug("Process error hooks installed")
