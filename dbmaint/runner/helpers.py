"""
Helper functions for runner module.

This module contains utility functions used by the tool runner:
- vprint: Conditional printing/logging
- timer: Timing generator for performance monitoring
- format_execution_time: Human-readable durations
- get_tool: Tool lookup honouring extra tool modules
- cancel_on_interrupt: Ctrl-C as cooperative cancellation
"""

import signal
import sys
import threading
from collections.abc import Generator
from contextlib import contextmanager
from logging import getLogger
from time import monotonic

from ..loader import import_tool_modules, tool_by_name
from ..tool import ToolHandler
from .types import ArgType

logger = getLogger(__name__)
PRINTKWARGS = dict(file=sys.stderr, flush=True)


def vprint(args: ArgType, *pargs, **pkwargs):
    """
    Conditional print/log based on args settings.

    Args:
        args: ArgType with verbosity and log_rather_than_print settings
        *pargs: Arguments to print/log
        **pkwargs: Keyword arguments passed to print

    Behavior:
        - If log_rather_than_print: logs to logger
        - If verbosity > 0: prints to stderr
        - Otherwise: silent
    """
    if args.log_rather_than_print:
        logger.info(" ".join(map(str, pargs)))
    elif args.verbosity:
        print(*pargs, **PRINTKWARGS, **pkwargs)  # type: ignore


def timer() -> Generator[float, None, None]:
    """
    Generator to show time elapsed since the last iteration.

    Yields:
        float: Elapsed time in seconds since last yield

    Example:
        >>> t = timer()
        >>> next(t)  # Initialize
        0.0
        >>> # ... do work ...
        >>> next(t)  # Get elapsed time
        0.523
    """
    last = monotonic()
    while True:
        cur = monotonic()
        yield (cur - last)
        last = cur


def format_execution_time(millis: int) -> str:
    if millis < 1000:
        return f"{millis}ms"
    seconds = millis / 1000
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes}m {seconds}s"


def get_tool(args: ArgType) -> ToolHandler:
    if args.toolmodules:
        import_tool_modules(args.toolmodules)
    return tool_by_name(args.tool)()


@contextmanager
def cancel_on_interrupt(monitor):
    """
    Turn SIGINT into a cooperative cancellation request on `monitor`.

    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield monitor
        return

    def request_cancel(signum, frame):
        logger.warning("Interrupted, finishing the current action")
        monitor.cancel()

    previous = signal.signal(signal.SIGINT, request_cancel)
    try:
        yield monitor
    finally:
        signal.signal(signal.SIGINT, previous)
