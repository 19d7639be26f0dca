"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current state's
verbosity level without requiring explicit state passing.

Features:
- Context-aware logging tied to a connected state's verbosity
- Falls back to appsettings.verbosity when nothing is connected
- Rich formatting with timestamps, colors, and metadata
- Safe across threads and tasks using contextvars

Usage:
    from turbostream.lib.log import LOG, state_connectToLogger

    # At the start of a response pipeline:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Builder decisions appear if verbosity >= 2", level=2)
    LOG("Parser trace appears if verbosity >= 3", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

# Context variable to hold the current state
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Format of the sink added by logging_configure()
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def logging_configure(sink: Any = sys.stderr, level: str = "DEBUG") -> int:
    """
    Add a sink for turbostream messages in the turbostream format.

    Importing turbostream leaves the host application's loguru sinks alone;
    call this to route turbostream messages to a dedicated sink.

    Args:
        sink: Any loguru sink (stream, path, callable)
        level: Minimum loguru level for the sink

    Returns:
        Loguru handler id, for logger.remove()
    """
    return logger.add(
        sink,
        format=logger_format,
        level=level,
        filter=lambda record: (record["name"] or "").startswith("turbostream"),
    )


def state_connectToLogger(state: Any) -> None:
    """
    Connect a state object to the logging context.

    Call this at the start of a pipeline to make the state's verbosity
    setting available to LOG() calls throughout that context.

    Args:
        state: Object with a ``verbosity`` attribute (e.g., ResponseState)
    """
    _program_state.set(state)


def verbosity_current() -> int:
    """Verbosity of the connected state, or the configured fallback"""
    state = _program_state.get()
    if state is not None and hasattr(state, 'verbosity'):
        return state.verbosity
    return appsettings.verbosity


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        0 = Silent
        1 = Normal output (default)
        2 = Verbose (builder and renderer decisions)
        3 = Debug (parser trace)
    """
    if verbosity_current() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
