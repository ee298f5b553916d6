"""
Verbosity-gated logging for wikimark, built on Loguru.

The renderer is called from two kinds of host: the command line stages in
__main__ (which connect their ProgramState here, so -v/-vv/-vvv choose how
much is shown) and embedding code such as a RenderTrigger bound to an
editor pane (which usually connects nothing). LOG() looks the state up in a
context variable, so the engine never has to pass it around, and with no
state connected every call is a no-op.

Levels used across the package:
    1  pipeline progress (reading, rendering, result summary)
    2  per-render detail (paths, segment counts, lexer fallbacks)
    3  per-pass trace (segmenter splits, trigger passes)

Usage:
    from wikimark.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG(f"Rendering {len(segments)} segments", level=2)

    state_connectToLogger(None)   # silence again
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make state the verbosity source for LOG calls in the current context

    The command line connects its ProgramState once, before the pipeline
    runs; the engine modules only ever read it.

    Args:
        state: Object with verbosity attribute, or None to disconnect
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Reading source file...", level=1)
        LOG("Rendering 4 segments", level=2)
        LOG("Rendered region 'article' (120 chars, pass 3)", level=3)
    """
    state = _program_state.get()

    if getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
