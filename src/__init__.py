"""
wikimark - Markdown preview renderer for a minimal wiki

Turns an author's raw plain text into sanitized, styled HTML for live
preview, using ordered tables of regex rules instead of a parse tree.
"""

__version__ = "1.0.0"

from .lib import (
    escape,
    segment,
    assemble,
    render,
    Segmenter,
    Renderer,
    RenderTrigger,
    Region,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "escape",
    "segment",
    "assemble",
    "render",
    "Segmenter",
    "Renderer",
    "RenderTrigger",
    "Region",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
