"""
wikimark - Markdown preview renderer for a minimal wiki

Rule-based conversion of raw wiki text into sanitized HTML markup.
"""

__version__ = "1.0.0"

from .escaper import escape
from .segmenter import Segmenter, segment
from .renderer import Renderer, assemble, render
from .trigger import RenderTrigger, Region
from .log import LOG, state_connectToLogger

__all__ = [
    "escape",
    "Segmenter",
    "segment",
    "Renderer",
    "assemble",
    "render",
    "RenderTrigger",
    "Region",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
