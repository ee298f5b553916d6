"""
Segment data models

A segment is the unit of independent rule application: a contiguous slice of
the raw input tagged with the render mode that selects its rule set.
"""

from enum import Enum
from dataclasses import dataclass


class RenderMode(Enum):
    """
    Render modes selecting which ordered rule set applies to a segment
    """
    NORMAL = "normal"    # paragraphs, headers, inline formatting
    BLOCK = "block"      # ```fenced``` code, rendered verbatim
    LIST = "list"        # run of - + * or 1. marked lines
    TABLE = "table"      # rules defined, never produced by the segmenter


@dataclass(frozen=True)
class Segment:
    """
    Contiguous slice of raw input tagged with a render mode

    Attributes:
        text: Exact substring of the original raw input, including its own
              delimiters (e.g. the fence markers of a code block)
        mode: RenderMode selecting the rule set for this segment

    Example:
        For source "intro\\n```\\ncode\\n```":
        [Segment(text="intro\\n", mode=RenderMode.NORMAL),
         Segment(text="```\\ncode\\n```", mode=RenderMode.BLOCK)]
    """
    text: str
    mode: RenderMode = RenderMode.NORMAL
