"""
Segmenter for raw wiki text

Splits raw text into an ordered list of typed segments without building a
parse tree.

The segmenter operates in two cascaded passes:
1. Fences: capturing split on ```fenced``` code blocks (BLOCK segments)
2. Lists: capturing split of every remaining piece on list runs (LIST segments)

Whatever is left is NORMAL. The passes are deliberately shallow: no nesting,
no backtracking grammar.

Invariant: concatenating the text of every returned segment reproduces the
source exactly.

Example:
    >>> segments = Segmenter("intro\\n- a\\n- b\\n").segment()
    >>> [s.mode.value for s in segments]
    ['normal', 'list']
    >>> "".join(s.text for s in segments)
    'intro\\n- a\\n- b\\n'
"""

import re
from typing import List

from ..models.segment import RenderMode, Segment
from .log import LOG

# ``` + optional language tag, newline, anything (lazily), closing ```
FENCE_PATTERN = re.compile(r"(```[^\s`]*\r?\n.*?```)", re.DOTALL)

# One or more consecutive lines starting with - + * or 1. and some content.
# The trailing newline of the last line belongs to the run.
LIST_RUN_PATTERN = re.compile(
    r"((?:^[ \t]*(?:[-+*]|\d+\.)[ \t]+\S[^\n]*(?:\n|$))+)",
    re.MULTILINE,
)


class Segmenter:
    """
    Splits raw text into BLOCK, LIST and NORMAL segments

    TABLE is a declared render mode but no delimiter produces it.
    """

    def __init__(self, source: str):
        """
        Initialize segmenter with source text

        Args:
            source: Raw text exactly as typed by the author
        """
        self.source = source

    def codeblocks_split(self) -> List[Segment]:
        """
        Split source on fenced code blocks

        re.split with a capturing group interleaves captured fences at odd
        indices, so the index parity decides the mode.

        Returns:
            Segments tagged BLOCK (fences) or NORMAL (everything else)
        """
        pieces = FENCE_PATTERN.split(self.source)
        segments = []
        for index, piece in enumerate(pieces):
            if not piece:
                continue
            mode = RenderMode.BLOCK if index % 2 else RenderMode.NORMAL
            segments.append(Segment(text=piece, mode=mode))
        return segments

    def listruns_split(self, text: str) -> List[Segment]:
        """
        Split a NORMAL piece on list runs

        Args:
            text: Text of a provisionally NORMAL segment

        Returns:
            Segments tagged LIST (runs) or NORMAL (the rest), in order
        """
        pieces = LIST_RUN_PATTERN.split(text)
        segments = []
        for index, piece in enumerate(pieces):
            if not piece:
                continue
            mode = RenderMode.LIST if index % 2 else RenderMode.NORMAL
            segments.append(Segment(text=piece, mode=mode))
        return segments

    def segment(self) -> List[Segment]:
        """
        Segment the source into a flat ordered list

        Returns:
            List of Segments; an empty list for empty source. Source without
            any delimiter yields a single NORMAL segment.
        """
        segments: List[Segment] = []

        for piece in self.codeblocks_split():
            if piece.mode is RenderMode.BLOCK:
                segments.append(piece)
            else:
                segments.extend(self.listruns_split(piece.text))

        LOG(f"Split {len(self.source)} characters into {len(segments)} segments", level=3)
        return segments


def segment(raw: str) -> List[Segment]:
    """Segment raw text (see Segmenter.segment)"""
    return Segmenter(raw).segment()
