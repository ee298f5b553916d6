"""
Renderer for wikimark text

Dispatches every segment to the rule set of its render mode and assembles the
resulting fragments into the final markup.

Pipeline:
    raw text -> Segmenter -> (per segment) escape + rule set -> assemble

The renderer is stateless between calls: every render is a full re-render of
the raw text it is handed. It must only ever be fed the authoritative raw
text, never its own output.

Example:
    >>> render("# Title\\n\\nSome **bold** text")
    '<h1>Title</h1>\\n\\n<p>Some <b>bold</b> text</p>'
"""

import re
from typing import Iterable, Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound

from ..config import appsettings
from ..models.rules import ruleset_apply
from ..models.segment import RenderMode, Segment
from .escaper import escape, markup_escape, newlines_normalize
from .lexer import WikimarkLexer
from .log import LOG
from .rules import ORDERED_MARKER, ruleset_get
from .segmenter import segment

# Language tag and interior of a fenced block, matched on the raw text
CODEBLOCK_PARTS = re.compile(r"^```([^\s`]*)\r?\n(.*?)\r?\n?```$", re.DOTALL)

WIKIMARK_ALIASES = ("wikimark", "wiki", "md")


class Renderer:
    """
    Renders raw wiki text to HTML markup

    Responsibilities:
    - Segment raw text
    - Escape each segment and apply the rule set of its mode
    - Wrap list runs in <ol>/<ul>
    - Optionally syntax-highlight tagged code blocks
    - Assemble fragments in order
    """

    def __init__(
        self,
        highlight_code: Optional[bool] = None,
        pygments_style: Optional[str] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            highlight_code: Highlight tagged code blocks with Pygments
                            (default: appsettings.highlight_code)
            pygments_style: Pygments style name (default: appsettings.pygments_style)
        """
        self.highlight_code = (
            appsettings.highlight_code if highlight_code is None else highlight_code
        )
        self.pygments_style = pygments_style or appsettings.pygments_style

    def render(self, raw: str) -> str:
        """
        Render raw text to markup

        Args:
            raw: Authoritative raw text

        Returns:
            Assembled markup; empty string for empty or blank input
        """
        segments = segment(raw)
        LOG(f"Rendering {len(segments)} segments", level=2)
        return assemble(self.segment_render(piece) for piece in segments)

    def segment_render(self, piece: Segment) -> str:
        """
        Render one segment with the rule set of its mode

        Pure: the result depends only on piece.text and piece.mode. Line
        endings are normalised to LF first, so CRLF text renders the same.

        Args:
            piece: Segment to render

        Returns:
            Markup fragment for this segment
        """
        raw = newlines_normalize(piece.text)
        if piece.mode is RenderMode.BLOCK:
            return self.codeblock_render(raw)
        if piece.mode is RenderMode.LIST:
            return self.listrun_render(raw)

        return ruleset_apply(ruleset_get(piece.mode), escape(raw).strip())

    def listrun_render(self, raw: str) -> str:
        """
        Render a list run as <ol> or <ul>

        The container is chosen once for the whole run: if any line of the raw
        text carries a numeric marker the run is ordered, even when other
        lines use bullets.
        """
        fragment = ruleset_apply(ruleset_get(RenderMode.LIST), escape(raw).strip())
        tag = "ol" if ORDERED_MARKER.search(raw) else "ul"
        return f"<{tag}>{fragment}</{tag}>"

    def codeblock_render(self, raw: str) -> str:
        r"""
        Render a fenced block verbatim

        Backslashes are not hidden here: no inline rule runs on code, so
        "\n" in code must stay a backslash followed by n.
        """
        text = raw.strip()

        if self.highlight_code:
            parts = CODEBLOCK_PARTS.match(text)
            if parts and parts.group(1):
                return self.codeblock_highlight(parts.group(2), parts.group(1))

        return ruleset_apply(ruleset_get(RenderMode.BLOCK), markup_escape(text))

    def codeblock_highlight(self, code: str, language: str) -> str:
        """
        Highlight raw code with Pygments

        Args:
            code: Raw (unescaped) interior of the fenced block
            language: Language tag from the opening fence

        Returns:
            Highlighted HTML; Pygments does its own escaping
        """
        lexer: Lexer
        try:
            if language.lower() in WIKIMARK_ALIASES:
                lexer = WikimarkLexer()
            else:
                lexer = get_lexer_by_name(language)
        except ClassNotFound:
            LOG(f"No lexer for '{language}', rendering as text", level=2)
            lexer = TextLexer()

        formatter = HtmlFormatter(style=self.pygments_style, noclasses=True)
        return highlight(code, lexer, formatter).rstrip("\n")

    def htmlDocument_build(self, markup: str, title: str) -> str:
        """
        Wrap rendered markup in a standalone HTML document

        Args:
            markup: Rendered fragment
            title: Fallback document title, used when markup has no <h1>

        Returns:
            Complete HTML document
        """
        heading = re.search(r"<h1>(.*?)</h1>", markup)
        if heading:
            title = re.sub(r"<[^>]+>", "", heading.group(1))
        else:
            title = markup_escape(title)

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
</head>
<body>
    <div class="markdown">
{markup}
    </div>
</body>
</html>
"""


def assemble(fragments: Iterable[str]) -> str:
    """Concatenate rendered fragments in order, with no separators"""
    return "".join(fragments)


def render(raw_text: str) -> str:
    """
    Render raw wiki text to markup

    This is the client-facing entry point: the render mode of every part of
    the text is decided internally.
    """
    return Renderer().render(raw_text)
