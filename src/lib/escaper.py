r"""
Escaper for raw wiki text

Two passes, always in this order:
1. markup_escape: turn markup-significant characters into named references
2. backslashes_hide: turn \X into the numeric reference of X, so the escaped
   character is invisible to every later rule (e.g. \* never starts italics)

Example:
    >>> escape(r"<b> \*literal\*")
    '&lt;b&gt; &#42;literal&#42;'
"""

import html
import re
from typing import Tuple

# Ampersand must stay first so the references inserted after it are not
# escaped a second time.
MARKUP_REFERENCES: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

# A backslash followed by either one of the references produced above (the
# author escaped a markup character) or any other non-newline character.
_BACKSLASH_ESCAPE = re.compile(r"\\(&(?:amp|lt|gt|quot|#039);|[^\n])")


def markup_escape(raw: str) -> str:
    """Replace & < > " ' with their character references"""
    for char, reference in MARKUP_REFERENCES:
        raw = raw.replace(char, reference)
    return raw


def _numeric_reference(match: re.Match[str]) -> str:
    char = html.unescape(match.group(1))
    return f"&#{ord(char)};"


def backslashes_hide(text: str) -> str:
    r"""
    Replace each backslash-escaped character with its numeric reference

    Args:
        text: Text that has already been through markup_escape

    Returns:
        Text where \X became &#N; (N = code point of X). A backslash before a
        newline, or at the very end of the text, is left alone.
    """
    return _BACKSLASH_ESCAPE.sub(_numeric_reference, text)


def escape(raw: str) -> str:
    """Escape markup characters, then hide backslash-escaped characters"""
    return backslashes_hide(markup_escape(raw))


def newlines_normalize(raw: str) -> str:
    r"""Turn \r\n and lone \r line endings into \n"""
    return raw.replace("\r\n", "\n").replace("\r", "\n")
