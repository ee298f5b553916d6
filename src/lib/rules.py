r"""
Rule tables for wikimark

Four ordered rule sets, one per RenderMode, built once at import time from
shared sub-sets. Every rule runs against text that has already been escaped,
so the only markup a pattern can see is markup produced by an earlier rule.

Order is load-bearing:
- headers run h6 down to h1 so "## x" is never claimed by the h1 rule
- images run before links, since ![alt](src) contains [alt](src)
- paragraph-wrap runs after every block-level rule and paragraph-unwrap
  immediately after it, so block tags never end up inside <p>
- text formatting runs last and only ever touches inline text, never the
  inside of a tag produced by an earlier rule

All inline patterns are line-local ([^\n] / lazy quantifiers), so a pass stays
linear in line length even on long runs of unmatched emphasis markers.
"""

import html
import re
from types import MappingProxyType
from typing import Mapping, Match

from ..config import appsettings
from ..models.rules import Rule, RuleSet, rule_make
from ..models.segment import RenderMode
from .escaper import markup_escape

# Schemes that must never become live link or image targets
UNSAFE_SCHEMES = ("javascript:", "vbscript:")

# Browsers drop these anywhere inside a URL before reading its scheme
_URL_IGNORED = re.compile(r"[\t\n\r]")

# ...and strip these (C0 controls and space) from its start
_URL_LEADING = "".join(chr(code) for code in range(0x21))

# A whole tag emitted by an earlier rule. Raw "<" never survives escaping, so
# every "<" left in the text opens one of these.
_TAG = r"<[^<>\n]*>"


def target_isUnsafe(target: str) -> bool:
    """
    Check whether an escaped link or image target carries a script scheme

    The target is tested as the browser will read it: character references
    decoded (backslash escapes become &#N; before any rule runs), tabs and
    newlines removed, leading spaces and control characters stripped.
    """
    decoded = _URL_IGNORED.sub("", html.unescape(target))
    decoded = decoded.lstrip(_URL_LEADING)
    return decoded.lower().startswith(UNSAFE_SCHEMES)


def _image_replace(match: Match[str]) -> str:
    alt, src = match.group(1), match.group(2)
    if target_isUnsafe(src):
        return match.group(0)
    return f'<img alt="{alt}" src="{src}">'


def _link_replace(match: Match[str]) -> str:
    text, href = match.group(1), match.group(2)
    if target_isUnsafe(href):
        return match.group(0)
    return f'<a href="{href}" style="{markup_escape(appsettings.link_style)}">{text}</a>'


def inline_make(name: str, marker: str, template: str) -> Rule:
    """
    Build an inline formatting rule that leaves existing tags alone

    Tags are matched as a whole and returned unchanged, so a marker inside an
    attribute value (e.g. "__init__" in a link target) never opens a span.
    The span content may hold complete tags but never stops inside one.
    """
    pattern = rf"({_TAG})|{marker}((?:{_TAG}|[^<\n])+?){marker}"

    def replace(match: Match[str]) -> str:
        if match.group(1):
            return match.group(1)
        return template.format(match.group(2))

    return rule_make(name, pattern, replace)


HEADER_RULES: RuleSet = tuple(
    rule_make(f"h{level}", rf"^#{{{level}}}[ \t]+([^\r\n]+)", rf"<h{level}>\1</h{level}>", re.M)
    for level in range(6, 0, -1)
)

THEMATIC_BREAK_RULES: RuleSet = (
    rule_make("hr", r"^---(?=\r?$)", "<hr>", re.M),
)

EXTERNAL_RULES: RuleSet = (
    rule_make("image", r"!\[([^\]\n]*)\]\(([^)\s]+)\)", _image_replace),
    rule_make("link", r"\[([^\]\n]+)\]\(([^)\s]+)\)", _link_replace),
)

PARAGRAPH_RULES: RuleSet = (
    rule_make("paragraph", r"^([^\r\n]*\S[^\r\n]*)(?=\r?$)", r"<p>\1</p>", re.M),
    rule_make(
        "unparagraph",
        r"^<p>("
        r"<h([1-6])>[^\n]*</h\2>"
        r"|<hr>"
        r"|<img [^<>\n]*>"
        r"|<a [^<>\n]*>(?:(?!</a>)[^\n])*</a>"
        r")</p>(?=\r?$)",
        r"\1",
        re.M,
    ),
)

TEXT_FORMAT_RULES: RuleSet = (
    inline_make("bold-italic", r"\*\*\*", "<i><b>{}</b></i>"),
    inline_make("bold", r"\*\*", "<b>{}</b>"),
    inline_make("italic", r"\*", "<i>{}</i>"),
    inline_make("code", "`", "<code>{}</code>"),
    inline_make("underline", "__", "<u>{}</u>"),
    inline_make("strike", "~~", "<s>{}</s>"),
)

LIST_ITEM_RULES: RuleSet = (
    rule_make("list-item", r"^[ \t]*(?:[-+*]|\d+\.)[ \t]+([^\n]*)$", r"<li>\1</li>", re.M),
)

# Strips the fences; the interior is kept verbatim minus the newline that
# ends the opening fence line and the one before the closing fence.
BLOCK_RULES: RuleSet = (
    rule_make("pre", r"^```[^\s`]*\r?\n(.*?)\r?\n?```$", r"<pre>\1</pre>", re.S),
)

NORMAL_RULES: RuleSet = (
    HEADER_RULES
    + THEMATIC_BREAK_RULES
    + EXTERNAL_RULES
    + PARAGRAPH_RULES
    + TEXT_FORMAT_RULES
)

LIST_RULES: RuleSet = LIST_ITEM_RULES + EXTERNAL_RULES + TEXT_FORMAT_RULES

TABLE_RULES: RuleSet = EXTERNAL_RULES + TEXT_FORMAT_RULES

RULESETS: Mapping[RenderMode, RuleSet] = MappingProxyType({
    RenderMode.NORMAL: NORMAL_RULES,
    RenderMode.BLOCK: BLOCK_RULES,
    RenderMode.LIST: LIST_RULES,
    RenderMode.TABLE: TABLE_RULES,
})

# Decides <ol> versus <ul> for a whole list run, tested on the raw text
ORDERED_MARKER = re.compile(r"^[ \t]*\d+\.[ \t]+\S", re.M)


def ruleset_get(mode: RenderMode) -> RuleSet:
    """Return the ordered rule set for a render mode"""
    return RULESETS[mode]
