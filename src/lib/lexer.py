"""
Custom Pygments lexer for wikimark syntax highlighting

Highlights wikimark source when it is itself shown inside a fenced block
tagged ```wikimark (or ```wiki / ```md), e.g. on a help page that documents
the syntax.

Token types:
- Generic.Heading: # headers
- Generic.Strong / Generic.Emph: **bold**, *italic*
- Name.Tag: list markers, ---
- Name.Attribute / String: link and image text / targets
- String.Backtick: `inline code` and fences
- String.Escape: backslash escapes
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Generic,
)


class WikimarkLexer(RegexLexer):
    """
    Lexer for wikimark markup

    Example:
        # Title
        - an item with **bold** and a [link](https://example.org)

    Tokens:
        # Title → Generic.Heading
        - → Name.Tag
        **bold** → Generic.Strong
        [link] → Name.Attribute
        (https://example.org) → String
    """

    name = 'Wikimark'
    aliases = ['wikimark', 'wiki']
    filenames = ['*.wiki']

    tokens = {
        'root': [
            # Fenced block: everything up to the closing fence is literal
            (r'^```[^\n]*\n', String.Backtick, 'fence'),

            # Headers
            (r'^#{1,6}[ \t]+[^\n]*', Generic.Heading),

            # Thematic break
            (r'^---$', Name.Tag),

            # List markers
            (r'^([ \t]*)([-+*]|\d+\.)([ \t]+)', bygroups(Text, Name.Tag, Text)),

            # Backslash escapes
            (r'\\[^\n]', String.Escape),

            # Images and links
            (r'(!?\[)([^\]\n]*)(\]\()([^)\s]*)(\))',
             bygroups(Punctuation, Name.Attribute, Punctuation, String, Punctuation)),

            # Text formatting
            (r'\*\*\*[^\n]+?\*\*\*', Generic.Strong),
            (r'\*\*[^\n]+?\*\*', Generic.Strong),
            (r'\*[^\n]+?\*', Generic.Emph),
            (r'__[^\n]+?__', Generic.Emph),
            (r'~~[^\n]+?~~', Generic.Deleted),
            (r'`[^`\n]+`', String.Backtick),

            # Everything else is text
            (r'[^\\\[!*_~`\n]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],

        'fence': [
            (r'^```[ \t]*\n?', String.Backtick, '#pop'),
            (r'[^\n]*\n', String),
            (r'[^\n]+', String),
        ],
    }

