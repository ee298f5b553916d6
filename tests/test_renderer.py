"""
Renderer tests - dispatch per render mode and assembly

Covers the observable behavior of render(): what a reader of the preview
sees for each kind of input.
"""

import time

import pytest

from wikimark import render
from wikimark.config import appsettings
from wikimark.lib.renderer import Renderer, assemble
from wikimark.models.segment import RenderMode, Segment


class TestParagraphs:
    """Test plain text"""

    def test_each_line_one_paragraph(self):
        assert render("one\ntwo\n\nthree") == "<p>one</p>\n<p>two</p>\n\n<p>three</p>"

    def test_surrounding_whitespace_trimmed(self):
        assert render("\n\n  text  \n\n") == "<p>text</p>"

    @pytest.mark.parametrize("source", ["", "   ", "\n\n\t\n"])
    def test_blank_input(self, source):
        assert render(source) == ""


class TestHeadersAndBreaks:
    """Test block-level tags in NORMAL segments"""

    def test_title(self):
        """Header is not wrapped in a paragraph"""
        assert render("# Title") == "<h1>Title</h1>"

    def test_header_then_text(self):
        assert render("## Sub\nbody") == "<h2>Sub</h2>\n<p>body</p>"

    def test_header_with_emphasis(self):
        assert render("# *Hi*") == "<h1><i>Hi</i></h1>"

    def test_thematic_break(self):
        assert render("above\n---\nbelow") == "<p>above</p>\n<hr>\n<p>below</p>"

    def test_crlf_input(self):
        assert render("above\r\n---\r\nbelow") == "<p>above</p>\n<hr>\n<p>below</p>"

    def test_crlf_header_and_list(self):
        assert render("# T\r\n- a\r\n- b\r\n") == "<h1>T</h1><ul><li>a</li>\n<li>b</li></ul>"

    def test_escaped_hash_is_text(self):
        assert render(r"\# not a header") == "<p>&#35; not a header</p>"


class TestInlineFormatting:
    """Test text formatting rules"""

    def test_bold(self):
        assert render("**bold**") == "<p><b>bold</b></p>"

    @pytest.mark.parametrize("source, inner", [
        ("***x***", "<i><b>x</b></i>"),
        ("*x*", "<i>x</i>"),
        ("`x`", "<code>x</code>"),
        ("__x__", "<u>x</u>"),
        ("~~x~~", "<s>x</s>"),
    ])
    def test_formats(self, source, inner):
        assert render(source) == f"<p>{inner}</p>"

    def test_backslash_escape_blocks_emphasis(self):
        result = render("\\*not italic\\*")
        assert result == "<p>&#42;not italic&#42;</p>"
        assert "<i>" not in result


class TestExternalContent:
    """Test images and links"""

    def test_image_alone(self):
        assert render("![cat](cat.png)") == '<img alt="cat" src="cat.png">'

    def test_link_alone(self):
        style = appsettings.link_style
        assert render("[docs](http://d)") == f'<a href="http://d" style="{style}">docs</a>'

    def test_link_in_text(self):
        style = appsettings.link_style
        expected = f'<p>see <a href="http://d" style="{style}">docs</a></p>'
        assert render("see [docs](http://d)") == expected

    def test_quote_cannot_break_attribute(self):
        result = render('[x](http://a"onmouseover="alert(1))')
        assert 'href="http://a&quot;onmouseover=&quot;alert(1"' in result
        assert '"onmouseover="' not in result

    def test_javascript_link_stays_text(self):
        assert render("[x](javascript:alert(1))") == "<p>[x](javascript:alert(1))</p>"

    @pytest.mark.parametrize("source", [
        r"[x](java\script:alert(1))",
        r"[x](javascript\:alert(1))",
        "![x](\\vbscript:msgbox)",
    ])
    def test_escaped_script_scheme_stays_text(self, source):
        assert "<a " not in render(source)
        assert "<img " not in render(source)

    def test_underscores_in_target_kept(self):
        style = appsettings.link_style
        expected = f'<a href="http://h/__init__/__m__" style="{style}">x</a>'
        assert render("[x](http://h/__init__/__m__)") == expected

    def test_bold_link(self):
        style = appsettings.link_style
        expected = f'<p><b><a href="http://x" style="{style}">a</a></b></p>'
        assert render("**[a](http://x)**") == expected


class TestEscaping:
    """Test that author text can never inject markup"""

    def test_script(self):
        result = render("<script>")
        assert "&lt;script&gt;" in result
        assert "<script" not in result

    def test_script_in_list_and_block(self):
        result = render("- <script>\n```\n<script>\n```")
        assert "<script" not in result
        assert result.count("&lt;script&gt;") == 2


class TestCodeBlocks:
    """Test fenced blocks"""

    def test_block(self):
        assert render("```\ncode\n```") == "<pre>code</pre>"

    def test_no_inline_rules_inside(self):
        assert render("```\n*not bold*\n# nor header\n```") == "<pre>*not bold*\n# nor header</pre>"

    def test_language_tag_dropped(self):
        assert render("```python\nx = 1\n```") == "<pre>x = 1</pre>"

    def test_markup_escaped(self):
        assert render("```\n<b>&\n```") == "<pre>&lt;b&gt;&amp;</pre>"

    def test_backslashes_kept(self):
        assert render("```\nprint('a\\n')\n```") == "<pre>print(&#039;a\\n&#039;)</pre>"

    def test_indentation_kept(self):
        assert render("```\n    indented\n\tx\n```") == "<pre>    indented\n\tx</pre>"


class TestLists:
    """Test list runs"""

    def test_unordered(self):
        assert render("- a\n- b") == "<ul><li>a</li>\n<li>b</li></ul>"

    def test_ordered(self):
        assert render("1. a\n2. b") == "<ol><li>a</li>\n<li>b</li></ol>"

    def test_mixed_markers_classified_once(self):
        """A single numeric marker makes the whole run ordered"""
        assert render("- a\n1. b\n* c") == "<ol><li>a</li>\n<li>b</li>\n<li>c</li></ol>"

    def test_formatting_inside_items(self):
        assert render("* **a**\n* `b`") == "<ul><li><b>a</b></li>\n<li><code>b</code></li></ul>"

    def test_items_not_paragraphs(self):
        assert "<p>" not in render("- a\n- b")


class TestAssembly:
    """Test ordering of fragments"""

    def test_mixed_document(self):
        source = "# T\nintro\n```\nb\n```\n- c\n- d\nend"
        assert render(source) == (
            "<h1>T</h1>\n<p>intro</p>"
            "<pre>b</pre>"
            "<ul><li>c</li>\n<li>d</li></ul>"
            "<p>end</p>"
        )

    def test_assemble_concatenates(self):
        assert assemble(["<p>a</p>", "", "<pre>b</pre>"]) == "<p>a</p><pre>b</pre>"

    def test_render_is_deterministic(self):
        source = "# a\n- b\n```\nc\n```"
        assert render(source) == render(source)


class TestSegmentRender:
    """Test rendering of individual segments"""

    def test_table_mode_has_no_paragraphs(self):
        """TABLE applies only external-content and text-format rules"""
        piece = Segment("**x** ![i](i.png)", RenderMode.TABLE)
        assert Renderer().segment_render(piece) == '<b>x</b> <img alt="i" src="i.png">'

    def test_normal_segment(self):
        assert Renderer().segment_render(Segment("# a")) == "<h1>a</h1>"

    def test_block_segment_that_is_not_a_fence(self):
        """A BLOCK segment built by hand without fences is only escaped"""
        assert Renderer().segment_render(Segment("<x>", RenderMode.BLOCK)) == "&lt;x&gt;"


class TestHighlighting:
    """Test optional Pygments highlighting of tagged blocks"""

    def test_tagged_block_highlighted(self):
        result = Renderer(highlight_code=True).render("```python\nx = 1\n```")
        assert 'class="highlight"' in result
        assert "<pre>x = 1</pre>" not in result

    def test_untagged_block_not_highlighted(self):
        assert Renderer(highlight_code=True).render("```\nx\n```") == "<pre>x</pre>"

    def test_unknown_language_falls_back_to_text(self):
        result = Renderer(highlight_code=True).render("```nosuchlanguage\nhello\n```")
        assert 'class="highlight"' in result
        assert "hello" in result

    def test_highlighted_code_is_escaped(self):
        result = Renderer(highlight_code=True).render("```html\n<script>\n```")
        assert "<script>" not in result

    def test_wikimark_tag_uses_bundled_lexer(self):
        result = Renderer(highlight_code=True).render("```wikimark\n# Title\n```")
        assert 'class="highlight"' in result
        assert "Title" in result


class TestDocument:
    """Test standalone document building"""

    def test_title_from_first_header(self):
        renderer = Renderer()
        document = renderer.htmlDocument_build(renderer.render("# *My* Page\ntext"), "fallback")
        assert "<title>My Page</title>" in document
        assert document.startswith("<!DOCTYPE html>")

    def test_fallback_title_escaped(self):
        document = Renderer().htmlDocument_build("<p>x</p>", "a<b")
        assert "<title>a&lt;b</title>" in document


class TestPerformance:
    """Adversarial input must render in linear-ish time"""

    def test_unmatched_emphasis_markers(self):
        source = "\n".join("*" + "x" * 200 for _ in range(2000))
        source += "\n" + "**_~~`" * 5000
        start = time.perf_counter()
        result = render(source)
        assert time.perf_counter() - start < 5.0
        assert "<i>" not in result.split("\n")[0]
