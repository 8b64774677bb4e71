from __future__ import annotations

from cbt_app.core.markdown_math_renderer import MarkdownMathRenderer


def test_fragment_keeps_math_for_mathjax():
    html = MarkdownMathRenderer().render_fragment("Solve for $x$: **$3x + 5 = 20$**")

    assert "$x$" in html
    assert "<strong>$3x + 5 = 20$</strong>" in html


def test_raw_html_is_escaped_by_default():
    html = MarkdownMathRenderer().render_fragment("<script>alert(1)</script>")

    assert "<script>" not in html


def test_blank_text_renders_placeholder():
    assert "No question text" in MarkdownMathRenderer().render_fragment("   ")


def test_document_loads_mathjax_and_escapes_title():
    document = MarkdownMathRenderer().wrap_with_mathjax("<p>body</p>", title="A & B", font_size=18)

    assert "mathjax@3" in document
    assert "<title>A &amp; B</title>" in document
    assert "font-size: 18pt" in document
    assert "<body><p>body</p></body>" in document
