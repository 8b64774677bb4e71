"""Markdown + LaTeX rendering helpers for question text.

Question text is stored as markdown with ``$...$`` math and rendered to HTML
for the ``QWebEngineView`` in the exam window; MathJax typesets the math at
display time, so the question bank never stores pre-rendered fragments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt

_MATHJAX_SCRIPT = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"

_EMPTY_FRAGMENT = "<p><em>No question text.</em></p>"

_DOCUMENT_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; color: #1e293b; font-size: {font_size}pt; }}
      .question-meta {{ color: #64748B; font-size: 0.85em; margin-bottom: 0.5rem; }}
      .question-body {{ line-height: 1.5; }}
      .question-image {{ max-width: 100%; margin-top: 0.75rem; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src="{mathjax}"></script>
  </head>
  <body>{body}</body>
</html>"""


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Turns question markdown into HTML that MathJax can typeset."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable("table")

    def render_fragment(self, markdown_text: str) -> str:
        text = markdown_text.strip()
        if not text:
            return _EMPTY_FRAGMENT
        return self._markdown.render(text)

    def wrap_with_mathjax(self, body_html: str, title: str = "ExamQt", font_size: int = 14) -> str:
        """Embed ``body_html`` in a standalone document that loads MathJax."""
        return _DOCUMENT_TEMPLATE.format(
            title=escape(title),
            font_size=font_size,
            mathjax=_MATHJAX_SCRIPT,
            body=body_html,
        )


# Only the Qt thread renders.
renderer = MarkdownMathRenderer()
