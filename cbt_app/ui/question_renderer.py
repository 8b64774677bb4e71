"""Question rendering utilities for the exam window."""

from __future__ import annotations

from html import escape
from pathlib import Path

from cbt_app.core.markdown_math_renderer import renderer
from cbt_app.core.models import Question


def render_question(question: Question, position: int, total: int, font_size: int = 14) -> str:
    """Render the question header, text and optional picture as HTML.

    Options are not part of the document; the exam window shows them as
    buttons so they can be selected with the mouse or the A-D keys.
    """
    parts = [
        f'<div class="question-meta"><strong>{escape(question.subject)}</strong>'
        f" &middot; Question {position} of {total}</div>",
        f'<div class="question-body">{renderer.render_fragment(question.text)}</div>',
    ]
    if question.image_path:
        image_url = Path(question.image_path).resolve().as_uri()
        parts.append(f'<img class="question-image" src="{escape(image_url)}" alt="question picture" />')
    return renderer.wrap_with_mathjax("".join(parts), title=question.subject, font_size=font_size)
