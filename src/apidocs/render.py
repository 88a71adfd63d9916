"""Markdown rendering for descriptions."""

from __future__ import annotations

import re

import markdown

_EXTENSIONS = ["fenced_code", "tables"]

_LEADING_P = re.compile(r"^<p>")
_TRAILING_P = re.compile(r"</p>$")


def render_markdown(text: str | None) -> str:
    """Render markdown to HTML. Empty or missing text renders as ""."""
    if not text:
        return ""
    return markdown.markdown(text, extensions=_EXTENSIONS)


def render_inline(text: str | None) -> str:
    """Render markdown and strip one wrapping <p>...</p>.

    Used for param, event and return descriptions, which the templates
    place inside an existing element.
    """
    html = render_markdown(text).strip()
    html = _LEADING_P.sub("", html, count=1)
    return _TRAILING_P.sub("", html, count=1)
