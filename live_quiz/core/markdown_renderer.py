"""Markdown rendering for question prompts served to participants.

Prompts may carry emphasis, lists, tables or inline code. Raw HTML in a
prompt is escaped, never passed through to the participant page.
"""

from __future__ import annotations

from markdown_it import MarkdownIt

# Shared instance; MarkdownIt is safe for concurrent read-only renders.
_markdown = MarkdownIt("commonmark", {"html": False}).enable("table")


def render_prompt(prompt: str) -> str:
    """Return the HTML fragment for ``prompt``; blank prompts render to ``""``."""
    text = prompt.strip()
    if not text:
        return ""
    return _markdown.render(text)
