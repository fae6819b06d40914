"""
Markdown to sanitized HTML.

Raw HTML in the source is never passed through: with html disabled the
parser escapes it. Links and images with javascript:, vbscript:, file: or
non-image data: URLs are refused by markdown-it's link validation and stay
plain text.
"""

import html
import logging
from typing import Optional

from markdown_it import MarkdownIt

logger = logging.getLogger(__name__)

_md = (
    MarkdownIt("commonmark", {"html": False, "linkify": False, "typographer": False})
    .enable(["table", "strikethrough"])
)


def render_answer(markdown: Optional[str]) -> str:
    """
    Render markdown to sanitized HTML.

    Falls back to the escaped raw text inside <pre> if rendering fails.
    """
    markdown = markdown or ""
    try:
        return _md.render(markdown)
    except Exception as e:  # noqa: BLE001 - any parser failure degrades to escaped text
        logger.warning(f"Markdown rendering failed, falling back to escaped text: {e}")
        return f"<pre>{html.escape(markdown)}</pre>"
