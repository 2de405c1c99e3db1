"""Escaping for free text that the other party will read: cover letters, rating comments, messages"""

import html
from typing import Optional


def sanitize_text(value: Optional[str]) -> str:
    """
    Trim and HTML-escape user text before it is stored.

    Length limits are enforced by the request schemas on the unescaped text,
    so a stored value may be longer than the limit after escaping.
    """
    return html.escape((value or "").strip(), quote=True)
