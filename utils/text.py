import html

import bleach


def sanitize_text(text: str) -> str:
    """
    Strip all markup from user supplied text before it is stored.
    The result is plain text, so entities bleach escapes are turned back
    into characters ("Tom &amp; Jerry" -> "Tom & Jerry").
    """
    cleaned = bleach.clean(text, tags=set(), attributes={}, strip=True)
    return html.unescape(cleaned).strip()
