"""Text sanitization for values submitted through the settings form.

Mirrors the host's ``sanitize_text_field`` contract: the result is a single
line of plain text with no tags, no control characters, no percent-encoded
octets and no surrounding whitespace. Applying it twice gives the same result
as applying it once.
"""

import html
import re
from typing import Any

import bleach

_SCRIPT_STYLE_RE = re.compile(
    r"<(script|style)[^>]*?>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
_OCTET_RE = re.compile(r"%[a-f0-9]{2}", re.IGNORECASE)
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def _to_text(value: Any) -> str | None:
    match value:
        case bool():
            return "1" if value else ""
        case str():
            return value
        case int() | float():
            return str(value)
        case _:
            return None


def strip_all_tags(text: str) -> str:
    """Remove markup, dropping script and style blocks with their content.

    Returns plain text: entities bleach introduces while stripping are
    decoded again, and only a bare "<" stays encoded as "&lt;".
    """
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)
    return html.unescape(text).replace("<", "&lt;")


def sanitize_text_field(value: Any) -> str:
    """Sanitize one submitted value into safe plain text.

    Scalars are converted to text first; containers and other objects
    sanitize to an empty string.

    Args:
        value: A single submitted value

    Returns:
        Trimmed, tag-free, single-line text
    """
    text = _to_text(value)
    if not text:
        return ""

    # Lone "&" is left alone unless the value actually contains markup
    if "<" in text:
        text = strip_all_tags(text)

    while _OCTET_RE.search(text):
        text = _OCTET_RE.sub("", text)

    text = _CONTROL_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()
