"""XML text escaping shared by the renderer and the embedding expander."""

from __future__ import annotations

from xml.sax.saxutils import escape, unescape

_EXTRA_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_EXTRA_REVERSE = {"&quot;": '"', "&apos;": "'"}


def escape_xml(text: str | None) -> str:
    """Escape the five XML special characters; None escapes to ""."""
    if text is None:
        return ""
    return escape(text, _EXTRA_ENTITIES)


def unescape_xml(text: str) -> str:
    return unescape(text, _EXTRA_REVERSE)
