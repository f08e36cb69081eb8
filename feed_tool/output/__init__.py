"""XML output for entities and feeds."""

from .renderer import IndentCursor, XmlRenderer, render_entity, render_feed, render_field

__all__ = ["IndentCursor", "XmlRenderer", "render_entity", "render_feed", "render_field"]
