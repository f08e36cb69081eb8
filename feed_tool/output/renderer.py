"""
XML rendering for entities and feeds.

Output layout:

    <entities>
      <entity>
        <title>Example</title>
        <tags repeatable="true">a</tags>
        <tags>b</tags>
      </entity>
    </entities>

Indentation state lives in an IndentCursor owned by each render call, so
renders running on different threads never share it.
"""

from __future__ import annotations

from contextlib import contextmanager
import io
from typing import Callable, Iterable, Iterator, TextIO

from ..core.types import Entity, Repeated, Scalar, Value
from ..utils.escaping import escape_xml

TAB_STOP = 2
REPEATABLE_ATTR = ' repeatable="true"'


class IndentCursor:
    """Current indentation level of one rendering operation."""

    def __init__(self, step: int = TAB_STOP, level: int = 0):
        self.step = step
        self.level = level

    def more(self) -> None:
        self.level += self.step

    def less(self) -> None:
        self.level -= self.step

    @contextmanager
    def nested(self) -> Iterator[None]:
        self.more()
        try:
            yield
        finally:
            self.less()

    @property
    def prefix(self) -> str:
        return " " * self.level


class XmlRenderer:
    """Writes entities and feeds as indented XML to a text sink.

    Attributes:
        out: Text stream receiving the rendered lines
        cursor: Indentation state for this renderer
    """

    def __init__(self, out: TextIO, indent: int = TAB_STOP, cursor: IndentCursor | None = None):
        self.out = out
        self.cursor = cursor if cursor is not None else IndentCursor(step=indent)

    def render_feed(self, feed: Iterable[Entity]) -> None:
        self._line("<entities>")
        with self.cursor.nested():
            for entity in feed:
                self.render_entity(entity)
        self._line("</entities>")

    def render_entity(self, entity: Entity) -> None:
        self._line("<entity>")
        with self.cursor.nested():
            self.render_fields(entity)
        self._line("</entity>")

    def render_fields(self, entity: Entity) -> None:
        for name, value in entity.items():
            self.render_field(name, value)

    def render_field(self, name: str, value: Value) -> None:
        """Render one field according to its value variant.

        Raises:
            TypeError: If value is not a Scalar, Repeated or Entity
        """
        if isinstance(value, Scalar):
            self._line(f"<{name}>{escape_xml(value.text)}</{name}>")
        elif isinstance(value, Entity):
            self._line(f"<{name}>")
            with self.cursor.nested():
                self.render_fields(value)
            self._line(f"</{name}>")
        elif isinstance(value, Repeated):
            self._render_repeated(name, value)
        else:
            raise TypeError(f"Cannot render field {name!r} of type {type(value).__name__}")

    def _render_repeated(self, name: str, group: Repeated) -> None:
        for index, item in enumerate(group):
            open_tag = f"<{name}{REPEATABLE_ATTR if index == 0 else ''}>"
            if isinstance(item, Scalar):
                self._line(f"{open_tag}{escape_xml(item.text)}</{name}>")
                continue
            self._line(open_tag)
            with self.cursor.nested():
                if isinstance(item, Entity):
                    self.render_fields(item)
                elif isinstance(item, Repeated):
                    self._render_repeated(name, item)
                else:
                    raise TypeError(
                        f"Cannot render element {index} of field {name!r} "
                        f"of type {type(item).__name__}"
                    )
            self._line(f"</{name}>")

    def _line(self, text: str) -> None:
        self.out.write(self.cursor.prefix)
        self.out.write(text)
        self.out.write("\n")


def render_feed(feed: Iterable[Entity], out: TextIO | None = None, indent: int = TAB_STOP) -> str:
    """Render a feed under an <entities> root.

    Args:
        feed: Entities in the order they should appear
        out: Optional sink; when omitted the text is only returned
        indent: Spaces added per nesting level

    Returns:
        The rendered XML text
    """
    return _render(lambda renderer: renderer.render_feed(feed), out, indent)


def render_entity(entity: Entity, out: TextIO | None = None, indent: int = TAB_STOP) -> str:
    return _render(lambda renderer: renderer.render_entity(entity), out, indent)


def render_field(name: str, value: Value, out: TextIO | None = None, indent: int = TAB_STOP) -> str:
    return _render(lambda renderer: renderer.render_field(name, value), out, indent)


def _render(action: Callable[[XmlRenderer], None], out: TextIO | None, indent: int) -> str:
    buffer = io.StringIO()
    action(XmlRenderer(buffer, indent=indent))
    text = buffer.getvalue()
    if out is not None:
        out.write(text)
    return text
