"""Mapping between Atom entry payloads and the entity model.

The feed server carries each entity as XML inside the Atom content element:

    <entry xmlns="http://www.w3.org/2005/Atom">
      <content type="application/xml">
        <entity>
          <title>Example</title>
          <tags repeatable="true">a</tags>
          <tags>b</tags>
        </entity>
      </content>
    </entry>
"""

from __future__ import annotations

import io
import logging
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
import defusedxml.ElementTree as SafeET

from ..core.types import Entity, Repeated, Scalar, Value
from ..errors import FeedClientError
from ..output.renderer import TAB_STOP, IndentCursor, XmlRenderer

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
ENTITY_CONTENT_TYPE = "application/xml"


def build_entry_xml(entity: Entity, indent: int = TAB_STOP) -> str:
    """Wrap an entity in an Atom entry document for insert and update."""
    pad = " " * indent
    buffer = io.StringIO()
    buffer.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    buffer.write(f'<entry xmlns="{ATOM_NS}">\n')
    buffer.write(f'{pad}<content type="{ENTITY_CONTENT_TYPE}">\n')
    cursor = IndentCursor(step=indent, level=indent * 2)
    XmlRenderer(buffer, cursor=cursor).render_entity(entity)
    buffer.write(f"{pad}</content>\n")
    buffer.write("</entry>\n")
    return buffer.getvalue()


def parse_entity_xml(text: str | bytes) -> Entity:
    """Parse a bare <entity> document or an Atom <entry> carrying one.

    Raises:
        FeedClientError: If the text is not XML or holds no entity
    """
    root = _parse(text)
    name = _local_name(root.tag)
    if name == "entity":
        return _entity_from_element(root)
    if name == "entry":
        element = _entity_element(root)
        if element is not None:
            return _entity_from_element(element)
    raise FeedClientError(f"No entity found in <{name}> document")


def parse_feed_xml(text: str | bytes) -> list[Entity]:
    """Parse an Atom <feed> (or an <entities> list) into entities in order."""
    root = _parse(text)
    name = _local_name(root.tag)
    if name == "entities":
        return [_entity_from_element(child) for child in root if _local_name(child.tag) == "entity"]
    if name != "feed":
        raise FeedClientError(f"Expected a <feed> document, got <{name}>")

    entities: list[Entity] = []
    for entry in root:
        if _local_name(entry.tag) != "entry":
            continue
        element = _entity_element(entry)
        if element is None:
            entry_id = next(
                (child.text for child in entry if _local_name(child.tag) == "id"), "unknown"
            )
            logger.warning(f"Skipping entry {entry_id}: no entity content")
            continue
        entities.append(_entity_from_element(element))
    return entities


def _parse(text: str | bytes) -> Element:
    try:
        return SafeET.fromstring(text)
    except (ParseError, DefusedXmlException) as exc:
        raise FeedClientError(f"Invalid XML: {exc}") from exc


def _entity_element(entry: Element) -> Element | None:
    for child in entry:
        if _local_name(child.tag) != "content":
            continue
        for candidate in child:
            if _local_name(candidate.tag) == "entity":
                return candidate
    return None


def _entity_from_element(element: Element) -> Entity:
    # Same-named siblings collapse into one repeated field at the first position.
    groups: dict[str, list[Element]] = {}
    for child in element:
        groups.setdefault(_local_name(child.tag), []).append(child)

    fields: list[tuple[str, Value]] = []
    for name, children in groups.items():
        if len(children) > 1 or children[0].get("repeatable") == "true":
            fields.append((name, Repeated(tuple(_value_from_element(child) for child in children))))
        else:
            fields.append((name, _value_from_element(children[0])))
    return Entity(fields)


def _value_from_element(element: Element) -> Value:
    if len(element):
        return _entity_from_element(element)
    return Scalar(element.text or "")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
