"""Tests for XML rendering of entities and feeds."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import io

import pytest

from feed_tool.core.types import Entity, Repeated, Scalar, entity_from_dict
from feed_tool.output.renderer import IndentCursor, XmlRenderer, render_entity, render_feed, render_field
from feed_tool.utils.escaping import unescape_xml


def _sample_entity() -> Entity:
    return Entity([("title", Scalar("Example")), ("tags", Repeated((Scalar("a"), Scalar("b"))))])


def test_render_feed_matches_documented_layout():
    expected = (
        "<entities>\n"
        "  <entity>\n"
        "    <title>Example</title>\n"
        '    <tags repeatable="true">a</tags>\n'
        "    <tags>b</tags>\n"
        "  </entity>\n"
        "</entities>\n"
    )
    assert render_feed([_sample_entity()]) == expected


def test_render_empty_feed():
    assert render_feed([]) == "<entities>\n</entities>\n"


def test_render_feed_preserves_order_and_duplicates():
    first = entity_from_dict({"id": "2"})
    second = entity_from_dict({"id": "1"})
    text = render_feed([first, second, first])
    assert [line.strip() for line in text.splitlines() if "<id>" in line] == [
        "<id>2</id>",
        "<id>1</id>",
        "<id>2</id>",
    ]


def test_render_nested_entity_and_empty_scalar():
    entity = entity_from_dict({"name": "Ada", "address": {"city": "London", "zip": None}})
    expected = (
        "<entity>\n"
        "  <name>Ada</name>\n"
        "  <address>\n"
        "    <city>London</city>\n"
        "    <zip></zip>\n"
        "  </address>\n"
        "</entity>\n"
    )
    assert render_entity(entity) == expected


def test_render_repeated_entities_nest_fields():
    entity = entity_from_dict({"phones": [{"type": "home", "number": "1"}, {"type": "work"}]})
    expected = (
        "<entity>\n"
        '  <phones repeatable="true">\n'
        "    <type>home</type>\n"
        "    <number>1</number>\n"
        "  </phones>\n"
        "  <phones>\n"
        "    <type>work</type>\n"
        "  </phones>\n"
        "</entity>\n"
    )
    assert render_entity(entity) == expected


def test_repeatable_marker_only_on_first_occurrence():
    text = render_field("tags", Repeated((Scalar("x"), Scalar("y"), Scalar("z"))))
    assert text.count('repeatable="true"') == 1
    assert text.splitlines()[0] == '<tags repeatable="true">x</tags>'
    assert text.count("<tags") == 3
    assert text.count("</tags>") == 3


def test_empty_repeated_renders_nothing():
    assert render_field("tags", Repeated(())) == ""


def test_nested_repeated_group_renders_as_block():
    group = Repeated((Repeated((Scalar("a"), Scalar("b"))),))
    expected = (
        '<x repeatable="true">\n'
        '  <x repeatable="true">a</x>\n'
        "  <x>b</x>\n"
        "</x>\n"
    )
    assert render_field("x", group) == expected


def test_scalar_escaping_round_trips():
    original = "a<b>&\"c\"'d'"
    line = render_field("v", Scalar(original)).rstrip("\n")
    inner = line[len("<v>") : -len("</v>")]
    assert inner == "a&lt;b&gt;&amp;&quot;c&quot;&apos;d&apos;"
    assert unescape_xml(inner) == original


def test_repeated_scalars_are_escaped():
    text = render_field("v", Repeated((Scalar("<"), Scalar(None))))
    assert text == '<v repeatable="true">&lt;</v>\n<v></v>\n'


def test_indentation_returns_to_starting_level():
    cursor = IndentCursor(level=4)
    renderer = XmlRenderer(io.StringIO(), cursor=cursor)

    renderer.render_feed([_sample_entity(), entity_from_dict({"a": {"b": ["c", {"d": "e"}]}})])
    assert cursor.level == 4
    renderer.render_entity(_sample_entity())
    assert cursor.level == 4
    renderer.render_field("plain", Scalar("x"))
    assert cursor.level == 4

    lines = renderer.out.getvalue().splitlines()
    assert all(line.startswith("    ") for line in lines)


def test_custom_indent_step():
    text = render_entity(entity_from_dict({"a": "1"}), indent=4)
    assert text == "<entity>\n    <a>1</a>\n</entity>\n"


def test_render_writes_to_sink_and_returns_text():
    sink = io.StringIO()
    text = render_feed([_sample_entity()], sink)
    assert sink.getvalue() == text


def test_concurrent_renders_do_not_share_indentation():
    feed = [entity_from_dict({"n": str(i), "child": {"deep": {"deeper": "x"}}}) for i in range(20)]
    expected = render_feed(feed)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: render_feed(feed), range(32)))

    assert all(result == expected for result in results)


def test_render_field_rejects_untagged_values():
    with pytest.raises(TypeError):
        render_field("raw", "not tagged")  # type: ignore[arg-type]
