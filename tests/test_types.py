"""Tests for the tagged entity model."""

from feed_tool.core.types import Entity, Repeated, Scalar, entity_from_dict, value_from_python


def test_scalar_text_renders_none_as_empty():
    assert Scalar(None).text == ""
    assert Scalar().text == ""
    assert Scalar(42).text == "42"
    assert Scalar("").text == ""


def test_value_from_python_tags_each_variant():
    assert value_from_python("x") == Scalar("x")
    assert value_from_python(None) == Scalar(None)
    assert value_from_python(["a", "b"]) == Repeated((Scalar("a"), Scalar("b")))
    nested = value_from_python({"inner": {"leaf": 1}})
    assert isinstance(nested, Entity)
    assert nested["inner"] == Entity({"leaf": Scalar(1)})


def test_value_from_python_keeps_tagged_values():
    scalar = Scalar("kept")
    assert value_from_python(scalar) is scalar


def test_entity_preserves_insertion_order():
    entity = entity_from_dict({"zeta": 1, "alpha": 2, "mid": 3})
    assert list(entity) == ["zeta", "alpha", "mid"]
    assert len(entity) == 3


def test_entity_duplicate_pairs_keep_last_value():
    entity = Entity([("name", Scalar("first")), ("name", Scalar("second"))])
    assert len(entity) == 1
    assert entity["name"] == Scalar("second")


def test_repeated_accepts_any_sequence():
    group = Repeated([Scalar("a"), Scalar("b")])
    assert group.items == (Scalar("a"), Scalar("b"))
    assert len(group) == 2
    assert Repeated().items == ()


def test_entity_is_read_only():
    entity = entity_from_dict({"a": 1})
    assert not hasattr(entity, "__setitem__")
