"""
Core data types for feed entities.

An entity is an ordered mapping from field name to a value, where a value is
one of three tagged variants:
- Scalar: a single value rendered as text (None renders as empty text)
- Repeated: a field that occurs several times within one entity
- Entity: a nested sub-entity

A feed is an ordered list of entities, kept in server response order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Scalar:
    """A single field value.

    Attributes:
        value: Any object convertible with str(), or None for empty content
    """

    value: Any = None

    @property
    def text(self) -> str:
        if self.value is None:
            return ""
        return str(self.value)


@dataclass(frozen=True)
class Repeated:
    """A field occurring several times within one entity.

    Attributes:
        items: Values in occurrence order; may be empty
    """

    items: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)


class Entity(Mapping[str, "Value"]):
    """Read-only, insertion-ordered mapping of field names to values.

    Duplicate names supplied as pairs keep the last value.
    """

    __slots__ = ("_fields",)

    def __init__(
        self,
        fields: Mapping[str, "Value"] | Iterable[tuple[str, "Value"]] | None = None,
    ):
        self._fields: dict[str, Value] = dict(fields or {})

    def __getitem__(self, name: str) -> "Value":
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Entity({self._fields!r})"


Value = Union[Scalar, Repeated, Entity]
Feed = list[Entity]


def value_from_python(obj: Any) -> Value:
    """Convert untyped nested data into the tagged value model.

    Mappings become entities, lists and tuples become repeated groups and
    everything else (including None) becomes a scalar. Values that are
    already tagged are returned unchanged.
    """
    if isinstance(obj, (Scalar, Repeated, Entity)):
        return obj
    if isinstance(obj, Mapping):
        return entity_from_dict(obj)
    if isinstance(obj, (list, tuple)):
        return Repeated(tuple(value_from_python(item) for item in obj))
    return Scalar(obj)


def entity_from_dict(data: Mapping[str, Any]) -> Entity:
    return Entity((str(name), value_from_python(value)) for name, value in data.items())
