"""
Core entity model.

This package contains the tagged value types shared by the renderer,
the feed client and the CLI.
"""

from .types import Entity, Feed, Repeated, Scalar, Value, entity_from_dict, value_from_python

__all__ = [
    "Entity",
    "Feed",
    "Repeated",
    "Scalar",
    "Value",
    "entity_from_dict",
    "value_from_python",
]
