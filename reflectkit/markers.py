"""
Markers for fields and types.

Field markers use the Annotated pattern (as Pydantic v2 does): any metadata
object inside ``Annotated[T, ...]`` is a marker, identified by its class.

Type markers are Marker instances applied as class decorators:

    @dataclass(frozen=True)
    class Entity(Marker):
        table: str = ''

    @Entity(table='users')
    class User:
        id: Annotated[int, PrimaryKey()]
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

__all__ = [
    'Marker',
    'TYPE_MARKERS_ATTR',
    'is_marker_of',
    'markers_in_annotation',
    'type_markers',
]

TYPE_MARKERS_ATTR = '__reflectkit_markers__'

C = TypeVar('C', bound=type)


@dataclass(frozen=True)
class Marker:
    """Base class for markers that can also be attached to a class."""

    def __call__(self, cls: C) -> C:
        # Stored in the class's own __dict__ only, so subclasses do not see it
        existing = cls.__dict__.get(TYPE_MARKERS_ATTR, ())
        setattr(cls, TYPE_MARKERS_ATTR, (*existing, self))
        return cls


def type_markers(cls: type) -> tuple[Any, ...]:
    """Markers applied directly to ``cls`` (not inherited)."""
    return tuple(vars(cls).get(TYPE_MARKERS_ATTR, ()))


def is_marker_of(marker: Any, marker_type: type) -> bool:
    """Marker identity is the marker's exact class."""
    return type(marker) is marker_type


def markers_in_annotation(annotation: Any) -> tuple[Any, ...]:
    """
    Collect the Annotated metadata attached to a field annotation.

    Handles Python 3.12+ type aliases and Union types (e.g., ``IdField | None``).
    Metadata nested inside other generics (``list[Annotated[str, X]]``) belongs
    to the item type, not the field, and is not collected.

    Args:
        annotation: Evaluated annotation of a field

    Returns:
        Marker instances in declaration order

    Example:
        >>> markers_in_annotation(Annotated[int | None, Column(), Index()])
        (Column(), Index())
    """
    found: list[Any] = []
    _collect_markers(annotation, found)
    return tuple(found)


def _collect_markers(annotation: Any, found: list[Any]) -> None:
    origin = get_origin(annotation)

    # Check Annotated directly
    if origin is Annotated:
        args = get_args(annotation)
        found.extend(args[1:])
        _collect_markers(args[0], found)
        return

    # Check Python 3.12+ type alias (__value__ attribute)
    if hasattr(annotation, '__value__'):
        _collect_markers(annotation.__value__, found)
        return

    # Check Union types (e.g., IdField | None)
    if origin is Union or origin is types.UnionType:
        for union_arg in get_args(annotation):
            _collect_markers(union_arg, found)
