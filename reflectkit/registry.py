"""
Default TypeRegistry over Python classes.

Declared members are a class's own annotations (inspect.get_annotations, not
merged across the MRO), minus ClassVar and InitVar entries. Field markers come
from Annotated metadata; type markers from Marker class decorators.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import typing
from collections.abc import Sequence
from typing import Any, ClassVar, get_origin

import pydantic

from reflectkit.fields import FieldHandle
from reflectkit.markers import markers_in_annotation, type_markers

__all__ = [
    'AnnotationRegistry',
    'DEFAULT_ROOT_TYPES',
    'default_registry',
]

logger = logging.getLogger(__name__)

# Excluded from ancestor walks. BaseModel declares private __pydantic_*__ attributes.
DEFAULT_ROOT_TYPES: tuple[type, ...] = (object, pydantic.BaseModel)

_NON_FIELD_PREFIXES = ('ClassVar', 'typing.ClassVar', 'InitVar', 'dataclasses.InitVar')


class AnnotationRegistry:
    """Introspects Python classes through their own annotations."""

    def __init__(self, root_types: Sequence[type] = DEFAULT_ROOT_TYPES) -> None:
        self.root_types = tuple(root_types)

    def is_type(self, target: Any) -> bool:
        return isinstance(target, type)

    def resolve(self, target: Any) -> type:
        return target if isinstance(target, type) else type(target)

    def ancestors_of(self, cls: type) -> list[type]:
        return [base for base in cls.__mro__[1:] if base not in self.root_types]

    def members_of(self, cls: type) -> list[FieldHandle]:
        return [
            FieldHandle(name=name, owner=cls, annotation=annotation, markers=markers_in_annotation(annotation))
            for name, annotation in _own_annotations(cls).items()
            if not _is_class_level(annotation)
        ]

    def markers_of(self, element: Any) -> tuple[Any, ...]:
        if isinstance(element, FieldHandle):
            return element.markers
        if isinstance(element, type):
            return type_markers(element)
        return ()

    def __repr__(self) -> str:
        roots = ', '.join(root.__qualname__ for root in self.root_types)
        return f'AnnotationRegistry(root_types=({roots}))'


def _own_annotations(cls: type) -> dict[str, Any]:
    """
    Annotations declared on cls itself, each evaluated independently.

    An annotation that cannot be evaluated (a name imported under
    TYPE_CHECKING, or local to the function that defined cls) stays a string;
    the other annotations of the class are still resolved.
    """
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(cls))

    resolved: dict[str, Any] = {}
    for name, annotation in _raw_annotations(cls).items():
        if isinstance(annotation, typing.ForwardRef):
            annotation = annotation.__forward_arg__
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)  # noqa: S307
            except (NameError, SyntaxError, TypeError, AttributeError) as e:
                logger.debug(f'Could not evaluate {cls.__qualname__}.{name}: {annotation!r} ({e})')
        resolved[name] = annotation
    return resolved


def _raw_annotations(cls: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(cls)
    except NameError:
        # Python 3.14+ deferred annotations referencing undefined names
        import annotationlib

        return annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF)


def _is_class_level(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(_NON_FIELD_PREFIXES)
    return get_origin(annotation) is ClassVar or annotation is ClassVar or isinstance(annotation, dataclasses.InitVar)


default_registry = AnnotationRegistry()
