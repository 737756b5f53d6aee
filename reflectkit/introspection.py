"""
Introspection utilities for structured types.

Discovers a type's fields (own and inherited), filters them by markers,
and reads/writes field values by handle.

Conventions:
- Discovery and lookup functions return None for "nothing found", never an
  empty list. The exception is fields_inherited, which returns [] when no
  ancestor declares fields.
- Nothing here raises for bad input or failed access. Reads degrade to None;
  writes report through the returned WriteResult and the log.
- Every function takes an optional keyword-only ``registry`` (a TypeRegistry);
  the default introspects Python classes via their annotations.
"""

from __future__ import annotations

import collections.abc
import logging
from typing import Any, TypeVar

from reflectkit.config import settings
from reflectkit.exceptions import FieldAccessError
from reflectkit.fields import FieldHandle
from reflectkit.markers import is_marker_of
from reflectkit.protocols import TypeRegistry
from reflectkit.registry import default_registry
from reflectkit.schemas import WriteResult

__all__ = [
    'field_by_name',
    'fields',
    'fields_inherited',
    'fields_own_only',
    'fields_with_all_markers',
    'fields_with_any_markers',
    'fields_with_marker',
    'fields_with_markers',
    'get_marker',
    'get_type_marker',
    'get_value',
    'get_value_typed',
    'has_all_markers',
    'has_any_markers',
    'has_marker',
    'has_markers',
    'has_type_marker',
    'is_array_valued',
    'is_collection_valued',
    'set_value',
]

logger = logging.getLogger(__name__)

T = TypeVar('T')

_UNREAD = object()


# ==============================================================================
# Field discovery
# ==============================================================================


def fields_own_only(cls: Any, *, registry: TypeRegistry | None = None) -> list[FieldHandle] | None:
    """
    Fields declared directly on ``cls``, not on its ancestors.

    Args:
        cls: Type to inspect

    Returns:
        Fields in declaration order, or None if cls is None, is not a type,
        or declares none

    Example:
        >>> [f.name for f in fields_own_only(BeanWithMarkers)]
        ['number', 'name', 'field_without_marker', 'field_with_both_markers']
    """
    registry = registry or default_registry
    if cls is None or not registry.is_type(cls):
        return None
    own = list(registry.members_of(cls))
    return own or None


def fields_inherited(cls: Any, *, registry: TypeRegistry | None = None) -> list[FieldHandle] | None:
    """
    Fields declared by every ancestor of ``cls``, immediate parent first.

    Root types (``object``, and ``pydantic.BaseModel`` for the default
    registry) are excluded. Fields sharing a name with one declared further
    down are kept: each level is discovered independently.

    Returns:
        Inherited fields; an empty list (not None) when no ancestor declares
        any. None only when cls is None or not a type (pass instances to
        field_by_name or the fields_with_* functions, which resolve them).
    """
    registry = registry or default_registry
    if cls is None or not registry.is_type(cls):
        return None
    inherited: list[FieldHandle] = []
    for ancestor in registry.ancestors_of(cls):
        inherited.extend(registry.members_of(ancestor))
    return inherited


def fields(cls: Any, *, registry: TypeRegistry | None = None) -> list[FieldHandle] | None:
    """
    All fields of ``cls``: own fields followed by inherited fields.

    Returns:
        The combined fields, or None if there are none (or cls is None or not a type)
    """
    inherited = fields_inherited(cls, registry=registry)
    if inherited is None:
        return None
    combined = fields_own_only(cls, registry=registry) or []
    combined.extend(inherited)
    return combined or None


def field_by_name(target: Any, name: str | None, *, registry: TypeRegistry | None = None) -> FieldHandle | None:
    """
    Find a field by exact (case-sensitive) name.

    Args:
        target: Type to inspect, or an instance whose runtime type is inspected
        name: Field name

    Returns:
        The first match in own-then-inherited order, or None if name is empty
        or nothing matches
    """
    if not name or target is None:
        return None
    registry = registry or default_registry
    all_fields = fields(registry.resolve(target), registry=registry)
    if not all_fields:
        return None

    for field in all_fields:
        if field.name == name:
            return field

    # Not found
    return None


# ==============================================================================
# Marker predicates
# ==============================================================================


def has_marker(field: FieldHandle | None, marker_type: type, *, registry: TypeRegistry | None = None) -> bool:
    """True if ``field`` is not None and carries a ``marker_type`` marker."""
    if field is None:
        return False
    registry = registry or default_registry
    return any(is_marker_of(marker, marker_type) for marker in registry.markers_of(field))


def has_any_markers(field: FieldHandle | None, *marker_types: type, registry: TypeRegistry | None = None) -> bool:
    """
    True if ``field`` carries at least one of ``marker_types``.

    False when no marker types are given.
    """
    if field is None or not marker_types:
        return False
    return any(has_marker(field, marker_type, registry=registry) for marker_type in marker_types)


def has_all_markers(field: FieldHandle | None, *marker_types: type, registry: TypeRegistry | None = None) -> bool:
    """
    True if ``field`` carries every one of ``marker_types``.

    False when no marker types are given - an empty set is not vacuously satisfied.
    """
    if field is None or not marker_types:
        return False
    return all(has_marker(field, marker_type, registry=registry) for marker_type in marker_types)


def has_markers(field: FieldHandle | None, *marker_types: type, registry: TypeRegistry | None = None) -> bool:
    """Same as has_any_markers."""
    return has_any_markers(field, *marker_types, registry=registry)


def get_marker(field: FieldHandle | None, marker_type: type[T], *, registry: TypeRegistry | None = None) -> T | None:
    """The first ``marker_type`` marker on ``field``, or None."""
    if field is None:
        return None
    registry = registry or default_registry
    for marker in registry.markers_of(field):
        if is_marker_of(marker, marker_type):
            return marker
    return None


def has_type_marker(target: Any, marker_type: type, *, registry: TypeRegistry | None = None) -> bool:
    """
    True if the type itself carries a ``marker_type`` marker.

    Field-level markers are not considered, and type markers are not inherited.

    Args:
        target: Type to inspect, or an instance whose runtime type is inspected
        marker_type: Marker class
    """
    return get_type_marker(target, marker_type, registry=registry) is not None


def get_type_marker(target: Any, marker_type: type[T], *, registry: TypeRegistry | None = None) -> T | None:
    """
    The ``marker_type`` marker attached to the type, or None.

    Example:
        >>> get_type_marker(BeanWithMarkers, Entity)
        Entity(table='beans')
    """
    if target is None:
        return None
    registry = registry or default_registry
    for marker in registry.markers_of(registry.resolve(target)):
        if is_marker_of(marker, marker_type):
            return marker
    return None


# ==============================================================================
# Field selection by marker
# ==============================================================================


def fields_with_marker(
    target: Any, marker_type: type, *, registry: TypeRegistry | None = None
) -> list[FieldHandle] | None:
    """
    Fields of the type (own and inherited) carrying ``marker_type``.

    Args:
        target: Type to inspect, or an instance whose runtime type is inspected
        marker_type: Marker class

    Returns:
        Matching fields in fields() order, or None if none match
    """
    return _select(target, lambda field: has_marker(field, marker_type, registry=registry), registry)


def fields_with_any_markers(
    target: Any, *marker_types: type, registry: TypeRegistry | None = None
) -> list[FieldHandle] | None:
    """Fields carrying at least one of ``marker_types``, or None."""
    return _select(target, lambda field: has_any_markers(field, *marker_types, registry=registry), registry)


def fields_with_all_markers(
    target: Any, *marker_types: type, registry: TypeRegistry | None = None
) -> list[FieldHandle] | None:
    """Fields carrying every one of ``marker_types``, or None."""
    return _select(target, lambda field: has_all_markers(field, *marker_types, registry=registry), registry)


def fields_with_markers(
    target: Any, *marker_types: type, registry: TypeRegistry | None = None
) -> list[FieldHandle] | None:
    """Same as fields_with_any_markers."""
    return fields_with_any_markers(target, *marker_types, registry=registry)


def _select(
    target: Any,
    predicate: collections.abc.Callable[[FieldHandle], bool],
    registry: TypeRegistry | None,
) -> list[FieldHandle] | None:
    if target is None:
        return None
    registry = registry or default_registry
    all_fields = fields(registry.resolve(target), registry=registry)
    if not all_fields:
        return None
    selected = [field for field in all_fields if predicate(field)]
    return selected or None


# ==============================================================================
# Value access
# ==============================================================================


def get_value(instance: Any, field: FieldHandle | None) -> Any | None:
    """
    Current value of ``field`` on ``instance``, bypassing attribute hooks.

    Best-effort: returns None if either argument is None or the read fails
    for any reason (wrong owner type, attribute not set, property raised).
    """
    if field is None or instance is None:
        return None
    try:
        return field.read(instance)
    except FieldAccessError as e:
        logger.debug(f'Read of {field.qualified_name} failed: {e}')
        return None


def get_value_typed(instance: Any, field: FieldHandle | None, expected_type: type[T]) -> T | None:
    """
    Like get_value, but None unless the value's runtime type is exactly ``expected_type``.

    Subclasses do not match: a bool is not returned for expected_type=int.
    """
    value = get_value(instance, field)
    return value if value is not None and type(value) is expected_type else None


def set_value(instance: Any, value: Any, field: FieldHandle | None) -> WriteResult:
    """
    Write ``value`` into ``field`` on ``instance``, bypassing frozen guards.

    Never raises. The write is skipped when the current value is the very same
    object as ``value`` (an identity check with ``is``, not an equality check).
    When REFLECTKIT_VALIDATE_WRITES is on (the default), values that do not
    satisfy the declared type are rejected and the prior value is left intact.

    Args:
        instance: Object to modify
        value: New value
        field: Field handle, usually from field_by_name

    Returns:
        WriteResult with outcome 'written', 'unchanged', 'skipped' or 'failed'
    """
    if field is None or instance is None:
        missing = 'field' if field is None else 'instance'
        return WriteResult(field=field.name if field else None, outcome='skipped', reason=f'{missing} is None')

    try:
        current = field.read(instance)
    except FieldAccessError:
        current = _UNREAD

    if current is value:
        return WriteResult(field=field.name, outcome='unchanged')

    try:
        field.write(instance, value, validate=settings.VALIDATE_WRITES)
    except FieldAccessError as e:
        logger.log(settings.write_failure_log_level, f'Failed to set {field.qualified_name}: {e}')
        return WriteResult(field=field.name, outcome='failed', reason=str(e))

    return WriteResult(field=field.name, outcome='written')


def is_collection_valued(value: Any) -> bool:
    """
    True if ``value`` is a list-like or set-like container.

    Structural check on the runtime value: any Sequence or Set, except
    strings and binary buffers (see is_array_valued). Mappings are not
    collections here.
    """
    if isinstance(value, (str, collections.abc.Buffer)):
        return False
    return isinstance(value, (collections.abc.Sequence, collections.abc.Set))


def is_array_valued(value: Any) -> bool:
    """
    True if ``value`` is a homogeneous array of fixed-width items.

    Any object exporting the buffer protocol: bytes, bytearray, memoryview,
    array.array (and e.g. numpy arrays). "Fixed" refers to the item width
    (every element has the buffer's itemsize), not the length: bytearray and
    array.array can grow and still count as arrays.
    """
    return value is not None and isinstance(value, collections.abc.Buffer)
