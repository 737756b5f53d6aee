"""reflectkit - field discovery, marker matching and field access for structured types."""

from reflectkit.exceptions import (
    FieldAccessError,
    FieldReadError,
    FieldTypeMismatchError,
    FieldWriteError,
    ReflectKitError,
)
from reflectkit.fields import FieldHandle
from reflectkit.introspection import (
    field_by_name,
    fields,
    fields_inherited,
    fields_own_only,
    fields_with_all_markers,
    fields_with_any_markers,
    fields_with_marker,
    fields_with_markers,
    get_marker,
    get_type_marker,
    get_value,
    get_value_typed,
    has_all_markers,
    has_any_markers,
    has_marker,
    has_markers,
    has_type_marker,
    is_array_valued,
    is_collection_valued,
    set_value,
)
from reflectkit.markers import Marker
from reflectkit.protocols import TypeRegistry
from reflectkit.registry import AnnotationRegistry
from reflectkit.schemas import WriteResult

__all__ = [
    'AnnotationRegistry',
    'FieldAccessError',
    'FieldHandle',
    'FieldReadError',
    'FieldTypeMismatchError',
    'FieldWriteError',
    'Marker',
    'ReflectKitError',
    'TypeRegistry',
    'WriteResult',
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
