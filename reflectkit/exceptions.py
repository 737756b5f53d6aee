"""
Shared exceptions for reflectkit.

Raised by the low-level field handles. The public functions in
reflectkit.introspection convert them to absence or a failed WriteResult,
so callers of that module never see them.

Exception Hierarchy:
    ReflectKitError (base)
    └── FieldAccessError (read/write through a field handle)
        ├── FieldReadError (attribute unset, wrong owner, property raised)
        └── FieldWriteError (wrong owner, attribute cannot be set)
            └── FieldTypeMismatchError (value rejected by the declared type)
"""

from __future__ import annotations

from typing import Any


class ReflectKitError(Exception):
    """Base exception for all reflectkit errors."""


class FieldAccessError(ReflectKitError):
    """Base exception for failures while reading or writing a field."""

    def __init__(self, field_name: str, owner: Any, message: str) -> None:
        self.field_name = field_name
        self.owner = owner
        owner_name = getattr(owner, '__qualname__', repr(owner))
        super().__init__(f'{owner_name}.{field_name}: {message}')


class FieldReadError(FieldAccessError):
    """Raised when a field value cannot be read from an instance."""


class FieldWriteError(FieldAccessError):
    """Raised when a field value cannot be written to an instance."""


class FieldTypeMismatchError(FieldWriteError):
    """Raised when a value does not satisfy the field's declared type."""

    def __init__(self, field_name: str, owner: Any, expected: Any, value: Any) -> None:
        self.expected = expected
        self.actual_type = type(value)
        super().__init__(
            field_name,
            owner,
            f'expected {expected!r}, got value of type {type(value).__qualname__}',
        )
