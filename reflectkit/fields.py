"""
Field handles - one declared member of a class.

A FieldHandle is a read-only view of a field declaration. Handles from
different levels of an inheritance chain are distinct even when they share a
name, because equality is by (owner, name).

Reads and writes go through object.__getattribute__ / object.__setattr__,
which bypass frozen dataclasses, frozen attrs classes, frozen Pydantic models
and __getattr__/__setattr__ hooks on the instance's class.
"""

from __future__ import annotations

import logging
from typing import Any

import attrs
import pydantic

from reflectkit.exceptions import FieldReadError, FieldTypeMismatchError, FieldWriteError

__all__ = [
    'FieldHandle',
    'check_assignable',
]

logger = logging.getLogger(__name__)


@attrs.define(frozen=True)
class FieldHandle:
    """A field declared directly on ``owner``."""

    name: str
    owner: Any
    annotation: Any = attrs.field(default=Any, eq=False)
    markers: tuple[Any, ...] = attrs.field(default=(), eq=False, converter=tuple)

    @property
    def qualified_name(self) -> str:
        owner_name = getattr(self.owner, '__qualname__', repr(self.owner))
        return f'{owner_name}.{self.name}'

    def read(self, instance: Any) -> Any:
        """
        Read this field from ``instance``, bypassing attribute hooks.

        Raises:
            FieldReadError: If instance is not an ``owner``, or the attribute
                is not set (and has no class-level default)
        """
        self._check_owner(instance, FieldReadError)
        try:
            return object.__getattribute__(instance, self.name)
        except AttributeError as e:
            raise FieldReadError(self.name, self.owner, f'attribute not set ({e})') from e
        except Exception as e:
            raise FieldReadError(self.name, self.owner, f'getter raised {type(e).__name__}: {e}') from e

    def write(self, instance: Any, value: Any, *, validate: bool = True) -> None:
        """
        Write ``value`` into this field on ``instance``, bypassing frozen guards.

        Args:
            instance: Object to modify
            value: New value
            validate: Check the value against the declared annotation first

        Raises:
            FieldTypeMismatchError: If validate and the value does not fit the annotation
            FieldWriteError: If instance is not an ``owner`` or the attribute cannot be set
        """
        self._check_owner(instance, FieldWriteError)
        if validate:
            check_assignable(self, value)
        try:
            object.__setattr__(instance, self.name, value)
        except (AttributeError, TypeError) as e:
            raise FieldWriteError(self.name, self.owner, f'cannot set attribute ({e})') from e
        except Exception as e:
            raise FieldWriteError(self.name, self.owner, f'setter raised {type(e).__name__}: {e}') from e

    def _check_owner(self, instance: Any, error: type[FieldReadError] | type[FieldWriteError]) -> None:
        try:
            owned = isinstance(instance, self.owner)
        except TypeError:
            owned = False
        if not owned:
            raise error(self.name, self.owner, f'{type(instance).__qualname__} instance is not a {self.owner!r}')


def check_assignable(field: FieldHandle, value: Any) -> None:
    """
    Strictly validate ``value`` against the field's declared annotation.

    Uses a Pydantic TypeAdapter in strict mode, so no coercion is accepted
    ('1' is not an int). Annotations Pydantic cannot build a schema for fall
    back to an isinstance check when the annotation is a plain class, and are
    otherwise not checked.

    Raises:
        FieldTypeMismatchError: If the value is rejected
    """
    annotation = field.annotation
    if annotation is Any or isinstance(annotation, str):
        # Unresolved forward reference
        return

    try:
        pydantic.TypeAdapter(annotation).validate_python(value, strict=True)
    except pydantic.ValidationError as e:
        raise FieldTypeMismatchError(field.name, field.owner, annotation, value) from e
    except (pydantic.PydanticUserError, pydantic.PydanticUndefinedAnnotation) as e:
        logger.debug(f'No schema for {field.qualified_name} ({e}), falling back to isinstance')
        if isinstance(annotation, type) and not isinstance(value, annotation):
            raise FieldTypeMismatchError(field.name, field.owner, annotation, value) from e
