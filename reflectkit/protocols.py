"""
Shared protocols for reflectkit.

TypeRegistry is the seam between the field-discovery algorithms in
reflectkit.introspection and the host's type system. The default
implementation (AnnotationRegistry in registry.py) reads Python class
annotations; tests plug in fake registries with fake type descriptors.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from reflectkit.fields import FieldHandle


class TypeRegistry(Protocol):
    """
    Protocol for type introspection - enables the discovery algorithms to work with any type model.

    Implementations:
    - AnnotationRegistry (registry.py): Python classes, Annotated markers, decorator type markers
    """

    def is_type(self, target: Any) -> bool:
        """True if target is a type descriptor rather than an instance."""
        ...

    def resolve(self, target: Any) -> Any:
        """Return target itself if it is a type descriptor, else its runtime type."""
        ...

    def ancestors_of(self, cls: Any) -> Sequence[Any]:
        """Ancestor type descriptors, immediate parent first, root types excluded."""
        ...

    def members_of(self, cls: Any) -> Sequence[FieldHandle]:
        """Fields declared directly on cls, in declaration order."""
        ...

    def markers_of(self, element: Any) -> Sequence[Any]:
        """Marker instances attached to a FieldHandle or a type descriptor."""
        ...
