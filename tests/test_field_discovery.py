"""
Tests for field discovery and lookup by name.

Covers own vs inherited fields, the None-vs-empty conventions, and
field_by_name resolution order.
"""

from __future__ import annotations

import pytest

from reflectkit.introspection import field_by_name, fields, fields_inherited, fields_own_only
from tests.beans import (
    Account,
    BaseBean,
    BeanWithMarkers,
    BeanWithoutMarkers,
    Empty,
    SubBean,
    Tracked,
)


def names(found: list | None) -> list[str]:
    return [f.name for f in found or []]


@pytest.mark.parametrize(
    ('cls', 'own', 'inherited'),
    [
        (BeanWithMarkers, 4, 1),
        (BeanWithoutMarkers, 3, 1),
        (SubBean, 2, 5),
    ],
    ids=lambda v: v.__name__ if isinstance(v, type) else str(v),
)
def test_fields_is_own_plus_inherited(cls: type, own: int, inherited: int) -> None:
    """fields() size equals fields_own_only() size plus fields_inherited() size."""
    assert len(fields_own_only(cls)) == own
    assert len(fields_inherited(cls)) == inherited
    assert len(fields(cls)) == own + inherited


def test_own_fields_in_declaration_order() -> None:
    assert names(fields_own_only(BeanWithMarkers)) == [
        'number',
        'name',
        'field_without_marker',
        'field_with_both_markers',
    ]


def test_own_fields_exclude_class_vars() -> None:
    """ClassVar annotations are class-level attributes, not fields."""
    assert 'instances' not in names(fields(BeanWithMarkers))


def test_fields_lists_own_before_inherited() -> None:
    assert names(fields(BeanWithMarkers)) == [
        'number',
        'name',
        'field_without_marker',
        'field_with_both_markers',
        'id',
    ]


def test_inherited_fields_walk_parent_before_grandparent() -> None:
    inherited = fields_inherited(SubBean)

    assert [f.owner for f in inherited] == [BeanWithMarkers] * 4 + [BaseBean]


def test_redeclared_fields_are_kept_at_each_level() -> None:
    """A name redeclared in a subclass appears once per declaring class."""
    same_name = [f for f in fields(SubBean) if f.name == 'name']

    assert [f.owner for f in same_name] == [SubBean, BeanWithMarkers]
    assert same_name[0] != same_name[1]


def test_fields_of_root_class_are_none() -> None:
    assert fields_own_only(Empty) is None
    assert fields_inherited(Empty) == []
    assert fields(Empty) is None


def test_inherited_is_empty_list_not_none() -> None:
    """fields_inherited uses [] for 'nothing found', unlike the other lookups."""
    assert fields_inherited(BaseBean) == []
    assert fields_own_only(BaseBean) is not None


def test_none_type() -> None:
    assert fields_own_only(None) is None
    assert fields_inherited(None) is None
    assert fields(None) is None


def test_pydantic_base_model_is_a_root() -> None:
    """Pydantic's own private attributes are not reported as inherited fields."""
    assert names(fields(Account)) == ['owner', 'balance']
    assert fields_inherited(Account) == []


def test_plain_class_annotations_are_fields() -> None:
    assert names(fields(Tracked)) == ['label', 'count']


def test_field_handle_records_owner_and_annotation() -> None:
    field = field_by_name(BeanWithoutMarkers, 'years')

    assert field.owner is BeanWithoutMarkers
    assert field.annotation is int
    assert field.qualified_name == 'BeanWithoutMarkers.years'


def test_discovery_returns_equal_handles_each_call() -> None:
    assert fields(BeanWithMarkers) == fields(BeanWithMarkers)


@pytest.mark.parametrize(
    'name',
    ['id', 'number', 'name', 'field_without_marker', 'field_with_both_markers'],
)
def test_field_by_name_finds_own_and_inherited(name: str) -> None:
    assert field_by_name(BeanWithMarkers, name).name == name


@pytest.mark.parametrize('name', ['ids', 'field', 'Name', 'nonexistent', '', None])
def test_field_by_name_misses(name: str | None) -> None:
    """Names are matched exactly and case-sensitively; empty names never match."""
    assert field_by_name(BeanWithMarkers, name) is None


def test_field_by_name_resolves_instances() -> None:
    bean = BeanWithoutMarkers()

    assert field_by_name(bean, 'things') == field_by_name(BeanWithoutMarkers, 'things')
    assert field_by_name(bean, 'id').owner is BaseBean


def test_field_by_name_prefers_own_declaration() -> None:
    assert field_by_name(SubBean, 'name').owner is SubBean


def test_field_by_name_on_none_or_fieldless_type() -> None:
    assert field_by_name(None, 'id') is None
    assert field_by_name(Empty, 'id') is None


@pytest.mark.parametrize(
    'target',
    [BeanWithMarkers(), 42, 'BeanWithMarkers', [BeanWithMarkers]],
    ids=['instance', 'int', 'str', 'list'],
)
def test_discovery_of_non_types_is_none(target: object) -> None:
    """The discovery functions take types; anything else yields None rather than raising."""
    assert fields_own_only(target) is None
    assert fields_inherited(target) is None
    assert fields(target) is None


def test_instances_resolve_through_lookup_functions() -> None:
    """field_by_name resolves instances where fields() does not."""
    bean = BeanWithMarkers()

    assert fields(bean) is None
    assert field_by_name(bean, 'number') == field_by_name(BeanWithMarkers, 'number')
