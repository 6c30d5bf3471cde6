"""Tests for the version axis model."""

from __future__ import annotations

import pytest

from apiversioning.errors import CrossAxisComparisonError, DuplicateAxisError
from apiversioning.graph.elements import Enum, Namespace
from apiversioning.versioning.axis import AxisRegistry, VersionAxis


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_enum(namespace: Namespace, *names: str) -> Enum:
    enum = Enum("Versions", namespace=namespace)
    for name in names:
        enum.add_member(name)
    return enum


def _tags(enum: Enum) -> list:
    return list(enum.members.values())


# ---------------------------------------------------------------------------
# VersionAxis
# ---------------------------------------------------------------------------


class TestVersionAxis:
    def test_indices_follow_declaration_order(self):
        ns = Namespace("Contoso")
        enum = _make_enum(ns, "2024-01-01", "2023-06-01", "2025-02-01")
        axis = VersionAxis(ns, _tags(enum))

        assert [v.name for v in axis.all()] == ["2024-01-01", "2023-06-01", "2025-02-01"]
        assert [v.index for v in axis.all()] == [0, 1, 2]

    def test_lookup_by_tag(self):
        ns = Namespace("Contoso")
        enum = _make_enum(ns, "v1", "v2")
        axis = VersionAxis(ns, _tags(enum))

        v2 = axis.lookup(enum.members["v2"])
        assert v2 is not None
        assert v2.index == 1
        assert v2.namespace is ns
        assert v2.tag is enum.members["v2"]

    def test_lookup_unknown_tag_returns_none(self):
        ns = Namespace("Contoso")
        axis = VersionAxis(ns, _tags(_make_enum(ns, "v1")))
        other = _make_enum(Namespace("Other"), "v1")
        assert axis.lookup(other.members["v1"]) is None

    def test_value_defaults_to_name(self):
        ns = Namespace("Contoso")
        axis = VersionAxis(ns, _tags(_make_enum(ns, "v1")))
        assert axis.all()[0].value == "v1"

    def test_value_uses_member_value(self):
        ns = Namespace("Contoso")
        enum = Enum("Versions", namespace=ns)
        enum.add_member("v2022", "2022-08-31")
        axis = VersionAxis(ns, _tags(enum))
        assert axis.all()[0].value == "2022-08-31"

    def test_empty_axis_rejected(self):
        with pytest.raises(ValueError, match="at least one version"):
            VersionAxis(Namespace("Contoso"), [])

    def test_repeated_tag_rejected(self):
        ns = Namespace("Contoso")
        enum = _make_enum(ns, "v1")
        tag = enum.members["v1"]
        with pytest.raises(ValueError, match="listed twice"):
            VersionAxis(ns, [tag, tag])

    def test_len_and_iter(self):
        ns = Namespace("Contoso")
        axis = VersionAxis(ns, _tags(_make_enum(ns, "v1", "v2", "v3")))
        assert len(axis) == 3
        assert [v.name for v in axis] == ["v1", "v2", "v3"]


# ---------------------------------------------------------------------------
# Version ordering
# ---------------------------------------------------------------------------


class TestVersionOrdering:
    def test_same_axis_comparison(self):
        ns = Namespace("Contoso")
        v1, v2 = VersionAxis(ns, _tags(_make_enum(ns, "v1", "v2"))).all()
        assert v1 < v2
        assert v2 > v1
        assert v1 <= v1
        assert v2 >= v1

    def test_cross_axis_comparison_raises(self):
        a = Namespace("A")
        b = Namespace("B")
        (va,) = VersionAxis(a, _tags(_make_enum(a, "v1"))).all()
        (vb,) = VersionAxis(b, _tags(_make_enum(b, "v1"))).all()

        with pytest.raises(CrossAxisComparisonError):
            _ = va < vb
        with pytest.raises(CrossAxisComparisonError):
            _ = va >= vb

    def test_versions_hash_by_identity(self):
        ns = Namespace("Contoso")
        v1, v2 = VersionAxis(ns, _tags(_make_enum(ns, "v1", "v2"))).all()
        assert len({v1, v2, v1}) == 2


# ---------------------------------------------------------------------------
# AxisRegistry
# ---------------------------------------------------------------------------


class TestAxisRegistry:
    def test_declare_and_lookup(self):
        registry = AxisRegistry()
        ns = Namespace("Contoso")
        enum = _make_enum(ns, "v1", "v2")
        axis = registry.declare_axis(ns, _tags(enum))

        assert registry.axis_for(ns) is axis
        assert registry.is_versioned(ns)
        assert registry.version_for_tag(enum.members["v2"]).index == 1

    def test_duplicate_axis_raises(self):
        registry = AxisRegistry()
        ns = Namespace("Contoso")
        registry.declare_axis(ns, _tags(_make_enum(ns, "v1")))
        with pytest.raises(DuplicateAxisError, match="Contoso"):
            registry.declare_axis(ns, _tags(_make_enum(ns, "v2")))

    def test_axis_for_does_not_walk_ancestors(self):
        registry = AxisRegistry()
        parent = Namespace("Contoso")
        child = Namespace("Sub", namespace=parent)
        registry.declare_axis(parent, _tags(_make_enum(parent, "v1")))

        assert registry.axis_for(child) is None
        assert registry.find_versioned_namespace(child) is parent

    def test_find_versioned_namespace_none(self):
        registry = AxisRegistry()
        assert registry.find_versioned_namespace(Namespace("Plain")) is None

    def test_versions_for_enum(self):
        registry = AxisRegistry()
        ns = Namespace("Contoso")
        enum = _make_enum(ns, "v1")
        axis = registry.declare_axis(ns, _tags(enum))

        assert registry.versions_for_enum(enum) == (ns, axis)
        assert registry.versions_for_enum(Enum("Detached")) is None
        assert registry.versions_for_enum(_make_enum(Namespace("Plain"), "x")) is None

    def test_unknown_tag(self):
        registry = AxisRegistry()
        stray = _make_enum(Namespace("Plain"), "v1").members["v1"]
        assert registry.version_for_tag(stray) is None

    def test_reused_enum_resolves_to_declaring_namespace(self):
        registry = AxisRegistry()
        parent = Namespace("Contoso")
        child = Namespace("Sub", namespace=parent)
        enum = _make_enum(parent, "v1", "v2")
        registry.declare_axis(parent, _tags(enum))
        registry.declare_axis(child, _tags(enum))

        version = registry.version_for_tag(enum.members["v2"])
        assert version.namespace is parent
        assert version is registry.axis_for(parent).lookup(enum.members["v2"])

    def test_reused_enum_declared_in_child_first(self):
        registry = AxisRegistry()
        parent = Namespace("Contoso")
        child = Namespace("Sub", namespace=parent)
        enum = _make_enum(parent, "v1", "v2")
        registry.declare_axis(child, _tags(enum))
        registry.declare_axis(parent, _tags(enum))

        assert registry.version_for_tag(enum.members["v1"]).namespace is parent

    def test_foreign_enum_tag_resolves_to_first_axis(self):
        registry = AxisRegistry()
        first, second = Namespace("First"), Namespace("Second")
        enum = _make_enum(Namespace("Plain"), "v1")
        registry.declare_axis(first, _tags(enum))
        registry.declare_axis(second, _tags(enum))

        assert registry.version_for_tag(enum.members["v1"]).namespace is first
