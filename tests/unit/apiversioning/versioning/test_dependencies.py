"""Tests for the version dependency graph."""

from __future__ import annotations

import pytest

from apiversioning.errors import DependencyShapeError
from apiversioning.graph.elements import Enum, Namespace
from apiversioning.types import DependencyShape
from apiversioning.versioning.axis import AxisRegistry
from apiversioning.versioning.dependencies import (
    FixedDependency,
    MappedDependency,
    VersionDependencyGraph,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _declare(registry: AxisRegistry, name: str, *versions: str, parent=None):
    ns = Namespace(name, namespace=parent)
    enum = Enum("Versions", namespace=ns)
    for v in versions:
        enum.add_member(v)
    axis = registry.declare_axis(ns, list(enum.members.values()))
    return ns, enum, axis


@pytest.fixture
def registry():
    return AxisRegistry()


@pytest.fixture
def graph(registry):
    return VersionDependencyGraph(registry)


# ---------------------------------------------------------------------------
# Fixed form
# ---------------------------------------------------------------------------


class TestFixedDependency:
    def test_unversioned_consumer_pins_version(self, registry, graph):
        lib, _, lib_axis = _declare(registry, "Library", "l1", "l2")
        consumer = Namespace("Service")
        graph.declare_fixed(consumer, lib_axis.all()[1])

        deps = graph.dependencies_of(consumer)
        assert list(deps) == [lib]
        assert isinstance(deps[lib], FixedDependency)
        assert deps[lib].shape is DependencyShape.FIXED
        assert deps[lib].version.name == "l2"

    def test_redeclaring_replaces_pin(self, registry, graph):
        lib, _, lib_axis = _declare(registry, "Library", "l1", "l2")
        consumer = Namespace("Service")
        graph.declare_fixed(consumer, lib_axis.all()[0])
        graph.declare_fixed(consumer, lib_axis.all()[1])
        assert graph.dependencies_of(consumer)[lib].version.name == "l2"

    def test_versioned_consumer_rejects_fixed_form(self, registry, graph):
        consumer, _, _ = _declare(registry, "Contoso", "v1")
        _, _, lib_axis = _declare(registry, "Library", "l1")
        with pytest.raises(DependencyShapeError, match="Contoso"):
            graph.declare_fixed(consumer, lib_axis.all()[0])


# ---------------------------------------------------------------------------
# Mapped form
# ---------------------------------------------------------------------------


class TestMappedDependency:
    def test_mapping_resolved_to_versions(self, registry, graph):
        consumer, c_enum, c_axis = _declare(registry, "Contoso", "v1", "v2")
        lib, _, lib_axis = _declare(registry, "Library", "w1", "w2", "w3")
        w = lib_axis.all()

        graph.declare_mapped(
            consumer, lib, {c_enum.members["v1"]: w[1], c_enum.members["v2"]: w[2]}
        )

        entry = graph.dependencies_of(consumer)[lib]
        assert isinstance(entry, MappedDependency)
        v1, v2 = c_axis.all()
        assert entry.get(v1) is w[1]
        assert entry.get(v2) is w[2]

    def test_redeclaring_extends_mapping(self, registry, graph):
        consumer, c_enum, c_axis = _declare(registry, "Contoso", "v1", "v2")
        lib, _, lib_axis = _declare(registry, "Library", "w1", "w2")
        w = lib_axis.all()

        graph.declare_mapped(consumer, lib, {c_enum.members["v1"]: w[0]})
        graph.declare_mapped(consumer, lib, {c_enum.members["v2"]: w[1]})

        deps = graph.dependencies_of(consumer)
        assert len(deps) == 1
        assert len(deps[lib].mapping) == 2

    def test_unversioned_consumer_rejects_mapping(self, registry, graph):
        lib, _, lib_axis = _declare(registry, "Library", "w1")
        with pytest.raises(DependencyShapeError, match="fixed"):
            graph.declare_mapped(Namespace("Service"), lib, {})

    def test_targets_must_belong_to_dependency(self, registry, graph):
        consumer, c_enum, _ = _declare(registry, "Contoso", "v1")
        lib, _, _ = _declare(registry, "Library", "w1")
        _, _, other_axis = _declare(registry, "Other", "o1")
        with pytest.raises(ValueError, match="Other"):
            graph.declare_mapped(
                consumer, lib, {c_enum.members["v1"]: other_axis.all()[0]}
            )


# ---------------------------------------------------------------------------
# Ancestor lookup
# ---------------------------------------------------------------------------


class TestAncestorLookup:
    def test_child_inherits_parent_entries_unchanged(self, registry, graph):
        parent, p_enum, _ = _declare(registry, "Contoso", "v1")
        lib, _, lib_axis = _declare(registry, "Library", "w1")
        graph.declare_mapped(parent, lib, {p_enum.members["v1"]: lib_axis.all()[0]})

        child = Namespace("Sub", namespace=parent)
        assert graph.direct_dependencies(child) == {}
        assert graph.find_declaring_namespace(child) is parent
        inherited = graph.dependencies_of(child)
        assert inherited.keys() == graph.dependencies_of(parent).keys()
        assert inherited[lib].mapping == graph.dependencies_of(parent)[lib].mapping

    def test_nearest_ancestor_wins_without_merging(self, registry, graph):
        lib_a, _, a_axis = _declare(registry, "LibA", "a1")
        lib_b, _, b_axis = _declare(registry, "LibB", "b1")
        root = Namespace("Root")
        mid = Namespace("Mid", namespace=root)
        leaf = Namespace("Leaf", namespace=mid)
        graph.declare_fixed(root, a_axis.all()[0])
        graph.declare_fixed(mid, b_axis.all()[0])

        assert list(graph.dependencies_of(leaf)) == [lib_b]

    def test_no_declarations(self, graph):
        assert graph.dependencies_of(Namespace("Lonely")) == {}
        assert graph.find_declaring_namespace(Namespace("Lonely")) is None
