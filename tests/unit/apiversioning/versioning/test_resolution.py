"""Tests for the version resolution algorithm."""

from __future__ import annotations

import pytest

from apiversioning.config import VersioningConfig
from apiversioning.errors import ResolutionConsistencyError
from apiversioning.graph.elements import Enum, Namespace, TupleLiteral
from apiversioning.types import DiagnosticCode
from apiversioning.versioning import annotations
from apiversioning.versioning.context import VersioningContext
from apiversioning.versioning.resolution import resolve_versions


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _versioned(context: VersioningContext, name: str, *versions: str, parent=None):
    ns = Namespace(name, namespace=parent)
    enum = Enum("Versions", namespace=ns)
    for v in versions:
        enum.add_member(v)
    annotations.versioned(context, ns, enum)
    return ns, enum.members


def _map(*pairs) -> TupleLiteral:
    return TupleLiteral(values=tuple(TupleLiteral(values=p) for p in pairs))


def _names(resolution) -> dict[str, str]:
    return {ns.name: v.name for ns, v in resolution.versions.items()}


# ---------------------------------------------------------------------------
# Unversioned root
# ---------------------------------------------------------------------------


class TestUnversionedRoot:
    def test_no_dependencies_single_empty_resolution(self, context):
        resolutions = resolve_versions(context, Namespace("Plain"))
        assert len(resolutions) == 1
        assert resolutions[0].root_version is None
        assert resolutions[0].versions == {}

    def test_fixed_dependencies_collected(self, context):
        lib, lib_v = _versioned(context, "Library", "l1", "l2")
        other, other_v = _versioned(context, "Other", "o1")
        root = Namespace("Service")
        annotations.versioned_dependency(context, root, lib_v["l2"])
        annotations.versioned_dependency(context, root, other_v["o1"])

        (resolution,) = resolve_versions(context, root)
        assert resolution.root_version is None
        assert _names(resolution) == {"Library": "l2", "Other": "o1"}

    def test_mapped_entry_on_unversioned_root_is_fatal(self, context):
        root, root_v = _versioned(context, "Contoso", "v1")
        lib, lib_v = _versioned(context, "Library", "l1")
        annotations.versioned_dependency(context, root, _map((root_v["v1"], lib_v["l1"])))

        child = Namespace("Sub", namespace=root)
        with pytest.raises(ResolutionConsistencyError, match="picked version"):
            resolve_versions(context, child)


# ---------------------------------------------------------------------------
# Versioned root
# ---------------------------------------------------------------------------


class TestVersionedRoot:
    def test_one_resolution_per_version_in_order(self, context):
        root, _ = _versioned(context, "Contoso", "v1", "v2", "v3", "v4")
        resolutions = resolve_versions(context, root)

        assert [r.root_version.index for r in resolutions] == [0, 1, 2, 3]
        for r in resolutions:
            assert r.versions == {root: r.root_version}

    def test_declaration_order_not_name_order(self, context):
        root, _ = _versioned(context, "Contoso", "b", "a", "c")
        assert [r.root_version.name for r in resolve_versions(context, root)] == [
            "b",
            "a",
            "c",
        ]

    def test_mapped_dependency(self, context):
        a, a_v = _versioned(context, "A", "v1", "v2")
        c, c_v = _versioned(context, "C", "w1", "w2", "w3")
        annotations.versioned_dependency(
            context, a, _map((a_v["v1"], c_v["w2"]), (a_v["v2"], c_v["w3"]))
        )

        resolutions = resolve_versions(context, a)
        assert [_names(r) for r in resolutions] == [
            {"A": "v1", "C": "w2"},
            {"A": "v2", "C": "w3"},
        ]

    def test_fixed_entry_on_versioned_root_is_fatal(self, context):
        a, _ = _versioned(context, "A", "v1", "v2", "v3")
        b, b_v = _versioned(context, "B", "vX")
        # Bypass declaration-time validation to reach the resolver's check.
        context.dependencies._entries[a] = {b: context.axes.version_for_tag(b_v["vX"])}

        with pytest.raises(ResolutionConsistencyError, match="mapping of version"):
            resolve_versions(context, a)

    def test_missing_mapping_reports_diagnostic(self, context):
        a, a_v = _versioned(context, "A", "v1", "v2")
        c, c_v = _versioned(context, "C", "w1")
        annotations.versioned_dependency(context, a, _map((a_v["v1"], c_v["w1"])))

        resolutions = resolve_versions(context, a)
        assert _names(resolutions[0]) == {"A": "v1", "C": "w1"}
        assert _names(resolutions[1]) == {"A": "v2"}

        (diagnostic,) = context.diagnostics.by_code(DiagnosticCode.DEPENDENCY_MAPPING_MISSING)
        assert diagnostic.target is a
        assert "v2" in diagnostic.message

    def test_missing_mapping_strict_mode_raises(self):
        context = VersioningContext(VersioningConfig(strict_dependencies=True))
        a, a_v = _versioned(context, "A", "v1", "v2")
        c, c_v = _versioned(context, "C", "w1")
        annotations.versioned_dependency(context, a, _map((a_v["v1"], c_v["w1"])))

        with pytest.raises(ResolutionConsistencyError, match="no mapping"):
            resolve_versions(context, a)


class TestPinnedDependency:
    def test_every_root_version_pinned_to_one_dependency_version(self, context):
        """A [v1, v2, v3] depending on B at vX for every version."""
        b, b_v = _versioned(context, "B", "vX", "vY")
        a, a_v = _versioned(context, "A", "v1", "v2", "v3")
        annotations.versioned_dependency(
            context,
            a,
            _map(
                (a_v["v1"], b_v["vX"]),
                (a_v["v2"], b_v["vX"]),
                (a_v["v3"], b_v["vX"]),
            ),
        )

        resolutions = resolve_versions(context, a)
        assert len(resolutions) == 3
        assert [_names(r) for r in resolutions] == [
            {"A": "v1", "B": "vX"},
            {"A": "v2", "B": "vX"},
            {"A": "v3", "B": "vX"},
        ]


class TestResolutionDict:
    def test_to_dict(self, context):
        root, _ = _versioned(context, "Contoso", "v1")
        (resolution,) = resolve_versions(context, root)
        assert resolution.to_dict() == {
            "root_version": "v1",
            "versions": {"Contoso": "v1"},
        }
