"""Tests for the versioning manifest pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from apiversioning.manifest.schema import (
    DependencySpec,
    LifecycleSpec,
    NamespaceSpec,
    VersioningManifest,
)


class TestDependencySpec:
    def test_fixed_form(self):
        spec = DependencySpec(namespace="Library", version="l2")
        assert spec.form == "fixed"

    def test_mapped_form(self):
        spec = DependencySpec(namespace="Library", mapping={"v1": "l1"})
        assert spec.form == "mapped"

    def test_both_forms_rejected(self):
        with pytest.raises(ValidationError, match="exactly one"):
            DependencySpec(namespace="Library", version="l1", mapping={"v1": "l1"})

    def test_neither_form_rejected(self):
        with pytest.raises(ValidationError, match="exactly one"):
            DependencySpec(namespace="Library")


class TestNamespaceSpec:
    def test_version_tags_with_values(self):
        spec = NamespaceSpec(name="Contoso", versions=["v1", {"v2": "2022-08-31"}])
        assert spec.version_tags() == [("v1", None), ("v2", "2022-08-31")]

    def test_unversioned(self):
        spec = NamespaceSpec(name="Plain")
        assert spec.versions is None
        assert spec.version_tags() == []

    def test_empty_version_list_rejected(self):
        with pytest.raises(ValidationError, match="empty version list"):
            NamespaceSpec(name="Contoso", versions=[])

    def test_multi_entry_tag_rejected(self):
        with pytest.raises(ValidationError, match="exactly one entry"):
            NamespaceSpec(name="Contoso", versions=[{"v1": "a", "v2": "b"}])

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            NamespaceSpec(name="Contoso", verions=["v1"])


class TestLifecycleSpec:
    def test_defaults(self):
        spec = LifecycleSpec(name="Widget")
        assert spec.added is None
        assert spec.renamed_from == []

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            LifecycleSpec(name="")


class TestVersioningManifest:
    def test_minimal(self):
        manifest = VersioningManifest(schema_version="0.1.0")
        assert manifest.namespaces == []

    def test_duplicate_namespace_rejected(self):
        with pytest.raises(ValidationError, match="declared twice"):
            VersioningManifest.model_validate(
                {
                    "schema_version": "0.1.0",
                    "namespaces": [{"name": "Contoso"}, {"name": "Contoso"}],
                }
            )

    def test_nested_elements_parsed(self):
        manifest = VersioningManifest.model_validate(
            {
                "schema_version": "0.1.0",
                "namespaces": [
                    {
                        "name": "Contoso",
                        "versions": ["v1", "v2"],
                        "models": [
                            {
                                "name": "Widget",
                                "added": "v2",
                                "properties": [{"name": "size", "optional": True}],
                                "renamed_from": [{"version": "v2", "old_name": "Gadget"}],
                            }
                        ],
                    }
                ],
            }
        )
        (model,) = manifest.namespaces[0].models
        assert model.added == "v2"
        assert model.properties[0].optional is True
        assert model.renamed_from[0].old_name == "Gadget"
