"""
Pydantic v2 models for the versioning manifest YAML format.

A manifest describes a small schema graph (namespaces, models, unions,
enums, interfaces, operations), each namespace's version axis, its
version dependencies, and per-element lifecycle annotations.  It is the
reference way to drive the engine without a host compiler.

All models use ``extra="forbid"`` to reject unknown keys at parse time.

Usage::

    from apiversioning.manifest.schema import VersioningManifest
    import yaml

    with open("contoso.versions.yaml") as fh:
        raw = yaml.safe_load(fh)
    manifest = VersioningManifest.model_validate(raw)
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Lifecycle annotations
# ---------------------------------------------------------------------------


class RenameSpec(BaseModel):
    """``@renamedFrom(version, old_name)``."""

    model_config = ConfigDict(extra="forbid")

    version: str = Field(..., min_length=1)
    old_name: str = Field(..., min_length=1)


class LifecycleSpec(BaseModel):
    """Annotations shared by every annotatable element.

    Version references are names on the element's governing axis
    (``v2``) or qualified with a namespace (``Library.l2``).
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    added: Optional[str] = Field(None, description="Version the element appears in")
    removed: Optional[str] = Field(None, description="Version the element is gone from")
    made_optional: Optional[str] = Field(None)
    renamed_from: list[RenameSpec] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


class PropertySpec(LifecycleSpec):
    optional: bool = False
    source: Optional[str] = Field(
        None, description="Dotted path of the property this one was copied from"
    )


class ModelSpec(LifecycleSpec):
    properties: list[PropertySpec] = Field(default_factory=list)


class VariantSpec(LifecycleSpec):
    pass


class UnionSpec(LifecycleSpec):
    variants: list[VariantSpec] = Field(default_factory=list)


class EnumMemberSpec(LifecycleSpec):
    value: Optional[Union[str, int]] = None


class EnumSpec(LifecycleSpec):
    members: list[EnumMemberSpec] = Field(default_factory=list)


class OperationSpec(LifecycleSpec):
    pass


class InterfaceSpec(LifecycleSpec):
    operations: list[OperationSpec] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Namespaces and dependencies
# ---------------------------------------------------------------------------


class DependencySpec(BaseModel):
    """``@versionedDependency``: pin one version or map every consumer version."""

    model_config = ConfigDict(extra="forbid")

    namespace: str = Field(..., min_length=1, description="Dotted dependency namespace")
    version: Optional[str] = Field(None, description="Pinned version (unversioned consumer)")
    mapping: Optional[dict[str, str]] = Field(
        None, description="Consumer version -> dependency version"
    )

    @model_validator(mode="after")
    def _exactly_one_form(self) -> "DependencySpec":
        if (self.version is None) == (self.mapping is None):
            raise ValueError("Dependency needs exactly one of 'version' or 'mapping'")
        return self

    @property
    def form(self) -> Literal["fixed", "mapped"]:
        return "fixed" if self.version is not None else "mapped"


class NamespaceSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Dotted namespace name")
    versions: Optional[list[Union[str, dict[str, Union[str, int]]]]] = Field(
        None,
        description=(
            "Version tags in order; a tag is a name or a one-entry "
            "{name: value} mapping"
        ),
    )
    versions_enum: str = Field("Versions", min_length=1)
    dependencies: list[DependencySpec] = Field(default_factory=list)
    models: list[ModelSpec] = Field(default_factory=list)
    unions: list[UnionSpec] = Field(default_factory=list)
    enums: list[EnumSpec] = Field(default_factory=list)
    interfaces: list[InterfaceSpec] = Field(default_factory=list)
    operations: list[OperationSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_versions(self) -> "NamespaceSpec":
        if self.versions is not None:
            if not self.versions:
                raise ValueError(f"Namespace '{self.name}' declares an empty version list")
            for tag in self.versions:
                if isinstance(tag, dict) and len(tag) != 1:
                    raise ValueError(
                        "Version tag mapping must have exactly one entry, "
                        f"got {sorted(tag)}"
                    )
        return self

    def version_tags(self) -> list[tuple[str, Optional[Union[str, int]]]]:
        """``(name, value)`` pairs in declaration order."""
        tags: list[tuple[str, Optional[Union[str, int]]]] = []
        for tag in self.versions or []:
            if isinstance(tag, dict):
                ((name, value),) = tag.items()
                tags.append((name, value))
            else:
                tags.append((tag, None))
        return tags


# ---------------------------------------------------------------------------
# Top-level manifest
# ---------------------------------------------------------------------------


class VersioningManifest(BaseModel):
    """Root model for a versioning manifest YAML file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(
        ..., min_length=1, description="Manifest schema version (e.g. 0.1.0)"
    )
    description: Optional[str] = Field(None)
    namespaces: list[NamespaceSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_namespaces(self) -> "VersioningManifest":
        seen: set[str] = set()
        for ns in self.namespaces:
            if ns.name in seen:
                raise ValueError(f"Namespace '{ns.name}' declared twice")
            seen.add(ns.name)
        return self
