"""
Manifest builder: turns a ``VersioningManifest`` into a schema graph and
applies its annotations through ``versioning.annotations``.

Build order matters and is fixed:

1. namespaces (dotted names; missing parents are created implicitly)
2. version axes, one ``Versions`` enum per versioned namespace
3. elements
4. property ``source`` links
5. lifecycle annotations
6. version dependencies

Usage::

    from apiversioning.manifest.builder import ManifestBuilder

    schema = ManifestBuilder(manifest).build()
    widget = schema.get("Contoso.Widget")
    schema.context.resolve_versions(schema.namespace("Contoso"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from apiversioning.errors import ManifestError
from apiversioning.graph.elements import (
    Enum,
    EnumMember,
    Interface,
    Model,
    ModelProperty,
    Namespace,
    Operation,
    TupleLiteral,
    Union,
)
from apiversioning.manifest.schema import (
    DependencySpec,
    LifecycleSpec,
    NamespaceSpec,
    VersioningManifest,
)
from apiversioning.versioning import annotations
from apiversioning.versioning.context import VersioningContext

logger = logging.getLogger(__name__)


@dataclass
class BuiltSchema:
    """The graph built from a manifest, plus the context holding its annotations."""

    context: VersioningContext
    namespaces: dict[str, Namespace] = field(default_factory=dict)
    elements: dict[str, Any] = field(default_factory=dict)

    def get(self, path: str) -> Any:
        try:
            return self.elements[path]
        except KeyError:
            raise ManifestError(f"No element at '{path}'") from None

    def namespace(self, name: str) -> Namespace:
        try:
            return self.namespaces[name]
        except KeyError:
            raise ManifestError(f"No namespace named '{name}'") from None

    def path_of(self, element: Any) -> Optional[str]:
        for path, candidate in self.elements.items():
            if candidate is element:
                return path
        return None


class ManifestBuilder:
    def __init__(
        self,
        manifest: VersioningManifest,
        context: Optional[VersioningContext] = None,
    ) -> None:
        self._manifest = manifest
        self._schema = BuiltSchema(context=context or VersioningContext())
        self._version_enums: dict[Namespace, Enum] = {}
        self._placeholders: dict[str, EnumMember] = {}
        self._pending: list[tuple[Any, LifecycleSpec]] = []
        self._sources: list[tuple[ModelProperty, str]] = []

    @property
    def context(self) -> VersioningContext:
        return self._schema.context

    def build(self) -> BuiltSchema:
        specs = sorted(self._manifest.namespaces, key=lambda s: s.name.count("."))
        for spec in specs:
            self._ensure_namespace(spec.name)
        for spec in specs:
            if spec.versions:
                self._declare_axis(spec)
        for spec in specs:
            self._build_elements(spec)
        self._link_sources()
        for element, lifecycle in self._pending:
            self._apply_lifecycle(element, lifecycle)
        for spec in specs:
            for dependency in spec.dependencies:
                self._declare_dependency(self._schema.namespaces[spec.name], dependency)

        logger.info(
            "Built manifest graph: namespaces=%d elements=%d diagnostics=%d",
            len(self._schema.namespaces),
            len(self._schema.elements),
            len(self.context.diagnostics),
        )
        return self._schema

    # -- graph construction -----------------------------------------------

    def _register(self, path: str, element: Any) -> None:
        if path in self._schema.elements:
            raise ManifestError(f"Element '{path}' declared twice")
        self._schema.elements[path] = element

    def _ensure_namespace(self, name: str) -> Namespace:
        existing = self._schema.namespaces.get(name)
        if existing is not None:
            return existing
        parent: Optional[Namespace] = None
        short = name
        if "." in name:
            parent_name, short = name.rsplit(".", 1)
            parent = self._ensure_namespace(parent_name)
        namespace = Namespace(short, namespace=parent)
        self._schema.namespaces[name] = namespace
        self._register(name, namespace)
        return namespace

    def _declare_axis(self, spec: NamespaceSpec) -> None:
        namespace = self._schema.namespaces[spec.name]
        enum = Enum(spec.versions_enum, namespace=namespace)
        for tag_name, value in spec.version_tags():
            member = enum.add_member(tag_name, value)
            self._register(f"{spec.name}.{spec.versions_enum}.{tag_name}", member)
        self._register(f"{spec.name}.{spec.versions_enum}", enum)
        self._version_enums[namespace] = enum
        annotations.versioned(self.context, namespace, enum)

    def _build_elements(self, spec: NamespaceSpec) -> None:
        namespace = self._schema.namespaces[spec.name]
        base = spec.name

        for model_spec in spec.models:
            model = Model(model_spec.name, namespace=namespace)
            self._track(f"{base}.{model.name}", model, model_spec)
            for prop_spec in model_spec.properties:
                prop = model.add_property(prop_spec.name, optional=prop_spec.optional)
                self._track(f"{base}.{model.name}.{prop.name}", prop, prop_spec)
                if prop_spec.source:
                    self._sources.append((prop, prop_spec.source))

        for union_spec in spec.unions:
            union = Union(union_spec.name, namespace=namespace)
            self._track(f"{base}.{union.name}", union, union_spec)
            for variant_spec in union_spec.variants:
                variant = union.add_variant(variant_spec.name)
                self._track(f"{base}.{union.name}.{variant.name}", variant, variant_spec)

        for enum_spec in spec.enums:
            enum = Enum(enum_spec.name, namespace=namespace)
            self._track(f"{base}.{enum.name}", enum, enum_spec)
            for member_spec in enum_spec.members:
                member = enum.add_member(member_spec.name, member_spec.value)
                self._track(f"{base}.{enum.name}.{member.name}", member, member_spec)

        for iface_spec in spec.interfaces:
            iface = Interface(iface_spec.name, namespace=namespace)
            self._track(f"{base}.{iface.name}", iface, iface_spec)
            for op_spec in iface_spec.operations:
                op = iface.add_operation(op_spec.name)
                self._track(f"{base}.{iface.name}.{op.name}", op, op_spec)

        for op_spec in spec.operations:
            op = Operation(op_spec.name, namespace=namespace)
            self._track(f"{base}.{op.name}", op, op_spec)

    def _track(self, path: str, element: Any, spec: LifecycleSpec) -> None:
        self._register(path, element)
        self._pending.append((element, spec))

    def _link_sources(self) -> None:
        for prop, source_path in self._sources:
            source = self._schema.elements.get(source_path)
            if not isinstance(source, ModelProperty):
                raise ManifestError(
                    f"Property '{prop.name}' copies from '{source_path}', "
                    "which is not a model property"
                )
            prop.source_property = source

    # -- annotations ------------------------------------------------------

    def _version_member(self, element: Any, ref: str) -> EnumMember:
        """Resolve a version reference to its enum member.

        Unknown references become members of a detached enum so the
        annotation layer reports them as ``version-not-found``.
        """
        ns_path, _, name = ref.rpartition(".")
        namespace = self._schema.namespaces.get(ns_path) if ns_path else None
        if namespace is None:
            ns_path, name = "", ref
            governing = self.context.governing.governing_axis(element)
            namespace = governing.namespace if governing else None

        enum = self._version_enums.get(namespace) if namespace is not None else None
        member = enum.members.get(name) if enum is not None else None
        if member is not None:
            return member

        placeholder = self._placeholders.get(ref)
        if placeholder is None:
            detached = Enum(f"{ns_path}.Versions" if ns_path else "Versions")
            placeholder = detached.add_member(name)
            self._placeholders[ref] = placeholder
        return placeholder

    def _apply_lifecycle(self, element: Any, spec: LifecycleSpec) -> None:
        context = self.context
        if spec.added:
            annotations.added(context, element, self._version_member(element, spec.added))
        if spec.removed:
            annotations.removed(context, element, self._version_member(element, spec.removed))
        if spec.made_optional:
            annotations.made_optional(
                context, element, self._version_member(element, spec.made_optional)
            )
        for rename in spec.renamed_from:
            annotations.renamed_from(
                context,
                element,
                self._version_member(element, rename.version),
                rename.old_name,
            )

    def _declare_dependency(self, consumer: Namespace, spec: DependencySpec) -> None:
        target = self._schema.namespaces.get(spec.namespace)
        if target is None:
            raise ManifestError(
                f"Namespace '{consumer.full_name}' depends on unknown "
                f"namespace '{spec.namespace}'"
            )

        if spec.version is not None:
            member = self._version_member(target, f"{spec.namespace}.{spec.version}")
            annotations.versioned_dependency(self.context, consumer, member)
            return

        entries = []
        for source_name, target_name in (spec.mapping or {}).items():
            source = self._version_member(
                consumer, f"{consumer.full_name}.{source_name}"
            )
            target_member = self._version_member(
                target, f"{spec.namespace}.{target_name}"
            )
            entries.append(TupleLiteral(values=(source, target_member)))
        annotations.versioned_dependency(
            self.context, consumer, TupleLiteral(values=tuple(entries))
        )
