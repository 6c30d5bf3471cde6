"""Schema graph element model.

The versioning engine never parses or mutates schemas; it only needs a
containment API (who encloses whom) and a stable identity for every
element.  These dataclasses provide both: containment through plain
attributes, identity through ``eq=False`` (hash and equality are object
identity, so two models with the same name in different namespaces are
distinct map keys).

Hosts with their own type graph can feed it to the engine as long as it
uses these classes, or build a thin mirror of it with ``ManifestBuilder``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union as TypingUnion

from apiversioning.types import ElementKind

__all__ = [
    "SchemaElement",
    "Namespace",
    "Interface",
    "Operation",
    "Model",
    "ModelProperty",
    "Union",
    "UnionVariant",
    "Enum",
    "EnumMember",
    "TupleLiteral",
    "Element",
]


@dataclass(eq=False)
class SchemaElement:
    """Base for every node of the schema graph.

    Attributes:
        name: Declared (current) name of the element
    """

    kind: ClassVar[ElementKind]
    name: str

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


@dataclass(eq=False, repr=False)
class Namespace(SchemaElement):
    """A namespace, optionally nested inside a parent namespace."""

    kind: ClassVar[ElementKind] = ElementKind.NAMESPACE
    namespace: Optional[Namespace] = None

    @property
    def full_name(self) -> str:
        """Dotted name from the outermost namespace down to this one."""
        parts = [self.name]
        current = self.namespace
        while current is not None:
            parts.append(current.name)
            current = current.namespace
        return ".".join(reversed(parts))

    def ancestors(self):
        """Yield this namespace and then each enclosing namespace outward."""
        current: Optional[Namespace] = self
        while current is not None:
            yield current
            current = current.namespace


@dataclass(eq=False, repr=False)
class Interface(SchemaElement):
    kind: ClassVar[ElementKind] = ElementKind.INTERFACE
    namespace: Optional[Namespace] = None
    operations: list[Operation] = field(default_factory=list)

    def add_operation(self, name: str) -> Operation:
        op = Operation(name, interface=self)
        self.operations.append(op)
        return op


@dataclass(eq=False, repr=False)
class Operation(SchemaElement):
    """An operation declared directly in a namespace or inside an interface."""

    kind: ClassVar[ElementKind] = ElementKind.OPERATION
    namespace: Optional[Namespace] = None
    interface: Optional[Interface] = None


@dataclass(eq=False, repr=False)
class Model(SchemaElement):
    kind: ClassVar[ElementKind] = ElementKind.MODEL
    namespace: Optional[Namespace] = None
    properties: dict[str, ModelProperty] = field(default_factory=dict)

    def add_property(
        self,
        name: str,
        optional: bool = False,
        source_property: Optional[ModelProperty] = None,
    ) -> ModelProperty:
        prop = ModelProperty(
            name, model=self, optional=optional, source_property=source_property
        )
        self.properties[name] = prop
        return prop


@dataclass(eq=False, repr=False)
class ModelProperty(SchemaElement):
    """A model field.

    ``source_property`` is set when the field was copied from another
    model (spread, ``extends``, alias); versioning follows the source.
    """

    kind: ClassVar[ElementKind] = ElementKind.MODEL_PROPERTY
    model: Optional[Model] = None
    source_property: Optional[ModelProperty] = None
    optional: bool = False


@dataclass(eq=False, repr=False)
class Union(SchemaElement):
    kind: ClassVar[ElementKind] = ElementKind.UNION
    namespace: Optional[Namespace] = None
    variants: dict[str, UnionVariant] = field(default_factory=dict)

    def add_variant(
        self, name: str, source_variant: Optional[UnionVariant] = None
    ) -> UnionVariant:
        variant = UnionVariant(name, union=self, source_variant=source_variant)
        self.variants[name] = variant
        return variant


@dataclass(eq=False, repr=False)
class UnionVariant(SchemaElement):
    kind: ClassVar[ElementKind] = ElementKind.UNION_VARIANT
    union: Optional[Union] = None
    source_variant: Optional[UnionVariant] = None


@dataclass(eq=False, repr=False)
class Enum(SchemaElement):
    """An enum; a namespace's version tags are the members of one enum."""

    kind: ClassVar[ElementKind] = ElementKind.ENUM
    namespace: Optional[Namespace] = None
    members: dict[str, EnumMember] = field(default_factory=dict)

    def add_member(self, name: str, value: Optional[str | int] = None) -> EnumMember:
        member = EnumMember(name, enum=self, value=value)
        self.members[name] = member
        return member


@dataclass(eq=False, repr=False)
class EnumMember(SchemaElement):
    kind: ClassVar[ElementKind] = ElementKind.ENUM_MEMBER
    enum: Optional[Enum] = None
    value: Optional[str | int] = None


@dataclass(eq=False, repr=False)
class TupleLiteral(SchemaElement):
    """A tuple value as written in an annotation argument, e.g. ``[v1, w2]``."""

    kind: ClassVar[ElementKind] = ElementKind.TUPLE
    name: str = "tuple"
    values: tuple = ()


Element = TypingUnion[
    Namespace,
    Interface,
    Operation,
    Model,
    ModelProperty,
    Union,
    UnionVariant,
    Enum,
    EnumMember,
]
