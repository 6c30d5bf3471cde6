"""
Schema graph model consumed by the versioning engine.

Public API::

    from apiversioning.graph import (
        Namespace, Interface, Operation, Model, ModelProperty,
        Union, UnionVariant, Enum, EnumMember, TupleLiteral,
    )
"""

from apiversioning.graph.elements import (
    Element,
    Enum,
    EnumMember,
    Interface,
    Model,
    ModelProperty,
    Namespace,
    Operation,
    SchemaElement,
    TupleLiteral,
    Union,
    UnionVariant,
)

__all__ = [
    "Element",
    "Enum",
    "EnumMember",
    "Interface",
    "Model",
    "ModelProperty",
    "Namespace",
    "Operation",
    "SchemaElement",
    "TupleLiteral",
    "Union",
    "UnionVariant",
]
