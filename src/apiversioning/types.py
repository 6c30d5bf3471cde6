"""
Shared enums for the versioning engine.

Closed vocabularies used across the graph model, the dependency graph
and the diagnostic channel.  Keeping them in one module means the
diagnostic codes reported by ``annotations.py`` and the codes asserted
in tests never drift apart.
"""

from __future__ import annotations

from enum import Enum


class ElementKind(str, Enum):
    """Kind of a schema graph element."""

    NAMESPACE = "namespace"
    INTERFACE = "interface"
    OPERATION = "operation"
    MODEL = "model"
    MODEL_PROPERTY = "model_property"
    UNION = "union"
    UNION_VARIANT = "union_variant"
    ENUM = "enum"
    ENUM_MEMBER = "enum_member"
    TUPLE = "tuple"


class DependencyShape(str, Enum):
    """Shape of a declared version dependency."""

    FIXED = "fixed"  # one pinned Version, unversioned consumer
    MAPPED = "mapped"  # consumer Version -> dependency Version


class DiagnosticSeverity(str, Enum):
    """How a reported diagnostic should be treated by the host."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Codes for recoverable, user-facing diagnostics."""

    VERSION_NOT_FOUND = "version-not-found"
    VERSION_AXIS_MISMATCH = "version-axis-mismatch"
    DEPENDENCY_MAPPING_MISSING = "versioned-dependency-mapping-missing"
    DEPENDENCY_TUPLE = "versioned-dependency-tuple"
    DEPENDENCY_TUPLE_ENUM_MEMBER = "versioned-dependency-tuple-enum-member"
    DEPENDENCY_SAME_NAMESPACE = "versioned-dependency-same-namespace"
    DEPRECATED = "deprecated"
