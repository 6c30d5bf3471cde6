"""
Version-resolution engine.

Tracks per-namespace version axes, per-element lifecycle marks and
cross-namespace version dependencies, and resolves them into concrete
version assignments for an external projection step.

Public API::

    from apiversioning.versioning import (
        # Context
        VersioningContext,
        # Axis
        AxisRegistry, Version, VersionAxis,
        # Lifecycle
        LifecycleStore, LifecycleRecord, RenameRecord,
        # Governing axis
        GoverningAxisResolver, GoverningAxis,
        # Dependencies
        VersionDependencyGraph, FixedDependency, MappedDependency,
        # Resolution
        VersionResolution, resolve_versions,
        # Evaluation
        PointInTimeEvaluator, ElementStatus,
        # Projection
        ProjectionSpecBuilder, ResolutionKey, ResolutionTable,
        ProjectionApplication, VersionProjection,
        # Diagnostics
        Diagnostic, DiagnosticReporter,
    )
"""

from apiversioning.versioning.axis import AxisRegistry, Version, VersionAxis
from apiversioning.versioning.context import VersioningContext
from apiversioning.versioning.dependencies import (
    DependencyEntry,
    FixedDependency,
    MappedDependency,
    VersionDependencyGraph,
)
from apiversioning.versioning.diagnostics import Diagnostic, DiagnosticReporter
from apiversioning.versioning.evaluator import ElementStatus, PointInTimeEvaluator
from apiversioning.versioning.governing import GoverningAxis, GoverningAxisResolver
from apiversioning.versioning.lifecycle import (
    LifecycleRecord,
    LifecycleStore,
    RenameRecord,
)
from apiversioning.versioning.projection import (
    ProjectionApplication,
    ProjectionSpecBuilder,
    ResolutionKey,
    ResolutionTable,
    VersionProjection,
)
from apiversioning.versioning.resolution import VersionResolution, resolve_versions

__all__ = [
    # Context
    "VersioningContext",
    # Axis
    "AxisRegistry",
    "Version",
    "VersionAxis",
    # Lifecycle
    "LifecycleRecord",
    "LifecycleStore",
    "RenameRecord",
    # Governing axis
    "GoverningAxis",
    "GoverningAxisResolver",
    # Dependencies
    "DependencyEntry",
    "FixedDependency",
    "MappedDependency",
    "VersionDependencyGraph",
    # Resolution
    "VersionResolution",
    "resolve_versions",
    # Evaluation
    "ElementStatus",
    "PointInTimeEvaluator",
    # Projection
    "ProjectionApplication",
    "ProjectionSpecBuilder",
    "ResolutionKey",
    "ResolutionTable",
    "VersionProjection",
    # Diagnostics
    "Diagnostic",
    "DiagnosticReporter",
]
