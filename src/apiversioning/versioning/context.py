"""
Per-compilation versioning context.

Every piece of long-lived state the engine keeps (declared axes,
lifecycle marks, dependency declarations, the governing-axis cache, the
resolution-key table and reported diagnostics) hangs off one
``VersioningContext``.  Separate compilations use separate contexts and
never share caches.

Usage::

    from apiversioning.versioning.context import VersioningContext

    context = VersioningContext()
    annotations.versioned(context, contoso, versions_enum)
    projections = context.build_projections(contoso)
"""

from __future__ import annotations

import logging
from typing import Optional

from apiversioning.config import VersioningConfig, get_config
from apiversioning.graph.elements import Namespace
from apiversioning.versioning.axis import AxisRegistry
from apiversioning.versioning.dependencies import VersionDependencyGraph
from apiversioning.versioning.diagnostics import DiagnosticReporter
from apiversioning.versioning.governing import GoverningAxisResolver
from apiversioning.versioning.lifecycle import LifecycleStore
from apiversioning.versioning.projection import (
    ProjectionSpecBuilder,
    ResolutionTable,
    VersionProjection,
)
from apiversioning.versioning.resolution import VersionResolution, resolve_versions

logger = logging.getLogger(__name__)


class VersioningContext:
    """Arena for one compilation's versioning state.

    Args:
        config: Settings to use; defaults to the process configuration.
    """

    def __init__(self, config: Optional[VersioningConfig] = None) -> None:
        self.config = config or get_config()
        self.axes = AxisRegistry()
        self.lifecycle = LifecycleStore()
        self.dependencies = VersionDependencyGraph(self.axes)
        self.governing = GoverningAxisResolver(self.axes)
        self.resolution_table = ResolutionTable()
        self.diagnostics = DiagnosticReporter()

    def resolve_versions(self, root: Namespace) -> list[VersionResolution]:
        return resolve_versions(self, root)

    def build_projections(self, root: Namespace) -> list[VersionProjection]:
        return ProjectionSpecBuilder(self).build(root)

    def __repr__(self) -> str:
        return (
            f"<VersioningContext axes={len(self.axes)} "
            f"annotated={len(self.lifecycle)} "
            f"diagnostics={len(self.diagnostics)}>"
        )
