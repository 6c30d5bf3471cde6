"""
Version resolution.

Given a root namespace, enumerate every global version assignment: one
per version on the root's axis (in ascending order), or a single
assignment when the root is unversioned.  Each assignment selects one
version for the root and for every namespace it depends on.

Dependency entries must have the shape matching the root's
versioned-ness; a mismatch means declaration-time validation let an
inconsistent state through and raises ``ResolutionConsistencyError``.

Usage::

    from apiversioning.versioning.resolution import resolve_versions

    for resolution in resolve_versions(context, contoso):
        print(resolution.root_version, resolution.versions)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from apiversioning.errors import ResolutionConsistencyError
from apiversioning.graph.elements import Namespace
from apiversioning.types import DiagnosticCode
from apiversioning.versioning.axis import Version
from apiversioning.versioning.dependencies import FixedDependency, MappedDependency
from apiversioning.versioning.otel import emit_resolution_complete

if TYPE_CHECKING:
    from apiversioning.versioning.context import VersioningContext

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class VersionResolution:
    """One concrete version assignment for a root namespace.

    Attributes:
        root_version: Version of the root namespace, None if it is unversioned
        versions: Selected version per involved namespace
    """

    root_version: Optional[Version]
    versions: dict[Namespace, Version] = field(default_factory=dict)

    def version_for(self, namespace: Namespace) -> Optional[Version]:
        return self.versions.get(namespace)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root_version": self.root_version.value if self.root_version else None,
            "versions": {
                ns.full_name: version.value for ns, version in self.versions.items()
            },
        }


def resolve_versions(context: VersioningContext, root: Namespace) -> list[VersionResolution]:
    """Resolve the version of every involved namespace for each root version.

    Args:
        context: Compilation context holding axes and dependency declarations.
        root: Root namespace.

    Returns:
        Resolutions in ascending root-version order.

    Raises:
        ResolutionConsistencyError: If a dependency entry's shape disagrees
            with whether *root* is versioned, or (with
            ``strict_dependencies``) a mapping misses a root version.
    """
    axis = context.axes.axis_for(root)
    dependencies = context.dependencies.dependencies_of(root)

    if axis is None:
        resolutions = [_resolve_unversioned(root, dependencies)]
    else:
        resolutions = [
            _resolve_at(context, root, version, dependencies) for version in axis
        ]

    logger.debug(
        "Resolved %s: %d resolution(s), %d dependency namespace(s)",
        root.full_name,
        len(resolutions),
        len(dependencies),
    )
    emit_resolution_complete(root, resolutions)
    return resolutions


def _resolve_unversioned(root: Namespace, dependencies: dict) -> VersionResolution:
    resolution = VersionResolution(root_version=None)
    for dependency_ns, entry in dependencies.items():
        if not isinstance(entry, FixedDependency):
            raise ResolutionConsistencyError(
                root, dependency_ns, "should be a picked version"
            )
        resolution.versions[dependency_ns] = entry.version
    return resolution


def _resolve_at(
    context: VersioningContext,
    root: Namespace,
    version: Version,
    dependencies: dict,
) -> VersionResolution:
    resolution = VersionResolution(root_version=version, versions={root: version})

    for dependency_ns, entry in dependencies.items():
        if not isinstance(entry, MappedDependency):
            raise ResolutionConsistencyError(
                root, dependency_ns, "should be a mapping of version"
            )
        target = entry.get(version)
        if target is None:
            if context.config.strict_dependencies:
                raise ResolutionConsistencyError(
                    root,
                    dependency_ns,
                    f"has no mapping for version '{version.name}'",
                )
            context.diagnostics.report(
                DiagnosticCode.DEPENDENCY_MAPPING_MISSING,
                target=root,
                version=version.name,
                namespace=root.full_name,
                dependency=dependency_ns.full_name,
            )
            continue
        resolution.versions[dependency_ns] = target

    return resolution
