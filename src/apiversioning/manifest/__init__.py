"""
Declarative manifest adapter.

Drives the versioning engine from a YAML description of a schema graph,
for use without a host compiler (CLI, fixtures, documentation builds).

Public API::

    from apiversioning.manifest import (
        VersioningManifest,
        ManifestLoader,
        ManifestBuilder,
        BuiltSchema,
    )
"""

from apiversioning.manifest.builder import BuiltSchema, ManifestBuilder
from apiversioning.manifest.loader import ManifestLoader
from apiversioning.manifest.schema import (
    DependencySpec,
    NamespaceSpec,
    VersioningManifest,
)

__all__ = [
    "BuiltSchema",
    "DependencySpec",
    "ManifestBuilder",
    "ManifestLoader",
    "NamespaceSpec",
    "VersioningManifest",
]
