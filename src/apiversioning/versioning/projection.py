"""
Projection-spec builder.

Turns each ``VersionResolution`` into the instruction an external
projection engine needs: a projection name plus one opaque
``ResolutionKey``.  The key is registered in the context's
``ResolutionTable`` so the projection engine can later ask "which
version applies to namespace N under key K".

Usage::

    builder = ProjectionSpecBuilder(context)
    for spec in builder.build(contoso):
        print(spec.version, spec.projections)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from apiversioning.errors import UnknownResolutionKeyError
from apiversioning.graph.elements import Namespace
from apiversioning.versioning.axis import Version
from apiversioning.versioning.otel import emit_projections_built
from apiversioning.versioning.resolution import resolve_versions

if TYPE_CHECKING:
    from apiversioning.versioning.context import VersioningContext

logger = logging.getLogger(__name__)


class ResolutionKey:
    """Opaque, identity-hashed handle to one registered resolution."""

    __slots__ = ("_serial",)

    def __init__(self, serial: int = 0) -> None:
        self._serial = serial

    def __repr__(self) -> str:
        return f"<ResolutionKey #{self._serial}>"


class ResolutionTable:
    """Write-once ``ResolutionKey -> {namespace: version}`` table."""

    def __init__(self) -> None:
        self._table: dict[ResolutionKey, dict[Namespace, Version]] = {}

    def register(self, versions: dict[Namespace, Version]) -> ResolutionKey:
        """Store a copy of *versions* under a freshly allocated key."""
        key = ResolutionKey(len(self._table) + 1)
        self._table[key] = dict(versions)
        return key

    def versions_for(self, key: ResolutionKey) -> dict[Namespace, Version]:
        try:
            return dict(self._table[key])
        except KeyError:
            raise UnknownResolutionKeyError(key) from None

    def version_for(self, key: ResolutionKey, namespace: Namespace) -> Optional[Version]:
        """Version selected for *namespace* under *key*, or None if not involved."""
        if key not in self._table:
            raise UnknownResolutionKeyError(key)
        return self._table[key].get(namespace)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)


@dataclass(frozen=True)
class ProjectionApplication:
    """One projection call: ``projection_name(*arguments)``."""

    projection_name: str
    arguments: tuple[Any, ...] = ()


@dataclass
class VersionProjection:
    """Projections to apply to reach the snapshot labelled ``version``."""

    version: Optional[str]
    projections: list[ProjectionApplication] = field(default_factory=list)

    @property
    def key(self) -> Optional[ResolutionKey]:
        for projection in self.projections:
            for argument in projection.arguments:
                if isinstance(argument, ResolutionKey):
                    return argument
        return None


class ProjectionSpecBuilder:
    def __init__(self, context: VersioningContext) -> None:
        self._context = context

    def build(self, root: Namespace) -> list[VersionProjection]:
        """One ``VersionProjection`` per resolution of *root*, in root-version order."""
        projection_name = self._context.config.projection_name
        result: list[VersionProjection] = []
        for resolution in resolve_versions(self._context, root):
            if not resolution.versions:
                result.append(VersionProjection(version=None))
                continue
            key = self._context.resolution_table.register(resolution.versions)
            label = resolution.root_version.value if resolution.root_version else None
            result.append(
                VersionProjection(
                    version=label,
                    projections=[ProjectionApplication(projection_name, (key,))],
                )
            )

        logger.debug(
            "Built %d projection spec(s) for %s", len(result), root.full_name
        )
        emit_projections_built(root, result)
        return result
