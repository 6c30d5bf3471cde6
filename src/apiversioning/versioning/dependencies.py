"""
Version dependency graph.

Records, per consuming namespace, which version of each dependency
namespace it was written against.  The shape of an entry depends on the
consumer:

- an *unversioned* consumer pins one version of the dependency
  (``FixedDependency``);
- a *versioned* consumer maps every one of its own versions to a version
  of the dependency (``MappedDependency``).

Lookups for a namespace with no declaration of its own use the nearest
ancestor's full entry set, unmodified.

Usage::

    graph = VersionDependencyGraph(axes)
    graph.declare_fixed(service_ns, library_v2)
    graph.declare_mapped(contoso, other_ns, {contoso_v1_tag: other_w2})
    graph.dependencies_of(contoso)  # {other_ns: MappedDependency(...)}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional, Union

from apiversioning.errors import DependencyShapeError
from apiversioning.graph.elements import Namespace
from apiversioning.types import DependencyShape
from apiversioning.versioning.axis import AxisRegistry, Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedDependency:
    """Unversioned consumer pinned to one dependency version."""

    shape: ClassVar[DependencyShape] = DependencyShape.FIXED
    version: Version


@dataclass(frozen=True)
class MappedDependency:
    """Versioned consumer: consumer Version -> dependency Version."""

    shape: ClassVar[DependencyShape] = DependencyShape.MAPPED
    mapping: dict[Version, Version] = field(default_factory=dict)

    def get(self, version: Version) -> Optional[Version]:
        return self.mapping.get(version)


DependencyEntry = Union[FixedDependency, MappedDependency]


@dataclass
class _DeclaredMapping:
    # Keyed by the consumer's version tag; resolved to Versions on read.
    by_tag: dict[Any, Version] = field(default_factory=dict)


class VersionDependencyGraph:
    """Per-namespace dependency declarations for one compilation."""

    def __init__(self, axes: AxisRegistry) -> None:
        self._axes = axes
        self._entries: dict[Namespace, dict[Namespace, Union[Version, _DeclaredMapping]]] = {}

    def declare_fixed(self, consumer: Namespace, version: Version) -> None:
        """Pin *consumer* (unversioned) to *version* of its namespace.

        Raises:
            DependencyShapeError: If *consumer* owns a version axis.
        """
        if self._axes.is_versioned(consumer):
            raise DependencyShapeError(consumer, "mapped", "a single fixed version")

        entries = self._entries.setdefault(consumer, {})
        previous = entries.get(version.namespace)
        entries[version.namespace] = version
        logger.debug(
            "Declared fixed dependency: %s -> %s@%s%s",
            consumer.full_name,
            version.namespace.full_name,
            version.name,
            " (replacing previous pin)" if previous is not None else "",
        )

    def declare_mapped(
        self,
        consumer: Namespace,
        dependency: Namespace,
        mapping: Mapping[Any, Version],
    ) -> None:
        """Map versions of *consumer* (keyed by tag) onto versions of *dependency*.

        Re-declaring for the same pair extends the existing mapping.

        Raises:
            DependencyShapeError: If *consumer* has no version axis.
            ValueError: If a target version is not on *dependency*'s axis.
        """
        if not self._axes.is_versioned(consumer):
            raise DependencyShapeError(consumer, "fixed", "a version mapping")

        for target in mapping.values():
            if target.namespace is not dependency:
                raise ValueError(
                    f"Version '{target.name}' belongs to "
                    f"'{target.namespace.full_name}', not '{dependency.full_name}'"
                )

        entries = self._entries.setdefault(consumer, {})
        declared = entries.get(dependency)
        if not isinstance(declared, _DeclaredMapping):
            declared = _DeclaredMapping()
            entries[dependency] = declared
        declared.by_tag.update(mapping)

        logger.debug(
            "Declared mapped dependency: %s -> %s (%d entries)",
            consumer.full_name,
            dependency.full_name,
            len(declared.by_tag),
        )

    def has_declarations(self, namespace: Namespace) -> bool:
        return bool(self._entries.get(namespace))

    def direct_dependencies(self, namespace: Namespace) -> dict[Namespace, DependencyEntry]:
        """Entries declared on *namespace* itself (no ancestor walk)."""
        return {
            dependency: self._resolve_entry(raw)
            for dependency, raw in self._entries.get(namespace, {}).items()
        }

    def find_declaring_namespace(self, namespace: Namespace) -> Optional[Namespace]:
        """Nearest namespace, starting at *namespace*, with its own declarations."""
        for current in namespace.ancestors():
            if self._entries.get(current):
                return current
        return None

    def dependencies_of(self, namespace: Namespace) -> dict[Namespace, DependencyEntry]:
        """Dependency entries that apply to *namespace*.

        Uses the first ancestor (starting at *namespace*) that declared
        anything; entries from further ancestors are not merged in.
        """
        owner = self.find_declaring_namespace(namespace)
        if owner is None:
            return {}
        return self.direct_dependencies(owner)

    def _resolve_entry(self, raw: Union[Version, _DeclaredMapping]) -> DependencyEntry:
        if isinstance(raw, Version):
            return FixedDependency(raw)
        mapping: dict[Version, Version] = {}
        for tag, target in raw.by_tag.items():
            source = self._axes.version_for_tag(tag)
            if source is not None:
                mapping[source] = target
        return MappedDependency(mapping)
