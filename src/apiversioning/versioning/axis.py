"""
Version axis model.

A *version axis* is the ordered sequence of versions declared for one
namespace.  Each ``Version`` remembers its position (``index``) on the
axis; ordering between versions only makes sense on the same axis, so
the comparison operators refuse to compare across namespaces.

Usage::

    from apiversioning.versioning.axis import AxisRegistry

    registry = AxisRegistry()
    axis = registry.declare_axis(contoso, list(versions_enum.members.values()))
    v2 = axis.lookup(versions_enum.members["v2"])
    assert v2.index == 1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Iterator, Optional, Sequence

from apiversioning.errors import CrossAxisComparisonError, DuplicateAxisError
from apiversioning.graph.elements import Enum, Namespace

logger = logging.getLogger(__name__)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """One version on a namespace's axis.

    Attributes:
        name: Declared name of the version tag
        value: Display/serialization string (defaults to ``name``)
        index: Zero-based declaration position on the axis
        namespace: Namespace owning the axis
        tag: Opaque backing tag (the enum member it was declared from)
    """

    name: str
    value: str
    index: int
    namespace: Namespace
    tag: Any

    def _check_same_axis(self, other: Version) -> None:
        if self.namespace is not other.namespace:
            raise CrossAxisComparisonError(other, self.namespace)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        self._check_same_axis(other)
        return self.index < other.index

    def __repr__(self) -> str:
        return f"<Version {self.namespace.full_name}.{self.name} #{self.index}>"


class VersionAxis:
    """Insertion-ordered, immutable mapping from tag to ``Version``."""

    def __init__(self, namespace: Namespace, tags: Sequence[Any]) -> None:
        if not tags:
            raise ValueError(
                f"Version axis for '{namespace.full_name}' needs at least one version"
            )
        self._namespace = namespace
        self._versions: dict[Any, Version] = {}
        for index, tag in enumerate(tags):
            if tag in self._versions:
                raise ValueError(
                    f"Version tag '{tag.name}' listed twice for '{namespace.full_name}'"
                )
            self._versions[tag] = Version(
                name=tag.name,
                value=_tag_value(tag),
                index=index,
                namespace=namespace,
                tag=tag,
            )

    @property
    def namespace(self) -> Namespace:
        return self._namespace

    def lookup(self, tag: Any) -> Optional[Version]:
        return self._versions.get(tag)

    def all(self) -> list[Version]:
        """All versions in ascending index order."""
        return list(self._versions.values())

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[Version]:
        return iter(self._versions.values())

    def __repr__(self) -> str:
        names = ", ".join(v.name for v in self._versions.values())
        return f"<VersionAxis {self._namespace.full_name} [{names}]>"


def _tag_value(tag: Any) -> str:
    value = getattr(tag, "value", None)
    return str(value) if value is not None else tag.name


class AxisRegistry:
    """Owns every version axis declared during one compilation."""

    def __init__(self) -> None:
        self._axes: dict[Namespace, VersionAxis] = {}
        self._by_tag: dict[Any, Version] = {}

    def declare_axis(self, namespace: Namespace, tags: Sequence[Any]) -> VersionAxis:
        """Declare *namespace* versioned with *tags* in the given order.

        Raises:
            DuplicateAxisError: If the namespace already owns an axis.
            ValueError: If *tags* is empty or repeats a tag.
        """
        if namespace in self._axes:
            raise DuplicateAxisError(namespace)

        axis = VersionAxis(namespace, tags)
        self._axes[namespace] = axis
        for version in axis:
            self._by_tag.setdefault(version.tag, version)

        logger.debug(
            "Declared version axis: namespace=%s versions=%d",
            namespace.full_name,
            len(axis),
        )
        return axis

    def axis_for(self, namespace: Namespace) -> Optional[VersionAxis]:
        """Axis owned directly by *namespace* (no ancestor walk)."""
        return self._axes.get(namespace)

    def is_versioned(self, namespace: Namespace) -> bool:
        return namespace in self._axes

    def version_for_tag(self, tag: Any) -> Optional[Version]:
        """Resolve a version tag (enum member) to its ``Version``.

        An enum member resolves through the axis of the namespace that
        declares its enum, so a sub-namespace reusing a parent's enum
        does not capture the parent's tags.  Other tags resolve to the
        first axis that declared them.
        """
        enum = getattr(tag, "enum", None)
        if enum is not None:
            owner = self.versions_for_enum(enum)
            if owner is not None:
                version = owner[1].lookup(tag)
                if version is not None:
                    return version
        return self._by_tag.get(tag)

    def versions_for_enum(self, enum: Enum) -> Optional[tuple[Namespace, VersionAxis]]:
        """Axis of the namespace that directly declares *enum*, if versioned."""
        namespace = enum.namespace
        if namespace is None:
            return None
        axis = self._axes.get(namespace)
        if axis is None:
            return None
        return namespace, axis

    def find_versioned_namespace(self, namespace: Namespace) -> Optional[Namespace]:
        """Nearest namespace, starting at *namespace*, that owns an axis."""
        for current in namespace.ancestors():
            if current in self._axes:
                return current
        return None

    def __len__(self) -> int:
        return len(self._axes)
