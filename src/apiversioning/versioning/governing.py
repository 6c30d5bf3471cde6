"""
Governing-axis resolver.

Finds, for any schema element, the nearest enclosing namespace that owns
a version axis.  The walk depends on the element kind:

- Namespace: itself if versioned, else its parent; a root namespace with
  no axis is unversioned.
- Operation / Interface / Model / Union / Enum: the containing namespace;
  an operation declared inside an interface walks through the interface.
- Model property / union variant: the source element when it was copied
  from one, otherwise the owning model / union.
- Enum member: the owning enum.

Results are memoized per element identity for the lifetime of the
resolver (one per ``VersioningContext``), including "unversioned".
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

from apiversioning.graph.elements import (
    Enum,
    EnumMember,
    Interface,
    Model,
    ModelProperty,
    Namespace,
    Operation,
    Union,
    UnionVariant,
)
from apiversioning.versioning.axis import AxisRegistry, VersionAxis

logger = logging.getLogger(__name__)


class GoverningAxis(NamedTuple):
    namespace: Namespace
    axis: VersionAxis


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int


class GoverningAxisResolver:
    """Memoized element -> ``GoverningAxis`` lookup."""

    def __init__(self, axes: AxisRegistry) -> None:
        self._axes = axes
        self._cache: dict[Any, Optional[GoverningAxis]] = {}
        self._hits = 0
        self._misses = 0

    def governing_axis(self, element: Any) -> Optional[GoverningAxis]:
        """Return the ``(namespace, axis)`` governing *element*, or None."""
        if element in self._cache:
            self._hits += 1
            return self._cache[element]

        self._misses += 1
        result = self._compute(element)
        self._cache[element] = result
        return result

    def is_versioned(self, element: Any) -> bool:
        return self.governing_axis(element) is not None

    def cache_info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, len(self._cache))

    def _compute(self, element: Any) -> Optional[GoverningAxis]:
        if isinstance(element, Namespace):
            axis = self._axes.axis_for(element)
            if axis is not None:
                return GoverningAxis(element, axis)
            if element.namespace is not None:
                return self.governing_axis(element.namespace)
            return None

        if isinstance(element, Operation):
            if element.namespace is not None:
                return self.governing_axis(element.namespace)
            if element.interface is not None:
                return self.governing_axis(element.interface)
            return None

        if isinstance(element, (Interface, Model, Union, Enum)):
            if element.namespace is not None:
                return self.governing_axis(element.namespace)
            return None

        if isinstance(element, ModelProperty):
            if element.source_property is not None:
                return self.governing_axis(element.source_property)
            if element.model is not None:
                return self.governing_axis(element.model)
            return None

        if isinstance(element, UnionVariant):
            if element.source_variant is not None:
                return self.governing_axis(element.source_variant)
            if element.union is not None:
                return self.governing_axis(element.union)
            return None

        if isinstance(element, EnumMember):
            if element.enum is not None:
                return self.governing_axis(element.enum)
            return None

        logger.debug("No governing-axis rule for %r; treating as unversioned", element)
        return None
