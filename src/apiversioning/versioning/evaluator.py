"""
Point-in-time evaluator.

Answers "did this element exist / was it optional / what was it named"
at a given version.  Queries come in two flavours:

- *Version queries* take a ``Version`` already projected onto the
  element's governing axis and return a tri-state result: ``True`` /
  ``False`` when the relevant mark applies, ``None`` when the element is
  unversioned or carries no such mark.  Passing a version from another
  axis raises ``CrossAxisComparisonError``.
- *Key queries* take a ``ResolutionKey`` produced by the projection
  builder, project it onto the element's governing namespace, and apply
  the default policy "not applicable means unaffected".

Usage::

    evaluator = PointInTimeEvaluator(context)
    evaluator.exists_at_or_after_added(widget, v1)   # False
    evaluator.added_after(widget, key)               # True for keys before v2
    evaluator.status_at(widget, resolution)          # ElementStatus(...)
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict

from apiversioning.errors import CrossAxisComparisonError
from apiversioning.types import DiagnosticCode
from apiversioning.versioning.axis import Version
from apiversioning.versioning.governing import GoverningAxis
from apiversioning.versioning.projection import ResolutionKey
from apiversioning.versioning.resolution import VersionResolution

if TYPE_CHECKING:
    from apiversioning.versioning.context import VersioningContext

logger = logging.getLogger(__name__)


class ElementStatus(BaseModel):
    """Resolved state of one element in one snapshot."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    exists: bool
    optional: bool
    name: str
    versioned: bool


class PointInTimeEvaluator:
    def __init__(self, context: VersioningContext) -> None:
        self._context = context

    # -- helpers ----------------------------------------------------------

    def _governing(self, element: Any, version: Version) -> Optional[GoverningAxis]:
        governing = self._context.governing.governing_axis(element)
        if governing is not None and version.namespace is not governing.namespace:
            raise CrossAxisComparisonError(version, governing.namespace)
        return governing

    def _applies(
        self, element: Any, version: Version, applied_on: Optional[Version]
    ) -> Optional[bool]:
        if self._governing(element, version) is None or applied_on is None:
            return None
        return version >= applied_on

    def _deprecated(self, element: Any, message: str) -> None:
        self._context.diagnostics.report(
            DiagnosticCode.DEPRECATED, target=element, message=message
        )
        warnings.warn(message, DeprecationWarning, stacklevel=3)

    # -- version queries --------------------------------------------------

    def exists_at_or_after_added(self, element: Any, version: Version) -> Optional[bool]:
        """True once *version* reaches the element's ``added`` mark."""
        return self._applies(element, version, self._context.lifecycle.get_added(element))

    def removed_at_or_before(self, element: Any, version: Version) -> Optional[bool]:
        """True from the element's ``removed`` mark onward."""
        return self._applies(element, version, self._context.lifecycle.get_removed(element))

    def made_optional_at_or_after(self, element: Any, version: Version) -> Optional[bool]:
        return self._applies(element, version, self._context.lifecycle.get_optional(element))

    def name_at(self, element: Any, version: Version) -> str:
        """Old name in effect at *version*, ``""`` when the declared name applies."""
        if self._governing(element, version) is None:
            return ""
        return self._context.lifecycle.name_at_version(element, version)

    def has_different_name_at(self, element: Any, version: Version) -> bool:
        return self.name_at(element, version) != ""

    def status_at(self, element: Any, resolution: VersionResolution) -> ElementStatus:
        """Combine every lifecycle query for *element* under *resolution*.

        Unversioned elements, and elements whose governing namespace takes
        no part in *resolution*, always exist under their declared name.
        """
        governing = self._context.governing.governing_axis(element)
        version = resolution.version_for(governing.namespace) if governing else None
        declared_optional = bool(getattr(element, "optional", False))
        if version is None:
            return ElementStatus(
                exists=True,
                optional=declared_optional,
                name=element.name,
                versioned=governing is not None,
            )

        added = self.exists_at_or_after_added(element, version)
        removed = self.removed_at_or_before(element, version)
        optional = self.made_optional_at_or_after(element, version)
        old_name = self.name_at(element, version)
        return ElementStatus(
            exists=added is not False and removed is not True,
            optional=declared_optional if optional is None else optional,
            name=old_name or element.name,
            versioned=True,
        )

    # -- resolution-key queries -------------------------------------------

    def version_for_key(self, element: Any, key: ResolutionKey) -> Optional[Version]:
        """Project *key* onto the element's governing namespace."""
        governing = self._context.governing.governing_axis(element)
        if governing is None:
            return None
        return self._context.resolution_table.version_for(key, governing.namespace)

    def _applies_at_key(
        self, element: Any, key: ResolutionKey, applied_on: Optional[Version]
    ) -> Optional[bool]:
        version = self.version_for_key(element, key)
        if version is None:
            return None
        return self._applies(element, version, applied_on)

    def added_after(self, element: Any, key: ResolutionKey) -> bool:
        """True if the element is added only after the version under *key*."""
        applies = self._applies_at_key(
            element, key, self._context.lifecycle.get_added(element)
        )
        return False if applies is None else not applies

    def removed_on_or_before(self, element: Any, key: ResolutionKey) -> bool:
        applies = self._applies_at_key(
            element, key, self._context.lifecycle.get_removed(element)
        )
        return False if applies is None else applies

    def made_optional_after(self, element: Any, key: ResolutionKey) -> bool:
        applies = self._applies_at_key(
            element, key, self._context.lifecycle.get_optional(element)
        )
        return False if applies is None else not applies

    def name_at_key(self, element: Any, key: ResolutionKey) -> str:
        version = self.version_for_key(element, key)
        if version is None:
            return ""
        return self.name_at(element, version)

    def has_different_name_at_key(self, element: Any, key: ResolutionKey) -> bool:
        return self.name_at_key(element, key) != ""

    # -- deprecated -------------------------------------------------------

    def renamed_after(self, element: Any, key: ResolutionKey) -> bool:
        """Deprecated: only looks at the first rename. Use ``has_different_name_at_key``."""
        self._deprecated(
            element,
            "Deprecated: renamed_after is deprecated. "
            "Use has_different_name_at_key instead.",
        )
        renames = self._context.lifecycle.get_renames_ascending(element)
        first = renames[0].version if renames else None
        applies = self._applies_at_key(element, key, first)
        return False if applies is None else not applies

    def get_renamed_from_version(self, element: Any) -> Optional[Version]:
        """Deprecated: first rename version. Use ``LifecycleStore.get_rename_versions``."""
        self._deprecated(
            element,
            "Deprecated: get_renamed_from_version is deprecated. "
            "Use get_rename_versions instead.",
        )
        renames = self._context.lifecycle.get_renames_ascending(element)
        return renames[0].version if renames else None

    def get_renamed_from_old_name(self, element: Any) -> str:
        """Deprecated: first rename's old name. Use ``name_at``."""
        self._deprecated(
            element,
            "Deprecated: get_renamed_from_old_name is deprecated. "
            "Use name_at instead.",
        )
        renames = self._context.lifecycle.get_renames_ascending(element)
        return renames[0].old_name if renames else ""
