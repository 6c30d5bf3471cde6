"""
Lifecycle metadata store.

Per-element record of when an element was added, removed, made
optional, or renamed.  Records are accumulated by the annotation layer,
possibly out of declaration order; the store keeps renames sorted so
readers never see a partially ordered list.

Usage::

    from apiversioning.versioning.lifecycle import LifecycleStore

    store = LifecycleStore()
    store.mark_added(widget, v2)
    store.add_rename(widget, v3, "Gadget")
    store.name_at_version(widget, v1)   # "Gadget"
    store.name_at_version(widget, v3)   # ""
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from apiversioning.versioning.axis import Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameRecord:
    """A rename event: from ``version`` onward the element stopped using ``old_name``."""

    version: Version
    old_name: str


@dataclass
class LifecycleRecord:
    """Builder-style accumulator for one element's lifecycle marks.

    ``added_on``, ``removed_on`` and ``made_optional_on`` keep the first
    value applied.  ``renames`` is re-sorted (stably) by version index on
    every append.
    """

    added_on: Optional[Version] = None
    removed_on: Optional[Version] = None
    made_optional_on: Optional[Version] = None
    renames: list[RenameRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return (
            self.added_on is None
            and self.removed_on is None
            and self.made_optional_on is None
            and not self.renames
        )

    def add_rename(self, version: Version, old_name: str) -> None:
        self.renames.append(RenameRecord(version, old_name))
        self.renames.sort(key=lambda r: r.version.index)

    def to_dict(self) -> dict[str, Any]:
        def _name(v: Optional[Version]) -> Optional[str]:
            return v.name if v is not None else None

        return {
            "added_on": _name(self.added_on),
            "removed_on": _name(self.removed_on),
            "made_optional_on": _name(self.made_optional_on),
            "renames": [
                {"version": r.version.name, "old_name": r.old_name}
                for r in self.renames
            ],
        }


class LifecycleStore:
    """Identity-keyed map from schema element to ``LifecycleRecord``."""

    def __init__(self) -> None:
        self._records: dict[Any, LifecycleRecord] = {}

    def _record(self, element: Any) -> LifecycleRecord:
        record = self._records.get(element)
        if record is None:
            record = LifecycleRecord()
            self._records[element] = record
        return record

    def _set_once(self, element: Any, attr: str, version: Version) -> bool:
        _require_version(version)
        record = self._record(element)
        existing = getattr(record, attr)
        if existing is not None:
            logger.debug(
                "Ignoring second %s mark on %r: keeping %s, dropping %s",
                attr,
                element,
                existing.name,
                version.name,
            )
            return False
        setattr(record, attr, version)
        return True

    # -- writes -----------------------------------------------------------

    def mark_added(self, element: Any, version: Version) -> bool:
        """Record that *element* was added at *version*.

        Returns:
            False if an earlier ``added`` mark was kept instead.
        """
        return self._set_once(element, "added_on", version)

    def mark_removed(self, element: Any, version: Version) -> bool:
        return self._set_once(element, "removed_on", version)

    def mark_optional(self, element: Any, version: Version) -> bool:
        return self._set_once(element, "made_optional_on", version)

    def add_rename(self, element: Any, version: Version, old_name: str) -> None:
        """Append a rename event.

        Two renames at the same version index are both kept, in the order
        they were applied; avoiding that is the caller's job.
        """
        _require_version(version)
        self._record(element).add_rename(version, old_name)

    # -- reads ------------------------------------------------------------

    def get_record(self, element: Any) -> Optional[LifecycleRecord]:
        return self._records.get(element)

    def get_added(self, element: Any) -> Optional[Version]:
        record = self._records.get(element)
        return record.added_on if record else None

    def get_removed(self, element: Any) -> Optional[Version]:
        record = self._records.get(element)
        return record.removed_on if record else None

    def get_optional(self, element: Any) -> Optional[Version]:
        record = self._records.get(element)
        return record.made_optional_on if record else None

    def get_renames_ascending(self, element: Any) -> Optional[list[RenameRecord]]:
        """Rename events sorted by version index, or None if never renamed."""
        record = self._records.get(element)
        if record is None or not record.renames:
            return None
        return list(record.renames)

    def get_rename_versions(self, element: Any) -> Optional[list[Version]]:
        renames = self.get_renames_ascending(element)
        if renames is None:
            return None
        return [r.version for r in renames]

    def name_at_version(self, element: Any, version: Version) -> str:
        """Old name in effect at *version*, or ``""`` if the current name applies.

        A rename recorded at index *i* means every version strictly before
        *i* still used that record's ``old_name``.
        """
        renames = self.get_renames_ascending(element)
        if not renames:
            return ""
        for rename in renames:
            if version < rename.version:
                return rename.old_name
        return ""

    def __contains__(self, element: Any) -> bool:
        return element in self._records

    def __len__(self) -> int:
        return len(self._records)


def _require_version(version: Any) -> None:
    if not isinstance(version, Version):
        raise TypeError(
            "Lifecycle marks take a Version resolved from an axis, "
            f"got {type(version).__name__}"
        )
