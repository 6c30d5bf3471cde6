"""
Exception hierarchy for the versioning engine.

Two tiers of failure exist.  Authoring mistakes in schema text are
*diagnostics* (see ``versioning/diagnostics.py``) and never raise.  The
exceptions below cover configuration errors reported straight to the
caller and internal consistency failures that must halt resolution of
a namespace.
"""

from __future__ import annotations

from typing import Any


class VersioningError(Exception):
    """Base class for all versioning engine errors."""


class DuplicateAxisError(VersioningError):
    """Raised when a namespace is declared versioned twice."""

    def __init__(self, namespace: Any) -> None:
        self.namespace = namespace
        super().__init__(
            f"Namespace '{_name_of(namespace)}' already has a version axis"
        )


class DependencyShapeError(VersioningError):
    """Raised when a dependency is declared in the wrong form for its consumer.

    Unversioned consumers must pin a single version; versioned consumers
    must map every one of their versions.
    """

    def __init__(self, consumer: Any, expected: str, got: str) -> None:
        self.consumer = consumer
        self.expected = expected
        self.got = got
        super().__init__(
            f"Namespace '{_name_of(consumer)}' requires a {expected} "
            f"version dependency, got {got}"
        )


class ResolutionConsistencyError(VersioningError):
    """Raised when resolution meets a state declaration-time validation should have rejected."""

    def __init__(self, root: Any, dependency: Any, detail: str) -> None:
        self.root = root
        self.dependency = dependency
        super().__init__(
            f"Unexpected error: Namespace {_name_of(root)} version dependency "
            f"to {_name_of(dependency)} {detail}."
        )


class CrossAxisComparisonError(VersioningError):
    """Raised when a version is compared against a different namespace's axis."""

    def __init__(self, version: Any, expected_namespace: Any) -> None:
        self.version = version
        self.expected_namespace = expected_namespace
        super().__init__(
            f"Version '{version.name}' of '{_name_of(version.namespace)}' is not "
            f"on the version axis of '{_name_of(expected_namespace)}'"
        )


class UnknownResolutionKeyError(VersioningError, KeyError):
    """Raised when a resolution key was never registered in the table."""


class ManifestError(VersioningError):
    """Raised when a manifest references elements that cannot be built."""


def _name_of(element: Any) -> str:
    full_name = getattr(element, "full_name", None)
    if full_name:
        return full_name
    return getattr(element, "name", repr(element))
