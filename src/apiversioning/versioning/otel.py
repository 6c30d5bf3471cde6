"""
OTel span event emission helpers for version resolution.

Follows the ``add_span_event()`` pattern from ``_otel_helpers.py``; every
function is a no-op outside a recording span.

Usage::

    from apiversioning.versioning.otel import (
        emit_resolution_complete,
        emit_projections_built,
        emit_diagnostic,
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from apiversioning._otel_helpers import add_span_event

if TYPE_CHECKING:
    from apiversioning.graph.elements import Namespace
    from apiversioning.versioning.diagnostics import Diagnostic
    from apiversioning.versioning.projection import VersionProjection
    from apiversioning.versioning.resolution import VersionResolution

logger = logging.getLogger(__name__)


def emit_resolution_complete(
    root: Namespace, resolutions: Sequence[VersionResolution]
) -> None:
    """Emit a span event summarising the resolutions of *root*.

    Event name: ``versioning.resolution.complete``
    """
    namespaces = {ns for r in resolutions for ns in r.versions}
    attrs: dict[str, str | int | float | bool] = {
        "versioning.root": root.full_name,
        "versioning.versioned": any(r.root_version is not None for r in resolutions),
        "versioning.resolution_count": len(resolutions),
        "versioning.namespace_count": len(namespaces),
    }
    add_span_event("versioning.resolution.complete", attrs)


def emit_projections_built(
    root: Namespace, projections: Sequence[VersionProjection]
) -> None:
    """Emit a span event listing the version labels built for *root*.

    Event name: ``versioning.projection.built``
    """
    labels = [p.version for p in projections if p.version is not None]
    attrs: dict[str, str | int | float | bool] = {
        "versioning.root": root.full_name,
        "versioning.projection_count": len(projections),
        "versioning.versions": ",".join(labels),
    }
    add_span_event("versioning.projection.built", attrs)


def emit_diagnostic(diagnostic: Diagnostic) -> None:
    """Emit a span event for a reported diagnostic.

    Event name: ``versioning.diagnostic``
    """
    target = diagnostic.target
    attrs: dict[str, str | int | float | bool] = {
        "versioning.diagnostic.code": diagnostic.code.value,
        "versioning.diagnostic.severity": diagnostic.severity.value,
        "versioning.diagnostic.message": diagnostic.message,
        "versioning.diagnostic.target": getattr(target, "name", "") if target else "",
    }
    if not add_span_event("versioning.diagnostic", attrs):
        logger.debug("Diagnostic %s not recorded on a span", diagnostic.code.value)
