"""
OTel span event emission for the versioning engine.

``add_span_event()`` is the single place that touches the OpenTelemetry
API.  It honours ``VersioningConfig.emit_span_events`` and does nothing
when there is no recording span, so resolution code can call it
unconditionally.

Usage::

    from apiversioning._otel_helpers import add_span_event

    add_span_event("versioning.resolution.complete", {"versioning.root": "Contoso"})
"""

from __future__ import annotations

from apiversioning.config import get_config

try:
    from opentelemetry import trace as otel_trace

    HAS_OTEL = True
except ImportError:  # pragma: no cover
    HAS_OTEL = False

SpanAttributes = dict[str, "str | int | float | bool"]


def add_span_event(name: str, attributes: SpanAttributes) -> bool:
    """Attach *name* with *attributes* to the current span.

    Args:
        name: Event name (e.g. ``"versioning.diagnostic"``).
        attributes: Flat dict of span event attributes.

    Returns:
        True if an event was recorded.
    """
    if not HAS_OTEL or not get_config().emit_span_events:
        return False
    span = otel_trace.get_current_span()
    if span is None or not span.is_recording():
        return False
    span.add_event(name=name, attributes=attributes)
    return True
