"""
Structured diagnostic channel.

Authoring mistakes (an unknown version tag, a malformed dependency
tuple) are reported here and the offending annotation is skipped; they
never raise.  Every report is logged and mirrored as an OTel span event
so hosts that only watch telemetry still see them.

Usage::

    reporter = DiagnosticReporter()
    reporter.report(DiagnosticCode.VERSION_NOT_FOUND, target=member,
                    version="v9", enum_name="Versions")
    if reporter.has_errors:
        ...
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from apiversioning.types import DiagnosticCode, DiagnosticSeverity
from apiversioning.versioning.otel import emit_diagnostic

logger = logging.getLogger(__name__)

_MESSAGES: dict[DiagnosticCode, str] = {
    DiagnosticCode.VERSION_NOT_FOUND: (
        "The provided version '{version}' from '{enum_name}' is not declared "
        "as a version enum. Use '@versioned(...)' on the containing namespace."
    ),
    DiagnosticCode.VERSION_AXIS_MISMATCH: (
        "Version '{version}' of '{version_namespace}' cannot mark '{element}', "
        "which is versioned by '{namespace}'."
    ),
    DiagnosticCode.DEPENDENCY_MAPPING_MISSING: (
        "Version '{version}' of '{namespace}' has no mapping to a version "
        "of dependency '{dependency}'."
    ),
    DiagnosticCode.DEPENDENCY_TUPLE: (
        "Versioned dependency mapping must be a tuple [SourceVersion, TargetVersion]."
    ),
    DiagnosticCode.DEPENDENCY_TUPLE_ENUM_MEMBER: (
        "Versioned dependency mapping must be between enum members."
    ),
    DiagnosticCode.DEPENDENCY_SAME_NAMESPACE: (
        "Versioned dependency mapping must all point to the same namespace but "
        "2 versions have different namespaces '{namespace1}' and '{namespace2}'."
    ),
    DiagnosticCode.DEPRECATED: "{message}",
}

_SEVERITIES: dict[DiagnosticCode, DiagnosticSeverity] = {
    DiagnosticCode.DEPRECATED: DiagnosticSeverity.WARNING,
}


class Diagnostic(BaseModel):
    """One reported diagnostic."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    code: DiagnosticCode
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    message: str
    target: Optional[Any] = Field(
        None, description="Schema element the diagnostic points at"
    )

    def __str__(self) -> str:
        return f"{self.severity.value} {self.code.value}: {self.message}"


class DiagnosticReporter:
    """Collects diagnostics for one compilation."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def report(
        self,
        code: DiagnosticCode,
        target: Optional[Any] = None,
        **format_args: Any,
    ) -> Diagnostic:
        """Format, record, log and emit a diagnostic.

        Args:
            code: Diagnostic code.
            target: Element the diagnostic points at.
            **format_args: Values interpolated into the code's message.
        """
        diagnostic = Diagnostic(
            code=code,
            severity=_SEVERITIES.get(code, DiagnosticSeverity.ERROR),
            message=_MESSAGES[code].format(**format_args),
            target=target,
        )
        self._diagnostics.append(diagnostic)

        if diagnostic.severity is DiagnosticSeverity.ERROR:
            logger.warning("%s (target=%r)", diagnostic, target)
        else:
            logger.debug("%s (target=%r)", diagnostic, target)

        emit_diagnostic(diagnostic)
        return diagnostic

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(d.severity is DiagnosticSeverity.ERROR for d in self._diagnostics)

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.code is code]

    def clear(self) -> None:
        self._diagnostics.clear()

    def __len__(self) -> int:
        return len(self._diagnostics)
