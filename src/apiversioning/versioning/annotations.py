"""
Annotation entry points for the host compiler.

Each function mirrors one schema annotation (``@versioned``, ``@added``,
``@removed``, ``@renamedFrom``, ``@madeOptional``,
``@versionedDependency``).  Version arguments arrive as enum members;
a member that does not belong to any declared axis is reported as a
``version-not-found`` diagnostic and the annotation is skipped.  A
lifecycle mark whose version belongs to another namespace's axis than
the one governing the element is reported as ``version-axis-mismatch``
and skipped the same way.

Configuration errors that the annotation layer cannot recover from
(declaring an axis twice, using the wrong dependency form for the
consumer) raise.

Usage::

    from apiversioning.versioning import annotations

    annotations.versioned(context, contoso, versions_enum)
    annotations.added(context, widget, versions_enum.members["v2"])
    annotations.renamed_from(context, widget, versions_enum.members["v3"], "Gadget")
    annotations.versioned_dependency(context, contoso, TupleLiteral(values=(
        TupleLiteral(values=(v1, library_l2)),
        TupleLiteral(values=(v2, library_l3)),
    )))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from apiversioning.graph.elements import Enum, EnumMember, Namespace, TupleLiteral
from apiversioning.types import DiagnosticCode
from apiversioning.versioning.axis import Version, VersionAxis

if TYPE_CHECKING:
    from apiversioning.versioning.context import VersioningContext

logger = logging.getLogger(__name__)


def check_is_version(
    context: VersioningContext,
    member: EnumMember,
    target: Optional[Any] = None,
) -> Optional[Version]:
    """Resolve *member* to a ``Version``, reporting ``version-not-found`` if it is not one."""
    version = context.axes.version_for_tag(member)
    if version is None:
        context.diagnostics.report(
            DiagnosticCode.VERSION_NOT_FOUND,
            target=target if target is not None else member,
            version=member.name,
            enum_name=member.enum.name if member.enum is not None else "",
        )
    return version


def _mark_version(
    context: VersioningContext, element: Any, member: EnumMember
) -> Optional[Version]:
    """Resolve *member* for a lifecycle mark on *element*.

    The version must come from the axis governing *element*; one from any
    other axis is reported as ``version-axis-mismatch`` and rejected.
    """
    version = check_is_version(context, member)
    if version is None:
        return None
    governing = context.governing.governing_axis(element)
    if governing is not None and version.namespace is not governing.namespace:
        context.diagnostics.report(
            DiagnosticCode.VERSION_AXIS_MISMATCH,
            target=element,
            version=version.name,
            version_namespace=version.namespace.full_name,
            element=getattr(element, "name", element),
            namespace=governing.namespace.full_name,
        )
        return None
    return version


def versioned(
    context: VersioningContext, namespace: Namespace, versions: Enum
) -> VersionAxis:
    """Declare *namespace* versioned by the members of *versions*, in order.

    Raises:
        DuplicateAxisError: If *namespace* is already versioned.
    """
    return context.axes.declare_axis(namespace, list(versions.members.values()))


def added(context: VersioningContext, element: Any, member: EnumMember) -> bool:
    version = _mark_version(context, element, member)
    if version is None:
        return False
    return context.lifecycle.mark_added(element, version)


def removed(context: VersioningContext, element: Any, member: EnumMember) -> bool:
    version = _mark_version(context, element, member)
    if version is None:
        return False
    return context.lifecycle.mark_removed(element, version)


def made_optional(context: VersioningContext, element: Any, member: EnumMember) -> bool:
    version = _mark_version(context, element, member)
    if version is None:
        return False
    return context.lifecycle.mark_optional(element, version)


def renamed_from(
    context: VersioningContext, element: Any, member: EnumMember, old_name: str
) -> bool:
    version = _mark_version(context, element, member)
    if version is None:
        return False
    context.lifecycle.add_rename(element, version, old_name)
    return True


def versioned_dependency(
    context: VersioningContext,
    consumer: Namespace,
    record: Union[EnumMember, TupleLiteral],
) -> bool:
    """Declare which version(s) of another namespace *consumer* depends on.

    *record* is either one enum member (unversioned consumer pins a
    version) or a tuple of ``[consumer_version, dependency_version]``
    tuples (versioned consumer maps each of its versions).  Malformed
    entries are reported and skipped; targets spanning more than one
    namespace abandon the whole declaration.

    Returns:
        True if anything was recorded.

    Raises:
        DependencyShapeError: If the form does not match whether
            *consumer* is versioned.
    """
    if isinstance(record, EnumMember):
        version = check_is_version(context, record)
        if version is None:
            return False
        context.dependencies.declare_fixed(consumer, version)
        return True

    target_namespace: Optional[Namespace] = None
    mapping: dict[EnumMember, Version] = {}

    for entry in record.values:
        if not isinstance(entry, TupleLiteral):
            context.diagnostics.report(DiagnosticCode.DEPENDENCY_TUPLE, target=entry)
            continue

        source_member = entry.values[0] if len(entry.values) > 0 else None
        target_member = entry.values[1] if len(entry.values) > 1 else None
        if not isinstance(source_member, EnumMember):
            context.diagnostics.report(
                DiagnosticCode.DEPENDENCY_TUPLE_ENUM_MEMBER,
                target=source_member if source_member is not None else entry,
            )
            continue
        if not isinstance(target_member, EnumMember):
            context.diagnostics.report(
                DiagnosticCode.DEPENDENCY_TUPLE_ENUM_MEMBER,
                target=target_member if target_member is not None else entry,
            )
            continue

        target_version = check_is_version(context, target_member)
        if target_version is None:
            continue
        if target_namespace is None:
            target_namespace = target_version.namespace
        elif target_namespace is not target_version.namespace:
            context.diagnostics.report(
                DiagnosticCode.DEPENDENCY_SAME_NAMESPACE,
                target=target_member,
                namespace1=target_namespace.full_name,
                namespace2=target_version.namespace.full_name,
            )
            return False

        mapping[source_member] = target_version

    if target_namespace is None:
        logger.debug(
            "Dependency declaration on %s recorded nothing", consumer.full_name
        )
        return False

    context.dependencies.declare_mapped(consumer, target_namespace, mapping)
    return True
