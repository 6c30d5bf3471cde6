"""
apiversioning - Version resolution for evolving API schema graphs.

Tracks how a schema graph changes across the named versions of each
namespace and computes, for every version of a root namespace, which
version of every involved namespace applies.

Key Features:
- Per-namespace version axes declared from an enum of version tags
- Lifecycle marks per element: added, removed, renamed, made optional
- Cross-namespace version dependencies (pinned or mapped per version)
- Deterministic resolution into projection keys for an external
  projection engine

Example usage:
    from apiversioning import VersioningContext
    from apiversioning.versioning import annotations

    context = VersioningContext()
    annotations.versioned(context, contoso, versions_enum)
    annotations.added(context, widget, versions_enum.members["v2"])

    for projection in context.build_projections(contoso):
        print(projection.version, projection.key)
"""

__version__ = "0.1.0"
__all__ = [
    "VersioningContext",
    "PointInTimeEvaluator",
    "resolve_versions",
    "__version__",
]


# Lazy imports keep ``apiversioning.config`` importable without pulling in the engine
def __getattr__(name: str):
    if name == "VersioningContext":
        from apiversioning.versioning.context import VersioningContext
        return VersioningContext
    if name == "PointInTimeEvaluator":
        from apiversioning.versioning.evaluator import PointInTimeEvaluator
        return PointInTimeEvaluator
    if name == "resolve_versions":
        from apiversioning.versioning.resolution import resolve_versions
        return resolve_versions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
