"""
apiversioning CLI - Inspect version resolution for a manifest.

Commands:
    apiversioning resolve       Resolve every version of a root namespace
    apiversioning projections   Show the projection specs built for a root namespace
    apiversioning inspect       Show one element's state in every resolution
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from apiversioning.config import configure_logging, get_config
from apiversioning.errors import VersioningError
from apiversioning.manifest.builder import BuiltSchema, ManifestBuilder
from apiversioning.manifest.loader import ManifestLoader
from apiversioning.versioning.evaluator import PointInTimeEvaluator


def _build(manifest_path: str) -> BuiltSchema:
    try:
        manifest = ManifestLoader().load(Path(manifest_path))
        return ManifestBuilder(manifest).build()
    except (ValidationError, TypeError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid manifest {manifest_path}: {e}")
    except VersioningError as e:
        raise click.ClickException(str(e))


def _echo_diagnostics(schema: BuiltSchema) -> None:
    for diagnostic in schema.context.diagnostics.diagnostics:
        click.echo(f"⚠️  {diagnostic}", err=True)


@click.group()
@click.version_option(package_name="apiversioning")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Override APIVERSIONING_LOG_LEVEL",
)
def main(log_level: Optional[str]) -> None:
    """apiversioning - Version resolution for evolving API schemas."""
    config = get_config(log_level=log_level) if log_level else get_config()
    configure_logging(config)


@main.command("resolve")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("namespace")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text")
@click.option(
    "--fail-on-diagnostics",
    is_flag=True,
    help="Exit with error if any diagnostic was reported",
)
def resolve_cmd(manifest: str, namespace: str, as_json: bool, fail_on_diagnostics: bool) -> None:
    """Resolve every version of NAMESPACE declared in MANIFEST."""
    schema = _build(manifest)
    try:
        root = schema.namespace(namespace)
        resolutions = schema.context.resolve_versions(root)
    except VersioningError as e:
        raise click.ClickException(str(e))

    _echo_diagnostics(schema)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in resolutions], indent=2))
    else:
        for resolution in resolutions:
            data = resolution.to_dict()
            label = data["root_version"] or "(unversioned)"
            pairs = ", ".join(f"{ns}={v}" for ns, v in data["versions"].items())
            click.echo(f"{label}: {pairs}" if pairs else label)

    if fail_on_diagnostics and schema.context.diagnostics.has_errors:
        sys.exit(1)


@main.command("projections")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("namespace")
def projections_cmd(manifest: str, namespace: str) -> None:
    """Show the projection specs built for NAMESPACE."""
    schema = _build(manifest)
    try:
        projections = schema.context.build_projections(schema.namespace(namespace))
    except VersioningError as e:
        raise click.ClickException(str(e))

    _echo_diagnostics(schema)
    for projection in projections:
        label = projection.version or "(unversioned)"
        if not projection.projections:
            click.echo(f"{label}: no projection")
            continue
        calls = ", ".join(
            f"{p.projection_name}({', '.join(repr(a) for a in p.arguments)})"
            for p in projection.projections
        )
        click.echo(f"{label}: {calls}")


@main.command("inspect")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("element")
@click.option("--root", "-r", required=True, help="Root namespace to resolve against")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text")
def inspect_cmd(manifest: str, element: str, root: str, as_json: bool) -> None:
    """Show ELEMENT's state in every resolution of ROOT."""
    schema = _build(manifest)
    try:
        target = schema.get(element)
        resolutions = schema.context.resolve_versions(schema.namespace(root))
    except VersioningError as e:
        raise click.ClickException(str(e))

    evaluator = PointInTimeEvaluator(schema.context)
    rows = []
    for resolution in resolutions:
        status = evaluator.status_at(target, resolution)
        label = resolution.root_version.value if resolution.root_version else None
        rows.append({"version": label, **status.model_dump()})

    _echo_diagnostics(schema)
    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        label = row["version"] or "(unversioned)"
        if not row["exists"]:
            click.echo(f"{label}: absent")
            continue
        flags = " optional" if row["optional"] else ""
        click.echo(f"{label}: {row['name']}{flags}")


if __name__ == "__main__":
    main()
