"""
CLI sync commands — preview and apply a change manifest.

Usage:
    assetsync plan --source DIR --target DIR --changes changes.yaml [--json]
    assetsync sync --source DIR --target DIR --changes changes.yaml
                   [--no-stage] [--audit-log FILE] [--json]
"""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Optional, Sequence, Tuple

import click


def _common_options(fn):
    fn = click.option(
        "--pattern", "patterns", multiple=True,
        help="Only track files matching this glob (repeatable, e.g. '*.svg')",
    )(fn)
    fn = click.option(
        "--changes", "changes_file", required=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Change manifest (YAML or JSON) with added/modified/removed lists",
    )(fn)
    fn = click.option(
        "--target", "target", type=click.Path(file_okay=False, path_type=Path),
        help="Root of the target tree (default: ASSET_SYNC_TARGET_DIR)",
    )(fn)
    fn = click.option(
        "--source", "source", type=click.Path(file_okay=False, path_type=Path),
        help="Root of the source-of-truth tree (default: ASSET_SYNC_SOURCE_DIR)",
    )(fn)
    return fn


def _resolve_dirs(settings, source: Optional[Path], target: Optional[Path]) -> Tuple[Path, Path]:
    source_dir = source or settings.source_dir
    target_dir = target or settings.target_dir
    if source_dir is None:
        raise click.UsageError("No source tree: pass --source or set ASSET_SYNC_SOURCE_DIR")
    if target_dir is None:
        raise click.UsageError("No target tree: pass --target or set ASSET_SYNC_TARGET_DIR")
    return Path(source_dir).absolute(), Path(target_dir).absolute()


def _prepare(ctx: click.Context, source, target, changes_file, patterns: Sequence[str]):
    """Load the manifest and build both locators."""
    from ..sync.errors import ManifestError
    from ..sync.locator import build_locator, resolver_with_default
    from ..sync.manifest import load_changes

    settings = ctx.obj["settings"]
    source_dir, target_dir = _resolve_dirs(settings, source, target)
    patterns = list(patterns) or settings.patterns

    try:
        changes = load_changes(changes_file)
    except ManifestError as e:
        raise click.ClickException(str(e))

    source_locator = build_locator(source_dir, resolver_with_default(source_dir), patterns)
    target_locator = build_locator(target_dir, resolver_with_default(target_dir), patterns)
    return changes, source_dir, target_dir, source_locator, target_locator


@click.command("plan")
@_common_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def plan(
    ctx: click.Context,
    source: Optional[Path],
    target: Optional[Path],
    changes_file: Path,
    patterns: Tuple[str, ...],
    as_json: bool,
) -> None:
    """Show what a sync would change, without touching the target tree."""
    from ..sync.engine import plan_sync

    changes, source_dir, target_dir, source_locator, target_locator = _prepare(
        ctx, source, target, changes_file, patterns
    )
    result = plan_sync(changes, source_locator, target_locator, target_dir)

    if as_json:
        click.echo(json.dumps(result.model_dump(), indent=2))
    else:
        click.echo(f"\n🗂  Sync plan: {source_dir} → {target_dir}\n")
        for action in result.actions:
            click.echo(f"  {action.action:9} {action.path}")
        if not result.actions:
            click.echo("  Nothing to do.")
        click.echo()
        click.echo(
            f"  {result.count('copy')} copy, {result.count('overwrite')} overwrite, "
            f"{result.count('delete')} delete"
        )
        for problem in result.problems:
            click.secho(f"  ✗ {problem}", fg="red")

    if result.problems:
        ctx.exit(1)


@click.command("sync")
@_common_options
@click.option("--no-stage", is_flag=True,
              help="Copy files but skip git add (also: ASSET_SYNC_STAGE=false)")
@click.option("--audit-log", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Append an NDJSON record of the run to this file")
@click.option("--json", "as_json", is_flag=True, help="Output the report as JSON")
@click.pass_context
def sync(
    ctx: click.Context,
    source: Optional[Path],
    target: Optional[Path],
    changes_file: Path,
    patterns: Tuple[str, ...],
    no_stage: bool,
    audit_log: Optional[Path],
    as_json: bool,
) -> None:
    """Apply a change manifest to the target tree.

    Every item is attempted; failures are reported at the end and make
    the command exit with status 1.
    """
    from ..persistence.audit import AuditWriter, new_run_id
    from ..sync.engine import run_sync
    from ..sync.locator import resolver_with_default
    from ..sync.vcs import find_repo_root, stage_files

    settings = ctx.obj["settings"]
    changes, source_dir, target_dir, source_locator, target_locator = _prepare(
        ctx, source, target, changes_file, patterns
    )

    staging = settings.stage and not no_stage
    if staging:
        stager = functools.partial(
            stage_files, batch_size=settings.stage_batch_size, timeout=settings.git_timeout
        )
        repo_resolver = find_repo_root
    else:
        stager = None
        repo_resolver = resolver_with_default(target_dir)

    audit = AuditWriter(audit_log) if audit_log else None
    run_id = new_run_id()
    if audit:
        audit.emit_sync_start(run_id, changes, source_dir, target_dir)

    report = run_sync(
        changes,
        source_locator,
        target_locator,
        target_dir,
        repo_resolver=repo_resolver,
        stager=stager,
    )

    if audit:
        audit.emit_report(run_id, report)

    if as_json:
        click.echo(json.dumps({"run_id": run_id, **report.model_dump()}, indent=2))
    else:
        click.echo(f"\n🔄 Sync {run_id}: {source_dir} → {target_dir}\n")
        click.echo(f"  Added:     {report.added}")
        click.echo(f"  Modified:  {report.modified}")
        click.echo(f"  Removed:   {report.removed}")
        if report.pruned_dirs:
            click.echo(f"  Pruned:    {report.pruned_dirs} empty director(ies)")
        for repo, paths in report.staged.items():
            click.echo(f"  Staged:    {len(paths)} file(s) in {repo}")
        for warning in report.warnings:
            click.secho(f"  ⚠️  {warning}", fg="yellow")
        click.echo()
        if report.ok:
            click.secho("✓ Target tree in sync", fg="green")
        else:
            click.secho(f"✗ {len(report.failures)} item(s) failed:", fg="red", bold=True)
            for failure in report.failures:
                click.echo(f"    [{failure.operation}] {failure.target}: {failure.error}")

    if not report.ok:
        ctx.exit(1)
