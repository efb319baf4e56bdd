"""
assetsync — CLI Entry Point

Usage:
    assetsync plan --source DIR --target DIR --changes FILE
    assetsync sync --source DIR --target DIR --changes FILE [--no-stage]
    python -m assetsync.main sync ...
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from .cli.sync import plan, sync
from .config.settings import SyncSettings
from .logging_config import setup_logging


@click.group()
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR (default: LOG_LEVEL or INFO)")
@click.option("--log-format", type=click.Choice(["text", "json"]), default=None,
              help="Diagnostic output format (default: LOG_FORMAT or text)")
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """assetsync — Reconcile shared asset repositories with a source of truth."""
    # .env in the working directory, loaded before settings read the environment
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    setup_logging(level=log_level, format_type=log_format)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = SyncSettings.from_env()


cli.add_command(plan)
cli.add_command(sync)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
