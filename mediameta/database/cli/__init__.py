#!/usr/bin/env python3
"""
mediameta Command Line Interface
--------------------------------

Command-line interface for the metadata reconciliation engine.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Setup (init)
    - Media (ingest, update, reindex, delete, restore)
    - Query (show)
    - Folders (folder-title)

Usage:
    # Get general help
    mediameta --help

    # Apply an update file to a record
    mediameta update m3f9c0a1b2d4e5f60 update.yaml

    # Title of a folder path
    mediameta folder-title import 2020/05/23
"""
import click
from pathlib import Path

from mediameta.core.paths import DB_PATH, LOG_DIR
from mediameta.database.manager import MediaMetaDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, verbose):
    """mediameta: media metadata reconciliation"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose


def get_db(ctx) -> MediaMetaDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = MediaMetaDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
        )
        ctx.obj["logger"] = ctx.obj["db"].logger
        ctx.call_on_close(ctx.obj["db"].close)
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .media import ingest, update, reindex, delete, restore  # noqa: E402
from .query import show  # noqa: E402
from .folders import folder_title  # noqa: E402

cli.add_command(init)
cli.add_command(ingest)
cli.add_command(update)
cli.add_command(reindex)
cli.add_command(delete)
cli.add_command(restore)
cli.add_command(show)
cli.add_command(folder_title)


if __name__ == "__main__":
    cli(obj={})
