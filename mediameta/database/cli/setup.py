"""
Setup Commands
--------------

Database initialization.

Commands:
    - init: Create the database schema
"""
import click

from mediameta.core.logging_manager import handle_cli_error
from mediameta.core.exceptions import DatabaseError
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the database schema."""
    try:
        db = get_db(ctx)

        click.echo("🗄️  Initializing database schema...")
        db.initialize_schema()
        click.echo(f"✅ Database initialized! ({len(db.table_names())} tables)")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
