"""
Media Commands
--------------

Create records and run reconciliation cycles from YAML update files.

Commands:
    - ingest: Create a record and apply an update file to it
    - update: Apply an update file to an existing record
    - reindex: Re-derive title, keywords and quality of a record
    - delete: Soft or permanent deletion
    - restore: Undo a soft deletion

Update file format (all keys optional):

    uid: m3f9c0a1b2d4e5f60      # ingest only
    source: meta
    title: Beach walk
    taken_at: 2020-05-23T14:02:11Z
    latitude: 52.5163
    longitude: 13.3777
    details:
      keywords: dog, beach
    labels:
      - {name: dog, uncertainty: 10, priority: 2}
    location:
      city: Berlin
      country_name: Germany
"""
from pathlib import Path
from typing import Any, Dict

import click
import yaml

from mediameta.core.exceptions import MediaMetaError, ValidationError
from mediameta.core.logging_manager import handle_cli_error
from mediameta.dataclasses import UpdateDocument
from mediameta.database.managers.media_manager import ReconcileResult
from . import get_db


def load_update_file(path: Path) -> Dict[str, Any]:
    """
    Read a YAML update file.

    Raises:
        ValidationError: If the file is not valid YAML or not a mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(f"Update file must contain a mapping: {path}")
    return data


def echo_result(result: ReconcileResult) -> None:
    accepted = ", ".join(result.accepted()) or "none"
    click.echo(f"  Accepted fields: {accepted}")
    if result.title is not None:
        state = "updated" if result.title.accepted else "kept"
        click.echo(f"  Title ({state}): {result.title.value}")
    click.echo(f"  Keywords: {len(result.keywords)}")
    click.echo(f"  Quality: {result.quality}")


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def ingest(ctx, file):
    """Create a record from an update FILE."""
    try:
        data = load_update_file(file)
        document = UpdateDocument.from_dict(data)
        db = get_db(ctx)

        with db.session_scope():
            record = db.media.create({"uid": data.get("uid")})
            result = db.media.reconcile(
                record, document.update, document.labels, document.location
            )
            uid = record.uid

        click.echo(f"✅ Created {uid}")
        echo_result(result)

    except MediaMetaError as e:
        handle_cli_error(ctx, e, "ingest", {"file": str(file)})


@click.command()
@click.argument("uid")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--form", is_flag=True, help="Apply as a manual edit")
@click.pass_context
def update(ctx, uid, file, form):
    """Apply an update FILE to the record UID."""
    try:
        document = UpdateDocument.from_dict(load_update_file(file))
        db = get_db(ctx)

        if form:
            with db.session_scope():
                record = db.media.get(uid=uid)
                if record is None:
                    raise ValidationError(f"Media not found: {uid}")
                result = db.media.save_form(
                    record, document.update, document.location, document.labels
                )
        else:
            result = db.run_cycle(uid, document.update, document.labels, document.location)

        click.echo(f"✅ Updated {uid}")
        echo_result(result)

    except MediaMetaError as e:
        handle_cli_error(ctx, e, "update", {"uid": uid, "file": str(file)})


@click.command()
@click.argument("uid")
@click.pass_context
def reindex(ctx, uid):
    """Re-derive title, keywords and quality of the record UID."""
    try:
        result = get_db(ctx).run_cycle(uid)
        click.echo(f"✅ Reindexed {uid}")
        echo_result(result)

    except MediaMetaError as e:
        handle_cli_error(ctx, e, "reindex", {"uid": uid})


@click.command()
@click.argument("uid")
@click.option("--permanently", is_flag=True, help="Remove the row and its associations")
@click.option("--reason", default=None, help="Reason recorded with a soft deletion")
@click.pass_context
def delete(ctx, uid, permanently, reason):
    """Delete the record UID."""
    try:
        db = get_db(ctx)

        with db.session_scope():
            record = db.media.get(uid=uid, include_deleted=True)
            if record is None:
                raise ValidationError(f"Media not found: {uid}")
            db.media.delete(record, permanently=permanently, reason=reason)

        if permanently:
            click.echo(f"🗑️  Deleted {uid} permanently")
        else:
            click.echo(f"🗑️  Deleted {uid}")

    except MediaMetaError as e:
        handle_cli_error(ctx, e, "delete", {"uid": uid})


@click.command()
@click.argument("uid")
@click.pass_context
def restore(ctx, uid):
    """Restore the soft-deleted record UID."""
    try:
        db = get_db(ctx)

        with db.session_scope():
            record = db.media.get(uid=uid, include_deleted=True)
            if record is None:
                raise ValidationError(f"Media not found: {uid}")
            db.media.restore(record)

        click.echo(f"♻️  Restored {uid}")

    except MediaMetaError as e:
        handle_cli_error(ctx, e, "restore", {"uid": uid})
