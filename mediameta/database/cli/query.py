"""
Query Commands
--------------

Display reconciled records.

Commands:
    - show: Display a record with field sources, keywords and labels
"""
import click

from mediameta.core.exceptions import MediaMetaError, ValidationError
from mediameta.core.logging_manager import handle_cli_error
from mediameta.database.models import YEAR_UNKNOWN
from . import get_db


@click.command()
@click.argument("uid")
@click.option("--deleted", is_flag=True, help="Include soft-deleted records")
@click.pass_context
def show(ctx, uid, deleted):
    """Display the record UID."""
    try:
        db = get_db(ctx)

        with db.session_scope():
            record = db.media.get(uid=uid, include_deleted=deleted)
            if record is None:
                raise ValidationError(f"Media not found: {uid}")

            click.echo(f"\n🖼️  {record.uid}")
            if record.is_deleted:
                click.echo(f"   (deleted {record.deleted_at.isoformat()})")

            click.echo(f"  Title: {record.title} [{record.title_src.value}]")
            if record.description:
                click.echo(
                    f"  Description: {record.description} [{record.description_src.value}]"
                )

            taken = record.taken_at.isoformat() if record.taken_at else "-"
            click.echo(f"  Taken: {taken} UTC [{record.taken_src.value}]")
            if record.time_zone:
                click.echo(f"  Time zone: {record.time_zone}")

            if record.year == YEAR_UNKNOWN:
                click.echo("  Year/month: unknown")
            else:
                click.echo(f"  Year/month: {record.year}/{record.month:02d}")

            if record.has_lat_lng():
                click.echo(
                    f"  Position: {record.latitude}, {record.longitude} "
                    f"({record.altitude} m) [{record.coordinate_src.value}]"
                )
            if record.has_place():
                place = [record.place_name, record.place_city, record.place_country]
                click.echo(f"  Place: {', '.join(p for p in place if p)}")

            click.echo(f"  Quality: {record.quality}")

            keywords = db.keywords.get_for_media(record)
            if keywords:
                click.echo(f"\n🔑 Keywords: {', '.join(keywords)}")

            labels = db.labels.classify_labels(record)
            if labels:
                click.echo(f"\n🏷️  Labels ({len(labels)}):")
                for label in labels:
                    click.echo(
                        f"  • {label.name} (uncertainty {label.uncertainty}, "
                        f"priority {label.priority}, {label.source.value})"
                    )

    except MediaMetaError as e:
        handle_cli_error(ctx, e, "show", {"uid": uid})
