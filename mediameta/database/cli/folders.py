"""
Folder Commands
---------------

Commands:
    - folder-title: Print the title derived from a folder path
"""
import click

from mediameta.reconcile.folders import ROOT_TITLES, Folder


@click.command("folder-title")
@click.argument("root")
@click.argument("path", default="")
@click.option("--dates", is_flag=True, help="Also print year, month and day")
def folder_title(root, path, dates):
    """Print the title of PATH below ROOT (originals, import, sidecar)."""
    if root not in ROOT_TITLES:
        click.echo(f"⚠️  Unknown root '{root}', using generic rules", err=True)

    folder = Folder.new(root, path)
    click.echo(folder.title)

    if dates and folder.year:
        click.echo(f"{folder.year:04d}-{folder.month:02d}-{folder.day:02d}")
