"""CLI for AMPBoard."""

import sys
from pathlib import Path

import click
import structlog

from ampboard.config.logging import configure_logging
from ampboard.core.exceptions import DatabaseDumpError
from ampboard.core.models.export import ArchiveEngine, UploadsMode

logger = structlog.get_logger(__name__)

UPLOADS_CHOICES = click.Choice([mode.value for mode in UploadsMode])
ENGINE_CHOICES = click.Choice([engine.value for engine in ArchiveEngine])


def _settings():
    from ampboard.config.settings import get_settings

    return get_settings()


def _export_service():
    from ampboard.services.export import ExportService

    return ExportService(_settings())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """AMPBoard: local AMP stack dashboard."""
    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(log_level=log_level)


@cli.command()
@click.option("--html", "as_html", is_flag=True, help="Print the rendered markup")
def folders(as_html: bool) -> None:
    """List project folders per configured column."""
    from ampboard.services.folders import FoldersService

    listing = FoldersService(_settings()).render()
    if as_html:
        click.echo(listing.html)
        return

    for column in listing.columns:
        click.echo(f"{column.title} ({column.dir})")
        if column.error:
            click.echo(f"  ! {column.error}")
        for item in column.items:
            click.echo(f"  - {item}")
        click.echo()

    if listing.errors:
        click.echo("Configuration errors:", err=True)
        for error in listing.errors:
            click.echo(f"  {error}", err=True)


@cli.command()
def groups() -> None:
    """List exportable folders grouped by column."""
    export_groups = _export_service().scan_groups()
    if not export_groups:
        click.echo("No export groups configured.")
        return

    for group in export_groups:
        click.echo(f"[{group.index}] {group.title} ({group.dir})")
        for sub in group.subfolders:
            flags = ""
            if sub.is_wordpress_root:
                flags = " [WordPress, uploads]" if sub.has_uploads else " [WordPress]"
            click.echo(f"  - {sub.name}{flags}")


@cli.command("export-folder")
@click.argument("group", type=int)
@click.argument("folder")
@click.option("--uploads", "-u", type=UPLOADS_CHOICES, default="exclude", help="WordPress uploads handling")
@click.option("--engine", "-e", type=ENGINE_CHOICES, default="builtin", help="Archive engine")
def export_folder(group: int, folder: str, uploads: str, engine: str) -> None:
    """Archive FOLDER from export group GROUP."""
    result = _export_service().export_folder(group, folder, uploads_mode=uploads, engine=engine)
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    if result.message:
        click.echo(result.message, err=True)
    click.echo(f"Created {result.name}")
    click.echo(f"  Download: {result.href}")


@cli.command()
def databases() -> None:
    """List user databases."""
    names = _export_service().list_databases()
    if not names:
        click.echo("No databases found.")
        return
    for name in names:
        click.echo(name)


@cli.command("dump-db")
@click.argument("name")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the dump to a file")
@click.option("--archive", "-a", is_flag=True, help="Archive the dump into the exports directory")
@click.option("--engine", "-e", type=ENGINE_CHOICES, default="builtin", help="Archive engine")
def dump_db(name: str, output: str | None, archive: bool, engine: str) -> None:
    """Dump database NAME as SQL."""
    service = _export_service()

    if archive:
        result = service.export_database(name, engine=engine)
        if not result.ok:
            click.echo(f"Error: {result.error}", err=True)
            sys.exit(1)
        click.echo(f"Created {result.name}")
        click.echo(f"  Download: {result.href}")
        return

    try:
        sql = service.dump_database(name)
    except DatabaseDumpError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(sql, encoding="utf-8")
        click.echo(f"Wrote {output}")
    else:
        click.echo(sql, nl=False)


@cli.command()
def serve() -> None:
    """Run the HTTP API."""
    from ampboard.api.main import run

    run()


if __name__ == "__main__":
    cli()
