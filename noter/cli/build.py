"""Build command implementation."""

import sys
from pathlib import Path

import click
from dateutil import parser as date_parser

from ..config import load_config
from ..errors import MisuseError, NoterError
from ..releasenote import (
    DocumentWriter,
    collect_notes,
    compile_release_notes,
    formatter_for_filename,
    prepend_release_notes,
    resolve_version,
)


def parse_date(ctx, param, value):
    """Parse the --date option into a date."""
    if value is None:
        return None
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as e:
        raise click.BadParameter(f"unable to parse date '{value}': {e}")


@click.command()
@click.option('--draft', '-d', is_flag=True, help='Print the release notes instead of writing them')
@click.option('--config', '-c', 'config_dir', type=click.Path(file_okay=False),
              help='Folder containing the noter.toml config file')
@click.option('--version', '-v', 'version', help='Version to use in release notes')
@click.option('--date', 'project_date', callback=parse_date,
              help='Release date to use in the title (defaults to today)')
@click.pass_context
def build(ctx, draft, config_dir, version, project_date):
    """Compile release note fragments into the release notes file."""

    settings = ctx.obj['settings']
    logger = ctx.obj['logger']

    base_dir = Path(config_dir or settings.config_dir or ".")

    try:
        config = load_config(base_dir)
        formatter = formatter_for_filename(config.filename)
        notes_by_variant = collect_notes(config, base_dir / config.directory)
        version = resolve_version(version or settings.version, base_dir)

        logger.info(f"Compiling release notes for version {version}")
        release_notes = compile_release_notes(
            DocumentWriter(formatter), config, version, notes_by_variant, project_date
        )

        if draft:
            # For a draft, just print the release notes
            click.echo(release_notes)
            return

        prepend_release_notes(base_dir / config.filename, release_notes)

    except MisuseError:
        raise
    except NoterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        logger.error(f"I/O error: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Successfully updated {base_dir / config.filename} for version {version}")
