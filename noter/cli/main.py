"""Main CLI entry point for Noter."""

import logging
import sys

import click

from .. import __version__
from ..config import Settings, create_sample_config
from ..errors import NoterError
from .build import build


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.version_option(version=__version__, prog_name="noter")
@click.pass_context
def cli(ctx, debug):
    """Noter - compile release note fragments into a changelog."""

    # Setup logging
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Store shared state in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['settings'] = Settings()
    ctx.obj['logger'] = logging.getLogger('noter')


@cli.command()
@click.option('--path', '-p', default='.', type=click.Path(file_okay=False),
              help='Directory for the noter.toml file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        config_path = create_sample_config(path)
    except (NoterError, OSError) as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Sample configuration file created at: {config_path}")
    click.echo("Please edit the file and list your release note variants.")


# Add subcommands
cli.add_command(build)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
