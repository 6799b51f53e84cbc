"""Main CLI entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from starnamer import __version__
from starnamer.cli.context import CliContext
from starnamer.core.exceptions import StarnamerError


def setup_logging(verbose: bool) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path),
    help="Custom configuration directory",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="starnamer")
@click.pass_context
def cli(ctx: click.Context, config_dir: Path | None, verbose: bool) -> None:
    """Starnamer - emotion-themed star suggestions from a real catalog.

    Loads a star catalog once, then proposes stars to name for an
    emotion such as love, memorial or adventure.
    """
    setup_logging(verbose)
    ctx.obj = CliContext.create(config_dir=config_dir, verbose=verbose)


# Import and register commands
from starnamer.cli.commands import cache, catalog, config, emotions, star, suggest

cli.add_command(suggest.suggest)
cli.add_command(star.star)
cli.add_command(catalog.catalog)
cli.add_command(emotions.emotions)
cli.add_command(config.config)
cli.add_command(cache.cache)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except StarnamerError as e:
        console = Console()
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        raise SystemExit(0)


if __name__ == "__main__":
    main()
