"""Configuration command."""

import click
from rich.table import Table

from starnamer.cli.context import CliContext
from starnamer.core.exceptions import ConfigError


pass_context = click.make_pass_decorator(CliContext)

SECRET_SETTINGS = {"generator_api_key"}


@click.group()
def config() -> None:
    """Manage configuration."""
    pass


@config.command("set")
@click.argument("key")
@click.argument("value")
@pass_context
def set_value(ctx: CliContext, key: str, value: str) -> None:
    """Set a configuration value.

    Examples:
        starnamer config set catalog_path ~/data/hygdata_v3.csv
        starnamer config set catalog_already_decompressed true
    """
    try:
        stored = ctx.config.set_setting_from_string(key, value)
    except ConfigError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)

    shown = "****" if key in SECRET_SETTINGS and stored else stored
    ctx.renderer.print_success(f"{key} = {shown}")


@config.command("show")
@pass_context
def show_config(ctx: CliContext) -> None:
    """Show current configuration."""
    ctx.console.print(f"[bold]Configuration Directory:[/bold] {ctx.config.config_dir}")
    ctx.console.print(f"[bold]Cache Database:[/bold] {ctx.config.cache_db_path}")
    ctx.console.print()

    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key, value in ctx.config.settings.items():
        if key in SECRET_SETTINGS and value:
            value = "****"
        table.add_row(key, str(value) if value != "" else "[dim]unset[/dim]")

    ctx.console.print(table)

    if ctx.config.catalog_path is None and ctx.config.catalog_url is None:
        ctx.console.print()
        ctx.renderer.print_warning(
            "No catalog configured. Set catalog_path or catalog_url."
        )
