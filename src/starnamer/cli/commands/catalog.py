"""Catalog status command."""

import asyncio

import click

from starnamer.cli.context import CliContext
from starnamer.core.exceptions import CatalogError, StarnamerError


pass_context = click.make_pass_decorator(CliContext)


@click.group()
def catalog() -> None:
    """Inspect the star catalog."""
    pass


@catalog.command("info")
@pass_context
def info(ctx: CliContext) -> None:
    """Load the catalog and show its status."""
    asyncio.run(_info_async(ctx))


async def _info_async(ctx: CliContext) -> None:
    """Async implementation of catalog info."""
    try:
        service = ctx.get_star_service()
        catalog = service.require_catalog()
        loader = catalog.loader
        error = None
        with ctx.console.status("Loading catalog..."):
            try:
                await service.get_index()
            except CatalogError as e:
                error = str(e)

        ctx.renderer.render_catalog_info(
            state=loader.state,
            index=loader.index,
            malformed_rows=loader.malformed_rows,
            source=catalog.source.describe(),
            error=error,
        )
        if error:
            raise SystemExit(1)

    except StarnamerError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)
    finally:
        await ctx.cleanup()
