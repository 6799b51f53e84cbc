"""Star catalog lookup commands."""

import asyncio
from collections.abc import Awaitable, Callable

import click

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.cli.context import CliContext
from starnamer.core.exceptions import StarnamerError


pass_context = click.make_pass_decorator(CliContext)


@click.group()
def star() -> None:
    """Look up stars in the catalog."""
    pass


@star.command("search")
@click.argument("query")
@click.option("--limit", type=click.IntRange(min=1), default=20, help="Max results")
@pass_context
def search(ctx: CliContext, query: str, limit: int) -> None:
    """Search named stars by name.

    Example: starnamer star search veg
    """

    async def render(index: CatalogIndex) -> None:
        matches = index.search_by_name(query)
        if not matches:
            ctx.renderer.print_warning(f"No named star matches '{query}'")
            return
        ctx.renderer.render_stars(f"Stars matching '{query}'", matches[:limit])

    asyncio.run(_with_index(ctx, render))


@star.command("show")
@click.argument("star_ref")
@pass_context
def show(ctx: CliContext, star_ref: str) -> None:
    """Show one star by catalog id or name.

    Examples:
        starnamer star show 91262
        starnamer star show Vega
    """

    async def render(index: CatalogIndex) -> None:
        if star_ref.isdigit():
            record = index.get_by_id(int(star_ref))
            if record is None:
                ctx.renderer.print_error(f"No star with catalog id {star_ref}")
                raise SystemExit(1)
        else:
            record = index.get_by_name(star_ref)
        ctx.renderer.render_star_detail(record)

    asyncio.run(_with_index(ctx, render))


@star.command("bright")
@click.option("--min", "min_mag", type=float, default=-2.0, help="Brightest magnitude")
@click.option("--max", "max_mag", type=float, default=2.0, help="Faintest magnitude")
@click.option("--limit", type=click.IntRange(min=1), default=20, help="Max results")
@pass_context
def bright(ctx: CliContext, min_mag: float, max_mag: float, limit: int) -> None:
    """List stars in a magnitude range, brightest first."""

    async def render(index: CatalogIndex) -> None:
        records = index.get_by_magnitude_range(min_mag, max_mag)
        if not records:
            ctx.renderer.print_warning(
                f"No stars between magnitude {min_mag} and {max_mag}"
            )
            return
        ctx.renderer.render_stars(
            f"Stars from magnitude {min_mag} to {max_mag}", records[:limit]
        )

    asyncio.run(_with_index(ctx, render))


async def _with_index(
    ctx: CliContext, action: Callable[[CatalogIndex], Awaitable[None]]
) -> None:
    """Load the catalog and run an action against it."""
    try:
        service = ctx.get_star_service()
        with ctx.console.status("Loading catalog..."):
            index = await service.get_index()
        await action(index)
    except StarnamerError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)
    finally:
        await ctx.cleanup()
