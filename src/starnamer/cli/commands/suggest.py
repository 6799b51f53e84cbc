"""Suggest command."""

import asyncio
import json

import click

from starnamer.cli.context import CliContext
from starnamer.core.exceptions import StarnamerError


pass_context = click.make_pass_decorator(CliContext)


@click.command()
@click.argument("emotion")
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Number of suggestions (default from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducible descriptions and fallback stars",
)
@pass_context
def suggest(
    ctx: CliContext,
    emotion: str,
    count: int | None,
    as_json: bool,
    seed: int | None,
) -> None:
    """Suggest stars to name for an emotion.

    Suggestions come from the AI generator when configured, otherwise from
    the catalog, and as a last resort from synthetic stars.

    Examples:
        starnamer suggest love
        starnamer suggest memorial --count 3 --json
    """
    asyncio.run(_suggest_async(ctx, emotion, count, as_json, seed))


async def _suggest_async(
    ctx: CliContext,
    emotion: str,
    count: int | None,
    as_json: bool,
    seed: int | None,
) -> None:
    """Async implementation of suggest command."""
    try:
        service = ctx.get_star_service(seed=seed)
        service.start()

        wanted = count or ctx.config.suggestion_count
        if as_json:
            suggestions = await service.suggest(emotion, wanted)
            click.echo(
                json.dumps([s.to_display_record() for s in suggestions], indent=2)
            )
            return

        with ctx.console.status("Finding stars..."):
            suggestions = await service.suggest(emotion, wanted)
        ctx.renderer.render_suggestions(emotion, suggestions)

    except StarnamerError as e:
        ctx.renderer.print_error(str(e))
        raise SystemExit(1)
    finally:
        await ctx.cleanup()
