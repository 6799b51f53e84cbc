"""Proposal cache commands."""

import asyncio

import click

from starnamer.cli.context import CliContext
from starnamer.suggestions.emotions import normalize_key


pass_context = click.make_pass_decorator(CliContext)


@click.group()
def cache() -> None:
    """Manage cached generator proposals."""
    pass


@cache.command("clear")
@click.argument("emotion", required=False)
@pass_context
def clear(ctx: CliContext, emotion: str | None) -> None:
    """Clear cached proposals, for one emotion or all of them.

    Examples:
        starnamer cache clear
        starnamer cache clear love
    """
    asyncio.run(_clear_async(ctx, emotion))


async def _clear_async(ctx: CliContext, emotion: str | None) -> None:
    """Async implementation of cache clear."""
    try:
        key = normalize_key(emotion) if emotion else None
        removed = await ctx.get_cache().clear(key)
        scope = f"for '{key}'" if key else "for all emotions"
        ctx.renderer.print_success(f"Removed {removed} cached proposals {scope}")
    finally:
        await ctx.cleanup()


@cache.command("stats")
@pass_context
def stats(ctx: CliContext) -> None:
    """Show proposal cache statistics."""
    asyncio.run(_stats_async(ctx))


async def _stats_async(ctx: CliContext) -> None:
    """Async implementation of cache stats."""
    try:
        cache_stats = await ctx.get_cache().get_stats()
        if "error" in cache_stats:
            ctx.renderer.print_error(f"Cache unavailable: {cache_stats['error']}")
            raise SystemExit(1)
        ctx.renderer.render_cache_stats(cache_stats)
    finally:
        await ctx.cleanup()
