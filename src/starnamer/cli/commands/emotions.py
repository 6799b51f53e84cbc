"""Emotions command."""

import click

from starnamer.cli.context import CliContext
from starnamer.suggestions.emotions import EMOTIONS


pass_context = click.make_pass_decorator(CliContext)


@click.command()
@pass_context
def emotions(ctx: CliContext) -> None:
    """List the emotion categories."""
    ctx.renderer.render_emotions(EMOTIONS)
