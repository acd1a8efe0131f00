"""goscript plugins command - list commands contributed by plugins."""

import click

from goscript.commands._utils import emit, fail, get_dispatcher
from goscript.exceptions import GoScriptError
from goscript.formatter import parse_format


@click.command(short_help="List commands provided by installed plugins")
@click.option("--paths", "view", flag_value="--paths", help="Show each command's path")
@click.option("--summaries", "view", flag_value="--summaries", help="Show each command's summary")
@click.pass_context
def plugins(ctx: click.Context, view: str | None) -> None:
    """List commands provided by installed plugins."""
    dispatcher = get_dispatcher(ctx)
    try:
        emit(dispatcher.list_plugins(parse_format(view)))
    except GoScriptError as e:
        fail(e)
