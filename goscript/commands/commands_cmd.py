"""goscript commands command - list command scripts and subcommands."""

import click

from goscript.commands._utils import emit, fail, get_dispatcher
from goscript.exceptions import GoScriptError
from goscript.formatter import parse_format


@click.command("commands", short_help="List available commands and subcommands")
@click.option("--paths", "view", flag_value="--paths", help="Show each command's path")
@click.option("--summaries", "view", flag_value="--summaries", help="Show each command's summary")
@click.argument("parent", nargs=-1)
@click.pass_context
def commands_cmd(ctx: click.Context, view: str | None, parent: tuple[str, ...]) -> None:
    """List available commands, or the subcommands of PARENT.

    Examples:

        goscript commands

        goscript commands --summaries

        goscript commands --paths deploy
    """
    dispatcher = get_dispatcher(ctx)
    try:
        emit(dispatcher.list_commands(parse_format(view), parent))
    except GoScriptError as e:
        fail(e)
