"""goscript help command - show help generated from script headers."""

import click

from goscript.commands._utils import fail, get_dispatcher
from goscript.exceptions import GoScriptError


@click.command("help", short_help="Show help for a command")
@click.argument("words", nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Show help for a command, or list every command.

    Script help comes from the script's header comment block. Nested
    subcommands are named by their words, e.g. 'goscript help deploy prod'.
    """
    dispatcher = get_dispatcher(ctx)
    group = ctx.find_root().command

    try:
        if not words:
            builtins = {
                name: command.get_short_help_str(limit=200)
                for name, command in group.commands.items()  # type: ignore[attr-defined]
            }
            click.echo(dispatcher.overview(builtins))
            return

        builtin = group.commands.get(words[0])  # type: ignore[attr-defined]
        if builtin is not None:
            with click.Context(builtin, info_name=words[0], parent=ctx.find_root()) as sub_ctx:
                click.echo(builtin.get_help(sub_ctx))
            return

        click.echo(dispatcher.show_command_help(words))
    except GoScriptError as e:
        fail(e)
