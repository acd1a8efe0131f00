"""goscript modules command - list and describe library modules."""

import click

from goscript.commands._utils import RawArgsCommand, emit, fail, get_dispatcher
from goscript.exceptions import GoScriptError
from goscript.logging import get_logger

logger = get_logger("modules")


@click.command(
    cls=RawArgsCommand,
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
    short_help="List and describe library modules",
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def modules(ctx: click.Context, args: tuple[str, ...]) -> None:
    """List and describe library modules.

    Without arguments, lists modules grouped by origin. Accepts glob
    patterns, --paths, --summaries, --imported and -h|-help|--help [module].

    Examples:

        goscript modules

        goscript modules --summaries 'f*'

        goscript modules myplugin/

        goscript modules --help log
    """
    dispatcher = get_dispatcher(ctx)
    try:
        emit(dispatcher.run_modules(list(args)))
    except GoScriptError as e:
        logger.debug("modules %s failed: %s", " ".join(args), e)
        fail(e)
