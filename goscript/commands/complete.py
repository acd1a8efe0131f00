"""goscript complete command - tab-completion candidates for the shell."""

import click

from goscript.commands._utils import RawArgsCommand, emit, get_dispatcher
from goscript.exceptions import GoScriptError
from goscript.logging import get_logger

logger = get_logger("complete")


@click.command(
    cls=RawArgsCommand,
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
    short_help="Print completion candidates for a word",
)
@click.argument("word_index", type=int)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def complete(ctx: click.Context, word_index: int, args: tuple[str, ...]) -> None:
    """Print completion candidates, one per line.

    WORD_INDEX is the zero-based position of the word being completed within
    ARGS, the full argument vector after the program name. Exits 1 with no
    output when the position cannot be completed.
    """
    dispatcher = get_dispatcher(ctx)
    try:
        candidates = dispatcher.complete(word_index, list(args))
    except GoScriptError as e:
        # Anything on stdout would become a candidate; stay silent
        logger.debug("No completions for %d %s: %s", word_index, args, e)
        raise SystemExit(1) from e
    emit(candidates)
