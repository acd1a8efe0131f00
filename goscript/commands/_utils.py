"""Shared utilities for goscript CLI commands."""

from collections.abc import Iterable

import click
from rich.console import Console
from rich.markup import escape

from goscript.dispatcher import Dispatcher
from goscript.exceptions import GoScriptError

# Diagnostics go to stderr; stdout carries listings and completions only
err_console = Console(stderr=True)


class RawArgsCommand(click.Command):
    """Command whose variadic argument receives the words exactly as typed.

    click's parser drops a bare ``--`` even when unknown options are passed
    through. Leading single-value arguments are still parsed and converted;
    everything after them goes to the ``nargs=-1`` argument untouched.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        fixed = sum(1 for param in self.params if isinstance(param, click.Argument) and param.nargs == 1)
        rest = super().parse_args(ctx, list(args[:fixed]))
        for param in self.params:
            if isinstance(param, click.Argument) and param.nargs == -1:
                ctx.params[param.name] = tuple(args[fixed:])
        return rest


def get_dispatcher(ctx: click.Context) -> Dispatcher:
    """Return the dispatcher the ``goscript`` group stored on the context."""
    return ctx.find_root().obj["dispatcher"]


def emit(lines: Iterable[str]) -> None:
    for line in lines:
        click.echo(line)


def fail(error: GoScriptError) -> None:
    """Print *error* to stderr and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise SystemExit(1)
