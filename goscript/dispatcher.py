"""Top-level actions shared by the CLI commands.

``Dispatcher`` wires one invocation's root set and context into the listing
engines, the comment parser and the completers, and exposes the actions the
``modules``, ``commands``, ``plugins``, ``help`` and ``complete`` commands
perform. Each action returns output lines; errors are raised as
``GoScriptError`` subclasses.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from goscript.completion import CommandCompleter
from goscript.config import GoScriptConfig, InvocationContext
from goscript.constants import FORMAT_FLAGS, HELP_FLAGS, IMPORTED_FLAG, ListFormat
from goscript.descriptions import CommentParser, DescriptionBuilder, format_summary
from goscript.exceptions import InvalidArgumentError, UnknownCommandError
from goscript.formatter import parse_format
from goscript.globspec import ExactName, parse_spec
from goscript.listing import ListingEngine
from goscript.resolver import resolve_command, resolve_module
from goscript.roots import RootSet

MODULES_HELP = """\
# Lists available modules
#
# Usage:
#   {{go}} {{cmd}} [--paths|--summaries] [glob...]
#   {{go}} {{cmd}} [-h|-help|--help] [module-name]
#   {{go}} {{cmd}} --imported
#
# Without arguments, lists every module grouped by where it comes from: the
# core framework library, installed plugin libraries and the project library.
#
# Options:
#   --paths      List the path of each module relative to {{root}}
#   --summaries  List the summary line of each module's header comment
#   --imported   List only the modules imported by the running script
#   --help       Show the description of a single module
#
# A glob containing '/' selects plugins by the part before the slash and
# modules by the part after it; 'myplugin/' lists every module of myplugin.
"""


class Dispatcher:
    """All goscript actions for a single invocation."""

    def __init__(self, roots: RootSet, context: InvocationContext, builtins: Sequence[str] = ()) -> None:
        self.roots = roots
        self.context = context
        self.parser = CommentParser(context.go, roots.root_dir, context.columns)
        self.modules = ListingEngine(roots, self.parser)
        self.commands = ListingEngine(roots, self.parser, commands=True)
        self.builtins = list(builtins)

    @classmethod
    def from_config(
        cls,
        config: GoScriptConfig,
        env: Mapping[str, str] | None = None,
        builtins: Sequence[str] = (),
    ) -> Dispatcher:
        return cls(RootSet.from_config(config), InvocationContext.from_env(env), builtins)

    # -- Modules -------------------------------------------------------------

    def list_modules(self, fmt: ListFormat, specs: Sequence[str]) -> list[str]:
        return self.modules.list(fmt, specs)

    def list_modules_by_class(self, fmt: ListFormat = ListFormat.NAMES) -> list[str]:
        return self.modules.list_by_class(fmt)

    def list_imported(self, fmt: ListFormat = ListFormat.NAMES) -> list[str]:
        return self.modules.list_named(fmt, self.context.imported_modules)

    def show_module_help(self, name: str | None = None) -> str:
        """Description of module *name*, or usage of ``modules`` itself."""
        if name is None:
            builder = DescriptionBuilder(self.context.columns)
            for line in MODULES_HELP.splitlines():
                builder.feed(self.parser.substitute(line, "modules"))
            return builder.result()

        spec = parse_spec(name)
        if not isinstance(spec, ExactName):
            raise InvalidArgumentError(f"Module help takes a module name, not a pattern: {name}")
        path = resolve_module(self.roots, spec)
        return self.parser.description(path, self.roots.display_name(path))

    def run_modules(self, args: Sequence[str]) -> list[str]:
        """Interpret a ``modules`` argument vector.

        Raises:
            InvalidArgumentError: For unknown flags or extra arguments
        """
        if not args:
            return self.list_modules_by_class()

        first, rest = args[0], list(args[1:])
        if first in HELP_FLAGS:
            if len(rest) > 1:
                raise InvalidArgumentError("Please specify only one module name.")
            return self.show_module_help(rest[0] if rest else None).split("\n")
        if first == IMPORTED_FLAG:
            if rest:
                raise InvalidArgumentError(f"The {IMPORTED_FLAG} option takes no other arguments.")
            return self.list_imported()
        if first in FORMAT_FLAGS:
            fmt = parse_format(first)
            return self.list_modules(fmt, rest) if rest else self.list_modules_by_class(fmt)
        if first.startswith("-"):
            raise InvalidArgumentError(
                f"Unknown flag: {first}. Accepted: {', '.join(HELP_FLAGS + FORMAT_FLAGS + (IMPORTED_FLAG,))}"
            )
        return self.list_modules(ListFormat.NAMES, args)

    # -- Commands and plugins ------------------------------------------------

    def list_commands(self, fmt: ListFormat = ListFormat.NAMES, parents: Sequence[str] = ()) -> list[str]:
        return self.commands.list_commands(fmt, parents)

    def list_plugins(self, fmt: ListFormat = ListFormat.NAMES) -> list[str]:
        return self.commands.list_plugins(fmt)

    def show_command_help(self, words: Sequence[str]) -> str:
        """Description of a command script, followed by its subcommands.

        Raises:
            UnknownCommandError: If *words* do not name a command exactly
        """
        ref = resolve_command(self.roots, list(words))
        if ref.argv:
            raise UnknownCommandError(" ".join(words))

        text = self.parser.description(ref.path, ref.name)
        if not ref.subcommand_dir.is_dir():
            return text

        subcommands = self.commands.subcommands(words)
        if not subcommands:
            return text
        longest = max(len(path.name) for path in subcommands)
        rows = [
            format_summary(path.name, self.parser.summary(path, f"{ref.name} {path.name}"), longest, self.context.columns)
            for path in subcommands
        ]
        return "\n".join([text, "", "Subcommands:", "", *rows])

    def overview(self, builtin_summaries: Mapping[str, str]) -> str:
        """Usage plus every builtin and script command with its summary."""
        scripts = self.commands.top_level_commands()
        entries = dict(builtin_summaries)
        for path in scripts:
            entries.setdefault(path.name, self.parser.summary(path, path.name))

        longest = max((len(name) for name in entries), default=0)
        rows = [format_summary(name, entries[name], longest, self.context.columns) for name in sorted(entries)]
        usage = f"Usage: {self.context.go} <command> [arguments...]"
        return "\n".join([usage, "", "Available commands are:", *rows])

    # -- Completion ----------------------------------------------------------

    def complete(self, word_index: int, args: Sequence[str]) -> list[str]:
        return CommandCompleter(self.commands, self.modules, self.builtins).complete(word_index, args)
