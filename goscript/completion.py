"""Tab-completion candidates built from the listing engines.

Every completer takes the zero-based index of the word under the cursor and
the full argument vector (including that word) and returns candidate
strings. Words already present elsewhere in the vector are never offered
again. Errors propagate; the CLI turns them into an empty, failed result.
"""

from __future__ import annotations

import glob
from collections.abc import Iterable, Sequence
from pathlib import Path

from goscript.constants import FORMAT_FLAGS, HELP_FLAGS, MODULES_COMPLETION_FLAGS
from goscript.exceptions import InvalidArgumentError, NotFoundError
from goscript.listing import ListingEngine, find_all_in_root
from goscript.logging import get_logger

logger = get_logger("completion")


def current_word(word_index: int, args: Sequence[str]) -> str:
    """Return the word being completed.

    Raises:
        InvalidArgumentError: If *word_index* is outside the vector (one past
            the end is allowed and means an empty word).
    """
    if word_index < 0 or word_index > len(args):
        raise InvalidArgumentError(f"Word index {word_index} out of range for {len(args)} arguments")
    return args[word_index] if word_index < len(args) else ""


def filter_candidates(candidates: Iterable[str], word_index: int, args: Sequence[str]) -> list[str]:
    """Keep unique candidates that extend the current word and are not yet typed."""
    word = current_word(word_index, args)
    others = set(args[:word_index]) | set(args[word_index + 1 :])
    result: list[str] = []
    for candidate in candidates:
        if candidate.startswith(word) and candidate not in others and candidate not in result:
            result.append(candidate)
    return result


class ModulesCompleter:
    """Completion for the ``modules`` command's arguments."""

    def __init__(self, engine: ListingEngine) -> None:
        self.engine = engine
        self.roots = engine.roots

    def complete(self, word_index: int, args: Sequence[str]) -> list[str]:
        """Complete the ``modules`` argument at *word_index*.

        Raises:
            InvalidArgumentError: When nothing may follow the first argument
        """
        word = current_word(word_index, args)
        first = args[0] if args else ""

        if word_index == 0:
            candidates = list(MODULES_COMPLETION_FLAGS) + self.module_names(word)
        elif first in HELP_FLAGS:
            if word_index != 1:
                raise InvalidArgumentError(f"Only one module name may follow {first}")
            candidates = self.module_names(word)
        elif first.startswith("-") and first not in FORMAT_FLAGS:
            raise InvalidArgumentError(f"No arguments may follow {first}")
        else:
            candidates = self.module_names(word)
        return filter_candidates(candidates, word_index, args)

    def module_names(self, word: str) -> list[str]:
        """Module names worth offering for a partially typed *word*.

        A plugin-qualified word only offers that plugin's modules. Otherwise
        core and project modules are offered, plus either every module of the
        single plugin whose name starts with *word*, or ``<plugin>/`` for each
        of several such plugins.
        """
        if "/" in word:
            plugin = word.partition("/")[0]
            result = self.engine.search(f"{glob.escape(plugin)}/")
            return self._names(result.paths)

        result = self.engine.search("*")
        names = self._names(result.core) + self._names(result.project)

        matching = [root for root in self.roots.plugins if root.label.startswith(word)]
        if len(matching) == 1:
            names.extend(self._names(find_all_in_root(matching[0], "*")))
        else:
            names.extend(f"{root.label}/" for root in matching)
        return names

    def _names(self, paths: Iterable[Path]) -> list[str]:
        return [self.roots.display_name(path) for path in paths]


class CommandCompleter:
    """Completion for command names, subcommands and the builtin commands."""

    LISTING_FLAGS = ("--paths", "--summaries")

    def __init__(self, commands: ListingEngine, modules: ListingEngine, builtins: Sequence[str]) -> None:
        self.commands = commands
        self.modules = modules
        self.builtins = list(builtins)

    def complete(self, word_index: int, args: Sequence[str]) -> list[str]:
        """Complete a full ``goscript`` argument vector."""
        current_word(word_index, args)
        if word_index == 0:
            return filter_candidates(self.command_names(), word_index, args)

        command, rest, index = args[0], list(args[1:]), word_index - 1
        logger.debug("Completing %r argument %d", command, index)
        if command == "modules":
            return ModulesCompleter(self.modules).complete(index, rest)
        if command == "help":
            return filter_candidates(self.command_words(rest[:index]), index, rest)
        if command == "commands":
            if index == 0:
                candidates = list(self.LISTING_FLAGS) + self.command_names(scripts_only=True)
                return filter_candidates(candidates, index, rest)
            words = [w for w in rest[:index] if w not in self.LISTING_FLAGS]
            return filter_candidates(self.command_words(words, scripts_only=True), index, rest)
        if command == "plugins":
            if index != 0:
                raise InvalidArgumentError("plugins accepts a single flag")
            return filter_candidates(self.LISTING_FLAGS, index, rest)
        if command in self.builtins:
            raise InvalidArgumentError(f"No completion for {command}")
        return filter_candidates(self.command_words(list(args[:word_index]), scripts_only=True), word_index, args)

    def command_names(self, scripts_only: bool = False) -> list[str]:
        names = [path.name for path in self.commands.top_level_commands()]
        if scripts_only:
            return names
        return sorted(set(names) | set(self.builtins))

    def command_words(self, words: Sequence[str], scripts_only: bool = False) -> list[str]:
        """Candidates for the word after *words*: subcommands, or top-level names."""
        if not words:
            return self.command_names(scripts_only)
        if words[0] in self.builtins:
            return []
        try:
            paths = self.commands.subcommands(words)
        except NotFoundError as e:
            logger.debug("No subcommands for %s: %s", " ".join(words), e)
            return []
        return [path.name for path in paths]
