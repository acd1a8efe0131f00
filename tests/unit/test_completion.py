"""Unit tests for goscript tab completion."""

import pytest

from goscript.completion import CommandCompleter, ModulesCompleter, current_word, filter_candidates
from goscript.constants import MODULES_COMPLETION_FLAGS
from goscript.descriptions import CommentParser
from goscript.exceptions import InvalidArgumentError
from goscript.listing import ListingEngine
from goscript.roots import RootSet

BUILTINS = ["commands", "complete", "help", "modules", "plugins"]


@pytest.fixture
def modules(roots: RootSet, parser: CommentParser) -> ModulesCompleter:
    return ModulesCompleter(ListingEngine(roots, parser))


@pytest.fixture
def completer(roots: RootSet, parser: CommentParser) -> CommandCompleter:
    return CommandCompleter(
        ListingEngine(roots, parser, commands=True),
        ListingEngine(roots, parser),
        BUILTINS,
    )


class TestHelpers:
    """Tests for current_word() and filter_candidates()."""

    def test_current_word(self) -> None:
        assert current_word(0, ["ab"]) == "ab"
        assert current_word(1, ["ab"]) == ""

    @pytest.mark.parametrize("index", [-1, 3])
    def test_index_out_of_range(self, index: int) -> None:
        with pytest.raises(InvalidArgumentError):
            current_word(index, ["a", "b"])

    def test_filter_prefix_duplicates_and_present(self) -> None:
        result = filter_candidates(["log", "lint", "log", "load"], 1, ["lint", "l"])
        assert result == ["log", "load"]


class TestModulesCompleter:
    """Tests for ModulesCompleter."""

    @pytest.mark.smoke
    def test_first_word_offers_flags_and_names(self, modules: ModulesCompleter) -> None:
        result = modules.complete(0, [""])
        assert result == [
            *MODULES_COMPLETION_FLAGS,
            "format",
            "log",
            "project-lib",
            "bar/",
            "fiz/",
            "foo/",
        ]

    def test_present_words_excluded(self, modules: ModulesCompleter) -> None:
        result = modules.complete(0, ["", "log", "--paths"])
        assert "log" not in result
        assert "--paths" not in result
        assert "format" in result

    def test_single_matching_plugin_expands(self, modules: ModulesCompleter) -> None:
        assert modules.complete(0, ["b"]) == ["bar/barlib"]

    def test_several_matching_plugins_offer_prefixes(self, modules: ModulesCompleter) -> None:
        assert modules.complete(0, ["f"]) == ["format", "fiz/", "foo/"]

    def test_plugin_qualified_word(self, modules: ModulesCompleter) -> None:
        assert modules.complete(1, ["--paths", "foo/"]) == ["foo/foo-util", "foo/shared"]
        assert modules.complete(0, ["foo/s"]) == ["foo/shared"]

    def test_unknown_plugin_offers_nothing(self, modules: ModulesCompleter) -> None:
        assert modules.complete(0, ["nope/"]) == []

    def test_help_takes_one_name(self, modules: ModulesCompleter) -> None:
        assert modules.complete(1, ["--help", "pro"]) == ["project-lib"]
        with pytest.raises(InvalidArgumentError):
            modules.complete(2, ["-h", "log", ""])

    def test_format_flags_take_many_names(self, modules: ModulesCompleter) -> None:
        assert modules.complete(2, ["--summaries", "log", "pro"]) == ["project-lib"]

    def test_imported_takes_nothing(self, modules: ModulesCompleter) -> None:
        with pytest.raises(InvalidArgumentError):
            modules.complete(1, ["--imported", ""])

    def test_plain_names_continue(self, modules: ModulesCompleter) -> None:
        assert modules.complete(1, ["log", "fo"]) == ["format", "foo/foo-util", "foo/shared"]


class TestCommandCompleter:
    """Tests for CommandCompleter."""

    def test_first_word(self, completer: CommandCompleter) -> None:
        assert completer.complete(0, [""]) == sorted(
            ["bar-cmd", "build", "deploy", "env", "foo-cmd", *BUILTINS]
        )

    def test_first_word_prefix(self, completer: CommandCompleter) -> None:
        assert completer.complete(0, ["c"]) == ["commands", "complete"]

    def test_modules_delegation(self, completer: CommandCompleter) -> None:
        assert completer.complete(1, ["modules", "b"]) == ["bar/barlib"]

    def test_help_completes_subcommands(self, completer: CommandCompleter) -> None:
        assert completer.complete(2, ["help", "deploy", ""]) == ["prod", "staging"]
        assert completer.complete(1, ["help", "de"]) == ["deploy"]

    def test_help_unknown_command_offers_nothing(self, completer: CommandCompleter) -> None:
        assert completer.complete(2, ["help", "missing", ""]) == []

    def test_commands_flags(self, completer: CommandCompleter) -> None:
        assert completer.complete(1, ["commands", "--"]) == ["--paths", "--summaries"]
        assert completer.complete(2, ["commands", "--paths", "deploy"]) == ["deploy"]

    def test_plugins(self, completer: CommandCompleter) -> None:
        assert completer.complete(1, ["plugins", ""]) == ["--paths", "--summaries"]
        with pytest.raises(InvalidArgumentError):
            completer.complete(2, ["plugins", "--paths", ""])

    def test_script_subcommands(self, completer: CommandCompleter) -> None:
        assert completer.complete(1, ["deploy", "st"]) == ["staging"]
        assert completer.complete(2, ["deploy", "prod", ""]) == []

    def test_builtin_without_completion(self, completer: CommandCompleter) -> None:
        with pytest.raises(InvalidArgumentError):
            completer.complete(1, ["complete", ""])
