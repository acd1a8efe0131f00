"""Glob search and listing of modules and commands across the root set."""

from __future__ import annotations

import fnmatch
import glob
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from goscript.constants import CLASS_LABELS, ListFormat, Origin
from goscript.descriptions import CommentParser
from goscript.exceptions import InvalidArgumentError, NotFoundError, UnknownCommandError
from goscript.formatter import format_listing
from goscript.globspec import ExactName, GlobPattern, PluginQualifiedGlob, Spec, parse_spec
from goscript.logging import get_logger
from goscript.resolver import is_executable, resolve_command, resolve_module
from goscript.roots import Root, RootSet

logger = get_logger("listing")


@dataclass(frozen=True)
class SearchResult:
    """Search matches in root order with the offsets where each class begins."""

    paths: tuple[Path, ...]
    plugins_start: int
    project_start: int

    @property
    def core(self) -> tuple[Path, ...]:
        return self.paths[: self.plugins_start]

    @property
    def plugins(self) -> tuple[Path, ...]:
        return self.paths[self.plugins_start : self.project_start]

    @property
    def project(self) -> tuple[Path, ...]:
        return self.paths[self.project_start :]

    def segments(self) -> list[tuple[Origin, tuple[Path, ...]]]:
        return [
            (Origin.CORE, self.core),
            (Origin.PLUGIN, self.plugins),
            (Origin.PROJECT, self.project),
        ]

    def __len__(self) -> int:
        return len(self.paths)


def find_all_in_root(root: Root, pattern: str, commands: bool = False) -> Iterator[Path]:
    """Yield files in *root*'s module or command tree matching *pattern*.

    Command mode only yields executables. Dotfiles are skipped unless the
    pattern itself starts with a dot. A missing tree yields nothing.
    Matches within the tree are yielded sorted by name.
    """
    tree = root.tree(commands)
    if not tree.is_dir():
        return
    for path in sorted(tree.glob(pattern)):
        if path.name.startswith(".") and not pattern.startswith("."):
            continue
        if is_executable(path) if commands else path.is_file():
            yield path


class ListingEngine:
    """Search and list modules (or, with ``commands=True``, command scripts).

    Args:
        roots: Root set for this invocation
        parser: Comment parser used for summary listings
        commands: Search command trees instead of module trees
    """

    def __init__(self, roots: RootSet, parser: CommentParser, commands: bool = False) -> None:
        self.roots = roots
        self.parser = parser
        self.commands = commands

    # -- Search --------------------------------------------------------------

    def search(self, spec: str | Spec) -> SearchResult:
        """Find every match for a glob spec, grouped core, plugins, project.

        Plugin-qualified specs only search the plugin trees whose names match
        the part before the slash; the core and project groups stay empty.
        """
        if isinstance(spec, str):
            spec = parse_spec(spec)
        if isinstance(spec, ExactName):
            if spec.plugin is None:
                spec = GlobPattern(glob.escape(spec.name))
            else:
                spec = PluginQualifiedGlob(glob.escape(spec.plugin), glob.escape(spec.relative))

        if isinstance(spec, PluginQualifiedGlob):
            core: list[Path] = []
            plugins = [
                path
                for root in self.roots.plugins
                if fnmatch.fnmatchcase(root.label, spec.plugin_glob)
                for path in find_all_in_root(root, spec.module_glob, self.commands)
            ]
            project: list[Path] = []
        else:
            core = list(find_all_in_root(self.roots.core, spec.pattern, self.commands))
            plugins = [
                path for root in self.roots.plugins for path in find_all_in_root(root, spec.pattern, self.commands)
            ]
            project = list(find_all_in_root(self.roots.project, spec.pattern, self.commands))

        logger.debug(
            "Search %s: %d core, %d plugin, %d project",
            spec,
            len(core),
            len(plugins),
            len(project),
            extra={"spec": spec, "mode": "commands" if self.commands else "modules"},
        )
        return SearchResult(
            paths=tuple(core + plugins + project),
            plugins_start=len(core),
            project_start=len(core) + len(plugins),
        )

    def resolve(self, spec: ExactName) -> Path:
        """Exact lookup of a single module or top-level command."""
        if not self.commands:
            return resolve_module(self.roots, spec)
        ref = resolve_command(self.roots, spec.name.split())
        if ref.argv:
            raise UnknownCommandError(spec.name)
        return ref.path

    # -- Listings ------------------------------------------------------------

    def format(self, paths: Sequence[Path], fmt: ListFormat) -> list[str]:
        return format_listing(paths, fmt, self.roots, self.parser, self.commands)

    def list_by_class(self, fmt: ListFormat = ListFormat.NAMES) -> list[str]:
        """List everything, one labelled group per non-empty origin class."""
        lines: list[str] = []
        for origin, paths in self.search(GlobPattern("*")).segments():
            if not paths:
                continue
            if lines:
                lines.append("")
            lines.append(CLASS_LABELS[origin])
            lines.extend(f"  {line}" for line in self.format(paths, fmt))
        return lines

    def list(self, fmt: ListFormat, specs: Sequence[str]) -> list[str]:
        """List the modules or commands named or matched by *specs*.

        Raises:
            InvalidArgumentError: If ``*`` is combined with other specs
            UnknownModuleError: If an exact module name does not resolve
            UnknownCommandError: If an exact command name does not resolve
        """
        if "*" in specs and len(specs) != 1:
            raise InvalidArgumentError("Do not specify other patterns when '*' is present.")

        paths: list[Path] = []
        for text in specs:
            spec = parse_spec(text)
            if isinstance(spec, ExactName):
                paths.append(self.resolve(spec))
            else:
                paths.extend(self.search(spec).paths)
        return self.format(paths, fmt)

    def list_named(self, fmt: ListFormat, names: Sequence[str]) -> list[str]:
        """List exact names only, in the order given."""
        paths = [self.resolve(ExactName(name, name.partition("/")[0] if "/" in name else None)) for name in names]
        return self.format(paths, fmt)

    # -- Command trees -------------------------------------------------------

    def top_level_commands(self) -> list[Path]:
        """Command scripts across all roots, first of each name, sorted by name."""
        seen: dict[str, Path] = {}
        for path in self.search(GlobPattern("*")).paths:
            seen.setdefault(path.name, path)
        return [seen[name] for name in sorted(seen)]

    def subcommands(self, words: Sequence[str]) -> list[Path]:
        """Executable subcommands of the command named by *words*, sorted.

        Raises:
            UnknownCommandError: If *words* do not name a command exactly
            NotFoundError: If the command has no subcommand directory
        """
        ref = resolve_command(self.roots, list(words))
        if ref.argv:
            raise UnknownCommandError(" ".join(words))
        subdir = ref.subcommand_dir
        if not subdir.is_dir():
            raise NotFoundError(f"Command has no subcommands: {ref.name}", ref.name)
        return [path for path in sorted(subdir.iterdir()) if is_executable(path) and not path.name.startswith(".")]

    def list_commands(self, fmt: ListFormat = ListFormat.NAMES, parents: Sequence[str] = ()) -> list[str]:
        """List top-level commands, or the subcommands of *parents*."""
        paths = self.subcommands(parents) if parents else self.top_level_commands()
        return self.format(paths, fmt)

    def list_plugins(self, fmt: ListFormat = ListFormat.NAMES) -> list[str]:
        """List the commands contributed by installed plugins."""
        return self.format(self.search(GlobPattern("*")).plugins, fmt)
