"""Search roots: the core framework, installed plugins and the project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from goscript.config import GoScriptConfig
from goscript.constants import (
    CORE_COMMANDS_SUBDIR,
    MODULES_SUBDIR,
    PLUGIN_COMMANDS_SUBDIR,
    SUBCOMMAND_DIR_SUFFIX,
    Origin,
)
from goscript.logging import get_logger

logger = get_logger("roots")


@dataclass(frozen=True)
class Root:
    """One search root and the trees it contributes."""

    label: str
    directory: Path
    origin: Origin

    @property
    def modules_dir(self) -> Path:
        return self.directory / MODULES_SUBDIR

    @property
    def commands_dir(self) -> Path:
        if self.origin is Origin.CORE:
            return self.directory / CORE_COMMANDS_SUBDIR
        if self.origin is Origin.PLUGIN:
            return self.directory / PLUGIN_COMMANDS_SUBDIR
        return self.directory

    def tree(self, commands: bool) -> Path:
        """Command tree when *commands* is true, module tree otherwise."""
        return self.commands_dir if commands else self.modules_dir


@dataclass(frozen=True)
class RootSet:
    """Ordered search roots: core, then plugins in configured order, then project.

    Order is both the lookup precedence and the grouping used by listings
    split by origin. Built once per invocation and never mutated.
    """

    core: Root
    plugins: tuple[Root, ...]
    project: Root
    root_dir: Path

    @classmethod
    def from_config(cls, config: GoScriptConfig) -> RootSet:
        """Build the root set described by *config*.

        Plugins come from ``project.plugins`` when that list is set, otherwise
        from the sub-directories of the plugins directory sorted by name.
        """
        plugins_path = config.plugins_path
        if config.project.plugins:
            names = list(config.project.plugins)
        elif plugins_path.is_dir():
            names = sorted(p.name for p in plugins_path.iterdir() if p.is_dir() and not p.name.startswith("."))
        else:
            names = []

        roots = cls(
            core=Root("core", config.core_path, Origin.CORE),
            plugins=tuple(Root(name, plugins_path / name, Origin.PLUGIN) for name in names),
            project=Root("project", config.scripts_path, Origin.PROJECT),
            root_dir=config.root_path,
        )
        logger.debug(
            "Root set: core=%s plugins=%s project=%s",
            roots.core.directory,
            names,
            roots.project.directory,
            extra={"root": roots.root_dir},
        )
        return roots

    def __iter__(self):
        yield self.core
        yield from self.plugins
        yield self.project

    @property
    def plugin_names(self) -> list[str]:
        return [p.label for p in self.plugins]

    def plugin(self, name: str) -> Root | None:
        """Return the plugin root with exactly this name, if installed."""
        for root in self.plugins:
            if root.label == name:
                return root
        return None

    def owner(self, path: Path, commands: bool = False) -> Root | None:
        """Return the root whose module or command tree contains *path*."""
        for root in self:
            if _is_under(path, root.tree(commands)):
                return root
        return None

    def display_name(self, path: Path, commands: bool = False) -> str:
        """Name a module or command the way users type it.

        Modules drop their root's ``lib/`` prefix; plugin modules become
        ``<plugin>/<name>``. Commands drop their command directory and turn
        each ``<parent>.d/`` segment into ``parent `` so nested subcommands
        read as ``parent sub``. Paths outside every tree keep their full path.
        """
        root = self.owner(path, commands)
        if root is None:
            return str(path)

        relative = path.relative_to(root.tree(commands))
        if commands:
            return command_words(relative.parts)
        name = relative.as_posix()
        if root.origin is Origin.PLUGIN:
            return f"{root.label}/{name}"
        return name

    def relative_path(self, path: Path) -> str:
        """Path relative to the project root, or absolute when outside it."""
        if _is_under(path, self.root_dir):
            return path.relative_to(self.root_dir).as_posix()
        return str(path)


def command_words(parts: tuple[str, ...] | list[str]) -> str:
    """Join path parts into a command name, stripping ``.d`` directory suffixes."""
    words = []
    for part in parts[:-1]:
        if part.endswith(SUBCOMMAND_DIR_SUFFIX):
            part = part[: -len(SUBCOMMAND_DIR_SUFFIX)]
        words.append(part)
    words.append(parts[-1])
    return " ".join(words)


def _is_under(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return path != directory
