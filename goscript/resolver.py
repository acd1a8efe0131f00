"""Exact-name lookup of modules and command scripts across the root set.

Only existence checks happen here; globbing belongs to ``goscript.listing``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from goscript.constants import SUBCOMMAND_DIR_SUFFIX
from goscript.exceptions import InvalidPathError, UnknownCommandError, UnknownModuleError
from goscript.globspec import ExactName, parse_spec
from goscript.logging import get_logger
from goscript.roots import RootSet

logger = get_logger("resolver")


@dataclass
class CommandRef:
    """A resolved command script plus the arguments left for it."""

    path: Path
    name: str
    argv: list[str] = field(default_factory=list)

    @property
    def subcommand_dir(self) -> Path:
        return self.path.parent / f"{self.path.name}{SUBCOMMAND_DIR_SUFFIX}"


def is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def module_candidates(roots: RootSet, spec: ExactName) -> list[Path]:
    """Paths tested for *spec*, in precedence order."""
    candidates = [roots.core.modules_dir / spec.name]
    if spec.plugin is not None:
        plugin = roots.plugin(spec.plugin)
        if plugin is not None:
            candidates.append(plugin.modules_dir / spec.relative)
    candidates.append(roots.project.modules_dir / spec.name)
    return candidates


def resolve_module(roots: RootSet, spec: ExactName | str) -> Path:
    """Return the first existing module file for *spec*.

    Precedence is core, then the named plugin (plugin-qualified names only),
    then the project library.

    Raises:
        UnknownModuleError: If no root holds a regular file of that name.
    """
    if isinstance(spec, str):
        parsed = parse_spec(spec)
        if not isinstance(parsed, ExactName):
            raise UnknownModuleError(spec)
        spec = parsed

    for candidate in module_candidates(roots, spec):
        if candidate.is_file():
            logger.debug(
                "Resolved module %s -> %s", spec.name, candidate, extra={"spec": spec.name, "path": candidate}
            )
            return candidate
    raise UnknownModuleError(spec.name)


def find_command(roots: RootSet, name: str) -> Path | None:
    """Return the first executable top-level command script called *name*."""
    if not name or "/" in name or name.startswith("."):
        return None
    for root in roots:
        candidate = root.commands_dir / name
        if is_executable(candidate):
            return candidate
    return None


def resolve_command(roots: RootSet, words: list[str]) -> CommandRef:
    """Resolve a command and as many nested subcommands as exist.

    The first word is searched for in every command directory in root
    order. Each following word that names an executable inside the current
    script's ``<name>.d/`` directory is consumed as a subcommand; the first
    one that does not is left in ``argv`` together with the rest.

    Raises:
        UnknownCommandError: If the first word does not resolve.
    """
    if not words:
        raise UnknownCommandError("")

    path = find_command(roots, words[0])
    if path is None:
        raise UnknownCommandError(words[0])

    consumed = [words[0]]
    remaining = list(words[1:])
    while remaining:
        word = remaining[0]
        if not word or "/" in word or word.startswith("."):
            break
        candidate = path.parent / f"{path.name}{SUBCOMMAND_DIR_SUFFIX}" / word
        if not is_executable(candidate):
            break
        path = candidate
        consumed.append(remaining.pop(0))

    ref = CommandRef(path=path, name=" ".join(consumed), argv=remaining)
    logger.debug(
        "Resolved command %r -> %s", ref.name, ref.path, extra={"spec": ref.name, "path": ref.path, "mode": "commands"}
    )
    return ref


def command_name(path: str | Path) -> str:
    """Derive the space-separated command name from a script path.

    ``scripts/foo.d/bar`` becomes ``foo bar``.

    Raises:
        InvalidPathError: For an empty path, a path ending in a separator, or
            a ``.d`` directory with no parent command token.
    """
    text = str(path)
    if not text or text.endswith("/"):
        raise InvalidPathError(text)

    script = Path(text)
    words = [script.name]
    for parent in script.parents:
        if not parent.name.endswith(SUBCOMMAND_DIR_SUFFIX):
            break
        token = parent.name[: -len(SUBCOMMAND_DIR_SUFFIX)]
        if not token:
            raise InvalidPathError(text)
        words.insert(0, token)
    return " ".join(words)
