"""Parsing of module and command specs typed on the command line.

A spec is parsed once into one of three shapes and dispatched on its type
afterwards:

``ExactName``
    No glob metacharacters. Looked up directly, e.g. ``log`` or
    ``myplugin/log``.
``GlobPattern``
    Glob over file names across every root, e.g. ``f*``.
``PluginQualifiedGlob``
    Contains ``/`` and either globs or a trailing ``/``: the part before the
    slash selects plugins, the part after selects modules inside them, e.g.
    ``f*/`` or ``myplugin/l*``.
"""

from __future__ import annotations

from dataclasses import dataclass

from goscript.constants import GLOB_CHARS
from goscript.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class ExactName:
    name: str
    plugin: str | None = None

    @property
    def relative(self) -> str:
        """Name below the owning tree (plugin prefix removed)."""
        if self.plugin is None:
            return self.name
        return self.name[len(self.plugin) + 1 :]


@dataclass(frozen=True)
class GlobPattern:
    pattern: str


@dataclass(frozen=True)
class PluginQualifiedGlob:
    plugin_glob: str
    module_glob: str


Spec = ExactName | GlobPattern | PluginQualifiedGlob


def has_glob(text: str) -> bool:
    return any(c in text for c in GLOB_CHARS)


def parse_spec(text: str) -> Spec:
    """Classify a spec string.

    Raises:
        InvalidArgumentError: For an empty spec or one with an empty plugin part.
    """
    if not text:
        raise InvalidArgumentError("Empty module or command name")

    if has_glob(text) or text.endswith("/"):
        if "/" not in text:
            return GlobPattern(text)
        plugin_glob, _, module_glob = text.partition("/")
        if not plugin_glob:
            raise InvalidArgumentError(f"Missing plugin name before '/' in: {text}")
        return PluginQualifiedGlob(plugin_glob, module_glob or "*")

    if "/" in text:
        plugin, _, rest = text.partition("/")
        if not plugin or not rest:
            raise InvalidArgumentError(f"Malformed plugin module name: {text}")
        return ExactName(text, plugin)
    return ExactName(text)
