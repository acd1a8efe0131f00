"""Turns lists of module or command paths into printable listings."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from goscript.constants import ListFormat
from goscript.descriptions import CommentParser
from goscript.roots import RootSet


def parse_format(flag: str | None) -> ListFormat:
    """Map ``--paths``/``--summaries`` (or nothing) to a listing format."""
    if flag == "--paths":
        return ListFormat.PATHS
    if flag == "--summaries":
        return ListFormat.SUMMARIES
    return ListFormat.NAMES


def format_listing(
    paths: Sequence[Path],
    fmt: ListFormat,
    roots: RootSet,
    parser: CommentParser,
    commands: bool = False,
) -> list[str]:
    """Render *paths* in the requested view.

    ``NAMES`` prints display names. ``PATHS`` and ``SUMMARIES`` pad the name
    to the longest one in *paths* and follow it with the path relative to the
    project root or the script's summary line.

    Raises:
        ParseError: If a summary cannot be read; nothing is returned then.
    """
    names = [roots.display_name(path, commands) for path in paths]
    if fmt is ListFormat.NAMES:
        return names

    width = max((len(name) for name in names), default=0)
    if fmt is ListFormat.PATHS:
        return [f"{name.ljust(width)}  {roots.relative_path(path)}" for name, path in zip(names, paths)]
    return [f"{name.ljust(width)}  {parser.summary(path, name)}" for name, path in zip(names, paths)]
