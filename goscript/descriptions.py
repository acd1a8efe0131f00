"""Help text extracted from the header comment block of a script.

A script documents itself in the leading run of ``#`` lines (after an
optional shebang)::

    #! /usr/bin/env bash
    #
    # Lists the project's widgets
    #
    # Usage: {{go}} {{cmd}} [--all]
    #
    # Options:
    #   --all  Include archived widgets as well
    #
    #     preformatted lines keep their indentation

The first ``# <alnum>`` line is the one-line summary. The whole block,
reflowed into paragraphs, is the description. ``{{go}}``, ``{{cmd}}`` and
``{{root}}`` are replaced before any line is classified.
"""

from __future__ import annotations

import re
import textwrap
from collections.abc import Iterator
from enum import Enum
from pathlib import Path

from goscript.constants import DEFAULT_COLUMNS, NO_DESCRIPTION
from goscript.exceptions import ReadError
from goscript.logging import get_logger
from goscript.resolver import command_name

logger = get_logger("descriptions")

BLANK_LINE = re.compile(r"^#\s*$")
TEXT_LINE = re.compile(r"^# \S")
INDENTED_LINE = re.compile(r"^#  +\S")
TABLE_ROW = re.compile(r"^\s+(\S.*?)\s{2,}(\S.*)$")


class LineKind(Enum):
    """Classification of one header line."""

    BLANK = "blank"
    TEXT = "text"
    INDENTED = "indented"
    OTHER = "other"


class ParseState(Enum):
    """What the description builder is in the middle of."""

    NONE = "none"
    IN_PARAGRAPH = "in_paragraph"
    IN_TABLE = "in_table"
    IN_PREFORMATTED = "in_preformatted"


def classify(line: str) -> LineKind:
    if BLANK_LINE.match(line):
        return LineKind.BLANK
    if INDENTED_LINE.match(line):
        return LineKind.INDENTED
    if TEXT_LINE.match(line):
        return LineKind.TEXT
    return LineKind.OTHER


def format_summary(name: str, summary: str, longest_name_len: int, columns: int = DEFAULT_COLUMNS) -> str:
    """Render a two-column ``name  summary`` row, wrapping to *columns*.

    Continuation lines are indented by ``longest_name_len + 6``. When that
    indent would take half the width or more the row is returned unwrapped,
    since the remaining column would be too narrow to read.
    """
    line = f"  {name.ljust(longest_name_len)}  {summary}"
    if len(line) <= columns:
        return line

    padding_size = longest_name_len + 6
    if padding_size >= columns / 2:
        return line

    wrapped = []
    prefix = ""
    width = columns
    text = line
    while text:
        if len(prefix) + len(text) <= columns:
            wrapped.append(prefix + text)
            break
        break_at = _last_whitespace(text, width)
        if break_at <= 0 or not text[:break_at].strip():
            chunk, text = text[:width], text[width:]
        else:
            chunk, text = text[:break_at], text[break_at + 1 :]
        wrapped.append(prefix + chunk.rstrip())
        text = text.lstrip()
        prefix = " " * padding_size
        width = columns - padding_size
    return "\n".join(wrapped)


def _last_whitespace(text: str, end: int) -> int:
    """Index of the last whitespace character before *end*, or -1."""
    for index in range(min(end, len(text)) - 1, -1, -1):
        if text[index].isspace():
            return index
    return -1


class DescriptionBuilder:
    """State machine turning header lines into formatted help text."""

    def __init__(self, columns: int = DEFAULT_COLUMNS) -> None:
        self.columns = columns
        self.state = ParseState.NONE
        self.lines: list[str] = []
        self._paragraph = ""

    def feed(self, line: str) -> None:
        kind = classify(line)
        if kind is LineKind.BLANK:
            self._on_blank()
        elif kind is LineKind.TEXT:
            self._on_text(line[2:])
        elif kind is LineKind.INDENTED:
            self._on_indented(line[2:])

    def _on_blank(self) -> None:
        self._flush_paragraph()
        if self.lines and self.lines[-1] != "":
            self.lines.append("")
        self.state = ParseState.NONE

    def _on_text(self, text: str) -> None:
        if self.state is not ParseState.IN_PARAGRAPH:
            self._flush_paragraph()
        self._paragraph += text.strip() + " "
        self.state = ParseState.IN_PARAGRAPH

    def _on_indented(self, text: str) -> None:
        self._flush_paragraph()
        match = TABLE_ROW.match(text)
        if match and len(text) > self.columns:
            name, summary = match.group(1), match.group(2)
            longest = max(len(name), match.start(2) - 4)
            self.lines.extend(format_summary(name, summary, longest, self.columns).split("\n"))
            self.state = ParseState.IN_TABLE
        else:
            self.lines.append(text.rstrip())
            self.state = ParseState.IN_PREFORMATTED

    def _flush_paragraph(self) -> None:
        paragraph = self._paragraph.strip()
        self._paragraph = ""
        if paragraph:
            self.lines.extend(
                textwrap.wrap(paragraph, width=self.columns, break_on_hyphens=False) or [paragraph]
            )

    def result(self) -> str:
        self._flush_paragraph()
        while self.lines and not self.lines[-1].strip():
            self.lines.pop()
        return "\n".join(self.lines) if self.lines else NO_DESCRIPTION


class CommentParser:
    """Extracts summaries and descriptions from script header blocks.

    Args:
        go: Canonical invoking command, substituted for ``{{go}}``
        root_dir: Project root, substituted for ``{{root}}``
        columns: Terminal width used for wrapping
    """

    def __init__(self, go: str, root_dir: str | Path, columns: int = DEFAULT_COLUMNS) -> None:
        self.go = go
        self.root_dir = str(root_dir)
        self.columns = columns

    def summary(self, path: str | Path, name: str | None = None) -> str:
        """Return the first ``# <alnum>`` header line without its ``# `` prefix.

        Args:
            path: Script file
            name: Display name for ``{{cmd}}``; derived from *path* when omitted

        Raises:
            InvalidPathError: If *name* is omitted and *path* is malformed
            ReadError: If the file cannot be read
        """
        cmd = name if name is not None else command_name(path)
        for line in self._header(path, cmd):
            if len(line) > 2 and line.startswith("# ") and line[2].isalnum():
                return line[2:].rstrip()
        return NO_DESCRIPTION

    def description(self, path: str | Path, name: str | None = None) -> str:
        """Return the full formatted description of a script.

        Same arguments and errors as :meth:`summary`.
        """
        cmd = name if name is not None else command_name(path)
        builder = DescriptionBuilder(self.columns)
        for line in self._header(path, cmd):
            builder.feed(line)
        return builder.result()

    def substitute(self, line: str, cmd: str) -> str:
        return line.replace("{{go}}", self.go).replace("{{cmd}}", cmd).replace("{{root}}", self.root_dir)

    def _header(self, path: str | Path, cmd: str) -> Iterator[str]:
        """Yield the header block's lines with placeholders replaced."""
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                lines = [line.rstrip("\n") for line in _header_lines(f)]
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e, extra={"path": path})
            raise ReadError(str(path), e.strerror or str(e)) from e

        for line in lines:
            yield self.substitute(line, cmd)


def _header_lines(lines) -> Iterator[str]:
    for index, line in enumerate(lines):
        if index == 0 and line.startswith("#!"):
            continue
        if not line.startswith("#"):
            return
        yield line
