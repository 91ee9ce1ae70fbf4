"""Reading here-documents into files before a command line runs."""

from __future__ import annotations

import os
from typing import Callable, Iterable, Optional

from minishell.commands import Command
from minishell.expansion import expand_heredoc_line
from minishell.state import ShellState
from minishell.tokens import TokenKind

PROMPT = "> "

ReadLine = Callable[[str], Optional[str]]


def heredoc_file_name(index: int) -> str:
    """Name of the file that holds the here-document numbered ``index``."""
    return f"heredoc_{index}"


def _read(read_line: ReadLine) -> str | None:
    try:
        return read_line(PROMPT)
    except EOFError:
        return None


def _ends_document(line: str, delimiter: str) -> bool:
    # Only the length of the line read is compared, so an empty line or
    # any prefix of the delimiter also closes the document.
    return delimiter.startswith(line)


def collect_heredoc(state: ShellState, delimiter: str, read_line: ReadLine) -> str:
    """Read lines until ``delimiter`` or end of input and return them expanded."""
    parts = []
    while True:
        line = _read(read_line)
        if line is None or _ends_document(line, delimiter):
            break
        parts.append(expand_heredoc_line(state, line))
    return "".join(parts)


def write_heredoc_file(
    state: ShellState, delimiter: str, index: int, read_line: ReadLine
) -> str:
    """Read one here-document into its file and return the file's name.

    Raises OSError, before any line is read, if the file cannot be opened.
    """
    name = heredoc_file_name(index)
    fd = os.open(name, os.O_WRONLY | os.O_TRUNC | os.O_CREAT, 0o777)
    with os.fdopen(fd, "w", encoding="utf-8") as stream:
        stream.write(collect_heredoc(state, delimiter, read_line))
    return name


def prepare_heredocs(
    state: ShellState, commands: Iterable[Command], read_line: ReadLine
) -> list[str]:
    """Read every here-document and point its redirection at the file.

    Here-documents are numbered from 0 across all commands. One whose file
    cannot be opened is left as it was. Returns the names of files written.
    """
    written = []
    index = 0
    for command in commands:
        for redirection in command.redirections:
            if redirection.kind is not TokenKind.HEREDOC:
                continue
            try:
                name = write_heredoc_file(state, redirection.target, index, read_line)
            except OSError:
                pass
            else:
                redirection.target = name
                written.append(name)
            index += 1
    return written