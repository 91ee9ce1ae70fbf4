"""Running parsed commands: builtins inside the shell, the rest in children."""

from __future__ import annotations

import contextlib
import errno
import os
import sys
from typing import Iterable, Iterator, Optional, Sequence

from minishell.builtins import (
    COMMAND_NOT_FOUND,
    ERROR_STATUS,
    ShellExit,
    is_builtin,
    run_builtin,
)
from minishell.commands import Command
from minishell.heredoc import ReadLine, prepare_heredocs
from minishell.redirection import RedirectionError, apply_redirections
from minishell.splitting import split_path
from minishell.state import ShellState

PATH_NOT_FOUND = "Could not find PATH variable"
EXECVE_ERROR = "execve error"
FORK_ERROR = "fork error"

_STANDARD_FDS = (0, 1, 2)


class CommandNotFoundError(LookupError):
    """Raised when no executable file can be found for a command name."""

    def __init__(self, name: str, message: str = COMMAND_NOT_FOUND) -> None:
        self.name = name
        self.message = message
        super().__init__(message)


def _report(message: str) -> None:
    sys.stderr.write(f"{message}\n")
    sys.stderr.flush()


def _search_path(state: ShellState) -> Optional[str]:
    for entry in state.env:
        if entry.startswith("PATH="):
            return entry[len("PATH="):]
    return None


def find_executable(state: ShellState, name: str) -> str:
    """Return the file to run for ``name``.

    ``name`` itself is used when it is executable; otherwise each directory
    of the shell's PATH is tried in order.
    """
    if name and os.access(name, os.X_OK):
        return name
    search = _search_path(state)
    if search is None:
        raise CommandNotFoundError(name, PATH_NOT_FOUND)
    for directory in split_path(search, ":"):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    raise CommandNotFoundError(name)


@contextlib.contextmanager
def _stdout_on_fd() -> Iterator[None]:
    """Send ``sys.stdout`` to whatever file descriptor 1 refers to."""
    sys.stdout.flush()
    stream = open(1, "w", encoding="utf-8", closefd=False)
    try:
        with contextlib.redirect_stdout(stream):
            yield
    finally:
        stream.flush()


def _dup(fd: int) -> Optional[int]:
    try:
        return os.dup(fd)
    except OSError:
        return None


@contextlib.contextmanager
def _saved_streams() -> Iterator[None]:
    """Put standard input and output back as they were on leaving."""
    sys.stdout.flush()
    saved = [(_dup(fd), fd) for fd in (0, 1)]
    try:
        yield
    finally:
        sys.stdout.flush()
        for copy, fd in saved:
            if copy is not None:
                os.dup2(copy, fd)
                os.close(copy)


def _exec_external(state: ShellState, argv: Sequence[str]) -> int:
    """Replace the process with the program; return a status only on failure."""
    try:
        if not argv:
            raise CommandNotFoundError("")
        path = find_executable(state, argv[0])
    except CommandNotFoundError as exc:
        _report(f"{exc.message}: {os.strerror(errno.ENOENT)}")
        return 1
    try:
        os.execve(path, list(argv), dict(os.environ))
    except OSError as exc:
        _report(f"{EXECVE_ERROR}: {exc.strerror}")
    return 1


def _run_in_child(
    state: ShellState,
    command: Command,
    read_fd: Optional[int],
    write_fd: Optional[int],
    spare_fds: Iterable[int],
) -> int:
    if read_fd is not None:
        os.dup2(read_fd, 0)
    if write_fd is not None:
        os.dup2(write_fd, 1)
    for fd in spare_fds:
        if fd not in _STANDARD_FDS:
            os.close(fd)
    try:
        apply_redirections(command)
    except RedirectionError as exc:
        _report(str(exc))
        return ERROR_STATUS
    argv = command.argv
    if argv and is_builtin(argv):
        with _stdout_on_fd():
            try:
                run_builtin(state, argv)
            except ShellExit as exc:
                return exc.status
        return ERROR_STATUS
    return _exec_external(state, argv)


def _fork(state: ShellState) -> int:
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        return os.fork()
    except OSError as exc:
        _report(f"minishell error: {FORK_ERROR}: {exc.strerror}")
        state.status = ERROR_STATUS
        raise ShellExit(ERROR_STATUS) from exc


def run_pipeline(state: ShellState, commands: Iterable[Command]) -> int:
    """Start every command in its own process, joined by pipes, and wait.

    Returns the raw wait status of the last command, which is also stored
    as the shell's status.
    """
    items = list(commands)
    pids = []
    previous_read: Optional[int] = None
    try:
        for position, command in enumerate(items):
            last = position == len(items) - 1
            read_end, write_end = (None, None) if last else os.pipe()
            pid = _fork(state)
            if pid == 0:
                open_fds = [
                    fd for fd in (previous_read, read_end, write_end) if fd is not None
                ]
                code = 1
                try:
                    code = _run_in_child(
                        state, command, previous_read, write_end, open_fds
                    )
                finally:
                    try:
                        sys.stdout.flush()
                        sys.stderr.flush()
                    finally:
                        os._exit(code)
            pids.append(pid)
            if previous_read is not None:
                os.close(previous_read)
            if write_end is not None:
                os.close(write_end)
            previous_read = read_end
    finally:
        if previous_read is not None:
            os.close(previous_read)
    status = 0
    for pid in pids:
        _, status = os.waitpid(pid, 0)
        state.status = status
    return status


def _run_builtin_here(state: ShellState, command: Command) -> None:
    with _stdout_on_fd():
        try:
            apply_redirections(command)
        except RedirectionError as exc:
            # The failure is reported but the builtin still runs.
            _report(str(exc))
        run_builtin(state, command.argv)


def run_commands(
    state: ShellState, commands: Iterable[Command], read_line: ReadLine
) -> None:
    """Read here-documents, then run the commands of one input line.

    A lone builtin runs inside the shell; anything else runs as a pipeline.
    Standard input and output are restored afterwards, and the status is
    left at 130.
    """
    items = list(commands)
    with _saved_streams():
        prepare_heredocs(state, items, read_line)
        first = items[0] if items else None
        if first is not None and first.argv:
            if len(items) == 1 and is_builtin(first.argv):
                _run_builtin_here(state, first)
            else:
                run_pipeline(state, items)
    state.status = ERROR_STATUS