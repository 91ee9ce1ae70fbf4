"""The commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import errno
import os
import sys
from typing import Callable, Sequence

from minishell.environment import InvalidNameError, key_length
from minishell.state import ShellState

SUCCESS = 0
FAILURE = -1
ERROR_STATUS = 130
PWD_BUFFER_SIZE = 200

CD_ERROR = "cd: no such file or directory: "
COMMAND_NOT_FOUND = "Command not found: "
EXPORT_INVALID = "export: not valid in this context:"
EXIT_MESSAGE = "exit\n"
EXIT_NUMERIC = "exit\nminishell: exit: numeric argument required\n"
EXIT_TOO_MANY = "exit: too many arguments.\n"
PWD_ERROR = "Error getting current working directory"

_DIGITS = frozenset("0123456789")

Builtin = Callable[[ShellState, Sequence[str]], int]


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


def _out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _cd_error(path: str) -> int:
    _out(f"{CD_ERROR}{path}\n")
    return FAILURE


def _suppresses_newline(arg: str) -> bool:
    return arg.startswith("-") and all(char == "n" for char in arg[1:])


def echo_text(args: Sequence[str]) -> str:
    """Return what ``echo`` prints for the arguments after its name.

    A first argument of ``-`` followed only by ``n`` drops the trailing
    newline. With nothing left to print the result is empty.
    """
    words = list(args)
    newline = True
    if words and _suppresses_newline(words[0]):
        newline = False
        words = words[1:]
    if not words:
        return ""
    text = " ".join(words)
    return text + "\n" if newline else text


def builtin_cd(state: ShellState, argv: Sequence[str]) -> int:
    """Change directory and record it in the state and in PWD and OLDPWD."""
    if len(argv) < 2:
        return SUCCESS
    path = argv[1]
    if len(argv) > 2:
        return _cd_error(path)
    try:
        os.chdir(path)
    except OSError:
        # The failure is reported but the recorded directories still change.
        _cd_error(path)
    state.work_dir = path
    state.old_work_dir = state.work_dir
    state.env.set(f"PWD={state.work_dir}")
    state.env.set(f"OLDPWD={state.old_work_dir}")
    return SUCCESS


def builtin_echo(state: ShellState, argv: Sequence[str]) -> int:
    """Print the arguments separated by spaces."""
    _out(echo_text(argv[1:]))
    return SUCCESS


def builtin_env(state: ShellState, argv: Sequence[str]) -> int:
    """Print every environment entry on its own line."""
    _out("".join(f"{entry}\n" for entry in state.env))
    return SUCCESS


def _is_numeric(text: str) -> bool:
    return bool(text) and all(char in _DIGITS for char in text)


def builtin_exit(state: ShellState, argv: Sequence[str]) -> int:
    """Leave the shell by raising ShellExit with the chosen status."""
    if len(argv) > 2:
        _out(EXIT_TOO_MANY)
        state.status = ERROR_STATUS
        raise ShellExit(ERROR_STATUS)
    if len(argv) == 2:
        if not _is_numeric(argv[1]):
            _out(EXIT_NUMERIC)
            state.status = ERROR_STATUS
            raise ShellExit(ERROR_STATUS)
        state.status = int(argv[1])
    _out(EXIT_MESSAGE)
    raise ShellExit(state.status)


def builtin_export(state: ShellState, argv: Sequence[str]) -> int:
    """Set each ``KEY=VALUE`` argument; with none, print the environment."""
    if len(argv) < 2:
        return builtin_env(state, argv)
    for arg in argv[1:]:
        length = key_length(arg)
        if length is None:
            _out(f"{EXPORT_INVALID} {arg}\n")
            return FAILURE
        if length:
            state.env.set(arg)
    return SUCCESS


def builtin_pwd(state: ShellState, argv: Sequence[str]) -> int:
    """Print the current working directory."""
    try:
        path = os.getcwd()
    except OSError as exc:
        sys.stderr.write(f"{PWD_ERROR}: {exc.strerror}\n")
        return FAILURE
    if len(path.encode()) + 1 > PWD_BUFFER_SIZE:
        sys.stderr.write(f"{PWD_ERROR}: {os.strerror(errno.ERANGE)}\n")
        return FAILURE
    _out(f"{path}\n")
    return SUCCESS


def builtin_unset(state: ShellState, argv: Sequence[str]) -> int:
    """Remove each named variable, stopping at the first unusable name."""
    for name in argv[1:]:
        try:
            state.env.unset(name)
        except InvalidNameError as exc:
            _out(f"unset: {exc.name}: {exc.reason}\n")
            return FAILURE
    return SUCCESS


BUILTINS: dict[str, Builtin] = {
    "cd": builtin_cd,
    "echo": builtin_echo,
    "export": builtin_export,
    "unset": builtin_unset,
    "pwd": builtin_pwd,
    "env": builtin_env,
    "exit": builtin_exit,
}


def is_builtin(argv: Sequence[str]) -> bool:
    """Tell whether the command named by ``argv[0]`` is a builtin."""
    return bool(argv) and argv[0] in BUILTINS


def run_builtin(state: ShellState, argv: Sequence[str]) -> int:
    """Run the builtin named by ``argv[0]``.

    Returns 0 once a builtin has run, whatever it returned, and -1 after
    reporting an unknown name. An empty ``argv`` does nothing.
    """
    if not argv:
        return SUCCESS
    builtin = BUILTINS.get(argv[0])
    if builtin is None:
        _out(f"{COMMAND_NOT_FOUND} {argv[0]}\n")
        return FAILURE
    builtin(state, argv)
    return SUCCESS