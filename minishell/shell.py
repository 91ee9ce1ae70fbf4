"""The interactive loop: read a line, parse it and run it."""

from __future__ import annotations

import contextlib
import signal
import sys
import threading
from typing import Iterator, List, Optional, Sequence

from minishell.builtins import ERROR_STATUS, ShellExit
from minishell.commands import Command, build_commands
from minishell.executor import run_commands
from minishell.expansion import expand_tokens
from minishell.heredoc import ReadLine
from minishell.state import ShellState
from minishell.tokens import (
    OPEN_QUOTE_MESSAGE,
    ShellSyntaxError,
    has_unclosed_quotes,
    tokenize,
    validate_syntax,
)

PROMPT = "@minishell> $ "
EXIT_NOTICE = "exit\n"
NO_ARGUMENTS = "Error: there is no arguments.\n"


@contextlib.contextmanager
def _interactive_signals() -> Iterator[None]:
    """Ignore SIGQUIT while the loop runs, where that is possible."""
    if not hasattr(signal, "SIGQUIT") or (
        threading.current_thread() is not threading.main_thread()
    ):
        yield
        return
    previous = signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGQUIT, previous)


def _new_line() -> None:
    sys.stdout.write("\n")
    sys.stdout.flush()


class Shell:
    """A shell reading its lines through ``read_line``."""

    def __init__(
        self,
        state: Optional[ShellState] = None,
        read_line: Optional[ReadLine] = None,
    ) -> None:
        self.state = ShellState.from_environ() if state is None else state
        self.read_line: ReadLine = input if read_line is None else read_line

    def parse(self, line: str) -> Optional[List[Command]]:
        """Turn ``line`` into commands, or report the error and return None."""
        if has_unclosed_quotes(line):
            sys.stderr.write(f"{OPEN_QUOTE_MESSAGE}\n")
            sys.stderr.flush()
            self.state.status = ERROR_STATUS
            return None
        try:
            tokens = validate_syntax(tokenize(line))
        except ShellSyntaxError as exc:
            sys.stdout.write(f"{exc}\n")
            sys.stdout.flush()
            self.state.status = 1
            return None
        commands = build_commands(expand_tokens(self.state, tokens))
        self.state.status = 0
        return commands

    def execute_line(self, line: str) -> None:
        """Parse and run one line; an empty line does nothing."""
        if not line:
            return
        commands = self.parse(line)
        run_commands(self.state, commands or [], self.read_line)

    def run(self) -> int:
        """Read and run lines until end of input or ``exit``; return the status."""
        with _interactive_signals():
            while True:
                try:
                    line = self.read_line(PROMPT)
                except EOFError:
                    line = None
                except KeyboardInterrupt:
                    _new_line()
                    continue
                if line is None:
                    sys.stderr.write(EXIT_NOTICE)
                    sys.stderr.flush()
                    return 0
                try:
                    self.execute_line(line)
                except ShellExit as exc:
                    return exc.status
                except KeyboardInterrupt:
                    _new_line()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start an interactive shell; extra arguments are refused."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        sys.stdout.write(NO_ARGUMENTS)
        sys.stdout.flush()
        return -1
    try:
        import readline  # noqa: F401  (line editing and history for input())
    except ImportError:
        pass
    return Shell().run()