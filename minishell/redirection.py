"""Pointing standard input and output at the files a command names."""

from __future__ import annotations

import os

from minishell.commands import Command
from minishell.tokens import TokenKind

UNABLE_TO_OPEN = "Minishell error: unable to open file"
STREAM_FAILED = "Minishell error: stream routing failed"

_WRITE_FLAGS = {
    TokenKind.TRUNC: os.O_CREAT | os.O_WRONLY | os.O_TRUNC,
    TokenKind.APPEND: os.O_CREAT | os.O_WRONLY | os.O_APPEND,
}


class RedirectionError(OSError):
    """Raised when a redirection cannot be set up."""


def route_stream(path: str, flags: int, mode: int, target_fd: int) -> None:
    """Open ``path`` and make ``target_fd`` refer to it."""
    try:
        fd = os.open(path, flags, mode)
    except OSError as exc:
        raise RedirectionError(UNABLE_TO_OPEN) from exc
    try:
        os.dup2(fd, target_fd)
    except OSError as exc:
        raise RedirectionError(STREAM_FAILED) from exc
    finally:
        os.close(fd)


def apply_redirections(command: Command) -> None:
    """Apply the command's redirections in order, stopping at the first failure."""
    for redirection in command.redirections:
        if redirection.kind in _WRITE_FLAGS:
            route_stream(
                redirection.target,
                _WRITE_FLAGS[redirection.kind],
                0o644,
                1,
            )
        elif redirection.kind in (TokenKind.INPUT, TokenKind.HEREDOC):
            route_stream(redirection.target, os.O_RDONLY, 0, 0)