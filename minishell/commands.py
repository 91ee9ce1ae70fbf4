"""Grouping tokens into commands separated by pipes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from minishell.tokens import Token, TokenKind


@dataclass
class Redirection:
    """A redirection of a command: the file it names and its kind."""

    target: str
    kind: TokenKind


@dataclass
class Command:
    """The arguments of one command and its redirections, in order."""

    argv: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)


def build_commands(tokens: Iterable[Token]) -> list[Command]:
    """Split ``tokens`` at pipes into commands.

    Each redirection operator takes the token after it as its target. A pipe
    at the very end does not start another command.
    """
    commands: list[Command] = []
    current = Command()
    pending = False
    stream = iter(tokens)
    for token in stream:
        if token.kind is TokenKind.PIPE:
            commands.append(current)
            current = Command()
            pending = False
            continue
        pending = True
        if token.kind.is_word:
            current.argv.append(token.text)
        elif token.kind.is_redirection:
            target = next(stream, None)
            if target is not None:
                current.redirections.append(Redirection(target.text, token.kind))
    if pending:
        commands.append(current)
    return commands