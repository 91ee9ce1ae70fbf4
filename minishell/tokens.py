"""Splitting an input line into classified tokens and checking their syntax."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

QUOTES = frozenset("\"'")
WHITESPACE = frozenset("\t\n\v\f\r ")
_BREAK_BEFORE = frozenset(" |><")

OPEN_QUOTE_MESSAGE = "minishell: syntax error with open quotes"


class TokenKind(IntEnum):
    """Kind of a token; the order matters for redirection checks."""

    EMPTY = 0
    CMD = 1
    END = 2
    ARG = 3
    APPEND = 4
    INPUT = 5
    TRUNC = 6
    HEREDOC = 7
    PIPE = 8

    @property
    def is_redirection(self) -> bool:
        return self in _REDIRECTIONS

    @property
    def is_word(self) -> bool:
        """True for kinds that become command arguments."""
        return self in (TokenKind.CMD, TokenKind.EMPTY, TokenKind.ARG)


_REDIRECTIONS = frozenset(
    {TokenKind.APPEND, TokenKind.INPUT, TokenKind.TRUNC, TokenKind.HEREDOC}
)

_OPERATORS = {
    ">": TokenKind.TRUNC,
    "|": TokenKind.PIPE,
    "<": TokenKind.INPUT,
    "<<": TokenKind.HEREDOC,
    ">>": TokenKind.APPEND,
}


@dataclass
class Token:
    """One piece of an input line together with its kind."""

    text: str
    kind: TokenKind


class ShellSyntaxError(Exception):
    """Raised when a token sequence is not a valid command line."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"bash: syntax error near unexpected token `{token}'")


def has_unclosed_quotes(line: str) -> bool:
    """Return True if a single or double quote in ``line`` is never closed."""
    pos = 0
    while pos < len(line):
        char = line[pos]
        if char in QUOTES:
            closing = line.find(char, pos + 1)
            if closing == -1:
                return True
            pos = closing
        pos += 1
    return False


def classify_token(text: str, preceding: Sequence[Token]) -> TokenKind:
    """Decide the kind of ``text`` given the tokens that come before it."""
    if text == "":
        return TokenKind.EMPTY
    if text in _OPERATORS:
        return _OPERATORS[text]
    if not preceding or preceding[-1].kind is TokenKind.PIPE:
        return TokenKind.CMD
    if len(preceding) >= 2 and preceding[-2].kind is TokenKind.HEREDOC:
        return TokenKind.CMD
    return TokenKind.ARG


def _is_separator(current: str, following: str) -> bool:
    if current in "<>":
        return following != current
    if current in " |":
        return True
    return following in _BREAK_BEFORE


def _skip_whitespace(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in WHITESPACE:
        pos += 1
    return pos


def _token_end(line: str, start: int) -> int:
    """Return the exclusive end of the token that begins at ``start``."""
    quote = None
    for pos in range(start, len(line)):
        char = line[pos]
        if char in QUOTES:
            if char == quote:
                quote = None
            elif quote is None:
                quote = char
        if quote is None and _is_separator(char, line[pos + 1 : pos + 2]):
            return pos + 1
    return len(line)


def tokenize(line: str) -> list[Token]:
    """Split ``line`` into tokens, classifying each one as it is read."""
    tokens: list[Token] = []
    pos = _skip_whitespace(line, 0)
    while pos < len(line):
        end = _token_end(line, pos)
        text = line[pos:end]
        tokens.append(Token(text, classify_token(text, tokens)))
        pos = _skip_whitespace(line, end)
    return tokens


def _has_invalid_operator(token: Token) -> bool:
    text = token.text
    if any(quote in text for quote in QUOTES):
        return False
    return ">>>" in text or "<<<" in text


def validate_syntax(tokens: Iterable[Token]) -> list[Token]:
    """Check pipes and redirections; return the tokens or raise ShellSyntaxError."""
    items = list(tokens)
    for index, token in enumerate(items):
        following = items[index + 1] if index + 1 < len(items) else None
        if token.kind is TokenKind.PIPE and (
            following is None or index == 0 or following.kind is TokenKind.PIPE
        ):
            raise ShellSyntaxError("|")
        if token.kind.is_redirection and (
            following is None or following.kind > TokenKind.ARG
        ):
            raise ShellSyntaxError("newline")
        if _has_invalid_operator(token):
            # A tripled operator ends the check without reporting an error.
            break
    return items