"""Expansion of ``$`` parameters and removal of quotes."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable

from minishell.splitting import split_words
from minishell.state import ShellState
from minishell.tokens import Token

_DOUBLE = '"'
_SINGLE = "'"
_QUOTE_PIECES = (_DOUBLE, _SINGLE)


def expand_action(state: ShellState, word: str) -> str:
    """Expand a single unquoted piece; pieces with ``$`` name a parameter."""
    if "$" in word:
        return state.retrieve_value(word[1:])
    return word


def _unquoted(state: ShellState, pieces: Deque[str]) -> str:
    parts = []
    while pieces and pieces[0] not in _QUOTE_PIECES:
        parts.append(expand_action(state, pieces.popleft()))
    return "".join(parts)


def _quoted(state: ShellState, pieces: Deque[str], quote: str) -> str:
    parts = []
    while pieces and pieces[0] != quote:
        piece = pieces.popleft()
        if quote == _DOUBLE and "$" in piece:
            parts.append(state.retrieve_value(piece[1:]))
        else:
            parts.append(piece)
    if pieces:
        pieces.popleft()
    return "".join(parts)


def expand_token(state: ShellState, text: str) -> str:
    """Expand parameters in ``text`` and strip the quotes around its parts.

    Inside single quotes nothing is expanded; inside double quotes and
    outside quotes every ``$name`` piece is replaced by its value.
    """
    pieces = deque(split_words(text, " "))
    parts = []
    while pieces:
        if pieces[0] in _QUOTE_PIECES:
            parts.append(_quoted(state, pieces, pieces.popleft()))
        else:
            parts.append(_unquoted(state, pieces))
    return "".join(parts)


def expand_tokens(state: ShellState, tokens: Iterable[Token]) -> list[Token]:
    """Return new tokens whose text is expanded; kinds are kept."""
    return [Token(expand_token(state, token.text), token.kind) for token in tokens]


def expand_heredoc_line(state: ShellState, line: str | None) -> str:
    """Expand one line of a here-document and end it with a newline.

    Quotes are kept as they are. An empty line (or none at all) gives an
    empty string with no newline.
    """
    if not line:
        return ""
    parts = []
    for piece in split_words(line, " "):
        if "$" in piece:
            parts.append(state.retrieve_value(piece[1:]))
        else:
            parts.append(piece)
    parts.append("\n")
    return "".join(parts)