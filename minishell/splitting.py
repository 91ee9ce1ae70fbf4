"""Splitting words for expansion and splitting search paths."""

from __future__ import annotations

QUOTES = frozenset("\"'")
_SPECIAL = frozenset("\"$'")


def _piece_end(line: str, start: int, delimiter: str) -> int:
    char = line[start]
    if char in QUOTES:
        return start + 1
    if char == delimiter:
        end = start
        while end < len(line) and line[end] == delimiter:
            end += 1
        return end
    if line.startswith("$$", start):
        return start + 2
    end = start + 1 if char == "$" else start
    while end < len(line) and line[end] != delimiter and line[end] not in _SPECIAL:
        end += 1
    return end


def split_words(line: str, delimiter: str = " ") -> list[str]:
    """Cut ``line`` into pieces for expansion.

    Each quote character is a piece of its own, as is each run of
    ``delimiter``, each ``$$``, each ``$`` with the name that follows it and
    each run of plain text. Joining the pieces gives back ``line``.
    """
    pieces: list[str] = []
    pos = 0
    while pos < len(line):
        end = _piece_end(line, pos, delimiter)
        pieces.append(line[pos:end])
        pos = end
    return pieces


def split_path(line: str, delimiter: str = ":") -> list[str]:
    """Split ``line`` on ``delimiter``, dropping empty fields."""
    return [part for part in line.split(delimiter) if part]