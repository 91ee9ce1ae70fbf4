"""The shell's own ordered list of ``KEY=VALUE`` environment entries."""

from __future__ import annotations

from typing import Iterable, Iterator

INVALID_PARAMETER_NAME = "invalid parameter name"
NOT_VALID_IN_CONTEXT = "not valid in this context"


class InvalidNameError(ValueError):
    """Raised when a name cannot be used to remove a variable."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


def key_length(entry: str) -> int | None:
    """Return the position of ``=`` in ``entry``.

    Returns 0 when there is no ``=``, and None when a space or ``?``
    appears before it, which makes the name unusable.
    """
    for index, char in enumerate(entry):
        if char == "=":
            return index
        if char in " ?":
            return None
    return 0


def _replaces(existing: str, entry: str) -> bool:
    """Tell whether setting ``entry`` overwrites ``existing``."""
    length = key_length(entry)
    if length is None:
        return existing == entry
    return existing.startswith(entry[:length])


class Environment:
    """Ordered environment entries, each held as a ``KEY=VALUE`` string."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = list(entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"

    def add(self, entry: str) -> None:
        """Append ``entry`` at the end."""
        self._entries.append(entry)

    def set(self, entry: str) -> None:
        """Replace the first entry whose key matches, or append ``entry``."""
        for index, existing in enumerate(self._entries):
            if _replaces(existing, entry):
                self._entries[index] = entry
                return
        self.add(entry)

    def unset(self, name: str) -> None:
        """Remove the first entry named ``name``; raise for unusable names."""
        length = key_length(name)
        if length is None:
            raise InvalidNameError(name, NOT_VALID_IN_CONTEXT)
        if length > 0:
            raise InvalidNameError(name, INVALID_PARAMETER_NAME)
        for index, entry in enumerate(self._entries):
            match = key_length(entry)
            if (
                match is not None
                and entry.startswith(name)
                and entry[:match] == name[:match]
            ):
                del self._entries[index]
                return

    def lookup(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if there is none."""
        for entry in self._entries:
            if not entry.startswith(key):
                continue
            length = key_length(entry)
            if length is None:
                if entry != key:
                    continue
            elif entry[:length] != key[:length]:
                continue
            _, separator, value = entry.partition("=")
            if separator:
                return value
        return None