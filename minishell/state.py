"""State that the shell carries from one command line to the next."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterable, Union

from minishell.environment import Environment


def special_value(key: str, status: int) -> str | None:
    """Return the value of a special parameter, or None if ``key`` is ordinary.

    An empty key stands for a lone ``$``; ``$`` gives the process id and
    ``?`` the last exit status. Only the first character of ``key`` counts.
    """
    if key == "":
        return "$"
    if key[0] == "$":
        return str(os.getpid())
    if key[0] == "?":
        return str(status)
    return None


@dataclass
class ShellState:
    """Environment, working directories and last exit status of the shell."""

    env: Environment = field(default_factory=Environment)
    work_dir: str = ""
    old_work_dir: str = ""
    status: int = 0

    @classmethod
    def from_environ(
        cls,
        environ: Union[Mapping[str, str], Iterable[str], None] = None,
        cwd: Union[str, os.PathLike, None] = None,
    ) -> "ShellState":
        """Build the starting state from an environment and a directory.

        ``environ`` may be a mapping or ``KEY=VALUE`` strings; it defaults to
        the process environment, and ``cwd`` to the current directory.
        """
        if environ is None:
            environ = os.environ
        if isinstance(environ, Mapping):
            entries = [f"{key}={value}" for key, value in environ.items()]
        else:
            entries = list(environ)
        directory = os.getcwd() if cwd is None else os.fspath(cwd)
        return cls(
            env=Environment(entries),
            work_dir=directory,
            old_work_dir=directory,
            status=0,
        )

    def retrieve_value(self, key: str) -> str:
        """Return what ``$key`` expands to; unknown names give ``""``."""
        special = special_value(key, self.status)
        if special is not None:
            return special
        value = self.env.lookup(key)
        return "" if value is None else value