import os

import pytest

from minishell.environment import Environment
from minishell.state import ShellState, special_value


def test_special_value_empty_key_is_dollar():
    assert special_value("", 0) == "$"


def test_special_value_status():
    assert special_value("?", 42) == "42"


def test_special_value_status_uses_first_character_only():
    assert special_value("?rest", 7) == "7"


def test_special_value_pid():
    assert special_value("$", 0) == str(os.getpid())


@pytest.mark.parametrize("key", ["HOME", "PATH", "a$"])
def test_special_value_ordinary_key(key):
    assert special_value(key, 1) is None


def test_from_environ_with_mapping(tmp_path):
    state = ShellState.from_environ({"A": "1", "B": "two"}, cwd=tmp_path)
    assert list(state.env) == ["A=1", "B=two"]
    assert state.work_dir == str(tmp_path)
    assert state.old_work_dir == state.work_dir
    assert state.status == 0


def test_from_environ_with_entries(tmp_path):
    state = ShellState.from_environ(["X=1", "Y=2"], cwd=str(tmp_path))
    assert list(state.env) == ["X=1", "Y=2"]
    assert state.work_dir == str(tmp_path)


def test_from_environ_defaults_to_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = ShellState.from_environ({})
    assert state.work_dir == os.getcwd()
    assert state.old_work_dir == os.getcwd()
    assert len(state.env) == 0


def test_from_environ_defaults_to_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("MINISHELL_STATE_PROBE", "probe")
    state = ShellState.from_environ(cwd=tmp_path)
    assert state.retrieve_value("MINISHELL_STATE_PROBE") == "probe"


def test_retrieve_value_from_environment():
    state = ShellState(env=Environment(["HOME=/home/user"]))
    assert state.retrieve_value("HOME") == "/home/user"


def test_retrieve_value_missing_is_empty():
    state = ShellState(env=Environment(["HOME=/home/user"]))
    assert state.retrieve_value("NOPE") == ""


def test_retrieve_value_status_follows_state():
    state = ShellState()
    state.status = 130
    assert state.retrieve_value("?") == "130"
    state.status = 0
    assert state.retrieve_value("?") == "0"


def test_retrieve_value_special_wins_over_environment():
    state = ShellState(env=Environment(["?=x"]), status=3)
    assert state.retrieve_value("?") == "3"