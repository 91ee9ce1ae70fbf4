import pytest

from minishell.environment import (
    INVALID_PARAMETER_NAME,
    NOT_VALID_IN_CONTEXT,
    Environment,
    InvalidNameError,
    key_length,
)


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        ("PATH=/bin", 4),
        ("PATH", 0),
        ("=value", 0),
        ("A B=1", None),
        ("A?=1", None),
        ("X=a b", 1),
    ],
)
def test_key_length(entry, expected):
    assert key_length(entry) == expected


def test_iteration_and_length_follow_insertion_order():
    env = Environment(["A=1", "B=2"])
    env.add("C=3")
    assert list(env) == ["A=1", "B=2", "C=3"]
    assert len(env) == 3


def test_default_environment_is_empty():
    env = Environment()
    assert list(env) == []
    assert len(env) == 0


def test_set_replaces_existing_entry_in_place():
    env = Environment(["A=1", "B=2"])
    env.set("A=3")
    assert list(env) == ["A=3", "B=2"]


def test_set_appends_new_entry():
    env = Environment(["A=1"])
    env.set("B=2")
    assert list(env) == ["A=1", "B=2"]


def test_set_matches_on_key_prefix():
    env = Environment(["PATHX=1"])
    env.set("PATH=2")
    assert list(env) == ["PATH=2"]


def test_set_then_lookup_round_trip():
    env = Environment()
    env.set("HOME=/home/user")
    env.set("HOME=/tmp")
    assert env.lookup("HOME") == "/tmp"
    assert len(env) == 1


def test_lookup_returns_value_after_first_equals():
    env = Environment(["A=b=c"])
    assert env.lookup("A") == "b=c"


def test_lookup_missing_key():
    env = Environment(["PATH=/bin"])
    assert env.lookup("HOME") is None


def test_lookup_requires_whole_key():
    env = Environment(["PATH=/bin"])
    assert env.lookup("PA") is None
    assert env.lookup("PATHX") is None


def test_unset_removes_entry():
    env = Environment(["A=1", "B=2", "C=3"])
    env.unset("B")
    assert list(env) == ["A=1", "C=3"]
    assert env.lookup("B") is None


def test_unset_removes_first_entry():
    env = Environment(["A=1", "B=2"])
    env.unset("A")
    assert list(env) == ["B=2"]


def test_unset_only_first_match():
    env = Environment(["A=1", "A=2"])
    env.unset("A")
    assert list(env) == ["A=2"]


def test_unset_unknown_name_changes_nothing():
    env = Environment(["PATH=/bin"])
    env.unset("PA")
    assert list(env) == ["PATH=/bin"]


def test_unset_name_with_equals_is_rejected():
    env = Environment(["A=1"])
    with pytest.raises(InvalidNameError) as info:
        env.unset("A=1")
    assert info.value.reason == INVALID_PARAMETER_NAME
    assert info.value.name == "A=1"
    assert list(env) == ["A=1"]


def test_unset_name_with_space_is_rejected():
    env = Environment(["A=1"])
    with pytest.raises(InvalidNameError) as info:
        env.unset("A B")
    assert info.value.reason == NOT_VALID_IN_CONTEXT
    assert str(info.value) == "A B: not valid in this context"