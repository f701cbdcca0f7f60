import pytest

from tinyinfer.env import empty_env


def test_empty_env():
    with pytest.raises(LookupError):
        empty_env().lookup("x")


def test_lookup_innermost_binding():
    env = empty_env().extend("x", 1).extend("y", 2).extend("x", 3)
    assert env.lookup("x") == 3
    assert env.lookup("y") == 2


def test_extend_does_not_mutate():
    outer = empty_env().extend("x", 1)
    inner = outer.extend("x", False)
    assert inner.lookup("x") is False
    assert outer.lookup("x") == 1
