"""Tests for Option, Result and Either."""

import pytest

import aiochain as ac


def test_option_from() -> None:
    assert ac.Option.from_(1) == ac.Some(1)
    assert ac.Option.from_(None) is ac.NONE


def test_option_combinators() -> None:
    """map and and_then only apply to Some."""
    assert ac.Some(2).map(lambda x: x * 2) == ac.Some(4)
    assert ac.NONE.map(lambda x: x * 2) is ac.NONE
    assert ac.Some(2).and_then(lambda x: ac.Some(str(x))) == ac.Some("2")
    assert ac.NONE.or_else(lambda: ac.Some(0)) == ac.Some(0)
    assert ac.NONE.unwrap_or(5) == 5
    assert ac.NONE.unwrap_or_else(lambda: 6) == 6


def test_option_unwrap_none() -> None:
    with pytest.raises(ac.OptionUnwrapError):
        ac.NONE.unwrap()
    with pytest.raises(ac.OptionUnwrapError, match="missing"):
        ac.NONE.expect("missing")


def test_result_accessors() -> None:
    ok: ac.Result[int, str] = ac.Ok(1)
    err: ac.Result[int, str] = ac.Err("bad")
    assert ok.is_ok() and not ok.is_err()
    assert err.is_err() and not err.is_ok()
    assert ok.ok() == ac.Some(1)
    assert err.ok() is ac.NONE
    assert err.err() == ac.Some("bad")
    assert err.unwrap_or(0) == 0
    assert ok.map(lambda x: x + 1) == ac.Ok(2)
    assert err.map_err(str.upper) == ac.Err("BAD")
    assert ok.map_or_else(str, len) == "1"
    assert err.map_or_else(str, len) == 3


def test_result_unwrap_errors() -> None:
    with pytest.raises(ac.ResultUnwrapError):
        ac.Err("bad").unwrap()
    with pytest.raises(ac.ResultUnwrapError):
        ac.Ok(1).unwrap_err()


def test_result_get_or_raise() -> None:
    """The contained exception is raised unchanged."""
    error = ValueError("boom")
    with pytest.raises(ValueError, match="boom") as info:
        ac.Err(error).get_or_raise()
    assert info.value is error
    assert ac.Ok(3).get_or_raise() == 3


def test_result_to_either() -> None:
    assert ac.Ok(1).to_either() == ac.Right(1)
    assert ac.Err("e").to_either() == ac.Left("e")


def test_either() -> None:
    right: ac.Either[str, int] = ac.Right(2)
    left: ac.Either[str, int] = ac.Left("no")
    assert right.is_right() and left.is_left()
    assert right.right() == ac.Some(2)
    assert right.left() is ac.NONE
    assert left.left() == ac.Some("no")
    assert right.map(lambda x: x * 3) == ac.Right(6)
    assert left.map(lambda x: x * 3) == ac.Left("no")
    assert left.swap() == ac.Right("no")
    assert right.fold(len, str) == "2"
