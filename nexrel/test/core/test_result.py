from __future__ import annotations

import pytest

from nexrel.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok_unwrap() -> None:
    result = _half(4)
    assert isinstance(result, Ok)
    assert result.unwrap() == 2


def test_err_unwrap_raises() -> None:
    result = _half(3)
    assert isinstance(result, Err)
    with pytest.raises(ValueError, match="3 is odd"):
        result.unwrap()


def test_repr() -> None:
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("boom")) == "Err('boom')"


def test_pattern_matching() -> None:
    match _half(10):
        case Ok(value):
            assert value == 5
        case Err(_):
            pytest.fail("expected Ok")
