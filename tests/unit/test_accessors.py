from datetime import datetime, timedelta, timezone

import pytest

import typedenv
from typedenv import InvalidFormatError, MustGetError, NotFoundError

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

# (suffix, valid text, parsed value, malformed text, fallback)
CASES = [
    ("str", "hello", "hello", None, "fb"),
    ("int", "42", 42, "abc", 7),
    ("float32", "99.5", 99.5, "1.2.3", 1.5),
    ("float64", "3.14", 3.14, "pi", 2.71),
    ("bool", "true", True, "nah", False),
    ("time", "2025-08-24T12:34:56Z", datetime(2025, 8, 24, 12, 34, 56, tzinfo=timezone.utc), "notatime", ZERO_TIME),
    ("duration", "1h30m", timedelta(minutes=90), "zzz", timedelta(seconds=5)),
]


def _triple(suffix):
    return (
        getattr(typedenv, f"get_{suffix}"),
        getattr(typedenv, f"try_get_{suffix}"),
        getattr(typedenv, f"must_get_{suffix}"),
    )


@pytest.mark.parametrize("suffix,valid,expected,malformed,fallback", CASES)
def test_valid_value(monkeypatch, suffix, valid, expected, malformed, fallback):
    get, try_get, must_get = _triple(suffix)
    monkeypatch.setenv("X_VALUE", valid)

    assert try_get("X_VALUE") == expected
    assert get("X_VALUE", fallback) == expected
    assert must_get("X_VALUE") == expected


@pytest.mark.parametrize("suffix,valid,expected,malformed,fallback", CASES)
@pytest.mark.parametrize("present", [False, True])
def test_missing_or_empty(monkeypatch, present, suffix, valid, expected, malformed, fallback):
    get, try_get, must_get = _triple(suffix)
    if present:
        monkeypatch.setenv("X_VALUE", "")

    with pytest.raises(NotFoundError) as exc:
        try_get("X_VALUE")
    assert exc.value.key == "X_VALUE"
    assert exc.value.code == "not_found"

    assert get("X_VALUE", fallback) == fallback

    with pytest.raises(MustGetError) as abort:
        must_get("X_VALUE")
    assert isinstance(abort.value.error, NotFoundError)


@pytest.mark.parametrize("suffix,valid,expected,malformed,fallback", [c for c in CASES if c[3] is not None])
def test_malformed_value(monkeypatch, suffix, valid, expected, malformed, fallback):
    get, try_get, must_get = _triple(suffix)
    monkeypatch.setenv("X_VALUE", malformed)

    with pytest.raises(InvalidFormatError) as exc:
        try_get("X_VALUE")
    assert exc.value.key == "X_VALUE"
    assert exc.value.raw == malformed
    assert malformed in str(exc.value)
    assert isinstance(exc.value.__cause__, ValueError)

    assert get("X_VALUE", fallback) == fallback

    with pytest.raises(MustGetError) as abort:
        must_get("X_VALUE")
    assert abort.value.error is abort.value.__cause__
    assert isinstance(abort.value.error, InvalidFormatError)


def test_must_get_error_is_not_recoverable_env_error(monkeypatch):
    with pytest.raises(MustGetError) as abort:
        typedenv.must_get_str("X_REQUIRED")
    assert not isinstance(abort.value, typedenv.EnvError)
    assert "X_REQUIRED" in str(abort.value)


def test_every_call_rereads_environment(monkeypatch):
    monkeypatch.setenv("X_LIVE", "1")
    assert typedenv.get_int("X_LIVE", 0) == 1
    monkeypatch.setenv("X_LIVE", "2")
    assert typedenv.get_int("X_LIVE", 0) == 2
    monkeypatch.delenv("X_LIVE")
    assert typedenv.get_int("X_LIVE", 0) == 0


def test_text_is_not_trimmed(monkeypatch):
    monkeypatch.setenv("X_STR", "  padded ")
    assert typedenv.try_get_str("X_STR") == "  padded "


def test_float32_is_single_precision(monkeypatch):
    monkeypatch.setenv("X_F32", "0.1")
    monkeypatch.setenv("X_F64", "0.1")

    f32 = typedenv.try_get_float32("X_F32")
    assert f32 != 0.1
    assert f32 == pytest.approx(0.1, rel=1e-7)
    assert typedenv.try_get_float64("X_F64") == 0.1


def test_float32_out_of_range(monkeypatch):
    monkeypatch.setenv("X_F32", "1e39")
    with pytest.raises(InvalidFormatError):
        typedenv.try_get_float32("X_F32")
    assert typedenv.try_get_float64("X_F32") == 1e39


@pytest.mark.parametrize("text", ["1e400", "-1e400"])
def test_overflowing_float_is_invalid(monkeypatch, text):
    monkeypatch.setenv("X_FLOAT", text)

    with pytest.raises(InvalidFormatError):
        typedenv.try_get_float64("X_FLOAT")
    with pytest.raises(InvalidFormatError):
        typedenv.try_get_float32("X_FLOAT")
    assert typedenv.get_float64("X_FLOAT", 1.0) == 1.0
    assert typedenv.get_float32("X_FLOAT", 1.0) == 1.0


def test_infinity_spellings_are_accepted(monkeypatch):
    monkeypatch.setenv("X_FLOAT", "-Infinity")
    assert typedenv.try_get_float64("X_FLOAT") == float("-inf")
    assert typedenv.try_get_float32("X_FLOAT") == float("-inf")
