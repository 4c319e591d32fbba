"""
Module-level accessor triples bound to the live process environment.

    get_<type>(key, fallback)   returns fallback on any failure
    try_get_<type>(key)         raises NotFoundError / InvalidFormatError
    must_get_<type>(key)        raises MustGetError wrapping the original error
"""

from datetime import datetime, timedelta

from .config import EnvConfig

_process = EnvConfig()


def get_str(key: str, fallback: str) -> str:
    return _process.get_str(key, fallback)


def try_get_str(key: str) -> str:
    return _process.try_get_str(key)


def must_get_str(key: str) -> str:
    return _process.must_get_str(key)


def get_int(key: str, fallback: int) -> int:
    return _process.get_int(key, fallback)


def try_get_int(key: str) -> int:
    return _process.try_get_int(key)


def must_get_int(key: str) -> int:
    return _process.must_get_int(key)


def get_float32(key: str, fallback: float) -> float:
    return _process.get_float32(key, fallback)


def try_get_float32(key: str) -> float:
    return _process.try_get_float32(key)


def must_get_float32(key: str) -> float:
    return _process.must_get_float32(key)


def get_float64(key: str, fallback: float) -> float:
    return _process.get_float64(key, fallback)


def try_get_float64(key: str) -> float:
    return _process.try_get_float64(key)


def must_get_float64(key: str) -> float:
    return _process.must_get_float64(key)


def get_bool(key: str, fallback: bool) -> bool:
    return _process.get_bool(key, fallback)


def try_get_bool(key: str) -> bool:
    return _process.try_get_bool(key)


def must_get_bool(key: str) -> bool:
    return _process.must_get_bool(key)


def get_time(key: str, fallback: datetime) -> datetime:
    """RFC3339 timestamp, e.g. 2025-08-24T12:34:56Z."""
    return _process.get_time(key, fallback)


def try_get_time(key: str) -> datetime:
    return _process.try_get_time(key)


def must_get_time(key: str) -> datetime:
    return _process.must_get_time(key)


def get_duration(key: str, fallback: timedelta) -> timedelta:
    """Duration literal, e.g. 1h30m or 250ms."""
    return _process.get_duration(key, fallback)


def try_get_duration(key: str) -> timedelta:
    return _process.try_get_duration(key)


def must_get_duration(key: str) -> timedelta:
    return _process.must_get_duration(key)
