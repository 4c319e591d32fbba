from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Protocol, TypeVar

from dotenv import dotenv_values

from .dates import parse_rfc3339
from .errors import InvalidFormatError, MustGetError, NotFoundError, UnsupportedTypeError
from .parsing import parse_bool, parse_float32, parse_float64, parse_int, parse_str
from .value_objects import Float32, parse_duration

T = TypeVar("T")

Parser = Callable[[str], Any]

# Closed set of supported field/value types. Lookup is by exact type, so bool
# never falls through to int and Float32 never falls through to float.
PARSERS: dict[Any, tuple[str, Parser]] = {
    str: ("string", parse_str),
    bool: ("bool", parse_bool),
    int: ("integer", parse_int),
    Float32: ("float32", parse_float32),
    float: ("float64", parse_float64),
    datetime: ("time (RFC3339)", parse_rfc3339),
    timedelta: ("duration", parse_duration),
}


def parser_for(type_: Any) -> tuple[str, Parser]:
    """Returns (kind, parser) for a supported type. Raises UnsupportedTypeError."""
    try:
        return PARSERS[type_]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(type_) from None


class Environment(Protocol):
    """Read-only key/value source for variables."""
    def lookup(self, key: str) -> str | None:
        ...


class OsEnvironment:
    """Live process environment. Every lookup reads os.environ."""
    def lookup(self, key: str) -> str | None:
        return os.environ.get(key)


class MappingEnvironment:
    """Environment backed by a caller-owned mapping."""
    def __init__(self, values: Mapping[str, str | None]) -> None:
        self._values = values

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)


class DotenvEnvironment:
    """Environment read from a .env file. The file is re-read on every lookup."""
    def __init__(self, path: str | os.PathLike[str], encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def lookup(self, key: str) -> str | None:
        return dotenv_values(self.path, encoding=self.encoding).get(key)


class EnvConfig:
    """Typed accessors over an Environment (defaults to the process environment)."""

    def __init__(self, env: Environment | None = None) -> None:
        self.env: Environment = env if env is not None else OsEnvironment()

    def raw(self, key: str) -> str:
        """Returns the raw text for key, raising NotFoundError if unset or empty."""
        val = self.env.lookup(key)
        if not val:
            raise NotFoundError(key)
        return val

    def try_get(self, key: str, type_: type[T]) -> T:
        kind, parser = parser_for(type_)
        val = self.raw(key)
        try:
            return parser(val)
        except ValueError as exc:
            raise InvalidFormatError(key, val, kind, str(exc)) from exc

    def get(self, key: str, type_: type[T], fallback: T) -> T:
        try:
            return self.try_get(key, type_)
        except (NotFoundError, InvalidFormatError):
            return fallback

    def must_get(self, key: str, type_: type[T]) -> T:
        try:
            return self.try_get(key, type_)
        except (NotFoundError, InvalidFormatError) as err:
            raise MustGetError(err) from err

    def load(self, target: Any) -> None:
        """Populates target's tagged fields from this config's environment."""
        from .loader import load

        load(target, config=self)

    # text
    def get_str(self, key: str, fallback: str) -> str:
        return self.get(key, str, fallback)

    def try_get_str(self, key: str) -> str:
        return self.try_get(key, str)

    def must_get_str(self, key: str) -> str:
        return self.must_get(key, str)

    # integer
    def get_int(self, key: str, fallback: int) -> int:
        return self.get(key, int, fallback)

    def try_get_int(self, key: str) -> int:
        return self.try_get(key, int)

    def must_get_int(self, key: str) -> int:
        return self.must_get(key, int)

    # single precision float
    def get_float32(self, key: str, fallback: float) -> float:
        return self.get(key, Float32, fallback)

    def try_get_float32(self, key: str) -> float:
        return self.try_get(key, Float32)

    def must_get_float32(self, key: str) -> float:
        return self.must_get(key, Float32)

    # double precision float
    def get_float64(self, key: str, fallback: float) -> float:
        return self.get(key, float, fallback)

    def try_get_float64(self, key: str) -> float:
        return self.try_get(key, float)

    def must_get_float64(self, key: str) -> float:
        return self.must_get(key, float)

    # boolean
    def get_bool(self, key: str, fallback: bool) -> bool:
        return self.get(key, bool, fallback)

    def try_get_bool(self, key: str) -> bool:
        return self.try_get(key, bool)

    def must_get_bool(self, key: str) -> bool:
        return self.must_get(key, bool)

    # RFC3339 timestamp
    def get_time(self, key: str, fallback: datetime) -> datetime:
        return self.get(key, datetime, fallback)

    def try_get_time(self, key: str) -> datetime:
        return self.try_get(key, datetime)

    def must_get_time(self, key: str) -> datetime:
        return self.must_get(key, datetime)

    # duration
    def get_duration(self, key: str, fallback: timedelta) -> timedelta:
        return self.get(key, timedelta, fallback)

    def try_get_duration(self, key: str) -> timedelta:
        return self.try_get(key, timedelta)

    def must_get_duration(self, key: str) -> timedelta:
        return self.must_get(key, timedelta)
