from __future__ import annotations

from typing import Any

from .error_codes import ErrorCode


class EnvError(Exception):
    """Base error for environment lookups and struct loading."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.field: str | None = None

    def with_field(self, name: str) -> "EnvError":
        """Tags the error with the struct field it was raised for."""
        self.field = name
        return self

    def __str__(self) -> str:
        if self.field:
            return f"field {self.field}: {self.message}"
        return self.message


class NotFoundError(EnvError):
    """Variable is unset or empty."""
    code = ErrorCode.NOT_FOUND

    def __init__(self, key: str) -> None:
        super().__init__(f"unable to find env variable with key {key}")
        self.key = key


class InvalidFormatError(EnvError):
    """Variable is set but does not parse as the requested type."""
    code = ErrorCode.INVALID_FORMAT

    def __init__(self, key: str, raw: str, kind: str, reason: str) -> None:
        super().__init__(f"unable to convert {raw!r} (key {key}) to {kind}: {reason}")
        self.key = key
        self.raw = raw
        self.kind = kind


class InvalidTargetError(EnvError, TypeError):
    """load() was given something other than a mutable struct instance."""
    code = ErrorCode.INVALID_TARGET


class InvalidFallbackError(EnvError):
    """A field's fallback literal does not parse as the field's type."""
    code = ErrorCode.INVALID_FALLBACK

    def __init__(self, field: str, literal: str, kind: str, reason: str) -> None:
        super().__init__(f"invalid fallback {kind} {literal!r}: {reason}")
        self.literal = literal
        self.kind = kind
        self.with_field(field)


class UnsupportedTypeError(EnvError, TypeError):
    """A tagged field's type has no parser."""
    code = ErrorCode.UNSUPPORTED_TYPE

    def __init__(self, type_: Any, field: str | None = None) -> None:
        super().__init__(f"unsupported field type {_type_name(type_)}")
        self.type = type_
        self.field = field


class MustGetError(RuntimeError):
    """Raised by must_get_* accessors. Wraps the original EnvError."""

    def __init__(self, error: EnvError) -> None:
        super().__init__(str(error))
        self.error = error


def _type_name(type_: Any) -> str:
    return getattr(type_, "__qualname__", None) or repr(type_)
