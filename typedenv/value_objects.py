import re
from dataclasses import dataclass
from datetime import timedelta
from typing import NewType

Float32 = NewType("Float32", float)
"""Marks a field or value as single precision. Routed to the float32 parser."""

_NS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")
_MAX_NS = 2**63 - 1


@dataclass(frozen=True)
class EnvTag:
    """
    Binding key and optional fallback literal for one struct field.
    Usable directly as Annotated[...] metadata.
    """
    key: str
    fallback: str = ""


@dataclass(frozen=True)
class Duration:
    """
    Signed duration as an integer count of nanoseconds.
    """
    nanoseconds: int

    @staticmethod
    def parse(text: str) -> "Duration":
        """Parses literals like "1h30m", "250ms", "-1.5s" or "0"."""
        s = str(text or "")
        neg = False
        if s and s[0] in "+-":
            neg = s[0] == "-"
            s = s[1:]
        if s == "0":
            return Duration(0)
        if not s:
            raise ValueError(f"invalid duration {text!r}")

        limit = _MAX_NS + 1 if neg else _MAX_NS
        total = 0
        pos = 0
        while pos < len(s):
            m = _COMPONENT_RE.match(s, pos)
            whole, frac, unit = m.groups()
            if not whole and not frac:
                raise ValueError(f"invalid duration {text!r}")
            if not unit:
                raise ValueError(f"missing unit in duration {text!r}")
            scale = _NS_PER_UNIT.get(unit)
            if scale is None:
                raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
            total += int(whole or "0") * scale
            if frac:
                total += int(frac) * scale // 10 ** len(frac)
            if total > limit:
                raise ValueError(f"invalid duration {text!r}")
            pos = m.end()
        return Duration(-total if neg else total)

    @staticmethod
    def from_timedelta(td: timedelta) -> "Duration":
        micros = (td.days * 86400 + td.seconds) * 1_000_000 + td.microseconds
        return Duration(micros * 1_000)

    def to_timedelta(self) -> timedelta:
        """Converts to timedelta, truncating sub-microsecond remainders toward zero."""
        micros = abs(self.nanoseconds) // 1_000
        return timedelta(microseconds=-micros if self.nanoseconds < 0 else micros)

    def __str__(self) -> str:
        ns = self.nanoseconds
        if ns == 0:
            return "0s"
        sign = "-" if ns < 0 else ""
        u = abs(ns)
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_with_fraction(u, 1_000)}µs"
        if u < 1_000_000_000:
            return f"{sign}{_with_fraction(u, 1_000_000)}ms"

        hours, rest = divmod(u, _NS_PER_UNIT["h"])
        minutes, rest = divmod(rest, _NS_PER_UNIT["m"])
        seconds = _with_fraction(rest, _NS_PER_UNIT["s"])
        if hours:
            return f"{sign}{hours}h{minutes}m{seconds}s"
        if minutes:
            return f"{sign}{minutes}m{seconds}s"
        return f"{sign}{seconds}s"


def parse_duration(text: str) -> timedelta:
    return Duration.parse(text).to_timedelta()


def format_duration(td: timedelta) -> str:
    return str(Duration.from_timedelta(td))


def _with_fraction(value: int, scale: int) -> str:
    whole, rem = divmod(value, scale)
    if not rem:
        return str(whole)
    digits = str(rem).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"
