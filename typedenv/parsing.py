import math
import re
import struct

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_FORBIDDEN = re.compile(r"[\s_]")
_INF_SPELLINGS = frozenset({"inf", "infinity"})

TRUE_SPELLINGS = frozenset({"1", "true", "t", "yes", "y", "on"})
FALSE_SPELLINGS = frozenset({"0", "false", "f", "no", "n", "off"})


def parse_str(text: str) -> str:
    return text


def parse_int(text: str) -> int:
    """Parses a base-10 signed integer (no whitespace, no digit separators)."""
    if not _INT_RE.fullmatch(text):
        raise ValueError("invalid syntax")
    return int(text, 10)


def parse_float64(text: str) -> float:
    """Parses a decimal float. Accepts inf/nan spellings; overflowing numerals fail."""
    if not text or _FLOAT_FORBIDDEN.search(text):
        raise ValueError("invalid syntax")
    value = float(text)
    if math.isinf(value) and text.lstrip("+-").lower() not in _INF_SPELLINGS:
        raise ValueError("value out of range")
    return value


def parse_float32(text: str) -> float:
    """Parses a decimal float and rounds it to single precision."""
    value = parse_float64(text)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        raise ValueError("value out of range") from None


def parse_bool(text: str) -> bool:
    """Parses common boolean spellings, case-insensitively."""
    v = text.strip().lower()
    if v in TRUE_SPELLINGS:
        return True
    if v in FALSE_SPELLINGS:
        return False
    raise ValueError("invalid syntax")
