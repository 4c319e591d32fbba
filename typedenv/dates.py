import re
from datetime import datetime, timedelta, timezone

_RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})"
)


def parse_rfc3339(text: str) -> datetime:
    """Parses a strict RFC3339 timestamp into an aware datetime.

    Fractional seconds beyond microsecond precision are truncated.
    """
    m = _RFC3339_RE.fullmatch(text)
    if not m:
        raise ValueError("expected RFC3339 layout YYYY-MM-DDTHH:MM:SS[.frac]Z|+HH:MM")
    frac = m.group("frac") or ""
    micro = int((frac + "000000")[:6])
    return datetime(
        int(m.group("year")),
        int(m.group("month")),
        int(m.group("day")),
        int(m.group("hour")),
        int(m.group("minute")),
        int(m.group("second")),
        micro,
        tzinfo=_parse_offset(m.group("offset")),
    )


def format_rfc3339(dt: datetime) -> str:
    """Formats an aware datetime as RFC3339, using Z for UTC."""
    if dt.tzinfo is None:
        raise ValueError("naive datetime has no RFC3339 form")
    text = dt.isoformat(timespec="microseconds" if dt.microsecond else "seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_offset(offset: str) -> timezone:
    if offset == "Z":
        return timezone.utc
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError("time zone offset out of range")
    delta = timedelta(hours=hours, minutes=minutes)
    if offset[0] == "-":
        delta = -delta
    return timezone(delta) if delta else timezone.utc
