"""
Date conversion helpers

All application code works with timezone-aware UTC datetimes. The database keeps
two legacy encodings (Unix milliseconds for event dates, ISO-8601 text for the
rest); these helpers are the only place either encoding is produced or parsed.
"""

from datetime import datetime, timezone
from typing import Optional, Union

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"


def utcnow() -> datetime:
    """Current UTC time truncated to millisecond precision"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_epoch_ms(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return int(ensure_utc(value).timestamp() * 1000)


def from_epoch_ms(value: Optional[Union[int, float, str]]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Format as yyyy-MM-ddTHH:mm:ss.fffZ"""
    if value is None:
        return None
    value = ensure_utc(value)
    return f"{value.strftime(ISO_FORMAT)}.{value.microsecond // 1000:03d}Z"


def from_iso(value: Optional[str]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def to_unix_seconds_str(value: Optional[datetime]) -> Optional[str]:
    """Legacy API timestamp: whole Unix seconds rendered as a string"""
    if value is None:
        return None
    return str(int(ensure_utc(value).timestamp()))
