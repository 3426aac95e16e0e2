"""
Timezone helpers. All timestamps are stored as naive UTC.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time without tzinfo, matching the DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_isoformat(value: datetime) -> str:
    """ISO 8601 string with an explicit UTC offset"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
