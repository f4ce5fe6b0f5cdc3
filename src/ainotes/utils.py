import re
from datetime import UTC, datetime, timedelta

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# BSON datetimes keep milliseconds, so every backend stores timestamps at that precision
TIMESTAMP_RESOLUTION = timedelta(milliseconds=1)


def is_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value))


def now() -> datetime:
    """Current UTC time truncated to whole milliseconds."""
    current = datetime.now(UTC)
    return current.replace(microsecond=current.microsecond // 1000 * 1000)


def now_after(previous: datetime) -> datetime:
    """Current time, bumped one resolution step past `previous` when the clock has not moved on."""
    current = now()
    if current <= previous:
        return previous + TIMESTAMP_RESOLUTION
    return current
