"""날짜/시간 헬퍼.

Datetime helpers. Every timestamp is stored in UTC; some drivers hand back
naive values, which are read as UTC before comparing with aware datetimes.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """naive datetime을 UTC로 간주합니다 — Treat naive datetimes as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
