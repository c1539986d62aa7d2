from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (MySQL DATETIME has no zone).

    Note: Wrapped so tests can patch/mock easier.
    """
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    # DATETIME(3) keeps milliseconds; match it so echoed and stored times agree.
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_iso(value: datetime | None) -> str | None:
    """Serialize a naive UTC datetime as ISO-8601 with a Z suffix."""
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"
