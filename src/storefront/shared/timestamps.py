"""Timestamp helpers — records carry ISO-8601 strings, the domain carries aware datetimes."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def from_iso(value: str | datetime | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(value)
    # Records written without an offset are taken as UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
