from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form SQLite round-trips)"""
    return datetime.now(UTC).replace(tzinfo=None)
