from datetime import datetime, timezone

from library_api.errors import ValidationError


def utcnow() -> datetime:
    """Naive UTC şimdi; kolonlar tzinfo olmadan saklanır."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value, field: str = "timestamp") -> datetime:
    """
    "2024-01-01", "2024-01-01T10:30:00" veya "2024-01-01T10:30:00Z" kabul eder.
    Timezone bilgisi varsa UTC'ye çevrilip atılır.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} must be an ISO-8601 date")
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            raise ValidationError(f"{field} must be an ISO-8601 date") from None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def isoformat(value):
    return value.isoformat() if value else None
