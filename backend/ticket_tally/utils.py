"""Small shared helpers."""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Type, TypeVar
from ticket_tally.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def coerce_enum(enum_cls: Type[E], value, field: str) -> E:
    """Convert a raw value to an enum member or raise ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field} '{value}'. Allowed: {allowed}")


def require_text(value: Optional[str], field: str) -> str:
    """Return the trimmed value, raising ValidationError when empty."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def truncate(text: str, limit: int, marker: str = "...") -> str:
    """Cut text to ``limit`` characters, appending ``marker`` if cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker
