"""Request field helpers shared by the services."""

from typing import Optional

from app.core.exceptions import MissingFieldError


def clean(value: Optional[str]) -> Optional[str]:
    """Strip whitespace; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_fields(message: str, **fields: Optional[str]) -> None:
    """Raise MissingFieldError naming every absent or blank field."""
    missing = [name for name, value in fields.items() if not clean(value)]
    if missing:
        raise MissingFieldError(message, details={"missing": missing})
