from __future__ import annotations

from collections.abc import Mapping
from dataclasses import astuple, dataclass
from datetime import datetime, timezone
from typing import Any

SUBMISSION_HEADERS = ("timestamp", "name", "phone", "email", "symptoms", "source")
REQUIRED_FIELDS = ("name", "phone", "email")
DEFAULT_SOURCE = "unknown"


class ValidationError(ValueError):
    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required fields: {', '.join(self.missing)}")


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _present(value: Any) -> bool:
    """Required fields must be non-empty strings; JSON false/0/lists do not count."""
    return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True)
class Submission:
    timestamp: str
    name: str
    phone: str
    email: str
    symptoms: str = ""
    source: str = DEFAULT_SOURCE

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None, *, now: datetime | None = None) -> "Submission":
        """Build a submission from an intake payload; raises ValidationError on missing required fields."""
        payload = payload or {}
        missing = [f for f in REQUIRED_FIELDS if not _present(payload.get(f))]
        if missing:
            raise ValidationError(missing)
        return cls(
            timestamp=utc_timestamp(now),
            name=_text(payload.get("name")),
            phone=_text(payload.get("phone")),
            email=_text(payload.get("email")),
            symptoms=str(payload.get("symptoms") or ""),
            source=_text(payload.get("source")) or DEFAULT_SOURCE,
        )

    def as_row(self) -> tuple[str, ...]:
        return astuple(self)
