# src/tasklog/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any

from ..errors import ValidationError


def format_task_date(dt: datetime) -> str:
    """RFC 1123 in GMT, e.g. "Fri, 16 Oct 2026 10:00:00 GMT"."""
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def parse_task_date(raw: str) -> datetime | None:
    """
    Parse a task date into an aware datetime.

    Accepts RFC 1123/2822 (what `new` writes) and ISO 8601.
    Naive values are taken as UTC. Returns None if nothing matches.
    """
    s = (raw or "").strip()
    if not s:
        return None
    dt: datetime | None
    try:
        dt = parsedate_to_datetime(s)
    except (TypeError, ValueError):
        dt = None
    if dt is None:
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(slots=True)
class Task:
    """
    One logged task.

    Only `short_description` is ever changed after creation (backfill).
    `tags` is None when the key is absent in the file, which is distinct
    from an empty list.
    """

    date: str
    description: str
    short_description: str | None = None
    tags: list[str] | None = field(default=None)

    @property
    def when(self) -> datetime | None:
        return parse_task_date(self.date)

    @classmethod
    def create(cls, description: str, *, tags: list[str] | None = None, now: datetime | None = None) -> Task:
        now = now or datetime.now(timezone.utc)
        return cls(date=format_task_date(now), description=description, tags=list(tags or []))

    @classmethod
    def from_json(cls, raw: Any, *, label: str = "task") -> Task:
        if not isinstance(raw, dict):
            raise ValidationError(f"{label}: expected an object, got {type(raw).__name__}")

        def req_str(key: str) -> str:
            val = raw.get(key)
            if not isinstance(val, str):
                raise ValidationError(f"{label}.{key}: expected a string")
            return val

        def opt_str(key: str) -> str | None:
            val = raw.get(key)
            if val is None:
                return None
            if not isinstance(val, str):
                raise ValidationError(f"{label}.{key}: expected a string")
            return val

        tags_raw = raw.get("tags")
        tags: list[str] | None = None
        if tags_raw is not None:
            if not isinstance(tags_raw, list) or not all(isinstance(t, str) for t in tags_raw):
                raise ValidationError(f"{label}.tags: expected a list of strings")
            tags = list(tags_raw)

        return cls(
            date=req_str("date"),
            description=req_str("description"),
            short_description=opt_str("short_description"),
            tags=tags,
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"date": self.date, "description": self.description}
        if self.short_description is not None:
            out["short_description"] = self.short_description
        if self.tags is not None:
            out["tags"] = list(self.tags)
        return out
