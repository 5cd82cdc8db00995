# src/tasklog/core/duration.py

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from typing import Any

from ..errors import ParseError, ValidationError


class TimeUnit(StrEnum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    YEAR = "year"

    @classmethod
    def parse(cls, raw: str) -> TimeUnit:
        key = raw.strip().lower()
        key = _UNIT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(u.value for u in cls)
            raise ParseError(f"unknown time unit {raw!r} (expected one of: {choices})") from None


_UNIT_ALIASES = {"min": "minute"}

# Year is 265 days, not 365. Existing task logs were filtered with this value.
_UNIT_SECONDS: dict[TimeUnit, int] = {
    TimeUnit.MINUTE: 60,
    TimeUnit.HOUR: 60 * 60,
    TimeUnit.DAY: 60 * 60 * 24,
    TimeUnit.WEEK: 60 * 60 * 24 * 7,
    TimeUnit.YEAR: 60 * 60 * 24 * 265,
}


@dataclass(frozen=True, slots=True)
class Duration:
    count: float
    unit: TimeUnit

    def to_timedelta(self) -> timedelta:
        return timedelta(seconds=self.count * _UNIT_SECONDS[self.unit])

    def to_json(self) -> dict[str, Any]:
        return {"count": self.count, "unit": self.unit.value}

    @classmethod
    def from_json(cls, raw: Any, *, label: str = "recency") -> Duration:
        """
        Validate a persisted duration object.

        Accepts the legacy key "n" in place of "count".
        """
        if not isinstance(raw, dict):
            raise ValidationError(f"{label}: expected an object, got {type(raw).__name__}")
        count = raw.get("count", raw.get("n"))
        if count is None:
            raise ValidationError(f"{label}.count: required")
        unit = raw.get("unit")
        if not isinstance(unit, str):
            raise ValidationError(f"{label}.unit: expected a string")
        try:
            return cls(count=_check_count(count), unit=TimeUnit.parse(unit))
        except ParseError as e:
            raise ValidationError(f"{label}: {e}") from e

    def __str__(self) -> str:
        return show_duration(self)


def _check_count(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"count must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ParseError(f"count must be a positive number, got {value!r}")
    return value


def _from_tokens(tokens: list[str]) -> Duration:
    number, unit = tokens
    try:
        count = json.loads(number)
    except json.JSONDecodeError:
        raise ParseError(f"count must be a number, got {number!r}") from None
    return Duration(count=_check_count(count), unit=TimeUnit.parse(unit))


def parse_duration(text: str) -> Duration:
    """
    Parse "1 day" or "1.day" into a Duration.

    The string must split into exactly two tokens on a single space, or failing
    that on a single period.
    """
    s = text.strip()
    for sep in (" ", "."):
        tokens = s.split(sep)
        if len(tokens) == 2:
            try:
                return _from_tokens(tokens)
            except ParseError as e:
                raise ParseError(f"invalid duration {text!r}: {e}") from None
    raise ParseError(f"invalid duration {text!r} (expected e.g. \"1 day\" or \"2.week\")")


def show_duration(d: Duration) -> str:
    count = int(d.count) if float(d.count).is_integer() else d.count
    return f"{count} {d.unit.value}"
