from __future__ import annotations

from enum import Enum
from typing import Optional


class Program(str, Enum):
    """Study program a lecture belongs to, stored as-is in the database."""

    DAY = "Day"
    WEEKEND = "Weekend"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Program"]:
        v = (value or "").strip()
        if not v:
            return None
        for member in cls:
            if member.value.lower() == v.lower() or member.name.lower() == v.lower():
                return member
        return None
