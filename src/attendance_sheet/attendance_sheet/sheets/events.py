from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class IdentityKeyChanged:
    """Emitted whenever program, faculty, department, course unit, lecturer, date or time changes."""

    field: str
    old_value: Any
    new_value: Any


IdentityKeyListener = Callable[[IdentityKeyChanged], None]
