from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_ROSTER_ROWS
from ..core.enums import Program


@dataclass(frozen=True)
class IdentityKey:
    """Fields that identify one lecture's sheet.

    A lookup only makes sense when every field is filled in.
    """

    program: Optional[Program]
    faculty: str
    department: str
    course_unit: str
    lecturer: str
    date: Optional[date]
    time: str

    def is_complete(self) -> bool:
        return (
            self.program is not None
            and bool(self.faculty)
            and bool(self.department)
            and bool(self.course_unit)
            and bool(self.lecturer)
            and self.date is not None
            and bool(self.time)
        )

    def as_params(self) -> tuple:
        program = self.program.value if self.program else None
        return (program, self.faculty, self.department, self.course_unit, self.lecturer, self.date, self.time)


@dataclass(frozen=True)
class AttendanceSheet:
    """One lecture's attendance sheet.

    ``sheet_id == 0`` means the sheet has not been persisted yet.
    """

    sheet_id: int
    key: IdentityKey
    coordinator_name: str = ""
    coordinator_phone: str = ""
    comments: str = ""


@dataclass(frozen=True)
class SheetDetails:
    """Mutable part of a stored sheet, as returned by ``load_sheet``."""

    coordinator_name: str
    coordinator_phone: str
    comments: str


@dataclass(frozen=True)
class StudentEntry:
    name: str = ""
    reg_no: str = ""

    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.reg_no)

    def is_blank(self) -> bool:
        return not self.name and not self.reg_no


BLANK_ENTRY = StudentEntry()


class Roster:
    """Fixed-length, ordered list of students padded with blank rows.

    Row numbers shown to the user come from position and are never stored.
    """

    def __init__(self, entries: Iterable[StudentEntry] = (), *, rows: int = DEFAULT_ROSTER_ROWS):
        self._rows = int(rows)
        self._entries = list(entries)
        # Stored students beyond the row count are kept, never dropped.
        while len(self._entries) < self._rows:
            self._entries.append(BLANK_ENTRY)

    @classmethod
    def blank(cls, rows: int = DEFAULT_ROSTER_ROWS) -> "Roster":
        return cls(rows=rows)

    @classmethod
    def from_entries(cls, entries: Iterable[StudentEntry], rows: int = DEFAULT_ROSTER_ROWS) -> "Roster":
        return cls(entries, rows=rows)

    @property
    def rows(self) -> int:
        return self._rows

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> StudentEntry:
        return self._entries[index]

    def set_row(self, index: int, *, name: Optional[str] = None, reg_no: Optional[str] = None) -> None:
        """Commit an edit to one row; ``None`` leaves that cell unchanged."""
        current = self._entries[index]
        self._entries[index] = replace(
            current,
            name=current.name if name is None else name,
            reg_no=current.reg_no if reg_no is None else reg_no,
        )

    def snapshot(self) -> Tuple[StudentEntry, ...]:
        return tuple(self._entries)

    def complete_entries(self) -> Sequence[StudentEntry]:
        return [e for e in self._entries if e.is_complete()]

    def registration_numbers(self) -> set[str]:
        return {e.reg_no for e in self._entries if e.reg_no}

    def row_numbers(self) -> list[int]:
        return list(range(1, len(self._entries) + 1))


@dataclass(frozen=True)
class SaveResult:
    created: bool
    students_inserted: int = 0
    students_updated: int = 0


@dataclass(frozen=True)
class LoadedSheetState:
    """Which stored sheet the form currently shows, if any."""

    sheet_id: Optional[int] = None

    @property
    def is_loaded(self) -> bool:
        return bool(self.sheet_id) and int(self.sheet_id) > 0


NOT_LOADED = LoadedSheetState()
