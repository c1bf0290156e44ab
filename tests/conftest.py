from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from src.attendance_sheet.attendance_sheet.core.enums import Program
from src.attendance_sheet.attendance_sheet.core.exceptions import PersistenceError
from src.attendance_sheet.attendance_sheet.sheets.form import SheetForm
from src.attendance_sheet.attendance_sheet.sheets.model import AttendanceSheet, IdentityKey, SheetDetails, StudentEntry


class InMemorySheets:
    """SheetRepository fake that follows the MySQL affected-rows convention."""

    def __init__(self):
        self._next_id = 1
        self.keys: dict[int, IdentityKey] = {}
        self.details: dict[int, SheetDetails] = {}
        self.students: dict[int, dict[str, str]] = {}
        self.calls: list[tuple] = []
        self.fail_on: Optional[str] = None

    def _record(self, name: str, *args) -> None:
        self.calls.append((name,) + args)
        if self.fail_on == name:
            raise PersistenceError(f"{name} failed")

    def calls_to(self, name: str) -> list[tuple]:
        return [c[1:] for c in self.calls if c[0] == name]

    def find_sheet_by_identity(self, key: IdentityKey) -> Optional[int]:
        self._record("find_sheet_by_identity", key)
        for sheet_id, stored in self.keys.items():
            if stored == key:
                return sheet_id
        return None

    def update_sheet(self, sheet_id, *, coordinator_name, coordinator_phone, comments) -> None:
        self._record("update_sheet", sheet_id, coordinator_name, coordinator_phone, comments)
        self.details[sheet_id] = SheetDetails(coordinator_name, coordinator_phone, comments)

    def insert_sheet(self, sheet: AttendanceSheet) -> int:
        self._record("insert_sheet", sheet)
        sheet_id = self._next_id
        self._next_id += 1
        self.keys[sheet_id] = sheet.key
        self.details[sheet_id] = SheetDetails(sheet.coordinator_name, sheet.coordinator_phone, sheet.comments)
        self.students[sheet_id] = {}
        return sheet_id

    def load_sheet(self, sheet_id) -> Optional[SheetDetails]:
        self._record("load_sheet", sheet_id)
        return self.details.get(sheet_id)

    def list_students(self, sheet_id):
        self._record("list_students", sheet_id)
        return [StudentEntry(name=n, reg_no=r) for r, n in self.students.get(sheet_id, {}).items()]

    def delete_student(self, sheet_id, reg_no) -> None:
        self._record("delete_student", sheet_id, reg_no)
        self.students.get(sheet_id, {}).pop(reg_no, None)

    def upsert_student(self, sheet_id, name, reg_no) -> int:
        self._record("upsert_student", sheet_id, name, reg_no)
        rows = self.students.setdefault(sheet_id, {})
        if reg_no not in rows:
            rows[reg_no] = name
            return 1
        if rows[reg_no] == name:
            return 0
        rows[reg_no] = name
        return 2


@pytest.fixture
def sheets_repo() -> InMemorySheets:
    return InMemorySheets()


def _make_form(
    *,
    rows: int = 5,
    program: Optional[Program] = Program.DAY,
    faculty: str = "F",
    department: str = "D",
    course_unit: str = "C101",
    lecturer: str = "L",
    lecture_date: Optional[date] = date(2024, 1, 10),
    lecture_time: str = "09:00",
    coordinator_name: str = "",
    coordinator_phone: str = "",
    comments: str = "",
    students=(),
) -> SheetForm:
    form = SheetForm(rows=rows, lecture_date=lecture_date, lecture_time=lecture_time)
    form.program = program
    form.faculty = faculty
    form.department = department
    form.course_unit = course_unit
    form.lecturer = lecturer
    form.coordinator_name = coordinator_name
    form.coordinator_phone = coordinator_phone
    form.comments = comments
    for i, (name, reg_no) in enumerate(students):
        form.roster.set_row(i, name=name, reg_no=reg_no)
    return form


@pytest.fixture
def make_form():
    return _make_form
