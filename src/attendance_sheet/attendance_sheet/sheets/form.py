from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..common.datetime_utils import format_lecture_time, now_local, parse_optional_date
from ..core.constants import DEFAULT_ROSTER_ROWS
from ..core.enums import Program
from .events import IdentityKeyChanged, IdentityKeyListener
from .model import BLANK_ENTRY, IdentityKey, Roster, SheetDetails, StudentEntry

IDENTITY_FIELDS = ("program", "faculty", "department", "course_unit", "lecturer", "date", "time")


def _text(value: Optional[str]) -> str:
    return "" if value is None else str(value)


class SheetForm:
    """Current values of one attendance sheet form.

    Setting an identity field (see ``IDENTITY_FIELDS``) to a different value
    notifies subscribers with an ``IdentityKeyChanged`` event.
    """

    def __init__(
        self,
        *,
        rows: int = DEFAULT_ROSTER_ROWS,
        lecture_date: Optional[date] = None,
        lecture_time: Optional[str] = None,
    ):
        now = now_local()
        self._listeners: List[IdentityKeyListener] = []
        self._program: Optional[Program] = None
        self._faculty = ""
        self._department = ""
        self._course_unit = ""
        self._lecturer = ""
        self._date: Optional[date] = lecture_date if lecture_date is not None else now.date()
        self._time = lecture_time if lecture_time is not None else format_lecture_time(now.time())
        self._coordinator_name = ""
        self._coordinator_phone = ""
        self._comments = ""
        self._roster = Roster.blank(rows)

    def subscribe(self, listener: IdentityKeyListener) -> None:
        self._listeners.append(listener)

    def _set_identity(self, field: str, value: Any) -> None:
        attr = f"_{field}"
        old = getattr(self, attr)
        if old == value:
            return
        setattr(self, attr, value)
        event = IdentityKeyChanged(field=field, old_value=old, new_value=value)
        for listener in list(self._listeners):
            listener(event)

    @property
    def program(self) -> Optional[Program]:
        return self._program

    @program.setter
    def program(self, value: Optional[Program]) -> None:
        self._set_identity("program", value)

    @property
    def faculty(self) -> str:
        return self._faculty

    @faculty.setter
    def faculty(self, value: Optional[str]) -> None:
        self._set_identity("faculty", _text(value))

    @property
    def department(self) -> str:
        return self._department

    @department.setter
    def department(self, value: Optional[str]) -> None:
        self._set_identity("department", _text(value))

    @property
    def course_unit(self) -> str:
        return self._course_unit

    @course_unit.setter
    def course_unit(self, value: Optional[str]) -> None:
        self._set_identity("course_unit", _text(value))

    @property
    def lecturer(self) -> str:
        return self._lecturer

    @lecturer.setter
    def lecturer(self, value: Optional[str]) -> None:
        self._set_identity("lecturer", _text(value))

    @property
    def date(self) -> Optional[date]:
        return self._date

    @date.setter
    def date(self, value: Optional[date]) -> None:
        self._set_identity("date", value)

    @property
    def time(self) -> str:
        return self._time

    @time.setter
    def time(self, value: Optional[str]) -> None:
        self._set_identity("time", _text(value))

    @property
    def coordinator_name(self) -> str:
        return self._coordinator_name

    @coordinator_name.setter
    def coordinator_name(self, value: Optional[str]) -> None:
        self._coordinator_name = _text(value)

    @property
    def coordinator_phone(self) -> str:
        return self._coordinator_phone

    @coordinator_phone.setter
    def coordinator_phone(self, value: Optional[str]) -> None:
        self._coordinator_phone = _text(value)

    @property
    def comments(self) -> str:
        return self._comments

    @comments.setter
    def comments(self, value: Optional[str]) -> None:
        self._comments = _text(value)

    @property
    def roster(self) -> Roster:
        return self._roster

    @roster.setter
    def roster(self, value: Roster) -> None:
        self._roster = value

    @property
    def rows(self) -> int:
        return self._roster.rows

    def identity_key(self) -> IdentityKey:
        return IdentityKey(
            program=self._program,
            faculty=self._faculty,
            department=self._department,
            course_unit=self._course_unit,
            lecturer=self._lecturer,
            date=self._date,
            time=self._time,
        )

    def is_complete(self) -> bool:
        return self.identity_key().is_complete()

    def roster_snapshot(self) -> Tuple[StudentEntry, ...]:
        return self._roster.snapshot()

    def load(self, details: SheetDetails, students: Iterable[StudentEntry]) -> None:
        """Replace coordinator fields, comments and roster with stored values."""
        self._coordinator_name = _text(details.coordinator_name)
        self._coordinator_phone = _text(details.coordinator_phone)
        self._comments = _text(details.comments)
        self._roster = Roster.from_entries(students, self.rows)

    def clear_loaded_fields(self) -> None:
        self._coordinator_name = ""
        self._coordinator_phone = ""
        self._comments = ""
        self._roster = Roster.blank(self.rows)

    def update_from_mapping(self, data: Mapping[str, Any]) -> None:
        """Apply submitted form fields; identity fields go through their setters.

        Roster rows are read from ``name_<i>`` / ``reg_no_<i>`` (0-based).
        """
        if "program" in data:
            self.program = Program.parse(data.get("program"))
        for field in ("faculty", "department", "course_unit", "lecturer", "time"):
            if field in data:
                setattr(self, field, (data.get(field) or "").strip())
        if "date" in data:
            self.date = parse_optional_date(data.get("date"))

        if "coordinator_name" in data:
            self.coordinator_name = data.get("coordinator_name")
        if "coordinator_phone" in data:
            self.coordinator_phone = data.get("coordinator_phone")
        if "comments" in data:
            self.comments = data.get("comments")

        submitted_rows = sum(1 for k in data if str(k).startswith("reg_no_"))
        if submitted_rows > len(self._roster):
            padding = [BLANK_ENTRY] * (submitted_rows - len(self._roster))
            self._roster = Roster.from_entries(list(self._roster.snapshot()) + padding, self.rows)

        for i in range(len(self._roster)):
            name = data.get(f"name_{i}")
            reg_no = data.get(f"reg_no_{i}")
            if name is None and reg_no is None:
                continue
            self._roster.set_row(
                i,
                name=None if name is None else name.strip(),
                reg_no=None if reg_no is None else reg_no.strip(),
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, rows: int = DEFAULT_ROSTER_ROWS) -> "SheetForm":
        form = cls(rows=rows)
        form.update_from_mapping(data)
        return form

    def to_dict(self) -> dict:
        return {
            "program": self._program.value if self._program else "",
            "faculty": self._faculty,
            "department": self._department,
            "course_unit": self._course_unit,
            "lecturer": self._lecturer,
            "date": self._date.strftime("%Y-%m-%d") if self._date else "",
            "time": self._time,
            "coordinator_name": self._coordinator_name,
            "coordinator_phone": self._coordinator_phone,
            "comments": self._comments,
            "students": [
                {"no": no, "name": e.name, "reg_no": e.reg_no}
                for no, e in zip(self._roster.row_numbers(), self._roster.snapshot())
            ],
        }
