from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceSheet, IdentityKey, SheetDetails, StudentEntry

# upsert_student result, following the MySQL "rows affected" convention.
UPSERT_UNCHANGED = 0
UPSERT_INSERTED = 1
UPSERT_UPDATED = 2


class SheetRepository(Protocol):
    """Persistence boundary for attendance sheets and their students.

    Services depend on this interface, not on a concrete database. Any store
    failure is raised as ``PersistenceError``.
    """

    def find_sheet_by_identity(self, key: IdentityKey) -> Optional[int]:
        raise NotImplementedError

    def update_sheet(
        self,
        sheet_id: int,
        *,
        coordinator_name: str,
        coordinator_phone: str,
        comments: str,
    ) -> None:
        raise NotImplementedError

    def insert_sheet(self, sheet: AttendanceSheet) -> int:
        raise NotImplementedError

    def load_sheet(self, sheet_id: int) -> Optional[SheetDetails]:
        raise NotImplementedError

    def list_students(self, sheet_id: int) -> Sequence[StudentEntry]:
        raise NotImplementedError

    def delete_student(self, sheet_id: int, reg_no: str) -> None:
        raise NotImplementedError

    def upsert_student(self, sheet_id: int, name: str, reg_no: str) -> int:
        """Insert or rename a student; returns UPSERT_INSERTED, UPSERT_UPDATED or UPSERT_UNCHANGED."""

        raise NotImplementedError
