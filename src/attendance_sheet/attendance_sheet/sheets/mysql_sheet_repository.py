from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceSheet, IdentityKey, SheetDetails, StudentEntry
from .repository import UPSERT_INSERTED, UPSERT_UNCHANGED, UPSERT_UPDATED, SheetRepository


class MySQLSheetRepository(SheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_sheet_by_identity(self, key: IdentityKey) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id
                FROM attendance_sheets
                WHERE program=%s AND faculty=%s AND department=%s AND course_unit=%s
                  AND lecturer=%s AND submitted_at=%s AND submitted_at_time=%s
                LIMIT 1
                """,
                key.as_params(),
            )
            r = fetchone(cur)
            return int(r["id"]) if r else None

    def update_sheet(
        self,
        sheet_id: int,
        *,
        coordinator_name: str,
        coordinator_phone: str,
        comments: str,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sheets
                SET class_coordinator_name=%s, class_coordinator_telephone=%s, comments=%s
                WHERE id=%s
                """,
                (coordinator_name, coordinator_phone, comments, int(sheet_id)),
            )

    def insert_sheet(self, sheet: AttendanceSheet) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sheets(
                    program, faculty, department, course_unit, lecturer,
                    submitted_at, submitted_at_time,
                    class_coordinator_name, class_coordinator_telephone, comments
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                sheet.key.as_params() + (sheet.coordinator_name, sheet.coordinator_phone, sheet.comments),
            )
            return int(cur.lastrowid or 0)

    def load_sheet(self, sheet_id: int) -> Optional[SheetDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_coordinator_name, class_coordinator_telephone, comments
                FROM attendance_sheets
                WHERE id=%s
                """,
                (int(sheet_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SheetDetails(
                coordinator_name=r.get("class_coordinator_name") or "",
                coordinator_phone=r.get("class_coordinator_telephone") or "",
                comments=r.get("comments") or "",
            )

    def list_students(self, sheet_id: int) -> Sequence[StudentEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_name, reg_no FROM students WHERE attendance_sheet_id=%s ORDER BY id",
                (int(sheet_id),),
            )
            rows = fetchall(cur)
            return [StudentEntry(name=r["student_name"] or "", reg_no=r["reg_no"] or "") for r in rows]

    def delete_student(self, sheet_id: int, reg_no: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM students WHERE attendance_sheet_id=%s AND reg_no=%s",
                (int(sheet_id), reg_no),
            )

    def upsert_student(self, sheet_id: int, name: str, reg_no: str) -> int:
        # Explicit check-then-write so the insert/update distinction does not
        # depend on the driver's affected-rows reporting.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_name FROM students WHERE attendance_sheet_id=%s AND reg_no=%s FOR UPDATE",
                (int(sheet_id), reg_no),
            )
            existing = fetchone(cur)
            if existing is None:
                cur.execute(
                    "INSERT INTO students(attendance_sheet_id, student_name, reg_no) VALUES(%s,%s,%s)",
                    (int(sheet_id), name, reg_no),
                )
                return UPSERT_INSERTED

            if existing["student_name"] == name:
                return UPSERT_UNCHANGED

            cur.execute(
                "UPDATE students SET student_name=%s WHERE attendance_sheet_id=%s AND reg_no=%s",
                (name, int(sheet_id), reg_no),
            )
            return UPSERT_UPDATED
