from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from ..core.enums import Program
from .events import IdentityKeyChanged
from .form import SheetForm
from .model import NOT_LOADED, AttendanceSheet, LoadedSheetState, Roster, SaveResult
from .repository import UPSERT_INSERTED, UPSERT_UPDATED, SheetRepository

logger = logging.getLogger(__name__)


class LoadedSheetHolder:
    """Mutable box around a ``LoadedSheetState`` for event-driven wiring."""

    def __init__(self, state: LoadedSheetState = NOT_LOADED):
        self.state = state


class SheetLookupService:
    """Loads a stored sheet into the form as soon as its identity key resolves."""

    def __init__(self, sheets: SheetRepository):
        self._sheets = sheets

    def handle(self, event: IdentityKeyChanged, form: SheetForm, state: LoadedSheetState) -> LoadedSheetState:
        if not form.is_complete():
            return state

        key = form.identity_key()
        sheet_id = self._sheets.find_sheet_by_identity(key)
        if sheet_id:
            details = self._sheets.load_sheet(sheet_id)
            if details is not None:
                students = self._sheets.list_students(sheet_id)
                form.load(details, students)
                logger.debug("Loaded sheet %s after %s changed (%d students)", sheet_id, event.field, len(students))
                return LoadedSheetState(sheet_id)

        if state.is_loaded:
            logger.debug("No sheet for %s; clearing previously loaded sheet %s", key, state.sheet_id)
            form.clear_loaded_fields()
            return NOT_LOADED

        return state

    def bind(self, form: SheetForm, holder: LoadedSheetHolder) -> Callable[[IdentityKeyChanged], None]:
        """Subscribe to the form so every identity change runs ``handle``."""

        def on_change(event: IdentityKeyChanged) -> None:
            holder.state = self.handle(event, form, holder.state)

        form.subscribe(on_change)
        return on_change


class SheetSyncService:
    """Saves the form: updates or creates the sheet, then reconciles its students."""

    def __init__(self, sheets: SheetRepository):
        self._sheets = sheets

    def save(self, form: SheetForm) -> SaveResult:
        """Persist the form.

        The loaded-sheet pointer is left alone; only lookups move it.
        """
        roster = Roster.from_entries(form.roster_snapshot(), form.rows)
        key = form.identity_key()
        if key.program is None:
            # An unselected program is stored as the weekend program.
            key = replace(key, program=Program.WEEKEND)

        sheet_id = self._sheets.find_sheet_by_identity(key) or 0
        created = sheet_id <= 0

        if created:
            sheet_id = self._sheets.insert_sheet(
                AttendanceSheet(
                    sheet_id=0,
                    key=key,
                    coordinator_name=form.coordinator_name,
                    coordinator_phone=form.coordinator_phone,
                    comments=form.comments,
                )
            )
            logger.info("Created attendance sheet %s", sheet_id)
        else:
            self._sheets.update_sheet(
                sheet_id,
                coordinator_name=form.coordinator_name,
                coordinator_phone=form.coordinator_phone,
                comments=form.comments,
            )
            logger.info("Updated attendance sheet %s", sheet_id)

            kept = roster.registration_numbers()
            existing = {s.reg_no for s in self._sheets.list_students(sheet_id)}
            for reg_no in sorted(existing - kept):
                self._sheets.delete_student(sheet_id, reg_no)
                logger.debug("Removed student %s from sheet %s", reg_no, sheet_id)

        inserted = 0
        updated = 0
        for entry in roster.complete_entries():
            affected = self._sheets.upsert_student(sheet_id, entry.name, entry.reg_no)
            if affected == UPSERT_INSERTED:
                inserted += 1
            elif affected == UPSERT_UPDATED:
                updated += 1

        return SaveResult(created=created, students_inserted=inserted, students_updated=updated)


def describe_save_result(result: SaveResult) -> str:
    message = "Attendance saved successfully!" if result.created else "Attendance updated successfully!"
    if result.students_inserted > 0 or result.students_updated > 0:
        message += f"\n({result.students_inserted} student(s) added, {result.students_updated} updated)"
    return message
