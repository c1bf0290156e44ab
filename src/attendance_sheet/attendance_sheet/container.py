from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_ROSTER_ROWS
from .database.connection import DBConfig, DatabaseConnection
from .sheets.mysql_sheet_repository import MySQLSheetRepository
from .sheets.repository import SheetRepository
from .sheets.service import SheetLookupService, SheetSyncService


@dataclass(frozen=True)
class Container:
    sheets_repo: SheetRepository

    lookup_service: SheetLookupService
    sync_service: SheetSyncService

    roster_rows: int = DEFAULT_ROSTER_ROWS


def build_container_for(sheets_repo: SheetRepository, *, roster_rows: int = DEFAULT_ROSTER_ROWS) -> Container:
    return Container(
        sheets_repo=sheets_repo,
        lookup_service=SheetLookupService(sheets_repo),
        sync_service=SheetSyncService(sheets_repo),
        roster_rows=int(roster_rows),
    )


def build_container(*, db_config: dict, roster_rows: int = DEFAULT_ROSTER_ROWS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_container_for(MySQLSheetRepository(conn), roster_rows=roster_rows)
