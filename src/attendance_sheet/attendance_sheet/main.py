from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_INSTITUTION_NAME, DEFAULT_ROSTER_ROWS, DEFAULT_SHEET_TITLE
from .database.bootstrap import apply_schema, list_tables
from .sheets.controller import register as register_sheets

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["INSTITUTION_NAME"] = getattr(settings, "INSTITUTION_NAME", DEFAULT_INSTITUTION_NAME)
    app.config["SHEET_TITLE"] = getattr(settings, "SHEET_TITLE", DEFAULT_SHEET_TITLE)
    roster_rows = int(getattr(settings, "ROSTER_ROWS", DEFAULT_ROSTER_ROWS))

    logging.basicConfig(level=logging.DEBUG if app.config["DEBUG"] else logging.INFO)
    logger = logging.getLogger("attendance_sheet")

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, roster_rows=roster_rows)

    register_sheets(app, container)

    return app
