import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "attendance_sheets_db"),
}

# Fixed number of rows in the student roster grid.
ROSTER_ROWS = int(os.getenv("ROSTER_ROWS", "20"))

INSTITUTION_NAME = os.getenv("INSTITUTION_NAME", "AVANCE INTERNATIONAL UNIVERSITY")
SHEET_TITLE = os.getenv("SHEET_TITLE", "Bachelor of IT Lecture Attendance Sheet")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
