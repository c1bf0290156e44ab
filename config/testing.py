import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "attendance_sheets_test"),
}

ROSTER_ROWS = 5

INSTITUTION_NAME = "Test University"
SHEET_TITLE = "Test Attendance Sheet"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
