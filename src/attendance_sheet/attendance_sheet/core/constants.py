"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ROSTER_ROWS = 20
DEFAULT_INSTITUTION_NAME = "AVANCE INTERNATIONAL UNIVERSITY"
DEFAULT_SHEET_TITLE = "Bachelor of IT Lecture Attendance Sheet"
TIME_FORMAT = "%H:%M"
