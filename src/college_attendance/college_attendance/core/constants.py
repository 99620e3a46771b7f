"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PERIODS = tuple(range(1, 8))

ALL_SECTIONS = "All Sections"
SECTIONS = (
    "CSE-A",
    "CSE-B",
    "CSE-C",
    "CSE-AI",
    "ECE-A",
    "ECE-B",
    "Mech",
)

EXPORT_SHEET_NAME = "Attendance"
EXPORT_COLUMNS = ("Date", "Roll Number", "Name", "Year", "Section", "Status", "Type")

ALLOWED_PHOTO_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}

MIN_PASSWORD_LENGTH = 6
