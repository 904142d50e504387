"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LATE_CUTOFF = time(9, 30)
DEFAULT_HALF_DAY_HOURS = 4
DEFAULT_TREND_DAYS = 7
DEFAULT_IDENTITY_HEADER = "X-Employee-Id"

NOT_AVAILABLE = "N/A"
NOT_CHECKED_IN = "not-checked-in"

EXPORT_HEADERS = (
    "Date",
    "Employee ID",
    "Name",
    "Department",
    "Check In",
    "Check Out",
    "Status",
    "Total Hours",
)
