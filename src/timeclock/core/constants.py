"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PIN_LENGTH = 6
DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_DAYS = 7
DEFAULT_LIST_LIMIT = 200

OVERTIME_MULTIPLIER = 1.5
MAX_OVERTIME_HOURS = 12

DEFAULT_DEPARTMENT = "General"
DEFAULT_JOB_ROLE = "Staff"
