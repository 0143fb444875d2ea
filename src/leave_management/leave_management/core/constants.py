"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200
DEFAULT_ADMIN_LIST_LIMIT = 500
DEFAULT_MAX_ATTEMPTS = 3

HALF_DAY = 0.5
# Upper bound for a yearly quota total (fits DECIMAL(5,1) columns).
MAX_QUOTA_DAYS = 366.0

# (name, default quota days, description)
DEFAULT_LEAVE_TYPES = (
    ("Paid Leave", 20, "Annual paid leave"),
    ("Sick Leave", 10, "Leave for health issues"),
    ("Casual Leave", 5, "Short notice leave"),
)
