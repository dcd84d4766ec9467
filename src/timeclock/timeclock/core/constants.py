"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Business clock runs at a fixed UTC-3 offset; day boundaries are midnight there.
BUSINESS_UTC_OFFSET_HOURS = -3

DEFAULT_EXPECTED_DAILY_HOURS = 8.0
DEFAULT_EXPECTED_WEEKLY_HOURS = 40.0

PUNCTUALITY_TOLERANCE_MINUTES = 10

COMPLIANCE_LOOKBACK_DAYS = 10
COMPLIANCE_MAX_DAYS = 10
COMPLIANCE_EXCELLENT_THRESHOLD = 90.0
COMPLIANCE_GOOD_THRESHOLD = 70.0

# Anything above a full day cannot come from a single in/out pair.
MAX_PLAUSIBLE_DAILY_HOURS = 24.0

NO_RECORD = "no record"

SHEET_NAME_MAX_LENGTH = 30

DAILY_REPORT_HOUR = 20
WEEKLY_REPORT_DAY_OF_WEEK = "mon"
WEEKLY_REPORT_HOUR = 9
DEFAULT_REPORT_TICK_TIMEOUT_SECONDS = 300
