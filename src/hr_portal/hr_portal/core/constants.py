"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Office policy, minutes since midnight.
OFFICE_START_MINUTES = 9 * 60 + 30
OFFICE_END_MINUTES = 18 * 60 + 30
HALF_DAY_SPLIT_MINUTES = 14 * 60 + 30
LATE_AFTER_MINUTES = 9 * 60 + 35

DEFAULT_TOKEN_HOURS = 24
DEFAULT_RESET_TOKEN_MINUTES = 15
AUTH_COOKIE_NAME = "token"

EMPLOYEE_ID_COUNTER = "employeeId"
EMPLOYEE_ID_PREFIX = "EMP"
EMPLOYEE_ID_SEED = 1000

MIN_PASSWORD_LENGTH = 6
