"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CHILD_CODE_PREFIX = "MKD"
CHILD_CODE_DIGITS = 6

DEFAULT_SESSION_DAYS = 7
DEFAULT_LEADERBOARD_REFRESH_SECONDS = 30
DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT = 50
DEFAULT_UPCOMING_EVENTS_ON_DASHBOARD = 3

MIN_PASSWORD_LENGTH = 6
UNKNOWN_CLASS_NAME = "Unknown Class"
