"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_VENUE_UTC_OFFSET_HOURS = 6
DEFAULT_TELEGRAM_TIMEOUT_SECONDS = 10
TELEGRAM_API_URL = "https://api.telegram.org"

# Remaining-visit values that trigger a low-balance message to the member.
LOW_BALANCE_MILESTONES = (3, 2, 1)
