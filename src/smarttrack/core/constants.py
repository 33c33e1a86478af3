"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Final day status thresholds (hours)
HALF_DAY_MIN_HOURS = 4.0
FULL_DAY_MIN_HOURS = 8.0
# Base for overtime
STANDARD_WORK_HOURS = 8.0

# Fixed civil timezone (UTC+05:30)
DEFAULT_UTC_OFFSET_MINUTES = 330

EARTH_RADIUS_METERS = 6_371_000.0

SEGMENT_STATUS_PRESENT = "present"

DEFAULT_HISTORY_LIMIT = 200
