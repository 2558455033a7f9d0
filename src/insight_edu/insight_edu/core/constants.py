"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PERCENTAGE = 0
MAX_PERCENTAGE = 100
DEFAULT_SYNC_WORKERS = 4
