"""Utility constants for calspan.

Time unit constants represent durations in milliseconds, the resolution of
every timestamp the library stores. Months and years are the fixed
approximations used by ISO-8601 duration parsing, not calendar lengths.
"""

from calspan.bounds import Bounds

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000
MONTH = 2_592_000_000  # 30 days
YEAR = 31_536_000_000  # 365 days

# Boundary kind used whenever a constructor is not given one
DEFAULT_BOUNDS = Bounds.START_INCLUSIVE_END_EXCLUSIVE
