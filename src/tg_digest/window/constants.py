"""Constants for date window resolution."""

from typing import Final


# Telegram channels cannot hold posts older than this year.
MIN_YEAR: Final[int] = 2014

MIN_MONTH: Final[int] = 1
MAX_MONTH: Final[int] = 12

# Weeks are counted from the first Monday of the month.
MIN_WEEK: Final[int] = 1
MAX_WEEK: Final[int] = 5

DAYS_PER_WEEK: Final[int] = 7
