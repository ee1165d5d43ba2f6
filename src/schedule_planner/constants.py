"""Constants for the schedule planner."""

# Class periods per day (1-based). Lunch sits between periods 4 and 5.
MIN_PERIOD = 1
MAX_PERIOD = 8
PERIODS = list(range(MIN_PERIOD, MAX_PERIOD + 1))

PERIOD_TIMES = {
    1: {"start": "08:20", "end": "09:30"},
    2: {"start": "09:40", "end": "10:50"},
    3: {"start": "11:00", "end": "12:10"},
    4: {"start": "12:20", "end": "13:30"},
    5: {"start": "14:50", "end": "16:00"},
    6: {"start": "16:10", "end": "17:20"},
    7: {"start": "17:30", "end": "18:40"},
    8: {"start": "18:50", "end": "20:00"},
}

LUNCH_BREAK = {"start": "13:30", "end": "14:50"}
LUNCH_AFTER_PERIOD = 4

# Accepted spellings when parsing days from catalog files
DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
DAY_ABBREVIATIONS = ["mon", "tue", "wed", "thu", "fri", "sat"]

DEFAULT_TERM = "2026-1"

# Course codes: 3 letters followed by letters/digits, 4-10 chars overall
COURSE_CODE_PATTERN = r"^[A-Z]{3}[A-Z0-9]+$"
COURSE_CODE_MIN_LENGTH = 4
COURSE_CODE_MAX_LENGTH = 10

# Separator used in descriptions such as "MAT1620-1, IIC2233-4"
DESCRIPTION_SEPARATOR = ", "


def get_period_time_range(period: int) -> str:
    """Get time range string for a period (e.g., '08:20-09:30')."""
    times = PERIOD_TIMES.get(period)
    if times:
        return f"{times['start']}-{times['end']}"
    return ""
