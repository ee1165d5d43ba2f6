"""Constants for combination generation."""

# Occupancy bit layout: index = day_index * BLOCKS_PER_DAY + (period - 1)
BLOCKS_PER_DAY = 8
DAYS_PER_WEEK = 6
TOTAL_BLOCKS = BLOCKS_PER_DAY * DAYS_PER_WEEK  # 48

EMPTY_MASK = 0
FULL_MASK = (1 << TOTAL_BLOCKS) - 1

# Hard cap on generated combinations per run
DEFAULT_MAX_RESULTS = 500

# Number of course pairs reported when no combination exists
DEFAULT_TOP_PAIRS = 3

# Separator for diagnostic pair keys ("EYP1113|IIC1001")
PAIR_KEY_SEPARATOR = "|"

# Separator for override policy keys in config files ("MAT1620:tutorial")
POLICY_KEY_SEPARATOR = ":"

RESULT_ID_PREFIX = "result"
