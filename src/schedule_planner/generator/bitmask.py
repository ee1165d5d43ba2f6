"""Occupancy bitmask encoding for O(1) schedule overlap tests.

Every (day, period) block of the week maps to one bit of a 48-bit integer:

    index = day_index * 8 + (period - 1)

Monday period 1 is bit 0, Saturday period 8 is bit 47. A section's mask is
the OR of its blocks, and two schedules overlap iff their masks share a bit.
"""

from collections.abc import Iterable

from ..constants import MAX_PERIOD, MIN_PERIOD
from ..exceptions import InvalidInputError
from ..models import Activity, Day, Section, TimeBlock
from .constants import BLOCKS_PER_DAY, EMPTY_MASK, TOTAL_BLOCKS

# Occupancy masks are plain ints
OccupancyMask = int


def block_to_bit_index(day: Day | int | str, period: int) -> int:
    """Convert a (day, period) pair to its bit index (0-47).

    Raises:
        InvalidInputError: If the day is unknown or the period is outside 1..8
    """
    day = Day.parse(day)
    if not isinstance(period, int) or not MIN_PERIOD <= period <= MAX_PERIOD:
        raise InvalidInputError(
            f"Period {period!r} outside {MIN_PERIOD}..{MAX_PERIOD}", "period"
        )
    return day.value * BLOCKS_PER_DAY + (period - 1)


def bit_index_to_block(index: int) -> TimeBlock:
    """Convert a bit index (0-47) back to its TimeBlock."""
    if not 0 <= index < TOTAL_BLOCKS:
        raise InvalidInputError(f"Bit index {index} outside 0..{TOTAL_BLOCKS - 1}", "index")
    return TimeBlock(day=Day(index // BLOCKS_PER_DAY), period=(index % BLOCKS_PER_DAY) + 1)


def block_mask(block: TimeBlock) -> OccupancyMask:
    """Single-bit mask for one block."""
    return 1 << block_to_bit_index(block.day, block.period)


def blocks_to_mask(blocks: Iterable[TimeBlock]) -> OccupancyMask:
    """OR together the bits of all blocks. Empty input yields 0."""
    mask = EMPTY_MASK
    for block in blocks:
        mask |= block_mask(block)
    return mask


def activity_mask(activity: Activity) -> OccupancyMask:
    """Mask of one activity's own blocks."""
    return blocks_to_mask(activity.blocks)


def section_mask(section: Section) -> OccupancyMask:
    """Mask of a whole section (union over its activities)."""
    mask = EMPTY_MASK
    for activity in section.activities:
        mask |= activity_mask(activity)
    return mask


def combine_masks(masks: Iterable[OccupancyMask]) -> OccupancyMask:
    """Union of several masks."""
    combined = EMPTY_MASK
    for mask in masks:
        combined |= mask
    return combined


def has_overlap(mask_a: OccupancyMask, mask_b: OccupancyMask) -> bool:
    """Check whether two masks share at least one block."""
    return (mask_a & mask_b) != 0


def lowest_set_bit(mask: OccupancyMask) -> int:
    """Index of the earliest occupied block (earliest day, then period)."""
    if mask == EMPTY_MASK:
        raise InvalidInputError("Empty mask has no set bit", "mask")
    return (mask & -mask).bit_length() - 1


def mask_to_blocks(mask: OccupancyMask) -> list[TimeBlock]:
    """Convert a mask to its blocks, ordered by day then period."""
    return [bit_index_to_block(i) for i in range(TOTAL_BLOCKS) if mask & (1 << i)]


def overlapping_blocks(mask_a: OccupancyMask, mask_b: OccupancyMask) -> list[TimeBlock]:
    """Blocks occupied by both masks."""
    return mask_to_blocks(mask_a & mask_b)


def count_set_bits(mask: OccupancyMask) -> int:
    """Number of occupied blocks in a mask."""
    return mask.bit_count()
