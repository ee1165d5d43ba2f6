"""Tests for occupancy bitmask encoding."""

import itertools

import pytest

from schedule_planner.exceptions import InvalidInputError
from schedule_planner.generator.bitmask import (
    bit_index_to_block,
    block_mask,
    block_to_bit_index,
    blocks_to_mask,
    combine_masks,
    count_set_bits,
    has_overlap,
    lowest_set_bit,
    mask_to_blocks,
    overlapping_blocks,
    section_mask,
)
from schedule_planner.generator.constants import FULL_MASK, TOTAL_BLOCKS
from schedule_planner.models import Day, TimeBlock

ALL_BLOCKS = [(day, period) for day in Day for period in range(1, 9)]


class TestBitIndex:
    """Tests for the (day, period) <-> bit index mapping."""

    def test_layout(self):
        assert block_to_bit_index(Day.MONDAY, 1) == 0
        assert block_to_bit_index(Day.MONDAY, 8) == 7
        assert block_to_bit_index(Day.TUESDAY, 1) == 8
        assert block_to_bit_index(Day.SATURDAY, 8) == 47

    def test_accepts_day_spellings(self):
        assert block_to_bit_index("wed", 3) == block_to_bit_index(Day.WEDNESDAY, 3) == 18

    def test_bijection(self):
        indices = set()
        for day, period in ALL_BLOCKS:
            index = block_to_bit_index(day, period)
            assert bit_index_to_block(index) == TimeBlock(day, period)
            indices.add(index)
        assert indices == set(range(TOTAL_BLOCKS))

    @pytest.mark.parametrize("period", [0, 9, "1", None])
    def test_invalid_period(self, period):
        with pytest.raises(InvalidInputError):
            block_to_bit_index(Day.MONDAY, period)

    def test_invalid_day(self):
        with pytest.raises(InvalidInputError):
            block_to_bit_index("sunday", 1)

    @pytest.mark.parametrize("index", [-1, 48])
    def test_invalid_index(self, index):
        with pytest.raises(InvalidInputError):
            bit_index_to_block(index)


class TestMasks:
    """Tests for mask construction and set operations."""

    def test_blocks_to_mask(self):
        mask = blocks_to_mask([TimeBlock(Day.MONDAY, 1), TimeBlock(Day.TUESDAY, 1)])
        assert mask == 0b1_0000_0001

    def test_empty_blocks(self):
        assert blocks_to_mask([]) == 0

    def test_all_blocks_fill_mask(self):
        assert blocks_to_mask(TimeBlock(d, p) for d, p in ALL_BLOCKS) == FULL_MASK

    def test_section_mask_unions_activities(self, make_section):
        section = make_section(
            "MAT1620", 1, ("lecture", [(Day.MONDAY, 1)]), ("lab", [(Day.FRIDAY, 8)])
        )
        assert section_mask(section) == (1 << 0) | (1 << 39)

    def test_overlap_symmetry(self):
        masks = [0, 1, 2, 3, 1 << 47, FULL_MASK]
        for a, b in itertools.product(masks, repeat=2):
            assert has_overlap(a, b) == has_overlap(b, a)

    def test_overlap(self):
        assert has_overlap(0b011, 0b010)
        assert not has_overlap(0b001, 0b010)
        assert not has_overlap(0, FULL_MASK)

    def test_combine_idempotent_and_order_free(self):
        a, b, c = 0b0011, 0b0110, 1 << 40
        assert combine_masks([a, a]) == a
        assert combine_masks([a, b, c]) == combine_masks([c, a, b])
        assert combine_masks([]) == 0

    def test_mask_to_blocks_ordered(self):
        mask = block_mask(TimeBlock(Day.FRIDAY, 2)) | block_mask(TimeBlock(Day.MONDAY, 5))
        assert mask_to_blocks(mask) == [TimeBlock(Day.MONDAY, 5), TimeBlock(Day.FRIDAY, 2)]

    def test_overlapping_blocks(self):
        a = blocks_to_mask([TimeBlock(Day.MONDAY, 1), TimeBlock(Day.MONDAY, 2)])
        b = blocks_to_mask([TimeBlock(Day.MONDAY, 2), TimeBlock(Day.MONDAY, 3)])
        assert overlapping_blocks(a, b) == [TimeBlock(Day.MONDAY, 2)]

    def test_lowest_set_bit(self):
        assert lowest_set_bit(0b10100) == 2
        assert lowest_set_bit(1 << 47) == 47

    def test_lowest_set_bit_empty(self):
        with pytest.raises(InvalidInputError):
            lowest_set_bit(0)

    def test_count_set_bits(self):
        assert count_set_bits(0) == 0
        assert count_set_bits(0b1011) == 3
        assert count_set_bits(FULL_MASK) == 48
