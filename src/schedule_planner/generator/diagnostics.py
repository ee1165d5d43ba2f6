"""Conflict diagnostics for combination generation.

Every time the generator discards a candidate section because it collides
with the partial schedule, one conflict event is recorded here. When the run
ends without results, the events are aggregated into the course pairs that
caused the most rejections.

Keys:
- pair key: both course codes sorted and joined ("EYP1113|IIC1001"), so A-vs-B
  and B-vs-A aggregate together
- slot: (day, period) of the first conflicting block
"""

import math
from collections import defaultdict

from ..models import Day
from ..normalization import normalize_section_id
from .constants import DEFAULT_TOP_PAIRS, PAIR_KEY_SEPARATOR
from .models import ConflictExample, TopPair


def make_pair_key(course_a: str, course_b: str) -> str:
    """Order-independent key for a pair of course codes."""
    return PAIR_KEY_SEPARATOR.join(sorted([course_a, course_b]))


def split_pair_key(pair_key: str) -> tuple[str, str]:
    course_a, course_b = pair_key.split(PAIR_KEY_SEPARATOR, 1)
    return course_a, course_b


class ConflictStats:
    """Conflict counters for a single generation run.

    Attributes:
        total: Number of rejection events recorded
        count_by_pair: pair key -> rejections
        count_by_pair_slot: (pair key, day, period) -> rejections
        example_by_pair: pair key -> first example seen (never overwritten)
    """

    def __init__(self) -> None:
        self.total = 0
        self.count_by_pair: dict[str, int] = defaultdict(int)
        self.count_by_pair_slot: dict[tuple[str, Day, int], int] = defaultdict(int)
        self.example_by_pair: dict[str, ConflictExample] = {}

    def record(
        self,
        candidate_course: str,
        candidate_section_id: str,
        existing_course: str,
        existing_section_id: str,
        day: Day,
        period: int,
    ) -> None:
        """Record one rejected candidate section.

        Args:
            candidate_course: Code of the course whose section was rejected
            candidate_section_id: Id of the rejected section
            existing_course: Code of the course already in the partial schedule
            existing_section_id: Id of the section it collided with
            day: Day of the first conflicting block
            period: Period of the first conflicting block
        """
        self.total += 1

        pair_key = make_pair_key(candidate_course, existing_course)
        self.count_by_pair[pair_key] += 1
        self.count_by_pair_slot[(pair_key, day, period)] += 1

        if pair_key not in self.example_by_pair:
            self.example_by_pair[pair_key] = ConflictExample(
                section_a=normalize_section_id(candidate_section_id),
                section_b=normalize_section_id(existing_section_id),
                day=day,
                period=period,
            )

    def peak_slot(self, pair_key: str) -> tuple[Day, int]:
        """(day, period) with the most rejections for a pair.

        Ties keep the slot that was recorded first.
        """
        best_count = 0
        best_slot = (Day.MONDAY, 1)
        for (key, day, period), count in self.count_by_pair_slot.items():
            if key == pair_key and count > best_count:
                best_count = count
                best_slot = (day, period)
        return best_slot

    def __bool__(self) -> bool:
        return self.total > 0


def _round_percentage(value: float) -> float:
    """Round half-up to one decimal (12.25 -> 12.3)."""
    return math.floor(value * 10 + 0.5) / 10


def build_top_pairs(stats: ConflictStats, limit: int = DEFAULT_TOP_PAIRS) -> list[TopPair]:
    """Rank course pairs by how many rejections they caused.

    Args:
        stats: Counters collected during generation
        limit: Maximum number of pairs to return

    Returns:
        Up to ``limit`` pairs, most frequent first. Empty when nothing was
        recorded, which means "no diagnostic available", not "no conflicts".
    """
    if stats.total == 0:
        return []

    # sorted() is stable: equal counts keep first-recorded order
    ranked = sorted(stats.count_by_pair.items(), key=lambda item: -item[1])[:limit]

    top_pairs = []
    for pair_key, count in ranked:
        course_a, course_b = split_pair_key(pair_key)
        peak_day, peak_period = stats.peak_slot(pair_key)
        top_pairs.append(
            TopPair(
                pair_key=pair_key,
                course_a=course_a,
                course_b=course_b,
                percentage=_round_percentage(count / stats.total * 100),
                peak_day=peak_day,
                peak_period=peak_period,
                example=stats.example_by_pair.get(pair_key),
            )
        )
    return top_pairs
