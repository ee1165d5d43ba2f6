"""Summaries of generated combinations and of the search space."""

from collections.abc import Sequence

from ..constants import DESCRIPTION_SEPARATOR
from ..models import Course
from .bitmask import count_set_bits
from .models import GenerationResult, ScheduleSummary, SearchSpaceStats


def summarize(result: GenerationResult) -> ScheduleSummary:
    """Derive display statistics for one combination.

    Args:
        result: A generated combination

    Returns:
        ScheduleSummary with the occupied block count, the distinct course
        codes (first-seen order) and a "CODE-n, CODE-n" description in the
        result's section order
    """
    course_codes = list(dict.fromkeys(s.course_code for s in result.sections))
    description = DESCRIPTION_SEPARATOR.join(s.label for s in result.sections)

    return ScheduleSummary(
        occupied_block_count=count_set_bits(result.total_mask),
        course_codes=course_codes,
        description=description,
    )


def search_space_stats(courses: Sequence[Course]) -> SearchSpaceStats:
    """Upper bound on combinations before any conflict pruning."""
    sections_per_course = [len(c.sections) for c in courses]

    possible = 1
    for count in sections_per_course:
        possible *= count

    return SearchSpaceStats(
        possible_combinations=possible if courses else 0,
        course_count=len(courses),
        section_count=sum(sections_per_course),
    )
