"""Backtracking generator of conflict-free section combinations."""

import logging
import threading
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field

from ..exceptions import EmptyCandidatePoolError, InvalidInputError
from ..models import ActivityType, Course, Section
from ..normalization import normalize_course_code, normalize_section_id
from .bitmask import activity_mask, bit_index_to_block, has_overlap, lowest_set_bit
from .constants import DEFAULT_MAX_RESULTS, EMPTY_MASK, RESULT_ID_PREFIX
from .diagnostics import ConflictStats, build_top_pairs
from .models import GenerationOutcome, GenerationResult
from .policy import OverridePolicy

logger = logging.getLogger(__name__)

SectionFilter = Mapping[str, Collection[str]]


class CancellationToken:
    """Cooperative abort flag checked at every step of the search."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class _ActivityInfo:
    course_code: str
    activity_type: ActivityType
    mask: int


@dataclass
class _Candidate:
    """A section with its precomputed masks."""

    section: Section
    course_code: str
    course_index: int
    mask: int
    activities: list[_ActivityInfo] = field(default_factory=list)

    @classmethod
    def prepare(cls, section: Section, course_code: str, course_index: int) -> "_Candidate":
        course_code = normalize_course_code(course_code)
        activities = [
            _ActivityInfo(course_code, activity.activity_type, activity_mask(activity))
            for activity in section.activities
        ]
        mask = EMPTY_MASK
        for info in activities:
            mask |= info.mask
        return cls(section, course_code, course_index, mask, activities)


class CombinationGenerator:
    """Enumerates every valid one-section-per-course assignment.

    Algorithm:
    1. Eligibility: apply the per-course section filter, precompute masks
    2. Ordering: courses with fewer eligible sections are searched first
    3. Backtracking: add a section if its mask does not overlap the partial
       schedule, or if the override policy permits the overlap
    4. Stop as soon as ``max_results`` combinations exist

    A generator instance owns its search state; use one instance per run.
    """

    def __init__(
        self,
        max_results: int = DEFAULT_MAX_RESULTS,
        section_filter: SectionFilter | None = None,
        override_policy: Mapping | None = None,
        strict: bool = False,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            max_results: Hard cap on the number of combinations
            section_filter: course code -> section ids allowed for that course.
                            An empty collection means "all sections".
            override_policy: (course_code, activity_type) -> overlap permitted
            strict: Raise EmptyCandidatePoolError instead of dropping a course
                    that ends up with no eligible sections
            cancel_token: Optional abort flag checked during the search
        """
        if max_results < 1:
            raise InvalidInputError(f"max_results must be >= 1, got {max_results}", "max_results")

        self.max_results = max_results
        self.section_filter = {
            normalize_course_code(code): {normalize_section_id(i) for i in ids}
            for code, ids in (section_filter or {}).items()
        }
        if override_policy is None or isinstance(override_policy, OverridePolicy):
            self.override_policy = override_policy or OverridePolicy()
        else:
            self.override_policy = OverridePolicy(override_policy)
        self.strict = strict
        self.cancel_token = cancel_token

        self._results: list[GenerationResult] = []
        self._stats = ConflictStats()
        self._cancelled = False

    def generate(self, courses: Sequence[Course]) -> GenerationOutcome:
        """Generate all valid combinations for the given courses.

        Args:
            courses: Required courses, each with its candidate sections

        Returns:
            GenerationOutcome with results, or diagnostics when none exist

        Raises:
            InvalidInputError: If no courses are given
            EmptyCandidatePoolError: In strict mode, if a course has no eligible sections
        """
        if not courses:
            raise InvalidInputError("At least one course is required", "courses")

        self._results = []
        self._stats = ConflictStats()
        self._cancelled = False

        pools, dropped = self._build_candidate_pools(courses)
        outcome = GenerationOutcome(dropped_courses=dropped, max_results=self.max_results)

        if not pools:
            logger.warning("No course has eligible sections; nothing to generate")
            return outcome

        # Fail-first: the most constrained course prunes the tree earliest
        pools.sort(key=len)

        logger.info(
            f"Generating combinations for {len(pools)} courses "
            f"({sum(len(p) for p in pools)} sections), cap {self.max_results}"
        )
        self._backtrack(pools, 0, [], EMPTY_MASK, False)

        outcome.results = self._results
        outcome.total_conflict_events = self._stats.total
        outcome.cancelled = self._cancelled

        if self._cancelled:
            logger.info(f"Generation cancelled after {len(self._results)} combinations")
            return outcome

        if not self._results and self._stats.total > 0:
            outcome.diagnostics = build_top_pairs(self._stats)

        logger.info(
            f"Found {len(self._results)} combinations "
            f"({self._stats.total} conflict rejections)"
        )
        return outcome

    def _build_candidate_pools(
        self, courses: Sequence[Course]
    ) -> tuple[list[list[_Candidate]], list[str]]:
        """Precompute eligible candidates per course, in the caller's order."""
        pools: list[list[_Candidate]] = []
        dropped: list[str] = []

        for course_index, course in enumerate(courses):
            allowed = self.section_filter.get(normalize_course_code(course.code))
            sections = course.sections
            if allowed:
                sections = [s for s in sections if normalize_section_id(s.id) in allowed]

            candidates = []
            for section in sections:
                if not section.activities:
                    logger.warning(f"Skipping section {section.id}: it has no activities")
                    continue
                candidates.append(_Candidate.prepare(section, course.code, course_index))

            if not candidates:
                if self.strict:
                    raise EmptyCandidatePoolError(course.code, sorted(allowed or []))
                logger.warning(f"Dropping course {course.code}: no eligible sections")
                dropped.append(course.code)
                continue

            pools.append(candidates)

        return pools, dropped

    def _should_stop(self) -> bool:
        if self.cancel_token is not None and self.cancel_token.cancelled:
            if not self._cancelled:
                logger.debug("Cancellation requested, unwinding search")
            self._cancelled = True
        return self._cancelled or len(self._results) >= self.max_results

    def _backtrack(
        self,
        pools: list[list[_Candidate]],
        depth: int,
        chosen: list[_Candidate],
        accumulated: int,
        permitted_overlap: bool,
    ) -> None:
        if self._should_stop():
            return

        if depth == len(pools):
            self._emit(chosen, accumulated, permitted_overlap)
            return

        for candidate in pools[depth]:
            addable, overlapped = self._can_add(chosen, accumulated, candidate)

            if addable:
                chosen.append(candidate)
                self._backtrack(
                    pools,
                    depth + 1,
                    chosen,
                    accumulated | candidate.mask,
                    permitted_overlap or overlapped,
                )
                chosen.pop()

                if self._should_stop():
                    return
            else:
                self._record_rejection(candidate, chosen)

    def _can_add(
        self, chosen: list[_Candidate], accumulated: int, candidate: _Candidate
    ) -> tuple[bool, bool]:
        """Check whether a candidate fits the partial schedule.

        Returns:
            Tuple of (addable, overlaps_partial_schedule)
        """
        if not has_overlap(accumulated, candidate.mask):
            return True, False

        if not self.override_policy:
            return False, True

        committed = [info for c in chosen for info in c.activities]
        for activity in candidate.activities:
            if not self._is_overlap_permitted(committed, activity):
                return False, True

        return True, True

    def _is_overlap_permitted(
        self, committed: list[_ActivityInfo], activity: _ActivityInfo
    ) -> bool:
        """Activity-level override check.

        The overlap is allowed iff at most one participant (the conflicting
        committed activities plus the new one) lacks permission.
        """
        participants = [c for c in committed if has_overlap(c.mask, activity.mask)]
        if not participants:
            return True

        participants.append(activity)
        not_permitted = sum(
            1
            for p in participants
            if not self.override_policy.allows(p.course_code, p.activity_type)
        )
        return not_permitted <= 1

    def _record_rejection(self, candidate: _Candidate, chosen: list[_Candidate]) -> None:
        """Record a conflict against the first overlapping chosen section."""
        for existing in chosen:
            conflict = candidate.mask & existing.mask
            if conflict:
                block = bit_index_to_block(lowest_set_bit(conflict))
                self._stats.record(
                    candidate.course_code,
                    candidate.section.id,
                    existing.course_code,
                    existing.section.id,
                    block.day,
                    block.period,
                )
                return

    def _emit(self, chosen: list[_Candidate], accumulated: int, permitted_overlap: bool) -> None:
        ordered = sorted(chosen, key=lambda c: c.course_index)
        self._results.append(
            GenerationResult(
                id=f"{RESULT_ID_PREFIX}-{len(self._results) + 1}",
                sections=[c.section for c in ordered],
                total_mask=accumulated,
                has_permitted_overlap=permitted_overlap,
            )
        )
        if len(self._results) == self.max_results:
            logger.debug(f"Result cap {self.max_results} reached")


def generate(
    courses: Sequence[Course],
    max_results: int = DEFAULT_MAX_RESULTS,
    section_filter: SectionFilter | None = None,
    override_policy: Mapping | None = None,
    *,
    strict: bool = False,
    cancel_token: CancellationToken | None = None,
) -> GenerationOutcome:
    """Generate every valid section combination for a set of courses.

    Args:
        courses: Required courses
        max_results: Hard cap on combinations (default 500)
        section_filter: Optional course code -> allowed section ids
        override_policy: Optional (course_code, activity_type) -> permitted map
        strict: Raise instead of dropping a course without eligible sections
        cancel_token: Optional cooperative cancellation flag

    Returns:
        GenerationOutcome
    """
    generator = CombinationGenerator(
        max_results=max_results,
        section_filter=section_filter,
        override_policy=override_policy,
        strict=strict,
        cancel_token=cancel_token,
    )
    return generator.generate(courses)
