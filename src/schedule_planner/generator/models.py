"""Data models for generated combinations and conflict diagnostics."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..models import Day, Section


@dataclass
class GenerationResult:
    """One conflict-free (or override-permitted) combination of sections.

    Attributes:
        id: Sequential id ("result-1", "result-2", ...)
        sections: One section per generated course, in the caller's course order
        total_mask: Union of the chosen sections' occupancy masks
        has_permitted_overlap: True if any accepted section needed the override policy
    """

    id: str
    sections: list[Section]
    total_mask: int
    has_permitted_overlap: bool = False

    @property
    def section_ids(self) -> list[str]:
        return [s.id for s in self.sections]

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "id": self.id,
            "section_ids": self.section_ids,
            "sections": [
                {"course_code": s.course_code, **s.to_dict()} for s in self.sections
            ],
            "total_mask": self.total_mask,
            "has_permitted_overlap": self.has_permitted_overlap,
        }


@dataclass
class ConflictExample:
    """First concrete collision seen for a course pair."""

    section_a: str
    section_b: str
    day: Day
    period: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "section_a": self.section_a,
            "section_b": self.section_b,
            "day": self.day.name.lower(),
            "period": self.period,
        }


@dataclass
class TopPair:
    """A course pair ranked by how often it caused rejections."""

    pair_key: str
    course_a: str
    course_b: str
    percentage: float
    peak_day: Day
    peak_period: int
    example: ConflictExample | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pair_key": self.pair_key,
            "course_a": self.course_a,
            "course_b": self.course_b,
            "percentage": self.percentage,
            "peak_day": self.peak_day.name.lower(),
            "peak_period": self.peak_period,
            "example": self.example.to_dict() if self.example else None,
        }


@dataclass
class GenerationOutcome:
    """Everything one generation run produced.

    ``diagnostics`` is only set when no result was found and at least one
    conflict was recorded; ``None`` otherwise.
    """

    results: list[GenerationResult] = field(default_factory=list)
    diagnostics: list[TopPair] | None = None
    total_conflict_events: int = 0
    dropped_courses: list[str] = field(default_factory=list)
    max_results: int = 0
    cancelled: bool = False
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_results(self) -> int:
        return len(self.results)

    @property
    def cap_reached(self) -> bool:
        """True when the search stopped because the result cap was hit."""
        return self.max_results > 0 and len(self.results) >= self.max_results

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "total_results": self.total_results,
            "cap_reached": self.cap_reached,
            "cancelled": self.cancelled,
            "total_conflict_events": self.total_conflict_events,
            "dropped_courses": self.dropped_courses,
            "results": [r.to_dict() for r in self.results],
            "diagnostics": (
                [d.to_dict() for d in self.diagnostics]
                if self.diagnostics is not None
                else None
            ),
        }


@dataclass
class ScheduleSummary:
    """Human facing statistics for one result."""

    occupied_block_count: int
    course_codes: list[str]
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "occupied_block_count": self.occupied_block_count,
            "course_codes": self.course_codes,
            "description": self.description,
        }


@dataclass
class SearchSpaceStats:
    """Size of the search space for a course set."""

    possible_combinations: int
    course_count: int
    section_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "possible_combinations": self.possible_combinations,
            "course_count": self.course_count,
            "section_count": self.section_count,
        }
