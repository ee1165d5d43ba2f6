"""Data models for courses, sections and their weekly time blocks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

from .constants import DAY_ABBREVIATIONS, DAY_NAMES, DEFAULT_TERM, MAX_PERIOD, MIN_PERIOD
from .exceptions import InvalidInputError
from .normalization import make_section_id, normalize_course_code


class Day(Enum):
    """Days of the academic week.

    The value is the day index used by the occupancy bit layout.
    """

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5

    @classmethod
    def parse(cls, value: "Day | int | str") -> "Day":
        """Parse a day from an enum member, index, name or abbreviation.

        Args:
            value: Day, 0-5 index, "monday"/"Monday" or "mon"

        Returns:
            Matching Day

        Raises:
            InvalidInputError: If the value does not name a known day
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidInputError(f"Unknown day index: {value}", "day") from None

        text = str(value).strip().lower()
        if text in DAY_NAMES:
            return cls(DAY_NAMES.index(text))
        if text in DAY_ABBREVIATIONS:
            return cls(DAY_ABBREVIATIONS.index(text))

        raise InvalidInputError(f"Unknown day: '{value}'", "day")

    @property
    def label(self) -> str:
        """Human readable name (e.g., 'Monday')."""
        return self.name.capitalize()


class ActivityType(str, Enum):
    """Kind of meeting inside a section."""

    LECTURE = "lecture"
    LAB = "lab"
    TUTORIAL = "tutorial"
    WORKSHOP = "workshop"
    FIELDWORK = "fieldwork"
    PRACTICUM = "practicum"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "ActivityType | str") -> "ActivityType":
        """Parse an activity type from its value, case-insensitive."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidInputError(
                f"Unknown activity type: '{value}'. "
                f"Expected: {', '.join(t.value for t in cls)}",
                "activity_type",
            ) from None


@dataclass(frozen=True)
class TimeBlock:
    """One (day, period) cell of the week."""

    day: Day
    period: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a TimeBlock from {"day": ..., "period": ...}."""
        day = Day.parse(data.get("day", ""))
        try:
            period = int(data.get("period"))
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"Invalid period: '{data.get('period')}'", "period"
            ) from None
        if not MIN_PERIOD <= period <= MAX_PERIOD:
            raise InvalidInputError(
                f"Period {period} outside {MIN_PERIOD}..{MAX_PERIOD}", "period"
            )
        return cls(day=day, period=period)

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day.name.lower(), "period": self.period}

    def __str__(self) -> str:
        return f"{self.day.label[:3]} P{self.period}"


@dataclass
class Activity:
    """A group of blocks of the same type within a section."""

    activity_type: ActivityType
    blocks: list[TimeBlock] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create an Activity from a dictionary."""
        return cls(
            activity_type=ActivityType.parse(data.get("type", data.get("activity_type", ""))),
            blocks=[TimeBlock.from_dict(b) for b in data.get("blocks", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.activity_type.value,
            "blocks": [b.to_dict() for b in self.blocks],
        }


@dataclass
class Section:
    """One offered instance of a course with its own weekly schedule.

    Attributes:
        id: Stable identifier, "CODE-number" (e.g., "MAT1620-1")
        course_code: Code of the owning course
        number: Section number within the course
        activities: Typed sub-schedules (lecture, lab, ...)
        instructor: Optional instructor name
        room: Optional room
    """

    id: str
    course_code: str
    number: int
    activities: list[Activity] = field(default_factory=list)
    instructor: str = ""
    room: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], course_code: str) -> Self:
        """Create a Section from a dictionary.

        The id is derived from the course code and number when missing.
        """
        try:
            number = int(data["number"])
        except (KeyError, TypeError, ValueError):
            raise InvalidInputError(
                f"Section of '{course_code}' has no valid number", "number"
            ) from None

        return cls(
            id=data.get("id") or make_section_id(course_code, number),
            course_code=course_code,
            number=number,
            activities=[Activity.from_dict(a) for a in data.get("activities", [])],
            instructor=data.get("instructor", "") or "",
            room=data.get("room", "") or "",
        )

    @property
    def blocks(self) -> list[TimeBlock]:
        """All blocks across the section's activities."""
        return [block for activity in self.activities for block in activity.blocks]

    @property
    def label(self) -> str:
        """Short label such as 'MAT1620-1'."""
        return f"{self.course_code}-{self.number}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "activities": [a.to_dict() for a in self.activities],
            "instructor": self.instructor,
            "room": self.room,
        }


@dataclass
class Course:
    """A course with all of its candidate sections."""

    code: str
    title: str
    term: str = DEFAULT_TERM
    sections: list[Section] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Course from a dictionary."""
        code = normalize_course_code(data.get("code", ""))
        if not code:
            raise InvalidInputError("Course code is empty", "code")

        course = cls(
            code=code,
            title=data.get("title", "") or "",
            term=data.get("term", DEFAULT_TERM) or DEFAULT_TERM,
            sections=[Section.from_dict(s, code) for s in data.get("sections", [])],
        )

        seen: set[str] = set()
        for section in course.sections:
            if section.id in seen:
                raise InvalidInputError(
                    f"Duplicate section id '{section.id}' in course '{code}'", "sections"
                )
            seen.add(section.id)

        return course

    def get_section(self, section_id: str) -> Section | None:
        """Look up a section by id."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "title": self.title,
            "term": self.term,
            "sections": [s.to_dict() for s in self.sections],
        }
