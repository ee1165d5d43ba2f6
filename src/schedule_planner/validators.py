"""Validation logic for course catalog data."""

import re

import pandas as pd

from .constants import (
    COURSE_CODE_MAX_LENGTH,
    COURSE_CODE_MIN_LENGTH,
    COURSE_CODE_PATTERN,
    MAX_PERIOD,
    MIN_PERIOD,
)
from .exceptions import InvalidInputError
from .models import Activity, Course, Day, Section


def validate_course_code(code: str) -> tuple[bool, str | None]:
    """Validate a course code.

    Expected format: 3 letters followed by letters or digits, 4-10 characters.
    Example: MAT1620, IIC2233, EYP1113

    Args:
        code: Course code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if code is None or pd.isna(code) or not str(code).strip():
        return False, "Course code is empty"

    cleaned = str(code).strip().upper()

    if not COURSE_CODE_MIN_LENGTH <= len(cleaned) <= COURSE_CODE_MAX_LENGTH:
        return False, (
            f"Course code '{cleaned}' must have {COURSE_CODE_MIN_LENGTH}-"
            f"{COURSE_CODE_MAX_LENGTH} characters"
        )

    if not re.match(COURSE_CODE_PATTERN, cleaned):
        return False, f"Course code '{cleaned}' must start with 3 letters followed by letters or digits"

    return True, None


def validate_block(day, period) -> tuple[bool, str | None]:
    """Validate a raw (day, period) pair.

    Args:
        day: Day value (Day, index, name or abbreviation)
        period: Period number, 1-8

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Day.parse(day)
    except InvalidInputError:
        return False, f"Invalid day: '{day}'"

    if period is None or pd.isna(period):
        return False, "Period is empty"

    try:
        p = int(float(period))
    except (ValueError, TypeError):
        return False, f"Invalid period value: '{period}'"

    if not MIN_PERIOD <= p <= MAX_PERIOD:
        return False, f"Period {p} outside {MIN_PERIOD}..{MAX_PERIOD}"

    return True, None


def validate_activity(activity: Activity) -> tuple[bool, list[str]]:
    """Validate an activity: at least one block, every block valid.

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = []

    if not activity.blocks:
        errors.append("Activity must have at least one block")

    for block in activity.blocks:
        valid, msg = validate_block(block.day, block.period)
        if not valid:
            errors.append(msg)

    return len(errors) == 0, errors


def validate_section(section: Section) -> tuple[bool, list[str]]:
    """Validate a section: id, positive number, at least one valid activity.

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = []

    if not section.id or not section.id.strip():
        errors.append("Section id is empty")

    if not isinstance(section.number, int) or section.number < 1:
        errors.append("Section number must be a positive integer")

    if not section.activities:
        errors.append("Section must have at least one activity")

    for i, activity in enumerate(section.activities, start=1):
        valid, activity_errors = validate_activity(activity)
        if not valid:
            errors.append(f"Activity {i}: {', '.join(activity_errors)}")

    return len(errors) == 0, errors


class CourseValidator:
    """Validates a course and all of its sections."""

    def __init__(self, course: Course):
        self.course = course
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate_all(self) -> tuple[bool, list[str], list[str]]:
        """Run all validations on the course.

        Returns:
            Tuple of (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []
        code = self.course.code

        valid, msg = validate_course_code(code)
        if not valid:
            self.errors.append(f"{code}: {msg}")

        if not self.course.title or not self.course.title.strip():
            self.warnings.append(f"{code}: Course title is empty")

        if not self.course.sections:
            self.warnings.append(f"{code}: Course has no sections")

        seen_ids: set[str] = set()
        for section in self.course.sections:
            if section.id in seen_ids:
                self.errors.append(f"{code}: Duplicate section id '{section.id}'")
            seen_ids.add(section.id)

            valid, section_errors = validate_section(section)
            if not valid:
                self.errors.append(f"{section.id}: {', '.join(section_errors)}")

            self._check_redundant_activities(section)

        return len(self.errors) == 0, self.errors, self.warnings

    def _check_redundant_activities(self, section: Section) -> None:
        """Warn when two activities of a section have identical blocks."""
        seen: set[frozenset] = set()
        for activity in section.activities:
            key = frozenset(activity.blocks)
            if key and key in seen:
                self.warnings.append(
                    f"{section.id}: Two activities share identical blocks"
                )
            seen.add(key)


def validate_course(course: Course) -> tuple[bool, list[str], list[str]]:
    """Validate a course. Returns (is_valid, errors, warnings)."""
    return CourseValidator(course).validate_all()
