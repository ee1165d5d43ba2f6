"""Custom exceptions for the schedule planner."""

from pathlib import Path


class PlannerError(Exception):
    """Base exception for planner errors."""

    pass


class InvalidInputError(PlannerError):
    """Input data is malformed (bad block, unknown day, empty course list)."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        location = f" ({field})" if field else ""
        super().__init__(f"Invalid input{location}: {message}")


class EmptyCandidatePoolError(PlannerError):
    """A course has no eligible sections left after filtering."""

    def __init__(self, course_code: str, requested_ids: list[str] | None = None):
        self.course_code = course_code
        self.requested_ids = requested_ids or []
        message = f"Course '{course_code}' has no eligible sections"
        if self.requested_ids:
            message += f". Filter requested: {', '.join(self.requested_ids)}"
        super().__init__(message)


class CatalogError(PlannerError):
    """A course catalog file could not be read or parsed."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to load catalog '{self.path}': {reason}")
