"""Schedule Planner - conflict-free class schedule combinations.

This package helps a student assemble a weekly class schedule: it loads
course sections with their recurring weekly blocks and enumerates every
combination of one section per course that does not overlap.

Example usage:
    from schedule_planner import generate, load_courses_json, summarize

    courses = load_courses_json("courses.json")
    outcome = generate(courses, max_results=50)

    for result in outcome.results:
        print(summarize(result).description)

    if outcome.diagnostics:
        for pair in outcome.diagnostics:
            print(f"{pair.course_a} vs {pair.course_b}: {pair.percentage}%")
"""

from .catalog import (
    CatalogLoadResult,
    courses_from_api_payload,
    load_catalog,
    load_courses_json,
    load_courses_table,
    merge_courses,
    save_courses_json,
)
from .exceptions import (
    CatalogError,
    EmptyCandidatePoolError,
    InvalidInputError,
    PlannerError,
)
from .generator import (
    CancellationToken,
    GenerationOutcome,
    GenerationResult,
    OverridePolicy,
    TopPair,
    generate,
    summarize,
)
from .models import Activity, ActivityType, Course, Day, Section, TimeBlock
from .validators import validate_course

__version__ = "0.1.0"

__all__ = [
    # Generation
    "generate",
    "summarize",
    "CancellationToken",
    "OverridePolicy",
    "GenerationOutcome",
    "GenerationResult",
    "TopPair",
    # Models
    "Activity",
    "ActivityType",
    "Course",
    "Day",
    "Section",
    "TimeBlock",
    # Catalog
    "CatalogLoadResult",
    "courses_from_api_payload",
    "load_catalog",
    "load_courses_json",
    "load_courses_table",
    "merge_courses",
    "save_courses_json",
    "validate_course",
    # Exceptions
    "PlannerError",
    "InvalidInputError",
    "EmptyCandidatePoolError",
    "CatalogError",
]
