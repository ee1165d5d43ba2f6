"""Normalization utilities for course codes and section identifiers."""

import re

# "EYP1113-S2" (already normalized)
NORMALIZED_SECTION_PATTERN = r"^[A-Z]{2,4}\d{3,4}-S\d+$"

# Accepted raw spellings, each capturing (code, number)
SECTION_ID_PATTERNS = [
    r"^([A-Z]{2,4}\d{3,4})-(\d+)$",  # EYP1113-2
    r"^([A-Z]{2,4}\d{3,4})\s+S(\d+)$",  # EYP1113 S2
    r"^([A-Z]{2,4}\d{3,4})\s+(\d+)$",  # EYP1113 2
]


def normalize_course_code(code: str) -> str:
    """Normalize a course code: upper case, no whitespace.

    Args:
        code: Raw course code (e.g., " mat 1620 ")

    Returns:
        Normalized code (e.g., "MAT1620"), or "" for empty input
    """
    if not code:
        return ""
    return re.sub(r"\s+", "", str(code)).upper()


def make_section_id(course_code: str, number: int) -> str:
    """Build the stable section id from a course code and section number."""
    return f"{normalize_course_code(course_code)}-{number}"


def normalize_section_id(section_id: str) -> str:
    """Normalize a section id to the "CODE-S<n>" display form.

    Examples:
        "EYP1113-2"  -> "EYP1113-S2"
        "EYP1113 S2" -> "EYP1113-S2"
        "eyp1113 2"  -> "EYP1113-S2"
        "MAT1620-S1" -> "MAT1620-S1"

    Unrecognized ids are returned upper-cased and trimmed.
    """
    if not section_id:
        return ""

    cleaned = str(section_id).strip().upper()

    if re.match(NORMALIZED_SECTION_PATTERN, cleaned):
        return cleaned

    for pattern in SECTION_ID_PATTERNS:
        match = re.match(pattern, cleaned)
        if match:
            return f"{match.group(1)}-S{match.group(2)}"

    return cleaned
