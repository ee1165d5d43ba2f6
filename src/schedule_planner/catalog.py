"""Course catalog loaders.

Three sources are supported, all producing ``Course`` models:
- JSON documents in the ``Course.to_dict`` format
- CSV/Excel tables with one row per weekly meeting (read with pandas)
- Raw section records returned by the university course-search API
"""

import json
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from .constants import DEFAULT_TERM, MAX_PERIOD, MIN_PERIOD
from .exceptions import CatalogError, InvalidInputError
from .models import Activity, ActivityType, Course, Day, Section, TimeBlock
from .normalization import make_section_id, normalize_course_code
from .validators import validate_block, validate_course_code

logger = logging.getLogger(__name__)

# Columns of the tabular catalog format
REQUIRED_COLUMNS = ["course_code", "section", "activity_type", "day", "periods"]
OPTIONAL_COLUMNS = ["title", "instructor", "room", "term"]

TABLE_SUFFIXES = {".csv": "csv", ".xlsx": "excel", ".xls": "excel"}

# Course-search API codes
API_ACTIVITY_TYPES = {
    "CLAS": ActivityType.LECTURE,
    "AYU": ActivityType.TUTORIAL,
    "LAB": ActivityType.LAB,
    "TAL": ActivityType.WORKSHOP,
    "TER": ActivityType.FIELDWORK,
    "PRA": ActivityType.PRACTICUM,
}

API_DAYS = {
    "lunes": Day.MONDAY,
    "martes": Day.TUESDAY,
    "miércoles": Day.WEDNESDAY,
    "miercoles": Day.WEDNESDAY,
    "jueves": Day.THURSDAY,
    "viernes": Day.FRIDAY,
    "sábado": Day.SATURDAY,
    "sabado": Day.SATURDAY,
}


@dataclass
class CatalogLoadResult:
    """Courses read from a tabular catalog plus row-level problems."""

    courses: list[Course] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_sections(self) -> int:
        return sum(len(c.sections) for c in self.courses)


def load_courses_json(path: Path | str) -> list[Course]:
    """Load courses from a JSON catalog.

    Accepts either {"courses": [...]} or a bare list of course objects.

    Raises:
        CatalogError: If the file cannot be read or a record is malformed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(path, str(e)) from e

    records = data.get("courses", []) if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise CatalogError(path, "expected a list of courses")

    try:
        courses = [Course.from_dict(record) for record in records]
    except InvalidInputError as e:
        raise CatalogError(path, str(e)) from e

    logger.info(f"Loaded {len(courses)} courses from {path.name}")
    return courses


def save_courses_json(courses: Sequence[Course], path: Path | str) -> None:
    """Write courses to a JSON catalog readable by load_courses_json."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump({"courses": [c.to_dict() for c in courses]}, f, ensure_ascii=False, indent=2)


def parse_periods(value: Any) -> list[int]:
    """Parse a periods cell such as "1,2", "3;4", 5 or 5.0 into ints.

    Raises:
        ValueError: If any item is not a number
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return []
    if isinstance(value, (int, float)):
        return [int(value)]
    return [int(float(item)) for item in re.split(r"[,;\s]+", str(value).strip()) if item]


def _cell(row: pd.Series, column: str) -> str:
    """String value of an optional cell, empty for NaN/missing."""
    if column not in row.index:
        return ""
    value = row[column]
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def _read_table(path: Path) -> pd.DataFrame:
    kind = TABLE_SUFFIXES.get(path.suffix.lower())
    if kind is None:
        raise CatalogError(path, f"unsupported file type '{path.suffix}'")
    try:
        if kind == "csv":
            df = pd.read_csv(path, dtype=str)
        else:
            df = pd.read_excel(path, dtype=str, engine="openpyxl")
    except Exception as e:
        raise CatalogError(path, f"failed to read table: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogError(path, f"missing columns: {', '.join(missing)}")
    return df


def load_courses_table(path: Path | str) -> CatalogLoadResult:
    """Load courses from a CSV or Excel table with one row per meeting.

    Columns: course_code, section, activity_type, day, periods
    (required) and title, instructor, room, term (optional). Rows sharing a
    course code and section number form one section; rows of the same
    activity type within a section form one activity. Invalid rows are
    skipped and reported as errors.

    Raises:
        CatalogError: If the file cannot be read or lacks required columns
    """
    path = Path(path)
    df = _read_table(path)
    result = CatalogLoadResult()

    courses: dict[str, Course] = {}
    sections: dict[tuple[str, int], Section] = {}

    for index, row in df.iterrows():
        row_number = int(index) + 2  # header is row 1

        code = normalize_course_code(_cell(row, "course_code"))
        valid, msg = validate_course_code(code)
        if not valid:
            result.errors.append(f"Row {row_number}: {msg}")
            continue

        try:
            number = int(float(_cell(row, "section")))
            activity_type = ActivityType.parse(_cell(row, "activity_type"))
            periods = parse_periods(_cell(row, "periods"))
        except (ValueError, InvalidInputError) as e:
            result.errors.append(f"Row {row_number}: {e}")
            continue

        day_value = _cell(row, "day")
        bad = [msg for valid, msg in (validate_block(day_value, p) for p in periods) if not valid]
        if not periods:
            bad.append("No periods given")
        if bad:
            result.errors.append(f"Row {row_number}: {'; '.join(bad)}")
            continue
        day = Day.parse(day_value)

        course = courses.get(code)
        if course is None:
            course = Course(code=code, title=_cell(row, "title"), term=_cell(row, "term") or DEFAULT_TERM)
            courses[code] = course
        elif not course.title:
            course.title = _cell(row, "title")

        section = sections.get((code, number))
        if section is None:
            section = Section(
                id=make_section_id(code, number),
                course_code=code,
                number=number,
                instructor=_cell(row, "instructor"),
                room=_cell(row, "room"),
            )
            sections[(code, number)] = section
            course.sections.append(section)

        activity = next(
            (a for a in section.activities if a.activity_type == activity_type), None
        )
        if activity is None:
            activity = Activity(activity_type=activity_type)
            section.activities.append(activity)

        for period in periods:
            block = TimeBlock(day=day, period=period)
            if block not in activity.blocks:
                activity.blocks.append(block)

    result.courses = list(courses.values())
    for course in result.courses:
        if not course.title:
            result.warnings.append(f"{course.code}: Course title is empty")

    if result.errors:
        logger.warning(f"Skipped {len(result.errors)} invalid rows in {path.name}")
    logger.info(
        f"Loaded {len(result.courses)} courses ({result.total_sections} sections) from {path.name}"
    )
    return result


def section_from_api_record(record: dict[str, Any]) -> Section:
    """Convert one course-search API section record to a Section.

    Schedule entries are grouped by activity type in first-seen order;
    periods outside 1..8 are discarded.
    """
    code = normalize_course_code(record.get("sigla", ""))
    number = int(record.get("seccion", 0))
    schedule = record.get("horarios", []) or []

    blocks_by_type: dict[ActivityType, list[TimeBlock]] = {}
    for entry in schedule:
        raw_type = str(entry.get("tipo", "")).upper()
        activity_type = API_ACTIVITY_TYPES.get(raw_type)
        if activity_type is None:
            logger.warning(f"Unknown activity type '{raw_type}' in {code}-{number}, using 'other'")
            activity_type = ActivityType.OTHER

        day = API_DAYS.get(str(entry.get("dia", "")).strip().lower())
        if day is None:
            logger.warning(f"Unknown day '{entry.get('dia')}' in {code}-{number}, skipping entry")
            continue

        blocks = blocks_by_type.setdefault(activity_type, [])
        for period in entry.get("modulos", []) or []:
            if MIN_PERIOD <= int(period) <= MAX_PERIOD:
                blocks.append(TimeBlock(day=day, period=int(period)))

    room = (schedule[0].get("sala") if schedule else None) or ""

    return Section(
        id=make_section_id(code, number),
        course_code=code,
        number=number,
        activities=[
            Activity(activity_type=t, blocks=blocks) for t, blocks in blocks_by_type.items() if blocks
        ],
        instructor=record.get("profesor", "") or "",
        room=room,
    )


def courses_from_api_payload(payload: dict[str, Any] | list[dict[str, Any]], term: str = DEFAULT_TERM) -> list[Course]:
    """Group course-search API section records into courses.

    Args:
        payload: Either the full API response ({"data": [...], "meta": {...}})
                 or the bare list of section records
        term: Term to assign when the response has no meta.semestre

    Returns:
        Courses in first-seen order
    """
    if isinstance(payload, dict):
        records = payload.get("data", []) or []
        term = (payload.get("meta") or {}).get("semestre", term) or term
    else:
        records = payload

    courses: dict[str, Course] = {}
    for record in records:
        section = section_from_api_record(record)
        course = courses.get(section.course_code)
        if course is None:
            course = Course(code=section.course_code, title=record.get("nombre", "") or "", term=term)
            courses[section.course_code] = course
        course.sections.append(section)

    return list(courses.values())


def merge_courses(existing: Iterable[Course], new: Iterable[Course]) -> list[Course]:
    """Merge course lists by code; courses from ``new`` replace older ones."""
    merged: dict[str, Course] = {c.code: c for c in existing}
    for course in new:
        merged[course.code] = course
    return list(merged.values())


def load_catalog(path: Path | str) -> CatalogLoadResult:
    """Load any supported catalog file based on its extension."""
    path = Path(path)
    if not path.exists():
        raise CatalogError(path, "file not found")
    if path.suffix.lower() == ".json":
        return CatalogLoadResult(courses=load_courses_json(path))
    return load_courses_table(path)
