"""Test fixtures for schedule planner tests."""

import json

import pytest

from schedule_planner.models import Activity, ActivityType, Course, Day, Section, TimeBlock
from schedule_planner.normalization import make_section_id


def _build_section(code, number, *activities, instructor=""):
    """Build a section from (activity_type, [(day, period), ...]) tuples."""
    return Section(
        id=make_section_id(code, number),
        course_code=code,
        number=number,
        activities=[
            Activity(
                activity_type=ActivityType.parse(activity_type),
                blocks=[TimeBlock(day=day, period=period) for day, period in blocks],
            )
            for activity_type, blocks in activities
        ],
        instructor=instructor,
    )


def _build_course(code, *sections, title=""):
    return Course(code=code, title=title or f"Course {code}", sections=list(sections))


@pytest.fixture
def make_section():
    """Factory: make_section("MAT1620", 1, ("lecture", [(Day.MONDAY, 1)]))."""
    return _build_section


@pytest.fixture
def make_course():
    """Factory: make_course("MAT1620", section, section, ...)."""
    return _build_course


@pytest.fixture
def non_overlapping_courses():
    """Two single-section courses on different days."""
    return [
        _build_course("MAT1620", _build_section("MAT1620", 1, ("lecture", [(Day.MONDAY, 1)]))),
        _build_course("IIC2233", _build_section("IIC2233", 1, ("lecture", [(Day.TUESDAY, 1)]))),
    ]


@pytest.fixture
def clashing_courses():
    """Two single-section courses both on Monday period 1."""
    return [
        _build_course("MAT1620", _build_section("MAT1620", 1, ("lecture", [(Day.MONDAY, 1)]))),
        _build_course("IIC2233", _build_section("IIC2233", 1, ("lecture", [(Day.MONDAY, 1)]))),
    ]


@pytest.fixture
def sample_catalog_dict():
    """Course catalog in the JSON document format."""
    return {
        "courses": [
            {
                "code": "mat1620",
                "title": "Calculus II",
                "term": "2026-1",
                "sections": [
                    {
                        "number": 1,
                        "instructor": "Ana Rojas",
                        "activities": [
                            {
                                "type": "lecture",
                                "blocks": [
                                    {"day": "monday", "period": 1},
                                    {"day": "wednesday", "period": 1},
                                ],
                            },
                            {"type": "tutorial", "blocks": [{"day": "friday", "period": 3}]},
                        ],
                    },
                    {
                        "number": 2,
                        "activities": [
                            {"type": "lecture", "blocks": [{"day": "tue", "period": 2}]},
                        ],
                    },
                ],
            },
            {
                "code": "IIC2233",
                "title": "Advanced Programming",
                "sections": [
                    {
                        "number": 1,
                        "activities": [
                            {"type": "lecture", "blocks": [{"day": "monday", "period": 1}]},
                            {"type": "lab", "blocks": [{"day": "thursday", "period": 5}]},
                        ],
                    },
                ],
            },
        ]
    }


@pytest.fixture
def sample_catalog_json(tmp_path, sample_catalog_dict):
    """Path of a JSON catalog file written from sample_catalog_dict."""
    path = tmp_path / "courses.json"
    path.write_text(json.dumps(sample_catalog_dict), encoding="utf-8")
    return path


@pytest.fixture
def sample_catalog_csv(tmp_path):
    """Path of a tabular catalog with one row per weekly meeting."""
    path = tmp_path / "courses.csv"
    path.write_text(
        "course_code,section,activity_type,day,periods,title,instructor,room\n"
        "MAT1620,1,lecture,monday,\"1,2\",Calculus II,Ana Rojas,B12\n"
        "MAT1620,1,tutorial,friday,3,Calculus II,Ana Rojas,B12\n"
        "MAT1620,2,lecture,tuesday,1,Calculus II,Luis Soto,\n"
        "iic2233,1,lab,thursday,5,Advanced Programming,,\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_api_payload():
    """Raw course-search API response."""
    return {
        "data": [
            {
                "sigla": "MAT1620",
                "seccion": 1,
                "nombre": "Cálculo II",
                "profesor": "Rojas Ana",
                "horarios": [
                    {"tipo": "CLAS", "dia": "Lunes", "modulos": [1, 2], "sala": "B12"},
                    {"tipo": "AYU", "dia": "Viernes", "modulos": [3]},
                ],
            },
            {
                "sigla": "MAT1620",
                "seccion": 2,
                "nombre": "Cálculo II",
                "horarios": [
                    {"tipo": "CLAS", "dia": "Miércoles", "modulos": [4, 9]},
                ],
            },
            {
                "sigla": "IIC2233",
                "seccion": 1,
                "nombre": "Programación Avanzada",
                "horarios": [
                    {"tipo": "LAB", "dia": "Jueves", "modulos": [5]},
                    {"tipo": "XYZ", "dia": "Martes", "modulos": [6]},
                ],
            },
        ],
        "meta": {"semestre": "2026-2"},
    }
