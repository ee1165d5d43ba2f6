"""Tests for normalization utilities."""

import pytest

from schedule_planner.normalization import (
    make_section_id,
    normalize_course_code,
    normalize_section_id,
)


class TestNormalizeCourseCode:
    """Tests for normalize_course_code."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("MAT1620", "MAT1620"),
            (" mat1620 ", "MAT1620"),
            ("iic 2233", "IIC2233"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_course_code(raw) == expected


class TestMakeSectionId:
    """Tests for make_section_id."""

    def test_basic(self):
        assert make_section_id("MAT1620", 3) == "MAT1620-3"

    def test_normalizes_code(self):
        assert make_section_id(" mat1620", 1) == "MAT1620-1"


class TestNormalizeSectionId:
    """Tests for normalize_section_id."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("EYP1113-2", "EYP1113-S2"),
            ("EYP1113 S2", "EYP1113-S2"),
            ("eyp1113 2", "EYP1113-S2"),
            ("MAT1620-S1", "MAT1620-S1"),
            (" custom-id ", "CUSTOM-ID"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_section_id(raw) == expected
