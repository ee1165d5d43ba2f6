"""Tests for conflict diagnostics."""

from schedule_planner.generator.diagnostics import (
    ConflictStats,
    _round_percentage,
    build_top_pairs,
    make_pair_key,
    split_pair_key,
)
from schedule_planner.models import Day


class TestPairKey:
    """Tests for pair key helpers."""

    def test_order_independent(self):
        assert make_pair_key("MAT1620", "IIC2233") == "IIC2233|MAT1620"
        assert make_pair_key("IIC2233", "MAT1620") == "IIC2233|MAT1620"

    def test_split(self):
        assert split_pair_key("IIC2233|MAT1620") == ("IIC2233", "MAT1620")


class TestConflictStats:
    """Tests for ConflictStats counters."""

    def test_initially_empty(self):
        stats = ConflictStats()
        assert stats.total == 0
        assert not stats

    def test_record_aggregates_both_directions(self):
        stats = ConflictStats()
        stats.record("MAT1620", "MAT1620-1", "IIC2233", "IIC2233-1", Day.MONDAY, 1)
        stats.record("IIC2233", "IIC2233-2", "MAT1620", "MAT1620-1", Day.MONDAY, 1)

        assert stats.total == 2
        assert stats.count_by_pair == {"IIC2233|MAT1620": 2}
        assert stats.count_by_pair_slot[("IIC2233|MAT1620", Day.MONDAY, 1)] == 2

    def test_first_example_is_kept(self):
        stats = ConflictStats()
        stats.record("MAT1620", "MAT1620-1", "IIC2233", "IIC2233-1", Day.MONDAY, 1)
        stats.record("MAT1620", "MAT1620-2", "IIC2233", "IIC2233-3", Day.TUESDAY, 4)

        example = stats.example_by_pair["IIC2233|MAT1620"]
        assert example.section_a == "MAT1620-S1"
        assert example.section_b == "IIC2233-S1"
        assert (example.day, example.period) == (Day.MONDAY, 1)

    def test_peak_slot(self):
        stats = ConflictStats()
        stats.record("A", "A-1", "B", "B-1", Day.MONDAY, 1)
        stats.record("A", "A-2", "B", "B-1", Day.FRIDAY, 3)
        stats.record("A", "A-3", "B", "B-1", Day.FRIDAY, 3)
        assert stats.peak_slot("A|B") == (Day.FRIDAY, 3)

    def test_peak_slot_tie_keeps_first(self):
        stats = ConflictStats()
        stats.record("A", "A-1", "B", "B-1", Day.THURSDAY, 6)
        stats.record("A", "A-2", "B", "B-1", Day.MONDAY, 2)
        assert stats.peak_slot("A|B") == (Day.THURSDAY, 6)

    def test_peak_slot_unknown_pair(self):
        assert ConflictStats().peak_slot("X|Y") == (Day.MONDAY, 1)


class TestBuildTopPairs:
    """Tests for build_top_pairs."""

    def test_empty_stats(self):
        assert build_top_pairs(ConflictStats()) == []

    def test_single_pair(self):
        stats = ConflictStats()
        stats.record("MAT1620", "MAT1620-1", "IIC2233", "IIC2233-1", Day.MONDAY, 1)

        [pair] = build_top_pairs(stats)
        assert pair.pair_key == "IIC2233|MAT1620"
        assert (pair.course_a, pair.course_b) == ("IIC2233", "MAT1620")
        assert pair.percentage == 100.0
        assert pair.peak_day == Day.MONDAY
        assert pair.peak_period == 1
        assert pair.example.section_a == "MAT1620-S1"

    def test_ranking_limit_and_ties(self):
        stats = ConflictStats()
        for _ in range(3):
            stats.record("C", "C-1", "D", "D-1", Day.MONDAY, 1)
        stats.record("A", "A-1", "B", "B-1", Day.MONDAY, 2)
        stats.record("E", "E-1", "F", "F-1", Day.MONDAY, 3)
        stats.record("G", "G-1", "H", "H-1", Day.MONDAY, 4)

        pairs = build_top_pairs(stats)
        assert [p.pair_key for p in pairs] == ["C|D", "A|B", "E|F"]
        assert [p.percentage for p in pairs] == [50.0, 16.7, 16.7]

        assert len(build_top_pairs(stats, limit=1)) == 1

    def test_percentage_rounds_half_up(self):
        assert _round_percentage(12.25) == 12.3
        assert _round_percentage(33.333) == 33.3
        assert _round_percentage(66.666) == 66.7

    def test_to_dict(self):
        stats = ConflictStats()
        stats.record("MAT1620", "MAT1620-1", "IIC2233", "IIC2233-1", Day.WEDNESDAY, 2)
        data = build_top_pairs(stats)[0].to_dict()
        assert data["peak_day"] == "wednesday"
        assert data["example"] == {
            "section_a": "MAT1620-S1",
            "section_b": "IIC2233-S1",
            "day": "wednesday",
            "period": 2,
        }
