import pytest

from shiftengine.services.payroll.aggregator import (
    aggregate_slices,
    calculate_period_payment,
    calculate_shift_payment,
    combine_breakdowns,
    merge_segments,
)
from shiftengine.services.payroll.segmenter import segment_shift


RATES = {"day": 1000, "night": 1250}


class TestCalculateShiftPayment:
    def test_day_shift(self):
        result = calculate_shift_payment("09:00", "17:00", fallback_rate=1000)
        assert len(result.segments) == 1
        segment = result.segments[0]
        assert segment.band == "day"
        assert segment.hours == 8.0
        assert segment.payment == 8000
        assert result.total_payment == 8000

    def test_day_shift_running_into_evening(self):
        result = calculate_shift_payment("09:00", "18:00", fallback_rate=1000)
        assert [s.band for s in result.segments] == ["day", "evening"]
        assert result.segment_for("day").hours == 8.0
        assert result.segment_for("evening").hours == 1.0
        assert result.total_hours == 9.0
        assert result.total_payment == 9000

    def test_night_shift_with_night_rate(self):
        result = calculate_shift_payment("22:00", "06:00", {"night": 1250}, fallback_rate=1000)
        assert len(result.segments) == 1
        assert result.segments[0].band == "night"
        assert result.segments[0].hours == 8.0
        assert result.segments[0].payment == 10000
        assert result.total_payment == 10000

    def test_evening_to_morning(self):
        result = calculate_shift_payment("20:00", "07:00", RATES, fallback_rate=1000)
        assert [s.band for s in result.segments] == ["evening", "night", "morning"]
        assert result.segment_for("evening").hours == 2.0
        assert result.segment_for("evening").rate == 1000  # day rate
        assert result.segment_for("night").hours == 8.0
        assert result.segment_for("night").rate == 1250
        assert result.segment_for("morning").hours == 1.0
        assert result.total_hours == 11.0
        assert result.total_payment == pytest.approx(2000 + 10000 + 1000)

    def test_zero_length(self):
        result = calculate_shift_payment("13:00", "13:00", RATES, fallback_rate=1000)
        assert result.segments == []
        assert result.total_hours == 0
        assert result.total_payment == 0

    def test_no_rates_no_fallback_is_unpaid(self):
        result = calculate_shift_payment("09:00", "10:00")
        assert result.total_hours == 1.0
        assert result.total_payment == 0

    def test_repeated_band_merged(self):
        result = calculate_shift_payment("04:00", "23:00", RATES, fallback_rate=900)
        night = result.segment_for("night")
        assert [s.band for s in result.segments].count("night") == 1
        assert night.hours == 3.0  # 04-06 and 22-23
        assert night.payment == pytest.approx(3 * 1250)

    @pytest.mark.parametrize("start,end,expected_hours", [
        ("09:00", "17:00", 8.0),
        ("06:30", "21:15", 14.75),
        ("00:00", "23:59", 23 + 59 / 60),
        ("23:00", "01:00", 2.0),
        ("18:00", "09:00", 15.0),
        ("12:00", "11:30", 23.5),
    ])
    def test_totals_reconcile(self, start, end, expected_hours):
        rates = {"morning": 1100, "day": 1000, "night": 1300}
        result = calculate_shift_payment(start, end, rates, fallback_rate=950)
        assert result.total_hours == pytest.approx(expected_hours)
        assert sum(s.hours for s in result.segments) == pytest.approx(result.total_hours)
        assert sum(s.payment for s in result.segments) == pytest.approx(result.total_payment)


class TestMergeSegments:
    def test_merge_is_idempotent(self):
        slices = segment_shift("04:00", "23:00", RATES, 900)
        merged = merge_segments(slices)
        assert merge_segments(merged) == merged

    def test_merge_keeps_first_appearance_order(self):
        slices = segment_shift("21:00", "10:00", RATES, 900)
        assert [s.band for s in merge_segments(slices)] == ["evening", "night", "morning", "day"]

    def test_aggregate_totals_from_slices(self):
        slices = segment_shift("20:00", "07:00", RATES, 1000)
        breakdown = aggregate_slices(slices)
        assert breakdown.total_hours == sum(s.hours for s in slices)


class TestPeriodPayment:
    def test_multiple_shifts(self):
        result = calculate_period_payment(
            [("09:00", "17:00"), ("22:00", "06:00"), ("09:00", "13:00")],
            RATES,
            fallback_rate=900,
        )
        assert result.total_hours == 20.0
        assert result.segment_for("day").hours == 12.0
        assert result.segment_for("night").hours == 8.0
        assert result.total_payment == pytest.approx(12 * 1000 + 8 * 1250)

    def test_combining_combined_breakdown_is_fixed_point(self):
        once = calculate_period_payment([("20:00", "07:00"), ("04:00", "10:00")], RATES, 900)
        twice = combine_breakdowns([once])
        assert twice.segments == once.segments
        assert twice.total_hours == once.total_hours

    def test_empty_period(self):
        result = calculate_period_payment([], RATES, 900)
        assert result.total_hours == 0
        assert result.segments == []
