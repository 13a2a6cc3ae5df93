"""
Payroll service package.

Usage:
    from shiftengine.services.payroll import calculate_shift_payment

    breakdown = calculate_shift_payment("22:00", "06:00", {"night": 1250}, fallback_rate=1000)
    breakdown.total_hours    # 8.0
    breakdown.total_payment  # 10000.0
"""

from .types import (
    TimeOfDay,
    PayBand,
    ShiftSlice,
    Segment,
    PaymentBreakdown,
)
from .timeutils import InvalidTimeError, parse_time_of_day
from .rates import (
    DEFAULT_PAY_BANDS,
    BandConfigurationError,
    PayBandSet,
    band_for_time,
    band_label,
    rate_for_band,
    generate_default_hourly_rates,
)
from .segmenter import segment_shift
from .aggregator import (
    merge_segments,
    aggregate_slices,
    combine_breakdowns,
    calculate_shift_payment,
    calculate_period_payment,
)

__all__ = [
    # Types
    "TimeOfDay",
    "PayBand",
    "ShiftSlice",
    "Segment",
    "PaymentBreakdown",
    "PayBandSet",
    "DEFAULT_PAY_BANDS",
    # Errors
    "InvalidTimeError",
    "BandConfigurationError",
    # Main entry points
    "calculate_shift_payment",
    "calculate_period_payment",
    # Lower-level functions
    "parse_time_of_day",
    "band_for_time",
    "band_label",
    "rate_for_band",
    "generate_default_hourly_rates",
    "segment_shift",
    "merge_segments",
    "aggregate_slices",
    "combine_breakdowns",
]
