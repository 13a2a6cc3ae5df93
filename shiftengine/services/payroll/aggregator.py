"""
Payroll aggregation.
Folds segmenter slices into per-band segments and reconciled totals.
"""

from typing import Iterable, Mapping, Optional, Sequence, Union

from .rates import DEFAULT_PAY_BANDS, PayBandSet
from .segmenter import TimeInput, segment_shift
from .types import PaymentBreakdown, Segment, ShiftSlice


def merge_segments(items: Iterable[Union[ShiftSlice, Segment]]) -> list[Segment]:
    """
    Merge entries sharing a band, whether or not they are contiguous.
    Order follows each band's first appearance. Merging an already merged
    list returns an equal list.
    """
    merged: dict[str, Segment] = {}
    for item in items:
        existing = merged.get(item.band)
        if existing is None:
            merged[item.band] = Segment(
                band=item.band,
                hours=item.hours,
                rate=item.rate,
                payment=item.payment,
            )
        else:
            existing.hours += item.hours
            existing.payment += item.payment
    return list(merged.values())


def aggregate_slices(slices: Sequence[ShiftSlice]) -> PaymentBreakdown:
    # Totals come from the raw slices; merged segments are a view over them.
    return PaymentBreakdown(
        total_hours=sum(s.hours for s in slices),
        total_payment=sum(s.payment for s in slices),
        segments=merge_segments(slices),
    )


def combine_breakdowns(breakdowns: Iterable[PaymentBreakdown]) -> PaymentBreakdown:
    """Sum several breakdowns into one, merging their segments by band."""
    breakdowns = list(breakdowns)
    return PaymentBreakdown(
        total_hours=sum(b.total_hours for b in breakdowns),
        total_payment=sum(b.total_payment for b in breakdowns),
        segments=merge_segments(s for b in breakdowns for s in b.segments),
    )


def calculate_shift_payment(
    start_time: TimeInput,
    end_time: TimeInput,
    rates: Optional[Mapping[str, float]] = None,
    fallback_rate: float = 0.0,
    bands: PayBandSet = DEFAULT_PAY_BANDS,
) -> PaymentBreakdown:
    """
    Pay for one shift, split by pay band.

    Example:
        calculate_shift_payment("20:00", "07:00", {"day": 1000, "night": 1250})
        -> evening 2h @1000, night 8h @1250, morning 1h @fallback
    """
    slices = segment_shift(start_time, end_time, rates, fallback_rate, bands)
    return aggregate_slices(slices)


def calculate_period_payment(
    shifts: Iterable[tuple[TimeInput, TimeInput]],
    rates: Optional[Mapping[str, float]] = None,
    fallback_rate: float = 0.0,
    bands: PayBandSet = DEFAULT_PAY_BANDS,
) -> PaymentBreakdown:
    """Pay for several (start, end) shifts of one employee."""
    return combine_breakdowns(
        calculate_shift_payment(start, end, rates, fallback_rate, bands)
        for start, end in shifts
    )
