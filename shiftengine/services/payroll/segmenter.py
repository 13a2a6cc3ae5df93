"""
Interval segmentation.
Walks pay-band boundaries from a shift's start to its end and emits one
slice per band stretch, including shifts that cross midnight.
"""

import logging
from typing import Mapping, Optional, Union

from .rates import DEFAULT_PAY_BANDS, PayBandSet, rate_for_band
from .timeutils import InvalidTimeError, parse_time_of_day
from .types import MINUTES_PER_DAY, ShiftSlice, TimeOfDay


logger = logging.getLogger(__name__)

TimeInput = Union[str, TimeOfDay]


def _as_time(value: TimeInput, allow_extended: bool = False) -> TimeOfDay:
    if isinstance(value, TimeOfDay):
        # Only the end may run past 24:00
        if value.hour > 23 and not allow_extended:
            raise InvalidTimeError(f"Invalid hour in '{value}'")
        return value
    return parse_time_of_day(value, allow_extended=allow_extended)


def normalize_interval(start: TimeOfDay, end: TimeOfDay) -> tuple[int, int]:
    """
    Place start and end on one extended timeline (minutes).

    An end on the clock that is earlier than the start is taken to be on
    the following day. An end already past 24:00 is left as given. Equal
    start and end is a zero-length shift.
    """
    start_minute = start.clock_minutes
    end_minute = end.total_minutes

    if end.hour < 24 and end_minute < start_minute:
        end_minute += MINUTES_PER_DAY

    return start_minute, end_minute


def segment_shift(
    start_time: TimeInput,
    end_time: TimeInput,
    rates: Optional[Mapping[str, float]] = None,
    fallback_rate: float = 0.0,
    bands: PayBandSet = DEFAULT_PAY_BANDS,
) -> list[ShiftSlice]:
    """
    Split a shift into raw, unmerged slices, ordered by start.

    Slices are contiguous, the first starts at start_time and the last ends
    exactly at end_time. A band crossed twice yields two slices.
    """
    start = _as_time(start_time)
    end = _as_time(end_time, allow_extended=True)
    position, end_minute = normalize_interval(start, end)

    slices: list[ShiftSlice] = []
    while position < end_minute:
        band = bands.band_for_minute(position)
        boundary = min(bands.next_boundary(position), end_minute)
        slices.append(ShiftSlice(
            band=band.name,
            start_minute=position,
            end_minute=boundary,
            rate=rate_for_band(band.name, rates, fallback_rate),
        ))
        position = boundary

    logger.debug(f"Segmented {start}-{end} into {len(slices)} slices")
    return slices
