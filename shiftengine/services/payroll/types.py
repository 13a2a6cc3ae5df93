"""
Internal data types for payroll calculation.
Plain dataclasses, decoupled from the API schemas.
"""

from dataclasses import dataclass, field
from typing import Optional


MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class TimeOfDay:
    """Hour/minute pair. Hours >= 24 place the time on the following day(s)."""
    hour: int
    minute: int = 0

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    @property
    def clock_minutes(self) -> int:
        return self.total_minutes % MINUTES_PER_DAY

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class PayBand:
    """A named clock interval [start, end). end <= start wraps midnight."""
    name: str
    start: TimeOfDay
    end: TimeOfDay
    label: str = ""

    @property
    def wraps_midnight(self) -> bool:
        return self.end.clock_minutes <= self.start.clock_minutes

    @property
    def length_minutes(self) -> int:
        length = self.end.clock_minutes - self.start.clock_minutes
        return length + MINUTES_PER_DAY if length <= 0 else length

    def contains(self, clock_minute: int) -> bool:
        start = self.start.clock_minutes
        end = self.end.clock_minutes
        if self.wraps_midnight:
            return clock_minute >= start or clock_minute < end
        return start <= clock_minute < end


@dataclass
class ShiftSlice:
    """
    Raw segmenter output: one homogeneous stretch of a shift.
    start_minute / end_minute are on the extended timeline (minutes since
    00:00 of the shift's first day).
    """
    band: str
    start_minute: int
    end_minute: int
    rate: float

    @property
    def hours(self) -> float:
        return (self.end_minute - self.start_minute) / 60

    @property
    def payment(self) -> float:
        return self.hours * self.rate


@dataclass
class Segment:
    """Per-band total after merging slices."""
    band: str
    hours: float
    rate: float
    payment: float


@dataclass
class PaymentBreakdown:
    total_hours: float = 0.0
    total_payment: float = 0.0
    segments: list[Segment] = field(default_factory=list)

    def segment_for(self, band: str) -> Optional[Segment]:
        for segment in self.segments:
            if segment.band == band:
                return segment
        return None
