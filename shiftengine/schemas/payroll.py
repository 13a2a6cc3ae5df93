from typing import Dict, List, Optional

from pydantic import Field

from shiftengine.schemas.base import CamelModel


class ShiftTimes(CamelModel):
    start_time: str
    end_time: str


class ShiftPaymentRequest(ShiftTimes):
    hourly_rates: Optional[Dict[str, float]] = None
    fallback_rate: Optional[float] = Field(default=None, ge=0)


class PeriodPaymentRequest(CamelModel):
    shifts: List[ShiftTimes]
    hourly_rates: Optional[Dict[str, float]] = None
    fallback_rate: Optional[float] = Field(default=None, ge=0)


class SegmentResponse(CamelModel):
    band: str
    label: str
    hours: float
    rate: float
    payment: float


class PaymentBreakdownResponse(CamelModel):
    total_hours: float
    total_payment: float
    breakdown: List[SegmentResponse]


class PayBandResponse(CamelModel):
    name: str
    label: str
    start: str
    end: str
