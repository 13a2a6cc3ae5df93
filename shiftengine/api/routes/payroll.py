from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shiftengine.api.deps import get_settings
from shiftengine.core.config import Settings
from shiftengine.schemas.payroll import (
    PayBandResponse,
    PaymentBreakdownResponse,
    PeriodPaymentRequest,
    SegmentResponse,
    ShiftPaymentRequest,
)
from shiftengine.services.payroll import (
    DEFAULT_PAY_BANDS,
    InvalidTimeError,
    PaymentBreakdown,
    band_label,
    calculate_period_payment,
    calculate_shift_payment,
    generate_default_hourly_rates,
)

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _to_response(breakdown: PaymentBreakdown) -> PaymentBreakdownResponse:
    return PaymentBreakdownResponse(
        total_hours=breakdown.total_hours,
        total_payment=breakdown.total_payment,
        breakdown=[
            SegmentResponse(
                band=s.band,
                label=band_label(s.band),
                hours=s.hours,
                rate=s.rate,
                payment=s.payment,
            )
            for s in breakdown.segments
        ],
    )


def _fallback_rate(value: Optional[float], app_settings: Settings) -> float:
    return value if value is not None else app_settings.DEFAULT_FALLBACK_RATE


@router.post("/calculate", response_model=PaymentBreakdownResponse)
def calculate_payment(
    payload: ShiftPaymentRequest,
    app_settings: Settings = Depends(get_settings),
):
    """Pay for one shift split by pay band. An end earlier than the start crosses midnight."""
    try:
        breakdown = calculate_shift_payment(
            payload.start_time,
            payload.end_time,
            payload.hourly_rates,
            _fallback_rate(payload.fallback_rate, app_settings),
        )
    except InvalidTimeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return _to_response(breakdown)


@router.post("/calculate-period", response_model=PaymentBreakdownResponse)
def calculate_period(
    payload: PeriodPaymentRequest,
    app_settings: Settings = Depends(get_settings),
):
    """Totals for several shifts, merged by pay band"""
    try:
        breakdown = calculate_period_payment(
            [(s.start_time, s.end_time) for s in payload.shifts],
            payload.hourly_rates,
            _fallback_rate(payload.fallback_rate, app_settings),
        )
    except InvalidTimeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return _to_response(breakdown)


@router.get("/bands", response_model=List[PayBandResponse])
def list_pay_bands():
    return [
        PayBandResponse(name=b.name, label=b.label, start=str(b.start), end=str(b.end))
        for b in DEFAULT_PAY_BANDS.bands
    ]


@router.get("/default-rates", response_model=Dict[str, float])
def default_rates(base_rate: float = Query(..., alias="baseRate", ge=0)):
    return generate_default_hourly_rates(base_rate)
