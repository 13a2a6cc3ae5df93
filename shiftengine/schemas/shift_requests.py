from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import Field

from shiftengine.schemas.base import CamelModel


class ShiftRequestType(str, Enum):
    WORK = "work"
    OFF = "off"
    AVAILABLE = "available"


class ShiftRequestPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ParseMode(str, Enum):
    SINGLE = "single"
    BULK = "bulk"


class TimeSlot(CamelModel):
    start_time: str
    end_time: str


class ShiftRequest(CamelModel):
    """
    One structured request extracted from free text.
    date is an ISO-style YYYY-MM-DD string; it is not checked against the calendar.
    """
    date: str
    time_slots: List[TimeSlot] = Field(default_factory=list)
    type: ShiftRequestType
    priority: ShiftRequestPriority = ShiftRequestPriority.MEDIUM
    notes: Optional[str] = None
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class ExtractionResult(CamelModel):
    original_text: str
    parsed_requests: List[ShiftRequest] = Field(default_factory=list)
    processing_notes: Optional[str] = None


class LineError(CamelModel):
    line_number: int
    text: str
    detail: str


class ShiftParseRequest(CamelModel):
    # Left untyped so a missing or non-string text is reported as a 400 by the route.
    text: Optional[Any] = None
    mode: ParseMode = ParseMode.SINGLE
    year: Optional[int] = None


class ShiftParseResponse(CamelModel):
    success: bool = True
    data: Union[ExtractionResult, List[ExtractionResult]]
    engine: str
    errors: List[LineError] = Field(default_factory=list)
