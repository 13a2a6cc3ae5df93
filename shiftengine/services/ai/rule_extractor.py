"""
Rule-based shift request extraction.
Deterministic pattern matching over free text, no I/O. Used directly by the
"rules" engine and as the fallback for the model-assisted path.
"""

import re
import unicodedata
from datetime import date
from typing import Optional

from shiftengine.schemas.shift_requests import (
    ExtractionResult,
    ShiftRequest,
    ShiftRequestPriority,
    ShiftRequestType,
    TimeSlot,
)


RULE_BASED_NOTE = "Rule-based extraction used"

DATE_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})")

OFF_PATTERN = re.compile(r"休み|お休み|×|❌|OFF", re.IGNORECASE)
AVAILABLE_PATTERN = re.compile(r"◯|〇|○|出勤可能")

_SEPARATOR = r"\s*(?:-|−|ー|~|〜|から)\s*"

# Tried in order, first match wins.
TIME_RANGE_PATTERNS = [
    # 9:30-17:00, 9:30時-17時
    re.compile(r"(\d{1,2}):(\d{2})時?" + _SEPARATOR + r"(\d{1,2})(?::(\d{2}))?"),
    # 13時-17時, 13-17
    re.compile(r"(\d{1,2})()時?" + _SEPARATOR + r"(\d{1,2})(?::(\d{2}))?"),
]

HIGH_PRIORITY_PATTERN = re.compile(r"絶対|必ず|どうしても")
LOW_PRIORITY_PATTERN = re.compile(r"どちらでも|可能なら")

OFF_CONFIDENCE = 0.8
AVAILABLE_CONFIDENCE = 0.8
WORK_CONFIDENCE = 0.7


def _normalize(line: str) -> str:
    # Full-width digits and punctuation to ASCII
    return unicodedata.normalize("NFKC", line).strip()


def _format_time(hour: str, minute: Optional[str]) -> str:
    return f"{int(hour):02d}:{int(minute or 0):02d}"


def _priority_for(line: str) -> ShiftRequestPriority:
    if HIGH_PRIORITY_PATTERN.search(line):
        return ShiftRequestPriority.HIGH
    if LOW_PRIORITY_PATTERN.search(line):
        return ShiftRequestPriority.LOW
    return ShiftRequestPriority.MEDIUM


def _find_time_slot(text: str) -> Optional[TimeSlot]:
    for pattern in TIME_RANGE_PATTERNS:
        match = pattern.search(text)
        if match:
            start_hour, start_min, end_hour, end_min = match.groups()
            return TimeSlot(
                start_time=_format_time(start_hour, start_min),
                end_time=_format_time(end_hour, end_min),
            )
    return None


def parse_line(line: str, year: int) -> Optional[ShiftRequest]:
    """
    Extract at most one request from a single line.
    Returns None for lines without a date or without a recognisable
    off / available / time-range marker.
    """
    line = _normalize(line)
    date_match = DATE_PATTERN.search(line)
    if not date_match:
        return None

    month, day = date_match.groups()
    request_date = f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    if OFF_PATTERN.search(line):
        return ShiftRequest(
            date=request_date,
            time_slots=[],
            type=ShiftRequestType.OFF,
            priority=ShiftRequestPriority.HIGH,
            confidence=OFF_CONFIDENCE,
        )

    if AVAILABLE_PATTERN.search(line):
        return ShiftRequest(
            date=request_date,
            time_slots=[],
            type=ShiftRequestType.AVAILABLE,
            priority=ShiftRequestPriority.MEDIUM,
            confidence=AVAILABLE_CONFIDENCE,
        )

    # Blank out the date so its digits can't be read as a time range
    remainder = line[:date_match.start()] + " " + line[date_match.end():]
    slot = _find_time_slot(remainder)
    if slot is None:
        return None

    return ShiftRequest(
        date=request_date,
        time_slots=[slot],
        type=ShiftRequestType.WORK,
        priority=_priority_for(line),
        confidence=WORK_CONFIDENCE,
    )


def extract_with_rules(text: str, year: Optional[int] = None) -> ExtractionResult:
    """Parse every non-blank line of text. Never raises for string input."""
    year = year or date.today().year

    parsed_requests = []
    for line in text.splitlines():
        if not line.strip():
            continue
        request = parse_line(line, year)
        if request is not None:
            parsed_requests.append(request)

    return ExtractionResult(
        original_text=text,
        parsed_requests=parsed_requests,
        processing_notes=RULE_BASED_NOTE,
    )
