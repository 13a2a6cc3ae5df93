import logging

from fastapi import APIRouter, Depends, HTTPException, status

from shiftengine.api.deps import get_shift_request_extractor
from shiftengine.schemas.shift_requests import ShiftParseRequest, ShiftParseResponse
from shiftengine.services.ai import ExtractionError, ShiftRequestExtractor

router = APIRouter(prefix="/shift-ai", tags=["shift-ai"])

logger = logging.getLogger(__name__)

PARSE_FAILED_MESSAGE = "Failed to parse shift requests"


@router.post("/parse", response_model=ShiftParseResponse)
def parse_shift_requests(
    payload: ShiftParseRequest,
    extractor: ShiftRequestExtractor = Depends(get_shift_request_extractor),
):
    """Turn free-form shift request text into structured requests.
    Bulk mode parses each non-blank line separately and reports failing lines in errors.
    """
    if not payload.text or not isinstance(payload.text, str):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A non-empty text string is required",
        )

    try:
        outcome = extractor.run(payload.text, payload.mode, payload.year)
    except ExtractionError as e:
        logger.error(f"Shift request parsing failed: {e} ({e.detail})")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": PARSE_FAILED_MESSAGE, "details": e.detail},
        )
    except Exception as e:
        logger.exception(f"Unexpected error while parsing shift requests: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": PARSE_FAILED_MESSAGE, "details": str(e)},
        )

    if outcome.all_failed:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": PARSE_FAILED_MESSAGE, "details": outcome.errors[0].detail},
        )

    return ShiftParseResponse(
        success=True,
        data=outcome.data,
        engine=extractor.engine.value,
        errors=outcome.errors,
    )
