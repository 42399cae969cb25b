"""Range check endpoint: POST /ranges/check."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from catalog_service.api.schemas import RangeCheckRequest, RangeCheckResponse
from catalog_service.models.errors import ParseError
from catalog_service.service.resolution import check_range

router = APIRouter()


@router.post("/check", response_model=RangeCheckResponse)
async def check(body: RangeCheckRequest) -> RangeCheckResponse:
    """Test one version label against one range expression."""
    try:
        satisfied = check_range(body.version, body.range)
    except ParseError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None
    return RangeCheckResponse(version=body.version, range=body.range, satisfied=satisfied)
