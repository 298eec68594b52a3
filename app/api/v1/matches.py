"""Match API endpoints."""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from app.core.errors import ComponentUnavailable, SpecViolation
from app.dependencies import get_match_service, get_match_store
from app.models.match import (
    ClearMatchesResponse,
    MatchRequest,
    MatchResponse,
    StoredMatchesResponse,
)

router = APIRouter()

logger = logging.getLogger("match_api")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[MatchAPI] %(asctime)s %(levelname)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


def ranked_to_dict(item) -> Dict[str, Any]:
    result = item.result
    return {
        "creator_id": item.creator_id,
        "score": result.total,
        "reasons": result.reason_labels(),
        "reason_codes": [code.value for code in result.reasons],
        "breakdown": result.breakdown(),
    }


def failure_to_dict(failure) -> Dict[str, Any]:
    return {"creator_id": failure.creator_id, "error": str(failure)}


@router.post("/", response_model=MatchResponse)
async def match_creators(request: MatchRequest, match_service=Depends(get_match_service)):
    logger.info(
        "Match request | brand=%s limit=%s persist=%s inline_pool=%s",
        request.brand_id,
        request.limit,
        request.persist,
        request.creator_pool is not None,
    )

    try:
        outcome = match_service.run(request)
    except SpecViolation as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ComponentUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Match run failed: %s", exc)
        raise HTTPException(status_code=500, detail="Match run failed") from exc

    payload = [ranked_to_dict(item) for item in outcome.ranked]
    return MatchResponse(
        success=True,
        brand_id=outcome.brand_id,
        ranked=payload,
        persisted_count=outcome.persisted_count,
        failures=[failure_to_dict(f) for f in outcome.failures],
        count=len(payload),
        source=outcome.source,
    )


@router.get("/{brand_id}", response_model=StoredMatchesResponse)
async def get_brand_matches(brand_id: str, match_store=Depends(get_match_store)):
    sanitized = brand_id.strip()
    if not sanitized:
        raise HTTPException(status_code=400, detail="brand_id is required")

    try:
        records = match_store.list_for_brand(sanitized)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Match lookup failed: %s", exc)
        raise HTTPException(status_code=500, detail="Match lookup failed") from exc

    return StoredMatchesResponse(
        success=True,
        brand_id=sanitized,
        matches=[record.to_dict() for record in records],
        count=len(records),
    )


@router.delete("/{brand_id}", response_model=ClearMatchesResponse)
async def clear_brand_matches(brand_id: str, match_store=Depends(get_match_store)):
    logger.info("Clear matches | brand=%s", brand_id)

    try:
        deleted = match_store.clear_brand(brand_id.strip())
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Clearing matches failed: %s", exc)
        raise HTTPException(status_code=500, detail="Clearing matches failed") from exc

    return ClearMatchesResponse(success=True, brand_id=brand_id.strip(), deleted=deleted)
