"""Credit score endpoints: submit, current, history, refresh"""

import time
import logging
from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_scoring.api.v1.schemas import (
    APIError,
    CreditScoreHistorySchema,
    CreditScoreSchema,
    ErrorResponse,
    ScoreRequestSchema,
    SuccessResponse,
)
from credit_scoring.api.auth import get_current_principal
from credit_scoring.api.dependencies import get_request_id, get_scoring_service
from credit_scoring.api.rate_limit import current_rate_limit, limiter
from credit_scoring.domain.service import ScoringService
from credit_scoring.domain.validation import validate_score_request
from credit_scoring.domain.exceptions import (
    InvalidScoreRequestError,
    ScoreNotFoundError,
    ScoreStoreError,
    UnknownEmploymentStatusError,
)
from credit_scoring.infrastructure.observability.metrics import record_calculation
from credit_scoring.infrastructure.observability.logging import log_score_computed

logger = logging.getLogger(__name__)

router = APIRouter(
    dependencies=[Depends(get_current_principal)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail=APIError(code=code, message=message).model_dump())


NOT_FOUND = (404, "NOT_FOUND", "Credit score not found")


@router.post(
    "/credit/score",
    response_model=SuccessResponse[CreditScoreSchema],
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit(current_rate_limit)
def calculate_score(
    request_body: ScoreRequestSchema,
    request: Request,
    service: ScoringService = Depends(get_scoring_service),
):
    """
    Calculate and record a credit score.

    Flow:
    1. Validate request (employment status, non-negative amounts)
    2. Score applicant attributes
    3. Persist score (failure aborts the request)
    4. Warm cache and publish event (failures are logged only)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        score_request = validate_score_request(request_body.to_domain())
        credit_score = service.compute(score_request)

    except InvalidScoreRequestError as e:
        raise _error(400, "VALIDATION_ERROR", str(e))

    except (ScoreStoreError, UnknownEmploymentStatusError) as e:
        logger.error(
            f"Failed to calculate score: {e}",
            extra={"request_id": request_id, "user_id": request_body.user_id},
        )
        raise _error(500, "CALCULATION_ERROR", "Failed to calculate credit score")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_calculation(credit_score.score, credit_score.grade)
    log_score_computed(
        request_id,
        credit_score.user_id,
        credit_score.id,
        credit_score.score,
        credit_score.grade,
        duration_ms,
    )

    return SuccessResponse[CreditScoreSchema](
        data=CreditScoreSchema.from_domain(credit_score),
        message="Credit score calculated successfully",
    )


@router.get(
    "/credit/score/{user_id}",
    response_model=SuccessResponse[CreditScoreSchema],
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(current_rate_limit)
def get_score(
    user_id: str,
    request: Request,
    service: ScoringService = Depends(get_scoring_service),
):
    """Current credit score; may be up to one cache TTL stale"""
    try:
        credit_score = service.get_current(user_id)
    except ScoreNotFoundError:
        raise _error(*NOT_FOUND)
    except ScoreStoreError as e:
        logger.error(f"Failed to get score: {e}", extra=_log_context(request, user_id))
        raise _error(500, "INTERNAL_ERROR", "Failed to retrieve credit score")

    return SuccessResponse[CreditScoreSchema](data=CreditScoreSchema.from_domain(credit_score))


@router.get("/credit/history/{user_id}", response_model=SuccessResponse[CreditScoreHistorySchema])
@limiter.limit(current_rate_limit)
def get_history(
    user_id: str,
    request: Request,
    service: ScoringService = Depends(get_scoring_service),
):
    """Up to the 12 most recent scores, newest first"""
    try:
        scores = service.get_history(user_id)
    except ScoreStoreError as e:
        logger.error(f"Failed to get history: {e}", extra=_log_context(request, user_id))
        raise _error(500, "INTERNAL_ERROR", "Failed to retrieve history")

    history = CreditScoreHistorySchema(
        user_id=user_id,
        history=[CreditScoreSchema.from_domain(s) for s in scores],
    )
    return SuccessResponse[CreditScoreHistorySchema](data=history)


@router.post(
    "/credit/refresh/{user_id}",
    response_model=SuccessResponse[CreditScoreSchema],
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(current_rate_limit)
def refresh_score(
    user_id: str,
    request: Request,
    service: ScoringService = Depends(get_scoring_service),
):
    """Invalidate the cached score and re-read the latest stored one (no recalculation)"""
    try:
        credit_score = service.refresh(user_id)
    except ScoreNotFoundError:
        raise _error(*NOT_FOUND)
    except ScoreStoreError as e:
        logger.error(f"Failed to refresh score: {e}", extra=_log_context(request, user_id))
        raise _error(500, "REFRESH_ERROR", "Failed to refresh credit score")

    return SuccessResponse[CreditScoreSchema](
        data=CreditScoreSchema.from_domain(credit_score),
        message="Credit score refreshed successfully",
    )


def _log_context(request: Request, user_id: str) -> Dict[str, Any]:
    return {"request_id": get_request_id(request), "user_id": user_id}
