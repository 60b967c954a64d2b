"""Request validation applied before a request reaches the scoring path"""

from decimal import Decimal
from credit_scoring.domain.models import EmploymentStatus, ScoreRequest
from credit_scoring.domain.exceptions import InvalidScoreRequestError

VALID_EMPLOYMENT_STATUSES = frozenset(status.value for status in EmploymentStatus)


def validate_score_request(request: ScoreRequest) -> ScoreRequest:
    """
    Reject requests the scorer must never see.

    Raises:
        InvalidScoreRequestError: On empty user id, negative income or account age,
            or an employment status outside the fixed enumeration
    """
    if not request.user_id or not request.user_id.strip():
        raise InvalidScoreRequestError("user id is required")

    if request.employment_status not in VALID_EMPLOYMENT_STATUSES:
        raise InvalidScoreRequestError(f"invalid employment status: {request.employment_status}")

    if Decimal(request.income_amount) < 0:
        raise InvalidScoreRequestError("income amount cannot be negative")

    if request.account_age_months < 0:
        raise InvalidScoreRequestError("account age cannot be negative")

    return request
