"""Factor calculators - map one applicant attribute to a sub-score in [300, 850]"""

import logging
from decimal import Decimal
from typing import Dict, List
from credit_scoring.domain.models import EmploymentStatus, LoanHistoryItem
from credit_scoring.domain.exceptions import UnknownEmploymentStatusError

logger = logging.getLogger(__name__)

MIN_SUB_SCORE = Decimal(300)
MAX_SUB_SCORE = Decimal(850)
NEUTRAL_LOAN_HISTORY_SCORE = Decimal(500)

EMPLOYMENT_SCORES: Dict[str, Decimal] = {
    EmploymentStatus.EMPLOYED.value: Decimal(750),
    EmploymentStatus.SELF_EMPLOYED.value: Decimal(650),
    EmploymentStatus.RETIRED.value: Decimal(550),
    EmploymentStatus.UNEMPLOYED.value: Decimal(350),
}

ON_TIME_STATUS = "paid"


def income_score(income_amount: Decimal) -> Decimal:
    """
    Step function over annual income.

    Bands:
    - < 50,000:           300
    - 50,000 - 100,000:   450
    - 100,000 - 200,000:  600
    - 200,000 - 500,000:  750
    - >= 500,000:         850
    """
    if income_amount < 50_000:
        return Decimal(300)
    elif income_amount < 100_000:
        return Decimal(450)
    elif income_amount < 200_000:
        return Decimal(600)
    elif income_amount < 500_000:
        return Decimal(750)
    else:
        return Decimal(850)


def employment_score(employment_status: str) -> Decimal:
    """
    Lookup by employment status.

    Raises:
        UnknownEmploymentStatusError: Status bypassed upstream validation
    """
    try:
        return EMPLOYMENT_SCORES[employment_status]
    except KeyError:
        logger.error(
            "Unknown employment status reached scorer",
            extra={"employment_status": employment_status},
        )
        raise UnknownEmploymentStatusError(employment_status) from None


def account_age_score(account_age_months: int) -> Decimal:
    """300 + 10 per month, capped at 850 (reached at 55 months)"""
    return min(MIN_SUB_SCORE + 10 * account_age_months, MAX_SUB_SCORE)


def loan_history_score(loan_history: List[LoanHistoryItem]) -> Decimal:
    """
    On-time ratio mapped linearly onto [300, 850].

    An empty history scores a neutral 500 so new borrowers are not penalized.
    """
    if not loan_history:
        return NEUTRAL_LOAN_HISTORY_SCORE

    paid_on_time = sum(1 for loan in loan_history if loan.status == ON_TIME_STATUS)
    ratio = Decimal(paid_on_time) / Decimal(len(loan_history))

    return MIN_SUB_SCORE + ratio * (MAX_SUB_SCORE - MIN_SUB_SCORE)
