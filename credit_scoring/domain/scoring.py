"""Score aggregator - core business logic combining sub-scores into a credit score"""

from decimal import Decimal
from typing import List
from credit_scoring.domain.models import EmploymentStatus, ScoreRequest, ScoreResult, SubScores
from credit_scoring.domain.factors import (
    income_score,
    employment_score,
    account_age_score,
    loan_history_score,
)

MIN_SCORE = 300
MAX_SCORE = 850

# Must sum to 1.0
WEIGHTS = {
    "income": Decimal("0.30"),
    "employment": Decimal("0.25"),
    "account_age": Decimal("0.20"),
    "loan_history": Decimal("0.25"),
}


def calculate_sub_scores(request: ScoreRequest) -> SubScores:
    """Run each factor calculator against the request"""
    return SubScores(
        income=income_score(request.income_amount),
        employment=employment_score(request.employment_status),
        account_age=account_age_score(request.account_age_months),
        loan_history=loan_history_score(request.loan_history),
    )


def calculate_weighted_score(sub_scores: SubScores) -> int:
    """
    Weighted sum of sub-scores, truncated then clamped to [300, 850].

    Scoring weights:
    - 30%: Income
    - 25%: Employment
    - 20%: Account age
    - 25%: Loan history

    Decimal arithmetic keeps exact sums such as 688.0 from landing on 687.999...
    before truncation.
    """
    weighted = (
        sub_scores.income * WEIGHTS["income"]
        + sub_scores.employment * WEIGHTS["employment"]
        + sub_scores.account_age * WEIGHTS["account_age"]
        + sub_scores.loan_history * WEIGHTS["loan_history"]
    )
    score = int(weighted)  # truncates toward zero

    return max(MIN_SCORE, min(score, MAX_SCORE))


def determine_grade(score: int) -> str:
    """
    Map final score to a grade.

    Grade bands (inclusive lower bounds, first match wins):
    - 800+: Excellent
    - 740+: Very Good
    - 670+: Good
    - 580+: Fair
    - else: Poor
    """
    if score >= 800:
        return "Excellent"
    elif score >= 740:
        return "Very Good"
    elif score >= 670:
        return "Good"
    elif score >= 580:
        return "Fair"
    else:
        return "Poor"


def generate_recommendation(score: int) -> str:
    """Four-tier recommendation; its 740 top tier spans both Excellent and Very Good grades"""
    if score >= 740:
        return "Excellent credit profile. Eligible for best rates and terms."
    elif score >= 670:
        return "Good credit profile. Eligible for competitive rates."
    elif score >= 580:
        return "Fair credit profile. May need additional documentation."
    else:
        return "Credit profile needs improvement. Consider secured products."


def generate_factors(request: ScoreRequest, score: int) -> List[str]:
    """Independent checks appended in a fixed order; not deduplicated"""
    factors: List[str] = []

    if request.income_amount < 100_000:
        factors.append("Low income level")
    if request.account_age_months < 12:
        factors.append("Short account history")
    if request.employment_status == EmploymentStatus.UNEMPLOYED.value:
        factors.append("Current unemployment")
    if score >= 700:
        factors.append("Strong payment history")
        factors.append("Good financial stability")

    return factors


def score_request(request: ScoreRequest) -> ScoreResult:
    """
    Main entry point: compute sub-scores, aggregate and explain.

    Raises:
        UnknownEmploymentStatusError: Request bypassed validation
    """
    sub_scores = calculate_sub_scores(request)
    score = calculate_weighted_score(sub_scores)

    return ScoreResult(
        score=score,
        grade=determine_grade(score),
        factors=generate_factors(request, score),
        recommendation=generate_recommendation(score),
        sub_scores=sub_scores,
    )
