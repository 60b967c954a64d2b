"""Unit tests for score aggregation"""

import pytest
from decimal import Decimal
from credit_scoring.domain.models import LoanHistoryItem, ScoreRequest, SubScores
from credit_scoring.domain.scoring import (
    WEIGHTS,
    calculate_sub_scores,
    calculate_weighted_score,
    determine_grade,
    generate_recommendation,
    generate_factors,
    score_request,
)
from credit_scoring.domain.exceptions import UnknownEmploymentStatusError


def make_request(**overrides) -> ScoreRequest:
    fields = dict(
        user_id="user_1",
        income_amount=Decimal("120000"),
        employment_status="employed",
        account_age_months=24,
        loan_history=[],
    )
    fields.update(overrides)
    return ScoreRequest(**fields)


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == Decimal("1")


def test_score_request_good_profile(good_request: ScoreRequest):
    """Test employed, mid income, 24 months, one paid loan"""
    result = score_request(good_request)

    assert result.sub_scores.income == 600
    assert result.sub_scores.employment == 750
    assert result.sub_scores.account_age == 540
    assert result.sub_scores.loan_history == 850
    # 180 + 187.5 + 108 + 212.5 = 688
    assert result.score == 688
    assert result.grade == "Good"
    assert result.recommendation == "Good credit profile. Eligible for competitive rates."
    assert result.factors == []


def test_score_request_poor_profile(poor_request: ScoreRequest):
    """Test unemployed, low income, new account, no loans"""
    result = score_request(poor_request)

    assert result.sub_scores.income == 300
    assert result.sub_scores.employment == 350
    assert result.sub_scores.account_age == 320
    assert result.sub_scores.loan_history == 500
    # 90 + 87.5 + 64 + 125 = 366.5, truncated
    assert result.score == 366
    assert result.grade == "Poor"
    assert result.factors == ["Low income level", "Short account history", "Current unemployment"]
    assert result.recommendation == "Credit profile needs improvement. Consider secured products."


def test_weighted_score_truncates_not_rounds():
    sub_scores = SubScores(
        income=Decimal(300),
        employment=Decimal(350),
        account_age=Decimal(320),
        loan_history=Decimal(500),
    )
    assert calculate_weighted_score(sub_scores) == 366


def test_weighted_score_clamped_to_range():
    low = SubScores(Decimal(0), Decimal(0), Decimal(0), Decimal(0))
    high = SubScores(Decimal(2000), Decimal(2000), Decimal(2000), Decimal(2000))

    assert calculate_weighted_score(low) == 300
    assert calculate_weighted_score(high) == 850


def test_score_always_in_range():
    """Test extremes of every attribute stay within [300, 850]"""
    statuses = ["employed", "self-employed", "unemployed", "retired"]
    histories = [
        [],
        [LoanHistoryItem(amount=Decimal("1"), status="paid")],
        [LoanHistoryItem(amount=Decimal("1"), status="late")],
    ]
    for income in (Decimal("0"), Decimal("75000"), Decimal("10000000")):
        for status in statuses:
            for months in (0, 30, 600):
                for history in histories:
                    result = score_request(
                        make_request(
                            income_amount=income,
                            employment_status=status,
                            account_age_months=months,
                            loan_history=history,
                        )
                    )
                    assert 300 <= result.score <= 850


def test_maximum_profile_scores_850():
    result = score_request(
        make_request(
            income_amount=Decimal("900000"),
            account_age_months=120,
            loan_history=[LoanHistoryItem(amount=Decimal("1"), status="paid")],
        )
    )
    # 255 + 187.5 + 170 + 212.5 = 825
    assert result.score == 825
    assert result.grade == "Excellent"
    assert result.factors == ["Strong payment history", "Good financial stability"]


@pytest.mark.parametrize(
    "score, grade",
    [
        (850, "Excellent"),
        (800, "Excellent"),
        (799, "Very Good"),
        (740, "Very Good"),
        (739, "Good"),
        (670, "Good"),
        (669, "Fair"),
        (580, "Fair"),
        (579, "Poor"),
        (300, "Poor"),
    ],
)
def test_determine_grade_thresholds(score, grade):
    assert determine_grade(score) == grade


def test_recommendation_ladder_differs_from_grades():
    """Test 800+ and 740-799 share a recommendation but not a grade"""
    assert determine_grade(810) != determine_grade(750)
    assert generate_recommendation(810) == generate_recommendation(750)
    assert generate_recommendation(740) == "Excellent credit profile. Eligible for best rates and terms."
    assert generate_recommendation(739) == "Good credit profile. Eligible for competitive rates."
    assert generate_recommendation(580) == "Fair credit profile. May need additional documentation."
    assert generate_recommendation(579) == "Credit profile needs improvement. Consider secured products."


def test_grade_and_recommendation_depend_only_on_score():
    """Test labels on every result match the labels of its final score alone"""
    for income in (Decimal("10000"), Decimal("120000"), Decimal("600000")):
        for status in ("employed", "self-employed", "unemployed", "retired"):
            for months in (0, 12, 24, 55):
                result = score_request(
                    make_request(income_amount=income, employment_status=status, account_age_months=months)
                )
                assert result.grade == determine_grade(result.score)
                assert result.recommendation == generate_recommendation(result.score)


def test_generate_factors_order_and_positive_pair():
    """Test checks are additive: low income plus high score emits both kinds"""
    request = make_request(income_amount=Decimal("90000"), account_age_months=6)
    factors = generate_factors(request, 720)

    assert factors == [
        "Low income level",
        "Short account history",
        "Strong payment history",
        "Good financial stability",
    ]


def test_generate_factors_threshold_boundaries():
    assert generate_factors(make_request(income_amount=Decimal("100000"), account_age_months=12), 699) == []
    assert generate_factors(make_request(income_amount=Decimal("100000"), account_age_months=12), 700) == [
        "Strong payment history",
        "Good financial stability",
    ]


def test_factors_deterministic(poor_request: ScoreRequest):
    """Test the same input always yields the same ordered factor list"""
    first = score_request(poor_request)
    second = score_request(poor_request)

    assert first.factors == second.factors
    assert first == second


def test_transaction_data_not_interpreted():
    plain = score_request(make_request(transaction_data={}))
    noisy = score_request(make_request(transaction_data={"merchant": "x", "nested": {"a": [1, 2]}}))

    assert plain == noisy


def test_unknown_employment_status_propagates():
    with pytest.raises(UnknownEmploymentStatusError):
        calculate_sub_scores(make_request(employment_status="freelancer"))
