"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from credit_scoring.domain.models import CreditScore, LoanHistoryItem, ScoreRequest

T = TypeVar("T")


class CamelModel(BaseModel):
    """Accepts and emits camelCase JSON; snake_case names are accepted too"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoanHistoryItemSchema(CamelModel):
    """Single past loan"""

    amount: Decimal = Field(..., ge=0)
    status: str
    payment_date: Optional[datetime] = None


class ScoreRequestSchema(CamelModel):
    """Request body for POST /api/v1/credit/score"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    income_amount: Decimal = Field(..., ge=0, description="Annual income")
    employment_status: str = Field(..., description="employed | self-employed | unemployed | retired")
    account_age: int = Field(..., ge=0, description="Account age in months")
    transaction_data: Dict[str, Any] = Field(default_factory=dict)
    loan_history: List[LoanHistoryItemSchema] = Field(default_factory=list)

    def to_domain(self) -> ScoreRequest:
        return ScoreRequest(
            user_id=self.user_id,
            income_amount=self.income_amount,
            employment_status=self.employment_status,
            account_age_months=self.account_age,
            transaction_data=self.transaction_data,
            loan_history=[
                LoanHistoryItem(amount=item.amount, status=item.status, payment_date=item.payment_date)
                for item in self.loan_history
            ],
        )


class CreditScoreSchema(CamelModel):
    """Credit score as returned to clients"""

    id: str
    user_id: str
    score: int
    grade: str
    factors: List[str]
    recommendation: str
    calculated_at: datetime
    expires_at: datetime

    @classmethod
    def from_domain(cls, score: CreditScore) -> "CreditScoreSchema":
        return cls(
            id=score.id,
            user_id=score.user_id,
            score=score.score,
            grade=score.grade,
            factors=list(score.factors),
            recommendation=score.recommendation,
            calculated_at=score.calculated_at,
            expires_at=score.expires_at,
        )


class CreditScoreHistorySchema(CamelModel):
    """Recent scores for a user, newest first"""

    user_id: str
    history: List[CreditScoreSchema]


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for successful responses"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class APIError(BaseModel):
    """Machine-readable error code with a client-safe message"""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response"""

    detail: APIError
