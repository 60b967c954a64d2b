"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class EmploymentStatus(str, Enum):
    """Accepted employment statuses"""

    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"
    UNEMPLOYED = "unemployed"
    RETIRED = "retired"


@dataclass
class LoanHistoryItem:
    """Past loan with its repayment outcome"""

    amount: Decimal
    status: str  # "paid" counts as on-time
    payment_date: Optional[datetime] = None


@dataclass
class ScoreRequest:
    """Applicant attributes submitted for scoring"""

    user_id: str
    income_amount: Decimal
    employment_status: str
    account_age_months: int
    transaction_data: Dict[str, Any] = field(default_factory=dict)  # passed through, never interpreted
    loan_history: List[LoanHistoryItem] = field(default_factory=list)


@dataclass
class SubScores:
    """Per-factor sub-scores, each in [300, 850]"""

    income: Decimal
    employment: Decimal
    account_age: Decimal
    loan_history: Decimal


@dataclass
class ScoreResult:
    """Output of the aggregator before identity and timestamps are assigned"""

    score: int
    grade: str
    factors: List[str]
    recommendation: str
    sub_scores: SubScores


@dataclass(frozen=True)
class CreditScore:
    """Computed credit score; immutable once created"""

    id: str
    user_id: str
    score: int
    grade: str
    factors: Tuple[str, ...]
    recommendation: str
    calculated_at: datetime
    expires_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "score": self.score,
            "grade": self.grade,
            "factors": list(self.factors),
            "recommendation": self.recommendation,
            "calculated_at": self.calculated_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreditScore":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            score=int(data["score"]),
            grade=data["grade"],
            factors=tuple(data["factors"]),
            recommendation=data["recommendation"],
            calculated_at=datetime.fromisoformat(data["calculated_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )
