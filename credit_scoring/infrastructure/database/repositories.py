"""Data access layer for credit scores"""

import logging
from typing import List, NoReturn
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from credit_scoring.infrastructure.database.models import CreditScoreRecord
from credit_scoring.infrastructure.observability.metrics import store_failure_counter
from credit_scoring.domain.models import CreditScore
from credit_scoring.domain.exceptions import ScoreNotFoundError, ScoreStoreError
from credit_scoring.utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)


class CreditScoreRepository:
    """Repository for credit scores"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, score: CreditScore) -> None:
        """
        Persist a credit score and commit.

        Raises:
            ScoreStoreError: Insert or commit failed; the session is rolled back
        """
        db_score = CreditScoreRecord(
            id=score.id,
            user_id=score.user_id,
            score=score.score,
            grade=score.grade,
            factors=list(score.factors),
            recommendation=score.recommendation,
            calculated_at=score.calculated_at,
            expires_at=score.expires_at,
        )
        try:
            self.db.add(db_score)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self._failed("create", score.user_id, e)

    def get_latest(self, user_id: str) -> CreditScore:
        """
        Fetch the most recently calculated score for a user.

        Raises:
            ScoreNotFoundError: User has no scores
            ScoreStoreError: Query failed
        """
        try:
            db_score = (
                self.db.query(CreditScoreRecord)
                .filter(CreditScoreRecord.user_id == user_id)
                .order_by(CreditScoreRecord.calculated_at.desc())
                .first()
            )
        except SQLAlchemyError as e:
            self._failed("get_latest", user_id, e)

        if db_score is None:
            raise ScoreNotFoundError(user_id)

        return to_domain(db_score)

    def get_history(self, user_id: str, limit: int = 12) -> List[CreditScore]:
        """Fetch recent scores for a user, newest first"""
        try:
            db_scores = (
                self.db.query(CreditScoreRecord)
                .filter(CreditScoreRecord.user_id == user_id)
                .order_by(CreditScoreRecord.calculated_at.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            self._failed("get_history", user_id, e)

        return [to_domain(s) for s in db_scores]

    def _failed(self, operation: str, user_id: str, error: SQLAlchemyError) -> NoReturn:
        store_failure_counter.labels(operation=operation).inc()
        logger.error(
            f"Score store {operation} failed: {error}",
            extra={"user_id": user_id, "operation": operation},
        )
        raise ScoreStoreError(f"Score store {operation} failed") from error


def to_domain(db_score: CreditScoreRecord) -> CreditScore:
    return CreditScore(
        id=db_score.id,
        user_id=db_score.user_id,
        score=db_score.score,
        grade=db_score.grade,
        factors=tuple(db_score.factors or ()),
        recommendation=db_score.recommendation,
        calculated_at=ensure_utc(db_score.calculated_at),
        expires_at=ensure_utc(db_score.expires_at),
    )
