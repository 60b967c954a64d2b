"""Scoring service - compute, persist, cache, publish and serve credit scores"""

import json
import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol
from credit_scoring.domain.models import CreditScore, ScoreRequest
from credit_scoring.domain.scoring import score_request
from credit_scoring.domain.exceptions import CacheError, EventPublishError
from credit_scoring.infrastructure.observability.metrics import (
    advisory_failure_counter,
    cache_lookup_counter,
)
from credit_scoring.utils.time_utils import add_days, generate_score_id, utc_now

logger = logging.getLogger(__name__)

EVENT_TYPE_SCORE_CALCULATED = "credit_score_calculated"


class ScoreStore(Protocol):
    """Durable, append-only score storage"""

    def create(self, score: CreditScore) -> None: ...

    def get_latest(self, user_id: str) -> CreditScore: ...

    def get_history(self, user_id: str, limit: int) -> List[CreditScore]: ...


class ScoreCache(Protocol):
    """Volatile key-value store with per-key TTL"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> None: ...


class EventPublisher(Protocol):
    """Fire-and-forget event transport"""

    def publish(self, topic: str, payload: bytes, key: Optional[str] = None) -> None: ...

    def close(self) -> None: ...


class ScoringService:
    """
    Orchestrates scoring with cache-aside reads.

    The store is the durability boundary: its errors propagate. Cache and event
    failures are advisory: logged, counted and swallowed.
    """

    def __init__(
        self,
        store: ScoreStore,
        cache: ScoreCache,
        publisher: EventPublisher,
        *,
        event_topic: str,
        cache_key_prefix: str = "credit_score:",
        cache_ttl_seconds: int = 900,
        validity_days: int = 30,
        history_limit: int = 12,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_score_id,
    ):
        self.store = store
        self.cache = cache
        self.publisher = publisher
        self.event_topic = event_topic
        self.cache_key_prefix = cache_key_prefix
        self.cache_ttl_seconds = cache_ttl_seconds
        self.validity_days = validity_days
        self.history_limit = history_limit
        self.clock = clock
        self.id_factory = id_factory

    def compute(self, request: ScoreRequest) -> CreditScore:
        """
        Score a validated request and record the result.

        Order: store write, then cache warm, then event publish.

        Raises:
            ScoreStoreError: Store write failed; nothing is cached or published
            UnknownEmploymentStatusError: Request bypassed validation
        """
        logger.info("Calculating credit score", extra={"user_id": request.user_id})

        result = score_request(request)
        calculated_at = self.clock()

        credit_score = CreditScore(
            id=self.id_factory(),
            user_id=request.user_id,
            score=result.score,
            grade=result.grade,
            factors=tuple(result.factors),
            recommendation=result.recommendation,
            calculated_at=calculated_at,
            expires_at=add_days(calculated_at, self.validity_days),
        )

        self.store.create(credit_score)

        self._cache_score(credit_score)
        self._publish_calculated(credit_score)

        return credit_score

    def get_current(self, user_id: str) -> CreditScore:
        """
        Latest score for a user, served from cache when present.

        Raises:
            ScoreNotFoundError: User has never been scored
            ScoreStoreError: Store read failed
        """
        cached = self._cached_score(user_id)
        if cached is not None:
            return cached

        credit_score = self.store.get_latest(user_id)
        self._cache_score(credit_score)

        return credit_score

    def get_history(self, user_id: str) -> List[CreditScore]:
        """Most recent scores first; empty list when the user has none"""
        return self.store.get_history(user_id, self.history_limit)

    def refresh(self, user_id: str) -> CreditScore:
        """
        Drop the cached score and re-read from the store.

        Does not recompute: without a newer compute the store's latest record is
        returned unchanged.
        """
        try:
            self.cache.delete(self._cache_key(user_id))
        except CacheError as e:
            self._advisory_failure("cache", "Failed to invalidate cached credit score", user_id, e)

        return self.get_current(user_id)

    def _cache_key(self, user_id: str) -> str:
        return f"{self.cache_key_prefix}{user_id}"

    def _cached_score(self, user_id: str) -> Optional[CreditScore]:
        try:
            raw = self.cache.get(self._cache_key(user_id))
        except CacheError as e:
            cache_lookup_counter.labels(result="error").inc()
            self._advisory_failure("cache", "Failed to read cached credit score", user_id, e)
            return None

        if raw is None:
            cache_lookup_counter.labels(result="miss").inc()
            return None

        try:
            credit_score = CreditScore.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            cache_lookup_counter.labels(result="error").inc()
            self._advisory_failure("cache", "Discarding undecodable cached credit score", user_id, e)
            return None

        cache_lookup_counter.labels(result="hit").inc()
        return credit_score

    def _cache_score(self, credit_score: CreditScore) -> None:
        try:
            self.cache.set(
                self._cache_key(credit_score.user_id),
                json.dumps(credit_score.to_dict()),
                self.cache_ttl_seconds,
            )
        except CacheError as e:
            self._advisory_failure("cache", "Failed to cache credit score", credit_score.user_id, e)

    def _publish_calculated(self, credit_score: CreditScore) -> None:
        event = {
            "eventType": EVENT_TYPE_SCORE_CALCULATED,
            "userId": credit_score.user_id,
            "score": credit_score.score,
            "grade": credit_score.grade,
            "timestamp": credit_score.calculated_at.isoformat(),
        }
        try:
            self.publisher.publish(
                self.event_topic,
                json.dumps(event).encode("utf-8"),
                key=credit_score.user_id,
            )
        except EventPublishError as e:
            self._advisory_failure("publisher", "Failed to publish event", credit_score.user_id, e)

    def _advisory_failure(self, component: str, message: str, user_id: str, error: Exception) -> None:
        advisory_failure_counter.labels(component=component).inc()
        logger.warning(
            message,
            extra={"user_id": user_id, "component": component, "error": str(error)},
        )
