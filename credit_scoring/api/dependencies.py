"""Dependency injection for FastAPI endpoints"""

import logging
import threading
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from credit_scoring.config import settings
from credit_scoring.domain.service import EventPublisher, ScoreCache, ScoringService
from credit_scoring.infrastructure.cache.redis_cache import RedisCache
from credit_scoring.infrastructure.clients.webhook import WebhookEventPublisher
from credit_scoring.infrastructure.database.repositories import CreditScoreRepository
from credit_scoring.infrastructure.database.session import get_db
from credit_scoring.infrastructure.messaging.kafka import KafkaEventPublisher

logger = logging.getLogger(__name__)

# Shared publisher - the Kafka producer is reused across requests
_event_publisher: Optional[EventPublisher] = None
_event_publisher_lock = threading.Lock()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_score_cache() -> ScoreCache:
    """Provide Redis cache instance"""
    return RedisCache()


def build_event_publisher(transport: str) -> EventPublisher:
    if transport == "kafka":
        return KafkaEventPublisher()
    elif transport == "webhook":
        return WebhookEventPublisher()
    raise ValueError(f"Unsupported event transport: {transport}")


def get_event_publisher() -> EventPublisher:
    """Provide the process-wide event publisher"""
    global _event_publisher
    if _event_publisher is None:
        with _event_publisher_lock:
            if _event_publisher is None:
                _event_publisher = build_event_publisher(settings.event_transport)
                logger.info("Event publisher initialized", extra={"transport": settings.event_transport})
    return _event_publisher


def close_event_publisher() -> None:
    global _event_publisher
    with _event_publisher_lock:
        publisher, _event_publisher = _event_publisher, None
    if publisher is not None:
        publisher.close()


def get_scoring_service(
    db: Session = Depends(get_db),
    cache: ScoreCache = Depends(get_score_cache),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> ScoringService:
    """Wire the scoring service for one request"""
    return ScoringService(
        store=CreditScoreRepository(db),
        cache=cache,
        publisher=publisher,
        event_topic=settings.event_topic,
        cache_key_prefix=settings.cache_key_prefix,
        cache_ttl_seconds=settings.cache_ttl_seconds,
        validity_days=settings.score_validity_days,
        history_limit=settings.history_limit,
    )
