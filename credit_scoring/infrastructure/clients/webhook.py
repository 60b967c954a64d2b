"""Event webhook client with background delivery and exponential backoff"""

import time
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional
import httpx
from credit_scoring.config import settings
from credit_scoring.domain.exceptions import EventPublishError
from credit_scoring.infrastructure.observability.metrics import (
    advisory_failure_counter,
    webhook_latency_histogram,
)

logger = logging.getLogger(__name__)


class WebhookEventPublisher:
    """Publisher that POSTs scoring events to an HTTP endpoint off the request path"""

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        max_retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        max_workers: int = 4,
    ):
        self.webhook_url = webhook_url or settings.event_webhook_url
        self.client = client or httpx.Client(timeout=settings.http_timeout_seconds)
        self.max_retries = max_retries if max_retries is not None else settings.webhook_max_retries
        self.backoff_base = backoff_base if backoff_base is not None else settings.webhook_backoff_base
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="event-webhook")

    def publish(self, topic: str, payload: bytes, key: Optional[str] = None) -> Future:
        """
        Queue an event for delivery and return immediately.

        Raises:
            EventPublishError: If the publisher has already been closed
        """
        try:
            return self._executor.submit(self._deliver_in_background, topic, payload, key)
        except RuntimeError as e:
            raise EventPublishError(f"Webhook publisher is closed: {e}") from e

    def deliver(self, topic: str, payload: bytes, key: Optional[str] = None) -> None:
        """
        Send an event with retry logic, blocking until it succeeds or fails.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base, ... (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures; 4xx fails immediately

        Raises:
            EventPublishError: After the final failed attempt
        """
        headers: Dict[str, str] = {"Content-Type": "application/json", "X-Event-Topic": topic}
        if key is not None:
            headers["X-Event-Key"] = key

        attempt = 0
        while True:
            try:
                with webhook_latency_histogram.time():
                    response = self.client.post(self.webhook_url, content=payload, headers=headers)
                    response.raise_for_status()
                    return  # Success

            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise EventPublishError(f"Webhook rejected event: {e.response.status_code}") from e
                error: httpx.HTTPError = e
            except httpx.RequestError as e:
                error = e

            attempt += 1
            if attempt >= self.max_retries:
                raise EventPublishError(f"Webhook delivery failed after {attempt} attempts: {error}") from error

            backoff = self.backoff_base * (2 ** (attempt - 1))
            logger.info(f"Retrying event webhook in {backoff}s", extra={"attempt": attempt, "topic": topic})
            time.sleep(backoff)

    def _deliver_in_background(self, topic: str, payload: bytes, key: Optional[str]) -> None:
        try:
            self.deliver(topic, payload, key)
        except EventPublishError as e:
            advisory_failure_counter.labels(component="publisher").inc()
            logger.warning(f"Event webhook delivery failed: {e}", extra={"topic": topic, "key": key})

    def close(self) -> None:
        """Wait for queued deliveries, then release the HTTP client"""
        self._executor.shutdown(wait=True)
        self.client.close()
