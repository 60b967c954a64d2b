"""Kafka producer for scoring events"""

import logging
from typing import Any, Optional
from confluent_kafka import KafkaException, Producer
from credit_scoring.config import settings
from credit_scoring.domain.exceptions import EventPublishError

logger = logging.getLogger(__name__)


def _on_delivery(err: Any, msg: Any) -> None:
    """Delivery report callback, served from poll()/flush()"""
    if err is not None:
        logger.warning(
            f"Event delivery failed: {err}",
            extra={"topic": msg.topic() if msg is not None else None},
        )


class KafkaEventPublisher:
    """Fire-and-forget publisher; waits for local enqueue, not broker acknowledgment"""

    def __init__(self, bootstrap_servers: Optional[str] = None, producer: Optional[Producer] = None):
        self.bootstrap_servers = bootstrap_servers or settings.kafka_bootstrap_servers
        self._producer = producer

    @property
    def producer(self) -> Producer:
        if self._producer is None:
            self._producer = Producer({
                "bootstrap.servers": self.bootstrap_servers,
                "acks": 1,
                "linger.ms": 5,
                "message.timeout.ms": 10000,
            })
            logger.info("Kafka producer initialized", extra={"bootstrap_servers": self.bootstrap_servers})
        return self._producer

    def publish(self, topic: str, payload: bytes, key: Optional[str] = None) -> None:
        """
        Enqueue an event on the topic.

        Raises:
            EventPublishError: Producer rejected the message (queue full, bad config)
        """
        try:
            self.producer.produce(
                topic,
                value=payload,
                key=key.encode("utf-8") if key is not None else None,
                on_delivery=_on_delivery,
            )
            self.producer.poll(0)
        except (KafkaException, BufferError) as e:
            raise EventPublishError(f"Kafka produce to {topic} failed: {e}") from e

    def close(self, timeout: float = 10.0) -> None:
        """Flush pending messages"""
        if self._producer is not None:
            remaining = self._producer.flush(timeout)
            if remaining:
                logger.warning(f"{remaining} events still queued after flush")
