"""Configuration management using Pydantic Settings"""

from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (required)
    database_url: str
    database_max_connections: int = 50

    # Cache
    redis_url: str = "redis://localhost:6379/0"
    redis_password: Optional[str] = None
    redis_socket_timeout_seconds: float = 2.0
    cache_key_prefix: str = "credit_score:"
    cache_ttl_seconds: int = 900  # 15 minutes

    # Scoring
    score_validity_days: int = 30
    history_limit: int = 12

    # Events
    event_transport: str = "kafka"  # kafka | webhook
    kafka_bootstrap_servers: str = "localhost:9092"
    event_topic: str = "credit-scoring-events"
    event_webhook_url: str = "http://localhost:8002/events"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = 3
    webhook_backoff_base: float = 0.5  # Exponential backoff base in seconds

    # Auth (secret is required)
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15

    # Rate limiting (per client address)
    rate_limit: str = "100/second"

    # CORS
    cors_allow_origins: List[str] = ["*"]

    # Service
    service_name: str = "credit-scoring"
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    @field_validator("database_url", "jwt_secret")
    @classmethod
    def require_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("database_max_connections")
    @classmethod
    def require_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value


settings = Settings()
