"""Per-client rate limiting"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from credit_scoring.config import settings

# In-memory storage; entries expire with their rate-limit window
limiter = Limiter(key_func=get_remote_address)


def current_rate_limit() -> str:
    """Limit string read per request, so configuration changes apply without re-decorating routes"""
    return settings.rate_limit
