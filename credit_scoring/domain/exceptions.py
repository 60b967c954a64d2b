"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidScoreRequestError(DomainException):
    """Scoring request is malformed or outside the accepted domain"""

    pass


class UnknownEmploymentStatusError(DomainException):
    """Employment status outside the fixed enumeration reached the scorer"""

    def __init__(self, status: str):
        super().__init__(f"Unknown employment status: {status!r}")
        self.status = status


class ScoreStoreError(DomainException):
    """Durable score storage failed to read or write"""

    pass


class ScoreNotFoundError(DomainException):
    """No credit score has been computed for the user yet"""

    def __init__(self, user_id: str):
        super().__init__(f"No credit score found for user {user_id}")
        self.user_id = user_id


class AdvisoryError(DomainException):
    """Failure of a non-essential side effect; logged, never propagated"""

    pass


class CacheError(AdvisoryError):
    """Score cache is unavailable or returned an error"""

    pass


class EventPublishError(AdvisoryError):
    """Scoring event could not be handed to the transport"""

    pass
