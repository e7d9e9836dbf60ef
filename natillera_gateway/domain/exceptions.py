"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BackendAPIError(DomainException):
    """Natillera backend returned an error, is unavailable, or sent malformed data"""

    pass


class BackendUnauthorizedError(BackendAPIError):
    """Backend rejected the forwarded credentials (HTTP 401)"""

    pass


class ResourceNotFoundError(BackendAPIError):
    """Requested group, loan or raffle does not exist (HTTP 404)"""

    pass
