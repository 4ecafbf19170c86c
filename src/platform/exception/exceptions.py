class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Malformed input: inverted or too short windows, start in the past, bad coordinates"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


# Acting on another member's booking
AuthorizationError = ForbiddenError


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class PresenceError(CustomBaseError):
    """Member is outside the geofence or has no known location. The booking stays pending."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class ConsistencyError(CustomBaseError):
    """Booking records and derived seat state diverged, or a multi-step write half-applied."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
