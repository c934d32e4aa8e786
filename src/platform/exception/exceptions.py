class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int, error: str | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(message)


class ValidationError(CustomBaseError):
    def __init__(self, message: str, error: str | None = None) -> None:
        super().__init__(message, 400, error)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ConflictError(CustomBaseError):
    # The public API reports state conflicts (already paid, seat taken, sold out) as 400
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class InternalError(CustomBaseError):
    def __init__(self, message: str = 'Internal server error', error: str | None = None) -> None:
        super().__init__(message, 500, error)
