"""Domain errors raised by the status board and mapped to HTTP responses."""


class DomainError(Exception):
    def __init__(self, message: str, status_code: int = 400, code: str | None = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class LayoutValidationError(DomainError):
    """Seat layout input outside the room grid or otherwise malformed."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class ConflictError(DomainError):
    def __init__(self, message: str, code: str):
        super().__init__(message, 400, code)


class UnauthorizedError(DomainError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, 401)


class NotFoundError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 404)
