"""Application error taxonomy, mapped to HTTP responses in main.py."""


class AppError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Error interno"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input on create; nothing was persisted."""

    status_code = 400
    default_message = "Faltan campos obligatorios"


class AuthError(AppError):
    status_code = 401
    default_message = "Código incorrecto"


class NotFoundError(AppError):
    status_code = 404
    default_message = "No encontrado"


class RateLimitError(AppError):
    status_code = 429
    default_message = "Demasiados intentos, inténtalo más tarde"

    def __init__(self, message: str | None = None, retry_after: int | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class StorageError(AppError):
    """Unexpected store fault. The message shown to clients is always generic."""

    status_code = 500
    default_message = "Error interno del servidor"


class NotAuthenticated(Exception):
    """Raised by the teacher gate; answered with a redirect to /login."""
