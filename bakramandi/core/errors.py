from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base for errors rendered as an ``ErrorResponse`` by the API."""

    status_code: int = 400
    code: str = "error"

    def __init__(self, message: str, *, details: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(AppError):
    status_code = 422
    code = "validation_error"


class InvalidTokenError(AppError):
    status_code = 400
    code = "invalid_token"


class NetworkError(Exception):
    """The payments endpoint could not be reached or answered non-2xx."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(Exception):
    """The payments endpoint answered with a body that is not a list of orders."""

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []
