"""Domain errors raised by the stores, the access gate and the allow-list."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import status


class RegistryError(Exception):
    """Base class for caller-facing errors.

    ``status_code`` is the HTTP status the API layer answers with and
    ``extra`` is merged into the JSON error body next to ``message``.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra or {}


class ValidationError(RegistryError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(RegistryError):
    """Unknown project, or no live signal to remove."""

    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(RegistryError):
    """Owner mismatch or address missing from the allow-list."""

    status_code = status.HTTP_403_FORBIDDEN


class UpstreamUnavailable(RegistryError):
    """The allow-list service could not be reached or returned garbage.

    Never surfaced to callers: the allow-list cache recovers from it.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
