"""Centralized error factory for Music Catalog SDK.

Provides consistent creation of the errors the pipeline synthesizes locally.
"""

from __future__ import annotations

from ..errors import ApiError, ErrorKind, StatusCode

MISSING_TOKEN_TITLE = "Unauthorized request"
MISSING_TOKEN_DETAIL = "Missing token, refresh current token or request a new token"
MISSING_CONFIGURATION_DETAIL = "missing token configuration"


def scaled_status_code(status_code: int | None) -> StatusCode | None:
    """Look up ``status_code * 100`` against StatusCode.

    A raw 4 maps to BAD_REQUEST (400); a real three-digit status such as 404
    becomes 40400 and finds no member.
    """
    if status_code is None:
        return None
    return StatusCode.lookup(status_code * 100)


class ErrorFactory:
    """Centralized error creation with consistent structure."""

    @staticmethod
    def missing_configuration() -> ApiError:
        """Key id, team id or token server is not configured."""
        return ApiError(
            status="401",
            code=StatusCode.UNAUTHORIZED,
            detail=MISSING_CONFIGURATION_DETAIL,
            kind=ErrorKind.CONFIGURATION,
        )

    @staticmethod
    def missing_token() -> ApiError:
        """The token pair lacks a token the auth mode requires."""
        return ApiError(
            status="401",
            code=StatusCode.UNAUTHORIZED,
            title=MISSING_TOKEN_TITLE,
            detail=MISSING_TOKEN_DETAIL,
            kind=ErrorKind.AUTH,
        )

    @staticmethod
    def malformed_url(url: str) -> ApiError:
        """The built URL could not be parsed; carries no status."""
        return ApiError(
            title="Failed to create URL",
            detail=f"Malformed request URL: {url!r}",
            kind=ErrorKind.MALFORMED_URL,
        )

    @staticmethod
    def from_transport_error(
        error: BaseException,
        status_code: int | None = None,
    ) -> ApiError:
        """Create error for a failed network exchange.

        Args:
            error: Transport-level exception.
            status_code: HTTP status, if a response was received.

        Returns:
            ApiError with the error description as detail.
        """
        return ApiError(
            status=str(status_code) if status_code is not None else None,
            code=scaled_status_code(status_code),
            detail=str(error) or error.__class__.__name__,
            kind=ErrorKind.TRANSPORT,
        )

    @staticmethod
    def no_response() -> ApiError:
        """Neither a body nor a transport error came back."""
        return ApiError(kind=ErrorKind.NO_RESPONSE)
