"""Exception hierarchy for oktakit.

All exceptions inherit from :class:`OktaError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`oktakit.exit_codes`.
Library callers catch ``OktaError`` (or a subclass); the CLI entry point in
:func:`oktakit.app.main` turns it into a process exit code.

Errors raised for an HTTP response derive from :class:`OktaApiError` and
carry the fields of the Okta error body (``errorCode``, ``errorSummary``,
``errorId``, ``errorCauses``).

Subclass hierarchy::

    OktaError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- InvalidOperationError    (exit 2)
    +-- ConfigError              (exit 1)
    +-- ConnectionError_         (exit 6)
    +-- ResponseParseError       (exit 5)
    +-- OperationCancelledError  (exit 130)
    +-- OktaApiError             (exit 5)
        +-- AuthError            (exit 3)
        +-- NotFoundError        (exit 4)
        +-- RateLimitError       (exit 7)
        +-- ServerError          (exit 5)
"""

from __future__ import annotations

from typing import Any, Optional

from oktakit.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CANCELLED,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_SERVER_ERROR,
)


class OktaError(Exception):
    """Base exception for all oktakit errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OktaError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class InvalidOperationError(OktaError):
    """Raised when an object is used in a state that does not allow the call.

    For example reading :attr:`CollectionAsyncEnumerator.current` before the
    first successful ``move_next()``.
    """

    exit_code = EXIT_INVALID_USAGE


class ConfigError(OktaError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConnectionError_(OktaError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ResponseParseError(OktaError):
    """Raised when a response body is not valid JSON or does not match the expected shape."""

    exit_code = EXIT_SERVER_ERROR


class OperationCancelledError(OktaError):
    """Raised when the caller's cancellation signal fires before or during a fetch."""

    exit_code = EXIT_CANCELLED


class OktaApiError(OktaError):
    """Raised when the org answers with an error status.

    Args:
        message: Human-readable error description.
        status: HTTP status code of the response.
        error_code: Okta error code, e.g. ``E0000007``.
        error_summary: Okta's human-readable summary.
        error_id: Okta's per-request error identifier.
        error_causes: List of ``{"errorSummary": ...}`` cause objects.
    """

    exit_code = EXIT_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status: int = 0,
        error_code: Optional[str] = None,
        error_summary: Optional[str] = None,
        error_id: Optional[str] = None,
        error_causes: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.error_code = error_code
        self.error_summary = error_summary
        self.error_id = error_id
        self.error_causes = error_causes or []


class AuthError(OktaApiError):
    """Raised when the org rejects the credentials (HTTP 401 / 403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(OktaApiError):
    """Raised when the org returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class RateLimitError(OktaApiError):
    """Raised when HTTP 429 persists after all retries."""

    exit_code = EXIT_RATE_LIMITED


class ServerError(OktaApiError):
    """Raised when the org returns an HTTP 5xx error."""

    exit_code = EXIT_SERVER_ERROR
