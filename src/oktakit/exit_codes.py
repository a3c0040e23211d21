"""Numeric process exit codes for the ``oktakit`` command line.

Each constant maps to an error category and is referenced by the
corresponding :class:`~oktakit.exceptions.OktaError` subclass, so shell
scripts can tell a rejected token from a missing group without parsing
stderr.

Example::

    $ oktakit groups get 00g1nonexistent
    $ echo $?
    4   # EXIT_NOT_FOUND
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or in an invalid state."""

EXIT_AUTH_FAILURE = 3
"""The API token or access token was rejected (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The org returned an HTTP 5xx error or an unexpected 4xx error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_RATE_LIMITED = 7
"""The org kept answering HTTP 429 after all retries."""

EXIT_CANCELLED = 130
"""The operation was cancelled (Ctrl-C or a cancellation signal)."""
