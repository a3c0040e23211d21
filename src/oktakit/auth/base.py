"""Abstract base class for authentication plugins.

- :class:`AuthResult` -- the HTTP headers an auth plugin produces.
- :class:`AuthPlugin` -- the base class every authentication strategy extends.

See Also:
    :mod:`oktakit.auth.manager` for plugin registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from oktakit.models import AuthConfig


class AuthResult:
    """Container for authentication headers to inject into HTTP requests.

    Merged into every outgoing request by
    :class:`~oktakit.client.async_client.AsyncClient`.

    Example::

        result = AuthResult(headers={"Authorization": "SSWS 00abc"})
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}


class AuthPlugin(ABC):
    """Abstract base class for authentication plugins.

    Subclasses provide an :attr:`auth_type` identifier and an
    :meth:`authenticate` implementation, and are registered with
    :class:`~oktakit.auth.manager.AuthManager`.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the unique auth type identifier this plugin handles."""
        ...

    @abstractmethod
    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve credentials and return the headers to send.

        Raises:
            ConfigError: If the credential source cannot be resolved.
        """
        ...

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        """Return human-readable problems with *auth_config*; empty means valid."""
        return []
