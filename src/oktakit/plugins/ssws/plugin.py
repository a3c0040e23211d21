"""Okta API token (SSWS) auth plugin.

API tokens are created in the Okta admin console under *Security > API >
Tokens* and are sent with the proprietary ``SSWS`` scheme. The token is
resolved from the configured ``source`` (e.g. ``env:OKTA_CLIENT_TOKEN``).
"""

from __future__ import annotations

from oktakit.auth.base import AuthPlugin, AuthResult
from oktakit.config import resolve_credential
from oktakit.models import AuthConfig


class SSWSAuthPlugin(AuthPlugin):
    """Authenticate with an Okta API token in the Authorization header."""

    @property
    def auth_type(self) -> str:
        return "ssws"

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve the API token and return an ``Authorization: SSWS <token>`` header."""
        token = resolve_credential(auth_config.source).strip()
        return AuthResult(headers={"Authorization": f"SSWS {token}"})

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.source:
            errors.append("SSWS auth requires a 'source' for the API token")
        return errors
