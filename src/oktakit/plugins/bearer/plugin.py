"""Bearer token authentication plugin.

A pre-existing OAuth 2.0 access token (scoped e.g. ``okta.groups.read``) is
resolved from the configured ``source`` and sent as
``Authorization: Bearer <token>``. No token exchange or refresh happens here.
"""

from __future__ import annotations

from oktakit.auth.base import AuthPlugin, AuthResult
from oktakit.config import resolve_credential
from oktakit.models import AuthConfig


class BearerAuthPlugin(AuthPlugin):
    """Authenticate via Bearer token in the Authorization header."""

    @property
    def auth_type(self) -> str:
        return "bearer"

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        token = resolve_credential(auth_config.source).strip()
        return AuthResult(headers={"Authorization": f"Bearer {token}"})

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.source:
            errors.append("Bearer auth requires a 'source' for the token")
        return errors
