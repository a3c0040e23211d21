"""Pick the auth plugin named by a profile and run it."""

from __future__ import annotations

from oktakit.auth.base import AuthPlugin, AuthResult
from oktakit.exceptions import AuthError
from oktakit.models import Profile


class AuthManager:
    """Auth plugins keyed by :attr:`AuthPlugin.auth_type`.

    ``AsyncClient`` calls :meth:`authenticate` once per session and reuses
    the resulting headers on every request, including next-link fetches.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, AuthPlugin] = {}

    def register(self, plugin: AuthPlugin) -> None:
        # Last registration for a type wins.
        self._plugins[plugin.auth_type] = plugin

    def get_plugin(self, auth_type: str) -> AuthPlugin:
        try:
            return self._plugins[auth_type]
        except KeyError:
            known = ", ".join(self.list_types()) or "(none)"
            raise AuthError(
                f"No auth plugin registered for type '{auth_type}' (known: {known})"
            ) from None

    def authenticate(self, profile: Profile) -> AuthResult:
        """Headers for *profile*; empty when the profile has no ``auth`` block."""
        auth = profile.auth
        if auth is None:
            return AuthResult()
        return self.get_plugin(auth.type).authenticate(auth)

    def list_types(self) -> list[str]:
        return sorted(self._plugins)


def create_default_manager() -> AuthManager:
    """A manager that knows ``ssws`` API tokens and ``bearer`` access tokens."""
    from oktakit.plugins.bearer import BearerAuthPlugin
    from oktakit.plugins.ssws import SSWSAuthPlugin

    manager = AuthManager()
    for plugin in (SSWSAuthPlugin(), BearerAuthPlugin()):
        manager.register(plugin)
    return manager
