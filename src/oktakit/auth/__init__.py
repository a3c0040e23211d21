"""Plugin-based authentication for oktakit.

Okta's management API accepts either an API token (``Authorization: SSWS
<token>``) or an OAuth 2.0 access token (``Authorization: Bearer <token>``).
Each strategy is an :class:`AuthPlugin`; :class:`AuthManager` maps the
profile's ``auth.type`` to the matching plugin.

Typical usage::

    from oktakit.auth import create_default_manager

    manager = create_default_manager()
    auth_result = manager.authenticate(profile)
"""

from oktakit.auth.base import AuthPlugin, AuthResult
from oktakit.auth.manager import AuthManager, create_default_manager

__all__ = [
    "AuthPlugin",
    "AuthResult",
    "AuthManager",
    "create_default_manager",
]
