"""Bearer token authentication plugin.

Implements the ``bearer`` auth type for OAuth 2.0 access tokens issued by
the org authorization server.

See Also:
    :class:`~oktakit.plugins.bearer.plugin.BearerAuthPlugin`
"""

from oktakit.plugins.bearer.plugin import BearerAuthPlugin

__all__ = ["BearerAuthPlugin"]
