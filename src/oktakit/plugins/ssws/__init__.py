"""Okta API token authentication plugin.

Implements the ``ssws`` auth type, which sends the org API token as
``Authorization: SSWS <token>``.

See Also:
    :class:`~oktakit.plugins.ssws.plugin.SSWSAuthPlugin`
"""

from oktakit.plugins.ssws.plugin import SSWSAuthPlugin

__all__ = ["SSWSAuthPlugin"]
