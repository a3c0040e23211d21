"""HTTP layer for oktakit.

Classes:
    :class:`AsyncClient` -- :class:`httpx.AsyncClient` wrapper with auth,
    retry, and Okta error mapping.
    :class:`OktaClient` -- the facade most callers use.

Example::

    from oktakit.client import OktaClient

    async with OktaClient(profile) as client:
        group = await client.groups.get_group("00g1")
"""

from oktakit.client.async_client import AsyncClient
from oktakit.client.okta_client import OktaClient

__all__ = ["AsyncClient", "OktaClient"]
