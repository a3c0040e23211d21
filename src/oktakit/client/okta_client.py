"""Top-level entry point for talking to an Okta org."""

from __future__ import annotations

from typing import Optional

import httpx

from oktakit.api import GroupsClient, UsersClient
from oktakit.auth.manager import AuthManager, create_default_manager
from oktakit.client.async_client import AsyncClient
from oktakit.datastore import DataStore
from oktakit.exceptions import InvalidOperationError
from oktakit.models import Profile, RequestContext


class OktaClient:
    """Async facade bundling the transport, data store, and resource clients.

    The HTTP connection pool lives for the duration of the ``async with``
    block; collections obtained from it must be consumed inside the block.

    Args:
        profile: Org URL, auth, and request settings.
        auth_manager: Defaults to :func:`~oktakit.auth.create_default_manager`.
        request_context: Default context for every call made through this client.
        transport: Optional custom :mod:`httpx` transport.

    Example::

        async with OktaClient(profile) as client:
            async for user in client.groups.list_group_users("00g1"):
                print(user.profile.login)
    """

    def __init__(
        self,
        profile: Profile,
        auth_manager: Optional[AuthManager] = None,
        request_context: Optional[RequestContext] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._profile = profile
        self._http = AsyncClient(
            profile,
            auth_manager=auth_manager or create_default_manager(),
            transport=transport,
        )
        self._data_store = DataStore(self._http)
        self._groups = GroupsClient(self._data_store, request_context)
        self._users = UsersClient(self._data_store, request_context)

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def data_store(self) -> DataStore:
        return self._data_store

    @property
    def groups(self) -> GroupsClient:
        self._ensure_open()
        return self._groups

    @property
    def users(self) -> UsersClient:
        self._ensure_open()
        return self._users

    def _ensure_open(self) -> None:
        if not self._http.is_open:
            raise InvalidOperationError("OktaClient must be used as an async context manager")

    async def __aenter__(self) -> OktaClient:
        await self._http.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._http.aclose()
