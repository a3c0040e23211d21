"""Groups API (``/api/v1/groups``)."""

from __future__ import annotations

import asyncio
from typing import Optional

from oktakit.api.base import ResourceClient
from oktakit.collection import Collection
from oktakit.models import HttpRequest, RequestContext
from oktakit.resources import Group, User

GROUPS = "/api/v1/groups"
GROUP = "/api/v1/groups/{groupId}"
GROUP_USERS = "/api/v1/groups/{groupId}/users"
GROUP_USER = "/api/v1/groups/{groupId}/users/{userId}"


class GroupsClient(ResourceClient):
    """Group CRUD and membership.

    Example::

        async for group in client.groups.list_groups(q="eng", limit=200):
            print(group.profile.name)
    """

    def list_groups(
        self,
        q: Optional[str] = None,
        search: Optional[str] = None,
        filter: Optional[str] = None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        expand: Optional[str] = None,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Collection[Group]:
        """List groups, optionally filtered.

        Args:
            q: Prefix match on the group name.
            search: SCIM-style search expression, e.g. ``type eq "OKTA_GROUP"``.
            filter: Legacy filter expression.
            after: Cursor to start after; normally left to the next links.
            limit: Page size requested from the server.
            expand: ``stats`` and/or ``app`` to embed extra data.
        """
        return self._collection(
            GROUPS,
            Group,
            query_params={
                "q": q,
                "search": search,
                "filter": filter,
                "after": after,
                "limit": limit,
                "expand": expand,
            },
            request_context=request_context,
            cancel_event=cancel_event,
        )

    async def get_group(
        self,
        group_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Group:
        return await self._data_store.get_resource(
            HttpRequest(uri=GROUP, path_params={"groupId": group_id}),
            Group,
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def create_group(
        self,
        group: Group,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Group:
        """Create an ``OKTA_GROUP``; only ``profile`` is sent."""
        return await self._data_store.post_resource(
            HttpRequest(uri=GROUPS, payload={"profile": group.profile.to_payload()}),
            Group,
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def update_group(
        self,
        group_id: str,
        group: Group,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Group:
        """Replace the group's profile."""
        return await self._data_store.put_resource(
            HttpRequest(
                uri=GROUP,
                path_params={"groupId": group_id},
                payload={"profile": group.profile.to_payload()},
            ),
            Group,
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def delete_group(
        self,
        group_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        await self._data_store.delete_resource(
            HttpRequest(uri=GROUP, path_params={"groupId": group_id}),
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    def list_group_users(
        self,
        group_id: str,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Collection[User]:
        return self._collection(
            GROUP_USERS,
            User,
            path_params={"groupId": group_id},
            query_params={"after": after, "limit": limit},
            request_context=request_context,
            cancel_event=cancel_event,
        )

    async def add_user_to_group(
        self,
        group_id: str,
        user_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        await self._data_store.put_resource(
            HttpRequest(uri=GROUP_USER, path_params={"groupId": group_id, "userId": user_id}),
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def remove_user_from_group(
        self,
        group_id: str,
        user_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        await self._data_store.delete_resource(
            HttpRequest(uri=GROUP_USER, path_params={"groupId": group_id, "userId": user_id}),
            context=self._context(request_context),
            cancel_event=cancel_event,
        )
