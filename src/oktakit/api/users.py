"""Users API (``/api/v1/users``)."""

from __future__ import annotations

import asyncio
from typing import Optional

from oktakit.api.base import ResourceClient
from oktakit.collection import Collection
from oktakit.models import HttpRequest, RequestContext
from oktakit.resources import Group, User

USERS = "/api/v1/users"
USER = "/api/v1/users/{userId}"
USER_GROUPS = "/api/v1/users/{userId}/groups"
USER_DEACTIVATE = "/api/v1/users/{userId}/lifecycle/deactivate"


class UsersClient(ResourceClient):
    """User CRUD, lifecycle, and group membership lookup."""

    def list_users(
        self,
        q: Optional[str] = None,
        search: Optional[str] = None,
        filter: Optional[str] = None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Collection[User]:
        """List users.

        Args:
            q: Prefix match on first name, last name, or email.
            search: Search expression, e.g. ``profile.department eq "Eng"``.
            filter: Filter expression, e.g. ``status eq "ACTIVE"``.
            after: Cursor to start after.
            limit: Page size requested from the server.
        """
        return self._collection(
            USERS,
            User,
            query_params={
                "q": q,
                "search": search,
                "filter": filter,
                "after": after,
                "limit": limit,
            },
            request_context=request_context,
            cancel_event=cancel_event,
        )

    async def get_user(
        self,
        user_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> User:
        """Fetch a user by id or login."""
        return await self._data_store.get_resource(
            HttpRequest(uri=USER, path_params={"userId": user_id}),
            User,
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def create_user(
        self,
        user: User,
        activate: bool = True,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> User:
        return await self._data_store.post_resource(
            HttpRequest(
                uri=USERS,
                query_params={"activate": str(activate).lower()},
                payload=user.to_payload(),
            ),
            User,
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def update_user(
        self,
        user_id: str,
        user: User,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> User:
        """Replace the user's profile (and credentials, if set)."""
        payload = {"profile": user.profile.to_payload()}
        if user.credentials:
            payload["credentials"] = user.credentials
        return await self._data_store.put_resource(
            HttpRequest(uri=USER, path_params={"userId": user_id}, payload=payload),
            User,
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def deactivate_user(
        self,
        user_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        await self._data_store.post_resource(
            HttpRequest(uri=USER_DEACTIVATE, path_params={"userId": user_id}),
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    async def delete_user(
        self,
        user_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        """Delete a user; Okta requires it to be deactivated first."""
        await self._data_store.delete_resource(
            HttpRequest(uri=USER, path_params={"userId": user_id}),
            context=self._context(request_context),
            cancel_event=cancel_event,
        )

    def list_user_groups(
        self,
        user_id: str,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Collection[Group]:
        return self._collection(
            USER_GROUPS,
            Group,
            path_params={"userId": user_id},
            request_context=request_context,
            cancel_event=cancel_event,
        )
