"""Data store -- turns :class:`~oktakit.models.HttpRequest` objects into typed results.

:class:`DataStore` sits between the resource clients / collection cursors
and the HTTP transport. It resolves path templates, adds request-context
headers, runs each call under the caller's cancellation signal, and
deserialises JSON into :mod:`oktakit.resources` models.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from oktakit.cancellation import run_cancellable
from oktakit.client.async_client import AsyncClient
from oktakit.client.response import extract_response_data, get_next_link
from oktakit.collection.page import CollectionPage
from oktakit.exceptions import ResponseParseError
from oktakit.models import HttpRequest, HTTPMethod, RequestContext

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class DataStore:
    """Executes requests against one org through an :class:`AsyncClient`.

    Args:
        client: An entered :class:`AsyncClient`.
        owns_client: When ``True``, :meth:`aclose` also closes *client*.
    """

    def __init__(self, client: AsyncClient, owns_client: bool = False) -> None:
        self._client = client
        self._owns_client = owns_client

    @property
    def client(self) -> AsyncClient:
        return self._client

    # ------------------------------------------------------------------ #
    # Collections
    # ------------------------------------------------------------------ #

    async def get_page(
        self,
        request: HttpRequest,
        model: type[M],
        context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> CollectionPage[M]:
        """Fetch one page of a collection.

        Raises:
            ResponseParseError: If the body is not a JSON array of *model* objects.
            OperationCancelledError: If *cancel_event* fires first.
            OktaError: Any transport or status error from the client.
        """
        response = await self._send(request, context, cancel_event)
        data = extract_response_data(response)
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ResponseParseError(
                f"Expected a JSON array from {request.resolved_uri()}, "
                f"got {type(data).__name__}"
            )
        try:
            items = [model.model_validate(item) for item in data]
        except ValidationError as exc:
            raise ResponseParseError(
                f"Cannot parse {model.__name__} from {request.resolved_uri()}: {exc}"
            ) from exc

        next_link = get_next_link(response)
        logger.debug(
            "Fetched %d %s item(s) from %s (next: %s)",
            len(items), model.__name__, request.resolved_uri(), next_link or "none",
        )
        return CollectionPage(
            items=items,
            next_link=next_link,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    # ------------------------------------------------------------------ #
    # Single resources
    # ------------------------------------------------------------------ #

    async def get_resource(
        self,
        request: HttpRequest,
        model: type[M],
        context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> M:
        response = await self._send(request, context, cancel_event)
        return self._parse_resource(response, request, model)

    async def post_resource(
        self,
        request: HttpRequest,
        model: Optional[type[M]] = None,
        context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[M]:
        """POST ``request.payload``; parse the body into *model* when given."""
        request = request.model_copy(update={"method": HTTPMethod.POST})
        response = await self._send(request, context, cancel_event)
        if model is None:
            return None
        return self._parse_resource(response, request, model)

    async def put_resource(
        self,
        request: HttpRequest,
        model: Optional[type[M]] = None,
        context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[M]:
        request = request.model_copy(update={"method": HTTPMethod.PUT})
        response = await self._send(request, context, cancel_event)
        if model is None:
            return None
        return self._parse_resource(response, request, model)

    async def delete_resource(
        self,
        request: HttpRequest,
        context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        request = request.model_copy(update={"method": HTTPMethod.DELETE})
        await self._send(request, context, cancel_event)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _build_headers(
        self, request: HttpRequest, context: Optional[RequestContext]
    ) -> dict[str, str]:
        headers = dict(request.headers)
        if context is not None:
            headers.update(context.to_headers())
            if context.user_agent:
                headers["User-Agent"] = f"{self._client.user_agent} {context.user_agent}"
        return headers

    async def _send(
        self,
        request: HttpRequest,
        context: Optional[RequestContext],
        cancel_event: Optional[asyncio.Event],
    ) -> httpx.Response:
        body: Any = request.payload
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)

        logger.debug("%s %s", request.method.value, request.resolved_uri())
        return await run_cancellable(
            self._client.request(
                request.method.value,
                request.resolved_uri(),
                params=request.effective_query(),
                headers=self._build_headers(request, context),
                json_body=body,
            ),
            cancel_event,
        )

    @staticmethod
    def _parse_resource(response: httpx.Response, request: HttpRequest, model: type[M]) -> M:
        data = extract_response_data(response)
        if not isinstance(data, dict):
            raise ResponseParseError(
                f"Expected a JSON object from {request.resolved_uri()}, "
                f"got {type(data).__name__}"
            )
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ResponseParseError(
                f"Cannot parse {model.__name__} from {request.resolved_uri()}: {exc}"
            ) from exc
