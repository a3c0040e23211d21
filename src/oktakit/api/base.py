"""Shared plumbing for the resource clients."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, TypeVar

from oktakit.collection import Collection
from oktakit.datastore import DataStore
from oktakit.models import HttpRequest, RequestContext

T = TypeVar("T")


class ResourceClient:
    """Base class holding the data store and an optional default request context."""

    def __init__(
        self,
        data_store: DataStore,
        request_context: Optional[RequestContext] = None,
    ) -> None:
        self._data_store = data_store
        self._request_context = request_context

    def _context(self, request_context: Optional[RequestContext]) -> Optional[RequestContext]:
        return request_context if request_context is not None else self._request_context

    def _collection(
        self,
        uri: str,
        model: type[T],
        path_params: Optional[dict[str, Any]] = None,
        query_params: Optional[dict[str, Any]] = None,
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Collection[T]:
        request = HttpRequest(
            uri=uri,
            path_params=path_params or {},
            query_params=query_params or {},
        )
        return Collection(
            self._data_store,
            request,
            model,
            request_context=self._context(request_context),
            cancel_event=cancel_event,
        )
