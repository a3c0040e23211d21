"""Re-iterable handle on an Okta collection endpoint."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from oktakit.collection.async_enumerator import CollectionAsyncEnumerator
from oktakit.collection.page import CollectionPage
from oktakit.collection.paged_enumerator import PagedCollectionEnumerator
from oktakit.models import HttpRequest, RequestContext

if TYPE_CHECKING:
    from oktakit.datastore import DataStore

T = TypeVar("T")


class Collection(Generic[T]):
    """A lazily-fetched collection returned by ``list_*`` methods.

    Creating a ``Collection`` performs no I/O. Every ``async for`` starts a
    fresh :class:`CollectionAsyncEnumerator` from the first page, so the same
    object can be iterated more than once.

    Example::

        groups = client.groups.list_groups(q="eng")
        async for group in groups:
            print(group.id, group.profile.name)
    """

    def __init__(
        self,
        data_store: DataStore,
        initial_request: HttpRequest,
        model: type[T],
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        self._data_store = data_store
        self._initial_request = initial_request
        self._model = model
        self._request_context = request_context
        self._cancel_event = cancel_event

    @property
    def initial_request(self) -> HttpRequest:
        return self._initial_request

    def __aiter__(self) -> CollectionAsyncEnumerator[T]:
        return CollectionAsyncEnumerator(
            self._data_store,
            self._initial_request.model_copy(deep=True),
            self._model,
            self._request_context,
            self._cancel_event,
        )

    def get_paged_enumerator(self) -> PagedCollectionEnumerator[T]:
        """Return a new page-level cursor for callers who page manually."""
        return PagedCollectionEnumerator(
            self._data_store,
            self._initial_request.model_copy(deep=True),
            self._model,
            self._request_context,
            self._cancel_event,
        )

    async def pages(self) -> AsyncIterator[CollectionPage[T]]:
        """Yield whole pages, including empty ones, in server order.

        Closing the generator early (``aclose()`` or leaving an
        ``async with contextlib.aclosing(...)`` block) closes the page cursor.
        """
        enumerator = self.get_paged_enumerator()
        try:
            while await enumerator.move_next():
                yield enumerator.current_page
        finally:
            await enumerator.aclose()

    async def to_list(self, limit: Optional[int] = None) -> list[T]:
        """Collect items into a list, stopping after *limit* items if given.

        Pages beyond the one holding the *limit*-th item are not fetched.
        """
        results: list[T] = []
        if limit is not None and limit <= 0:
            return results
        async with self.__aiter__() as enumerator:
            async for item in enumerator:
                results.append(item)
                if limit is not None and len(results) >= limit:
                    break
        return results

    async def first(self) -> Optional[T]:
        """Return the first item, or ``None`` for an empty collection."""
        async with self.__aiter__() as enumerator:
            if await enumerator.move_next():
                return enumerator.current
        return None
