"""Page-level cursor over an Okta collection endpoint.

:class:`PagedCollectionEnumerator` issues the initial request on its first
:meth:`~PagedCollectionEnumerator.move_next` and then follows the
``next`` link of each page until a page arrives without one. Use it
directly to page through a collection yourself; most callers iterate a
:class:`~oktakit.collection.collection.Collection` instead.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from oktakit.collection.page import CollectionPage
from oktakit.exceptions import InvalidOperationError
from oktakit.models import HttpRequest, RequestContext

if TYPE_CHECKING:
    from oktakit.datastore import DataStore

T = TypeVar("T")


class PagedCollectionEnumerator(Generic[T]):
    """Forward-only, single-use cursor over the pages of a collection.

    Only the most recent page is held. A failed fetch installs nothing, so
    calling :meth:`move_next` again re-issues the same request.

    Args:
        data_store: Performs the fetches (see :meth:`DataStore.get_page`).
        initial_request: Request for the first page.
        model: Resource type each item is parsed into.
        request_context: Metadata sent with every page request.
        cancel_event: Cancellation signal observed during each fetch.
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
        self._model = model
        self._request_context = request_context
        self._cancel_event = cancel_event
        self._next_request: Optional[HttpRequest] = initial_request
        self._current_page: Optional[CollectionPage[T]] = None
        self._started = False

    @property
    def current_page(self) -> CollectionPage[T]:
        """The most recently fetched page.

        Raises:
            InvalidOperationError: Before the first successful :meth:`move_next`.
        """
        if self._current_page is None:
            raise InvalidOperationError("move_next() must succeed before reading current_page")
        return self._current_page

    @property
    def started(self) -> bool:
        return self._started

    async def move_next(self) -> bool:
        """Fetch the next page.

        Returns:
            ``True`` if a page was fetched and installed, ``False`` if the
            current page was the last one. Once ``False`` it stays ``False``.

        Raises:
            OktaError: Whatever the data store raised; state is unchanged.
            OperationCancelledError: If the cancellation signal fired.
        """
        if self._next_request is None:
            return False

        page = await self._data_store.get_page(
            self._next_request,
            self._model,
            context=self._request_context,
            cancel_event=self._cancel_event,
        )

        # The next link already carries the query string; only headers carry over.
        next_request = None
        if page.next_link:
            next_request = HttpRequest(uri=page.next_link, headers=dict(self._next_request.headers))

        self._started = True
        self._current_page = page
        self._next_request = next_request
        return True

    async def aclose(self) -> None:
        """Drop the current page and the pending next request.

        Afterwards :meth:`move_next` returns ``False`` without I/O. Idempotent.
        """
        self._current_page = None
        self._next_request = None
