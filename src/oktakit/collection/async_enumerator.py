"""Item-level cursor that flattens a paged collection into one async sequence.

:class:`CollectionAsyncEnumerator` serves items from the buffered current
page and asks its :class:`~oktakit.collection.paged_enumerator.PagedCollectionEnumerator`
for another page only when the current one is used up, so there is exactly
one suspension point per page boundary.

States::

    NotStarted --move_next()/non-empty page--> ServingPage
    ServingPage --move_next()--> ServingPage    (same page, or next non-empty page)
    ServingPage --move_next()/no next link--> Exhausted
    Exhausted --move_next()--> Exhausted        (returns False, no I/O)
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from oktakit.collection.paged_enumerator import PagedCollectionEnumerator
from oktakit.exceptions import InvalidOperationError
from oktakit.models import HttpRequest, RequestContext

if TYPE_CHECKING:
    from oktakit.datastore import DataStore

T = TypeVar("T")


class CollectionAsyncEnumerator(Generic[T]):
    """Forward-only, single-use async iterator over every item of a collection.

    Supports both the explicit protocol (``await move_next()`` then
    ``current``) and ``async for``. Failures from the page fetch propagate
    unchanged and leave the position untouched, so a later ``move_next()``
    resumes exactly where the failed one left off.

    Closing does not close the data store; the transport belongs to
    whoever created it (normally :class:`~oktakit.client.okta_client.OktaClient`).

    Example::

        async with CollectionAsyncEnumerator(store, request, Group) as groups:
            while await groups.move_next():
                print(groups.current.profile.name)
    """

    def __init__(
        self,
        data_store: DataStore,
        initial_request: HttpRequest,
        model: type[T],
        request_context: Optional[RequestContext] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        self._paged_enumerator: Optional[PagedCollectionEnumerator[T]] = PagedCollectionEnumerator(
            data_store, initial_request, model, request_context, cancel_event,
        )
        self._initialized = False
        self._local_index = 0
        self._exhausted = False

    @property
    def current(self) -> T:
        """The item at the cursor.

        Raises:
            InvalidOperationError: If no item is available (before the first
                successful :meth:`move_next`, after exhaustion, or after
                :meth:`aclose`).
        """
        if self._paged_enumerator is None or not self._initialized or self._exhausted:
            raise InvalidOperationError("move_next() must return True before reading current")
        items = self._paged_enumerator.current_page.items
        if not items:
            raise InvalidOperationError("move_next() must return True before reading current")
        return items[self._local_index]

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    async def move_next(self) -> bool:
        """Advance to the next item.

        Returns:
            ``True`` if :attr:`current` now holds an item, ``False`` once the
            collection is exhausted or the enumerator is closed.
        """
        pager = self._paged_enumerator
        if self._exhausted or pager is None:
            return False

        if self._initialized:
            items = pager.current_page.items
            if self._local_index + 1 < len(items):
                self._local_index += 1
                return True

        # Empty pages in the middle of a collection are skipped.
        while True:
            if not await pager.move_next():
                self._exhausted = True
                return False

            self._initialized = True
            self._local_index = 0
            if pager.current_page.items:
                return True

    async def aclose(self) -> None:
        """Close the page cursor and drop it. Idempotent; never fetches."""
        pager, self._paged_enumerator = self._paged_enumerator, None
        if pager is not None:
            await pager.aclose()

    def __aiter__(self) -> CollectionAsyncEnumerator[T]:
        return self

    async def __anext__(self) -> T:
        if await self.move_next():
            return self.current
        raise StopAsyncIteration

    async def __aenter__(self) -> CollectionAsyncEnumerator[T]:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
