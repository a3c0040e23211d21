"""Paged collection enumeration.

The server hands out collections one page at a time, linked by
``rel="next"`` headers. Two cursors turn that into a flat async sequence:

* :class:`PagedCollectionEnumerator` -- follows next links, one page in memory.
* :class:`CollectionAsyncEnumerator` -- walks the items of the current page
  and pulls the next page only when the current one runs out.

:class:`Collection` is what the resource clients return; each iteration
over it builds a fresh pair of cursors.
"""

from oktakit.collection.async_enumerator import CollectionAsyncEnumerator
from oktakit.collection.collection import Collection
from oktakit.collection.page import CollectionPage
from oktakit.collection.paged_enumerator import PagedCollectionEnumerator

__all__ = [
    "Collection",
    "CollectionAsyncEnumerator",
    "CollectionPage",
    "PagedCollectionEnumerator",
]
