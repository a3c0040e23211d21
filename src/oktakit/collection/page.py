"""A single page of an API collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class CollectionPage(Generic[T]):
    """Items of one page in server order, plus the link to the next page.

    ``next_link`` is opaque: it is whatever the server put in the
    ``rel="next"`` Link header, and ``None`` marks the last page.
    """

    items: list[T] = field(default_factory=list)
    next_link: Optional[str] = None
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def has_next(self) -> bool:
        return self.next_link is not None
