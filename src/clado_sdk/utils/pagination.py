"""Offset and continuation-token pagination over search results.

A :class:`PageIterator` walks a multi-page result set one page at a time.
It can be driven explicitly::

    while it.has_more:
        batch = await it.fetch_next_batch()

or consumed item by item with ``async for``. Pages are requested strictly
in sequence, and only when the caller asks for more, so stopping early
never triggers an extra request.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import (
    Awaitable,
    Callable,
    Deque,
    Generic,
    List,
    Optional,
    Sequence,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results.

    :param items: Items in server order
    :param total: Total number of results the server reports; ``None``
                  when unknown, so only a short page ends iteration
    :param token: Continuation token for the next page, if any
    """

    items: Sequence[T]
    total: Optional[int]
    token: Optional[str] = None


FetchPage = Callable[[Optional[str], int, int], Awaitable[Page[T]]]


class PageIterator(Generic[T]):
    """Forward-only, non-restartable iterator over paged results.

    :param fetch_page: Coroutine function called as
                       ``fetch_page(token, offset, limit)``
    :type fetch_page: FetchPage
    :param limit: Page size to request
    :type limit: int
    """

    def __init__(self, fetch_page: FetchPage, limit: int = 30):
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self._fetch_page = fetch_page
        self.limit = limit
        self._token: Optional[str] = None
        self._offset = 0
        self._exhausted = False
        self._buffer: Deque[T] = deque()
        self.pages_fetched = 0

    @property
    def has_more(self) -> bool:
        """Whether another item or page may still be available."""
        return bool(self._buffer) or not self._exhausted

    async def fetch_next_batch(self) -> List[T]:
        """Return the next batch of items.

        Items left over from a page partially consumed by ``async for``
        are returned first. Once exhausted, returns ``[]`` without a request.
        """
        if self._buffer:
            items = list(self._buffer)
            self._buffer.clear()
            return items
        if self._exhausted:
            return []
        return await self._advance()

    async def _advance(self) -> List[T]:
        page = await self._fetch_page(self._token, self._offset, self.limit)
        self.pages_fetched += 1
        items = list(page.items)

        consumed = self._offset + len(items)
        if len(items) < self.limit or (
            page.total is not None and consumed >= page.total
        ):
            self._exhausted = True
            logger.debug(
                f"Pagination finished after {self.pages_fetched} pages "
                f"({consumed} of {page.total} items)"
            )
        else:
            self._token = page.token
            self._offset += len(items)
        return items

    def __aiter__(self) -> "PageIterator[T]":
        return self

    async def __anext__(self) -> T:
        while not self._buffer:
            if self._exhausted:
                raise StopAsyncIteration
            self._buffer.extend(await self._advance())
        return self._buffer.popleft()
