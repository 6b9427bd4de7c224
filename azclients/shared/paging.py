# azclients/shared/paging.py
"""
Continuation-token pagination.

A pager is built from two callables:

- ``first_page(page_size_hint)`` fetches the first page;
- ``next_page(continuation_token, page_size_hint)`` fetches the page the
  token points at.

Both return a :class:`Page`. The pager is lazy: nothing is requested until
it is iterated, and a further page is requested only while the previous one
carried a non-empty continuation token. Iterating the same pager twice
replays the sequence from the start (two fresh sets of requests).

Typical usage::

    for twin in devices.get_twins():
        ...

    for page in devices.get_twins().by_page():
        save_checkpoint(page.continuation_token)

    # resume later
    for page in devices.get_twins().by_page(continuation_token=checkpoint):
        ...
"""
from dataclasses import dataclass, field
from typing import (
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Iterator,
    List,
    Optional,
    TypeVar,
)

import httpx

T = TypeVar("T")

FirstPage = Callable[[Optional[int]], "Page[T]"]
NextPage = Callable[[str, Optional[int]], "Page[T]"]
AsyncFirstPage = Callable[[Optional[int]], Awaitable["Page[T]"]]
AsyncNextPage = Callable[[str, Optional[int]], Awaitable["Page[T]"]]


@dataclass
class Page(Generic[T]):
    values: List[T] = field(default_factory=list)
    continuation_token: Optional[str] = None
    raw_response: Optional[httpx.Response] = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


class ItemPaged(Generic[T]):
    """Lazy iterable of items spread over continuation-token pages."""

    def __init__(
        self,
        first_page: FirstPage,
        next_page: NextPage,
        page_size_hint: Optional[int] = None,
    ):
        self._first_page = first_page
        self._next_page = next_page
        self._page_size_hint = page_size_hint

    def by_page(
        self,
        continuation_token: Optional[str] = None,
        page_size_hint: Optional[int] = None,
    ) -> Iterator[Page[T]]:
        """
        Iterate page by page. With ``continuation_token`` the sequence
        resumes at that page and ``first_page`` is never called.
        """
        size = page_size_hint if page_size_hint is not None else self._page_size_hint
        if continuation_token:
            page = self._next_page(continuation_token, size)
        else:
            page = self._first_page(size)
        yield page

        while page.continuation_token:
            page = self._next_page(page.continuation_token, size)
            yield page

    def __iter__(self) -> Iterator[T]:
        for page in self.by_page():
            yield from page.values


class AsyncItemPaged(Generic[T]):
    """Async counterpart of :class:`ItemPaged`, consumed with ``async for``."""

    def __init__(
        self,
        first_page: AsyncFirstPage,
        next_page: AsyncNextPage,
        page_size_hint: Optional[int] = None,
    ):
        self._first_page = first_page
        self._next_page = next_page
        self._page_size_hint = page_size_hint

    async def by_page(
        self,
        continuation_token: Optional[str] = None,
        page_size_hint: Optional[int] = None,
    ) -> AsyncIterator[Page[T]]:
        size = page_size_hint if page_size_hint is not None else self._page_size_hint
        if continuation_token:
            page = await self._next_page(continuation_token, size)
        else:
            page = await self._first_page(size)
        yield page

        while page.continuation_token:
            page = await self._next_page(page.continuation_token, size)
            yield page

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.by_page():
            for item in page.values:
                yield item
