# tests/shared/test_paging.py
from unittest.mock import AsyncMock, MagicMock

import pytest

from azclients.shared.paging import AsyncItemPaged, ItemPaged, Page

PAGES = {
    None: Page(values=[1, 2], continuation_token="t1"),
    "t1": Page(values=[], continuation_token="t2"),
    "t2": Page(values=[3], continuation_token=None),
}


def make_sync():
    first_page = MagicMock(side_effect=lambda size: PAGES[None])
    next_page = MagicMock(side_effect=lambda token, size: PAGES[token])
    return first_page, next_page


def make_async():
    first_page = AsyncMock(side_effect=lambda size: PAGES[None])
    next_page = AsyncMock(side_effect=lambda token, size: PAGES[token])
    return first_page, next_page


class TestItemPaged:
    def test_is_lazy(self):
        """Building the pager sends nothing."""
        first_page, next_page = make_sync()
        ItemPaged(first_page, next_page)
        first_page.assert_not_called()
        next_page.assert_not_called()

    def test_iterates_items_across_pages(self):
        """
        Scenario: three pages, the middle one empty but carrying a token.
        Expected: the empty page is followed, not treated as the end.
        """
        first_page, next_page = make_sync()
        assert list(ItemPaged(first_page, next_page)) == [1, 2, 3]
        assert [c.args[0] for c in next_page.call_args_list] == ["t1", "t2"]

    def test_stops_without_token(self):
        first_page = MagicMock(return_value=Page(values=["a"], continuation_token=""))
        next_page = MagicMock()
        assert list(ItemPaged(first_page, next_page)) == ["a"]
        next_page.assert_not_called()

    def test_fetches_only_what_is_consumed(self):
        first_page, next_page = make_sync()
        items = iter(ItemPaged(first_page, next_page))
        assert next(items) == 1
        assert next(items) == 2
        next_page.assert_not_called()

    def test_by_page_resumes_from_token(self):
        first_page, next_page = make_sync()
        pages = list(ItemPaged(first_page, next_page).by_page(continuation_token="t2"))

        assert [p.values for p in pages] == [[3]]
        first_page.assert_not_called()

    def test_page_size_hint_is_forwarded(self):
        first_page, next_page = make_sync()
        pager = ItemPaged(first_page, next_page, page_size_hint=50)
        list(pager)
        first_page.assert_called_once_with(50)
        next_page.assert_any_call("t1", 50)

        list(pager.by_page(page_size_hint=5))
        first_page.assert_called_with(5)

    def test_each_iteration_restarts(self):
        first_page, next_page = make_sync()
        pager = ItemPaged(first_page, next_page)
        assert list(pager) == list(pager)
        assert first_page.call_count == 2


@pytest.mark.asyncio
class TestAsyncItemPaged:

    async def test_iterates_items_across_pages(self):
        first_page, next_page = make_async()
        items = [item async for item in AsyncItemPaged(first_page, next_page)]
        assert items == [1, 2, 3]

    async def test_is_lazy(self):
        first_page, next_page = make_async()
        AsyncItemPaged(first_page, next_page)
        first_page.assert_not_awaited()

    async def test_by_page_resumes_from_token(self):
        first_page, next_page = make_async()
        pages = [p async for p in AsyncItemPaged(first_page, next_page).by_page(continuation_token="t1")]

        assert [p.values for p in pages] == [[], [3]]
        first_page.assert_not_awaited()
