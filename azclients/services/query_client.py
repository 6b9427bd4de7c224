# azclients/services/query_client.py

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from azclients.adapters.iothub.requests import CONTINUATION_TOKEN_HEADER
from azclients.adapters.iothub.rest_clients import AsyncRegistryManagerRestClient, RegistryManagerRestClient
from azclients.core.domain.exceptions import DeserializationError
from azclients.core.domain.iothub_models import QuerySpecification
from azclients.shared.paging import AsyncItemPaged, ItemPaged, Page
from azclients.shared.validation import assert_not_none, assert_not_none_or_empty


def raw_page(response: httpx.Response) -> Page[Dict[str, Any]]:
    """
    Query results are not always twins (``select count() from devices``,
    projections, jobs), so items are kept as plain JSON objects.
    """
    try:
        items = response.json()
    except ValueError as e:
        raise DeserializationError("List[dict]", str(e)) from e
    if not isinstance(items, list):
        raise DeserializationError("List[dict]", f"expected a JSON array, got {type(items).__name__}")
    return Page(
        values=items,
        continuation_token=response.headers.get(CONTINUATION_TOKEN_HEADER) or None,
        raw_response=response,
    )


class QueryClient:
    """Runs IoT Hub query language statements, e.g. ``SELECT * FROM devices WHERE tags.site = 'A'``."""

    def __init__(self, registry_manager_client: RegistryManagerRestClient) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        self._registry_manager_client = registry_manager_client

    def query(self, query: str, page_size: Optional[int] = None) -> ItemPaged[Dict[str, Any]]:
        assert_not_none_or_empty(query, "query")
        specification = QuerySpecification(query=query)

        def first_page(size: Optional[int]) -> Page[Dict[str, Any]]:
            return raw_page(self._registry_manager_client.query_raw(specification, None, size))

        def next_page(continuation_token: str, size: Optional[int]) -> Page[Dict[str, Any]]:
            return raw_page(self._registry_manager_client.query_raw(specification, continuation_token, size))

        return ItemPaged(first_page, next_page, page_size)


class AsyncQueryClient:

    def __init__(self, registry_manager_client: AsyncRegistryManagerRestClient) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        self._registry_manager_client = registry_manager_client

    def query(self, query: str, page_size: Optional[int] = None) -> AsyncItemPaged[Dict[str, Any]]:
        assert_not_none_or_empty(query, "query")
        specification = QuerySpecification(query=query)

        async def first_page(size: Optional[int]) -> Page[Dict[str, Any]]:
            return raw_page(await self._registry_manager_client.query_raw(specification, None, size))

        async def next_page(continuation_token: str, size: Optional[int]) -> Page[Dict[str, Any]]:
            return raw_page(await self._registry_manager_client.query_raw(specification, continuation_token, size))

        return AsyncItemPaged(first_page, next_page, page_size)


__all__ = ["AsyncQueryClient", "QueryClient", "raw_page"]
