# azclients/adapters/features/operations.py
"""
Operation groups of the ``Microsoft.Features`` provider.

List endpoints return ``{"value": [...], "nextLink": "..."}``; the
``nextLink`` URL is the continuation token and is fetched as-is.
"""
from typing import Optional

from azclients.adapters.features import requests
from azclients.adapters.http.pipeline import AsyncHttpPipeline, HttpPipeline, deserialize
from azclients.core.domain.feature_models import (
    FeatureOperationsListResult,
    FeatureResponse,
    Operation,
    OperationListResult,
)
from azclients.shared.paging import AsyncItemPaged, ItemPaged, Page
from azclients.shared.validation import assert_not_none, assert_not_none_or_empty


def feature_page(result: FeatureOperationsListResult) -> Page[FeatureResponse]:
    return Page(values=list(result.value), continuation_token=result.next_link or None)


def operation_page(result: OperationListResult) -> Page[Operation]:
    return Page(values=list(result.value), continuation_token=result.next_link or None)


class FeaturesOperations:
    """Preview features of the subscription's resource providers."""

    def __init__(self, pipeline: HttpPipeline, subscription_id: str):
        assert_not_none(pipeline, "pipeline")
        assert_not_none_or_empty(subscription_id, "subscription_id")
        self._pipeline = pipeline
        self._subscription_id = subscription_id

    def _fetch(self, request) -> FeatureOperationsListResult:
        return deserialize(FeatureOperationsListResult, self._pipeline.send(request))

    def list_all(self) -> ItemPaged[FeatureResponse]:
        """Every feature of every resource provider in the subscription."""
        def first_page(_size: Optional[int]) -> Page[FeatureResponse]:
            return feature_page(self._fetch(requests.build_list_all_request(self._subscription_id)))

        def next_page(next_link: str, _size: Optional[int]) -> Page[FeatureResponse]:
            return feature_page(self.list_all_next(next_link))

        return ItemPaged(first_page, next_page)

    def list(self, resource_provider_namespace: str) -> ItemPaged[FeatureResponse]:
        """Features of one resource provider, e.g. ``Microsoft.Compute``."""
        assert_not_none_or_empty(resource_provider_namespace, "resource_provider_namespace")

        def first_page(_size: Optional[int]) -> Page[FeatureResponse]:
            request = requests.build_list_request(self._subscription_id, resource_provider_namespace)
            return feature_page(self._fetch(request))

        def next_page(next_link: str, _size: Optional[int]) -> Page[FeatureResponse]:
            return feature_page(self.list_next(next_link))

        return ItemPaged(first_page, next_page)

    def get(self, resource_provider_namespace: str, feature_name: str) -> FeatureResponse:
        request = requests.build_get_request(self._subscription_id, resource_provider_namespace, feature_name)
        return deserialize(FeatureResponse, self._pipeline.send(request))

    def register(self, resource_provider_namespace: str, feature_name: str) -> FeatureResponse:
        """Request registration; the returned state is usually ``Registering``."""
        request = requests.build_register_request(self._subscription_id, resource_provider_namespace, feature_name)
        return deserialize(FeatureResponse, self._pipeline.send(request))

    def list_all_next(self, next_page_link: str) -> FeatureOperationsListResult:
        return self._fetch(requests.build_next_page_request(next_page_link, "features_list_all_next"))

    def list_next(self, next_page_link: str) -> FeatureOperationsListResult:
        return self._fetch(requests.build_next_page_request(next_page_link, "features_list_next"))


class Operations:
    """REST operations published by the Microsoft.Features provider itself."""

    def __init__(self, pipeline: HttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    def _fetch(self, request) -> OperationListResult:
        return deserialize(OperationListResult, self._pipeline.send(request))

    def list(self) -> ItemPaged[Operation]:
        def first_page(_size: Optional[int]) -> Page[Operation]:
            return operation_page(self._fetch(requests.build_list_operations_request()))

        def next_page(next_link: str, _size: Optional[int]) -> Page[Operation]:
            return operation_page(self._fetch(requests.build_next_page_request(next_link, "operations_list_next")))

        return ItemPaged(first_page, next_page)


# ------------------------------------------------------------------
# Async
# ------------------------------------------------------------------

class AsyncFeaturesOperations:

    def __init__(self, pipeline: AsyncHttpPipeline, subscription_id: str):
        assert_not_none(pipeline, "pipeline")
        assert_not_none_or_empty(subscription_id, "subscription_id")
        self._pipeline = pipeline
        self._subscription_id = subscription_id

    async def _fetch(self, request) -> FeatureOperationsListResult:
        return deserialize(FeatureOperationsListResult, await self._pipeline.send(request))

    def list_all(self) -> AsyncItemPaged[FeatureResponse]:
        async def first_page(_size: Optional[int]) -> Page[FeatureResponse]:
            return feature_page(await self._fetch(requests.build_list_all_request(self._subscription_id)))

        async def next_page(next_link: str, _size: Optional[int]) -> Page[FeatureResponse]:
            return feature_page(await self.list_all_next(next_link))

        return AsyncItemPaged(first_page, next_page)

    def list(self, resource_provider_namespace: str) -> AsyncItemPaged[FeatureResponse]:
        assert_not_none_or_empty(resource_provider_namespace, "resource_provider_namespace")

        async def first_page(_size: Optional[int]) -> Page[FeatureResponse]:
            request = requests.build_list_request(self._subscription_id, resource_provider_namespace)
            return feature_page(await self._fetch(request))

        async def next_page(next_link: str, _size: Optional[int]) -> Page[FeatureResponse]:
            return feature_page(await self.list_next(next_link))

        return AsyncItemPaged(first_page, next_page)

    async def get(self, resource_provider_namespace: str, feature_name: str) -> FeatureResponse:
        request = requests.build_get_request(self._subscription_id, resource_provider_namespace, feature_name)
        return deserialize(FeatureResponse, await self._pipeline.send(request))

    async def register(self, resource_provider_namespace: str, feature_name: str) -> FeatureResponse:
        request = requests.build_register_request(self._subscription_id, resource_provider_namespace, feature_name)
        return deserialize(FeatureResponse, await self._pipeline.send(request))

    async def list_all_next(self, next_page_link: str) -> FeatureOperationsListResult:
        return await self._fetch(requests.build_next_page_request(next_page_link, "features_list_all_next"))

    async def list_next(self, next_page_link: str) -> FeatureOperationsListResult:
        return await self._fetch(requests.build_next_page_request(next_page_link, "features_list_next"))


class AsyncOperations:

    def __init__(self, pipeline: AsyncHttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    async def _fetch(self, request) -> OperationListResult:
        return deserialize(OperationListResult, await self._pipeline.send(request))

    def list(self) -> AsyncItemPaged[Operation]:
        async def first_page(_size: Optional[int]) -> Page[Operation]:
            return operation_page(await self._fetch(requests.build_list_operations_request()))

        async def next_page(next_link: str, _size: Optional[int]) -> Page[Operation]:
            return operation_page(
                await self._fetch(requests.build_next_page_request(next_link, "operations_list_next"))
            )

        return AsyncItemPaged(first_page, next_page)
