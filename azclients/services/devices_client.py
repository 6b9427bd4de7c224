# azclients/services/devices_client.py

from __future__ import annotations

from typing import Iterable, List, Optional

import httpx

from azclients.adapters.iothub.requests import CONTINUATION_TOKEN_HEADER
from azclients.adapters.iothub.rest_clients import (
    AsyncDeviceMethodRestClient,
    AsyncRegistryManagerRestClient,
    AsyncTwinRestClient,
    DeviceMethodRestClient,
    RegistryManagerRestClient,
    TwinRestClient,
)
from azclients.core.domain.exceptions import ArgumentError
from azclients.core.domain.iothub_models import (
    BulkRegistryOperationResult,
    CloudToDeviceMethodRequest,
    CloudToDeviceMethodResponse,
    DeviceIdentity,
    ExportImportDevice,
    QuerySpecification,
    TwinData,
)
from azclients.core.domain.preconditions import (
    BulkIfMatchPrecondition,
    IfMatchPrecondition,
    get_if_match_header_value,
)
from azclients.core.use_cases import bulk_operations
from azclients.core.use_cases.bulk_operations import IdentityTwinPairs
from azclients.shared.config import settings
from azclients.shared.logging_config import get_logger
from azclients.shared.paging import AsyncItemPaged, ItemPaged, Page
from azclients.shared.validation import assert_not_none, assert_not_none_or_empty

logger = get_logger(__name__)


def twin_page(twins: List[TwinData], response: httpx.Response) -> Page[TwinData]:
    """A query page; the service puts the cursor in the ``x-ms-continuation`` header."""
    return Page(
        values=twins,
        continuation_token=response.headers.get(CONTINUATION_TOKEN_HEADER) or None,
        raw_response=response,
    )


def _log_bulk_result(operations: List[ExportImportDevice], result: BulkRegistryOperationResult) -> None:
    if result.is_successful:
        logger.info(
            "bulk_registry_operation_completed",
            mode=operations[0].import_mode.value,
            devices=len(operations),
        )
    else:
        logger.warning(
            "bulk_registry_operation_partial_failure",
            mode=operations[0].import_mode.value,
            devices=len(operations),
            errors=len(result.errors),
        )


class _DevicesClientBase:

    def __init__(
        self,
        *,
        bulk_operation_limit: Optional[int] = None,
        twin_query: Optional[str] = None,
    ) -> None:
        if bulk_operation_limit is None:
            bulk_operation_limit = settings.BULK_OPERATION_LIMIT
        if bulk_operation_limit <= 0:
            raise ArgumentError("bulk_operation_limit", "must be a positive number of devices")
        self._bulk_operation_limit = bulk_operation_limit
        self._twin_query = twin_query or settings.DEFAULT_TWIN_QUERY

    def _checked(self, operations: List[ExportImportDevice]) -> List[ExportImportDevice]:
        bulk_operations.check_batch_size(operations, self._bulk_operation_limit)
        return operations


class DevicesClient(_DevicesClientBase):
    """
    Device identities, device twins and direct methods of one IoT Hub.

    Single-entity writes take an :class:`IfMatchPrecondition`; bulk writes
    take a :class:`BulkIfMatchPrecondition` and go out as one registry
    request of at most ``bulk_operation_limit`` devices.
    """

    def __init__(
        self,
        registry_manager_client: RegistryManagerRestClient,
        twin_client: TwinRestClient,
        device_method_client: DeviceMethodRestClient,
        *,
        bulk_operation_limit: Optional[int] = None,
        twin_query: Optional[str] = None,
    ) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        assert_not_none(twin_client, "twin_client")
        assert_not_none(device_method_client, "device_method_client")
        super().__init__(bulk_operation_limit=bulk_operation_limit, twin_query=twin_query)
        self._registry_manager_client = registry_manager_client
        self._twin_client = twin_client
        self._device_method_client = device_method_client

    # ------------------------------------------------------------------
    # Identities
    # ------------------------------------------------------------------

    def create_or_update_identity(
        self,
        device_identity: DeviceIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> DeviceIdentity:
        """
        Create or update a device.

        To create a device pass ``IfMatchPrecondition.UNCONDITIONAL``: no
        If-Match header is sent, since a new identity has no ETag yet.
        ``UNCONDITIONAL_IF_MATCH`` sends ``If-Match: *`` and overwrites an
        existing device whatever its version.
        """
        assert_not_none(device_identity, "device_identity")
        if_match = get_if_match_header_value(precondition, device_identity.etag)
        return self._registry_manager_client.create_or_update_device(
            device_identity.device_id, device_identity, if_match
        )

    def get_identity(self, device_id: str) -> DeviceIdentity:
        return self._registry_manager_client.get_device(device_id)

    def delete_identity(
        self,
        device_identity: DeviceIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> httpx.Response:
        assert_not_none(device_identity, "device_identity")
        if_match = get_if_match_header_value(precondition, device_identity.etag)
        return self._registry_manager_client.delete_device(device_identity.device_id, if_match)

    # ------------------------------------------------------------------
    # Bulk registry operations
    # ------------------------------------------------------------------

    def _bulk(self, operations: List[ExportImportDevice]) -> BulkRegistryOperationResult:
        result = self._registry_manager_client.bulk_device_crud(self._checked(operations))
        _log_bulk_result(operations, result)
        return result

    def create_identities_with_twin(self, devices: IdentityTwinPairs) -> BulkRegistryOperationResult:
        """Create devices and seed their twins; ``devices`` yields (identity, twin) pairs."""
        return self._bulk(bulk_operations.create_identities_with_twin_operations(devices))

    def create_identities(self, device_identities: Iterable[DeviceIdentity]) -> BulkRegistryOperationResult:
        return self._bulk(bulk_operations.create_identities_operations(device_identities))

    def update_identities(
        self,
        device_identities: Iterable[DeviceIdentity],
        precondition: BulkIfMatchPrecondition,
    ) -> BulkRegistryOperationResult:
        return self._bulk(bulk_operations.update_identities_operations(device_identities, precondition))

    def delete_identities(
        self,
        device_identities: Iterable[DeviceIdentity],
        precondition: BulkIfMatchPrecondition,
    ) -> BulkRegistryOperationResult:
        return self._bulk(bulk_operations.delete_identities_operations(device_identities, precondition))

    # ------------------------------------------------------------------
    # Twins
    # ------------------------------------------------------------------

    def get_twins(self, page_size: Optional[int] = None) -> ItemPaged[TwinData]:
        """
        Lazily page through every device twin in the hub.

        ``page_size`` is a hint sent as ``x-ms-max-item-count``; the service
        may return fewer items per page.
        """
        query = QuerySpecification(query=self._twin_query)

        def first_page(size: Optional[int]) -> Page[TwinData]:
            return twin_page(*self._registry_manager_client.query_iot_hub(query, None, size))

        def next_page(continuation_token: str, size: Optional[int]) -> Page[TwinData]:
            return twin_page(*self._registry_manager_client.query_iot_hub(query, continuation_token, size))

        return ItemPaged(first_page, next_page, page_size)

    def get_twin(self, device_id: str) -> TwinData:
        return self._twin_client.get_device_twin(device_id)

    def update_twin(
        self,
        twin_patch: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        """Merge ``twin_patch`` (tags and desired properties) into the device twin."""
        assert_not_none(twin_patch, "twin_patch")
        if_match = get_if_match_header_value(precondition, twin_patch.etag)
        return self._twin_client.update_device_twin(twin_patch.device_id, twin_patch, if_match)

    def replace_twin(
        self,
        twin: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin, "twin")
        if_match = get_if_match_header_value(precondition, twin.etag)
        return self._twin_client.replace_device_twin(twin.device_id, twin, if_match)

    def update_twins(
        self,
        twin_updates: Iterable[TwinData],
        precondition: BulkIfMatchPrecondition,
    ) -> BulkRegistryOperationResult:
        return self._bulk(bulk_operations.update_twins_operations(twin_updates, precondition))

    # ------------------------------------------------------------------
    # Direct methods
    # ------------------------------------------------------------------

    def invoke_method(
        self,
        device_id: str,
        direct_method_request: CloudToDeviceMethodRequest,
    ) -> CloudToDeviceMethodResponse:
        assert_not_none_or_empty(device_id, "device_id")
        return self._device_method_client.invoke_device_method(device_id, direct_method_request)


class AsyncDevicesClient(_DevicesClientBase):
    """Async counterpart of :class:`DevicesClient`."""

    def __init__(
        self,
        registry_manager_client: AsyncRegistryManagerRestClient,
        twin_client: AsyncTwinRestClient,
        device_method_client: AsyncDeviceMethodRestClient,
        *,
        bulk_operation_limit: Optional[int] = None,
        twin_query: Optional[str] = None,
    ) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        assert_not_none(twin_client, "twin_client")
        assert_not_none(device_method_client, "device_method_client")
        super().__init__(bulk_operation_limit=bulk_operation_limit, twin_query=twin_query)
        self._registry_manager_client = registry_manager_client
        self._twin_client = twin_client
        self._device_method_client = device_method_client

    async def create_or_update_identity(
        self,
        device_identity: DeviceIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> DeviceIdentity:
        assert_not_none(device_identity, "device_identity")
        if_match = get_if_match_header_value(precondition, device_identity.etag)
        return await self._registry_manager_client.create_or_update_device(
            device_identity.device_id, device_identity, if_match
        )

    async def get_identity(self, device_id: str) -> DeviceIdentity:
        return await self._registry_manager_client.get_device(device_id)

    async def delete_identity(
        self,
        device_identity: DeviceIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> httpx.Response:
        assert_not_none(device_identity, "device_identity")
        if_match = get_if_match_header_value(precondition, device_identity.etag)
        return await self._registry_manager_client.delete_device(device_identity.device_id, if_match)

    async def _bulk(self, operations: List[ExportImportDevice]) -> BulkRegistryOperationResult:
        result = await self._registry_manager_client.bulk_device_crud(self._checked(operations))
        _log_bulk_result(operations, result)
        return result

    async def create_identities_with_twin(self, devices: IdentityTwinPairs) -> BulkRegistryOperationResult:
        return await self._bulk(bulk_operations.create_identities_with_twin_operations(devices))

    async def create_identities(self, device_identities: Iterable[DeviceIdentity]) -> BulkRegistryOperationResult:
        return await self._bulk(bulk_operations.create_identities_operations(device_identities))

    async def update_identities(
        self,
        device_identities: Iterable[DeviceIdentity],
        precondition: BulkIfMatchPrecondition,
    ) -> BulkRegistryOperationResult:
        return await self._bulk(bulk_operations.update_identities_operations(device_identities, precondition))

    async def delete_identities(
        self,
        device_identities: Iterable[DeviceIdentity],
        precondition: BulkIfMatchPrecondition,
    ) -> BulkRegistryOperationResult:
        return await self._bulk(bulk_operations.delete_identities_operations(device_identities, precondition))

    def get_twins(self, page_size: Optional[int] = None) -> AsyncItemPaged[TwinData]:
        query = QuerySpecification(query=self._twin_query)

        async def first_page(size: Optional[int]) -> Page[TwinData]:
            return twin_page(*await self._registry_manager_client.query_iot_hub(query, None, size))

        async def next_page(continuation_token: str, size: Optional[int]) -> Page[TwinData]:
            return twin_page(*await self._registry_manager_client.query_iot_hub(query, continuation_token, size))

        return AsyncItemPaged(first_page, next_page, page_size)

    async def get_twin(self, device_id: str) -> TwinData:
        return await self._twin_client.get_device_twin(device_id)

    async def update_twin(
        self,
        twin_patch: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin_patch, "twin_patch")
        if_match = get_if_match_header_value(precondition, twin_patch.etag)
        return await self._twin_client.update_device_twin(twin_patch.device_id, twin_patch, if_match)

    async def replace_twin(
        self,
        twin: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin, "twin")
        if_match = get_if_match_header_value(precondition, twin.etag)
        return await self._twin_client.replace_device_twin(twin.device_id, twin, if_match)

    async def update_twins(
        self,
        twin_updates: Iterable[TwinData],
        precondition: BulkIfMatchPrecondition,
    ) -> BulkRegistryOperationResult:
        return await self._bulk(bulk_operations.update_twins_operations(twin_updates, precondition))

    async def invoke_method(
        self,
        device_id: str,
        direct_method_request: CloudToDeviceMethodRequest,
    ) -> CloudToDeviceMethodResponse:
        assert_not_none_or_empty(device_id, "device_id")
        return await self._device_method_client.invoke_device_method(device_id, direct_method_request)
