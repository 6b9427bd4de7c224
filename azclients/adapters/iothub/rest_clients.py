# azclients/adapters/iothub/rest_clients.py
"""
One-to-one wrappers over the IoT Hub service REST operations.

Each method builds the request (``requests``), sends it through the
pipeline with the status codes the operation documents, and maps the body
onto the model. Async twins of every client share the same builders.
"""
from typing import List, Optional, Tuple

import httpx

from azclients.adapters.http.pipeline import (
    AsyncHttpPipeline,
    HttpPipeline,
    deserialize,
    deserialize_list,
    map_error,
)
from azclients.adapters.iothub import requests
from azclients.core.domain.iothub_models import (
    BulkRegistryOperationResult,
    CloudToDeviceMethodRequest,
    CloudToDeviceMethodResponse,
    DeviceIdentity,
    ExportImportDevice,
    ModuleIdentity,
    QuerySpecification,
    RegistryStatistics,
    ServiceStatistics,
    TwinData,
)
from azclients.shared.validation import assert_not_none

# Per-device failures of a bulk request come back as 400 with a result body
BULK_STATUS = (200, 400)
_BULK_RESULT_FIELDS = ("isSuccessful", "errors")


def bulk_result(operation: str, response: httpx.Response) -> BulkRegistryOperationResult:
    """
    Map a bulk registry response. A 400 is a result only when its body is
    a bulk result; any other 400 (malformed request, bad argument) raises.
    """
    if response.status_code == 400:
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict) or not any(name in body for name in _BULK_RESULT_FIELDS):
            raise map_error(operation, response)
    return deserialize(BulkRegistryOperationResult, response)


class RegistryManagerRestClient:
    """Identity registry: devices, modules, bulk operations, query, statistics."""

    def __init__(self, pipeline: HttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    def create_or_update_device(
        self, device_id: str, device: DeviceIdentity, if_match: Optional[str] = None
    ) -> DeviceIdentity:
        request = requests.build_create_or_update_device_request(device_id, device, if_match)
        return deserialize(DeviceIdentity, self._pipeline.send(request))

    def get_device(self, device_id: str) -> DeviceIdentity:
        request = requests.build_get_device_request(device_id)
        return deserialize(DeviceIdentity, self._pipeline.send(request))

    def delete_device(self, device_id: str, if_match: Optional[str] = None) -> httpx.Response:
        request = requests.build_delete_device_request(device_id, if_match)
        return self._pipeline.send(request, (204,))

    def create_or_update_module(
        self, device_id: str, module_id: str, module: ModuleIdentity, if_match: Optional[str] = None
    ) -> ModuleIdentity:
        request = requests.build_create_or_update_module_request(device_id, module_id, module, if_match)
        return deserialize(ModuleIdentity, self._pipeline.send(request))

    def get_module(self, device_id: str, module_id: str) -> ModuleIdentity:
        request = requests.build_get_module_request(device_id, module_id)
        return deserialize(ModuleIdentity, self._pipeline.send(request))

    def get_modules_on_device(self, device_id: str) -> List[ModuleIdentity]:
        request = requests.build_get_modules_on_device_request(device_id)
        return deserialize_list(ModuleIdentity, self._pipeline.send(request))

    def delete_module(self, device_id: str, module_id: str, if_match: Optional[str] = None) -> httpx.Response:
        request = requests.build_delete_module_request(device_id, module_id, if_match)
        return self._pipeline.send(request, (204,))

    def bulk_device_crud(self, operations: List[ExportImportDevice]) -> BulkRegistryOperationResult:
        request = requests.build_bulk_device_crud_request(operations)
        return bulk_result(request.operation, self._pipeline.send(request, BULK_STATUS))

    def query_iot_hub(
        self,
        query_specification: QuerySpecification,
        continuation_token: Optional[str] = None,
        max_item_count: Optional[int] = None,
    ) -> Tuple[List[TwinData], httpx.Response]:
        """Returns the page of twins plus the raw response (for ``x-ms-continuation``)."""
        request = requests.build_query_iot_hub_request(query_specification, continuation_token, max_item_count)
        response = self._pipeline.send(request)
        return deserialize_list(TwinData, response), response

    def query_raw(
        self,
        query_specification: QuerySpecification,
        continuation_token: Optional[str] = None,
        max_item_count: Optional[int] = None,
    ) -> httpx.Response:
        """Same call as ``query_iot_hub`` with the body left unparsed."""
        request = requests.build_query_iot_hub_request(query_specification, continuation_token, max_item_count)
        return self._pipeline.send(request)

    def get_device_statistics(self) -> RegistryStatistics:
        request = requests.build_get_device_statistics_request()
        return deserialize(RegistryStatistics, self._pipeline.send(request))

    def get_service_statistics(self) -> ServiceStatistics:
        request = requests.build_get_service_statistics_request()
        return deserialize(ServiceStatistics, self._pipeline.send(request))


class TwinRestClient:
    """Device and module twins."""

    def __init__(self, pipeline: HttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    def get_device_twin(self, device_id: str) -> TwinData:
        return deserialize(TwinData, self._pipeline.send(requests.build_get_twin_request(device_id)))

    def update_device_twin(self, device_id: str, twin_patch: TwinData, if_match: Optional[str] = None) -> TwinData:
        request = requests.build_update_twin_request(device_id, twin_patch, if_match)
        return deserialize(TwinData, self._pipeline.send(request))

    def replace_device_twin(self, device_id: str, twin: TwinData, if_match: Optional[str] = None) -> TwinData:
        request = requests.build_replace_twin_request(device_id, twin, if_match)
        return deserialize(TwinData, self._pipeline.send(request))

    def get_module_twin(self, device_id: str, module_id: str) -> TwinData:
        request = requests.build_get_twin_request(device_id, module_id)
        return deserialize(TwinData, self._pipeline.send(request))

    def update_module_twin(
        self, device_id: str, module_id: str, twin_patch: TwinData, if_match: Optional[str] = None
    ) -> TwinData:
        request = requests.build_update_twin_request(device_id, twin_patch, if_match, module_id)
        return deserialize(TwinData, self._pipeline.send(request))

    def replace_module_twin(
        self, device_id: str, module_id: str, twin: TwinData, if_match: Optional[str] = None
    ) -> TwinData:
        request = requests.build_replace_twin_request(device_id, twin, if_match, module_id)
        return deserialize(TwinData, self._pipeline.send(request))


class DeviceMethodRestClient:
    """Direct method invocation."""

    def __init__(self, pipeline: HttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    def invoke_device_method(
        self, device_id: str, direct_method_request: CloudToDeviceMethodRequest
    ) -> CloudToDeviceMethodResponse:
        request = requests.build_invoke_method_request(device_id, direct_method_request)
        return deserialize(CloudToDeviceMethodResponse, self._pipeline.send(request))

    def invoke_module_method(
        self, device_id: str, module_id: str, direct_method_request: CloudToDeviceMethodRequest
    ) -> CloudToDeviceMethodResponse:
        request = requests.build_invoke_method_request(device_id, direct_method_request, module_id)
        return deserialize(CloudToDeviceMethodResponse, self._pipeline.send(request))


# ------------------------------------------------------------------
# Async
# ------------------------------------------------------------------

class AsyncRegistryManagerRestClient:

    def __init__(self, pipeline: AsyncHttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    async def create_or_update_device(
        self, device_id: str, device: DeviceIdentity, if_match: Optional[str] = None
    ) -> DeviceIdentity:
        request = requests.build_create_or_update_device_request(device_id, device, if_match)
        return deserialize(DeviceIdentity, await self._pipeline.send(request))

    async def get_device(self, device_id: str) -> DeviceIdentity:
        request = requests.build_get_device_request(device_id)
        return deserialize(DeviceIdentity, await self._pipeline.send(request))

    async def delete_device(self, device_id: str, if_match: Optional[str] = None) -> httpx.Response:
        request = requests.build_delete_device_request(device_id, if_match)
        return await self._pipeline.send(request, (204,))

    async def create_or_update_module(
        self, device_id: str, module_id: str, module: ModuleIdentity, if_match: Optional[str] = None
    ) -> ModuleIdentity:
        request = requests.build_create_or_update_module_request(device_id, module_id, module, if_match)
        return deserialize(ModuleIdentity, await self._pipeline.send(request))

    async def get_module(self, device_id: str, module_id: str) -> ModuleIdentity:
        request = requests.build_get_module_request(device_id, module_id)
        return deserialize(ModuleIdentity, await self._pipeline.send(request))

    async def get_modules_on_device(self, device_id: str) -> List[ModuleIdentity]:
        request = requests.build_get_modules_on_device_request(device_id)
        return deserialize_list(ModuleIdentity, await self._pipeline.send(request))

    async def delete_module(self, device_id: str, module_id: str, if_match: Optional[str] = None) -> httpx.Response:
        request = requests.build_delete_module_request(device_id, module_id, if_match)
        return await self._pipeline.send(request, (204,))

    async def bulk_device_crud(self, operations: List[ExportImportDevice]) -> BulkRegistryOperationResult:
        request = requests.build_bulk_device_crud_request(operations)
        return bulk_result(request.operation, await self._pipeline.send(request, BULK_STATUS))

    async def query_iot_hub(
        self,
        query_specification: QuerySpecification,
        continuation_token: Optional[str] = None,
        max_item_count: Optional[int] = None,
    ) -> Tuple[List[TwinData], httpx.Response]:
        request = requests.build_query_iot_hub_request(query_specification, continuation_token, max_item_count)
        response = await self._pipeline.send(request)
        return deserialize_list(TwinData, response), response

    async def query_raw(
        self,
        query_specification: QuerySpecification,
        continuation_token: Optional[str] = None,
        max_item_count: Optional[int] = None,
    ) -> httpx.Response:
        request = requests.build_query_iot_hub_request(query_specification, continuation_token, max_item_count)
        return await self._pipeline.send(request)

    async def get_device_statistics(self) -> RegistryStatistics:
        request = requests.build_get_device_statistics_request()
        return deserialize(RegistryStatistics, await self._pipeline.send(request))

    async def get_service_statistics(self) -> ServiceStatistics:
        request = requests.build_get_service_statistics_request()
        return deserialize(ServiceStatistics, await self._pipeline.send(request))


class AsyncTwinRestClient:

    def __init__(self, pipeline: AsyncHttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    async def get_device_twin(self, device_id: str) -> TwinData:
        return deserialize(TwinData, await self._pipeline.send(requests.build_get_twin_request(device_id)))

    async def update_device_twin(
        self, device_id: str, twin_patch: TwinData, if_match: Optional[str] = None
    ) -> TwinData:
        request = requests.build_update_twin_request(device_id, twin_patch, if_match)
        return deserialize(TwinData, await self._pipeline.send(request))

    async def replace_device_twin(self, device_id: str, twin: TwinData, if_match: Optional[str] = None) -> TwinData:
        request = requests.build_replace_twin_request(device_id, twin, if_match)
        return deserialize(TwinData, await self._pipeline.send(request))

    async def get_module_twin(self, device_id: str, module_id: str) -> TwinData:
        request = requests.build_get_twin_request(device_id, module_id)
        return deserialize(TwinData, await self._pipeline.send(request))

    async def update_module_twin(
        self, device_id: str, module_id: str, twin_patch: TwinData, if_match: Optional[str] = None
    ) -> TwinData:
        request = requests.build_update_twin_request(device_id, twin_patch, if_match, module_id)
        return deserialize(TwinData, await self._pipeline.send(request))

    async def replace_module_twin(
        self, device_id: str, module_id: str, twin: TwinData, if_match: Optional[str] = None
    ) -> TwinData:
        request = requests.build_replace_twin_request(device_id, twin, if_match, module_id)
        return deserialize(TwinData, await self._pipeline.send(request))


class AsyncDeviceMethodRestClient:

    def __init__(self, pipeline: AsyncHttpPipeline):
        assert_not_none(pipeline, "pipeline")
        self._pipeline = pipeline

    async def invoke_device_method(
        self, device_id: str, direct_method_request: CloudToDeviceMethodRequest
    ) -> CloudToDeviceMethodResponse:
        request = requests.build_invoke_method_request(device_id, direct_method_request)
        return deserialize(CloudToDeviceMethodResponse, await self._pipeline.send(request))

    async def invoke_module_method(
        self, device_id: str, module_id: str, direct_method_request: CloudToDeviceMethodRequest
    ) -> CloudToDeviceMethodResponse:
        request = requests.build_invoke_method_request(device_id, direct_method_request, module_id)
        return deserialize(CloudToDeviceMethodResponse, await self._pipeline.send(request))
