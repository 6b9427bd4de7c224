# azclients/adapters/iothub/requests.py
"""
Request builders for the IoT Hub service REST API.

Each builder maps one REST operation to a ``RestRequest``; none of them
touch the network. The sync and async REST clients share them.
"""
from typing import Iterable, Optional
from urllib.parse import quote

from azclients.adapters.http.pipeline import RestRequest
from azclients.core.domain.iothub_models import (
    CloudToDeviceMethodRequest,
    DeviceIdentity,
    ExportImportDevice,
    ModuleIdentity,
    QuerySpecification,
    TwinData,
)
from azclients.shared.validation import assert_not_none, assert_not_none_or_empty

IF_MATCH_HEADER = "If-Match"
CONTINUATION_TOKEN_HEADER = "x-ms-continuation"
MAX_ITEM_COUNT_HEADER = "x-ms-max-item-count"


def _segment(value: str, name: str) -> str:
    assert_not_none_or_empty(value, name)
    return quote(value, safe="")


def _device_path(device_id: str) -> str:
    return f"/devices/{_segment(device_id, 'device_id')}"


def _module_path(device_id: str, module_id: str) -> str:
    return f"{_device_path(device_id)}/modules/{_segment(module_id, 'module_id')}"


def _twin_path(device_id: str, module_id: Optional[str] = None) -> str:
    path = f"/twins/{_segment(device_id, 'device_id')}"
    if module_id is not None:
        path += f"/modules/{_segment(module_id, 'module_id')}"
    return path


def _if_match(if_match: Optional[str]) -> dict:
    return {IF_MATCH_HEADER: if_match} if if_match else {}

# --- Registry: devices ---

def build_create_or_update_device_request(
    device_id: str, device: DeviceIdentity, if_match: Optional[str] = None
) -> RestRequest:
    assert_not_none(device, "device")
    return RestRequest(
        "PUT",
        _device_path(device_id),
        "create_or_update_device",
        headers=_if_match(if_match),
        json=device.serialize(),
    )


def build_get_device_request(device_id: str) -> RestRequest:
    return RestRequest("GET", _device_path(device_id), "get_device")


def build_delete_device_request(device_id: str, if_match: Optional[str] = None) -> RestRequest:
    return RestRequest("DELETE", _device_path(device_id), "delete_device", headers=_if_match(if_match))

# --- Registry: modules ---

def build_create_or_update_module_request(
    device_id: str, module_id: str, module: ModuleIdentity, if_match: Optional[str] = None
) -> RestRequest:
    assert_not_none(module, "module")
    return RestRequest(
        "PUT",
        _module_path(device_id, module_id),
        "create_or_update_module",
        headers=_if_match(if_match),
        json=module.serialize(),
    )


def build_get_module_request(device_id: str, module_id: str) -> RestRequest:
    return RestRequest("GET", _module_path(device_id, module_id), "get_module")


def build_get_modules_on_device_request(device_id: str) -> RestRequest:
    return RestRequest("GET", f"{_device_path(device_id)}/modules", "get_modules_on_device")


def build_delete_module_request(device_id: str, module_id: str, if_match: Optional[str] = None) -> RestRequest:
    return RestRequest(
        "DELETE", _module_path(device_id, module_id), "delete_module", headers=_if_match(if_match)
    )

# --- Registry: bulk, query, statistics ---

def build_bulk_device_crud_request(operations: Iterable[ExportImportDevice]) -> RestRequest:
    assert_not_none(operations, "operations")
    return RestRequest(
        "POST",
        "/devices",
        "bulk_device_crud",
        json=[operation.serialize() for operation in operations],
    )


def build_query_iot_hub_request(
    query_specification: QuerySpecification,
    continuation_token: Optional[str] = None,
    max_item_count: Optional[int] = None,
) -> RestRequest:
    assert_not_none(query_specification, "query_specification")
    headers = {}
    if continuation_token:
        headers[CONTINUATION_TOKEN_HEADER] = continuation_token
    if max_item_count is not None:
        headers[MAX_ITEM_COUNT_HEADER] = str(max_item_count)
    return RestRequest(
        "POST",
        "/devices/query",
        "query_iot_hub",
        headers=headers,
        json=query_specification.serialize(),
    )


def build_get_device_statistics_request() -> RestRequest:
    return RestRequest("GET", "/statistics/devices", "get_device_statistics")


def build_get_service_statistics_request() -> RestRequest:
    return RestRequest("GET", "/statistics/service", "get_service_statistics")

# --- Twins ---

def build_get_twin_request(device_id: str, module_id: Optional[str] = None) -> RestRequest:
    operation = "get_module_twin" if module_id is not None else "get_device_twin"
    return RestRequest("GET", _twin_path(device_id, module_id), operation)


def build_update_twin_request(
    device_id: str, twin_patch: TwinData, if_match: Optional[str] = None, module_id: Optional[str] = None
) -> RestRequest:
    assert_not_none(twin_patch, "twin_patch")
    operation = "update_module_twin" if module_id is not None else "update_device_twin"
    return RestRequest(
        "PATCH",
        _twin_path(device_id, module_id),
        operation,
        headers=_if_match(if_match),
        json=twin_patch.serialize(),
    )


def build_replace_twin_request(
    device_id: str, twin: TwinData, if_match: Optional[str] = None, module_id: Optional[str] = None
) -> RestRequest:
    assert_not_none(twin, "twin")
    operation = "replace_module_twin" if module_id is not None else "replace_device_twin"
    return RestRequest(
        "PUT",
        _twin_path(device_id, module_id),
        operation,
        headers=_if_match(if_match),
        json=twin.serialize(),
    )

# --- Direct methods ---

def build_invoke_method_request(
    device_id: str, direct_method_request: CloudToDeviceMethodRequest, module_id: Optional[str] = None
) -> RestRequest:
    assert_not_none(direct_method_request, "direct_method_request")
    operation = "invoke_module_method" if module_id is not None else "invoke_device_method"
    return RestRequest(
        "POST",
        f"{_twin_path(device_id, module_id)}/methods",
        operation,
        json=direct_method_request.serialize(),
    )
