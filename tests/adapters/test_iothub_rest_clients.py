# tests/adapters/test_iothub_rest_clients.py
import httpx
import pytest

from azclients.adapters.http.pipeline import HttpPipeline
from azclients.adapters.iothub import requests
from azclients.adapters.iothub.rest_clients import (
    DeviceMethodRestClient,
    RegistryManagerRestClient,
    TwinRestClient,
)
from azclients.core.domain.exceptions import ArgumentError, HttpResponseError
from azclients.core.domain.iothub_models import (
    CloudToDeviceMethodRequest,
    DeviceIdentity,
    ExportImportDevice,
    ImportMode,
    ModuleIdentity,
    QuerySpecification,
    TwinData,
)
from tests.conftest import HUB_HOST, RecordingTransport, body_of


@pytest.fixture
def recorder():
    return RecordingTransport()


@pytest.fixture
def pipeline(recorder, credential):
    return HttpPipeline(
        f"https://{HUB_HOST}", credential, api_version="2020-03-13", transport=recorder.transport
    )


class TestRequestBuilders:
    def test_device_ids_are_escaped(self):
        """Device ids may contain characters that are not path-safe."""
        request = requests.build_get_device_request("dev/1#a b")
        assert request.url == "/devices/dev%2F1%23a%20b"

    def test_module_twin_path(self):
        request = requests.build_get_twin_request("d1", "m1")
        assert request.url == "/twins/d1/modules/m1"
        assert request.operation == "get_module_twin"

    def test_empty_device_id_is_rejected(self):
        with pytest.raises(ArgumentError):
            requests.build_get_device_request("")

    def test_if_match_header_only_when_given(self):
        assert requests.build_delete_device_request("d1").headers == {}
        assert requests.build_delete_device_request("d1", "*").headers == {"If-Match": "*"}

    def test_query_headers(self):
        request = requests.build_query_iot_hub_request(QuerySpecification(query="select * from devices"), "c1", 10)
        assert request.headers == {"x-ms-continuation": "c1", "x-ms-max-item-count": "10"}
        assert request.json == {"query": "select * from devices"}

    def test_first_query_has_no_paging_headers(self):
        request = requests.build_query_iot_hub_request(QuerySpecification(query="q"))
        assert request.headers == {}

    def test_module_method_path(self):
        request = requests.build_invoke_method_request("d1", CloudToDeviceMethodRequest(method_name="m"), "mod")
        assert request.url == "/twins/d1/modules/mod/methods"


class TestRegistryManagerRestClient:
    def test_create_or_update_device(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json={"deviceId": "d1", "etag": "AAAAAAAAAAE="}))
        client = RegistryManagerRestClient(pipeline)

        device = client.create_or_update_device("d1", DeviceIdentity(device_id="d1", status="enabled"), '"e0"')

        request = recorder.last
        assert request.method == "PUT"
        assert request.url.path == "/devices/d1"
        assert request.headers["If-Match"] == '"e0"'
        assert body_of(request) == {"deviceId": "d1", "status": "enabled"}
        assert device.etag == "AAAAAAAAAAE="

    def test_delete_device_expects_no_content(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(204))
        response = RegistryManagerRestClient(pipeline).delete_device("d1", "*")

        assert response.status_code == 204
        assert recorder.last.method == "DELETE"
        assert recorder.last.headers["If-Match"] == "*"

    def test_get_modules_on_device(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json=[
            {"deviceId": "d1", "moduleId": "m1"},
            {"deviceId": "d1", "moduleId": "m2", "managedBy": "IotEdge"},
        ]))
        modules = RegistryManagerRestClient(pipeline).get_modules_on_device("d1")

        assert recorder.last.url.path == "/devices/d1/modules"
        assert [m.module_id for m in modules] == ["m1", "m2"]
        assert modules[1].managed_by == "IotEdge"

    def test_create_or_update_module(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json={"deviceId": "d1", "moduleId": "m1"}))
        RegistryManagerRestClient(pipeline).create_or_update_module(
            "d1", "m1", ModuleIdentity(device_id="d1", module_id="m1")
        )
        assert recorder.last.url.path == "/devices/d1/modules/m1"
        assert "If-Match" not in recorder.last.headers

    def test_bulk_device_crud(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json={"isSuccessful": True, "errors": [], "warnings": []}))
        operations = [ExportImportDevice(id="d1", import_mode=ImportMode.CREATE)]

        result = RegistryManagerRestClient(pipeline).bulk_device_crud(operations)

        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/devices"
        assert body_of(recorder.last) == [{"id": "d1", "importMode": "create"}]
        assert result.is_successful is True

    def test_bulk_partial_failure_is_a_result(self, recorder, pipeline):
        """A 400 carrying per-device errors is returned, not raised."""
        recorder.replies.append(httpx.Response(400, json={
            "isSuccessful": False,
            "errors": [{"deviceId": "d1", "errorCode": "DeviceAlreadyExists", "errorStatus": "exists"}],
        }))
        result = RegistryManagerRestClient(pipeline).bulk_device_crud(
            [ExportImportDevice(id="d1", import_mode=ImportMode.CREATE)]
        )
        assert result.is_successful is False
        assert result.errors[0].device_id == "d1"

    def test_bulk_other_errors_raise(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(429, json={"Message": "ErrorCode:ThrottlingException;slow down"}))
        with pytest.raises(HttpResponseError) as excinfo:
            RegistryManagerRestClient(pipeline).bulk_device_crud(
                [ExportImportDevice(id="d1", import_mode=ImportMode.DELETE)]
            )
        assert excinfo.value.error_code == "ThrottlingException"

    def test_bulk_plain_400_raises(self, recorder, pipeline):
        """
        Scenario: the registry rejects the request itself with a 400 error body.
        Expected: HttpResponseError, not an empty bulk result.
        """
        recorder.replies.append(httpx.Response(
            400,
            headers={"iothub-errorcode": "ArgumentInvalid"},
            json={"Message": "ErrorCode:ArgumentInvalid;Request body is malformed"},
        ))
        with pytest.raises(HttpResponseError) as excinfo:
            RegistryManagerRestClient(pipeline).bulk_device_crud(
                [ExportImportDevice(id="d1", import_mode=ImportMode.CREATE)]
            )
        assert excinfo.value.status_code == 400
        assert excinfo.value.error_code == "ArgumentInvalid"

    def test_bulk_400_without_json_raises(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(400, text="Bad Request"))
        with pytest.raises(HttpResponseError):
            RegistryManagerRestClient(pipeline).bulk_device_crud(
                [ExportImportDevice(id="d1", import_mode=ImportMode.CREATE)]
            )

    def test_query_returns_twins_and_response(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(
            200, headers={"x-ms-continuation": "next-1"}, json=[{"deviceId": "d1"}]
        ))
        twins, response = RegistryManagerRestClient(pipeline).query_iot_hub(
            QuerySpecification(query="select * from devices"), max_item_count=1
        )

        assert recorder.last.url.path == "/devices/query"
        assert recorder.last.headers["x-ms-max-item-count"] == "1"
        assert "x-ms-continuation" not in recorder.last.headers
        assert twins[0].device_id == "d1"
        assert response.headers["x-ms-continuation"] == "next-1"

    def test_statistics(self, recorder, pipeline):
        recorder.replies.extend([
            httpx.Response(200, json={"totalDeviceCount": 3, "enabledDeviceCount": 2, "disabledDeviceCount": 1}),
            httpx.Response(200, json={"connectedDeviceCount": 1}),
        ])
        client = RegistryManagerRestClient(pipeline)

        assert client.get_device_statistics().total_device_count == 3
        assert client.get_service_statistics().connected_device_count == 1
        assert [r.url.path for r in recorder.requests] == ["/statistics/devices", "/statistics/service"]


class TestTwinRestClient:
    def test_update_device_twin_is_a_patch(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json={"deviceId": "d1", "etag": "e2", "version": 4}))
        patch = TwinData(device_id="d1", tags={"site": "berlin"})

        twin = TwinRestClient(pipeline).update_device_twin("d1", patch, '"e1"')

        assert recorder.last.method == "PATCH"
        assert recorder.last.url.path == "/twins/d1"
        assert recorder.last.headers["If-Match"] == '"e1"'
        assert body_of(recorder.last) == {"deviceId": "d1", "tags": {"site": "berlin"}}
        assert twin.version == 4

    def test_replace_module_twin_is_a_put(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json={"deviceId": "d1", "moduleId": "m1"}))
        TwinRestClient(pipeline).replace_module_twin("d1", "m1", TwinData(device_id="d1", module_id="m1"), "*")

        assert recorder.last.method == "PUT"
        assert recorder.last.url.path == "/twins/d1/modules/m1"


class TestDeviceMethodRestClient:
    def test_invoke_device_method(self, recorder, pipeline):
        recorder.replies.append(httpx.Response(200, json={"status": 200, "payload": {"rebooted": True}}))
        response = DeviceMethodRestClient(pipeline).invoke_device_method(
            "d1", CloudToDeviceMethodRequest(method_name="reboot", response_timeout_in_seconds=30)
        )

        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/twins/d1/methods"
        assert body_of(recorder.last) == {"methodName": "reboot", "responseTimeoutInSeconds": 30}
        assert response.status == 200
        assert response.payload == {"rebooted": True}
