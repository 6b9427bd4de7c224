# tests/core/test_domain_models.py
import pytest
from pydantic import ValidationError

from azclients.core.domain.feature_models import FeatureOperationsListResult, FeatureResponse
from azclients.core.domain.iothub_models import (
    AuthenticationType,
    BulkRegistryOperationResult,
    CloudToDeviceMethodRequest,
    ConnectionState,
    DeviceIdentity,
    ExportImportDevice,
    ImportMode,
    TwinData,
)


class TestDeviceIdentityModel:
    def test_parses_service_payload(self):
        """Registry JSON uses camelCase; attributes are snake_case."""
        payload = {
            "deviceId": "thermostat-01",
            "generationId": "637000000000000000",
            "etag": "AAAAAAAAAAE=",
            "connectionState": "Disconnected",
            "status": "enabled",
            "connectionStateUpdatedTime": "0001-01-01T00:00:00Z",
            "cloudToDeviceMessageCount": 0,
            "authentication": {
                "symmetricKey": {"primaryKey": "cA==", "secondaryKey": "cw=="},
                "x509Thumbprint": {"primaryThumbprint": None, "secondaryThumbprint": None},
                "type": "sas",
            },
            "capabilities": {"iotEdge": True},
            "someFieldFromTheFuture": 42,
        }
        device = DeviceIdentity.model_validate(payload)

        assert device.device_id == "thermostat-01"
        assert device.connection_state.value == "Disconnected"
        assert device.authentication.symmetric_key.primary_key == "cA=="
        assert device.authentication.type.value == "sas"
        assert device.capabilities.iot_edge is True

    def test_serialize_omits_unset_fields(self):
        device = DeviceIdentity(device_id="d1", status="disabled")
        assert device.serialize() == {"deviceId": "d1", "status": "disabled"}

    def test_unknown_enum_values_are_kept(self):
        """
        Scenario: the hub reports a connection state this client does not know
        and spells the authentication type with a different case.
        Expected: the payload still parses; known values become enum members.
        """
        device = DeviceIdentity.model_validate({
            "deviceId": "d1",
            "connectionState": "Unknown",
            "authentication": {"type": "Sas"},
        })
        assert device.connection_state == "Unknown"
        assert device.authentication.type is AuthenticationType.SAS

    def test_unknown_twin_authentication_type(self):
        twin = TwinData.model_validate({
            "deviceId": "d1",
            "authenticationType": "tpm",
            "connectionState": "connected",
        })
        assert twin.authentication_type == "tpm"
        assert twin.connection_state is ConnectionState.CONNECTED


class TestTwinModel:
    def test_keeps_metadata_inside_property_bags(self):
        twin = TwinData.model_validate({
            "deviceId": "d1",
            "properties": {
                "desired": {"fan": "on", "$metadata": {}, "$version": 3},
                "reported": {"$version": 7},
            },
            "x509Thumbprint": {"primaryThumbprint": "ABC"},
        })
        assert twin.properties.desired["$version"] == 3
        assert twin.x509_thumbprint.primary_thumbprint == "ABC"


class TestExportImportDeviceModel:
    def test_irregular_etag_aliases(self):
        entry = ExportImportDevice(
            id="d1",
            etag="e1",
            twin_etag="t1",
            import_mode=ImportMode.UPDATE_IF_MATCH_ETAG,
        )
        assert entry.serialize() == {
            "id": "d1",
            "eTag": "e1",
            "twinETag": "t1",
            "importMode": "updateIfMatchETag",
        }

    def test_import_mode_is_required(self):
        with pytest.raises(ValidationError):
            ExportImportDevice(id="d1")


class TestBulkResultModel:
    def test_errors_default_to_empty(self):
        result = BulkRegistryOperationResult.model_validate({"isSuccessful": True})
        assert result.errors == []
        assert result.warnings == []

    def test_parses_per_device_errors(self):
        result = BulkRegistryOperationResult.model_validate({
            "isSuccessful": False,
            "errors": [{
                "deviceId": "d2",
                "errorCode": "DeviceAlreadyExists",
                "errorStatus": "A device with ID 'd2' is already registered.",
                "operation": "create",
            }],
        })
        assert result.errors[0].error_code == "DeviceAlreadyExists"


class TestMethodRequestModel:
    def test_serialize(self):
        request = CloudToDeviceMethodRequest(
            method_name="reboot",
            payload={"delay": 5},
            response_timeout_in_seconds=30,
        )
        assert request.serialize() == {
            "methodName": "reboot",
            "payload": {"delay": 5},
            "responseTimeoutInSeconds": 30,
        }


class TestFeatureModels:
    def test_list_result(self):
        result = FeatureOperationsListResult.model_validate({
            "value": [{
                "name": "Microsoft.Compute/EncryptionAtHost",
                "properties": {"state": "Registered"},
                "id": "/subscriptions/s/providers/Microsoft.Features/providers/Microsoft.Compute/features/EncryptionAtHost",
                "type": "Microsoft.Features/providers/features",
            }],
            "nextLink": "https://management.azure.com/next",
        })
        assert result.value[0].properties.state == "Registered"
        assert result.next_link == "https://management.azure.com/next"

    def test_empty_page(self):
        result = FeatureOperationsListResult.model_validate({})
        assert result.value == []
        assert result.next_link is None

    def test_feature_response_by_field_name(self):
        feature = FeatureResponse(name="f", id="i")
        assert feature.serialize() == {"name": "f", "id": "i"}
