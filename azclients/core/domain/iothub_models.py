# azclients/core/domain/iothub_models.py
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BeforeValidator, Field

from azclients.core.domain.base import ServiceModel, known_member

# --- Enums ---

class DeviceStatus(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"

class ConnectionState(str, Enum):
    DISCONNECTED = "Disconnected"
    CONNECTED = "Connected"

class AuthenticationType(str, Enum):
    SAS = "sas"
    SELF_SIGNED = "selfSigned"
    CERTIFICATE_AUTHORITY = "certificateAuthority"
    NONE = "none"

# Service enums may grow; unknown values are kept as plain strings
ConnectionStateValue = Annotated[Union[ConnectionState, str], BeforeValidator(known_member(ConnectionState))]
AuthenticationTypeValue = Annotated[
    Union[AuthenticationType, str], BeforeValidator(known_member(AuthenticationType))
]

class ImportMode(str, Enum):
    """What the registry does with one entry of a bulk request."""
    CREATE = "create"
    UPDATE = "update"
    UPDATE_IF_MATCH_ETAG = "updateIfMatchETag"
    DELETE = "delete"
    DELETE_IF_MATCH_ETAG = "deleteIfMatchETag"
    UPDATE_TWIN = "updateTwin"
    UPDATE_TWIN_IF_MATCH_ETAG = "updateTwinIfMatchETag"

# --- Authentication ---

class SymmetricKey(ServiceModel):
    primary_key: Optional[str] = None
    secondary_key: Optional[str] = None

class X509Thumbprint(ServiceModel):
    primary_thumbprint: Optional[str] = None
    secondary_thumbprint: Optional[str] = None

class AuthenticationMechanism(ServiceModel):
    symmetric_key: Optional[SymmetricKey] = None
    x509_thumbprint: Optional[X509Thumbprint] = None
    type: Optional[AuthenticationTypeValue] = None

class DeviceCapabilities(ServiceModel):
    iot_edge: bool = False

# --- Identities ---

class DeviceIdentity(ServiceModel):
    """A device as stored in the IoT Hub identity registry."""
    device_id: Optional[str] = None
    generation_id: Optional[str] = None
    etag: Optional[str] = None
    connection_state: Optional[ConnectionStateValue] = None
    # Kept as a plain string; bulk mapping compares it case-insensitively
    status: Optional[str] = None
    status_reason: Optional[str] = None
    connection_state_updated_time: Optional[datetime] = None
    status_updated_time: Optional[datetime] = None
    last_activity_time: Optional[datetime] = None
    cloud_to_device_message_count: Optional[int] = None
    authentication: Optional[AuthenticationMechanism] = None
    capabilities: Optional[DeviceCapabilities] = None
    device_scope: Optional[str] = None
    parent_scopes: Optional[List[str]] = None

class ModuleIdentity(ServiceModel):
    module_id: Optional[str] = None
    managed_by: Optional[str] = None
    device_id: Optional[str] = None
    generation_id: Optional[str] = None
    etag: Optional[str] = None
    connection_state: Optional[ConnectionStateValue] = None
    connection_state_updated_time: Optional[datetime] = None
    last_activity_time: Optional[datetime] = None
    cloud_to_device_message_count: Optional[int] = None
    authentication: Optional[AuthenticationMechanism] = None

# --- Twins ---

class TwinProperties(ServiceModel):
    # Property bags are free-form JSON, including "$metadata" and "$version"
    desired: Optional[Dict[str, Any]] = None
    reported: Optional[Dict[str, Any]] = None

class TwinData(ServiceModel):
    """Device or module twin: tags plus desired/reported properties."""
    device_id: Optional[str] = None
    module_id: Optional[str] = None
    tags: Optional[Dict[str, Any]] = None
    properties: Optional[TwinProperties] = None
    etag: Optional[str] = None
    version: Optional[int] = None
    device_etag: Optional[str] = None
    status: Optional[str] = None
    status_reason: Optional[str] = None
    status_update_time: Optional[datetime] = None
    connection_state: Optional[ConnectionStateValue] = None
    last_activity_time: Optional[datetime] = None
    cloud_to_device_message_count: Optional[int] = None
    authentication_type: Optional[AuthenticationTypeValue] = None
    x509_thumbprint: Optional[X509Thumbprint] = None
    capabilities: Optional[DeviceCapabilities] = None
    device_scope: Optional[str] = None
    parent_scopes: Optional[List[str]] = None

# --- Bulk registry ---

class PropertyContainer(ServiceModel):
    desired: Optional[Dict[str, Any]] = None
    reported: Optional[Dict[str, Any]] = None

class ExportImportDevice(ServiceModel):
    """One entry of a bulk registry request."""
    id: str
    module_id: Optional[str] = None
    etag: Optional[str] = Field(None, alias="eTag")
    import_mode: ImportMode
    status: Optional[DeviceStatus] = None
    status_reason: Optional[str] = None
    authentication: Optional[AuthenticationMechanism] = None
    twin_etag: Optional[str] = Field(None, alias="twinETag")
    tags: Optional[Dict[str, Any]] = None
    properties: Optional[PropertyContainer] = None
    capabilities: Optional[DeviceCapabilities] = None
    device_scope: Optional[str] = None
    parent_scopes: Optional[List[str]] = None

class DeviceRegistryOperationError(ServiceModel):
    device_id: Optional[str] = None
    error_code: Optional[str] = None
    error_status: Optional[str] = None
    module_id: Optional[str] = None
    operation: Optional[str] = None

class DeviceRegistryOperationWarning(ServiceModel):
    device_id: Optional[str] = None
    warning_code: Optional[str] = None
    warning_status: Optional[str] = None

class BulkRegistryOperationResult(ServiceModel):
    is_successful: Optional[bool] = None
    errors: List[DeviceRegistryOperationError] = Field(default_factory=list)
    warnings: List[DeviceRegistryOperationWarning] = Field(default_factory=list)

# --- Query ---

class QuerySpecification(ServiceModel):
    query: Optional[str] = None

# --- Direct methods ---

class CloudToDeviceMethodRequest(ServiceModel):
    method_name: str
    payload: Optional[Any] = None
    response_timeout_in_seconds: Optional[int] = None
    connect_timeout_in_seconds: Optional[int] = None

class CloudToDeviceMethodResponse(ServiceModel):
    status: Optional[int] = None
    payload: Optional[Any] = None

# --- Statistics ---

class RegistryStatistics(ServiceModel):
    total_device_count: Optional[int] = None
    enabled_device_count: Optional[int] = None
    disabled_device_count: Optional[int] = None

class ServiceStatistics(ServiceModel):
    connected_device_count: Optional[int] = None
