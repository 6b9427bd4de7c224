# azclients/__init__.py
"""
Client library for two Azure REST surfaces:

- the Azure Resource Manager ``Microsoft.Features`` resource model, and
- the IoT Hub service API (device identities, twins, bulk registry
  operations, direct methods and statistics).

Typical usage::

    from azclients import IoTHubServiceClient, StaticCredential

    with IoTHubServiceClient("my-hub.azure-devices.net", StaticCredential(sas)) as hub:
        device = hub.devices.get_identity("thermostat-01")
"""

__version__ = "1.0.0"

from azclients.adapters.http.credentials import BearerTokenCredential, StaticCredential  # noqa: E402
from azclients.core.domain.exceptions import (  # noqa: E402
    ArgumentError,
    ClientAuthenticationError,
    ClientError,
    DeserializationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError,
)
from azclients.core.domain.preconditions import (  # noqa: E402
    BulkIfMatchPrecondition,
    IfMatchPrecondition,
)
from azclients.services.feature_client import AsyncFeatureClient, FeatureClient  # noqa: E402
from azclients.services.iothub_service_client import (  # noqa: E402
    AsyncIoTHubServiceClient,
    IoTHubServiceClient,
)

__all__ = [
    "__version__",
    "ArgumentError",
    "AsyncFeatureClient",
    "AsyncIoTHubServiceClient",
    "BearerTokenCredential",
    "BulkIfMatchPrecondition",
    "ClientAuthenticationError",
    "ClientError",
    "DeserializationError",
    "FeatureClient",
    "HttpResponseError",
    "IfMatchPrecondition",
    "IoTHubServiceClient",
    "ResourceExistsError",
    "ResourceModifiedError",
    "ResourceNotFoundError",
    "StaticCredential",
]
