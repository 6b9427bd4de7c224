"""
azclients.services
------------------

Public client layer. Callers normally start from one of the two entry
points and reach the rest through their attributes:

    from azclients.services import FeatureClient, IoTHubServiceClient
"""

from .devices_client import AsyncDevicesClient, DevicesClient
from .feature_client import AsyncFeatureClient, FeatureClient
from .iothub_service_client import AsyncIoTHubServiceClient, IoTHubServiceClient
from .modules_client import AsyncModulesClient, ModulesClient
from .query_client import AsyncQueryClient, QueryClient
from .statistics_client import AsyncStatisticsClient, StatisticsClient

__all__ = [
    "AsyncDevicesClient",
    "AsyncFeatureClient",
    "AsyncIoTHubServiceClient",
    "AsyncModulesClient",
    "AsyncQueryClient",
    "AsyncStatisticsClient",
    "DevicesClient",
    "FeatureClient",
    "IoTHubServiceClient",
    "ModulesClient",
    "QueryClient",
    "StatisticsClient",
]
