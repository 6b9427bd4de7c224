# azclients/services/statistics_client.py

from __future__ import annotations

from azclients.adapters.iothub.rest_clients import AsyncRegistryManagerRestClient, RegistryManagerRestClient
from azclients.core.domain.iothub_models import RegistryStatistics, ServiceStatistics
from azclients.shared.validation import assert_not_none


class StatisticsClient:
    """Registry and service counters of an IoT Hub."""

    def __init__(self, registry_manager_client: RegistryManagerRestClient) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        self._registry_manager_client = registry_manager_client

    def get_devices_statistics(self) -> RegistryStatistics:
        return self._registry_manager_client.get_device_statistics()

    def get_service_statistics(self) -> ServiceStatistics:
        return self._registry_manager_client.get_service_statistics()


class AsyncStatisticsClient:

    def __init__(self, registry_manager_client: AsyncRegistryManagerRestClient) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        self._registry_manager_client = registry_manager_client

    async def get_devices_statistics(self) -> RegistryStatistics:
        return await self._registry_manager_client.get_device_statistics()

    async def get_service_statistics(self) -> ServiceStatistics:
        return await self._registry_manager_client.get_service_statistics()
