# azclients/services/iothub_service_client.py

from __future__ import annotations

from typing import Optional

import httpx

from azclients.adapters.http.pipeline import AsyncHttpPipeline, HttpPipeline
from azclients.adapters.iothub.rest_clients import (
    AsyncDeviceMethodRestClient,
    AsyncRegistryManagerRestClient,
    AsyncTwinRestClient,
    DeviceMethodRestClient,
    RegistryManagerRestClient,
    TwinRestClient,
)
from azclients.core.ports.credential import ICredential
from azclients.services.devices_client import AsyncDevicesClient, DevicesClient
from azclients.services.modules_client import AsyncModulesClient, ModulesClient
from azclients.services.query_client import AsyncQueryClient, QueryClient
from azclients.services.statistics_client import AsyncStatisticsClient, StatisticsClient
from azclients.shared.config import settings
from azclients.shared.logging_config import get_logger
from azclients.shared.validation import assert_not_none_or_empty

logger = get_logger(__name__)


def hub_endpoint(host: str) -> str:
    """Accepts ``my-hub.azure-devices.net`` or a full ``https://`` URL."""
    assert_not_none_or_empty(host, "host")
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"https://{host}"
    return host


class IoTHubServiceClient:
    """
    Entry point for the IoT Hub service API.

    Owns one HTTP pipeline and exposes the feature areas as attributes:

        with IoTHubServiceClient("my-hub.azure-devices.net", credential) as hub:
            hub.devices.get_identity("dev-1")
            hub.modules.get_identities("dev-1")
            hub.statistics.get_service_statistics()
            hub.query.query("SELECT * FROM devices.modules")
    """

    def __init__(
        self,
        host: str,
        credential: Optional[ICredential] = None,
        *,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        bulk_operation_limit: Optional[int] = None,
    ) -> None:
        self.endpoint = hub_endpoint(host)
        self._pipeline = HttpPipeline(
            self.endpoint,
            credential,
            api_version=api_version or settings.IOTHUB_API_VERSION,
            timeout=timeout,
            transport=transport,
        )
        registry = RegistryManagerRestClient(self._pipeline)
        twins = TwinRestClient(self._pipeline)
        methods = DeviceMethodRestClient(self._pipeline)

        self.devices = DevicesClient(registry, twins, methods, bulk_operation_limit=bulk_operation_limit)
        self.modules = ModulesClient(registry, twins, methods)
        self.statistics = StatisticsClient(registry)
        self.query = QueryClient(registry)
        logger.debug("iothub_client_created", endpoint=self.endpoint)

    def close(self) -> None:
        self._pipeline.close()

    def __enter__(self) -> "IoTHubServiceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncIoTHubServiceClient:
    """Async counterpart of :class:`IoTHubServiceClient`; use ``async with``."""

    def __init__(
        self,
        host: str,
        credential: Optional[ICredential] = None,
        *,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        bulk_operation_limit: Optional[int] = None,
    ) -> None:
        self.endpoint = hub_endpoint(host)
        self._pipeline = AsyncHttpPipeline(
            self.endpoint,
            credential,
            api_version=api_version or settings.IOTHUB_API_VERSION,
            timeout=timeout,
            transport=transport,
        )
        registry = AsyncRegistryManagerRestClient(self._pipeline)
        twins = AsyncTwinRestClient(self._pipeline)
        methods = AsyncDeviceMethodRestClient(self._pipeline)

        self.devices = AsyncDevicesClient(registry, twins, methods, bulk_operation_limit=bulk_operation_limit)
        self.modules = AsyncModulesClient(registry, twins, methods)
        self.statistics = AsyncStatisticsClient(registry)
        self.query = AsyncQueryClient(registry)
        logger.debug("iothub_client_created", endpoint=self.endpoint)

    async def close(self) -> None:
        await self._pipeline.close()

    async def __aenter__(self) -> "AsyncIoTHubServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
