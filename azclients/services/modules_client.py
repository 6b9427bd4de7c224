# azclients/services/modules_client.py

from __future__ import annotations

from typing import List

import httpx

from azclients.adapters.iothub.rest_clients import (
    AsyncDeviceMethodRestClient,
    AsyncRegistryManagerRestClient,
    AsyncTwinRestClient,
    DeviceMethodRestClient,
    RegistryManagerRestClient,
    TwinRestClient,
)
from azclients.core.domain.iothub_models import (
    CloudToDeviceMethodRequest,
    CloudToDeviceMethodResponse,
    ModuleIdentity,
    TwinData,
)
from azclients.core.domain.preconditions import IfMatchPrecondition, get_if_match_header_value
from azclients.shared.validation import assert_not_none


class ModulesClient:
    """
    Module identities, module twins and module direct methods.

    Mirrors :class:`~azclients.services.devices_client.DevicesClient`, one
    level down: every entity is addressed by (device id, module id).
    """

    def __init__(
        self,
        registry_manager_client: RegistryManagerRestClient,
        twin_client: TwinRestClient,
        device_method_client: DeviceMethodRestClient,
    ) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        assert_not_none(twin_client, "twin_client")
        assert_not_none(device_method_client, "device_method_client")
        self._registry_manager_client = registry_manager_client
        self._twin_client = twin_client
        self._device_method_client = device_method_client

    def create_or_update_identity(
        self,
        module_identity: ModuleIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> ModuleIdentity:
        assert_not_none(module_identity, "module_identity")
        if_match = get_if_match_header_value(precondition, module_identity.etag)
        return self._registry_manager_client.create_or_update_module(
            module_identity.device_id, module_identity.module_id, module_identity, if_match
        )

    def get_identity(self, device_id: str, module_id: str) -> ModuleIdentity:
        return self._registry_manager_client.get_module(device_id, module_id)

    def get_identities(self, device_id: str) -> List[ModuleIdentity]:
        """All modules of one device (a single, unpaged response)."""
        return self._registry_manager_client.get_modules_on_device(device_id)

    def delete_identity(
        self,
        module_identity: ModuleIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> httpx.Response:
        assert_not_none(module_identity, "module_identity")
        if_match = get_if_match_header_value(precondition, module_identity.etag)
        return self._registry_manager_client.delete_module(
            module_identity.device_id, module_identity.module_id, if_match
        )

    def get_twin(self, device_id: str, module_id: str) -> TwinData:
        return self._twin_client.get_module_twin(device_id, module_id)

    def update_twin(
        self,
        twin_patch: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin_patch, "twin_patch")
        if_match = get_if_match_header_value(precondition, twin_patch.etag)
        return self._twin_client.update_module_twin(
            twin_patch.device_id, twin_patch.module_id, twin_patch, if_match
        )

    def replace_twin(
        self,
        twin: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin, "twin")
        if_match = get_if_match_header_value(precondition, twin.etag)
        return self._twin_client.replace_module_twin(twin.device_id, twin.module_id, twin, if_match)

    def invoke_method(
        self,
        device_id: str,
        module_id: str,
        direct_method_request: CloudToDeviceMethodRequest,
    ) -> CloudToDeviceMethodResponse:
        return self._device_method_client.invoke_module_method(device_id, module_id, direct_method_request)


class AsyncModulesClient:

    def __init__(
        self,
        registry_manager_client: AsyncRegistryManagerRestClient,
        twin_client: AsyncTwinRestClient,
        device_method_client: AsyncDeviceMethodRestClient,
    ) -> None:
        assert_not_none(registry_manager_client, "registry_manager_client")
        assert_not_none(twin_client, "twin_client")
        assert_not_none(device_method_client, "device_method_client")
        self._registry_manager_client = registry_manager_client
        self._twin_client = twin_client
        self._device_method_client = device_method_client

    async def create_or_update_identity(
        self,
        module_identity: ModuleIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> ModuleIdentity:
        assert_not_none(module_identity, "module_identity")
        if_match = get_if_match_header_value(precondition, module_identity.etag)
        return await self._registry_manager_client.create_or_update_module(
            module_identity.device_id, module_identity.module_id, module_identity, if_match
        )

    async def get_identity(self, device_id: str, module_id: str) -> ModuleIdentity:
        return await self._registry_manager_client.get_module(device_id, module_id)

    async def get_identities(self, device_id: str) -> List[ModuleIdentity]:
        return await self._registry_manager_client.get_modules_on_device(device_id)

    async def delete_identity(
        self,
        module_identity: ModuleIdentity,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> httpx.Response:
        assert_not_none(module_identity, "module_identity")
        if_match = get_if_match_header_value(precondition, module_identity.etag)
        return await self._registry_manager_client.delete_module(
            module_identity.device_id, module_identity.module_id, if_match
        )

    async def get_twin(self, device_id: str, module_id: str) -> TwinData:
        return await self._twin_client.get_module_twin(device_id, module_id)

    async def update_twin(
        self,
        twin_patch: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin_patch, "twin_patch")
        if_match = get_if_match_header_value(precondition, twin_patch.etag)
        return await self._twin_client.update_module_twin(
            twin_patch.device_id, twin_patch.module_id, twin_patch, if_match
        )

    async def replace_twin(
        self,
        twin: TwinData,
        precondition: IfMatchPrecondition = IfMatchPrecondition.IF_MATCH,
    ) -> TwinData:
        assert_not_none(twin, "twin")
        if_match = get_if_match_header_value(precondition, twin.etag)
        return await self._twin_client.replace_module_twin(twin.device_id, twin.module_id, twin, if_match)

    async def invoke_method(
        self,
        device_id: str,
        module_id: str,
        direct_method_request: CloudToDeviceMethodRequest,
    ) -> CloudToDeviceMethodResponse:
        return await self._device_method_client.invoke_module_method(device_id, module_id, direct_method_request)
