# tests/conftest.py
import json
from typing import Callable, List, Union

import httpx
import pytest

from azclients.adapters.http.credentials import StaticCredential
from azclients.core.domain.iothub_models import (
    AuthenticationMechanism,
    DeviceCapabilities,
    DeviceIdentity,
    SymmetricKey,
    TwinData,
    TwinProperties,
)

HUB_HOST = "contoso-hub.azure-devices.net"
SUBSCRIPTION_ID = "00000000-1111-2222-3333-444444444444"
SAS_TOKEN = "SharedAccessSignature sr=contoso-hub.azure-devices.net&sig=abc&se=1700000000&skn=iothubowner"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class RecordingTransport:
    """
    Scripted fake service.

    Replies are consumed in order; every request is kept so tests can
    assert on method, URL, headers and body. Usable by both the sync and
    the async pipeline through ``httpx.MockTransport``.
    """

    def __init__(self, *replies: Reply):
        self.replies: List[Reply] = list(replies)
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        reply = self.replies.pop(0)
        return reply(request) if callable(reply) else reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def body_of(request: httpx.Request):
    return json.loads(request.content)


@pytest.fixture
def credential():
    return StaticCredential(SAS_TOKEN)


@pytest.fixture
def sample_identity():
    """A SAS-authenticated device as returned by the registry."""
    return DeviceIdentity(
        device_id="thermostat-01",
        etag="AAAAAAAAAAE=",
        status="enabled",
        authentication=AuthenticationMechanism(
            type="sas",
            symmetric_key=SymmetricKey(primary_key="cHJpbWFyeQ==", secondary_key="c2Vjb25kYXJ5"),
        ),
        capabilities=DeviceCapabilities(iot_edge=False),
    )


@pytest.fixture
def sample_twin():
    return TwinData(
        device_id="thermostat-01",
        etag="AAAAAAAAAAI=",
        tags={"site": "berlin"},
        properties=TwinProperties(
            desired={"targetTemperature": 21},
            reported={"firmware": "1.4.2"},
        ),
    )
