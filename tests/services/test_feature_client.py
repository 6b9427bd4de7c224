# tests/services/test_feature_client.py
import httpx
import pytest

from azclients import AsyncFeatureClient, BearerTokenCredential, FeatureClient
from azclients.core.domain.exceptions import ArgumentError, ResourceNotFoundError
from tests.conftest import SUBSCRIPTION_ID, RecordingTransport

PROVIDER_ROOT = f"/subscriptions/{SUBSCRIPTION_ID}/providers/Microsoft.Features"
NEXT_LINK = f"https://management.azure.com{PROVIDER_ROOT}/features?api-version=2015-12-01&$skiptoken=page2"


def feature(name, state="NotRegistered"):
    namespace, short_name = name.split("/")
    return {
        "name": name,
        "properties": {"state": state},
        "id": f"{PROVIDER_ROOT}/providers/{namespace}/features/{short_name}",
        "type": "Microsoft.Features/providers/features",
    }


@pytest.fixture
def recorder():
    return RecordingTransport()


@pytest.fixture
def arm_credential():
    return BearerTokenCredential(lambda: "arm-token")


@pytest.fixture
def client(recorder, arm_credential):
    with FeatureClient(arm_credential, SUBSCRIPTION_ID, transport=recorder.transport) as feature_client:
        yield feature_client


class TestFeaturesOperations:
    def test_list_all_follows_next_link(self, client, recorder):
        """
        Scenario: the first page carries a nextLink, the second does not.
        Expected: both pages are read; the nextLink URL is requested verbatim.
        """
        recorder.replies.extend([
            httpx.Response(200, json={"value": [feature("Microsoft.Compute/A")], "nextLink": NEXT_LINK}),
            httpx.Response(200, json={"value": [feature("Microsoft.Network/B", "Registered")]}),
        ])

        names = [f.name for f in client.features.list_all()]

        assert names == ["Microsoft.Compute/A", "Microsoft.Network/B"]
        first, second = recorder.requests
        assert first.url.path == f"{PROVIDER_ROOT}/features"
        assert first.url.params["api-version"] == "2015-12-01"
        assert second.url.params["$skiptoken"] == "page2"
        assert second.url.params.get_list("api-version") == ["2015-12-01"]

    def test_common_headers(self, client, recorder):
        recorder.replies.append(httpx.Response(200, json={"value": []}))
        list(client.features.list_all())

        request = recorder.last
        assert request.url.host == "management.azure.com"
        assert request.headers["Authorization"] == "Bearer arm-token"
        assert request.headers["accept-language"] == "en-US"
        assert "x-ms-client-request-id" in request.headers

    def test_empty_value_with_next_link_keeps_paging(self, client, recorder):
        recorder.replies.extend([
            httpx.Response(200, json={"value": [], "nextLink": NEXT_LINK}),
            httpx.Response(200, json={"value": [feature("Microsoft.Compute/A")], "nextLink": None}),
        ])
        assert len(list(client.features.list_all())) == 1

    def test_list_for_provider(self, client, recorder):
        recorder.replies.append(httpx.Response(200, json={"value": [feature("Microsoft.Compute/A")]}))
        [only] = list(client.features.list("Microsoft.Compute"))

        assert recorder.last.url.path == f"{PROVIDER_ROOT}/providers/Microsoft.Compute/features"
        assert only.properties.state == "NotRegistered"

    def test_list_by_page(self, client, recorder):
        recorder.replies.extend([
            httpx.Response(200, json={"value": [feature("Microsoft.Compute/A")], "nextLink": NEXT_LINK}),
            httpx.Response(200, json={"value": [feature("Microsoft.Compute/B")]}),
        ])
        pages = list(client.features.list("Microsoft.Compute").by_page())

        assert [page.continuation_token for page in pages] == [NEXT_LINK, None]

    def test_get(self, client, recorder):
        recorder.replies.append(httpx.Response(200, json=feature("Microsoft.Compute/EncryptionAtHost", "Registered")))
        result = client.features.get("Microsoft.Compute", "EncryptionAtHost")

        assert recorder.last.method == "GET"
        assert recorder.last.url.path == f"{PROVIDER_ROOT}/providers/Microsoft.Compute/features/EncryptionAtHost"
        assert result.properties.state == "Registered"

    def test_get_unknown_feature(self, client, recorder):
        recorder.replies.append(httpx.Response(
            404, json={"error": {"code": "FeatureNotFound", "message": "not found"}}
        ))
        with pytest.raises(ResourceNotFoundError) as excinfo:
            client.features.get("Microsoft.Compute", "Nope")
        assert excinfo.value.error_code == "FeatureNotFound"

    def test_register(self, client, recorder):
        recorder.replies.append(httpx.Response(200, json=feature("Microsoft.Compute/A", "Registering")))
        result = client.features.register("Microsoft.Compute", "A")

        assert recorder.last.method == "POST"
        assert recorder.last.url.path.endswith("/providers/Microsoft.Compute/features/A/register")
        assert result.properties.state == "Registering"

    def test_list_next_direct(self, client, recorder):
        recorder.replies.append(httpx.Response(200, json={"value": [feature("Microsoft.Compute/B")]}))
        result = client.features.list_next(NEXT_LINK)

        assert str(recorder.last.url).startswith("https://management.azure.com/")
        assert result.next_link is None
        assert result.value[0].name == "Microsoft.Compute/B"

    def test_list_next_requires_link(self, client):
        with pytest.raises(ArgumentError):
            client.features.list_all_next("")

    def test_provider_namespace_required(self, client):
        with pytest.raises(ArgumentError):
            client.features.list("")


class TestOperations:
    def test_list(self, client, recorder):
        recorder.replies.append(httpx.Response(200, json={"value": [{
            "name": "Microsoft.Features/features/read",
            "display": {"provider": "Microsoft Features", "resource": "Features", "operation": "List features"},
        }]}))
        [operation] = list(client.operations.list())

        assert recorder.last.url.path == "/providers/Microsoft.Features/operations"
        assert operation.display.operation == "List features"


class TestFeatureClient:
    def test_subscription_required(self, arm_credential, recorder):
        with pytest.raises(ArgumentError):
            FeatureClient(arm_credential, "", transport=recorder.transport)

    def test_credential_required(self, recorder):
        with pytest.raises(ArgumentError):
            FeatureClient(None, SUBSCRIPTION_ID, transport=recorder.transport)

    def test_custom_base_url_and_language(self, arm_credential, recorder):
        recorder.replies.append(httpx.Response(200, json={"value": []}))
        with FeatureClient(
            arm_credential,
            SUBSCRIPTION_ID,
            base_url="https://management.chinacloudapi.cn",
            accept_language="de-DE",
            transport=recorder.transport,
        ) as client:
            list(client.operations.list())

        assert recorder.last.url.host == "management.chinacloudapi.cn"
        assert recorder.last.headers["accept-language"] == "de-DE"


@pytest.mark.asyncio
class TestAsyncFeatureClient:

    async def test_list_all_follows_next_link(self, recorder, arm_credential):
        recorder.replies.extend([
            httpx.Response(200, json={"value": [feature("Microsoft.Compute/A")], "nextLink": NEXT_LINK}),
            httpx.Response(200, json={"value": [feature("Microsoft.Compute/B")]}),
        ])
        async with AsyncFeatureClient(arm_credential, SUBSCRIPTION_ID, transport=recorder.transport) as client:
            names = [f.name async for f in client.features.list_all()]

        assert names == ["Microsoft.Compute/A", "Microsoft.Compute/B"]

    async def test_register(self, recorder, arm_credential):
        recorder.replies.append(httpx.Response(200, json=feature("Microsoft.Compute/A", "Registering")))
        async with AsyncFeatureClient(arm_credential, SUBSCRIPTION_ID, transport=recorder.transport) as client:
            result = await client.features.register("Microsoft.Compute", "A")

        assert result.properties.state == "Registering"
