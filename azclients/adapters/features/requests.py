# azclients/adapters/features/requests.py
"""Request builders for the ARM ``Microsoft.Features`` provider."""
from urllib.parse import quote

from azclients.adapters.http.pipeline import RestRequest
from azclients.shared.validation import assert_not_none_or_empty

PROVIDER = "Microsoft.Features"


def _segment(value: str, name: str) -> str:
    assert_not_none_or_empty(value, name)
    return quote(value, safe="")


def _subscription_root(subscription_id: str) -> str:
    return f"/subscriptions/{_segment(subscription_id, 'subscription_id')}/providers/{PROVIDER}"


def _feature_path(subscription_id: str, resource_provider_namespace: str, feature_name: str) -> str:
    return (
        f"{_subscription_root(subscription_id)}/providers/"
        f"{_segment(resource_provider_namespace, 'resource_provider_namespace')}/features/"
        f"{_segment(feature_name, 'feature_name')}"
    )


def build_list_all_request(subscription_id: str) -> RestRequest:
    return RestRequest("GET", f"{_subscription_root(subscription_id)}/features", "features_list_all")


def build_list_request(subscription_id: str, resource_provider_namespace: str) -> RestRequest:
    namespace = _segment(resource_provider_namespace, "resource_provider_namespace")
    return RestRequest(
        "GET",
        f"{_subscription_root(subscription_id)}/providers/{namespace}/features",
        "features_list",
    )


def build_get_request(subscription_id: str, resource_provider_namespace: str, feature_name: str) -> RestRequest:
    return RestRequest(
        "GET",
        _feature_path(subscription_id, resource_provider_namespace, feature_name),
        "features_get",
    )


def build_register_request(subscription_id: str, resource_provider_namespace: str, feature_name: str) -> RestRequest:
    return RestRequest(
        "POST",
        f"{_feature_path(subscription_id, resource_provider_namespace, feature_name)}/register",
        "features_register",
    )


def build_list_operations_request() -> RestRequest:
    return RestRequest("GET", f"/providers/{PROVIDER}/operations", "operations_list")


def build_next_page_request(next_link: str, operation: str) -> RestRequest:
    """``next_link`` is an absolute URL returned by the previous page."""
    assert_not_none_or_empty(next_link, "next_link")
    return RestRequest("GET", next_link, operation)
