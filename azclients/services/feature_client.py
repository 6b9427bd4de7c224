# azclients/services/feature_client.py

from __future__ import annotations

from typing import Optional

import httpx

from azclients.adapters.features.operations import (
    AsyncFeaturesOperations,
    AsyncOperations,
    FeaturesOperations,
    Operations,
)
from azclients.adapters.http.pipeline import AsyncHttpPipeline, HttpPipeline
from azclients.core.ports.credential import ICredential
from azclients.shared.config import settings
from azclients.shared.logging_config import get_logger
from azclients.shared.validation import assert_not_none, assert_not_none_or_empty

logger = get_logger(__name__)


def _arm_headers(accept_language: Optional[str]) -> dict:
    return {"accept-language": accept_language or settings.ACCEPT_LANGUAGE}


class FeatureClient:
    """
    Azure Resource Manager client for preview-feature registration.

        with FeatureClient(BearerTokenCredential(get_token), subscription_id) as client:
            for feature in client.features.list("Microsoft.Compute"):
                print(feature.name, feature.properties.state)

    Attributes
    ----------
    features:
        :class:`FeaturesOperations` bound to ``subscription_id``.
    operations:
        :class:`Operations` listing the provider's REST operations.
    """

    def __init__(
        self,
        credential: ICredential,
        subscription_id: str,
        *,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        accept_language: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        assert_not_none(credential, "credential")
        assert_not_none_or_empty(subscription_id, "subscription_id")
        self.subscription_id = subscription_id
        self._pipeline = HttpPipeline(
            base_url or settings.ARM_ENDPOINT,
            credential,
            api_version=api_version or settings.FEATURES_API_VERSION,
            headers=_arm_headers(accept_language),
            timeout=timeout,
            transport=transport,
        )
        self.features = FeaturesOperations(self._pipeline, subscription_id)
        self.operations = Operations(self._pipeline)
        logger.debug("feature_client_created", endpoint=self._pipeline.base_url)

    def close(self) -> None:
        self._pipeline.close()

    def __enter__(self) -> "FeatureClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncFeatureClient:
    """Async counterpart of :class:`FeatureClient`."""

    def __init__(
        self,
        credential: ICredential,
        subscription_id: str,
        *,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        accept_language: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        assert_not_none(credential, "credential")
        assert_not_none_or_empty(subscription_id, "subscription_id")
        self.subscription_id = subscription_id
        self._pipeline = AsyncHttpPipeline(
            base_url or settings.ARM_ENDPOINT,
            credential,
            api_version=api_version or settings.FEATURES_API_VERSION,
            headers=_arm_headers(accept_language),
            timeout=timeout,
            transport=transport,
        )
        self.features = AsyncFeaturesOperations(self._pipeline, subscription_id)
        self.operations = AsyncOperations(self._pipeline)
        logger.debug("feature_client_created", endpoint=self._pipeline.base_url)

    async def close(self) -> None:
        await self._pipeline.close()

    async def __aenter__(self) -> "AsyncFeatureClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
