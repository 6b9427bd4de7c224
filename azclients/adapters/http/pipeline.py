# azclients/adapters/http/pipeline.py
"""
HTTP pipeline shared by every REST client.

The pipeline owns the ``httpx`` client and is the only place that talks to
the network. It stamps each request with the headers the Azure services
expect, runs it inside an OpenTelemetry span, logs the exchange, and maps
unexpected status codes onto the exception hierarchy in
``azclients.core.domain.exceptions``.

There is no retry: one ``send`` is exactly one HTTP call.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from azclients.core.domain.exceptions import (
    ClientAuthenticationError,
    DeserializationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError,
)
from azclients.core.ports.credential import ICredential
from azclients.shared.config import settings
from azclients.shared.logging_config import get_logger, redact_headers
from azclients.shared.telemetry import get_tracer

logger = get_logger(__name__)
tracer = get_tracer(__name__)

T = TypeVar("T")

API_VERSION_PARAM = "api-version"
CLIENT_REQUEST_ID_HEADER = "x-ms-client-request-id"
IOTHUB_ERROR_CODE_HEADER = "iothub-errorcode"

_STATUS_ERRORS: Dict[int, Type[HttpResponseError]] = {
    401: ClientAuthenticationError,
    403: ClientAuthenticationError,
    404: ResourceNotFoundError,
    409: ResourceExistsError,
    412: ResourceModifiedError,
}


@dataclass
class RestRequest:
    """
    A REST call before it is bound to a transport.

    ``url`` is either a path relative to the pipeline's base URL or an
    absolute URL (ARM ``nextLink`` values), which is used unchanged.
    """
    method: str
    url: str
    operation: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    json: Any = None


# ------------------------------------------------------------------
# Error mapping
# ------------------------------------------------------------------

def _extract_error(response: httpx.Response) -> Tuple[Optional[str], Optional[str]]:
    """
    Pull (error_code, detail) out of an error response.

    IoT Hub reports the code in a header and a free-text ``Message`` such as
    ``"ErrorCode:DeviceNotFound;Device not found"``. ARM uses the
    ``{"error": {"code", "message"}}`` envelope.
    """
    error_code = response.headers.get(IOTHUB_ERROR_CODE_HEADER)
    detail = None

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        envelope = body.get("error")
        if isinstance(envelope, dict):
            error_code = error_code or envelope.get("code")
            detail = envelope.get("message")
        else:
            detail = body.get("Message") or body.get("message") or body.get("ExceptionMessage")
            if error_code is None and isinstance(detail, str) and detail.startswith("ErrorCode:"):
                error_code = detail[len("ErrorCode:"):].split(";", 1)[0] or None

    if detail is None and body is None and response.text:
        detail = response.text

    return error_code, detail


def map_error(operation: str, response: httpx.Response) -> HttpResponseError:
    error_code, detail = _extract_error(response)
    message = f"Operation '{operation}' returned status {response.status_code} ({response.reason_phrase})"
    if error_code:
        message += f" [{error_code}]"
    if detail:
        message += f": {detail}"
    error_cls = _STATUS_ERRORS.get(response.status_code, HttpResponseError)
    return error_cls(message, response=response, error_code=error_code)


# ------------------------------------------------------------------
# Deserialization
# ------------------------------------------------------------------

def deserialize(model_type: Type[T], response: httpx.Response) -> T:
    """Map a JSON object body onto ``model_type``."""
    try:
        return model_type.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise DeserializationError(model_type.__name__, str(e)) from e


def deserialize_list(model_type: Type[T], response: httpx.Response) -> List[T]:
    """Map a JSON array body onto a list of ``model_type``."""
    try:
        return TypeAdapter(List[model_type]).validate_python(response.json())
    except (ValueError, ValidationError) as e:
        raise DeserializationError(f"List[{model_type.__name__}]", str(e)) from e


# ------------------------------------------------------------------
# Pipelines
# ------------------------------------------------------------------

class _PipelineBase:

    def __init__(
        self,
        base_url: str,
        credential: Optional[ICredential] = None,
        *,
        api_version: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._credential = credential
        self._api_version = api_version
        self._headers = {
            "Accept": "application/json",
            "User-Agent": settings.USER_AGENT,
        }
        if headers:
            self._headers.update(headers)

    def _prepare(self, request: RestRequest) -> Tuple[Dict[str, str], Dict[str, str]]:
        params = dict(request.params)
        if (
            self._api_version
            and API_VERSION_PARAM not in params
            and API_VERSION_PARAM not in httpx.URL(request.url).params
        ):
            params[API_VERSION_PARAM] = self._api_version

        headers = dict(self._headers)
        headers[CLIENT_REQUEST_ID_HEADER] = str(uuid.uuid4())
        headers.update(request.headers)
        if self._credential is not None:
            headers["Authorization"] = self._credential.get_authorization_header()
        return params, headers

    def _record(self, span, request: RestRequest, http_request: httpx.Request) -> None:
        span.set_attribute("http.method", request.method)
        span.set_attribute("http.url", str(http_request.url))
        logger.debug(
            "http_request_sent",
            operation=request.operation,
            method=request.method,
            url=str(http_request.url),
            headers=redact_headers(http_request.headers),
        )

    def _check(
        self,
        span,
        request: RestRequest,
        response: httpx.Response,
        expected_status: Collection[int],
    ) -> httpx.Response:
        span.set_attribute("http.status_code", response.status_code)
        if response.status_code not in expected_status:
            logger.warning(
                "http_request_failed",
                operation=request.operation,
                status=response.status_code,
                request_id=response.request.headers.get(CLIENT_REQUEST_ID_HEADER),
            )
            raise map_error(request.operation, response)

        logger.debug(
            "http_response_received",
            operation=request.operation,
            status=response.status_code,
        )
        return response


class HttpPipeline(_PipelineBase):
    """Synchronous pipeline over ``httpx.Client``."""

    def __init__(
        self,
        base_url: str,
        credential: Optional[ICredential] = None,
        *,
        api_version: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(base_url, credential, api_version=api_version, headers=headers)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    def send(self, request: RestRequest, expected_status: Collection[int] = (200,)) -> httpx.Response:
        params, headers = self._prepare(request)
        with tracer.start_as_current_span(request.operation) as span:
            http_request = self._client.build_request(
                request.method,
                request.url,
                params=params or None,
                headers=headers,
                json=request.json,
            )
            self._record(span, request, http_request)
            response = self._client.send(http_request)
            return self._check(span, request, response, expected_status)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpPipeline":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncHttpPipeline(_PipelineBase):
    """Asynchronous pipeline over ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        credential: Optional[ICredential] = None,
        *,
        api_version: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, credential, api_version=api_version, headers=headers)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    async def send(self, request: RestRequest, expected_status: Collection[int] = (200,)) -> httpx.Response:
        params, headers = self._prepare(request)
        with tracer.start_as_current_span(request.operation) as span:
            http_request = self._client.build_request(
                request.method,
                request.url,
                params=params or None,
                headers=headers,
                json=request.json,
            )
            self._record(span, request, http_request)
            response = await self._client.send(http_request)
            return self._check(span, request, response, expected_status)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpPipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
