# azclients/core/domain/exceptions.py
from typing import Optional

import httpx


class ClientError(Exception):
    """Base class for all exceptions raised by the clients."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Caller Errors ---

class ArgumentError(ClientError, ValueError):
    """Raised when a required argument is missing, empty, or violates a client-side contract."""
    def __init__(self, name: str, reason: str):
        self.argument_name = name
        super().__init__(f"Invalid argument '{name}': {reason}")

# --- Service Errors ---

class HttpResponseError(ClientError):
    """
    Raised when the service answers with a status code the operation does
    not expect. The raw ``httpx.Response`` is kept for inspection.
    """
    def __init__(
        self,
        message: str,
        *,
        response: Optional[httpx.Response] = None,
        error_code: Optional[str] = None,
    ):
        self.response = response
        self.status_code = response.status_code if response is not None else None
        self.reason = response.reason_phrase if response is not None else None
        self.error_code = error_code
        super().__init__(message)

class ClientAuthenticationError(HttpResponseError):
    """401/403: the credential was rejected."""

class ResourceNotFoundError(HttpResponseError):
    """404: the device, module, twin or feature does not exist."""

class ResourceExistsError(HttpResponseError):
    """409: the resource already exists."""

class ResourceModifiedError(HttpResponseError):
    """412: the If-Match ETag no longer matches the service's version."""

# --- Payload Errors ---

class DeserializationError(ClientError):
    """Raised when a response body cannot be mapped into the expected model."""
    def __init__(self, model_name: str, details: str):
        super().__init__(f"Unable to deserialize response into '{model_name}': {details}")
