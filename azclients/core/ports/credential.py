# azclients/core/ports/credential.py
from typing import Protocol


class ICredential(Protocol):
    """
    Port for anything that can authorize an outgoing request.
    Implementations could be a pre-signed IoT Hub SAS token, an AAD bearer
    token provider, or a test double.
    """

    def get_authorization_header(self) -> str:
        """
        Returns the full value of the ``Authorization`` header,
        e.g. ``"Bearer eyJ0..."`` or ``"SharedAccessSignature sr=..."``.
        """
        ...
