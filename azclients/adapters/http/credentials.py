# azclients/adapters/http/credentials.py
from typing import Callable

from azclients.shared.validation import assert_not_none, assert_not_none_or_empty


class StaticCredential:
    """
    Sends the same Authorization value on every request.
    Typical use: a SAS token generated outside this library.
    """

    def __init__(self, authorization: str):
        assert_not_none_or_empty(authorization, "authorization")
        self._authorization = authorization

    def get_authorization_header(self) -> str:
        return self._authorization

    def __repr__(self) -> str:
        return f"{type(self).__name__}(authorization=<redacted>)"


class BearerTokenCredential:
    """
    Wraps a zero-argument callable returning an access token.
    The callable is invoked for every request so it can refresh on its own.
    """

    def __init__(self, token_provider: Callable[[], str]):
        assert_not_none(token_provider, "token_provider")
        self._token_provider = token_provider

    def get_authorization_header(self) -> str:
        token = self._token_provider()
        assert_not_none_or_empty(token, "token")
        return f"Bearer {token}"
