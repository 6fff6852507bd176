# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Bearer token acquisition for Web API requests.

The client accepts either an Azure Identity ``TokenCredential`` (tokens are
requested for the ``<base_url>/.default`` scope on every call, the credential
handles caching) or a pre-acquired access token string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from azure.core.credentials import TokenCredential


@dataclass
class _TokenPair:
    """
    Container for an OAuth2 access token and its scope.

    :param resource: The OAuth2 scope or resource the token was issued for.
    :type resource: :class:`str` | None
    :param access_token: The access token string.
    :type access_token: :class:`str`
    """

    resource: Optional[str]
    access_token: str


class _AuthManager:
    """
    Authentication helper for the Web API client.

    :param credential: Azure Identity credential or a static bearer token.
    :type credential: ~azure.core.credentials.TokenCredential or :class:`str`
    :raises TypeError: If ``credential`` is neither a ``TokenCredential`` nor a string.
    """

    def __init__(self, credential: Union[TokenCredential, str]) -> None:
        if isinstance(credential, str):
            if not credential:
                raise TypeError("access token must be a non-empty string.")
        elif not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential or be a token string.")
        self.credential = credential

    def _acquire_token(self, scope: str) -> _TokenPair:
        """
        Acquire an access token for the given scope.

        :param scope: OAuth2 scope string, typically ``"https://<org>.crm.dynamics.com/.default"``.
        :type scope: :class:`str`
        :return: Token pair containing the scope and access token.
        :rtype: ~xrm_webapi.core._auth._TokenPair
        """
        if isinstance(self.credential, str):
            return _TokenPair(resource=None, access_token=self.credential)
        token = self.credential.get_token(scope)
        return _TokenPair(resource=scope, access_token=token.token)
