# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar, Union

import requests

from azure.core.credentials import TokenCredential

from .core._auth import _AuthManager
from .core.config import WebApiConfig
from .data._odata import _ODataClient
from .operations.actions import ActionOperations
from .operations.associations import AssociationOperations
from .operations.batch import BatchOperations
from .operations.records import RecordOperations

T = TypeVar("T")


class WebApiClient:
    """
    High-level client for the Dynamics 365 / Dataverse Web API.

    Each operation performs one HTTP exchange and either returns its result or
    raises: :class:`~xrm_webapi.core.errors.ServiceError` for unexpected status
    codes (carrying the service's ``error`` object), or the transport's own
    ``requests`` exception when the exchange could not complete. Calls share no
    mutable state, so one client can be used from several threads.

    Operations are organized under namespaces:

    - ``client.records``: retrieve, retrieve_multiple, get_next_page, iter_pages,
      create, create_with_return_data, update, update_property, delete, delete_property
    - ``client.associations``: associate, disassociate
    - ``client.actions``: bound/unbound actions and functions
    - ``client.batch``: multipart ``$batch`` requests

    :meth:`submit` runs any of these on a worker thread and returns a
    :class:`~concurrent.futures.Future` instead of blocking.

    :param base_url: Organization URL such as ``"https://org.crm.dynamics.com"``,
        or a zero-argument callable returning it (resolved once, on first use).
        Trailing slash is removed.
    :type base_url: :class:`str` or Callable[[], str]
    :param credential: Azure Identity credential, a pre-acquired bearer token, or
        ``None`` to send no ``Authorization`` header.
    :type credential: ~azure.core.credentials.TokenCredential or :class:`str` or None
    :param config: Optional configuration (API version, timeout, telemetry).
        Defaults come from :meth:`~xrm_webapi.core.config.WebApiConfig.from_env`.
    :type config: ~xrm_webapi.core.config.WebApiConfig or None

    :raises ValueError: If ``base_url`` is an empty string.

    Example::

        from azure.identity import InteractiveBrowserCredential
        from xrm_webapi import WebApiClient, QueryOptions

        with WebApiClient("https://org.crm.dynamics.com", InteractiveBrowserCredential()) as client:
            created = client.records.create("accounts", {"name": "Contoso"})
            account = client.records.retrieve(
                "accounts", created.id, "$select=name", QueryOptions(include_formatted_values=True)
            )
            client.records.delete("accounts", created.id)
    """

    def __init__(
        self,
        base_url: Union[str, Callable[[], str]],
        credential: Optional[Union[TokenCredential, str]] = None,
        config: Optional[WebApiConfig] = None,
    ) -> None:
        self.auth = _AuthManager(credential) if credential is not None else None
        if isinstance(base_url, str):
            base_url = base_url.rstrip("/")
            if not base_url:
                raise ValueError("base_url is required.")
        self._base_url = base_url
        self._config = config or WebApiConfig.from_env()
        self._odata: Optional[_ODataClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False
        self._executor: Optional[ThreadPoolExecutor] = None

        self.records = RecordOperations(self)
        self.associations = AssociationOperations(self)
        self.actions = ActionOperations(self)
        self.batch = BatchOperations(self)

    def __enter__(self) -> "WebApiClient":
        """
        Enter the context manager, opening a ``requests.Session`` reused by
        every request made inside the block.
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            if self._odata is not None:
                self._odata.close()
                self._odata = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources. Safe to call multiple times.

        Waits for calls started with :meth:`submit` to finish.
        """
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._odata is not None:
            self._odata.close()
            self._odata = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_odata(self) -> _ODataClient:
        """
        Get or create the internal OData client instance.

        :rtype: ~xrm_webapi.data._odata._ODataClient
        """
        if self._odata is None:
            self._odata = _ODataClient(
                self.auth,
                self._base_url,
                self._config,
                session=self._session,
            )
        return self._odata

    def client_url(self, query_string: str = "") -> str:
        """
        Absolute Web API URL for a relative path.

        :param query_string: Path and query relative to ``/api/data/v<version>/``.
        :type query_string: str
        :rtype: str

        Example::

            >>> WebApiClient("https://org.crm.dynamics.com").client_url("accounts")
            'https://org.crm.dynamics.com/api/data/v9.2/accounts'
        """
        return self._get_odata()._client_url(query_string)

    def submit(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        """
        Run an operation on a worker thread and return its pending result.

        The returned :class:`~concurrent.futures.Future` completes exactly once:
        with the operation's return value, or with the exception it raised
        (``ServiceError``, ``FormatError`` or the transport's exception).
        Nothing is retried; cancelling the future only prevents a call that has
        not started yet.

        :param operation: Any client operation, e.g. ``client.records.retrieve``.
        :type operation: Callable
        :return: Future resolving to the operation's result.
        :rtype: ~concurrent.futures.Future

        Example::

            futures = [client.submit(client.records.delete, "accounts", id) for id in ids]
            for future in as_completed(futures):
                future.result()
        """
        self._get_odata()
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._config.max_workers,
                thread_name_prefix="xrm_webapi",
            )
        return self._executor.submit(operation, *args, **kwargs)
