# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level Web API client: request dispatch and record operations.

Every public operation of the library ends up in :meth:`_ODataClient._request`,
which performs exactly one HTTP exchange and classifies the result by status
code. Nothing is retried or cached.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

import requests

from ..common.constants import (
    DEFAULT_CONTENT_TYPE,
    HEADER_CLIENT_REQUEST_ID,
    HEADER_ENTITY_ID,
    HEADER_SERVICE_REQUEST_ID,
)
from ..core._auth import _AuthManager
from ..core._error_codes import FORMAT_MISSING_ENTITY_ID
from ..core._http import _HttpClient
from ..core.config import WebApiConfig
from ..core.errors import ServiceError
from ..core.telemetry import TelemetryManager
from ..models.batch import BatchResponse, ChangeSet
from ..models.created_entity import CreatedEntity
from ..models.guid import Guid
from ..models.query_options import QueryOptions
from ._actions import _ActionOperationsMixin
from ._associations import _AssociationOperationsMixin
from ._batch import batch_content_type, decode_batch_response, encode_batch_body
from ._headers import build_headers
from ._paths import build_url, ensure_query_prefix, entity_path

logger = logging.getLogger(__name__)

_OK = (200,)
_CREATED = (201,)
_NO_CONTENT = (204, 205)
_OK_OR_NO_CONTENT = (200, 204)


class _ODataClient(_AssociationOperationsMixin, _ActionOperationsMixin):
    """
    Web API client: URL composition, header negotiation and dispatch.

    :param auth: Authentication manager, or ``None`` for requests without an
        ``Authorization`` header (for example behind an authenticating proxy).
    :type auth: ~xrm_webapi.core._auth._AuthManager | None
    :param base_url: Organization URL, or a zero-argument callable returning
        it. A callable is invoked once, on first use.
    :type base_url: str | Callable[[], str]
    :param config: Client configuration.
    :type config: ~xrm_webapi.core.config.WebApiConfig | None
    :param session: Optional ``requests.Session`` shared by all requests.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        auth: Optional[_AuthManager],
        base_url: Union[str, Callable[[], str]],
        config: Optional[WebApiConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self._base_url_source = base_url
        self._base_url: Optional[str] = None
        self._base_url_lock = threading.Lock()
        if isinstance(base_url, str):
            self._base_url = self._normalize_base_url(base_url)
        elif not callable(base_url):
            raise TypeError("base_url must be a string or a callable returning one.")
        self.config = config or WebApiConfig.from_env()
        self._http = _HttpClient(timeout=self.config.http_timeout, session=session)
        self._telemetry = TelemetryManager(self.config.telemetry)

    @staticmethod
    def _normalize_base_url(value: str) -> str:
        base = (value or "").rstrip("/")
        if not base:
            raise ValueError("base_url is required.")
        return base

    @property
    def base_url(self) -> str:
        """Organization URL, resolved once per client."""
        if self._base_url is None:
            with self._base_url_lock:
                if self._base_url is None:
                    self._base_url = self._normalize_base_url(self._base_url_source())
        return self._base_url

    @property
    def api(self) -> str:
        """Web API root, ``<base>/api/data/v<version>``."""
        return self._client_url().rstrip("/")

    def _client_url(self, query_string: str = "") -> str:
        return build_url(self.base_url, self.config.api_version, query_string)

    def close(self) -> None:
        """Release the transport. Safe to call multiple times."""
        self._http.close()

    # ----------------------------- dispatch -----------------------------
    def _headers(
        self,
        options: Optional[QueryOptions] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Dict[str, str]:
        """Build standard OData headers plus bearer auth and a client request id."""
        token = None
        if self.auth is not None:
            token = self.auth._acquire_token(f"{self.base_url}/.default").access_token
        headers = build_headers(options, content_type=content_type, access_token=token)
        headers[HEADER_CLIENT_REQUEST_ID] = str(uuid.uuid4())
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        options: Optional[QueryOptions] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        resolve_url: bool = True,
        expected: Tuple[int, ...] = _OK,
        operation: str = "request",
        **kwargs: Any,
    ) -> requests.Response:
        """
        Perform one HTTP exchange and classify it.

        :param method: HTTP method.
        :type method: str
        :param path: Path relative to the Web API root, or an absolute URL when
            ``resolve_url`` is ``False`` (server-provided next links).
        :type path: str
        :param options: Query options shaping ``Prefer`` and impersonation headers.
        :type options: ~xrm_webapi.models.query_options.QueryOptions | None
        :param content_type: Request ``Content-Type``.
        :type content_type: str
        :param resolve_url: Whether ``path`` must be resolved against the Web API root.
        :type resolve_url: bool
        :param expected: Status codes treated as success for this operation.
        :type expected: tuple[int, ...]
        :param operation: Operation name used for logging and tracing.
        :type operation: str
        :param kwargs: Passed to the transport (``json``, ``data``, ``timeout``).
        :return: The response, when its status is in ``expected``.
        :rtype: :class:`requests.Response`
        :raises ServiceError: If the status is not in ``expected``.
        :raises requests.exceptions.RequestException: If the exchange could not complete.
        """
        url = self._client_url(path) if resolve_url else path
        headers = self._headers(options, content_type)
        request_id = headers[HEADER_CLIENT_REQUEST_ID]

        with self._telemetry.trace_request(operation, method.upper(), url, request_id) as ctx:
            r = self._http._request(method, url, headers=headers, **kwargs)
            service_request_id = r.headers.get(HEADER_SERVICE_REQUEST_ID)
            if r.status_code in expected:
                self._telemetry.complete(ctx, r.status_code, service_request_id)
                return r
            err = self._service_error(r, service_request_id)
            self._telemetry.complete(ctx, r.status_code, service_request_id, error=err)
            raise err

    @staticmethod
    def _service_error(r: requests.Response, service_request_id: Optional[str] = None) -> ServiceError:
        """Build a :class:`ServiceError` from the ``error`` object of a failure body."""
        try:
            body = r.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            error = None

        message = error.get("message") if error else None
        body_excerpt = None
        if error is None:
            text = getattr(r, "text", "") or ""
            body_excerpt = text[:200] if text else None
        return ServiceError(
            message or f"Web API request failed with HTTP {r.status_code}",
            status_code=r.status_code,
            error=error,
            service_error_code=error.get("code") if error else None,
            request_id=service_request_id,
            body_excerpt=body_excerpt,
        )

    @staticmethod
    def _json_or_none(r: requests.Response) -> Any:
        """Parsed body for 2xx responses that carry one, ``None`` for no-content."""
        if r.status_code in _NO_CONTENT or not r.text:
            return None
        return r.json()

    # ----------------------------- records ------------------------------
    def _retrieve(
        self,
        entity_set: str,
        id: Guid,
        query_string: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Dict[str, Any]:
        query = ensure_query_prefix(query_string)
        path = entity_path(entity_set, id) + (query or "")
        r = self._request("get", path, options=options, expected=_OK, operation="records.retrieve")
        return r.json()

    def _retrieve_multiple(
        self,
        entity_set: str,
        query_string: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Dict[str, Any]:
        query = ensure_query_prefix(query_string)
        path = entity_set + (query or "")
        r = self._request("get", path, options=options, expected=_OK, operation="records.retrieve_multiple")
        return r.json()

    def _get_next_page(self, next_link: str, options: Optional[QueryOptions] = None) -> Dict[str, Any]:
        """Follow an ``@odata.nextLink`` URL as returned by the service."""
        r = self._request(
            "get",
            next_link,
            options=options,
            resolve_url=False,
            expected=_OK,
            operation="records.get_next_page",
        )
        return r.json()

    def _create(
        self,
        entity_set: str,
        entity: Dict[str, Any],
        options: Optional[QueryOptions] = None,
    ) -> CreatedEntity:
        """Create a record; the id and URI come from the ``OData-EntityId`` header."""
        r = self._request(
            "post",
            entity_set,
            options=options,
            expected=(204,),
            operation="records.create",
            json=entity,
        )
        uri = r.headers.get(HEADER_ENTITY_ID)
        if not uri:
            raise ServiceError(
                "Create response is missing the OData-EntityId header",
                status_code=r.status_code,
                details={"reason": FORMAT_MISSING_ENTITY_ID},
            )
        return CreatedEntity(id=self._extract_id_from_header(uri), uri=uri)

    @staticmethod
    def _extract_id_from_header(uri: str) -> Guid:
        """Parse the id between the last ``(`` and the following ``)``."""
        start = uri.rfind("(") + 1
        end = uri.find(")", start)
        if end == -1:
            end = len(uri)
        return Guid(uri[start:end])

    def _create_with_return_data(
        self,
        entity_set: str,
        entity: Dict[str, Any],
        select: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Dict[str, Any]:
        query = ensure_query_prefix(select)
        options = (options or QueryOptions()).with_representation()
        r = self._request(
            "post",
            entity_set + (query or ""),
            options=options,
            expected=_CREATED,
            operation="records.create_with_return_data",
            json=entity,
        )
        return r.json()

    def _update(
        self,
        entity_set: str,
        id: Guid,
        entity: Dict[str, Any],
        options: Optional[QueryOptions] = None,
    ) -> None:
        self._request(
            "patch",
            entity_path(entity_set, id),
            options=options,
            expected=_NO_CONTENT,
            operation="records.update",
            json=entity,
        )

    def _update_property(
        self,
        entity_set: str,
        id: Guid,
        attribute: str,
        value: Any,
        options: Optional[QueryOptions] = None,
    ) -> None:
        self._request(
            "put",
            f"{entity_path(entity_set, id)}/{attribute}",
            options=options,
            expected=_NO_CONTENT,
            operation="records.update_property",
            json={"value": value},
        )

    def _delete(self, entity_set: str, id: Guid) -> None:
        self._request("delete", entity_path(entity_set, id), expected=_NO_CONTENT, operation="records.delete")

    def _delete_property(self, entity_set: str, id: Guid, attribute: str) -> None:
        """Clear a single (non-navigation) property."""
        self._request(
            "delete",
            f"{entity_path(entity_set, id)}/{attribute}",
            expected=_NO_CONTENT,
            operation="records.delete_property",
        )

    # ------------------------------ batch -------------------------------
    def _batch(
        self,
        batch_id: str,
        change_set_id: str,
        change_sets: Sequence[ChangeSet],
        batch_gets: Sequence[str],
        options: Optional[QueryOptions] = None,
    ) -> BatchResponse:
        """Send change sets and reads as one ``$batch`` request and decode the reply."""
        body = encode_batch_body(batch_id, change_set_id, change_sets, batch_gets, self._client_url)
        logger.debug(
            "Sending batch %s with %d change set(s) and %d read(s)",
            batch_id,
            len(change_sets),
            len(batch_gets),
        )
        r = self._request(
            "post",
            "$batch",
            options=options,
            content_type=batch_content_type(batch_id),
            expected=_OK_OR_NO_CONTENT,
            operation="batch.execute",
            data=body.encode("utf-8"),
        )
        if r.status_code == 204 or not r.content:
            return BatchResponse([])
        # multipart/mixed carries no charset; the service always answers in UTF-8
        response = decode_batch_response(r.content.decode("utf-8"), r.headers.get("Content-Type", ""))
        logger.debug("Batch %s returned %d part(s)", batch_id, len(response))
        return response
