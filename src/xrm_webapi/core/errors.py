# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types raised by the Web API client.

- :class:`FormatError`: malformed client input (for example an invalid GUID).
  Raised synchronously, never as the outcome of a request.
- :class:`ServiceError`: the service answered with a status code the operation
  does not accept. Carries the ``error`` object returned by the service.
- :data:`TransportError`: the HTTP exchange itself could not complete. This is
  the transport's own exception type and is propagated unmodified.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

import requests

from ._error_codes import http_subcode


class WebApiError(Exception):
    """Base structured error for the Web API client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary form, suitable for structured logs."""
        keys = ("message", "code", "subcode", "status_code", "details", "source", "timestamp")
        return {key: getattr(self, key) for key in keys}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}/{self.subcode}: {self.message!r})"


class FormatError(WebApiError, ValueError):
    """Raised when client-side input does not match the required format."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="format_error", subcode=subcode, details=details, source="client")


class ServiceError(WebApiError):
    """
    Raised when the service returns a status code the operation does not accept.

    :param message: Human readable summary (the service message when present).
    :type message: :class:`str`
    :param status_code: HTTP status code of the response.
    :type status_code: :class:`int`
    :param error: The structured ``error`` object from the response body, or
        ``None`` when the body was empty or not JSON.
    :type error: :class:`dict` | None
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error: Optional[Dict[str, Any]] = None,
        service_error_code: Optional[str] = None,
        request_id: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        merged = dict(details or {})
        for key, value in (
            ("service_error_code", service_error_code),
            ("request_id", request_id),
            ("body_excerpt", body_excerpt),
        ):
            if value is not None:
                merged[key] = value
        super().__init__(
            message,
            code="http_error",
            subcode=http_subcode(status_code),
            status_code=status_code,
            details=merged,
            source="server",
        )
        self.error = error

    @property
    def service_error_code(self) -> Optional[str]:
        """Dataverse error code such as ``0x80040217``, when the body carried one."""
        return self.details.get("service_error_code")

    @property
    def request_id(self) -> Optional[str]:
        """``x-ms-service-request-id`` of the failed response."""
        return self.details.get("request_id")

    def __str__(self) -> str:
        return f"{self.status_code} {self.message}"


TransportError = requests.exceptions.RequestException

__all__ = ["WebApiError", "FormatError", "ServiceError", "TransportError"]
