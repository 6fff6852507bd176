# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .telemetry import TelemetryConfig


@dataclass(frozen=True)
class WebApiConfig:
    """
    Configuration settings for Web API client operations.

    :param api_version: Web API version segment used in ``/api/data/v<version>/``. Default is ``"9.2"``.
    :type api_version: str
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param telemetry: Optional logging/tracing configuration. Telemetry is off when ``None``.
    :type telemetry: ~xrm_webapi.core.telemetry.TelemetryConfig or None
    :param max_workers: Worker threads backing :meth:`~xrm_webapi.client.WebApiClient.submit`
        (default: the ``ThreadPoolExecutor`` default).
    :type max_workers: int or None
    """
    api_version: str = "9.2"
    http_timeout: Optional[float] = None
    telemetry: Optional[TelemetryConfig] = None
    max_workers: Optional[int] = None

    @classmethod
    def from_env(cls) -> "WebApiConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~xrm_webapi.core.config.WebApiConfig
        """
        return cls(
            api_version="9.2",
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            telemetry=None,
            max_workers=None,
        )
