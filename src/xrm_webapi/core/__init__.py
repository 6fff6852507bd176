# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Web API client.

This module contains the foundational components including authentication,
configuration, HTTP transport, telemetry, and error handling.
"""

from .config import WebApiConfig
from .errors import FormatError, ServiceError, TransportError, WebApiError

__all__ = [
    "WebApiConfig",
    "WebApiError",
    "FormatError",
    "ServiceError",
    "TransportError",
]
