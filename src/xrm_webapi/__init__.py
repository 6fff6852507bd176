# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Dynamics 365 / Dataverse OData v4 Web API.

Translates record, association, action/function and batch operations into
Web API requests and turns the responses into values or structured errors.
"""

from .client import WebApiClient
from .core.config import WebApiConfig
from .core.errors import FormatError, ServiceError, TransportError, WebApiError
from .models.batch import BatchResponse, BatchResponseItem, ChangeSet
from .models.created_entity import CreatedEntity
from .models.function_input import FunctionInput
from .models.guid import Guid
from .models.query_options import QueryOptions

__version__ = "0.1.0"

__all__ = [
    "WebApiClient",
    "WebApiConfig",
    "WebApiError",
    "FormatError",
    "ServiceError",
    "TransportError",
    "Guid",
    "QueryOptions",
    "FunctionInput",
    "ChangeSet",
    "CreatedEntity",
    "BatchResponse",
    "BatchResponseItem",
]
