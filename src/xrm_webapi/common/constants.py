# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for Web API wire formats.

Header names, annotation identifiers and namespaces used when composing
requests, plus the OpenTelemetry attribute names used by the telemetry layer.
"""

# Standard request headers
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ODATA_MAX_VERSION = "OData-MaxVersion"
HEADER_ODATA_VERSION = "OData-Version"
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_PREFER = "Prefer"
HEADER_CALLER_ID = "MSCRMCallerID"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CLIENT_REQUEST_ID = "x-ms-client-request-id"
HEADER_SERVICE_REQUEST_ID = "x-ms-service-request-id"
HEADER_ENTITY_ID = "OData-EntityId"

ODATA_VERSION = "4.0"
CONTENT_TYPE_JSON = "application/json"
DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"

# Annotation identifiers for the Prefer header
ANNOTATION_FORMATTED_VALUE = "OData.Community.Display.V1.FormattedValue"
ANNOTATION_LOOKUP_LOGICAL_NAME = "Microsoft.Dynamics.CRM.lookuplogicalname"
ANNOTATION_ASSOCIATED_NAVIGATION_PROPERTY = "Microsoft.Dynamics.CRM.associatednavigationproperty"

# Namespace prefix for bound actions and functions
CRM_NAMESPACE = "Microsoft.Dynamics.CRM"

# OpenTelemetry attribute names
OTEL_ATTR_HTTP_METHOD = "http.request.method"
OTEL_ATTR_HTTP_URL = "url.full"
OTEL_ATTR_HTTP_STATUS_CODE = "http.response.status_code"
OTEL_ATTR_WEBAPI_OPERATION = "webapi.operation"
OTEL_ATTR_WEBAPI_REQUEST_ID = "webapi.client_request_id"
OTEL_ATTR_WEBAPI_SERVICE_REQUEST_ID = "webapi.service_request_id"
