# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request header negotiation.

:func:`build_prefer_header` turns :class:`~xrm_webapi.models.query_options.QueryOptions`
into the ``Prefer`` header value; :func:`build_headers` assembles the full
header set sent with every request.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..common.constants import (
    ANNOTATION_ASSOCIATED_NAVIGATION_PROPERTY,
    ANNOTATION_FORMATTED_VALUE,
    ANNOTATION_LOOKUP_LOGICAL_NAME,
    CONTENT_TYPE_JSON,
    DEFAULT_CONTENT_TYPE,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CACHE_CONTROL,
    HEADER_CALLER_ID,
    HEADER_CONTENT_TYPE,
    HEADER_ODATA_MAX_VERSION,
    HEADER_ODATA_VERSION,
    HEADER_PREFER,
    ODATA_VERSION,
)
from ..models.query_options import QueryOptions


def build_prefer_header(options: QueryOptions) -> str:
    """
    Build the ``Prefer`` header value for ``options``.

    Clauses, in order:

    1. ``odata.maxpagesize=<n>`` when a page size is set.
    2. ``odata.include-annotations="*"`` when all three annotation flags are
       set, otherwise the selected annotations comma-joined inside one
       ``odata.include-annotations="..."`` clause. The clause is emitted even
       when empty (``odata.include-annotations=""``); existing consumers
       depend on that form.
    3. ``return=representation`` when ``representation`` is set.

    :param options: Query options for the request.
    :type options: ~xrm_webapi.models.query_options.QueryOptions
    :return: Comma-joined ``Prefer`` value.
    :rtype: str

    Example::

        >>> build_prefer_header(QueryOptions(max_page_size=50))
        'odata.maxpagesize=50,odata.include-annotations=""'
    """
    prefer: List[str] = []

    if options.max_page_size:
        prefer.append(f"odata.maxpagesize={options.max_page_size}")

    if (
        options.include_formatted_values
        and options.include_lookup_logical_names
        and options.include_associated_navigation_properties
    ):
        prefer.append('odata.include-annotations="*"')
    else:
        annotations = [
            ANNOTATION_FORMATTED_VALUE if options.include_formatted_values else "",
            ANNOTATION_LOOKUP_LOGICAL_NAME if options.include_lookup_logical_names else "",
            ANNOTATION_ASSOCIATED_NAVIGATION_PROPERTY if options.include_associated_navigation_properties else "",
        ]
        selected = ",".join(a for a in annotations if a)
        prefer.append(f'odata.include-annotations="{selected}"')

    if options.representation:
        prefer.append("return=representation")

    return ",".join(prefer)


def build_headers(
    options: Optional[QueryOptions] = None,
    content_type: str = DEFAULT_CONTENT_TYPE,
    access_token: Optional[str] = None,
) -> Dict[str, str]:
    """
    Build the header set for one request.

    The fixed headers are always present. ``Prefer`` (and ``MSCRMCallerID``
    when impersonating) are only added when ``options`` is given;
    ``Authorization`` only when an access token is available.

    :param options: Optional query options.
    :type options: ~xrm_webapi.models.query_options.QueryOptions | None
    :param content_type: ``Content-Type`` value; multipart batches override the default.
    :type content_type: str
    :param access_token: Bearer token, or ``None`` for anonymous requests.
    :type access_token: str | None
    :rtype: dict[str, str]
    """
    headers = {
        HEADER_ACCEPT: CONTENT_TYPE_JSON,
        HEADER_CONTENT_TYPE: content_type,
        HEADER_ODATA_MAX_VERSION: ODATA_VERSION,
        HEADER_ODATA_VERSION: ODATA_VERSION,
        HEADER_CACHE_CONTROL: "no-cache",
    }

    if options is not None:
        headers[HEADER_PREFER] = build_prefer_header(options)
        if options.impersonate_user is not None:
            headers[HEADER_CALLER_ID] = options.impersonate_user.value

    if access_token is not None:
        headers[HEADER_AUTHORIZATION] = f"Bearer {access_token}"

    return headers
