# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .guid import Guid


@dataclass(frozen=True)
class QueryOptions:
    """
    Per-request options that shape the ``Prefer`` and caller-identity headers.

    Every field is optional; ``None``/``False`` means the service default.

    :param include_formatted_values: Request ``OData.Community.Display.V1.FormattedValue`` annotations.
    :type include_formatted_values: bool
    :param include_lookup_logical_names: Request ``Microsoft.Dynamics.CRM.lookuplogicalname`` annotations.
    :type include_lookup_logical_names: bool
    :param include_associated_navigation_properties: Request
        ``Microsoft.Dynamics.CRM.associatednavigationproperty`` annotations.
    :type include_associated_navigation_properties: bool
    :param max_page_size: Page size sent as ``odata.maxpagesize``.
    :type max_page_size: int | None
    :param impersonate_user: System user to impersonate (sent as ``MSCRMCallerID``).
    :type impersonate_user: ~xrm_webapi.models.guid.Guid | None
    :param representation: Ask the service to return the created/updated record.
    :type representation: bool

    Example::

        options = QueryOptions(include_formatted_values=True, max_page_size=50)
        page = client.records.retrieve_multiple("accounts", "$select=name", options)
    """

    include_formatted_values: bool = False
    include_lookup_logical_names: bool = False
    include_associated_navigation_properties: bool = False
    max_page_size: Optional[int] = None
    impersonate_user: Optional[Guid] = None
    representation: bool = False

    def with_representation(self) -> "QueryOptions":
        """Return a copy with ``representation`` switched on."""
        return replace(self, representation=True)
