# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record association operations for the Web API.

This module provides mixin functionality for associating and disassociating
records through navigation properties.
"""

from __future__ import annotations

from typing import Optional

from ..models.guid import Guid
from ..models.query_options import QueryOptions
from ._paths import entity_path


class _AssociationOperationsMixin:
    """
    Mixin providing association operations.

    This mixin is designed to be used with _ODataClient and depends on:
    - self._client_url(): Resolve a relative path to an absolute URL
    - self._request(): Dispatch a request and classify its status
    """

    def _associate(
        self,
        entity_set: str,
        id: Guid,
        relationship: str,
        related_entity_set: str,
        related_id: Guid,
        options: Optional[QueryOptions] = None,
    ) -> None:
        """
        Associate two records.

        Posts ``{"@odata.id": <absolute url of related record>}`` to
        ``<entity_set>(<id>)/<relationship>/$ref``.

        :param entity_set: Entity set of the primary record.
        :type entity_set: ``str``
        :param id: Id of the primary record.
        :type id: ~xrm_webapi.models.guid.Guid
        :param relationship: Relationship (navigation property) name.
        :type relationship: ``str``
        :param related_entity_set: Entity set of the related record.
        :type related_entity_set: ``str``
        :param related_id: Id of the related record.
        :type related_id: ~xrm_webapi.models.guid.Guid
        :param options: Optional query options (impersonation).
        :type options: ~xrm_webapi.models.query_options.QueryOptions | ``None``

        :raises ServiceError: If the Web API request fails.
        """
        related = {"@odata.id": self._client_url(entity_path(related_entity_set, related_id))}
        self._request(
            "post",
            f"{entity_path(entity_set, id)}/{relationship}/$ref",
            options=options,
            expected=(204, 205),
            operation="associations.associate",
            json=related,
        )

    def _disassociate(
        self,
        entity_set: str,
        id: Guid,
        property: str,
        related_id: Optional[Guid] = None,
    ) -> None:
        """
        Remove an association.

        For collection-valued navigation properties ``related_id`` names the
        record to detach; for single-valued ones it is omitted.

        :raises ServiceError: If the Web API request fails.
        """
        query_string = property
        if related_id is not None:
            query_string += f"({related_id.value})"
        query_string += "/$ref"

        self._request(
            "delete",
            f"{entity_path(entity_set, id)}/{query_string}",
            expected=(204, 205),
            operation="associations.disassociate",
        )
