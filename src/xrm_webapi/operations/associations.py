# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record association operations namespace."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from ..models.guid import Guid
from ..models.query_options import QueryOptions

if TYPE_CHECKING:
    from ..client import WebApiClient


class AssociationOperations:
    """
    Associate and disassociate records.

    Accessed via ``client.associations``.

    Example::

        client.associations.associate(
            "accounts", account_id, "contact_customer_accounts", "contacts", contact_id
        )
        client.associations.disassociate(
            "accounts", account_id, "contact_customer_accounts", contact_id
        )
    """

    def __init__(self, client: "WebApiClient") -> None:
        self._client = client

    def associate(
        self,
        entity_set: str,
        id: Guid,
        relationship: str,
        related_entity_set: str,
        related_id: Guid,
        options: Optional[QueryOptions] = None,
    ) -> None:
        """
        Associate the record ``entity_set(id)`` with ``related_entity_set(related_id)``.

        :param relationship: Schema name of the relationship.
        :type relationship: str
        :raises ServiceError: If the service does not answer 204.
        """
        self._client._get_odata()._associate(entity_set, id, relationship, related_entity_set, related_id, options)

    def disassociate(
        self,
        entity_set: str,
        id: Guid,
        property: str,
        related_id: Optional[Guid] = None,
    ) -> None:
        """
        Remove an association.

        :param property: Navigation property or relationship name.
        :type property: str
        :param related_id: Related record id; only needed for collection-valued
            navigation properties.
        :type related_id: ~xrm_webapi.models.guid.Guid or None
        :raises ServiceError: If the service does not answer 204.
        """
        self._client._get_odata()._disassociate(entity_set, id, property, related_id)
