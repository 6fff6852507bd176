# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record CRUD operations namespace."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, TYPE_CHECKING

from ..models.created_entity import CreatedEntity
from ..models.guid import Guid
from ..models.query_options import QueryOptions

if TYPE_CHECKING:
    from ..client import WebApiClient


class RecordOperations:
    """
    Record CRUD operations.

    Accessed via ``client.records``. Query strings are OData fragments such as
    ``"$select=name&$top=5"``; a leading ``?`` is added when missing.

    Example::

        created = client.records.create("accounts", {"name": "Contoso"})
        account = client.records.retrieve("accounts", created.id, "$select=name")
        client.records.update("accounts", created.id, {"telephone1": "555-0100"})
        client.records.delete("accounts", created.id)
    """

    def __init__(self, client: "WebApiClient") -> None:
        """
        Initialize RecordOperations.

        :param client: Parent WebApiClient instance.
        :type client: WebApiClient
        """
        self._client = client

    def retrieve(
        self,
        entity_set: str,
        id: Guid,
        query_string: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Dict[str, Any]:
        """
        Retrieve a single record.

        :param entity_set: Entity set name, e.g. ``"accounts"``.
        :type entity_set: str
        :param id: Record id.
        :type id: ~xrm_webapi.models.guid.Guid
        :param query_string: Optional OData query (``$select``, ``$expand``).
        :type query_string: str or None
        :param options: Optional query options.
        :type options: ~xrm_webapi.models.query_options.QueryOptions or None
        :return: The record as returned by the service.
        :rtype: dict
        :raises ServiceError: If the service does not answer 200.
        """
        return self._client._get_odata()._retrieve(entity_set, id, query_string, options)

    def retrieve_multiple(
        self,
        entity_set: str,
        query_string: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Dict[str, Any]:
        """
        Retrieve one page of records.

        The result holds the records under ``"value"`` and, when more pages
        exist, an ``"@odata.nextLink"`` URL for :meth:`get_next_page`.

        :raises ServiceError: If the service does not answer 200.
        """
        return self._client._get_odata()._retrieve_multiple(entity_set, query_string, options)

    def get_next_page(self, next_link: str, options: Optional[QueryOptions] = None) -> Dict[str, Any]:
        """
        Retrieve the page behind an ``@odata.nextLink`` URL.

        The link is used as-is, without resolving it against the Web API root.
        Pass the same ``options`` as the first request so the page size is kept.

        :raises ServiceError: If the service does not answer 200.
        """
        return self._client._get_odata()._get_next_page(next_link, options)

    def iter_pages(
        self,
        entity_set: str,
        query_string: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Iterator[Dict[str, Any]]:
        """
        Yield every page of a query, following ``@odata.nextLink``.

        Each page is fetched lazily with one request.

        Example::

            for page in client.records.iter_pages("contacts", "$select=fullname", QueryOptions(max_page_size=100)):
                for contact in page["value"]:
                    print(contact["fullname"])
        """
        od = self._client._get_odata()
        page = od._retrieve_multiple(entity_set, query_string, options)
        while True:
            yield page
            next_link = page.get("@odata.nextLink")
            if not next_link:
                return
            page = od._get_next_page(next_link, options)

    def create(
        self,
        entity_set: str,
        entity: Dict[str, Any],
        options: Optional[QueryOptions] = None,
    ) -> CreatedEntity:
        """
        Create a record.

        :return: The new record id and URI, read from the ``OData-EntityId`` header.
        :rtype: ~xrm_webapi.models.created_entity.CreatedEntity
        :raises ServiceError: If the service does not answer 204 with the header.
        """
        return self._client._get_odata()._create(entity_set, entity, options)

    def create_with_return_data(
        self,
        entity_set: str,
        entity: Dict[str, Any],
        select: Optional[str] = None,
        options: Optional[QueryOptions] = None,
    ) -> Dict[str, Any]:
        """
        Create a record and return its representation.

        ``return=representation`` is always requested; ``options`` is not modified.

        :param select: Optional ``$select`` query limiting the returned columns.
        :type select: str or None
        :raises ServiceError: If the service does not answer 201.
        """
        return self._client._get_odata()._create_with_return_data(entity_set, entity, select, options)

    def update(
        self,
        entity_set: str,
        id: Guid,
        entity: Dict[str, Any],
        options: Optional[QueryOptions] = None,
    ) -> None:
        """Update fields of a record. :raises ServiceError: If the service does not answer 204."""
        self._client._get_odata()._update(entity_set, id, entity, options)

    def update_property(
        self,
        entity_set: str,
        id: Guid,
        attribute: str,
        value: Any,
        options: Optional[QueryOptions] = None,
    ) -> None:
        """Set a single property, sent as ``{"value": value}``."""
        self._client._get_odata()._update_property(entity_set, id, attribute, value, options)

    def delete(self, entity_set: str, id: Guid) -> None:
        """Delete a record."""
        self._client._get_odata()._delete(entity_set, id)

    def delete_property(self, entity_set: str, id: Guid, attribute: str) -> None:
        """Clear the value of a single non-navigation property."""
        self._client._get_odata()._delete_property(entity_set, id, attribute)
