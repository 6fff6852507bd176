# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Batch operations namespace."""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

from ..models.batch import BatchResponse, ChangeSet
from ..models.query_options import QueryOptions

if TYPE_CHECKING:
    from ..client import WebApiClient


class BatchOperations:
    """
    Multipart ``$batch`` requests.

    Accessed via ``client.batch``.
    """

    def __init__(self, client: "WebApiClient") -> None:
        self._client = client

    def execute(
        self,
        batch_id: str,
        change_set_id: str,
        change_sets: Sequence[ChangeSet],
        batch_gets: Sequence[str],
        options: Optional[QueryOptions] = None,
    ) -> BatchResponse:
        """
        Send creates (as one atomic change set) and reads in a single request.

        The change set is applied transactionally by the service. Failures of
        individual parts do not raise; inspect :attr:`BatchResponse.errors`.

        :param batch_id: Unique id for the batch boundary.
        :type batch_id: str
        :param change_set_id: Unique id for the change-set boundary.
        :type change_set_id: str
        :param change_sets: POST requests making up the change set, in order.
        :type change_sets: Sequence[~xrm_webapi.models.batch.ChangeSet]
        :param batch_gets: Relative GET paths with query strings, in order.
        :type batch_gets: Sequence[str]
        :param options: Optional query options for the outer request.
        :type options: ~xrm_webapi.models.query_options.QueryOptions or None
        :return: Per-part outcomes: change-set parts first, then reads.
        :rtype: ~xrm_webapi.models.batch.BatchResponse
        :raises ServiceError: If the outer request is not answered with 200 or 204.

        Example::

            import uuid

            response = client.batch.execute(
                uuid.uuid4().hex,
                uuid.uuid4().hex,
                [ChangeSet("accounts", {"name": "A"}), ChangeSet("accounts", {"name": "B"})],
                ["accounts?$select=name&$top=3"],
            )
            print([item.status_code for item in response])
        """
        return self._client._get_odata()._batch(batch_id, change_set_id, change_sets, batch_gets, options)
