# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass

from .guid import Guid


@dataclass(frozen=True)
class CreatedEntity:
    """
    Result of a create request: the new record id and its canonical URI.

    Both come from the ``OData-EntityId`` response header.

    :param id: Identifier of the created record.
    :type id: ~xrm_webapi.models.guid.Guid
    :param uri: Full value of the ``OData-EntityId`` header.
    :type uri: str
    """

    id: Guid
    uri: str
