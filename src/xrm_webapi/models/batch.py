# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Batch request entries and decoded batch results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass(frozen=True)
class ChangeSet:
    """
    A pending create inside the atomic change set of a batch.

    :param query_string: Path relative to the Web API root, e.g. ``"accounts"``.
    :type query_string: str
    :param entity: Entity payload, serialized as JSON.
    :type entity: dict[str, Any]
    """

    query_string: str
    entity: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BatchResponseItem:
    """
    One embedded HTTP response from a ``$batch`` reply.

    :param status_code: Status code of the embedded response.
    :type status_code: int
    :param reason: Reason phrase from the status line.
    :type reason: str
    :param headers: Embedded response headers.
    :type headers: dict[str, str]
    :param body: Parsed JSON body, raw text when not JSON, or ``None`` when empty.
    :type body: Any
    :param content_id: ``Content-ID`` of the part, set for change-set parts.
    :type content_id: str | None
    :param change_set: Whether the part answered a change-set request.
    :type change_set: bool
    """

    status_code: int
    reason: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    content_id: Optional[str] = None
    change_set: bool = False

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def error(self) -> Optional[Dict[str, Any]]:
        """The service ``error`` object of a failed part, if any."""
        if self.is_success:
            return None
        if isinstance(self.body, dict):
            return self.body.get("error", self.body)
        return None


@dataclass(frozen=True)
class BatchResponse:
    """
    Ordered outcomes of a batch request.

    Change-set parts come first (in ``Content-ID`` order), followed by read
    parts in request order.

    Example::

        response = client.batch.execute("B1", "C1", change_sets, ["accounts?$top=1"])
        for item in response:
            print(item.status_code, item.body)
        if response.has_errors:
            print(response.errors[0].error)
    """

    items: List[BatchResponseItem] = field(default_factory=list)

    def __iter__(self) -> Iterator[BatchResponseItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> BatchResponseItem:
        return self.items[index]

    @property
    def change_set_items(self) -> List[BatchResponseItem]:
        return [i for i in self.items if i.change_set]

    @property
    def read_items(self) -> List[BatchResponseItem]:
        return [i for i in self.items if not i.change_set]

    @property
    def errors(self) -> List[BatchResponseItem]:
        return [i for i in self.items if not i.is_success]

    @property
    def has_errors(self) -> bool:
        return any(not i.is_success for i in self.items)
