# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Multipart ``$batch`` body encoding and response decoding.

A batch carries an optional atomic change set of POST requests followed by
any number of GET requests::

    --batch_<batchId>
    Content-Type: multipart/mixed;boundary=changeset_<changeSetId>

    --changeset_<changeSetId>
    Content-Type: application/http
    Content-Transfer-Encoding:binary
    Content-ID: 1

    POST <url> HTTP/1.1
    Content-Type: application/json;type=entry

    {...}
    --changeset_<changeSetId>--

    --batch_<batchId>
    Content-Type: application/http
    Content-Transfer-Encoding:binary

    GET <url> HTTP/1.1
    Accept: application/json

    --batch_<batchId>--

Lines are joined with CRLF. Both functions are pure so they can be tested
without a transport.
"""

from __future__ import annotations

import json
import re
from email.message import Message
from email.parser import Parser
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..models.batch import BatchResponse, BatchResponseItem, ChangeSet

_LINE_BREAK_RE = re.compile(r"\r?\n")
_HEAD_BODY_RE = re.compile(r"\r?\n\r?\n")


def batch_content_type(batch_id: str) -> str:
    """``Content-Type`` of the outer batch request."""
    return f"multipart/mixed;boundary=batch_{batch_id}"


def encode_batch_body(
    batch_id: str,
    change_set_id: str,
    change_sets: Sequence[ChangeSet],
    batch_gets: Sequence[str],
    url_for: Callable[[str], str],
) -> str:
    """
    Encode change sets and read requests into a multipart/mixed body.

    Change sets always precede reads. Change-set parts are numbered with
    ``Content-ID`` 1..N in input order. Boundary ids are supplied by the
    caller and must not occur in any entity payload.

    :param batch_id: Outer boundary id (``batch_<batch_id>``).
    :type batch_id: str
    :param change_set_id: Inner boundary id (``changeset_<change_set_id>``).
    :type change_set_id: str
    :param change_sets: POST requests executed as one atomic change set.
    :type change_sets: Sequence[~xrm_webapi.models.batch.ChangeSet]
    :param batch_gets: Relative GET paths, including any query string.
    :type batch_gets: Sequence[str]
    :param url_for: Resolves a relative path to an absolute Web API URL.
    :type url_for: Callable[[str], str]
    :return: The CRLF-joined body.
    :rtype: str
    """
    body: List[str] = []

    if change_sets:
        body.append(f"--batch_{batch_id}")
        body.append(f"Content-Type: multipart/mixed;boundary=changeset_{change_set_id}")
        body.append("")

    for content_id, change_set in enumerate(change_sets, start=1):
        body.append(f"--changeset_{change_set_id}")
        body.append("Content-Type: application/http")
        body.append("Content-Transfer-Encoding:binary")
        body.append(f"Content-ID: {content_id}")
        body.append("")
        body.append(f"POST {url_for(change_set.query_string)} HTTP/1.1")
        body.append("Content-Type: application/json;type=entry")
        body.append("")
        body.append(json.dumps(change_set.entity, separators=(",", ":")))

    if change_sets:
        body.append(f"--changeset_{change_set_id}--")
        body.append("")

    for get in batch_gets:
        body.append(f"--batch_{batch_id}")
        body.append("Content-Type: application/http")
        body.append("Content-Transfer-Encoding:binary")
        body.append("")
        body.append(f"GET {url_for(get)} HTTP/1.1")
        body.append("Accept: application/json")

    if batch_gets:
        body.append("")

    body.append(f"--batch_{batch_id}--")

    return "\r\n".join(body)


def decode_batch_response(body: str, content_type: str) -> BatchResponse:
    """
    Split a multipart/mixed ``$batch`` response into per-request outcomes.

    Nested ``multipart/mixed`` parts are change-set responses; their items
    keep the part ``Content-ID``. A change set rejected as a whole is returned
    by the service as a single ``application/http`` part and therefore shows
    up as one failed item. Items are returned in wire order.

    :param body: Raw response text.
    :type body: str
    :param content_type: ``Content-Type`` header of the response, carrying the boundary.
    :type content_type: str
    :raises ValueError: If ``content_type`` has no multipart boundary.
    :rtype: ~xrm_webapi.models.batch.BatchResponse
    """
    if not content_type or "boundary=" not in content_type.replace(" ", ""):
        raise ValueError(f"Batch response Content-Type has no boundary: {content_type!r}")

    message = Parser().parsestr(f"Content-Type: {content_type}\r\n\r\n{body}")
    items: List[BatchResponseItem] = []
    for part in message.get_payload() if message.is_multipart() else []:
        if part.get_content_type() == "multipart/mixed":
            for sub_part in part.get_payload():
                items.append(_decode_part(sub_part, change_set=True))
        else:
            items.append(_decode_part(part, change_set=part.get("Content-ID") is not None))
    return BatchResponse(items)


def _decode_part(part: Message, change_set: bool) -> BatchResponseItem:
    content_id = part.get("Content-ID")
    status_code, reason, headers, raw_body = _parse_http_response(part.get_payload())
    return BatchResponseItem(
        status_code=status_code,
        reason=reason,
        headers=headers,
        body=_parse_body(raw_body),
        content_id=content_id.strip() if content_id else None,
        change_set=change_set,
    )


def _parse_http_response(payload: str) -> Tuple[int, str, Dict[str, str], str]:
    """Parse an embedded ``HTTP/1.1 <status> <reason>`` response."""
    text = payload.lstrip("\r\n")
    split = _HEAD_BODY_RE.split(text, maxsplit=1)
    head = split[0]
    raw_body = split[1] if len(split) > 1 else ""

    lines = _LINE_BREAK_RE.split(head)
    status_parts = lines[0].split(" ", 2)
    if len(status_parts) < 2 or not status_parts[0].startswith("HTTP/"):
        raise ValueError(f"Malformed status line in batch response part: {lines[0]!r}")
    status_code = int(status_parts[1])
    reason = status_parts[2] if len(status_parts) > 2 else ""

    headers: Dict[str, str] = {}
    for line in lines[1:]:
        name, sep, value = line.partition(":")
        if sep:
            headers[name.strip()] = value.strip()
    return status_code, reason, headers, raw_body


def _parse_body(raw_body: str) -> Optional[Any]:
    text = raw_body.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text
