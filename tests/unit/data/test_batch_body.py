# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from xrm_webapi.data._batch import batch_content_type, decode_batch_response, encode_batch_body
from xrm_webapi.models.batch import ChangeSet

API = "https://org.example/api/data/v9.2/"


def _url_for(path):
    return API + path


class TestEncodeBatchBody:
    """Golden tests for multipart batch bodies."""

    def test_change_sets_and_read(self):
        body = encode_batch_body(
            "B1",
            "C1",
            [ChangeSet("accounts", {"name": "A"}), ChangeSet("contacts", {"lastname": "B"})],
            ["accounts?$select=name"],
            _url_for,
        )
        expected = "\r\n".join(
            [
                "--batch_B1",
                "Content-Type: multipart/mixed;boundary=changeset_C1",
                "",
                "--changeset_C1",
                "Content-Type: application/http",
                "Content-Transfer-Encoding:binary",
                "Content-ID: 1",
                "",
                f"POST {API}accounts HTTP/1.1",
                "Content-Type: application/json;type=entry",
                "",
                '{"name":"A"}',
                "--changeset_C1",
                "Content-Type: application/http",
                "Content-Transfer-Encoding:binary",
                "Content-ID: 2",
                "",
                f"POST {API}contacts HTTP/1.1",
                "Content-Type: application/json;type=entry",
                "",
                '{"lastname":"B"}',
                "--changeset_C1--",
                "",
                "--batch_B1",
                "Content-Type: application/http",
                "Content-Transfer-Encoding:binary",
                "",
                f"GET {API}accounts?$select=name HTTP/1.1",
                "Accept: application/json",
                "",
                "--batch_B1--",
            ]
        )
        assert body == expected

    def test_boundary_markers_in_structural_order(self):
        body = encode_batch_body(
            "B1",
            "C1",
            [ChangeSet("accounts", {"name": "A"}), ChangeSet("accounts", {"name": "B"})],
            ["accounts"],
            _url_for,
        )
        markers = [line for line in body.split("\r\n") if line.startswith("--")]
        assert markers == [
            "--batch_B1",
            "--changeset_C1",
            "--changeset_C1",
            "--changeset_C1--",
            "--batch_B1",
            "--batch_B1--",
        ]
        content_ids = [line for line in body.split("\r\n") if line.startswith("Content-ID")]
        assert content_ids == ["Content-ID: 1", "Content-ID: 2"]
        assert body.index('{"name":"A"}') < body.index('{"name":"B"}')

    def test_reads_only(self):
        body = encode_batch_body("B2", "C2", [], ["accounts", "contacts?$top=1"], _url_for)
        assert "changeset" not in body
        assert body.split("\r\n") == [
            "--batch_B2",
            "Content-Type: application/http",
            "Content-Transfer-Encoding:binary",
            "",
            f"GET {API}accounts HTTP/1.1",
            "Accept: application/json",
            "--batch_B2",
            "Content-Type: application/http",
            "Content-Transfer-Encoding:binary",
            "",
            f"GET {API}contacts?$top=1 HTTP/1.1",
            "Accept: application/json",
            "",
            "--batch_B2--",
        ]

    def test_change_sets_only(self):
        body = encode_batch_body("B3", "C3", [ChangeSet("accounts", {})], [], _url_for)
        lines = body.split("\r\n")
        assert lines[-3:] == ["--changeset_C3--", "", "--batch_B3--"]
        assert lines[0] == "--batch_B3"

    def test_empty_batch(self):
        assert encode_batch_body("B4", "C4", [], [], _url_for) == "--batch_B4--"

    def test_content_type(self):
        assert batch_content_type("B1") == "multipart/mixed;boundary=batch_B1"


RESPONSE_CONTENT_TYPE = "multipart/mixed; boundary=batchresponse_abc"

RESPONSE_LINES = [
    "--batchresponse_abc",
    "Content-Type: multipart/mixed; boundary=changesetresponse_def",
    "",
    "--changesetresponse_def",
    "Content-Type: application/http",
    "Content-Transfer-Encoding: binary",
    "Content-ID: 1",
    "",
    "HTTP/1.1 204 No Content",
    "OData-Version: 4.0",
    "OData-EntityId: https://org.example/api/data/v9.2/accounts(11112222-3333-4444-5555-666677778888)",
    "",
    "",
    "--changesetresponse_def",
    "Content-Type: application/http",
    "Content-Transfer-Encoding: binary",
    "Content-ID: 2",
    "",
    "HTTP/1.1 204 No Content",
    "OData-Version: 4.0",
    "OData-EntityId: https://org.example/api/data/v9.2/accounts(11112222-3333-4444-5555-666677779999)",
    "",
    "",
    "--changesetresponse_def--",
    "--batchresponse_abc",
    "Content-Type: application/http",
    "Content-Transfer-Encoding: binary",
    "",
    "HTTP/1.1 200 OK",
    "Content-Type: application/json; odata.metadata=minimal",
    "OData-Version: 4.0",
    "",
    '{"value":[{"name":"A"}]}',
    "--batchresponse_abc--",
    "",
]


class TestDecodeBatchResponse:
    """Tests for splitting multipart batch responses."""

    @pytest.mark.parametrize("newline", ["\r\n", "\n"])
    def test_change_set_and_read_parts_in_order(self, newline):
        response = decode_batch_response(newline.join(RESPONSE_LINES), RESPONSE_CONTENT_TYPE)

        assert len(response) == 3
        first, second, read = response
        assert (first.status_code, first.content_id, first.change_set) == (204, "1", True)
        assert (second.status_code, second.content_id, second.change_set) == (204, "2", True)
        assert first.headers["OData-EntityId"].endswith("(11112222-3333-4444-5555-666677778888)")
        assert first.body is None
        assert first.reason == "No Content"

        assert read.change_set is False
        assert read.content_id is None
        assert read.status_code == 200
        assert read.body == {"value": [{"name": "A"}]}
        assert not response.has_errors

    def test_failed_change_set_is_single_error_item(self):
        lines = [
            "--batchresponse_x",
            "Content-Type: application/http",
            "Content-Transfer-Encoding: binary",
            "Content-ID: 2",
            "",
            "HTTP/1.1 400 Bad Request",
            "Content-Type: application/json; odata.metadata=minimal",
            "",
            '{"error":{"code":"0x80040203","message":"Invalid property"}}',
            "--batchresponse_x--",
        ]
        response = decode_batch_response("\r\n".join(lines), "multipart/mixed; boundary=batchresponse_x")
        assert len(response) == 1
        item = response[0]
        assert item.change_set is True
        assert item.content_id == "2"
        assert item.error == {"code": "0x80040203", "message": "Invalid property"}
        assert response.errors == [item]

    def test_non_json_body_is_kept_as_text(self):
        lines = [
            "--batchresponse_y",
            "Content-Type: application/http",
            "Content-Transfer-Encoding: binary",
            "",
            "HTTP/1.1 500 Internal Server Error",
            "Content-Type: text/plain",
            "",
            "Something went wrong",
            "--batchresponse_y--",
        ]
        response = decode_batch_response("\r\n".join(lines), "multipart/mixed;boundary=batchresponse_y")
        assert response[0].body == "Something went wrong"
        assert response[0].error is None
        assert response.has_errors

    def test_missing_boundary_raises(self):
        with pytest.raises(ValueError):
            decode_batch_response("--x--", "application/json")

    def test_malformed_status_line_raises(self):
        lines = [
            "--batchresponse_z",
            "Content-Type: application/http",
            "",
            "garbage",
            "--batchresponse_z--",
        ]
        with pytest.raises(ValueError):
            decode_batch_response("\r\n".join(lines), "multipart/mixed; boundary=batchresponse_z")
