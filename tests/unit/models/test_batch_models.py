# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest

from xrm_webapi.models.batch import BatchResponse, BatchResponseItem, ChangeSet
from xrm_webapi.models.guid import Guid
from xrm_webapi.models.query_options import QueryOptions


class TestBatchResponse(unittest.TestCase):
    """Tests for BatchResponse helpers."""

    def setUp(self):
        self.response = BatchResponse(
            [
                BatchResponseItem(204, "No Content", content_id="1", change_set=True),
                BatchResponseItem(
                    400,
                    "Bad Request",
                    body={"error": {"code": "0x80040203", "message": "Invalid"}},
                    content_id="2",
                    change_set=True,
                ),
                BatchResponseItem(200, "OK", body={"value": []}),
            ]
        )

    def test_sequence_protocol(self):
        self.assertEqual(len(self.response), 3)
        self.assertEqual(self.response[2].status_code, 200)
        self.assertEqual([i.status_code for i in self.response], [204, 400, 200])

    def test_partitions(self):
        self.assertEqual([i.content_id for i in self.response.change_set_items], ["1", "2"])
        self.assertEqual(len(self.response.read_items), 1)

    def test_errors(self):
        self.assertTrue(self.response.has_errors)
        self.assertEqual(len(self.response.errors), 1)
        self.assertEqual(self.response.errors[0].error["code"], "0x80040203")

    def test_success_has_no_error(self):
        self.assertIsNone(self.response[0].error)
        self.assertIsNone(self.response[2].error)

    def test_failed_item_with_text_body_has_no_error_object(self):
        item = BatchResponseItem(500, "Internal Server Error", body="boom")
        self.assertFalse(item.is_success)
        self.assertIsNone(item.error)

    def test_empty_response(self):
        self.assertFalse(BatchResponse([]).has_errors)


class TestValueObjects(unittest.TestCase):
    def test_change_set_defaults(self):
        self.assertEqual(ChangeSet("accounts").entity, {})

    def test_query_options_defaults(self):
        options = QueryOptions()
        self.assertFalse(options.include_formatted_values)
        self.assertIsNone(options.max_page_size)
        self.assertIsNone(options.impersonate_user)
        self.assertFalse(options.representation)

    def test_with_representation_returns_copy(self):
        user = Guid("11111111-2222-3333-4444-555555555555")
        options = QueryOptions(max_page_size=10, impersonate_user=user)
        updated = options.with_representation()
        self.assertTrue(updated.representation)
        self.assertFalse(options.representation)
        self.assertEqual(updated.max_page_size, 10)
        self.assertIs(updated.impersonate_user, user)
