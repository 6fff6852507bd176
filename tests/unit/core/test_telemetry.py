# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import logging
from unittest import mock

import pytest
import requests

from xrm_webapi.core.config import WebApiConfig
from xrm_webapi.core.errors import ServiceError
from xrm_webapi.core.telemetry import TelemetryConfig, TelemetryManager
from tests.unit.test_helpers import TestableClient


class RecordingHook:
    def __init__(self):
        self.events = []

    def on_request_start(self, context):
        self.events.append(("start", context.operation, context.method))

    def on_request_end(self, request, response):
        self.events.append(("end", request.operation, response.status_code, response.error is not None))

    def on_request_error(self, request, error):
        self.events.append(("error", request.operation, type(error).__name__))


class BrokenHook:
    def on_request_start(self, context):
        raise RuntimeError("hook failure")


class TestManagerState:
    def test_unconfigured_manager_is_inert(self):
        manager = TelemetryManager(None)
        assert not manager.enabled
        with manager.trace_request("records.retrieve", "GET", "https://x", "id-1") as ctx:
            assert manager.complete(ctx, 200) is None

    def test_disabled_config_is_inert(self):
        assert not TelemetryManager(TelemetryConfig()).enabled

    def test_enabled_config(self):
        assert TelemetryManager(TelemetryConfig(enable_logging=True)).enabled
        assert TelemetryManager(TelemetryConfig(hooks=[RecordingHook()])).enabled
        assert not TelemetryManager(TelemetryConfig(hooks=[RecordingHook()])).is_tracing_enabled

    def test_complete_returns_response_context(self):
        manager = TelemetryManager(TelemetryConfig(hooks=[RecordingHook()]))
        with manager.trace_request("records.delete", "DELETE", "https://x", "id-2") as ctx:
            response = manager.complete(ctx, 204, "srv-1")
        assert response.ok
        assert response.status_code == 204
        assert response.service_request_id == "srv-1"
        assert response.duration_ms >= 0


class TestRequestTelemetry:
    def test_hooks_see_success_and_failure(self):
        hook = RecordingHook()
        config = WebApiConfig(telemetry=TelemetryConfig(hooks=[hook]))
        c = TestableClient(
            [(200, {}, {"value": []}), (404, {}, {"error": {"message": "missing"}})],
            config=config,
        )
        c._retrieve_multiple("accounts")
        with pytest.raises(ServiceError):
            c._retrieve_multiple("contacts")

        assert hook.events == [
            ("start", "records.retrieve_multiple", "GET"),
            ("end", "records.retrieve_multiple", 200, False),
            ("start", "records.retrieve_multiple", "GET"),
            ("end", "records.retrieve_multiple", 404, True),
        ]

    def test_transport_failure_reports_error_without_end(self):
        hook = RecordingHook()
        c = TestableClient([], config=WebApiConfig(telemetry=TelemetryConfig(hooks=[hook])))
        c._http._request = mock.Mock(side_effect=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(requests.exceptions.ConnectionError):
            c._retrieve_multiple("accounts")

        assert hook.events == [
            ("start", "records.retrieve_multiple", "GET"),
            ("error", "records.retrieve_multiple", "ConnectionError"),
        ]

    def test_broken_hook_does_not_break_request(self):
        config = WebApiConfig(telemetry=TelemetryConfig(hooks=[BrokenHook()]))
        c = TestableClient([(200, {}, {"value": []})], config=config)
        assert c._retrieve_multiple("accounts") == {"value": []}

    def test_logging_levels(self, caplog):
        config = WebApiConfig(
            telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG", logger_name="xrm_webapi.test")
        )
        c = TestableClient([(204, {}, None), (400, {}, {"error": {"message": "bad"}})], config=config)
        with caplog.at_level(logging.DEBUG, logger="xrm_webapi.test"):
            c._delete("accounts", _guid())
            with pytest.raises(ServiceError):
                c._delete("accounts", _guid())

        records = [r for r in caplog.records if r.name == "xrm_webapi.test"]
        assert [r.levelno for r in records] == [logging.DEBUG, logging.WARNING]
        message = records[0].getMessage()
        assert message.startswith("records.delete: DELETE https://org.example/api/data/v9.2/accounts(")
        assert "-> 204 in" in message
        assert records[1].client_request_id


def _guid():
    from xrm_webapi.models.guid import Guid

    return Guid("11111111-2222-3333-4444-555555555555")
