# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request telemetry for the Web API client.

Three sinks, all opt-in through :class:`TelemetryConfig`: a standard
``logging`` logger that writes one line per exchange, OpenTelemetry client
spans (when ``opentelemetry-api`` is installed), and user hooks implementing
:class:`TelemetryHook`. With no configuration the manager does nothing.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from ..common.constants import (
    OTEL_ATTR_HTTP_METHOD,
    OTEL_ATTR_HTTP_STATUS_CODE,
    OTEL_ATTR_HTTP_URL,
    OTEL_ATTR_WEBAPI_OPERATION,
    OTEL_ATTR_WEBAPI_REQUEST_ID,
    OTEL_ATTR_WEBAPI_SERVICE_REQUEST_ID,
)

try:
    from opentelemetry import trace
    from opentelemetry.trace import Status, StatusCode

    _OTEL_AVAILABLE = True
except ImportError:
    _OTEL_AVAILABLE = False
    trace = None  # type: ignore
    Status = None  # type: ignore
    StatusCode = None  # type: ignore

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetryConfig:
    """
    Opt-in request telemetry.

    :param enable_tracing: Emit an OpenTelemetry client span per exchange.
    :param enable_logging: Log one line per exchange to ``logger_name``.
    :param log_level: Level set on that logger when logging is enabled.
    :param logger_name: Logger receiving request lines.
    :param hooks: Objects implementing any subset of :class:`TelemetryHook`.

    Example::

        config = WebApiConfig(
            telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG")
        )
    """

    enable_tracing: bool = False
    enable_logging: bool = False
    log_level: str = "WARNING"
    logger_name: str = "xrm_webapi"
    hooks: List["TelemetryHook"] = field(default_factory=list)


@dataclass
class RequestContext:
    """One outgoing exchange, as seen by hooks."""

    client_request_id: str
    method: str
    url: str
    operation: str
    start_time: float = field(default_factory=time.perf_counter)
    custom_data: Dict[str, Any] = field(default_factory=dict)
    _span: Any = field(default=None, repr=False)
    _completed: bool = field(default=False, repr=False)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000


@dataclass
class ResponseContext:
    """Outcome of an exchange that produced a status code."""

    status_code: int
    duration_ms: float
    service_request_id: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class TelemetryHook(Protocol):
    """
    Callbacks around each exchange. Missing methods are skipped.

    Every exchange produces ``on_request_start`` followed by exactly one of:

    - ``on_request_end`` when a status code was received, including error
      statuses (``response.error`` then holds the ``ServiceError`` raised);
    - ``on_request_error`` when no status code was received, for example a
      transport failure.
    """

    def on_request_start(self, context: RequestContext) -> None:
        ...

    def on_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        ...

    def on_request_error(self, request: RequestContext, error: Exception) -> None:
        ...


def _request_logger(config: Optional[TelemetryConfig]) -> Optional[logging.Logger]:
    if config is None or not config.enable_logging:
        return None
    logger = logging.getLogger(config.logger_name)
    logger.setLevel(getattr(logging, config.log_level.upper()))
    return logger


def _request_tracer(config: Optional[TelemetryConfig]) -> Any:
    if config is None or not config.enable_tracing:
        return None
    if not _OTEL_AVAILABLE:
        _LOGGER.warning("Tracing requested but opentelemetry-api is not installed; spans are disabled.")
        return None
    return trace.get_tracer("xrm_webapi")


def _start_span(tracer: Any, ctx: RequestContext) -> Any:
    return tracer.start_span(
        f"WebApi {ctx.operation}",
        kind=trace.SpanKind.CLIENT,
        attributes={
            OTEL_ATTR_WEBAPI_OPERATION: ctx.operation,
            OTEL_ATTR_HTTP_METHOD: ctx.method,
            OTEL_ATTR_HTTP_URL: ctx.url,
            OTEL_ATTR_WEBAPI_REQUEST_ID: ctx.client_request_id,
        },
    )


class TelemetryManager:
    """
    Fans request events out to the configured sinks.

    Internal; :class:`~xrm_webapi.data._odata._ODataClient` owns one instance.
    The dispatcher wraps each exchange in :meth:`trace_request` and reports
    the status code through :meth:`complete`::

        with telemetry.trace_request("records.create", "POST", url, request_id) as ctx:
            response = http._request(...)
            telemetry.complete(ctx, response.status_code)
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._hooks: Tuple[Any, ...] = tuple(config.hooks) if config is not None else ()
        self._logger = _request_logger(config)
        self._tracer = _request_tracer(config)

    @property
    def enabled(self) -> bool:
        return bool(self._hooks) or self._logger is not None or self._tracer is not None

    @property
    def is_tracing_enabled(self) -> bool:
        return self._tracer is not None

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        client_request_id: str,
    ) -> Iterator[RequestContext]:
        """
        Surround one exchange. Exceptions escaping the block mark the span as
        failed and are re-raised unchanged; ``on_request_error`` hooks only see
        those raised before :meth:`complete` recorded a status code.
        """
        ctx = RequestContext(client_request_id=client_request_id, method=method, url=url, operation=operation)
        if not self.enabled:
            yield ctx
            return

        self._notify("on_request_start", ctx)
        if self._tracer is not None:
            ctx._span = _start_span(self._tracer, ctx)
        try:
            yield ctx
        except Exception as exc:
            if ctx._span is not None:
                ctx._span.set_status(Status(StatusCode.ERROR, str(exc)))
                ctx._span.record_exception(exc)
            if not ctx._completed:
                self._notify("on_request_error", ctx, exc)
            raise
        finally:
            if ctx._span is not None:
                ctx._span.end()

    def complete(
        self,
        ctx: RequestContext,
        status_code: int,
        service_request_id: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> Optional[ResponseContext]:
        """
        Record the status code of a finished exchange.

        Logs at WARNING for 4xx/5xx and DEBUG otherwise.

        :return: The response context handed to hooks, or ``None`` when telemetry is off.
        """
        if not self.enabled:
            return None
        ctx._completed = True
        response = ResponseContext(
            status_code=status_code,
            duration_ms=ctx.elapsed_ms,
            service_request_id=service_request_id,
            error=error,
        )

        span = ctx._span
        if span is not None:
            span.set_attribute(OTEL_ATTR_HTTP_STATUS_CODE, status_code)
            if service_request_id:
                span.set_attribute(OTEL_ATTR_WEBAPI_SERVICE_REQUEST_ID, service_request_id)

        if self._logger is not None:
            self._logger.log(
                logging.WARNING if status_code >= 400 else logging.DEBUG,
                "%s: %s %s -> %d in %.1f ms",
                ctx.operation,
                ctx.method,
                ctx.url,
                status_code,
                response.duration_ms,
                extra={
                    "client_request_id": ctx.client_request_id,
                    "service_request_id": service_request_id,
                },
            )

        self._notify("on_request_end", ctx, response)
        return response

    def _notify(self, event: str, *args: Any) -> None:
        for hook in self._hooks:
            callback = getattr(hook, event, None)
            if callback is None:
                continue
            try:
                callback(*args)
            except Exception:
                # Hooks must not change the outcome of the request.
                _LOGGER.debug("Telemetry hook %r failed in %s", hook, event, exc_info=True)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "RequestContext",
    "ResponseContext",
]
