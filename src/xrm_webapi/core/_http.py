# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Single-attempt HTTP transport built on ``requests``.

Retries, cancellation and connection pooling are left to the caller: pass a
``requests.Session`` to reuse connections, and handle
``requests.exceptions.RequestException`` to retry.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

#: Seconds to wait on writes that may run long server-side (creates, deletes, batches, actions).
WRITE_TIMEOUT = 120
#: Seconds to wait on everything else.
READ_TIMEOUT = 10
_SLOW_METHODS = frozenset({"POST", "DELETE"})


class _HttpClient:
    """
    Sends one request per call, with a method-dependent default timeout.

    :param timeout: Timeout applied to every method; ``None`` selects
        :data:`WRITE_TIMEOUT` for POST/DELETE and :data:`READ_TIMEOUT` otherwise.
    :type timeout: float or None
    :param session: Session to send through instead of module-level ``requests``.
    :type session: requests.Session or None
    """

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None) -> None:
        self.default_timeout = timeout
        self._session = session

    def timeout_for(self, method: str) -> float:
        if self.default_timeout is not None:
            return self.default_timeout
        return WRITE_TIMEOUT if (method or "").upper() in _SLOW_METHODS else READ_TIMEOUT

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Send ``method url`` once and return whatever the server answered.

        Error statuses are returned, not raised; classifying them is the
        dispatcher's job.

        :param kwargs: ``headers``, ``json``, ``data`` and an optional ``timeout`` override.
        :raises requests.exceptions.RequestException: If no response was received.
        """
        kwargs.setdefault("timeout", self.timeout_for(method))
        send = self._session.request if self._session is not None else requests.request
        return send(method, url, **kwargs)

    def close(self) -> None:
        """Close the session, if any. Safe to call multiple times."""
        if self._session is not None:
            self._session.close()
            self._session = None
