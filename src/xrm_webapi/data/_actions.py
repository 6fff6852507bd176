# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Action and function invocation for the Web API.

Actions are POSTed with a JSON parameter body; functions are GET requests
with parameters encoded into the URL by
:func:`~xrm_webapi.data._functions.encode_function_call`. Both succeed with
200 (result body) or 204 (no result).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.constants import CRM_NAMESPACE
from ..models.function_input import FunctionInput
from ..models.guid import Guid
from ..models.query_options import QueryOptions
from ._functions import encode_function_call
from ._paths import entity_path


class _ActionOperationsMixin:
    """
    Mixin providing bound/unbound action and function calls.

    Depends on ``self._request()`` and ``self._json_or_none()`` from _ODataClient.
    """

    def _bound_action(
        self,
        entity_set: str,
        id: Guid,
        action_name: str,
        inputs: Optional[Dict[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        path = f"{entity_path(entity_set, id)}/{CRM_NAMESPACE}.{action_name}"
        return self._invoke_action(path, inputs, options, "actions.bound_action")

    def _unbound_action(
        self,
        action_name: str,
        inputs: Optional[Dict[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        return self._invoke_action(action_name, inputs, options, "actions.unbound_action")

    def _invoke_action(
        self,
        path: str,
        inputs: Optional[Dict[str, Any]],
        options: Optional[QueryOptions],
        operation: str,
    ) -> Any:
        kwargs = {"json": inputs} if inputs is not None else {}
        r = self._request(
            "post",
            path,
            options=options,
            expected=(200, 204),
            operation=operation,
            **kwargs,
        )
        return self._json_or_none(r)

    def _bound_function(
        self,
        entity_set: str,
        id: Guid,
        function_name: str,
        inputs: Optional[Sequence[FunctionInput]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        call = encode_function_call(f"{CRM_NAMESPACE}.{function_name}", inputs)
        path = f"{entity_path(entity_set, id)}/{call}"
        r = self._request("get", path, options=options, expected=(200, 204), operation="actions.bound_function")
        return self._json_or_none(r)

    def _unbound_function(
        self,
        function_name: str,
        inputs: Optional[Sequence[FunctionInput]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        path = encode_function_call(function_name, inputs)
        r = self._request("get", path, options=options, expected=(200, 204), operation="actions.unbound_function")
        return self._json_or_none(r)
