# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Action and function operations namespace."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, TYPE_CHECKING

from ..models.function_input import FunctionInput
from ..models.guid import Guid
from ..models.query_options import QueryOptions

if TYPE_CHECKING:
    from ..client import WebApiClient


class ActionOperations:
    """
    Bound and unbound actions and functions.

    Accessed via ``client.actions``. Every call returns the parsed response
    body when the service answers 200, or ``None`` when it answers 204.
    Bound names are prefixed with ``Microsoft.Dynamics.CRM.``.

    Example::

        who = client.actions.unbound_function("WhoAmI")
        client.actions.bound_action("opportunities", opp_id, "WinOpportunity", {"Status": 3})
        client.actions.unbound_function(
            "RetrieveUserPrivileges",
            [FunctionInput("UserId", user_id.value)],
        )
    """

    def __init__(self, client: "WebApiClient") -> None:
        self._client = client

    def bound_action(
        self,
        entity_set: str,
        id: Guid,
        action_name: str,
        inputs: Optional[Dict[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        """
        Run an action bound to ``entity_set(id)``.

        :param inputs: Action parameters, sent as the JSON body.
        :type inputs: dict or None
        :raises ServiceError: If the service answers anything but 200 or 204.
        """
        return self._client._get_odata()._bound_action(entity_set, id, action_name, inputs, options)

    def unbound_action(
        self,
        action_name: str,
        inputs: Optional[Dict[str, Any]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        """Run an unbound action."""
        return self._client._get_odata()._unbound_action(action_name, inputs, options)

    def bound_function(
        self,
        entity_set: str,
        id: Guid,
        function_name: str,
        inputs: Optional[Sequence[FunctionInput]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        """
        Call a function bound to ``entity_set(id)``.

        :param inputs: Function parameters encoded into the URL.
        :type inputs: Sequence[~xrm_webapi.models.function_input.FunctionInput] or None
        """
        return self._client._get_odata()._bound_function(entity_set, id, function_name, inputs, options)

    def unbound_function(
        self,
        function_name: str,
        inputs: Optional[Sequence[FunctionInput]] = None,
        options: Optional[QueryOptions] = None,
    ) -> Any:
        """Call an unbound function."""
        return self._client._get_odata()._unbound_function(function_name, inputs, options)
