# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Function-call encoding for bound and unbound OData functions.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..models.function_input import FunctionInput


def encode_function_call(name: str, inputs: Optional[Sequence[FunctionInput]] = None) -> str:
    """
    Encode a function invocation as a URL fragment.

    Un-aliased inputs are written inline as ``name=value``. Aliased inputs are
    written inline as ``name=@alias`` and their values appended after the call
    as ``?@alias=value``.

    .. note::
        Successive alias assignments are concatenated without a separator
        (``?@p1=1@p2=2``). Services already integrated with this client rely
        on that exact form, so it is kept as is.

    :param name: Function name, including any namespace prefix.
    :type name: str
    :param inputs: Ordered parameters, or ``None`` for a parameterless call.
    :type inputs: Sequence[~xrm_webapi.models.function_input.FunctionInput] | None
    :rtype: str

    Example::

        >>> encode_function_call("Fn", [FunctionInput("a", "'x'", alias="p1")])
        "Fn(a=@p1)?@p1='x'"
    """
    if not inputs:
        return f"{name}()"

    args = []
    aliases = ""
    for item in inputs:
        if item.alias:
            args.append(f"{item.name}=@{item.alias}")
            aliases += f"@{item.alias}={item.value}"
        else:
            args.append(f"{item.name}={item.value}")

    call = f"{name}({','.join(args)})"
    if aliases:
        call += f"?{aliases}"
    return call
