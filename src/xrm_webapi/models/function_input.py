# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FunctionInput:
    """
    A named function parameter.

    ``value`` is the OData literal exactly as it should appear on the URL
    (strings quoted, for example ``"'Contoso'"``). When ``alias`` is set the
    literal is moved to a ``@alias=value`` parameter after the call and the
    call itself references ``@alias``; use this for values whose literal form
    cannot appear inside the parenthesis list (entity references, collections).

    :param name: Parameter name.
    :type name: str
    :param value: Literal value.
    :type value: str
    :param alias: Optional parameter alias.
    :type alias: str | None
    """

    name: str
    value: str
    alias: Optional[str] = None
