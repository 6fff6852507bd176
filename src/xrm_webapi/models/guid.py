# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Validated record identifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..core._error_codes import FORMAT_INVALID_GUID
from ..core.errors import FormatError

_GUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")


@dataclass(frozen=True, eq=False)
class Guid:
    """
    Record identifier in canonical uppercase 8-4-4-4-12 form.

    Surrounding braces are stripped before validation; anything else that
    does not match the GUID grammar raises :class:`~xrm_webapi.core.errors.FormatError`.

    :param value: Textual GUID, with or without braces.
    :type value: str
    :raises FormatError: If ``value`` is not a valid GUID.

    Example::

        >>> Guid("{6f1c2e4a-0b7d-4c36-9d1e-3a5b7c9d0e1f}").value
        '6F1C2E4A-0B7D-4C36-9D1E-3A5B7C9D0E1F'
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise FormatError(f"Id {self.value!r} is not a valid GUID", subcode=FORMAT_INVALID_GUID)
        stripped = self.value.replace("{", "").replace("}", "")
        if not _GUID_RE.fullmatch(stripped):
            raise FormatError(f"Id {stripped} is not a valid GUID", subcode=FORMAT_INVALID_GUID)
        object.__setattr__(self, "value", stripped.upper())

    @classmethod
    def parse(cls, text: str) -> "Guid":
        """Parse ``text`` into a :class:`Guid`; raises ``FormatError`` on malformed input."""
        return cls(text)

    @staticmethod
    def are_equal(a: Optional["Guid"], b: Optional["Guid"]) -> bool:
        """Case-insensitive comparison; ``False`` whenever either side is ``None``."""
        if a is None or b is None:
            return False
        return a.value.lower() == b.value.lower()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Guid):
            return False
        return Guid.are_equal(self, other)

    def __hash__(self) -> int:
        return hash(self.value.lower())

    def __str__(self) -> str:
        return self.value
