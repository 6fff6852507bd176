# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
URL and resource-path composition.

Paths and query fragments are passed through as given; callers compose valid
OData fragments and nothing here escapes or normalizes them.
"""

from __future__ import annotations

from typing import Optional

from ..models.guid import Guid


def build_url(base: str, version: str, relative_path: str = "") -> str:
    """Return ``<base>/api/data/v<version>/<relative_path>``."""
    return f"{base}/api/data/v{version}/{relative_path}"


def ensure_query_prefix(query: Optional[str]) -> Optional[str]:
    """Prepend ``?`` to a query fragment that does not already start with one."""
    if query is not None and not query.startswith("?"):
        return f"?{query}"
    return query


def entity_path(entity_set: str, id: Guid) -> str:
    """Return the resource path ``<entity_set>(<GUID>)``."""
    return f"{entity_set}({id.value})"
