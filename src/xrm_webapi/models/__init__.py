# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Value types used by the Web API client.

- :class:`~xrm_webapi.models.guid.Guid`: validated record identifier.
- :class:`~xrm_webapi.models.query_options.QueryOptions`: per-request header options.
- :class:`~xrm_webapi.models.function_input.FunctionInput`: function parameter.
- :class:`~xrm_webapi.models.created_entity.CreatedEntity`: create result.
- :class:`~xrm_webapi.models.batch.ChangeSet`, :class:`~xrm_webapi.models.batch.BatchResponse`:
  batch request entries and decoded batch results.

Import directly from the specific module files, or from the top-level package.
"""

__all__ = []
