# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request/response translation for the Web API.

Internal modules: URL composition, header negotiation, function-call
encoding, batch bodies and the low-level OData client that dispatches
requests.
"""

__all__ = []
