# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Web API client.

This module contains the operation namespace classes that organize
related operations under intuitive namespaces:
- RecordOperations: record CRUD and paging
- AssociationOperations: associate/disassociate records
- ActionOperations: bound and unbound actions and functions
- BatchOperations: multipart ``$batch`` requests
"""

__all__ = []
