# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Web API client tests.
"""

import pytest

from xrm_webapi.core.config import WebApiConfig
from xrm_webapi.models.guid import Guid


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return WebApiConfig(api_version="9.2", http_timeout=5)


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "https://org.example.com"


@pytest.fixture
def sample_entity_data():
    """Sample entity data for testing."""
    return {
        "name": "Test Account",
        "telephone1": "555-0100",
        "websiteurl": "https://example.com",
    }


@pytest.fixture
def sample_guid():
    """Sample record id for testing."""
    return Guid("11111111-2222-3333-4444-555555555555")
