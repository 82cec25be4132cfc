"""Shared pytest fixtures and configuration."""

import pytest

from snowadapter.adapter import AdapterProperties, AuthCredentials
from snowadapter.connector import ConnectorOptions

INSTANCE_URL = "https://dev00000.service-now.com/"


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: requests against an actual ServiceNow instance")


# Shared fixtures


@pytest.fixture
def connector_options() -> ConnectorOptions:
    """Connector options pointing at a fake instance."""
    return ConnectorOptions(
        url=INSTANCE_URL,
        username="test-user",
        password="test-password",
        service_now_table="change_request",
    )


@pytest.fixture
def adapter_properties() -> AdapterProperties:
    """Adapter properties pointing at a fake instance."""
    return AdapterProperties(
        url=INSTANCE_URL,
        auth=AuthCredentials(username="test-user", password="test-password"),
        service_now_table="change_request",
    )


@pytest.fixture
def full_ticket() -> dict:
    """A change request as the Table API returns it."""
    return {
        "number": "CHG0000001",
        "sys_id": "a9e30c7dc61122760116894de7bcc7bd",
        "active": "true",
        "priority": "3",
        "description": "Upgrade the core switch firmware",
        "work_start": "2026-10-20 01:00:00",
        "work_end": "2026-10-20 03:00:00",
        "short_description": "Switch firmware",
        "state": "-5",
        "assigned_to": "",
    }
