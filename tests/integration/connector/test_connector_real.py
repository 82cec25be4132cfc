"""Integration tests against a real ServiceNow instance.

These tests require:
- SERVICENOW_URL, SERVICENOW_USERNAME, SERVICENOW_PASSWORD environment variables
- SERVICENOW_TABLE environment variable (e.g., "change_request")
- An awake instance (developer instances hibernate when idle)

Run with: pytest tests/integration/connector/ -m real
"""

import os

import pytest

from snowadapter.adapter import AdapterStatus, ChangeRequest, ServiceNowAdapter
from snowadapter.config import load_properties_from_env

# Skip all tests in this module if credentials not available
pytestmark = [
    pytest.mark.integration,
    pytest.mark.real,
    pytest.mark.skipif(
        not all(
            os.environ.get(name)
            for name in (
                "SERVICENOW_URL",
                "SERVICENOW_USERNAME",
                "SERVICENOW_PASSWORD",
                "SERVICENOW_TABLE",
            )
        ),
        reason="SERVICENOW_URL, SERVICENOW_USERNAME, SERVICENOW_PASSWORD and "
        "SERVICENOW_TABLE required",
    ),
]


@pytest.fixture
def adapter() -> ServiceNowAdapter:
    """Create an adapter for the configured instance."""
    adapter = ServiceNowAdapter("snow-real", load_properties_from_env())
    yield adapter
    adapter.close()


def test_healthcheck_online(adapter: ServiceNowAdapter) -> None:
    """A reachable instance is reported ONLINE."""
    events: list[dict] = []
    adapter.on("ONLINE", events.append)

    adapter.healthcheck().result(timeout=60)

    assert adapter.status is AdapterStatus.ONLINE
    assert events == [{"id": "snow-real"}]


def test_get_record(adapter: ServiceNowAdapter) -> None:
    """At most one normalized record comes back."""
    calls: list[tuple] = []

    adapter.get_record(lambda data, error: calls.append((data, error))).result(timeout=60)

    records, error = calls[0]
    assert error is None
    assert len(records) <= 1
    assert all(isinstance(r, ChangeRequest) for r in records)


def test_post_record(adapter: ServiceNowAdapter) -> None:
    """The example change request is created and normalized."""
    calls: list[tuple] = []

    adapter.post_record(lambda data, error: calls.append((data, error))).result(timeout=60)

    record, error = calls[0]
    assert error is None
    assert record.change_ticket_number
    assert record.change_ticket_key
