"""ServiceNow Adapter - Change request operations and status events."""

from snowadapter.adapter.adapter import ServiceNowAdapter
from snowadapter.adapter.models import (
    AdapterProperties,
    AdapterStatus,
    AuthCredentials,
    ChangeRequest,
)

__all__ = [
    "AdapterProperties",
    "AdapterStatus",
    "AuthCredentials",
    "ChangeRequest",
    "ServiceNowAdapter",
]
