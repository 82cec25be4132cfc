"""REST API for snowadapter."""

from snowadapter.api.app import app, create_app
from snowadapter.api.models import (
    APIResponse,
    ChangeRequestResponse,
    HealthResponse,
)

__all__ = [
    "APIResponse",
    "ChangeRequestResponse",
    "HealthResponse",
    "app",
    "create_app",
]
