"""Data models for the ServiceNow connector."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


@dataclass(frozen=True)
class ConnectorOptions:
    """Connection details for one ServiceNow table.

    Attributes:
        url: ServiceNow instance URL, e.g. https://dev12345.service-now.com/
        username: Basic-auth login
        password: Basic-auth password
        service_now_table: Table name, e.g. change_request
        timeout: httpx client timeout in seconds
    """

    url: str
    username: str
    password: str = field(repr=False)
    service_now_table: str
    timeout: float = 30.0


@dataclass
class ConnectorResponse:
    """Raw reply from the Table API, handed to connector callbacks."""

    status_code: int
    body: str
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> ConnectorResponse:
        """Build from an httpx response."""
        return cls(
            status_code=response.status_code,
            body=response.text,
            method=response.request.method,
            url=str(response.request.url),
            headers=dict(response.headers),
        )
