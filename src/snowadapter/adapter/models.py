"""Data models for the ServiceNow adapter."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from snowadapter.connector.models import ConnectorOptions


class AdapterStatus(str, Enum):
    """Reachability of the ServiceNow instance."""

    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


@dataclass
class ChangeRequest:
    """Normalized change request, reduced from a full ServiceNow ticket.

    Values are carried through as ServiceNow returns them; fields missing from
    the ticket are None.
    """

    change_ticket_number: Any = None
    change_ticket_key: Any = None
    active: Any = None
    priority: Any = None
    description: Any = None
    work_start: Any = None
    work_end: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain dict."""
        return asdict(self)


@dataclass(frozen=True)
class AuthCredentials:
    """ServiceNow login."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class AdapterProperties:
    """Adapter instance properties, fixed for the adapter's lifetime.

    Attributes:
        url: ServiceNow instance URL
        auth: Login credentials
        service_now_table: Change request table name
        timeout: HTTP timeout in seconds
    """

    url: str
    auth: AuthCredentials
    service_now_table: str
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdapterProperties:
        """Build from the platform's properties object.

        Accepts ``{"url", "auth": {"username", "password"}, "serviceNowTable"}``;
        ``service_now_table`` is accepted as well.
        """
        auth = data["auth"]
        table = data.get("serviceNowTable", data.get("service_now_table"))
        if table is None:
            raise KeyError("serviceNowTable")
        return cls(
            url=data["url"],
            auth=AuthCredentials(username=auth["username"], password=auth["password"]),
            service_now_table=table,
            timeout=float(data.get("timeout", 30.0)),
        )

    def to_connector_options(self) -> ConnectorOptions:
        """Flatten into connector options."""
        return ConnectorOptions(
            url=self.url,
            username=self.auth.username,
            password=self.auth.password,
            service_now_table=self.service_now_table,
            timeout=self.timeout,
        )
