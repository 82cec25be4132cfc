"""Custom exceptions for the ServiceNow connector."""


class ConnectorError(Exception):
    """Base exception for ServiceNow connector errors."""


class ConnectorTransportError(ConnectorError):
    """The request never produced an HTTP response (DNS, TLS, timeout, reset)."""


class ConnectorResponseError(ConnectorError):
    """ServiceNow answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InstanceHibernatingError(ConnectorError):
    """The developer instance is asleep and served its hibernation page."""
