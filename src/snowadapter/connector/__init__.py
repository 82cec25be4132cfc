"""ServiceNow Connector - Raw HTTP access to the ServiceNow Table API."""

from snowadapter.connector.connector import (
    DEFAULT_CHANGE_REQUEST,
    TABLE_API_PATH,
    ServiceNowConnector,
)
from snowadapter.connector.exceptions import (
    ConnectorError,
    ConnectorResponseError,
    ConnectorTransportError,
    InstanceHibernatingError,
)
from snowadapter.connector.models import ConnectorOptions, ConnectorResponse

__all__ = [
    "DEFAULT_CHANGE_REQUEST",
    "TABLE_API_PATH",
    "ConnectorError",
    "ConnectorOptions",
    "ConnectorResponse",
    "ConnectorResponseError",
    "ConnectorTransportError",
    "InstanceHibernatingError",
    "ServiceNowConnector",
]
