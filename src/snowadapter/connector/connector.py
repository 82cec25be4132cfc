"""ServiceNowConnector - Raw GET/POST access to the ServiceNow Table API."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

import httpx

from snowadapter.connector.exceptions import (
    ConnectorError,
    ConnectorResponseError,
    ConnectorTransportError,
    InstanceHibernatingError,
)
from snowadapter.connector.models import ConnectorOptions, ConnectorResponse
from snowadapter.logging import get_logger, redact

logger = get_logger("connector")

TABLE_API_PATH = "/api/now/table"
HIBERNATION_MARKER = "Instance Hibernating page"

# Example change request sent by post_record
DEFAULT_CHANGE_REQUEST: dict[str, Any] = {
    "short_description": "Change request created by snowadapter",
    "description": "Example change request created through the Table API.",
    "type": "normal",
    "priority": "3",
    "state": "-5",
}

ConnectorCallback = Callable[[ConnectorResponse | None, ConnectorError | None], None]


class ServiceNowConnector:
    """Issues requests against one ServiceNow table.

    Every request runs on a worker thread. Completion is signalled by calling
    the supplied callback data-first: ``callback(response, None)`` on success,
    ``callback(None, error)`` on failure. The returned future resolves once the
    callback has returned.
    """

    def __init__(
        self,
        options: ConnectorOptions,
        max_workers: int = 4,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the connector.

        Args:
            options: Instance URL, credentials and table name
            max_workers: Size of the request thread pool
            transport: httpx transport override (for testing)
        """
        self.options = options
        self.max_workers = max_workers
        self.transport = transport
        self._client: httpx.Client | None = None
        self._executor: ThreadPoolExecutor | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the Table API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.options.url.rstrip("/"),
                auth=(self.options.username, self.options.password),
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=self.options.timeout,
                transport=self.transport,
            )
        return self._client

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Get or create the request thread pool."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="snowadapter-connector",
            )
        return self._executor

    def close(self) -> None:
        """Wait for in-flight requests, then close the HTTP client."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ServiceNowConnector:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def construct_uri(self, table: str | None = None, query: str | None = None) -> str:
        """Build the Table API path for a table.

        Args:
            table: Table name, defaults to the configured table
            query: Optional encoded query string, without the leading '?'

        Returns:
            Path relative to the instance URL
        """
        uri = f"{TABLE_API_PATH}/{table or self.options.service_now_table}"
        if query:
            uri = f"{uri}?{query}"
        return uri

    def get_record(self, callback: ConnectorCallback) -> Future[None]:
        """Read one record from the configured table.

        Args:
            callback: Receives ``(response, error)``
        """
        uri = self.construct_uri(query="sysparm_limit=1")
        return self._send_request("GET", uri, callback)

    def post_record(self, callback: ConnectorCallback) -> Future[None]:
        """Create the example change request in the configured table.

        Args:
            callback: Receives ``(response, error)``
        """
        uri = self.construct_uri()
        return self._send_request("POST", uri, callback, payload=DEFAULT_CHANGE_REQUEST)

    def _send_request(
        self,
        method: str,
        uri: str,
        callback: ConnectorCallback,
        payload: dict[str, Any] | None = None,
    ) -> Future[None]:
        logger.debug("Queueing %s %s", method, uri)
        return self.executor.submit(self._request_and_notify, method, uri, callback, payload)

    def _request_and_notify(
        self,
        method: str,
        uri: str,
        callback: ConnectorCallback,
        payload: dict[str, Any] | None,
    ) -> None:
        response, error = self.request(method, uri, payload)
        try:
            callback(response, error)
        except Exception:
            logger.exception("Callback for %s %s raised", method, uri)
            raise

    def request(
        self, method: str, uri: str, payload: dict[str, Any] | None = None
    ) -> tuple[ConnectorResponse | None, ConnectorError | None]:
        """Perform one request on the calling thread.

        Args:
            method: HTTP method
            uri: Path built by construct_uri
            payload: JSON body for POST

        Returns:
            ``(response, None)`` or ``(None, error)``
        """
        try:
            http_response = self.client.request(method, uri, json=payload)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, uri, e)
            return None, ConnectorTransportError(f"{method} {uri} failed: {e}")

        return self.process_request_results(ConnectorResponse.from_httpx(http_response))

    def process_request_results(
        self, response: ConnectorResponse
    ) -> tuple[ConnectorResponse | None, ConnectorError | None]:
        """Classify a reply as success or error.

        Args:
            response: Reply received from ServiceNow

        Returns:
            ``(response, None)`` or ``(None, error)``
        """
        if self.is_hibernating(response):
            logger.error(
                "ServiceNow instance is hibernating (%s %s)", response.method, response.url
            )
            return None, InstanceHibernatingError("Service Now instance is hibernating")

        if not 200 <= response.status_code < 300:
            body = redact(response.body)
            logger.error(
                "%s %s returned %d: %s",
                response.method,
                response.url,
                response.status_code,
                body,
            )
            return None, ConnectorResponseError(
                f"{response.method} {response.url} returned {response.status_code}",
                status_code=response.status_code,
                body=response.body,
            )

        logger.debug("%s %s returned %d", response.method, response.url, response.status_code)
        return response, None

    @staticmethod
    def is_hibernating(response: ConnectorResponse) -> bool:
        """Check whether a reply is the instance hibernation page.

        Sleeping developer instances answer 200 with an HTML page instead of JSON.
        """
        return (
            response.status_code == 200
            and HIBERNATION_MARKER in response.body
            and "<html>" in response.body
        )
