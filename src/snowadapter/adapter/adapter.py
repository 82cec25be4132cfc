"""ServiceNowAdapter - Change request adapter exposed to the orchestration platform."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from snowadapter.adapter.models import AdapterProperties, AdapterStatus, ChangeRequest
from snowadapter.connector import ConnectorError, ConnectorResponse, ServiceNowConnector
from snowadapter.logging import get_adapter_logger

if TYPE_CHECKING:
    from concurrent.futures import Future

    from snowadapter.events import EventManager

# Callbacks are data-first: (data, error)
RecordsCallback = Callable[[list[ChangeRequest] | None, ConnectorError | None], None]
RecordCallback = Callable[[ChangeRequest | None, ConnectorError | None], None]
Listener = Callable[[dict[str, Any]], None]


class ServiceNowAdapter:
    """Adapter for ServiceNow change requests.

    Wraps a ServiceNowConnector, reports instance reachability as ONLINE and
    OFFLINE events and normalizes tickets into ChangeRequest records.
    """

    def __init__(
        self,
        adapter_id: str,
        properties: AdapterProperties,
        event_manager: EventManager | None = None,
        connector: ServiceNowConnector | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            adapter_id: Adapter instance ID, sent with every status event
            properties: Instance URL, credentials and table name
            event_manager: Optional event manager that also receives status events
            connector: Connector to use instead of one built from properties
        """
        self.id = adapter_id
        self.log = get_adapter_logger(adapter_id)
        self.props = properties
        self.event_manager = event_manager
        self.connector = connector or ServiceNowConnector(properties.to_connector_options())
        self.status: AdapterStatus | None = None
        self._listeners: dict[str, list[Listener]] = {}
        self._listeners_lock = threading.Lock()

    def close(self) -> None:
        """Close the underlying connector."""
        self.connector.close()

    # Event registration

    def on(self, event: str, listener: Listener) -> None:
        """Register a listener for a named event."""
        with self._listeners_lock:
            self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        with self._listeners_lock:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

    def emit(self, event: str, payload: dict[str, Any]) -> None:
        """Call every listener registered for the event, in registration order."""
        with self._listeners_lock:
            listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                self.log.exception("Listener for %s raised", event)

    # Lifecycle

    def connect(self) -> Future[None]:
        """Connect to ServiceNow.

        All connection details came with the constructor, so connecting is a
        single healthcheck.
        """
        return self.healthcheck()

    def healthcheck(self, callback: RecordsCallback | None = None) -> Future[None]:
        """Check that ServiceNow is reachable and emit ONLINE or OFFLINE.

        Args:
            callback: Optional callback, receives the same ``(result, error)``
                as the underlying get_record call
        """

        def handle(result: list[ChangeRequest] | None, error: ConnectorError | None) -> None:
            try:
                if error:
                    self.log.error(
                        'Error connecting to ServiceNow from adapter instance "%s".', self.id
                    )
                    self.status = AdapterStatus.OFFLINE
                    self.emit_offline()
                else:
                    self.log.debug('Adapter "%s" successfully connected to ServiceNow.', self.id)
                    self.status = AdapterStatus.ONLINE
                    self.emit_online()
            finally:
                if callback is not None:
                    callback(result, error)

        return self.get_record(handle)

    def emit_offline(self) -> None:
        """Emit OFFLINE: the instance is not available."""
        self.emit_status(AdapterStatus.OFFLINE)
        self.log.warning("ServiceNow: Instance is unavailable.")

    def emit_online(self) -> None:
        """Emit ONLINE: the instance is available."""
        self.emit_status(AdapterStatus.ONLINE)
        self.log.info("ServiceNow: Instance is available.")

    def emit_status(self, status: AdapterStatus | str) -> None:
        """Emit a status event carrying this adapter's ID."""
        name = AdapterStatus(status).value
        self.emit(name, {"id": self.id})
        if self.event_manager is not None:
            self.event_manager.emit_status(name, self.id)

    # Records

    def parse_change_ticket(self, full_ticket: dict[str, Any]) -> ChangeRequest:
        """Reduce a full ServiceNow ticket to a ChangeRequest."""
        self.log.debug("Full ticket: %s", full_ticket)
        record = ChangeRequest(
            change_ticket_number=full_ticket.get("number"),
            change_ticket_key=full_ticket.get("sys_id"),
            active=full_ticket.get("active"),
            priority=full_ticket.get("priority"),
            description=full_ticket.get("description"),
            work_start=full_ticket.get("work_start"),
            work_end=full_ticket.get("work_end"),
        )
        self.log.debug("Stub ticket: %s", record)
        return record

    def get_record(self, callback: RecordsCallback) -> Future[None]:
        """Fetch change requests from ServiceNow.

        The callback receives ``(records, None)`` on success and
        ``(None, error)`` when the request fails. An unparseable reply is
        logged and reported as ``(None, None)``.
        """

        def handle(response: ConnectorResponse | None, error: ConnectorError | None) -> None:
            records: list[ChangeRequest] | None = None
            if error:
                self.log.error("Error fetching record from ServiceNow: %s", error)
            elif response is not None and response.body:
                try:
                    results = json.loads(response.body)["result"]
                    records = [self.parse_change_ticket(ticket) for ticket in results]
                except (ValueError, KeyError, TypeError, AttributeError) as e:
                    self.log.error("Error parsing ServiceNow response: %s", e)
            else:
                self.log.error(
                    "Unknown error fetching record. Response: %s Error: %s", response, error
                )
            callback(records, error)

        return self.connector.get_record(handle)

    def post_record(self, callback: RecordCallback) -> Future[None]:
        """Create a change request in ServiceNow.

        The callback receives ``(record, None)`` with the created record, or
        ``(None, error)``. An unparseable reply is logged and reported as
        ``(None, None)``.
        """

        def handle(response: ConnectorResponse | None, error: ConnectorError | None) -> None:
            record: ChangeRequest | None = None
            if error:
                self.log.error("Error creating ServiceNow record: %s", error)
            elif response is not None and response.body:
                try:
                    record = self.parse_change_ticket(json.loads(response.body)["result"])
                except (ValueError, KeyError, TypeError, AttributeError) as e:
                    self.log.error("Error parsing ServiceNow response: %s", e)
            else:
                self.log.error(
                    "Unknown error creating record. Response: %s Error: %s", response, error
                )
            callback(record, error)

        return self.connector.post_record(handle)
