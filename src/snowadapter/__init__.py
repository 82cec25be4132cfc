"""snowadapter - ServiceNow change-request adapter for orchestration platforms."""

__version__ = "0.1.0"
