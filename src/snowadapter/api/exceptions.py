"""Exceptions raised by API routes."""


class EmptyResultError(Exception):
    """ServiceNow answered, but the reply could not be turned into records."""
