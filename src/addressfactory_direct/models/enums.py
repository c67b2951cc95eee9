"""Operation, outcome and session state enumerations."""

from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    """Remote operations offered by the address verification service."""

    OPEN_SESSION = "openSession"
    GET_RECORDS = "getRecords"
    CLOSE_SESSION = "closeSession"


class OutcomeKind(str, Enum):
    """Classification of one request/response exchange."""

    SUCCESS = "success"
    AUTH_ERROR = "auth_error"
    SERVER_ERROR = "server_error"


class SessionState(str, Enum):
    """Lifecycle of a session held by the service."""

    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"
