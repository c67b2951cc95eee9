"""Communication audit sinks.

The logging decorator hands every request/response exchange to a
communication logger. Two implementations are provided:

- :class:`CommunicationLog` keeps the exchanges in memory, in call order.
- :class:`StdlibCommunicationLogger` forwards them to a ``logging.Logger``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from addressfactory_direct.models.enums import Operation, OutcomeKind

COMMUNICATION_LOGGER_NAME = "addressfactory_direct.communication"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LogRecord(BaseModel):
    """One logged exchange with the remote service."""

    model_config = ConfigDict(frozen=True)

    request_xml: str
    response_xml: str
    outcome: OutcomeKind
    operation: Operation | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @property
    def is_error(self) -> bool:
        return self.outcome is not OutcomeKind.SUCCESS


class CommunicationLog:
    """Append-only in-memory audit trail.

    Example:
        >>> log = CommunicationLog()
        >>> service = SoapServiceFactory(transport).create_address_verification_service(log)
        >>> service.close_session("session-id")
        >>> log.records[0].outcome
        <OutcomeKind.SUCCESS: 'success'>
    """

    def __init__(self) -> None:
        self._records: list[LogRecord] = []

    def record(
        self,
        request: str,
        response: str,
        outcome: OutcomeKind,
        operation: Operation | None = None,
    ) -> None:
        self._records.append(
            LogRecord(
                request_xml=request,
                response_xml=response,
                outcome=outcome,
                operation=operation,
            )
        )

    @property
    def records(self) -> tuple[LogRecord, ...]:
        return tuple(self._records)

    @property
    def errors(self) -> tuple[LogRecord, ...]:
        return tuple(record for record in self._records if record.is_error)

    def __len__(self) -> int:
        return len(self._records)


class StdlibCommunicationLogger:
    """Writes each exchange as a single record to a ``logging.Logger``.

    Successful exchanges are logged at INFO, failed ones at ERROR. The raw
    XML is part of the message and is also attached as ``extra`` fields
    (``request_xml``, ``response_xml``, ``outcome``, ``operation``).
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(COMMUNICATION_LOGGER_NAME)

    def record(
        self,
        request: str,
        response: str,
        outcome: OutcomeKind,
        operation: Operation | None = None,
    ) -> None:
        level = logging.INFO if outcome is OutcomeKind.SUCCESS else logging.ERROR
        self.logger.log(
            level,
            "%s exchange (%s)\nRequest:\n%s\nResponse:\n%s",
            operation.value if operation is not None else "unknown",
            outcome.value,
            request,
            response,
            extra={
                "request_xml": request,
                "response_xml": response,
                "outcome": outcome.value,
                "operation": operation.value if operation is not None else None,
            },
        )
