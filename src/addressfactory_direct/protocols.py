from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from addressfactory_direct.models import Operation, OutcomeKind
    from addressfactory_direct.soap.envelope import RequestEnvelope, ResponseEnvelope


@runtime_checkable
class TransportProtocol(Protocol):
    """Protocol for sending request envelopes to the remote service.

    Implemented by the raw HTTP transport and by every decorator wrapping
    it, so decorators can be nested in any number.
    """

    def send(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        """Send one request envelope.

        Args:
            envelope: Operation, payload and session context to send.

        Returns:
            The parsed response envelope.

        Raises:
            SoapFault: On the raw transport, if the exchange failed.
        """
        ...

    @property
    def last_request(self) -> str | None:
        """Raw XML of the most recent request, if any."""
        ...

    @property
    def last_response(self) -> str | None:
        """Raw XML of the most recent response, if one was received."""
        ...


@runtime_checkable
class CommunicationLoggerProtocol(Protocol):
    """Protocol for the communication audit sink.

    Implementations append one entry per exchange and must not rely on
    being called in any particular thread.
    """

    def record(
        self,
        request: str,
        response: str,
        outcome: OutcomeKind,
        operation: Operation | None = None,
    ) -> None:
        """Record one request/response exchange.

        Args:
            request: Raw request XML.
            response: Raw response XML, or a description of the fault.
            outcome: Classification of the exchange.
            operation: Remote operation that was called, if known.
        """
        ...
