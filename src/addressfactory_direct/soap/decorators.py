"""Decorators around the SOAP transport.

Each decorator implements :class:`~addressfactory_direct.protocols.TransportProtocol`
and wraps another implementation of it, adding exactly one concern:

- :class:`ErrorHandlerDecorator` turns faults and in-band authentication
  errors into :class:`ServiceException` / :class:`AuthenticationException`.
- :class:`LoggingDecorator` hands every exchange to a communication logger.

The service factory nests them as ``Logging(ErrorHandler(transport))`` so
that failures raised by the error handler are seen, and logged, by the
logging decorator before they reach the caller.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from addressfactory_direct.models.enums import Operation, OutcomeKind
from addressfactory_direct.models.errors import (
    AuthenticationErrorException,
    AuthenticationException,
    ServiceException,
)
from addressfactory_direct.protocols import CommunicationLoggerProtocol, TransportProtocol
from addressfactory_direct.soap.envelope import (
    RequestEnvelope,
    ResponseEnvelope,
    authentication_error_message,
    find_authentication_error,
    parse_session_id,
)
from addressfactory_direct.soap.fault import SoapFault

logger = logging.getLogger(__name__)


class ErrorHandlerDecorator:
    """Classify transport outcomes and raise typed exceptions.

    Successful responses pass through unchanged. An empty result set is a
    valid "no match" response, not an error; an openSession response
    without a session id is a server error.
    """

    AUTH_ERROR_MESSAGE: ClassVar[str] = (
        "Authentication failed. Please check your access credentials."
    )
    MISSING_SESSION_ID_MESSAGE: ClassVar[str] = "Response does not contain a session id."

    # Fault codes (without namespace prefix) signalling rejected credentials
    AUTH_FAULT_CODES: ClassVar[frozenset[str]] = frozenset(
        {
            "FailedAuthentication",
            "InvalidSecurity",
            "InvalidSecurityToken",
            "Client.Authentication",
            "Authentication",
        }
    )

    # Complete fault strings (lower-cased, without trailing period) signalling
    # rejected credentials or sessions
    AUTH_FAULT_MESSAGES: ClassVar[frozenset[str]] = frozenset(
        {
            "authentication failed",
            "invalid credentials",
            "invalid username or password",
            "invalid session",
            "session expired",
            "unauthorized",
        }
    )

    def __init__(self, transport: TransportProtocol) -> None:
        self._transport = transport

    @property
    def last_request(self) -> str | None:
        return self._transport.last_request

    @property
    def last_response(self) -> str | None:
        return self._transport.last_response

    def send(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        try:
            response = self._transport.send(envelope)
        except SoapFault as fault:
            if self._is_authentication_fault(fault):
                raise AuthenticationException(self.AUTH_ERROR_MESSAGE) from (
                    AuthenticationErrorException(fault.message, code=fault.code)
                )
            raise ServiceException(fault.message) from fault

        marker = find_authentication_error(response.body)
        if marker is not None:
            raise AuthenticationException(self.AUTH_ERROR_MESSAGE) from (
                AuthenticationErrorException(
                    authentication_error_message(marker) or self.AUTH_ERROR_MESSAGE
                )
            )

        if envelope.operation is Operation.OPEN_SESSION and parse_session_id(response) is None:
            raise ServiceException(self.MISSING_SESSION_ID_MESSAGE)

        return response

    def _is_authentication_fault(self, fault: SoapFault) -> bool:
        if fault.code_name in self.AUTH_FAULT_CODES:
            return True
        if normalize_fault_message(fault.message) in self.AUTH_FAULT_MESSAGES:
            return True
        return find_authentication_error(fault.detail) is not None


class LoggingDecorator:
    """Record every exchange with the wrapped transport, whatever its outcome.

    The raw request and response are read back from the wrapped transport
    after the call, so failed exchanges are logged with the response that
    caused the failure. When no response was received the fault is
    described instead.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        communication_logger: CommunicationLoggerProtocol,
    ) -> None:
        self._transport = transport
        self._logger = communication_logger

    @property
    def last_request(self) -> str | None:
        return self._transport.last_request

    @property
    def last_response(self) -> str | None:
        return self._transport.last_response

    def send(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        try:
            response = self._transport.send(envelope)
        except AuthenticationException as exc:
            self._log(envelope, OutcomeKind.AUTH_ERROR, exc)
            raise
        except Exception as exc:
            self._log(envelope, OutcomeKind.SERVER_ERROR, exc)
            raise

        self._log(envelope, OutcomeKind.SUCCESS)
        return response

    def _log(
        self,
        envelope: RequestEnvelope,
        outcome: OutcomeKind,
        error: Exception | None = None,
    ) -> None:
        request = self._transport.last_request or ""
        response = self._transport.last_response
        if not response and error is not None:
            response = _describe(error)

        try:
            self._logger.record(request, response or "", outcome, envelope.operation)
        except Exception:
            logger.warning(
                "Failed to log %s communication", envelope.operation.value, exc_info=True
            )


def _describe(error: Exception) -> str:
    cause = error.__cause__
    if isinstance(cause, SoapFault):
        return cause.describe()
    if isinstance(error, SoapFault):
        return error.describe()
    return f"{type(error).__name__}: {error}"


def normalize_fault_message(message: str) -> str:
    """Fault string as compared against ``AUTH_FAULT_MESSAGES``."""
    return message.strip().rstrip(".").strip().lower()
