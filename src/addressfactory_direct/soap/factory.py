from __future__ import annotations

import logging
from typing import Optional, Union

from addressfactory_direct.communication import StdlibCommunicationLogger
from addressfactory_direct.config import AddressfactoryConfig
from addressfactory_direct.protocols import CommunicationLoggerProtocol, TransportProtocol
from addressfactory_direct.service import AddressVerificationService
from addressfactory_direct.soap.decorators import ErrorHandlerDecorator, LoggingDecorator
from addressfactory_direct.soap.transport import HttpSoapTransport

LoggerLike = Union[logging.Logger, CommunicationLoggerProtocol, None]


class SoapServiceFactory:
    """Wires the decorated transport and the service on top of it.

    The chain is always built as::

        LoggingDecorator(ErrorHandlerDecorator(transport))

    so every call is logged exactly once, including calls that fail during
    error classification.
    """

    def __init__(
        self,
        transport: Optional[TransportProtocol] = None,
        config: Optional[AddressfactoryConfig] = None,
    ) -> None:
        self._transport = transport
        self._config = config or AddressfactoryConfig()

    def create_address_verification_service(
        self,
        logger: LoggerLike = None,
        sandbox: Optional[bool] = None,
    ) -> AddressVerificationService:
        """Create a service talking to the configured endpoint.

        Args:
            logger: Where to log the communication. A ``logging.Logger``, an
                object with a ``record`` method, or None for the package's
                communication logger.
            sandbox: Use the sandbox endpoint. Defaults to the config setting.
                Ignored when a transport was injected.

        Returns:
            AddressVerificationService over the decorated transport.
        """
        transport = self._transport or HttpSoapTransport(config=self._config, sandbox=sandbox)
        decorated = LoggingDecorator(
            ErrorHandlerDecorator(transport),
            _communication_logger(logger),
        )
        return AddressVerificationService(decorated)


def _communication_logger(logger: LoggerLike) -> CommunicationLoggerProtocol:
    if logger is None or isinstance(logger, logging.Logger):
        return StdlibCommunicationLogger(logger)
    if isinstance(logger, CommunicationLoggerProtocol):
        return logger
    raise TypeError(
        f"Unsupported logger type: {type(logger).__name__}. "
        "Pass a logging.Logger or an object with a record() method."
    )
