"""addressfactory-direct: a client for a SOAP address verification service.

This package provides:
- A request builder producing immutable, validated record requests
- A session-level service (open session, verify records, close session)
- A decorated transport chain classifying faults and logging all communication

Quick Start:
    >>> from addressfactory_direct import RequestBuilder, SoapServiceFactory
    >>> builder = RequestBuilder()
    >>> record = (
    ...     builder.set_metadata(1)
    ...     .set_person("Hans", "Mustermann")
    ...     .set_address("Deutschland", "53114", "Bonn", "Sträßchenweg", "10")
    ...     .create()
    ... )
    >>> service = SoapServiceFactory().create_address_verification_service()
    >>> with service.session("user", "password") as session_id:
    ...     results = service.get_records(session_id, [record])

    # Authentication problems can be told apart from other faults
    >>> from addressfactory_direct import AuthenticationException, ServiceException
    >>> try:
    ...     service.open_session("user", "wrong")
    ... except AuthenticationException as exc:
    ...     print(exc)  # AUTH_ERROR_MESSAGE
    ... except ServiceException as exc:
    ...     print(exc)  # upstream fault message
"""

from __future__ import annotations

from addressfactory_direct.communication import (
    CommunicationLog,
    LogRecord,
    StdlibCommunicationLogger,
)
from addressfactory_direct.config import AddressfactoryConfig
from addressfactory_direct.models import (
    PACKAGE_NAME,
    Address,
    AddressMatch,
    AuthenticationErrorException,
    AuthenticationException,
    MatchedAddress,
    MatchedPerson,
    Operation,
    OutcomeKind,
    Person,
    RecordRequest,
    RecordResult,
    RequestBuilder,
    RequestValidationError,
    ServiceException,
    SessionState,
)
from addressfactory_direct.protocols import CommunicationLoggerProtocol, TransportProtocol
from addressfactory_direct.service import AddressVerificationService
from addressfactory_direct.soap import (
    Credentials,
    ErrorHandlerDecorator,
    HttpSoapTransport,
    LoggingDecorator,
    SoapFault,
)
from addressfactory_direct.soap.factory import SoapServiceFactory

AUTH_ERROR_MESSAGE = ErrorHandlerDecorator.AUTH_ERROR_MESSAGE

__version__ = "0.1.0"
__package_name__ = "addressfactory-direct"

__all__ = [
    # Version
    "__version__",
    "PACKAGE_NAME",
    # Primary interface
    "AddressVerificationService",
    "SoapServiceFactory",
    "AddressfactoryConfig",
    # Requests
    "Address",
    "Person",
    "RecordRequest",
    "RequestBuilder",
    # Results
    "AddressMatch",
    "MatchedAddress",
    "MatchedPerson",
    "RecordResult",
    # Enums
    "Operation",
    "OutcomeKind",
    "SessionState",
    # Errors
    "AUTH_ERROR_MESSAGE",
    "AuthenticationErrorException",
    "AuthenticationException",
    "RequestValidationError",
    "ServiceException",
    "SoapFault",
    # Transport chain
    "Credentials",
    "ErrorHandlerDecorator",
    "HttpSoapTransport",
    "LoggingDecorator",
    # Communication logging
    "CommunicationLog",
    "LogRecord",
    "StdlibCommunicationLogger",
    # Protocols
    "CommunicationLoggerProtocol",
    "TransportProtocol",
]
