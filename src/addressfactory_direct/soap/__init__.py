from __future__ import annotations

from addressfactory_direct.soap.decorators import ErrorHandlerDecorator, LoggingDecorator
from addressfactory_direct.soap.envelope import Credentials, RequestEnvelope, ResponseEnvelope
from addressfactory_direct.soap.fault import SoapFault
from addressfactory_direct.soap.transport import HttpSoapTransport

__all__ = [
    "Credentials",
    "ErrorHandlerDecorator",
    "HttpSoapTransport",
    "LoggingDecorator",
    "RequestEnvelope",
    "ResponseEnvelope",
    "SoapFault",
]
