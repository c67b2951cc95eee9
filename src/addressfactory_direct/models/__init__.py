"""Request, result and error models.

Re-exports all public symbols so callers can import from
``addressfactory_direct.models`` directly.
"""

from __future__ import annotations

from addressfactory_direct.models.builder import RequestBuilder
from addressfactory_direct.models.enums import Operation, OutcomeKind, SessionState
from addressfactory_direct.models.errors import (
    PACKAGE_NAME,
    AuthenticationErrorException,
    AuthenticationException,
    RequestValidationError,
    ServiceException,
)
from addressfactory_direct.models.request import Address, Person, RecordRequest
from addressfactory_direct.models.results import (
    AddressMatch,
    MatchedAddress,
    MatchedPerson,
    RecordResult,
)

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "AuthenticationErrorException",
    "AuthenticationException",
    "RequestValidationError",
    "ServiceException",
    # Enums
    "Operation",
    "OutcomeKind",
    "SessionState",
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
]
