"""Transport level fault raised by the raw SOAP transport."""

from __future__ import annotations

from lxml import etree


class SoapFault(Exception):
    """A SOAP fault or connection failure reported by the transport.

    Only code below the error handling decorator ever sees this exception;
    callers of the service receive a ServiceException or one of its
    subclasses instead.

    Args:
        code: Fault code as sent by the server (e.g. ``soap:Server``).
        message: Fault string, unchanged.
        detail: The fault ``detail`` element, if any.
        request_xml: Raw request that caused the fault.
        response_xml: Raw response carrying the fault, if one was received.
    """

    def __init__(
        self,
        code: str,
        message: str,
        detail: etree._Element | None = None,
        request_xml: str | None = None,
        response_xml: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail
        self.request_xml = request_xml
        self.response_xml = response_xml

    @property
    def code_name(self) -> str:
        """Fault code without its namespace prefix."""
        return self.code.rpartition(":")[2]

    def describe(self) -> str:
        """Short description used when no raw response is available."""
        return f"SoapFault [{self.code}]: {self.message}"

    def __repr__(self) -> str:
        return f"SoapFault(code={self.code!r}, message={self.message!r})"
