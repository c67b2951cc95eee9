"""SOAP envelope serialization and parsing.

Requests are built as lxml trees and serialized once; responses are parsed
with a hardened parser. Elements in responses are matched by local name so
that servers using other namespace prefixes (or SOAP 1.2) are accepted.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from lxml import etree

from addressfactory_direct.models.enums import Operation
from addressfactory_direct.models.request import RecordRequest
from addressfactory_direct.models.results import AddressMatch, MatchedAddress, MatchedPerson
from addressfactory_direct.soap.fault import SoapFault

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SERVICE_NS = "urn:addressfactory:direct"
NSMAP = {"soapenv": SOAP_ENV_NS, "af": SERVICE_NS}

AUTH_ERROR_ELEMENT = "AuthenticationError"

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


@dataclass(frozen=True)
class Credentials:
    """User name and password, only sent when a session is opened."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass
class RequestEnvelope:
    """An outbound request: operation, payload and session context."""

    operation: Operation
    body: etree._Element
    credentials: Credentials | None = None
    session_id: str | None = None

    def to_xml(self) -> str:
        """Serialize the full SOAP envelope."""
        envelope = etree.Element(_soap("Envelope"), nsmap=NSMAP)
        header = etree.SubElement(envelope, _soap("Header"))
        if self.credentials is not None:
            auth = etree.SubElement(header, _af("authentication"))
            _text(auth, "username", self.credentials.username)
            _text(auth, "password", self.credentials.password)
        body = etree.SubElement(envelope, _soap("Body"))
        body.append(self.body)
        return etree.tostring(envelope, xml_declaration=True, encoding="UTF-8").decode("utf-8")


@dataclass
class ResponseEnvelope:
    """An inbound response. ``body`` is None for an empty response."""

    operation: Operation
    xml: str
    body: etree._Element | None = None

    @property
    def payload(self) -> etree._Element | None:
        """First element inside the SOAP body, if any."""
        if self.body is None:
            return None
        return next(_elements(self.body), None)


def _soap(tag: str) -> str:
    return f"{{{SOAP_ENV_NS}}}{tag}"


def _af(tag: str) -> str:
    return f"{{{SERVICE_NS}}}{tag}"


def _text(parent: etree._Element, tag: str, value: str | int | None) -> None:
    if value is None:
        return
    etree.SubElement(parent, _af(tag)).text = str(value)


def _local(element: etree._Element) -> str:
    return etree.QName(element).localname


def _elements(parent: etree._Element) -> Iterator[etree._Element]:
    return (child for child in parent if isinstance(child.tag, str))


def _child(parent: etree._Element, name: str) -> etree._Element | None:
    return next((child for child in _elements(parent) if _local(child) == name), None)


def _child_text(parent: etree._Element | None, name: str) -> str | None:
    if parent is None:
        return None
    child = _child(parent, name)
    return child.text if child is not None else None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def open_session_request(
    credentials: Credentials,
    config_name: str | None = None,
    client_id: str | None = None,
) -> RequestEnvelope:
    body = etree.Element(_af("openSessionRequest"), nsmap=NSMAP)
    _text(body, "configName", config_name)
    _text(body, "clientId", client_id)
    return RequestEnvelope(Operation.OPEN_SESSION, body, credentials=credentials)


def get_records_request(
    session_id: str,
    records: Sequence[RecordRequest],
    config_name: str | None = None,
    client_id: str | None = None,
) -> RequestEnvelope:
    body = etree.Element(_af("getRecordsRequest"), nsmap=NSMAP)
    _text(body, "sessionId", session_id)
    _text(body, "configName", config_name)
    _text(body, "clientId", client_id)
    for record in records:
        body.append(_record_element(record))
    return RequestEnvelope(Operation.GET_RECORDS, body, session_id=session_id)


def close_session_request(session_id: str) -> RequestEnvelope:
    body = etree.Element(_af("closeSessionRequest"), nsmap=NSMAP)
    _text(body, "sessionId", session_id)
    return RequestEnvelope(Operation.CLOSE_SESSION, body, session_id=session_id)


def _record_element(record: RecordRequest) -> etree._Element:
    element = etree.Element(_af("record"))
    if record.record_id is not None:
        metadata = etree.SubElement(element, _af("metadata"))
        _text(metadata, "recordId", record.record_id)
    if record.person is not None:
        person = etree.SubElement(element, _af("person"))
        _text(person, "firstname", record.person.first_name)
        _text(person, "lastname", record.person.last_name)
    if record.address is not None:
        address = etree.SubElement(element, _af("address"))
        _text(address, "country", record.address.country)
        _text(address, "postalCode", record.address.postal_code)
        _text(address, "city", record.address.city)
        _text(address, "streetName", record.address.street)
        _text(address, "houseNumber", record.address.house_number)
    return element


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


def parse_response(
    operation: Operation, content: bytes, request_xml: str | None = None
) -> ResponseEnvelope:
    """Parse raw response bytes into a ResponseEnvelope.

    Raises:
        SoapFault: If the response is not XML or carries a SOAP fault.
    """
    xml = content.decode("utf-8", errors="replace")
    if not content.strip():
        return ResponseEnvelope(operation, xml)

    try:
        root = etree.fromstring(content, parser=_PARSER)
    except etree.XMLSyntaxError as exc:
        raise SoapFault(
            "Client",
            f"Looks like we got no XML document: {exc}",
            request_xml=request_xml,
            response_xml=xml,
        ) from exc

    body = _child(root, "Body") if _local(root) == "Envelope" else None
    if body is None:
        raise SoapFault(
            "Client",
            "Response is not a SOAP envelope",
            request_xml=request_xml,
            response_xml=xml,
        )

    fault = _child(body, "Fault")
    if fault is not None:
        raise _fault_from_element(fault, request_xml=request_xml, response_xml=xml)

    return ResponseEnvelope(operation, xml, body)


def _fault_from_element(
    fault: etree._Element, request_xml: str | None, response_xml: str
) -> SoapFault:
    # SOAP 1.1: faultcode/faultstring/detail; SOAP 1.2: Code/Reason/Detail
    code = _child_text(fault, "faultcode")
    message = _child_text(fault, "faultstring")
    detail = _child(fault, "detail")

    code_element = _child(fault, "Code")
    while code_element is not None:
        code = _child_text(code_element, "Value") or code
        code_element = _child(code_element, "Subcode")
    reason = _child(fault, "Reason")
    if reason is not None:
        message = _child_text(reason, "Text") or message
    detail = detail if detail is not None else _child(fault, "Detail")

    return SoapFault(
        (code or "Server").strip(),
        (message or "").strip(),
        detail=detail,
        request_xml=request_xml,
        response_xml=response_xml,
    )


def find_authentication_error(element: etree._Element | None) -> etree._Element | None:
    """Locate an in-band authentication error marker below ``element``."""
    if element is None:
        return None
    for candidate in element.iter(tag=etree.Element):
        if _local(candidate) == AUTH_ERROR_ELEMENT:
            return candidate
    return None


def authentication_error_message(marker: etree._Element) -> str | None:
    """Message text of an authentication error marker, if it has one."""
    message = _child_text(marker, "message")
    if message is None and marker.text:
        message = marker.text
    return message.strip() if message else None


def parse_session_id(response: ResponseEnvelope) -> str | None:
    payload = response.payload
    if payload is None:
        return None
    session_id = _child_text(payload, "sessionId")
    return session_id.strip() if session_id else None


def parse_matches(response: ResponseEnvelope) -> list[AddressMatch]:
    """Extract the result records of a getRecords response, in response order."""
    payload = response.payload
    if payload is None:
        return []
    return [
        _match_from_element(record)
        for record in _elements(payload)
        if _local(record) == "record"
    ]


def _parse_record_id(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _match_from_element(record: etree._Element) -> AddressMatch:
    status_codes = _child(record, "statusCodes")
    person = _child(record, "person")
    address = _child(record, "address")

    return AddressMatch(
        record_id=_parse_record_id(_child_text(_child(record, "metadata"), "recordId")),
        status_codes=tuple(
            code.text.strip()
            for code in (_elements(status_codes) if status_codes is not None else ())
            if code.text
        ),
        person=MatchedPerson(
            first_name=_child_text(person, "firstname"),
            last_name=_child_text(person, "lastname"),
        )
        if person is not None
        else None,
        address=MatchedAddress(
            country=_child_text(address, "country"),
            postal_code=_child_text(address, "postalCode"),
            city=_child_text(address, "city"),
            street=_child_text(address, "streetName"),
            house_number=_child_text(address, "houseNumber"),
        )
        if address is not None
        else None,
    )
