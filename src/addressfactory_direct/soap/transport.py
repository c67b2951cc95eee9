from __future__ import annotations

import logging
from typing import Optional

import httpx

from addressfactory_direct.config import AddressfactoryConfig
from addressfactory_direct.soap.envelope import RequestEnvelope, ResponseEnvelope, parse_response
from addressfactory_direct.soap.fault import SoapFault

logger = logging.getLogger(__name__)


class HttpSoapTransport:
    """Raw SOAP transport posting envelopes over HTTP.

    Keeps the raw XML of the last exchange, like a SOAP client's
    last request/response accessors, so decorators can audit it.
    """

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[AddressfactoryConfig] = None,
        sandbox: Optional[bool] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or AddressfactoryConfig()
        self.url = url or self._config.endpoint(sandbox)
        self._timeout = self._config.timeout if timeout is None else timeout
        self._client = httpx.Client(timeout=self._timeout, transport=transport)
        self._last_request: Optional[str] = None
        self._last_response: Optional[str] = None

    @property
    def last_request(self) -> Optional[str]:
        return self._last_request

    @property
    def last_response(self) -> Optional[str]:
        return self._last_response

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def send(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        request_xml = envelope.to_xml()
        self._last_request = request_xml
        self._last_response = None

        logger.debug("Sending %s request to %s", envelope.operation.value, self.url)
        try:
            response = self._client.post(
                self.url,
                content=request_xml.encode("utf-8"),
                headers={
                    "Content-Type": "text/xml; charset=utf-8",
                    "SOAPAction": envelope.operation.value,
                },
            )
        except httpx.HTTPError as exc:
            raise SoapFault("HTTP", str(exc), request_xml=request_xml) from exc

        self._last_response = response.text

        # Faults arrive with status 500; parse an XML body before judging the status.
        if response.status_code >= 400 and not response.content.lstrip().startswith(b"<"):
            raise self._http_fault(response, request_xml)
        parsed = parse_response(envelope.operation, response.content, request_xml=request_xml)
        if response.status_code >= 400:
            raise self._http_fault(response, request_xml)
        return parsed

    @staticmethod
    def _http_fault(response: httpx.Response, request_xml: str) -> SoapFault:
        return SoapFault(
            "HTTP",
            f"{response.status_code}: {response.reason_phrase or 'HTTP error'}",
            request_xml=request_xml,
            response_xml=response.text,
        )
