"""Shared pytest fixtures and Hypothesis configuration.

This module configures Hypothesis profiles and provides fixtures that stand
in for the remote service by answering requests through
``httpx.MockTransport``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import httpx
import pytest
from hypothesis import Verbosity, settings

from addressfactory_direct import (
    AddressVerificationService,
    CommunicationLog,
    HttpSoapTransport,
    RecordRequest,
    RequestBuilder,
    SoapServiceFactory,
)

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)

TEST_URL = "http://test/addressfactory"


def xml_response(body: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=body.encode("utf-8"),
        headers={"Content-Type": "text/xml; charset=utf-8"},
    )


@pytest.fixture
def make_transport() -> Callable[..., HttpSoapTransport]:
    """Build a transport answering requests with the given body or bodies."""

    def _make(body: str | Sequence[str], status_code: int = 200) -> HttpSoapTransport:
        bodies = [body] if isinstance(body, str) else list(body)

        def handler(request: httpx.Request) -> httpx.Response:
            # answer in order, repeating the last body
            current = bodies.pop(0) if len(bodies) > 1 else bodies[0]
            return xml_response(current, status_code)

        return HttpSoapTransport(url=TEST_URL, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def communication_log() -> CommunicationLog:
    return CommunicationLog()


@pytest.fixture
def make_service(
    make_transport: Callable[..., HttpSoapTransport], communication_log: CommunicationLog
) -> Callable[..., tuple[AddressVerificationService, HttpSoapTransport]]:
    """Build a fully decorated service over a canned-response transport."""

    def _make(
        body: str | Sequence[str], status_code: int = 200
    ) -> tuple[AddressVerificationService, HttpSoapTransport]:
        transport = make_transport(body, status_code)
        service = SoapServiceFactory(transport).create_address_verification_service(
            communication_log
        )
        return service, transport

    return _make


@pytest.fixture
def bonn_record() -> RecordRequest:
    return (
        RequestBuilder()
        .set_metadata(1580213265)
        .set_person("Hans", "Mustermann")
        .set_address("Deutschland", "53114", "Bonn", "Sträßchenweg", "10")
        .create()
    )


@pytest.fixture
def batch_records() -> list[RecordRequest]:
    builder = RequestBuilder().set_person("Hans", "Mustermann")

    builder.set_metadata(1)
    builder.set_address("Deutschland", "33739", "Bielelfeld", "Strusenweg", "36")
    first = builder.create()

    builder.set_metadata(2)
    builder.set_address("Deutschland", "53114", "Bonn", "Sträßchenweg", "10")
    second = builder.create()

    return [first, second]
