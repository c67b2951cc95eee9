import logging

import pytest

from addressfactory_direct import (
    AddressfactoryConfig,
    AddressVerificationService,
    AuthenticationException,
    CommunicationLog,
    ErrorHandlerDecorator,
    HttpSoapTransport,
    LoggingDecorator,
    SoapServiceFactory,
    StdlibCommunicationLogger,
)
from addressfactory_direct.communication import COMMUNICATION_LOGGER_NAME
from tests.responses import CLOSE_SESSION_RESPONSE, INVALID_CREDENTIALS_RESPONSE


def test_chain_order_is_logging_then_error_handler(make_transport) -> None:
    transport = make_transport(CLOSE_SESSION_RESPONSE)

    service = SoapServiceFactory(transport).create_address_verification_service(
        CommunicationLog()
    )

    assert isinstance(service, AddressVerificationService)
    outer = service._transport
    assert isinstance(outer, LoggingDecorator)
    inner = outer._transport
    assert isinstance(inner, ErrorHandlerDecorator)
    assert inner._transport is transport


def test_stdlib_logger_receives_one_record_per_call(
    make_transport, caplog: pytest.LogCaptureFixture
) -> None:
    transport = make_transport(CLOSE_SESSION_RESPONSE)
    logger = logging.getLogger("tests.communication")
    service = SoapServiceFactory(transport).create_address_verification_service(logger)

    with caplog.at_level(logging.INFO, logger="tests.communication"):
        service.close_session("session-id")

    records = [record for record in caplog.records if record.name == "tests.communication"]
    assert len(records) == 1
    assert records[0].levelno == logging.INFO
    assert records[0].request_xml == transport.last_request
    assert records[0].response_xml == transport.last_response
    assert records[0].outcome == "success"


def test_default_logger_logs_failures_at_error_level(
    make_transport, caplog: pytest.LogCaptureFixture
) -> None:
    transport = make_transport(INVALID_CREDENTIALS_RESPONSE, status_code=500)
    service = SoapServiceFactory(transport).create_address_verification_service()

    with caplog.at_level(logging.INFO, logger=COMMUNICATION_LOGGER_NAME):
        with pytest.raises(AuthenticationException):
            service.close_session("session-id")

    records = [record for record in caplog.records if record.name == COMMUNICATION_LOGGER_NAME]
    assert len(records) == 1
    assert records[0].levelno == logging.ERROR
    assert records[0].outcome == "auth_error"
    assert "FailedAuthentication" in records[0].getMessage()


def test_unsupported_logger_type_is_rejected(make_transport) -> None:
    factory = SoapServiceFactory(make_transport(CLOSE_SESSION_RESPONSE))

    with pytest.raises(TypeError):
        factory.create_address_verification_service(object())  # type: ignore[arg-type]


def test_stdlib_logger_wrapper_is_accepted_as_is(make_transport) -> None:
    communication_logger = StdlibCommunicationLogger(logging.getLogger("tests.wrapped"))
    service = SoapServiceFactory(
        make_transport(CLOSE_SESSION_RESPONSE)
    ).create_address_verification_service(communication_logger)

    assert service._transport._logger is communication_logger


@pytest.mark.parametrize(
    ("sandbox", "expected"),
    [(False, "http://live.test/af"), (True, "http://sandbox.test/af")],
)
def test_factory_builds_http_transport_from_config(sandbox: bool, expected: str) -> None:
    config = AddressfactoryConfig(url="http://live.test/af", sandbox_url="http://sandbox.test/af")

    service = SoapServiceFactory(config=config).create_address_verification_service(
        CommunicationLog(), sandbox=sandbox
    )

    raw = service._transport._transport._transport
    assert isinstance(raw, HttpSoapTransport)
    assert raw.url == expected
    raw.close()
