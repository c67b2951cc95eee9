"""Property-based tests using Hypothesis for core components.

This module contains property tests that verify invariants of the request
builder, the result correlation and the error classification.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from addressfactory_direct import (
    AUTH_ERROR_MESSAGE,
    AddressMatch,
    AuthenticationException,
    ErrorHandlerDecorator,
    RecordRequest,
    RequestBuilder,
    RequestValidationError,
    ServiceException,
    SoapFault,
)
from addressfactory_direct.service import correlate
from addressfactory_direct.soap.decorators import normalize_fault_message
from addressfactory_direct.soap.envelope import RequestEnvelope, close_session_request
from tests.strategies import (
    XML_INVALID_CHARACTERS,
    address_values_strategy,
    blank_text_strategy,
    non_blank_text_strategy,
    person_values_strategy,
    record_id_strategy,
    record_request_strategy,
)

# =============================================================================
# RequestBuilder Property Tests
# =============================================================================


class TestRequestBuilderProperties:
    """Property tests for RequestBuilder."""

    @given(
        record_id=record_id_strategy(),
        person=person_values_strategy(),
        address=address_values_strategy(),
    )
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_create_round_trips_field_values(
        self, record_id: int, person: dict[str, str], address: dict[str, str]
    ) -> None:
        """Created records contain exactly the values that were set, unmodified."""
        record = (
            RequestBuilder()
            .set_metadata(record_id)
            .set_person(**person)
            .set_address(**address)
            .create()
        )

        assert record.record_id == record_id
        assert record.person is not None
        assert record.person.model_dump() == person
        assert record.address is not None
        assert record.address.model_dump() == address

    @given(person=person_values_strategy(), address=address_values_strategy())
    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    def test_create_twice_gives_equal_independent_records(
        self, person: dict[str, str], address: dict[str, str]
    ) -> None:
        builder = RequestBuilder().set_person(**person).set_address(**address)

        first = builder.create()
        second = builder.create()

        assert first == second
        assert first is not second

    @given(
        first=address_values_strategy(),
        second=address_values_strategy(),
    )
    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    def test_later_setter_calls_do_not_change_earlier_records(
        self, first: dict[str, str], second: dict[str, str]
    ) -> None:
        builder = RequestBuilder().set_address(**first)
        record = builder.create()

        builder.set_address(**second)

        assert record.address is not None
        assert record.address.model_dump() == first

    @given(
        blank=blank_text_strategy(),
        other=non_blank_text_strategy(),
        blank_first=st.booleans(),
    )
    @settings(max_examples=50)
    def test_blank_person_values_are_rejected(
        self, blank: str, other: str, blank_first: bool
    ) -> None:
        args = (blank, other) if blank_first else (other, blank)

        with pytest.raises(RequestValidationError) as exc_info:
            RequestBuilder().set_person(*args)

        assert exc_info.value.context is not None
        assert exc_info.value.context["field"] == ("first_name" if blank_first else "last_name")

    @given(
        prefix=non_blank_text_strategy(max_size=10),
        invalid=st.sampled_from(XML_INVALID_CHARACTERS),
    )
    @settings(max_examples=50)
    def test_values_xml_cannot_carry_are_rejected(self, prefix: str, invalid: str) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            RequestBuilder().set_person("Hans", prefix + invalid)

        assert exc_info.value.context is not None
        assert exc_info.value.context["field"] == "last_name"


# =============================================================================
# Result Correlation Property Tests
# =============================================================================


class TestCorrelationProperties:
    """Property tests for assigning returned matches to submitted records."""

    @given(
        records=st.lists(record_request_strategy(), min_size=1, max_size=10),
        data=st.data(),
    )
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_results_preserve_input_order_and_length(
        self, records: list[RecordRequest], data: st.DataObject
    ) -> None:
        matches = [AddressMatch(record_id=record.record_id) for record in records]
        shuffled = data.draw(st.permutations(matches))

        results = correlate(records, shuffled)

        assert len(results) == len(records)
        assert [result.request for result in results] == records

    @given(records=st.lists(record_request_strategy(with_id=True), min_size=1, max_size=10))
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_matches_follow_record_ids(self, records: list[RecordRequest]) -> None:
        matches = [AddressMatch(record_id=record.record_id) for record in reversed(records)]

        results = correlate(records, matches)

        for result in results:
            assert result.is_match
            assert all(match.record_id == result.record_id for match in result.matches)

    @given(records=st.lists(record_request_strategy(), min_size=1, max_size=10))
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_matches_without_id_follow_response_position(
        self, records: list[RecordRequest]
    ) -> None:
        matches = [AddressMatch(status_codes=(str(index),)) for index in range(len(records))]

        results = correlate(records, matches)

        for index, result in enumerate(results):
            assert result.matches == (matches[index],)

    @given(records=st.lists(record_request_strategy(), min_size=1, max_size=10))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    def test_empty_response_means_no_match_for_every_record(
        self, records: list[RecordRequest]
    ) -> None:
        results = correlate(records, [])

        assert len(results) == len(records)
        assert not any(result.is_match for result in results)


# =============================================================================
# Error Classification Property Tests
# =============================================================================


class _FaultingTransport:
    def __init__(self, fault: SoapFault) -> None:
        self.fault = fault
        self.last_request: str | None = None
        self.last_response: str | None = None

    def send(self, envelope: RequestEnvelope):
        raise self.fault


class TestErrorClassificationProperties:
    @given(message=st.text(max_size=60))
    @settings(max_examples=100)
    def test_auth_fault_codes_always_give_fixed_message(self, message: str) -> None:
        handler = ErrorHandlerDecorator(
            _FaultingTransport(SoapFault("wsse:FailedAuthentication", message))
        )

        with pytest.raises(AuthenticationException) as exc_info:
            handler.send(close_session_request("session-id"))

        assert str(exc_info.value) == AUTH_ERROR_MESSAGE

    @given(message=st.text(alphabet="0123456789 abcdefghijklmnopqrstuvwxyz.:", max_size=60))
    @settings(max_examples=100)
    def test_server_fault_message_is_preserved(self, message: str) -> None:
        if normalize_fault_message(message) in ErrorHandlerDecorator.AUTH_FAULT_MESSAGES:
            return
        handler = ErrorHandlerDecorator(_FaultingTransport(SoapFault("soap:Server", message)))

        with pytest.raises(ServiceException) as exc_info:
            handler.send(close_session_request("session-id"))

        assert not isinstance(exc_info.value, AuthenticationException)
        assert str(exc_info.value) == message
