from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import cast

from addressfactory_direct.models import (
    AddressMatch,
    RecordRequest,
    RecordResult,
    SessionState,
)
from addressfactory_direct.protocols import TransportProtocol
from addressfactory_direct.soap.envelope import (
    Credentials,
    close_session_request,
    get_records_request,
    open_session_request,
    parse_matches,
    parse_session_id,
)

logger = logging.getLogger(__name__)


class AddressVerificationService:
    """Session-level API of the address verification web service.

    A session is opened with user credentials, used for any number of
    record submissions, and closed again. All calls go through the
    decorated transport built by the service factory; errors raised there
    propagate unchanged.

    Example:
        >>> service = SoapServiceFactory().create_address_verification_service()
        >>> with service.session("user", "password") as session_id:
        ...     results = service.get_records(session_id, [record])
    """

    def __init__(self, transport: TransportProtocol) -> None:
        self._transport = transport
        self.state = SessionState.UNOPENED
        self.session_id: str | None = None

    def open_session(
        self,
        username: str,
        password: str,
        config_name: str | None = None,
        client_id: str | None = None,
    ) -> str:
        """Open a session and return its server-issued id.

        Raises:
            AuthenticationException: If the credentials are rejected.
            ServiceException: On any other fault, or when no session id is returned.
        """
        response = self._transport.send(
            open_session_request(Credentials(username, password), config_name, client_id)
        )

        # ErrorHandlerDecorator rejects openSession responses without one
        session_id = cast(str, parse_session_id(response))

        self.session_id = session_id
        self.state = SessionState.OPEN
        logger.debug("Opened session %s", session_id)
        return session_id

    def get_records(
        self,
        session_id: str,
        records: Sequence[RecordRequest],
        config_name: str | None = None,
        client_id: str | None = None,
    ) -> list[RecordResult]:
        """Submit records for verification within a session.

        Args:
            session_id: Id returned by :meth:`open_session`.
            records: One or more records to verify.
            config_name: Optional server-side configuration to apply.
            client_id: Optional client identifier.

        Returns:
            One RecordResult per submitted record, in input order. Records
            without a match have an empty ``matches`` tuple.

        Raises:
            AuthenticationException: If the session id is invalid or expired.
            ServiceException: On any other fault.
        """
        if not records:
            raise ValueError("At least one record is required.")

        response = self._transport.send(
            get_records_request(session_id, records, config_name, client_id)
        )
        return correlate(records, parse_matches(response))

    def close_session(self, session_id: str) -> None:
        """Close a session.

        The server answers with an empty response whether or not the session
        exists; the call can still fail with an authentication or server error.
        """
        self._transport.send(close_session_request(session_id))

        if session_id == self.session_id:
            self.state = SessionState.CLOSED
            self.session_id = None
        logger.debug("Closed session %s", session_id)

    @contextmanager
    def session(
        self,
        username: str,
        password: str,
        config_name: str | None = None,
        client_id: str | None = None,
    ) -> Iterator[str]:
        """Open a session for the duration of a ``with`` block."""
        session_id = self.open_session(username, password, config_name, client_id)
        try:
            yield session_id
        finally:
            self.close_session(session_id)


def correlate(
    records: Sequence[RecordRequest], matches: Sequence[AddressMatch]
) -> list[RecordResult]:
    """Assign returned matches to the submitted records.

    A match whose record id belongs to a submitted record goes to that
    record. Any other match, with no id or with an id nobody submitted, goes
    to the record at the same position as the match in the response.
    """
    known_ids = {record.record_id for record in records if record.record_id is not None}
    by_id: dict[int, list[AddressMatch]] = defaultdict(list)
    by_position: dict[int, list[AddressMatch]] = defaultdict(list)
    for position, match in enumerate(matches):
        if match.record_id in known_ids:
            by_id[match.record_id].append(match)
        elif position < len(records):
            by_position[position].append(match)
        else:
            logger.warning(
                "Dropping result record %d (record id %s): no matching request",
                position,
                match.record_id,
            )

    results = []
    for position, record in enumerate(records):
        found = by_position.get(position, [])
        if record.record_id is not None:
            found = by_id.get(record.record_id, []) + found
        results.append(RecordResult(request=record, matches=tuple(found)))
    return results
