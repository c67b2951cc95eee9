"""Result classes for record verification.

The service returns one :class:`RecordResult` per submitted request, in the
order the requests were given. The remote service may return any number of
matches for a record, including none.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from addressfactory_direct.models.request import RecordRequest


class MatchedPerson(BaseModel):
    """Person data as returned by the remote service."""

    model_config = ConfigDict(frozen=True)

    first_name: str | None = None
    last_name: str | None = None


class MatchedAddress(BaseModel):
    """Corrected address as returned by the remote service."""

    model_config = ConfigDict(frozen=True)

    country: str | None = None
    postal_code: str | None = None
    city: str | None = None
    street: str | None = None
    house_number: str | None = None


class AddressMatch(BaseModel):
    """One result record from a getRecords response."""

    model_config = ConfigDict(frozen=True)

    record_id: int | None = None
    status_codes: tuple[str, ...] = ()
    person: MatchedPerson | None = None
    address: MatchedAddress | None = None


@dataclass
class RecordResult:
    """Verification result for one submitted record."""

    request: RecordRequest
    matches: tuple[AddressMatch, ...] = field(default_factory=tuple)

    @property
    def record_id(self) -> int | None:
        return self.request.record_id

    @property
    def is_match(self) -> bool:
        """Check if the service returned at least one match."""
        return bool(self.matches)

    @property
    def status_codes(self) -> list[str]:
        """All status codes over all matches, in response order."""
        return [code for match in self.matches for code in match.status_codes]
