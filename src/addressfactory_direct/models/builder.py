"""Request builder for programmatic record construction.

This module provides a fluent builder that accumulates record fields and
emits immutable :class:`RecordRequest` snapshots. Fields persist between
``create()`` calls, which makes it cheap to build a batch where only one
section changes per record.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import ValidationError

from addressfactory_direct.models.errors import PACKAGE_NAME, RequestValidationError
from addressfactory_direct.models.request import Address, Person, RecordRequest


class RequestBuilder:
    """Builder for :class:`RecordRequest` objects.

    Every setter validates its arguments immediately, so a record that could
    be rejected for missing data is never created.

    Example:
        >>> builder = RequestBuilder()
        >>> record = (
        ...     builder.set_metadata(1)
        ...     .set_person("Hans", "Mustermann")
        ...     .set_address("Deutschland", "53114", "Bonn", "Sträßchenweg", "10")
        ...     .create()
        ... )
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def set_metadata(self, record_id: int) -> Self:
        """Set the caller-supplied correlation id of the record."""
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise RequestValidationError(
                "request_validation",
                "Invalid value for field '{field}': must be an integer",
                {"package": PACKAGE_NAME, "field": "record_id", "value": repr(record_id)},
            )
        self._data["record_id"] = record_id
        return self

    def set_person(self, first_name: str, last_name: str) -> Self:
        """Set the given and family name of the addressee."""
        self._data["person"] = self._validate(
            Person, section="person", first_name=first_name, last_name=last_name
        )
        return self

    def set_address(
        self,
        country: str,
        postal_code: str,
        city: str,
        street: str,
        house_number: str,
    ) -> Self:
        """Set the postal address to verify."""
        self._data["address"] = self._validate(
            Address,
            section="address",
            country=country,
            postal_code=postal_code,
            city=city,
            street=street,
            house_number=house_number,
        )
        return self

    def create(self) -> RecordRequest:
        """Create a record from the current field values.

        Returns:
            A new immutable RecordRequest. Later setter calls do not affect it.
        """
        return RecordRequest(**self._data)

    def reset(self) -> Self:
        """Reset the builder to empty state."""
        self._data = {}
        return self

    @staticmethod
    def _validate(model: type[Person] | type[Address], *, section: str, **values: Any) -> Any:
        try:
            return model(**values)
        except ValidationError as exc:
            raise RequestValidationError.from_validation_error(
                exc, {"section": section}
            ) from exc
