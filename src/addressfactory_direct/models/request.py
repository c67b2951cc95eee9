"""Request models describing one address verification query.

All models are frozen: once a :class:`RecordRequest` has been created it can
be shared freely without being affected by later builder calls.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


# Characters XML 1.0 cannot carry; tab, newline and carriage return are allowed.
_NON_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    if _NON_XML_CHARS.search(value):
        raise ValueError("must not contain control characters")
    return value


# Stored verbatim; rejected when blank or not representable in XML.
RequiredText = Annotated[str, Field(strict=True), AfterValidator(_not_blank)]


class Person(BaseModel):
    """Name of the person living at the address."""

    model_config = ConfigDict(frozen=True)

    first_name: RequiredText
    last_name: RequiredText


class Address(BaseModel):
    """Postal address to verify."""

    model_config = ConfigDict(frozen=True)

    country: RequiredText
    postal_code: RequiredText
    city: RequiredText
    street: RequiredText
    house_number: RequiredText


class RecordRequest(BaseModel):
    """One record submitted for verification.

    ``record_id`` is the caller's correlation id; results returned by the
    service are matched back to requests through it.
    """

    model_config = ConfigDict(frozen=True)

    record_id: Annotated[int, Field(strict=True)] | None = None
    person: Person | None = None
    address: Address | None = None
