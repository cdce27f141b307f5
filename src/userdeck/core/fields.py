"""Typed field access for user records.

Every field that filters, search and sort can look at is listed in
`UserField`. Resolution walks the dotted path one attribute at a time and
returns None as soon as a node is missing, so callers never deal with
AttributeError for absent embedded objects.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from userdeck.core.users import User


class UserField(str, Enum):
    """Closed set of resolvable user fields, as dotted attribute paths."""

    ID = "id"
    NAME = "name"
    USERNAME = "username"
    EMAIL = "email"
    PHONE = "phone"
    WEBSITE = "website"
    COMPANY_NAME = "company.name"
    COMPANY_CATCH_PHRASE = "company.catch_phrase"
    COMPANY_BS = "company.bs"
    ADDRESS_STREET = "address.street"
    ADDRESS_SUITE = "address.suite"
    ADDRESS_CITY = "address.city"
    ADDRESS_ZIPCODE = "address.zipcode"
    ADDRESS_GEO_LAT = "address.geo.lat"
    ADDRESS_GEO_LNG = "address.geo.lng"

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.value.split("."))

    @classmethod
    def parse(cls, text: str) -> UserField:
        """
        Parse a field name as typed by a user.

        Accepts the dotted attribute path in any case, and the payload
        spelling (`company.catchPhrase`).

        Raises:
            ValueError: If the name does not denote a known field.
        """
        wanted = text.strip().lower()
        for member in cls:
            if wanted in (member.value, member.value.replace("_", "")):
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown field '{text}'. Valid fields: {valid}")


def resolve_field(record: User, field: UserField) -> object | None:
    """Return the value at `field` in `record`, or None if any node is missing."""
    node: object | None = record
    for segment in field.segments:
        if node is None:
            return None
        node = getattr(node, segment, None)
    return node


def iter_field_values(record: User) -> Iterator[object]:
    """Yield every non-None field value of the record (flattened view)."""
    for field in UserField:
        value = resolve_field(record, field)
        if value is not None:
            yield value
