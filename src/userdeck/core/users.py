"""Core user domain models plus collection loading logic.

This module defines the user record structures (User, Address, Company, Geo)
as returned by the JSONPlaceholder users fixture, together with the adapter
interface used to fetch them. It is intentionally free of CLI concerns and
of any HTTP client types so it can be reused by different frontends
(CLI, automation, tests).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when the upstream users source cannot be read."""


@dataclass(frozen=True)
class Geo:
    """Geographic coordinates of an address, kept as the strings the API sends."""

    lat: str = ""
    lng: str = ""


@dataclass(frozen=True)
class Address:
    """Postal address embedded in a user record."""

    street: str = ""
    suite: str = ""
    city: str = ""
    zipcode: str = ""
    geo: Geo | None = None


@dataclass(frozen=True)
class Company:
    """Company embedded in a user record."""

    name: str = ""
    catch_phrase: str = ""
    bs: str = ""


@dataclass(frozen=True)
class User:
    """
    Represents a single user record.

    Attributes:
        id: Unique, immutable identifier of the user.
        name: Display name.
        username: Login-style handle.
        email: Contact email address.
        phone: Free-form phone number.
        website: Website host or URL.
        address: Embedded address, None when the payload has none.
        company: Embedded company, None when the payload has none.
    """

    id: int
    name: str = ""
    username: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    address: Address | None = None
    company: Company | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> User:
        """
        Build a User from a JSONPlaceholder-shaped mapping.

        Raises:
            ValueError: If the payload has no integer `id`.
        """
        raw_id = payload.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"User payload has no integer id: {raw_id!r}")

        address = None
        raw_address = payload.get("address")
        if isinstance(raw_address, Mapping):
            raw_geo = raw_address.get("geo")
            geo = None
            if isinstance(raw_geo, Mapping):
                geo = Geo(
                    lat=str(raw_geo.get("lat") or ""),
                    lng=str(raw_geo.get("lng") or ""),
                )
            address = Address(
                street=str(raw_address.get("street") or ""),
                suite=str(raw_address.get("suite") or ""),
                city=str(raw_address.get("city") or ""),
                zipcode=str(raw_address.get("zipcode") or ""),
                geo=geo,
            )

        company = None
        raw_company = payload.get("company")
        if isinstance(raw_company, Mapping):
            company = Company(
                name=str(raw_company.get("name") or ""),
                catch_phrase=str(raw_company.get("catchPhrase") or ""),
                bs=str(raw_company.get("bs") or ""),
            )

        return cls(
            id=raw_id,
            name=str(payload.get("name") or ""),
            username=str(payload.get("username") or ""),
            email=str(payload.get("email") or ""),
            phone=str(payload.get("phone") or ""),
            website=str(payload.get("website") or ""),
            address=address,
            company=company,
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-shaped representation of this user."""
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
        }
        if self.address is not None:
            payload["address"] = {
                "street": self.address.street,
                "suite": self.address.suite,
                "city": self.address.city,
                "zipcode": self.address.zipcode,
            }
            if self.address.geo is not None:
                payload["address"]["geo"] = {
                    "lat": self.address.geo.lat,
                    "lng": self.address.geo.lng,
                }
        if self.company is not None:
            payload["company"] = {
                "name": self.company.name,
                "catchPhrase": self.company.catch_phrase,
                "bs": self.company.bs,
            }
        return payload


@dataclass(frozen=True)
class UsersSnapshot:
    """
    Result of one fetch of the users collection.

    Attributes:
        users: The fetched collection, empty when the fetch failed.
        is_error: True if the fetch failed.
        error: Human-readable failure message, None on success.
    """

    users: list[User]
    is_error: bool = False
    error: str | None = None


class UsersAdapter(Protocol):
    """Interface for user lookup operations used by the core domain."""

    def fetch_all_users(self) -> list[User]:
        """Return every user from the data source, in source order."""
        ...

    def fetch_user(self, user_id: int) -> User:
        """Return a single user by id."""
        ...


def load_users(adapter: UsersAdapter) -> UsersSnapshot:
    """
    Fetch the full users collection and fold failures into a snapshot.

    A failed fetch never raises here: it yields an empty collection with the
    error flag set so callers can show an error banner and offer a retry.
    Retrying is simply calling this function again.

    Args:
        adapter: Users adapter used to reach the data source.

    Returns:
        A UsersSnapshot with either the users or the error message.
    """
    try:
        users = adapter.fetch_all_users()
    except FetchError as exc:
        logger.warning("Fetching users failed: %s", exc)
        return UsersSnapshot(users=[], is_error=True, error=str(exc))
    logger.debug("Loaded %d users", len(users))
    return UsersSnapshot(users=users)
