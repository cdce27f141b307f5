"""User drafts and their validation.

The users fixture is read-only, so creating or editing a user never goes
over the network: a validated draft is turned into a local User record
that the caller can display.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable

from userdeck.core.users import Address, Company, User

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL_RE = re.compile(r"^(https?://)?[^\s/$.?#][^\s/]*\.[^\s]+$", re.IGNORECASE)


class DraftValidationError(ValueError):
    """Raised when a user draft fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class UserDraft:
    """Editable user fields, as entered in a create or edit form."""

    name: str
    username: str
    email: str
    phone: str = ""
    website: str = ""
    company_name: str = ""
    city: str = ""


def validate_draft(draft: UserDraft) -> list[str]:
    """Return the validation errors of a draft (empty when valid)."""
    errors: list[str] = []
    if not draft.name.strip():
        errors.append("Name is required")
    if not draft.username.strip():
        errors.append("Username is required")
    if not _EMAIL_RE.match(draft.email.strip()):
        errors.append("Invalid email")
    if draft.website and not _URL_RE.match(draft.website.strip()):
        errors.append("Invalid URL")
    return errors


def _check(draft: UserDraft) -> None:
    errors = validate_draft(draft)
    if errors:
        raise DraftValidationError(errors)


def create_user(draft: UserDraft, existing_ids: Iterable[int]) -> User:
    """
    Build a new local user from a draft.

    The id is one more than the highest existing id (1 for an empty
    collection), so it never collides with a fetched record.

    Raises:
        DraftValidationError: If the draft is invalid.
    """
    _check(draft)
    next_id = max(existing_ids, default=0) + 1
    return User(
        id=next_id,
        name=draft.name.strip(),
        username=draft.username.strip(),
        email=draft.email.strip(),
        phone=draft.phone,
        website=draft.website.strip(),
        address=Address(city=draft.city) if draft.city else None,
        company=Company(name=draft.company_name) if draft.company_name else None,
    )


def update_user(user: User, draft: UserDraft) -> User:
    """
    Return a copy of user with the draft's fields applied; the id is kept.

    Raises:
        DraftValidationError: If the draft is invalid.
    """
    _check(draft)
    company = user.company
    if draft.company_name:
        company = replace(company or Company(), name=draft.company_name)
    address = user.address
    if draft.city:
        address = replace(address or Address(), city=draft.city)
    return replace(
        user,
        name=draft.name.strip(),
        username=draft.username.strip(),
        email=draft.email.strip(),
        phone=draft.phone,
        website=draft.website.strip(),
        company=company,
        address=address,
    )


def draft_from_user(user: User) -> UserDraft:
    """Return a draft prefilled with the user's editable fields."""
    return UserDraft(
        name=user.name,
        username=user.username,
        email=user.email,
        phone=user.phone,
        website=user.website,
        company_name=user.company.name if user.company else "",
        city=user.address.city if user.address else "",
    )
