"""In-memory query processing for user collections.

List views never ask the data source for filtered or sorted pages: they
fetch the whole collection once and derive what to show from it here.
A query runs in three steps, always in this order:

  1) global search (any field contains the term, case-insensitively)
  2) column filters (every filter must match)
  3) single-key sort (stable, None values last in both directions)

The functions in this module are pure. They never mutate their input and
only ever return records taken from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from userdeck.core.fields import UserField, resolve_field
from userdeck.core.filters import AndFilter, RecordFilter, SearchFilter
from userdeck.core.users import User

logger = logging.getLogger(__name__)


class SortDirection(str, Enum):
    """Sort direction of a sort key."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortKey:
    """A field to sort by and the direction to sort in."""

    field: UserField
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class Query:
    """
    Declarative description of a list view.

    Attributes:
        filters: Column filters, combined with logical AND.
        search: Global search term; empty disables search.
        sort: Sort keys; only the first one is applied.
    """

    filters: tuple[RecordFilter, ...] = ()
    search: str = ""
    sort: tuple[SortKey, ...] = ()


@dataclass(frozen=True)
class Page:
    """One page of a query result plus the total number of matches."""

    items: list[User]
    item_count: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        return max((self.item_count + self.page_size - 1) // self.page_size, 1)


def _ordering_key(value: object) -> tuple[int, object]:
    """
    Map a non-None field value onto a totally ordered key.

    Numbers sort numerically and before strings, strings sort by their
    casefolded form, anything else by its string representation.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    if isinstance(value, str):
        return (1, value.casefold())
    return (2, str(value).casefold())


def sort_records(records: Sequence[User], key: SortKey) -> list[User]:
    """
    Stable-sort records by a single field.

    Records whose field resolves to None are placed after all others in
    their original relative order, for both directions. Records with equal
    keys keep their relative order too.
    """
    present: list[tuple[tuple[int, object], User]] = []
    missing: list[User] = []
    for record in records:
        value = resolve_field(record, key.field)
        if value is None:
            missing.append(record)
        else:
            present.append((_ordering_key(value), record))

    # list.sort stays stable with reverse=True
    present.sort(key=lambda pair: pair[0], reverse=key.direction is SortDirection.DESC)
    return [record for _, record in present] + missing


def apply_query(
    collection: Sequence[User],
    filters: Sequence[RecordFilter] = (),
    search_term: str = "",
    sort: Sequence[SortKey] = (),
) -> list[User]:
    """
    Derive the records a list view should display.

    Args:
        collection: Full user collection, in source order.
        filters: Column filters; a record must match all of them.
        search_term: Global search term; empty keeps every record.
        sort: Sort keys; only the first entry is honored.

    Returns:
        A new list holding the matching records in display order.
    """
    result = list(collection)

    if search_term:
        search = SearchFilter(search_term)
        result = [r for r in result if search.matches(r)]

    if filters:
        combined = AndFilter(list(filters))
        result = [r for r in result if combined.matches(r)]

    if sort:
        result = sort_records(result, sort[0])

    return result


def paginate(records: Sequence[User], page: int, page_size: int) -> Page:
    """
    Slice a query result into a page.

    Args:
        records: Records in display order.
        page: Zero-based page index.
        page_size: Number of records per page.

    Raises:
        ValueError: If page is negative or page_size is smaller than 1.
    """
    if page < 0:
        raise ValueError("page must be >= 0")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    start = page * page_size
    return Page(
        items=list(records[start : start + page_size]),
        item_count=len(records),
        page=page,
        page_size=page_size,
    )


class QueryProcessor:
    """
    Memoizing front to `apply_query`.

    `run` only recomputes when the collection contents or the query differ
    from the previous call, so a driving loop can call it on every event.
    """

    def __init__(self) -> None:
        self._last_input: tuple[tuple[User, ...], Query] | None = None
        self._last_result: list[User] = []
        self.recomputations = 0

    def run(self, collection: Sequence[User], query: Query) -> list[User]:
        """Return the query result, reusing the previous one when inputs match."""
        current = (tuple(collection), query)
        if self._last_input is not None and self._last_input == current:
            return list(self._last_result)

        self._last_result = apply_query(
            collection,
            filters=query.filters,
            search_term=query.search,
            sort=query.sort,
        )
        self._last_input = current
        self.recomputations += 1
        logger.debug(
            "Query recomputed: %d of %d records", len(self._last_result), len(collection)
        )
        return list(self._last_result)

    def invalidate(self) -> None:
        """Forget the memoized result."""
        self._last_input = None
        self._last_result = []
