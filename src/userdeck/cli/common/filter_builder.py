"""Query construction utilities.

This module translates user intent (CLI arguments) into a concrete Query.
It centralizes validation and composition logic for filters and sort keys,
so commands only ever deal with a single, well-defined Query object.
"""

from typing import Iterable

from userdeck.core.fields import UserField
from userdeck.core.filters import FieldFilter, FilterOperator, OrFilter, RecordFilter
from userdeck.core.query import Query, SortDirection, SortKey


def parse_filter(expr: str) -> FieldFilter:
    """
    Parse a single filter expression.

    Accepted forms are `field:operator:value` and `field:value`, the latter
    meaning `contains`. The value may itself contain colons.

    Raises:
        ValueError: If the expression, field or operator is invalid.
    """
    parts = expr.split(":", 2)
    if len(parts) == 2:
        field_text, value = parts
        operator = FilterOperator.CONTAINS
    elif len(parts) == 3:
        field_text, op_text, value = parts
        operator = FilterOperator.parse(op_text)
    else:
        raise ValueError(
            f"Invalid filter '{expr}' (expected field:operator:value or field:value)"
        )
    if not field_text.strip():
        raise ValueError(f"Invalid filter '{expr}' (missing field)")
    return FieldFilter(UserField.parse(field_text), operator, value)


def build_query(
    *,
    filters: Iterable[str],
    search: str,
    sort: str | None,
    desc: bool,
    use_or: bool = False,
) -> Query:
    """
    Build a Query from user-provided criteria.

    Args:
        filters: Filter expressions, see `parse_filter`.
        search: Global search term.
        sort: Optional field to sort by.
        desc: Sort descending instead of ascending.
        use_or: Combine column filters with OR instead of AND.

    Returns:
        A Query describing the requested list view.

    Raises:
        ValueError: If a filter or the sort field is invalid, or --desc is
                    given without --sort.
    """
    parsed: list[RecordFilter] = [parse_filter(expr) for expr in filters]
    if use_or and len(parsed) > 1:
        parsed = [OrFilter(parsed)]

    sort_keys: tuple[SortKey, ...] = ()
    if sort:
        direction = SortDirection.DESC if desc else SortDirection.ASC
        sort_keys = (SortKey(UserField.parse(sort), direction),)
    elif desc:
        raise ValueError("--desc requires --sort")

    return Query(filters=tuple(parsed), search=search, sort=sort_keys)
