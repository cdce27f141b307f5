"""User filter abstractions and implementations.

This module defines the filter system used to decide whether a user record
belongs in a list view. Filters encapsulate matching logic and can be
composed using logical operators (AND / OR) to express column filter sets.

Filters are pure, side-effect-free objects and never raise on a record:
a field that cannot be resolved simply makes the filter not match.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from userdeck.core.fields import UserField, iter_field_values, resolve_field
from userdeck.core.users import User


class FilterOperator(str, Enum):
    """
    Comparison operators available to column filters.

    Values:
        CONTAINS: Case-insensitive substring test.
        EQUALS: Case-insensitive string equality.
        STARTS_WITH: Case-insensitive prefix test.
        ENDS_WITH: Case-insensitive suffix test.
        GREATER_THAN: Raw value comparison.
        LESS_THAN: Raw value comparison.
    """

    CONTAINS = "contains"
    EQUALS = "equals"
    STARTS_WITH = "starts-with"
    ENDS_WITH = "ends-with"
    GREATER_THAN = ">"
    LESS_THAN = "<"

    @classmethod
    def parse(cls, text: str) -> FilterOperator:
        """
        Parse an operator name, accepting the common aliases.

        Raises:
            ValueError: If the operator is unknown.
        """
        key = text.strip().lower().replace("_", "-")
        found = _OPERATOR_ALIASES.get(key)
        if found is None:
            valid = ", ".join(op.value for op in cls)
            raise ValueError(f"Unknown operator '{text}'. Valid operators: {valid}")
        return found


_OPERATOR_ALIASES: dict[str, FilterOperator] = {
    "contains": FilterOperator.CONTAINS,
    "~": FilterOperator.CONTAINS,
    "equals": FilterOperator.EQUALS,
    "eq": FilterOperator.EQUALS,
    "=": FilterOperator.EQUALS,
    "starts-with": FilterOperator.STARTS_WITH,
    "startswith": FilterOperator.STARTS_WITH,
    "ends-with": FilterOperator.ENDS_WITH,
    "endswith": FilterOperator.ENDS_WITH,
    ">": FilterOperator.GREATER_THAN,
    "gt": FilterOperator.GREATER_THAN,
    "<": FilterOperator.LESS_THAN,
    "lt": FilterOperator.LESS_THAN,
}


def _as_text(value: object) -> str:
    return str(value).lower()


class RecordFilter(ABC):
    """
    Abstract base class for all user filters.

    A RecordFilter encapsulates a single piece of matching logic that
    determines whether a given User satisfies a specific criterion.
    """

    @abstractmethod
    def matches(self, record: User) -> bool:
        """
        Determine whether the given record matches this filter.

        Args:
            record: User instance to evaluate.

        Returns:
            True if the record matches the filter criteria, False otherwise.
        """
        ...


class FieldFilter(RecordFilter):
    """
    Column-scoped filter comparing one field of the record to a value.

    Instances compare equal when field, operator and value are equal, so a
    tuple of them can serve as a memoization key.
    """

    def __init__(self, field: UserField, operator: FilterOperator, value: object):
        """
        Create a field filter.

        Args:
            field: Field the filter applies to.
            operator: Comparison operator.
            value: Value to compare the resolved field value with.
        """
        self.field = field
        self.operator = operator
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldFilter):
            return NotImplemented
        return (self.field, self.operator, self.value) == (
            other.field,
            other.operator,
            other.value,
        )

    def __hash__(self) -> int:
        return hash((self.field, self.operator))

    def __repr__(self) -> str:
        return f"FieldFilter({self.field.value!r}, {self.operator.value!r}, {self.value!r})"

    def matches(self, record: User) -> bool:
        """
        Check whether the resolved field value satisfies the operator.

        A filter without a value is inactive and matches every record.
        Otherwise a missing field (unresolvable path) never matches.
        """
        if self.value is None:
            return True
        actual = resolve_field(record, self.field)
        if actual is None:
            return False

        op = self.operator
        if op is FilterOperator.GREATER_THAN or op is FilterOperator.LESS_THAN:
            return self._compare(actual)

        actual_text = _as_text(actual)
        wanted_text = _as_text(self.value)
        if op is FilterOperator.CONTAINS:
            return wanted_text in actual_text
        if op is FilterOperator.EQUALS:
            return actual_text == wanted_text
        if op is FilterOperator.STARTS_WITH:
            return actual_text.startswith(wanted_text)
        if op is FilterOperator.ENDS_WITH:
            return actual_text.endswith(wanted_text)
        return False

    def _compare(self, actual: object) -> bool:
        """Order raw values; values that cannot be ordered do not match."""
        wanted = self.value
        if isinstance(actual, (int, float)) and isinstance(wanted, str):
            try:
                wanted = type(actual)(wanted.strip())
            except ValueError:
                return False
        try:
            if self.operator is FilterOperator.GREATER_THAN:
                return actual > wanted  # type: ignore[operator]
            return actual < wanted  # type: ignore[operator]
        except TypeError:
            return False


class SearchFilter(RecordFilter):
    """
    Free-text filter matching a term against every field of the record.
    """

    def __init__(self, term: str):
        """
        Create a global search filter.

        Args:
            term: Text to look for, case-insensitively. Empty matches all.
        """
        self.term = term
        self._needle = term.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchFilter):
            return NotImplemented
        return self.term == other.term

    def __hash__(self) -> int:
        return hash(self.term)

    def __repr__(self) -> str:
        return f"SearchFilter({self.term!r})"

    def matches(self, record: User) -> bool:
        """
        Check whether any stringified field value contains the search term.
        """
        if not self._needle:
            return True
        return any(self._needle in _as_text(v) for v in iter_field_values(record))


class _CompositeFilter(RecordFilter):
    """Shared value semantics of the AND / OR composites."""

    def __init__(self, filters: list[RecordFilter]):
        self.filters = filters

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _CompositeFilter) or type(other) is not type(self):
            return NotImplemented
        return list(self.filters) == list(other.filters)

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self.filters)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.filters)!r})"


class AndFilter(_CompositeFilter):
    """
    Composite filter that matches a record only if all child filters match.
    """

    def __init__(self, filters: list[RecordFilter]):
        """
        Create a logical AND filter.

        Args:
            filters: List of filters that must all match.
        """
        super().__init__(filters)

    def matches(self, record: User) -> bool:
        """
        Check whether all child filters match the record.
        """
        return all(f.matches(record) for f in self.filters)


class OrFilter(_CompositeFilter):
    """
    Composite filter that matches a record if any child filter matches.
    """

    def __init__(self, filters: list[RecordFilter]):
        """
        Create a logical OR filter.

        Args:
            filters: List of filters where at least one must match.
        """
        super().__init__(filters)

    def matches(self, record: User) -> bool:
        """
        Check whether any child filter matches the record.
        """
        return any(f.matches(record) for f in self.filters)
