import pytest

from userdeck.cli.common.filter_builder import build_query, parse_filter
from userdeck.core.fields import UserField
from userdeck.core.filters import FieldFilter, FilterOperator, OrFilter
from userdeck.core.query import SortDirection, SortKey


def test_parse_filter_with_operator():
    assert parse_filter("company.name:starts-with:Rom") == FieldFilter(
        UserField.COMPANY_NAME, FilterOperator.STARTS_WITH, "Rom"
    )


def test_parse_filter_defaults_to_contains_and_keeps_colons_in_value():
    assert parse_filter("website:http") == FieldFilter(
        UserField.WEBSITE, FilterOperator.CONTAINS, "http"
    )
    assert parse_filter("website:contains:http://x").value == "http://x"


@pytest.mark.parametrize("expr", ["name", ":contains:x", "nope:x", "name:like:x"])
def test_parse_filter_rejects_invalid_input(expr):
    with pytest.raises(ValueError):
        parse_filter(expr)


def test_build_query_sort_and_search():
    query = build_query(filters=[], search="ann", sort="name", desc=True)

    assert query.search == "ann"
    assert query.filters == ()
    assert query.sort == (SortKey(UserField.NAME, SortDirection.DESC),)


def test_build_query_combines_filters_with_or():
    and_query = build_query(
        filters=["name:a", "email:b"], search="", sort=None, desc=False
    )
    or_query = build_query(
        filters=["name:a", "email:b"], search="", sort=None, desc=False, use_or=True
    )

    assert len(and_query.filters) == 2
    assert len(or_query.filters) == 1
    assert isinstance(or_query.filters[0], OrFilter)


def test_build_query_desc_without_sort():
    with pytest.raises(ValueError, match="--desc requires --sort"):
        build_query(filters=[], search="", sort=None, desc=True)
