import pytest

from userdeck.core.fields import UserField
from userdeck.core.filters import (
    AndFilter,
    FieldFilter,
    FilterOperator,
    OrFilter,
    SearchFilter,
)
from userdeck.core.users import Company, User


def test_contains_filter_is_case_insensitive():
    user = User(id=1, name="Leanne Graham")
    f = FieldFilter(UserField.NAME, FilterOperator.CONTAINS, "GRAHAM")

    assert f.matches(user) is True


@pytest.mark.parametrize(
    ("operator", "value", "expected"),
    [
        (FilterOperator.EQUALS, "leanne graham", True),
        (FilterOperator.EQUALS, "leanne", False),
        (FilterOperator.STARTS_WITH, "lea", True),
        (FilterOperator.STARTS_WITH, "gra", False),
        (FilterOperator.ENDS_WITH, "HAM", True),
        (FilterOperator.ENDS_WITH, "lea", False),
    ],
)
def test_string_operators(operator, value, expected):
    user = User(id=1, name="Leanne Graham")

    assert FieldFilter(UserField.NAME, operator, value).matches(user) is expected


def test_dotted_path_filter_matches_nested_value():
    user = User(id=1, company=Company(name="Romaguera-Crona"))
    f = FieldFilter(UserField.COMPANY_NAME, FilterOperator.EQUALS, "Romaguera-Crona")

    assert f.matches(user) is True


def test_dotted_path_filter_excludes_missing_intermediate():
    user = User(id=1, company=None)
    f = FieldFilter(UserField.COMPANY_NAME, FilterOperator.CONTAINS, "")

    assert f.matches(user) is False


def test_greater_and_less_than_compare_raw_numbers():
    user = User(id=7)

    assert FieldFilter(UserField.ID, FilterOperator.GREATER_THAN, 5).matches(user)
    assert not FieldFilter(UserField.ID, FilterOperator.LESS_THAN, 5).matches(user)
    # 7 > 10 is False numerically even though "7" > "10" as strings
    assert not FieldFilter(UserField.ID, FilterOperator.GREATER_THAN, "10").matches(user)


def test_ordering_operator_with_unorderable_value_does_not_match():
    user = User(id=7)

    assert FieldFilter(UserField.ID, FilterOperator.GREATER_THAN, "abc").matches(user) is False
    assert FieldFilter(UserField.NAME, FilterOperator.LESS_THAN, 3).matches(
        User(id=1, name="Ann")
    ) is False


@pytest.mark.parametrize("operator", list(FilterOperator))
def test_filter_without_value_is_inactive(operator):
    named = User(id=1, name="Ann")
    unnamed = User(id=2, company=None)

    assert FieldFilter(UserField.NAME, operator, None).matches(named) is True
    assert FieldFilter(UserField.COMPANY_NAME, operator, None).matches(unnamed) is True
    assert FieldFilter(UserField.NAME, FilterOperator.CONTAINS, None).matches(
        User(id=3, name="None Such")
    ) is True


def test_search_filter_stringifies_numbers_and_nested_values():
    user = User(id=42, name="Ann", company=Company(name="Acme"))

    assert SearchFilter("42").matches(user) is True
    assert SearchFilter("acm").matches(user) is True
    assert SearchFilter("zzz").matches(user) is False
    assert SearchFilter("").matches(user) is True


def test_and_or_filters():
    user = User(id=4, name="Ann", email="ann@example.com")

    name_f = FieldFilter(UserField.NAME, FilterOperator.EQUALS, "ann")
    email_f = FieldFilter(UserField.EMAIL, FilterOperator.ENDS_WITH, ".com")
    other_f = FieldFilter(UserField.NAME, FilterOperator.EQUALS, "bob")

    assert AndFilter([name_f, email_f]).matches(user) is True
    assert AndFilter([name_f, other_f]).matches(user) is False
    assert OrFilter([other_f, email_f]).matches(user) is True
    assert AndFilter([]).matches(user) is True


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("contains", FilterOperator.CONTAINS),
        ("startsWith", FilterOperator.STARTS_WITH),
        ("ends_with", FilterOperator.ENDS_WITH),
        ("eq", FilterOperator.EQUALS),
        ("gt", FilterOperator.GREATER_THAN),
        ("<", FilterOperator.LESS_THAN),
    ],
)
def test_operator_parse_accepts_aliases(text, expected):
    assert FilterOperator.parse(text) is expected


def test_operator_parse_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown operator"):
        FilterOperator.parse("like")


def test_field_filters_compare_by_value():
    a = FieldFilter(UserField.NAME, FilterOperator.CONTAINS, "x")
    b = FieldFilter(UserField.NAME, FilterOperator.CONTAINS, "x")

    assert a == b
    assert hash(a) == hash(b)
    assert a != FieldFilter(UserField.NAME, FilterOperator.CONTAINS, "y")


def test_search_and_composite_filters_compare_by_value():
    name_f = FieldFilter(UserField.NAME, FilterOperator.CONTAINS, "a")
    email_f = FieldFilter(UserField.EMAIL, FilterOperator.CONTAINS, "b")

    assert SearchFilter("ann") == SearchFilter("ann")
    assert hash(SearchFilter("ann")) == hash(SearchFilter("ann"))
    assert SearchFilter("ann") != SearchFilter("bob")

    assert OrFilter([name_f, email_f]) == OrFilter([name_f, email_f])
    assert hash(OrFilter([name_f, email_f])) == hash(OrFilter([name_f, email_f]))
    assert OrFilter([name_f, email_f]) != OrFilter([email_f, name_f])
    assert OrFilter([name_f]) != AndFilter([name_f])
    assert AndFilter([name_f]) == AndFilter([name_f])
