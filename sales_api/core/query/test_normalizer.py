"""
Tests for filter normalization
"""

import pytest
from datetime import datetime

from sales_api.core.errors import FilterValidationError
from sales_api.core.query.normalizer import (
    escape_like,
    normalize_filters,
    parse_age,
    parse_calendar_date,
    parse_int,
    split_multi_value,
)
from sales_api.core.schemas.sales import SalesQuery


def test_split_multi_value_trims_and_drops_empty_tokens():
    assert split_multi_value(" North , ,South,, East ") == ["North", "South", "East"]
    assert split_multi_value(None) == []
    assert split_multi_value("") == []
    assert split_multi_value(" , ") == []


def test_empty_query_has_no_constraints():
    criteria = normalize_filters(SalesQuery())
    assert criteria.is_empty()


def test_multi_value_filters():
    query = SalesQuery(region="North,South", gender="Female", category="Books, Beauty", paymentMethod="UPI,Cash")
    criteria = normalize_filters(query)
    assert criteria.regions == ["North", "South"]
    assert criteria.genders == ["Female"]
    assert criteria.categories == ["Books", "Beauty"]
    assert criteria.payment_methods == ["UPI", "Cash"]
    assert not criteria.is_empty()


def test_parse_age_ignores_invalid_and_out_of_range_values():
    assert parse_age("42") == 42
    assert parse_age(" 0 ") == 0
    assert parse_age("150") == 150
    assert parse_age("200") is None
    assert parse_age("-1") is None
    assert parse_age("abc") is None
    assert parse_age("") is None
    assert parse_age(None) is None


def test_inverted_age_range_is_rejected():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_filters(SalesQuery(ageMin="50", ageMax="20"))
    assert exc_info.value.message == "Minimum age cannot be greater than maximum age"
    assert exc_info.value.status_code == 400


def test_out_of_range_age_bound_is_ignored_not_compared():
    criteria = normalize_filters(SalesQuery(ageMin="200", ageMax="40"))
    assert criteria.age_min is None
    assert criteria.age_max == 40


def test_age_alias_names_and_precedence():
    criteria = normalize_filters(SalesQuery(minAge="18", maxAge="30"))
    assert (criteria.age_min, criteria.age_max) == (18, 30)

    criteria = normalize_filters(SalesQuery(ageMin="20", minAge="25"))
    assert criteria.age_min == 20


def test_parse_calendar_date():
    assert parse_calendar_date("2024-01-05").isoformat() == "2024-01-05"
    assert parse_calendar_date("2024-01-05T15:30:00Z").isoformat() == "2024-01-05"
    assert parse_calendar_date("05/01/2024") is None
    assert parse_calendar_date("not-a-date") is None
    assert parse_calendar_date("  ") is None


def test_date_bounds_cover_whole_days():
    criteria = normalize_filters(SalesQuery(dateStart="2024-01-01", dateEnd="2024-01-05"))
    assert criteria.date_start == datetime(2024, 1, 1, 0, 0, 0)
    assert criteria.date_end == datetime(2024, 1, 5, 23, 59, 59, 999000)
    assert criteria.date_end >= datetime(2024, 1, 5, 20, 0, 0)


def test_same_day_range_is_valid():
    criteria = normalize_filters(SalesQuery(startDate="2024-03-01", endDate="2024-03-01"))
    assert criteria.date_start < criteria.date_end


def test_inverted_date_range_is_rejected():
    with pytest.raises(FilterValidationError) as exc_info:
        normalize_filters(SalesQuery(dateStart="2024-02-01", dateEnd="2024-01-01"))
    assert exc_info.value.message == "Start date cannot be after end date"


def test_invalid_date_bound_is_ignored():
    criteria = normalize_filters(SalesQuery(dateStart="garbage", dateEnd="2024-01-01"))
    assert criteria.date_start is None
    assert criteria.date_end == datetime(2024, 1, 1, 23, 59, 59, 999000)


def test_tag_list_is_capped():
    tags = ",".join(f"tag{i}" for i in range(60))
    criteria = normalize_filters(SalesQuery(tags=tags))
    assert len(criteria.tags) == 50
    assert criteria.tags[0] == "tag0"
    assert criteria.tags[-1] == "tag49"


def test_search_is_trimmed():
    assert normalize_filters(SalesQuery(search="  Priya ")).search == "Priya"
    assert normalize_filters(SalesQuery(search="   ")).search is None


def test_escape_like():
    assert escape_like("50%") == "50\\%"
    assert escape_like("a_b") == "a\\_b"
    assert escape_like("c:\\d") == "c:\\\\d"
    assert escape_like("Priya") == "Priya"


def test_parse_int_accepts_only_plain_decimal_digits():
    assert parse_int(" 25 ") == 25
    assert parse_int("-3") == -3
    assert parse_int("+7") == 7
    assert parse_int("2_5") is None
    assert parse_int("٢٥") is None
    assert parse_int("2.5") is None


def test_underscored_age_bound_is_ignored():
    criteria = normalize_filters(SalesQuery(ageMin="2_5"))
    assert criteria.age_min is None


def test_date_bound_with_offset_is_read_in_utc():
    assert parse_calendar_date("2024-01-05T23:00:00-05:00").isoformat() == "2024-01-06"
    assert parse_calendar_date("2024-01-06T02:00:00+05:30").isoformat() == "2024-01-05"
    assert parse_calendar_date("2024-01-05T23:00:00").isoformat() == "2024-01-05"
