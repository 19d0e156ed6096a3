# run with: pytest tests/test_filtering.py -v

from datetime import datetime

import pytest

from ttdbazaar.catalog.filtering import (
    ALL_CATEGORIES,
    CatalogItem,
    Criteria,
    available_categories,
    filter_and_sort,
    filter_products,
    paginate,
    parse_price_bound,
    resolve_sort_key,
    sort_products,
)
from ttdbazaar.catalog.sample_data import DEFAULT_CATEGORIES, SAMPLE_PRODUCTS


def item(id, price, category="A", **kw):
    kw.setdefault("name", f"Item {id}")
    kw.setdefault("description", "")
    return CatalogItem(id=str(id), price=price, category=category, **kw)


@pytest.fixture()
def abc():
    return [item(1, 100, "A"), item(2, 50, "B"), item(3, 75, "A")]


# FILTER-001: empty criteria and no-op sort is identity
def test_identity_with_empty_criteria():
    result = filter_and_sort(SAMPLE_PRODUCTS, Criteria(), "relevance")
    assert result == list(SAMPLE_PRODUCTS)
    assert filter_and_sort(SAMPLE_PRODUCTS) == list(SAMPLE_PRODUCTS)


# FILTER-002: the worked example
def test_category_and_price_ascending(abc):
    result = filter_and_sort(abc, Criteria(category="A"), "price-asc")
    assert [p.price for p in result] == [75, 100]


# FILTER-003: category filter only returns that category, subset of unfiltered
def test_category_filter_is_subset():
    everything = filter_and_sort(SAMPLE_PRODUCTS, Criteria(), "relevance")
    devotional = filter_and_sort(SAMPLE_PRODUCTS, Criteria(category="Devotional Items"), "relevance")
    assert [p.id for p in devotional] == ["1", "6"]
    assert all(p.category == "Devotional Items" for p in devotional)
    assert all(p in everything for p in devotional)


@pytest.mark.parametrize("category", [None, "", "All", "all", "  "])
def test_category_sentinel_means_no_restriction(category):
    assert len(filter_products(SAMPLE_PRODUCTS, Criteria(category=category))) == len(SAMPLE_PRODUCTS)


# FILTER-004: text search is case-insensitive over name or description
def test_text_query_matches_name_or_description():
    by_name = filter_products(SAMPLE_PRODUCTS, Criteria(query="BRASS temple"))
    assert [p.id for p in by_name] == ["3"]

    by_description = filter_products(SAMPLE_PRODUCTS, Criteria(query="meditation"))
    assert [p.id for p in by_description] == ["1", "6"]

    assert filter_products(SAMPLE_PRODUCTS, Criteria(query="   ")) == list(SAMPLE_PRODUCTS)


# FILTER-005: price bounds are inclusive
def test_price_bounds_inclusive(abc):
    result = filter_products(abc, Criteria(min_price=75, max_price=100))
    assert [p.id for p in result] == ["1", "3"]


# FILTER-006: malformed min price behaves like no bound
def test_malformed_price_bound_is_ignored(abc):
    assert filter_products(abc, Criteria(min_price="abc")) == filter_products(abc, Criteria())
    from_params = Criteria.from_params({"min_price": "abc", "max_price": "80"})
    assert from_params.min_price is None
    assert [p.id for p in filter_products(abc, from_params)] == ["2", "3"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("  ", None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        (True, None),
        ("12", 12.0),
        (" 12.5 ", 12.5),
        (7, 7.0),
    ],
)
def test_parse_price_bound(raw, expected):
    assert parse_price_bound(raw) == expected


# FILTER-007: sort orders
def test_price_sorts_are_monotonic():
    asc = sort_products(SAMPLE_PRODUCTS, "price-asc")
    desc = sort_products(SAMPLE_PRODUCTS, "price-desc")
    assert all(a.price <= b.price for a, b in zip(asc, asc[1:]))
    assert all(a.price >= b.price for a, b in zip(desc, desc[1:]))


def test_sort_is_stable_for_ties():
    items = [item(1, 10), item(2, 5), item(3, 10), item(4, 5)]
    assert [p.id for p in sort_products(items, "price-asc")] == ["2", "4", "1", "3"]
    assert [p.id for p in sort_products(items, "price-desc")] == ["1", "3", "2", "4"]


def test_rating_newest_and_featured_sorts():
    assert sort_products(SAMPLE_PRODUCTS, "rating")[0].id == "2"
    assert [p.id for p in sort_products(SAMPLE_PRODUCTS, "newest")][:2] == ["5", "2"]
    assert [p.id for p in sort_products(SAMPLE_PRODUCTS, "featured")] == ["1", "2", "3", "4", "5", "6"]

    undated = [item(1, 1), item(2, 1, created_at=datetime(2024, 1, 1))]
    assert [p.id for p in sort_products(undated, "newest")] == ["2", "1"]


def test_unknown_sort_key_falls_back_to_input_order(abc):
    assert sort_products(abc, "bogus") == abc
    assert resolve_sort_key("bogus") == "relevance"
    assert resolve_sort_key("price-low") == "price-asc"
    assert resolve_sort_key("PRICE_DESC") == "price-desc"


# FILTER-008: idempotent and non-mutating
def test_idempotent_and_input_untouched(abc):
    snapshot = list(abc)
    criteria = Criteria(category="A", min_price=60)
    once = filter_and_sort(abc, criteria, "price-desc")
    twice = filter_and_sort(once, criteria, "price-desc")
    assert once == twice
    assert abc == snapshot
    assert once is not abc


def test_extra_predicates_are_and_combined():
    result = filter_and_sort(
        SAMPLE_PRODUCTS,
        Criteria(category="Devotional Items"),
        "price-asc",
        extra=[lambda p: p.original_price is not None],
    )
    assert [p.id for p in result] == ["6", "1"]


def test_in_stock_only():
    result = filter_products(SAMPLE_PRODUCTS, Criteria.from_params({"in_stock": "true"}))
    assert "4" not in [p.id for p in result]
    assert len(result) == len(SAMPLE_PRODUCTS) - 1


def test_discount_percent():
    assert item(1, 75, original_price=100).discount_percent == 25
    assert item(1, 100, original_price=100).discount_percent is None
    assert item(1, 100).discount_percent is None


def test_paginate_clamps_limit_and_offset():
    page = paginate(SAMPLE_PRODUCTS, limit=2, offset=4)
    assert [p.id for p in page.items] == ["5", "6"]
    assert page.total == 6

    page = paginate(SAMPLE_PRODUCTS, limit=0, offset=-3, max_limit=4)
    assert page.limit == 1 and page.offset == 0

    assert len(paginate(SAMPLE_PRODUCTS, limit=500, max_limit=4).items) == 4


def test_available_categories():
    extra = SAMPLE_PRODUCTS + [item(9, 10, "Books")]
    cats = available_categories(extra, DEFAULT_CATEGORIES)
    assert cats[0] == ALL_CATEGORIES
    assert cats[1:6] == DEFAULT_CATEGORIES
    assert cats[-1] == "Books"


def test_none_query_matches_everything():
    assert filter_products(SAMPLE_PRODUCTS, Criteria(query=None)) == list(SAMPLE_PRODUCTS)
