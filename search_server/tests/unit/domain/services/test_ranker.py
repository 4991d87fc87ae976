import pytest

from search_server.app.domain.models import SortOption
from search_server.app.domain.services.ranker import (
    RelevanceWeights,
    explain_product,
    relevance_score,
    sort_products,
)


def ids(products):
    return [p.id for p in products]


@pytest.mark.parametrize(
    "sort, expected",
    [
        (SortOption.price_asc, ["p-3", "p-4", "p-2", "p-1"]),
        (SortOption.price_desc, ["p-1", "p-2", "p-4", "p-3"]),
        (SortOption.rating, ["p-3", "p-1", "p-2", "p-4"]),
        # p-3은 count가 없으므로 0으로 취급
        (SortOption.popularity, ["p-2", "p-1", "p-4", "p-3"]),
        (SortOption.newest, ["p-4", "p-3", "p-2", "p-1"]),
        ("price-asc", ["p-3", "p-4", "p-2", "p-1"]),
    ],
)
def test_sort_modes(catalog, sort, expected):
    assert ids(sort_products(catalog, sort, "")) == expected


def test_relevance_scores_name_tag_description(catalog):
    """
    이름(3) + 태그(2) + 설명(1) 가중 합
    """
    p1, p2, p3, p4 = catalog

    assert relevance_score(p1, "japanese") == 5   # 이름 + 태그
    assert relevance_score(p2, "japanese") == 0
    assert relevance_score(p3, "japanese") == 1   # 설명
    assert relevance_score(p4, "japanese") == 2   # 태그 "japanese-style"


def test_relevance_sort_orders_by_score(catalog):
    assert ids(sort_products(catalog, SortOption.relevance, "japanese")) == ["p-1", "p-4", "p-3", "p-2"]


def test_relevance_ties_keep_catalog_order(catalog):
    """
    빈 쿼리 → 모든 점수 0 → 카탈로그 순서 그대로(안정 정렬)
    """
    assert ids(sort_products(catalog, SortOption.relevance, "")) == ids(catalog)
    assert ids(sort_products(catalog, SortOption.relevance, "zzz")) == ids(catalog)


def test_unknown_sort_falls_back_to_relevance(catalog):
    assert ids(sort_products(catalog, "cheapest", "japanese")) == ["p-1", "p-4", "p-3", "p-2"]


def test_sort_is_deterministic_and_does_not_mutate(catalog):
    snapshot = ids(catalog)

    first = sort_products(catalog, SortOption.rating, "")
    second = sort_products(catalog, SortOption.rating, "")

    assert ids(first) == ids(second)
    assert ids(catalog) == snapshot


def test_equal_prices_keep_relative_order(product_factory):
    items = [product_factory(idx=i, selling_price=100) for i in range(5)]

    assert ids(sort_products(items, SortOption.price_desc, "")) == ids(items)
    assert ids(sort_products(items, SortOption.price_asc, "")) == ids(items)


def test_custom_weights_change_ranking(catalog):
    """
    설명 가중치를 키우면 설명 매칭 상품이 앞선다
    """
    weights = RelevanceWeights(name=1, tags=0, description=10)

    ranked = sort_products(catalog, SortOption.relevance, "japanese", weights)

    assert ids(ranked)[0] == "p-3"


def test_explain_product_reports_fields_and_highlights(catalog):
    p1 = catalog[0]

    scored = explain_product(p1, "japanese")

    assert scored.id == "p-1"
    assert scored.score == 5
    assert scored.matched_fields == ["name", "tags"]
    assert scored.highlights["name"] == "Premium <mark>Japanese</mark> Sneakers"
    assert "description" not in scored.highlights


def test_relevance_ignores_surrounding_whitespace(product_factory):
    """
    " tea" 처럼 공백이 붙은 쿼리도 이름/태그 매칭 점수를 받는다
    """
    # given
    catalog = [
        product_factory(idx=1, name="Matcha Powder", description="green tea leaves", tags=["powder"]),
        product_factory(idx=2, name="Tea Cup", description="ceramic cup", tags=["tea"]),
    ]

    # when
    ranked = sort_products(catalog, SortOption.relevance, " tea ")

    # then
    assert ids(ranked) == ["p-2", "p-1"]
    assert relevance_score(catalog[1], "  tea") == relevance_score(catalog[1], "tea")
