import pytest

from search_server.app.domain.models import FilterState
from search_server.app.domain.services import filter_engine
from search_server.app.domain.services.filter_engine import apply_filters

"""
apply_filters()
    빈 패싯은 통과(제외가 아님), 패싯/가격/텍스트 필터는 AND 결합.
    입력 순서 유지, 입력 불변.
quick 필터
    프리셋(in-stock, trending, featured, flash-deal)과 자유 텍스트.
"""


def ids(products):
    return [p.id for p in products]


def test_empty_facets_return_catalog_unchanged(catalog):
    """
    모든 패싯이 비어 있으면 카탈로그 전체를 같은 순서로 반환
    """
    result = apply_filters(catalog, FilterState())

    assert ids(result) == ids(catalog)
    assert result is not catalog


def test_category_facet_keeps_only_members(product_factory):
    """
    categories=["beauty"], origins=[] → beauty 상품만 남는다
    """
    # given
    beauty = product_factory(idx=1, category={"id": "c1", "name": "Beauty", "slug": "beauty"})
    shoes = product_factory(idx=2, category={"id": "c2", "name": "Shoes", "slug": "shoes"})

    # when
    result = apply_filters([beauty, shoes], FilterState(categories=["beauty"], origins=[]))

    # then
    assert ids(result) == [beauty.id]


def test_category_facet_matches_id_or_slug(catalog):
    assert ids(apply_filters(catalog, FilterState(categories=["c-food"]))) == ["p-3"]
    assert ids(apply_filters(catalog, FilterState(categories=["food"]))) == ["p-3"]


@pytest.mark.parametrize(
    "filters, expected",
    [
        (FilterState(origins=["japan"]), ["p-1", "p-3"]),
        (FilterState(status=["preorder", "out_of_stock"]), ["p-3", "p-4"]),
        (FilterState(types=["flash_deal"]), ["p-2"]),
        (FilterState(brands=["Asics"]), ["p-1"]),
        (FilterState(price_range=(450, 1000)), ["p-2", "p-4"]),
        (FilterState(price_range=(400, 400)), ["p-3"]),
        (FilterState(search="JAPANESE"), ["p-1", "p-3", "p-4"]),
        (FilterState(origins=["japan"], price_range=(0, 1000)), ["p-3"]),
    ],
)
def test_single_and_combined_facets(catalog, filters, expected):
    assert ids(apply_filters(catalog, filters)) == expected


def test_unknown_facet_value_matches_nothing(catalog):
    """
    알 수 없는 enum 값은 예외 없이 결과 0건
    """
    assert apply_filters(catalog, FilterState(origins=["mars"])) == []


def test_brand_facet_excludes_products_without_brand(catalog):
    result = apply_filters(catalog, FilterState(brands=["Asics", "Innisfree"]))
    assert ids(result) == ["p-1", "p-2"]


@pytest.mark.parametrize(
    "quick, expected",
    [
        ("in-stock", ["p-1", "p-2"]),
        ("trending", ["p-2"]),
        ("featured", ["p-4"]),
        ("flash-deal", ["p-2"]),
        ("matcha", ["p-3"]),
        ("", ["p-1", "p-2", "p-3", "p-4"]),
    ],
)
def test_quick_filter_presets_and_free_text(catalog, quick, expected):
    assert ids(filter_engine.filter_by_quick_filter(catalog, quick)) == expected


def test_search_text_matches_description_and_tags(catalog):
    assert ids(filter_engine.filter_by_search(catalog, "skincare")) == ["p-2"]
    assert ids(filter_engine.filter_by_search(catalog, "vitamin")) == ["p-4"]
    assert ids(filter_engine.filter_by_search(catalog, "   ")) == ids(catalog)


@pytest.mark.parametrize(
    "base, extra",
    [
        (FilterState(), {"origins": ["japan"]}),
        (FilterState(search="a"), {"status": ["available"]}),
        (FilterState(origins=["japan", "korea"]), {"types": ["ready_stock"]}),
        (FilterState(price_range=(0, 2000)), {"brands": ["Innisfree"]}),
    ],
)
def test_additional_facet_never_increases_results(catalog, base, extra):
    """
    패싯을 하나 더 추가해도 결과 수는 늘지 않는다(단조성)
    """
    narrowed = base.model_copy(update=extra)

    assert len(apply_filters(catalog, narrowed)) <= len(apply_filters(catalog, base))


def test_inputs_are_not_mutated(catalog):
    filters = FilterState(origins=["japan"])
    before = filters.model_dump()
    snapshot = list(catalog)

    apply_filters(catalog, filters)

    assert filters.model_dump() == before
    assert list(catalog) == snapshot


@pytest.mark.parametrize(
    "filters, expected",
    [
        (FilterState(tags=["tea"]), ["p-3"]),
        (FilterState(tags=["JAPANESE", "tea"]), ["p-1", "p-3"]),
        (FilterState(tags=["japan"]), []),
        (FilterState(min_rating=4.5), ["p-1", "p-2", "p-3"]),
        (FilterState(min_rating=4.6, tags=["skin", "tea"]), ["p-3"]),
    ],
)
def test_tag_and_min_rating_facets(catalog, filters, expected):
    """
    태그는 정확히 일치하는 값 중 하나라도(대소문자 무시), 평점은 이상(>=)
    """
    assert ids(apply_filters(catalog, filters)) == expected
