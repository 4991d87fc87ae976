"""
패싯 필터 엔진.

모든 필터는 입력 순서를 유지한 새 리스트를 반환하며 입력을 변경하지 않는다.
빈 패싯(빈 리스트)은 '제한 없음'이다. '모두 제외'가 아님에 주의.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from search_server.app.domain.models import FilterState, Product, ProductStatus, ProductType
from search_server.app.domain.utils import any_contains_ci, contains_ci

logger = logging.getLogger(__name__)

Predicate = Callable[[Product], bool]

# quick 필터 프리셋. 이 외의 값은 자유 텍스트로 취급한다.
QUICK_FILTER_PRESETS: dict[str, Predicate] = {
    "in-stock": lambda p: p.status == ProductStatus.available,
    "trending": lambda p: p.trending,
    "featured": lambda p: p.featured,
    "flash-deal": lambda p: p.type == ProductType.flash_deal,
}


def text_matches(product: Product, text: str) -> bool:
    """이름/설명/브랜드/태그 중 하나에 text가 포함되는지(대소문자 무시)."""
    needle = text.strip().lower()
    if not needle:
        return True
    return (
        contains_ci(product.name, needle)
        or contains_ci(product.description, needle)
        or (product.brand is not None and contains_ci(product.brand.name, needle))
        or any_contains_ci(product.tags, needle)
    )


def _restrict(products: Sequence[Product], values: Iterable[str], key: Callable[[Product], Iterable[str]]) -> list[Product]:
    allowed = set(values)
    if not allowed:
        return list(products)
    return [p for p in products if allowed.intersection(key(p))]


def filter_by_search(products: Sequence[Product], search: str) -> list[Product]:
    if not search.strip():
        return list(products)
    return [p for p in products if text_matches(p, search)]


def filter_by_categories(products: Sequence[Product], categories: Iterable[str]) -> list[Product]:
    # id, slug 둘 다 허용
    return _restrict(products, categories, lambda p: (p.category.id, p.category.slug))


def filter_by_origins(products: Sequence[Product], origins: Iterable[str]) -> list[Product]:
    return _restrict(products, origins, lambda p: (p.origin.value,))


def filter_by_status(products: Sequence[Product], statuses: Iterable[str]) -> list[Product]:
    return _restrict(products, statuses, lambda p: (p.status.value,))


def filter_by_types(products: Sequence[Product], types: Iterable[str]) -> list[Product]:
    return _restrict(products, types, lambda p: (p.type.value,))


def filter_by_brands(products: Sequence[Product], brands: Iterable[str]) -> list[Product]:
    return _restrict(products, brands, lambda p: (p.brand.name,) if p.brand else ())


def filter_by_tags(products: Sequence[Product], tags: Iterable[str]) -> list[Product]:
    # 태그 중 하나라도 일치(대소문자 무시)
    return _restrict(products, (t.lower() for t in tags), lambda p: (t.lower() for t in p.tags))


def filter_by_min_rating(products: Sequence[Product], min_rating: float) -> list[Product]:
    if min_rating <= 0:
        return list(products)
    return [p for p in products if p.rating.average >= min_rating]


def filter_by_price_range(products: Sequence[Product], price_range: tuple[float, float]) -> list[Product]:
    lo, hi = price_range
    return [p for p in products if lo <= p.selling_price <= hi]


def filter_by_quick_filter(products: Sequence[Product], quick_filter: str) -> list[Product]:
    preset = QUICK_FILTER_PRESETS.get(quick_filter.strip())
    if preset is not None:
        return [p for p in products if preset(p)]
    return filter_by_search(products, quick_filter)


def apply_filters(products: Sequence[Product], filters: FilterState) -> list[Product]:
    """
    활성화된 모든 필터를 AND로 적용한다.

    Args:
        products: Sequence[Product] (카탈로그 스냅샷)
        filters: FilterState
    Returns:
        list[Product]: 원래 상대 순서를 유지한 부분 집합
    """
    result = filter_by_search(products, filters.search)
    result = filter_by_categories(result, filters.categories)
    result = filter_by_origins(result, filters.origins)
    result = filter_by_status(result, filters.status)
    result = filter_by_types(result, filters.types)
    result = filter_by_brands(result, filters.brands)
    result = filter_by_tags(result, filters.tags)
    result = filter_by_min_rating(result, filters.min_rating)
    result = filter_by_price_range(result, filters.price_range)
    result = filter_by_quick_filter(result, filters.quick_filter)
    logger.debug("filters applied: %d -> %d", len(products), len(result))
    return result
