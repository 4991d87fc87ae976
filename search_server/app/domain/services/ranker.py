"""
관련도 랭커.

정렬은 모두 파이썬의 안정 정렬(sorted)을 사용하므로
점수가 같은 상품은 카탈로그 상대 순서를 유지한다. 입력은 변경하지 않는다.

관련도 점수 = name_weight * [이름 포함]
            + tag_weight * [태그 중 하나라도 포함]
            + description_weight * [설명 포함]
가중치(기본 3/2/1)는 튜닝 가능한 파라미터이며 설정으로 덮어쓸 수 있다.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field

from search_server.app.domain.models import Product, ScoredProduct, SortOption
from search_server.app.domain.utils import any_contains_ci, contains_ci, extract_keywords, highlight


class RelevanceWeights(BaseModel):
    name: float = Field(3.0, ge=0)
    tags: float = Field(2.0, ge=0)
    description: float = Field(1.0, ge=0)


DEFAULT_WEIGHTS = RelevanceWeights()

# 설명 하이라이트 발췌 길이(단어 수)
EXCERPT_WORDS = 20


def _matched_fields(product: Product, query: str) -> list[str]:
    q = query.strip().lower()
    if not q:
        return []
    fields = []
    if contains_ci(product.name, q):
        fields.append("name")
    if any_contains_ci(product.tags, q):
        fields.append("tags")
    if contains_ci(product.description, q):
        fields.append("description")
    return fields


def relevance_score(product: Product, query: str, weights: RelevanceWeights = DEFAULT_WEIGHTS) -> float:
    """쿼리에 대한 상품 1건의 관련도 점수. 빈 쿼리는 0."""
    fields = _matched_fields(product, query)
    return sum(getattr(weights, f) for f in fields)


def sort_products(
    items: Sequence[Product],
    sort: SortOption | str,
    query: str = "",
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> list[Product]:
    """
    정렬 모드에 따라 정렬된 새 리스트를 반환한다.

    Args:
        items: Sequence[Product]
        sort: SortOption | str (알 수 없는 값은 relevance)
        query: str (relevance 모드에서 사용)
        weights: RelevanceWeights
    Returns:
        list[Product]: 정렬된 복사본
    """
    try:
        mode = SortOption(sort)
    except ValueError:
        mode = SortOption.relevance

    match mode:
        case SortOption.price_asc:
            return sorted(items, key=lambda p: p.selling_price)
        case SortOption.price_desc:
            return sorted(items, key=lambda p: p.selling_price, reverse=True)
        case SortOption.rating:
            return sorted(items, key=lambda p: p.rating.average, reverse=True)
        case SortOption.popularity:
            return sorted(items, key=lambda p: p.rating.count or 0, reverse=True)
        case SortOption.newest:
            return sorted(items, key=lambda p: p.created_at.timestamp(), reverse=True)
        case _:
            return sorted(items, key=lambda p: relevance_score(p, query, weights), reverse=True)


def explain_product(product: Product, query: str, weights: RelevanceWeights = DEFAULT_WEIGHTS) -> ScoredProduct:
    """
    점수 산출 근거(매칭 필드, 하이라이트)를 만든다.

    Args:
        product: Product
        query: str
        weights: RelevanceWeights
    Returns:
        ScoredProduct
    """
    fields = _matched_fields(product, query)
    keywords = extract_keywords(query) or ([query.strip()] if query.strip() else [])
    highlights: dict[str, str] = {}
    if "name" in fields:
        highlights["name"] = highlight(product.name, keywords)
    if "description" in fields:
        words = product.description.split()
        excerpt = " ".join(words[:EXCERPT_WORDS])
        if len(words) > EXCERPT_WORDS:
            excerpt += "..."
        highlights["description"] = highlight(excerpt, keywords)
    return ScoredProduct(
        id=product.id,
        score=sum(getattr(weights, f) for f in fields),
        matched_fields=fields,
        highlights=highlights,
    )
