"""
검색어 자동완성 제안 생성기.

카탈로그의 상품명/브랜드/카테고리/태그를 정규화 후 부분 문자열로 매칭하고
(type, 정규화 텍스트) 단위로 집계해 건수 내림차순으로 돌려준다.
건수가 같으면 처음 발견된 순서를 유지한다(안정 정렬).

부분 문자열 매칭만으로 자리가 남으면 오타 허용(fuzzy) 매칭 결과로 채운다.
인기(trending) 상품 제안은 generate_trending_suggestions()가 따로 만든다.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from thefuzz import fuzz

from search_server.app.domain.models import Product, SearchSuggestion, SuggestionType
from search_server.app.domain.utils import normalize_text

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 8
MAX_TRENDING_SUGGESTIONS = 3

# fuzz.ratio(0~100) 기준. 짧은 입력은 오타 허용 매칭을 하지 않는다.
FUZZY_THRESHOLD = 80
FUZZY_MIN_LENGTH = 4


def _candidates(product: Product) -> Iterator[tuple[SuggestionType, str]]:
    yield SuggestionType.product, product.name
    if product.brand is not None:
        yield SuggestionType.brand, product.brand.name
    yield SuggestionType.category, product.category.name
    for tag in product.tags:
        yield SuggestionType.tag, tag


def fuzzy_score(needle: str, normalized: str) -> int:
    """
    정규화된 needle과 text를 단어 창(needle 단어 수만큼) 단위로 비교한 최고 점수.

    Args:
        needle: str (정규화된 입력)
        normalized: str (정규화된 후보 텍스트)
    Returns:
        int: 0~100
    """
    words = normalized.split(" ")
    width = len(needle.split(" "))
    windows = [" ".join(words[i:i + width]) for i in range(max(1, len(words) - width + 1))]
    return max(fuzz.ratio(needle, w) for w in windows)


def generate_suggestions(
    catalog: Sequence[Product],
    query: str,
    *,
    min_query_length: int = MIN_QUERY_LENGTH,
    max_suggestions: int = MAX_SUGGESTIONS,
) -> list[SearchSuggestion]:
    """
    Args:
        catalog: Sequence[Product]
        query: str (정규화 후 min_query_length 미만이면 빈 결과)
        min_query_length: int
        max_suggestions: int
    Returns:
        list[SearchSuggestion]: 최대 max_suggestions 건
    """
    needle = normalize_text(query)
    if len(needle) < min_query_length:
        return []

    # dict는 삽입 순서를 보존하므로 '처음 발견된 순서'가 그대로 남는다
    hits: dict[tuple[SuggestionType, str], list] = {}
    fuzzy: dict[tuple[SuggestionType, str], list] = {}
    use_fuzzy = len(needle) >= FUZZY_MIN_LENGTH
    for product in catalog:
        for kind, text in _candidates(product):
            normalized = normalize_text(text)
            if not normalized:
                continue
            key = (kind, normalized)
            if needle in normalized:
                bucket, score = hits, 100
            elif use_fuzzy:
                score = fuzzy_score(needle, normalized)
                if score < FUZZY_THRESHOLD:
                    continue
                bucket = fuzzy
            else:
                continue
            if key in bucket:
                bucket[key][1] += 1
            else:
                bucket[key] = [text, 1, score]

    ranked = sorted(hits.items(), key=lambda kv: kv[1][1], reverse=True)
    if len(ranked) < max_suggestions:
        ranked += sorted(fuzzy.items(), key=lambda kv: (kv[1][2], kv[1][1]), reverse=True)
    suggestions = [
        SearchSuggestion(type=kind, text=text, count=count)
        for (kind, _), (text, count, _score) in ranked[:max_suggestions]
    ]
    logger.debug(
        "suggestions: query=%s hits=%d fuzzy=%d returned=%d",
        needle, len(hits), len(fuzzy), len(suggestions),
    )
    return suggestions


def generate_trending_suggestions(
    catalog: Sequence[Product],
    query: str = "",
    *,
    min_query_length: int = MIN_QUERY_LENGTH,
    limit: int = MAX_TRENDING_SUGGESTIONS,
) -> list[SearchSuggestion]:
    """
    trending 상품명을 인기순(평가 수 내림차순)으로 제안한다.
    입력이 짧으면 전체 trending 상품, 아니면 이름이 입력을 포함하거나 fuzzy 매칭되는 것만.

    Args:
        catalog: Sequence[Product]
        query: str
        min_query_length: int
        limit: int
    Returns:
        list[SearchSuggestion]: type=trending, count=평가 수(최소 1)
    """
    needle = normalize_text(query)
    matched = []
    for product in catalog:
        if not product.trending:
            continue
        if len(needle) >= min_query_length:
            name = normalize_text(product.name)
            if needle not in name and not (
                len(needle) >= FUZZY_MIN_LENGTH and fuzzy_score(needle, name) >= FUZZY_THRESHOLD
            ):
                continue
        matched.append(product)

    matched.sort(key=lambda p: p.rating.count or 0, reverse=True)
    return [
        SearchSuggestion(type=SuggestionType.trending, text=p.name, count=max(1, p.rating.count or 0))
        for p in matched[:limit]
    ]
