"""
검색 상태 <-> URL 쿼리스트링 코덱.

공유/북마크 가능한 URL이 외부 계약이다.

- serialize_state: 기본값인 파라미터는 생략하고, 패싯은 값마다 키를 반복한다
  (category=a&category=b, 콤마 결합이 아님).
- parse_state: 누락/잘못된 값은 모두 기본값으로 대체하며 예외를 던지지 않는다.
  자유 텍스트는 query, q, search 순으로 처음 비어있지 않은 값을 쓴다.

parse_state(serialize_state(s)) == s 가 성립한다(정규화된 상태 기준).
"""

from __future__ import annotations

import logging
import math
from typing import Iterable
from urllib.parse import parse_qsl, urlencode

from search_server.app.domain.models import (
    DEFAULT_PER_PAGE,
    DEFAULT_PRICE_RANGE,
    FilterState,
    SearchState,
    SortOption,
)

logger = logging.getLogger(__name__)

QUERY_KEYS = ("query", "q", "search")
MAX_PER_PAGE = 100

# (URL 키, FilterState 필드)
FACET_KEYS = (
    ("category", "categories"),
    ("origin", "origins"),
    ("status", "status"),
    ("type", "types"),
    ("brand", "brands"),
    ("tag", "tags"),
)

MAX_RATING = 5.0


def _format_number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _parse_int(raw: str | None, default: int, *, minimum: int = 1, maximum: int | None = None) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("invalid integer param: %r -> %s", raw, default)
        return default
    if value < minimum or (maximum is not None and value > maximum):
        return default
    return value


def _parse_price(raw: str | None, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        logger.debug("invalid price param: %r -> %s", raw, default)
        return default
    if math.isnan(value) or math.isinf(value) or value < 0:
        return default
    return value


def _parse_rating(raw: str | None) -> float:
    value = _parse_price(raw, 0.0)
    return value if value <= MAX_RATING else 0.0


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out


def serialize_state(state: SearchState, *, default_per_page: int = DEFAULT_PER_PAGE) -> str:
    """
    SearchState를 최소한의 쿼리스트링으로 직렬화한다.

    Args:
        state: SearchState
        default_per_page: int (생략 기준이 되는 기본 페이지 크기)
    Returns:
        str: 앞의 '?' 없는 쿼리스트링
    """
    params: list[tuple[str, str]] = []
    if state.query:
        params.append(("query", state.query))
    if state.sort != SortOption.relevance:
        params.append(("sort", state.sort.value))
    if state.page > 1:
        params.append(("page", str(state.page)))
    if state.per_page != default_per_page:
        params.append(("perPage", str(state.per_page)))

    filters = state.filters
    for url_key, field in FACET_KEYS:
        params.extend((url_key, v) for v in getattr(filters, field))

    lo, hi = filters.price_range
    if lo != DEFAULT_PRICE_RANGE[0]:
        params.append(("minPrice", _format_number(lo)))
    if hi != DEFAULT_PRICE_RANGE[1]:
        params.append(("maxPrice", _format_number(hi)))
    if filters.min_rating > 0:
        params.append(("minRating", _format_number(filters.min_rating)))
    if filters.quick_filter:
        params.append(("quick", filters.quick_filter))

    return urlencode(params)


def parse_query_items(
    items: Iterable[tuple[str, str]],
    *,
    default_per_page: int = DEFAULT_PER_PAGE,
) -> SearchState:
    """
    (키, 값) 쌍 목록을 SearchState로 해석한다.
    FastAPI의 request.query_params.multi_items() 를 그대로 넘길 수 있다.

    Args:
        items: Iterable[tuple[str, str]]
        default_per_page: int
    Returns:
        SearchState: 항상 유효한 상태
    """
    multi: dict[str, list[str]] = {}
    for key, value in items:
        multi.setdefault(key, []).append(value)

    def first(key: str) -> str | None:
        values = multi.get(key)
        return values[0] if values else None

    query = ""
    for key in QUERY_KEYS:
        value = first(key)
        if value and value.strip():
            query = value.strip()
            break

    try:
        sort = SortOption(first("sort") or SortOption.relevance.value)
    except ValueError:
        sort = SortOption.relevance

    page = _parse_int(first("page"), 1)
    per_page = _parse_int(first("perPage"), default_per_page, maximum=MAX_PER_PAGE)

    lo = _parse_price(first("minPrice"), DEFAULT_PRICE_RANGE[0])
    hi = _parse_price(first("maxPrice"), DEFAULT_PRICE_RANGE[1])
    if lo > hi:
        lo, hi = hi, lo

    facets = {field: _unique(multi.get(url_key, [])) for url_key, field in FACET_KEYS}
    filters = FilterState(
        search=query,
        price_range=(lo, hi),
        min_rating=_parse_rating(first("minRating")),
        quick_filter=first("quick") or "",
        **facets,
    )
    return SearchState(query=query, filters=filters, sort=sort, page=page, per_page=per_page)


def parse_state(query_string: str, *, default_per_page: int = DEFAULT_PER_PAGE) -> SearchState:
    """
    쿼리스트링을 SearchState로 해석한다. 앞의 '?'는 무시한다.

    Args:
        query_string: str
        default_per_page: int
    Returns:
        SearchState
    """
    pairs = parse_qsl(query_string.lstrip("?"), keep_blank_values=True)
    return parse_query_items(pairs, default_per_page=default_per_page)
