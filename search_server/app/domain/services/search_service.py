# app/domain/services/search_service.py
"""
SearchService
==============

상품 검색 유스케이스 오케스트레이터.

Flow:
    (submit)  Filter → Rank → Paginate → (History 기록)
    (typing)  Suggestion 생성 / 드롭다운(최근 검색 + 추천) 구성

- 카탈로그는 부트스트랩 시 한 번 로드된 읽기 전용 스냅샷이다.
- 기록 저장소(SearchHistoryStore)는 생성자로 주입받는다.

예시:
    svc = SearchService(catalog, history)
    result = svc.search(parse_state("query=korean&sort=price-asc"), record_history=True)
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from search_server.app.domain.models import (
    DropdownEntry,
    HistoryEntry,
    Product,
    SearchResult,
    SearchState,
    SearchSuggestion,
    SuggestionEntry,
)
from search_server.app.domain.services.filter_engine import apply_filters
from search_server.app.domain.services.history_store import SearchHistoryStore
from search_server.app.domain.services.pagination import paginate
from search_server.app.domain.services.ranker import (
    DEFAULT_WEIGHTS,
    RelevanceWeights,
    explain_product,
    sort_products,
)
from search_server.app.domain.services.suggestion_service import (
    MAX_SUGGESTIONS,
    MAX_TRENDING_SUGGESTIONS,
    MIN_QUERY_LENGTH,
    generate_suggestions,
    generate_trending_suggestions,
)
from search_server.app.platform.exceptions import StorageFailed

logger = logging.getLogger(__name__)


def entry_text(entry: DropdownEntry) -> str:
    """드롭다운 항목이 검색창에 채워 넣을 텍스트."""
    match entry:
        case HistoryEntry(query=query):
            return query
        case SuggestionEntry(text=text):
            return text
        case _:
            raise TypeError(f"unknown dropdown entry: {type(entry).__name__}")


class SearchService:

    def __init__(
        self,
        catalog: Sequence[Product],
        history: SearchHistoryStore,
        weights: RelevanceWeights = DEFAULT_WEIGHTS,
        min_query_length: int = MIN_QUERY_LENGTH,
        max_suggestions: int = MAX_SUGGESTIONS,
        max_trending: int = MAX_TRENDING_SUGGESTIONS,
    ) -> None:
        """
        Args:
            catalog: Sequence[Product]      : 읽기 전용 카탈로그 스냅샷
            history: SearchHistoryStore     : 최근 검색 저장소
            weights: RelevanceWeights       : 관련도 가중치
            min_query_length: int           : 제안 최소 글자 수
            max_suggestions: int            : 제안 최대 개수
            max_trending: int               : 인기 제안 최대 개수
        """
        self._catalog = tuple(catalog)
        self._history = history
        self._weights = weights
        self._min_query_length = min_query_length
        self._max_suggestions = max_suggestions
        self._max_trending = max_trending

    @property
    def catalog(self) -> tuple[Product, ...]:
        return self._catalog

    # ================= public API =================
    def search(
        self,
        state: SearchState,
        explain: bool = False,
        record_history: bool = False) -> SearchResult:
        """
        필터 → 정렬 → 페이지네이션을 수행한다.

        Args:
            state: SearchState      : URL에서 해석한 검색 상태
            explain: bool           : 점수 산출 근거 포함 여부
            record_history: bool    : 검색어를 최근 검색에 기록할지(submit 시)
        Returns:
            SearchResult: 결과(항상 유효한 page/pages)
        """
        start = time.perf_counter()
        filtered = apply_filters(self._catalog, state.filters)
        ranked = sort_products(filtered, state.sort, state.query, self._weights)
        page = paginate(ranked, state.page, state.per_page)

        result = SearchResult(items=page.items, page=page.page, pages=page.pages, total=page.total)
        if explain:
            result.explain = [explain_product(p, state.query, self._weights) for p in page.items]

        if record_history and state.query.strip():
            try:
                self._history.record(state.query, page.total)
            except StorageFailed as e:
                # 기록 실패로 이미 계산된 검색 결과를 버리지 않는다
                logger.warning("history record failed, search result kept: query=%s error=%s", state.query, e)

        took_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "service.search: query=%s sort=%s page=%s total=%s took_ms=%s",
            state.query, state.sort.value, page.page, page.total, took_ms,
            extra={"query": state.query, "sort": state.sort.value, "page": page.page,
                   "total": page.total, "took_ms": took_ms},
        )
        return result

    def suggest(self, query: str) -> list[SearchSuggestion]:
        return generate_suggestions(
            self._catalog,
            query,
            min_query_length=self._min_query_length,
            max_suggestions=self._max_suggestions,
        )

    def trending(self, query: str = "") -> list[SearchSuggestion]:
        return generate_trending_suggestions(
            self._catalog,
            query,
            min_query_length=self._min_query_length,
            limit=self._max_trending,
        )

    def dropdown(self, query: str) -> list[DropdownEntry]:
        """
        검색창 드롭다운 목록.
        - 짧은 입력: 최근 검색 전체
        - 그 외: 입력을 포함하는 최근 검색 + 추천(최근 검색과 같은 텍스트는 제외)

        Args:
            query: str
        Returns:
            list[DropdownEntry]: HistoryEntry | SuggestionEntry
        """
        trimmed = query.strip()
        history = self._history.list()
        if len(trimmed) < self._min_query_length:
            return [self._to_history_entry(h) for h in history]

        needle = trimmed.lower()
        entries: list[DropdownEntry] = [
            self._to_history_entry(h) for h in history if needle in h.query.lower()
        ]
        seen = {entry_text(e).lower() for e in entries}
        for s in self.suggest(trimmed):
            entry = SuggestionEntry(type=s.type, text=s.text, count=s.count)
            if entry_text(entry).lower() in seen:
                continue
            entries.append(entry)
        return entries

    @property
    def history(self) -> SearchHistoryStore:
        return self._history

    #================= internal helpers =================
    def _to_history_entry(self, item) -> HistoryEntry:
        return HistoryEntry(query=item.query, result_count=item.result_count, timestamp=item.timestamp)
