"""
SearchHistoryStore
==================

최근 검색어 기록. 최신순, 검색어 단위 중복 제거, 최대 길이 제한.

- 저장소는 StoragePort(localStorage 대응)로 주입받는다. 전역 상태를 쓰지 않는다.
- 변경 연산마다 전체 목록을 JSON 배열로 즉시 저장한다.
- 저장된 값이 깨졌거나 형식이 다르면 빈 기록으로 취급한다(예외를 던지지 않음).

예시:
    store = SearchHistoryStore(MemoryStorage(), key="gsa-search-history", max_items=10)
    store.record("korean skincare", 12)
    store.list()[0].query  # "korean skincare"
"""

from __future__ import annotations

import json
import logging
import threading
import weakref
from datetime import datetime, timezone
from typing import List

from pydantic import TypeAdapter, ValidationError

from search_server.app.domain.models import SearchHistoryItem
from search_server.app.domain.ports import StoragePort
from search_server.app.platform.exceptions import StorageFailed

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "gsa-search-history"
DEFAULT_MAX_ITEMS = 10

_item_adapter = TypeAdapter(SearchHistoryItem)
_list_adapter = TypeAdapter(List[SearchHistoryItem])

# 저장소 인스턴스 + 키 단위 잠금. 요청마다 새 store가 만들어져도 같은 잠금을 공유한다.
_locks: "weakref.WeakKeyDictionary[StoragePort, dict[str, threading.Lock]]" = weakref.WeakKeyDictionary()
_locks_guard = threading.Lock()


def _lock_for(storage: StoragePort, key: str) -> threading.Lock:
    with _locks_guard:
        per_storage = _locks.setdefault(storage, {})
        return per_storage.setdefault(key, threading.Lock())


class SearchHistoryStore:

    def __init__(
        self,
        storage: StoragePort,
        key: str = DEFAULT_HISTORY_KEY,
        max_items: int = DEFAULT_MAX_ITEMS,
    ) -> None:
        """
        Args:
            storage: StoragePort   : 키/값 저장소
            key: str               : 저장 키
            max_items: int         : 최대 보관 개수
        """
        self._storage = storage
        self._key = key
        self._max_items = max(1, max_items)
        self._lock = _lock_for(storage, key)

    @property
    def max_items(self) -> int:
        return self._max_items

    # ================= public API =================
    def list(self) -> list[SearchHistoryItem]:
        """최신순 목록의 복사본을 반환한다."""
        return self._load()

    def record(self, query: str, result_count: int) -> list[SearchHistoryItem]:
        """
        검색어를 맨 앞에 추가한다. 이미 있으면(대소문자 구분 정확히 일치) 앞으로 옮긴다.
        공백뿐인 검색어는 무시한다.

        Args:
            query: str
            result_count: int
        Returns:
            list[SearchHistoryItem]: 갱신된 목록
        """
        trimmed = query.strip()
        if not trimmed:
            return self._load()

        entry = SearchHistoryItem(
            query=trimmed,
            result_count=max(0, result_count),
            timestamp=datetime.now(timezone.utc),
        )
        with self._lock:
            history = [item for item in self._load() if item.query != trimmed]
            history = [entry, *history][: self._max_items]
            self._save(history)
        logger.info("history.record: query=%s result_count=%s size=%d", trimmed, result_count, len(history))
        return history

    def remove(self, query: str) -> list[SearchHistoryItem]:
        """일치하는 항목(앞뒤 공백 무시)을 지운다. 없으면 아무것도 하지 않는다."""
        trimmed = query.strip()
        with self._lock:
            history = self._load()
            remaining = [item for item in history if item.query != trimmed]
            if len(remaining) != len(history):
                self._save(remaining)
                logger.info("history.remove: query=%s", trimmed)
        return remaining

    def clear(self) -> None:
        with self._lock:
            try:
                self._storage.remove_item(self._key)
            except OSError as e:
                raise StorageFailed(self._key, str(e)) from e
        logger.info("history.clear")

    # ================= internal helpers =================
    def _load(self) -> list[SearchHistoryItem]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("corrupt search history, ignored: key=%s error=%s", self._key, e)
            return []
        if not isinstance(data, list):
            logger.warning("unexpected search history shape, ignored: key=%s type=%s", self._key, type(data).__name__)
            return []

        items: list[SearchHistoryItem] = []
        for entry in data:
            try:
                items.append(_item_adapter.validate_python(entry))
            except ValidationError:
                logger.warning("invalid search history entry skipped: %r", entry)
        return items[: self._max_items]

    def _save(self, history: list[SearchHistoryItem]) -> None:
        payload = _list_adapter.dump_json(history, by_alias=True).decode("utf-8")
        try:
            self._storage.set_item(self._key, payload)
        except OSError as e:
            raise StorageFailed(self._key, str(e)) from e
