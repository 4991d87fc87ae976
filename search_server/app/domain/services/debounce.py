"""
이벤트 루프 타이머 기반 디바운서.

새 입력이 들어오면 대기 중인 타이머를 취소하고 다시 예약한다.
취소된 호출은 절대 실행되지 않으므로 오래된 제안 목록이 전달되는 일이 없다.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Sequence

from search_server.app.domain.models import Product, SearchSuggestion
from search_server.app.domain.services.suggestion_service import (
    MAX_SUGGESTIONS,
    MIN_QUERY_LENGTH,
    generate_suggestions,
)

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 0.3


class Debouncer:

    def __init__(self, delay_seconds: float = DEFAULT_DELAY_SECONDS, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._delay = max(0.0, delay_seconds)
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None and not self._handle.cancelled()

    def submit(self, fn: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        """
        대기 중인 호출을 취소하고 delay 후에 fn(*args)를 예약한다.
        실행 중인 이벤트 루프 안에서 호출해야 한다(loop를 주입하지 않은 경우).

        Returns:
            asyncio.TimerHandle: 새로 예약된 핸들
        """
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, fn, args)
        return self._handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, fn: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        fn(*args)


class SuggestionDebouncer:
    """
    입력이 delay 동안 멈췄을 때만 제안을 계산해 callback으로 전달한다.
    """

    def __init__(
        self,
        catalog: Sequence[Product],
        callback: Callable[[str, list[SearchSuggestion]], Any],
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        *,
        min_query_length: int = MIN_QUERY_LENGTH,
        max_suggestions: int = MAX_SUGGESTIONS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._catalog = catalog
        self._callback = callback
        self._min_query_length = min_query_length
        self._max_suggestions = max_suggestions
        self._debouncer = Debouncer(delay_seconds, loop=loop)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, query: str) -> None:
        """키 입력마다 호출. 이전 예약은 버려진다."""
        self._debouncer.submit(self._compute, query)

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _compute(self, query: str) -> None:
        suggestions = generate_suggestions(
            self._catalog,
            query,
            min_query_length=self._min_query_length,
            max_suggestions=self._max_suggestions,
        )
        logger.debug("debounced suggestions: query=%s count=%d", query, len(suggestions))
        self._callback(query, suggestions)
