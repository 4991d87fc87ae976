import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from pydantic import TypeAdapter

from search_server.app.api.deps import get_catalog, get_search_service, SearchService
from search_server.app.domain.models import DropdownEntry, SearchSuggestion
from search_server.app.domain.services.debounce import SuggestionDebouncer
from search_server.app.platform.config import settings
from search_server.app.platform.response import ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["suggest"])

_dropdown_adapter = TypeAdapter(List[DropdownEntry])
_suggestions_adapter = TypeAdapter(List[SearchSuggestion])


@router.get(
    "/suggestions",
    summary="검색어 추천",
    description="상품명/브랜드/카테고리/태그에서 입력을 포함하는 추천 검색어를 건수순으로 반환합니다.",
    operation_id="searchSuggestions",
)
def suggestions(
    q: str = Query("", description="입력 중인 검색어"),
    svc: SearchService = Depends(get_search_service),
):
    items = svc.suggest(q)
    return ok(_suggestions_adapter.dump_python(items, mode="json", by_alias=True), message="추천 성공")


@router.get(
    "/trending",
    summary="인기 검색어",
    description="trending 상품명 중 입력과 일치(오타 허용)하는 것을 인기순으로 반환합니다. 입력이 짧으면 전체를 반환합니다.",
    operation_id="trendingSuggestions",
)
def trending(
    q: str = Query("", description="입력 중인 검색어"),
    svc: SearchService = Depends(get_search_service),
):
    items = svc.trending(q)
    return ok(_suggestions_adapter.dump_python(items, mode="json", by_alias=True), message="인기 검색어 조회 성공")


@router.get(
    "/dropdown",
    summary="검색창 드롭다운",
    description=(
        "짧은 입력이면 최근 검색 전체를, 그 외에는 입력을 포함하는 최근 검색과 추천 검색어를 "
        "`kind`(history|suggestion)로 구분해 반환합니다."
    ),
    operation_id="searchDropdown",
)
def dropdown(
    q: str = Query("", description="입력 중인 검색어"),
    svc: SearchService = Depends(get_search_service),
):
    entries = svc.dropdown(q)
    return ok(_dropdown_adapter.dump_python(entries, mode="json", by_alias=True), message="드롭다운 조회 성공")


@router.websocket("/suggestions/ws")
async def suggestions_ws(websocket: WebSocket, catalog=Depends(get_catalog)):
    """
    키 입력마다 텍스트 프레임을 보내면, 입력이 DEBOUNCE_DELAY_MS 동안 멈췄을 때
    마지막 입력에 대한 추천만 {"query", "suggestions"} 로 돌려준다.
    """
    await websocket.accept()
    loop = asyncio.get_running_loop()
    pending_sends: set[asyncio.Task] = set()

    def deliver(query: str, items: list[SearchSuggestion]) -> None:
        payload = {
            "query": query,
            "suggestions": _suggestions_adapter.dump_python(items, mode="json", by_alias=True),
        }
        task = loop.create_task(websocket.send_json(payload))
        pending_sends.add(task)
        task.add_done_callback(pending_sends.discard)

    debouncer = SuggestionDebouncer(
        catalog,
        deliver,
        settings.DEBOUNCE_DELAY_MS / 1000,
        min_query_length=settings.MIN_QUERY_LENGTH,
        max_suggestions=settings.MAX_SUGGESTIONS,
        loop=loop,
    )
    try:
        while True:
            debouncer.on_input(await websocket.receive_text())
    except WebSocketDisconnect:
        logger.debug("suggestions websocket closed")
    finally:
        debouncer.cancel()
        # 닫힌 소켓으로의 전송이 남지 않도록 정리
        for task in list(pending_sends):
            task.cancel()
        await asyncio.gather(*list(pending_sends), return_exceptions=True)
