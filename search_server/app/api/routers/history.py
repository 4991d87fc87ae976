from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from search_server.app.api.deps import get_history_store
from search_server.app.domain.models import SearchHistoryItem
from search_server.app.domain.services.history_store import SearchHistoryStore
from search_server.app.platform.response import ok
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search/history", tags=["history"])

class RecordRequest(BaseModel):
    """
    최근 검색 기록 요청 바디
    """
    query: str = Field(..., description="검색어")
    result_count: int = Field(0, ge=0, description="검색 결과 수")


def _dump(items: list[SearchHistoryItem]) -> list:
    return [item.model_dump(mode="json", by_alias=True) for item in items]


@router.get("", summary="최근 검색 조회", operation_id="listSearchHistory")
def list_history(store: SearchHistoryStore = Depends(get_history_store)):
    return ok(_dump(store.list()), message="최근 검색 조회 성공")


@router.post("", summary="최근 검색 기록", operation_id="recordSearchHistory")
def record_history(req: RecordRequest, store: SearchHistoryStore = Depends(get_history_store)):
    logger.info("RecordRequest: %s", req)
    return ok(_dump(store.record(req.query, req.result_count)), message="최근 검색 기록 성공")


@router.delete("/{query}", summary="최근 검색 삭제", operation_id="removeSearchHistory")
def remove_history(query: str, store: SearchHistoryStore = Depends(get_history_store)):
    return ok(_dump(store.remove(query)), message="최근 검색 삭제 성공")


@router.delete("", summary="최근 검색 전체 삭제", operation_id="clearSearchHistory")
def clear_history(store: SearchHistoryStore = Depends(get_history_store)):
    store.clear()
    return ok([], message="최근 검색 전체 삭제 성공")
