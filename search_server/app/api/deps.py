from __future__ import annotations

from fastapi import Depends
from starlette.requests import HTTPConnection

from search_server.app.adapters.catalogs.json_catalog import JsonCatalog
from search_server.app.adapters.storages.file_storage import FileStorage
from search_server.app.domain.models import Product
from search_server.app.domain.ports import StoragePort
from search_server.app.domain.services.history_store import SearchHistoryStore
from search_server.app.domain.services.ranker import RelevanceWeights
from search_server.app.domain.services.search_service import SearchService
from search_server.app.platform.config import settings


# ---- 카탈로그/저장소 ----
def get_catalog(conn: HTTPConnection) -> tuple[Product, ...]:
    """
    앱 시작 시 main.py의 lifespan에서 읽어 둔 카탈로그 스냅샷을 꺼낸다.
    없으면(테스트 등) 즉석 로드 후 app.state에 보관.
    """
    state = conn.app.state
    if not hasattr(state, "catalog"):
        state.catalog = JsonCatalog(settings.CATALOG_PATH).load()
    return state.catalog


def get_storage(conn: HTTPConnection) -> StoragePort:
    state = conn.app.state
    if not hasattr(state, "storage"):
        state.storage = FileStorage(settings.STORAGE_DIR)
    return state.storage


def get_history_store(storage: StoragePort = Depends(get_storage)) -> SearchHistoryStore:
    return SearchHistoryStore(
        storage,
        key=settings.HISTORY_STORAGE_KEY,
        max_items=settings.MAX_SEARCH_HISTORY,
    )


def get_relevance_weights() -> RelevanceWeights:
    return RelevanceWeights(
        name=settings.RELEVANCE_NAME_WEIGHT,
        tags=settings.RELEVANCE_TAG_WEIGHT,
        description=settings.RELEVANCE_DESCRIPTION_WEIGHT,
    )


def get_search_service(
    catalog: tuple[Product, ...] = Depends(get_catalog),
    history: SearchHistoryStore = Depends(get_history_store),
    weights: RelevanceWeights = Depends(get_relevance_weights),
) -> SearchService:
    """
    FastAPI DI에서 카탈로그/기록 저장소를 받아 SearchService를 생성해 주입한다.
    """
    return SearchService(
        catalog,
        history,
        weights=weights,
        min_query_length=settings.MIN_QUERY_LENGTH,
        max_suggestions=settings.MAX_SUGGESTIONS,
        max_trending=settings.MAX_TRENDING_SUGGESTIONS,
    )
