from __future__ import annotations

from contextlib import asynccontextmanager
from fastapi import FastAPI
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError

from search_server.app.api.routers import (
    health,
    search,
    suggest,
    history
)
from search_server.app.adapters.catalogs.json_catalog import JsonCatalog
from search_server.app.adapters.storages.file_storage import FileStorage
from search_server.app.platform.config import settings
from search_server.app.platform.logging import setup_logging
from search_server.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from search_server.app.platform import exceptions as domainex
from search_server.app.middlewares.request_context import RequestContextMiddleware



@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # 카탈로그는 시작 시 한 번만 읽어서 공유(읽기 전용 스냅샷)
    app.state.catalog = JsonCatalog(settings.CATALOG_PATH).load()
    app.state.storage = FileStorage(settings.STORAGE_DIR)
    yield

app = FastAPI(title="Storefront Search API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(search.router, prefix="/api")
app.include_router(suggest.router, prefix="/api")
app.include_router(history.router, prefix="/api")

# Global Exception Filter
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)
