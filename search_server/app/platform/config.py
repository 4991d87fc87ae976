from pathlib import Path

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import os

load_dotenv()

# search_server/resources
RESOURCES_DIR = Path(__file__).resolve().parents[2] / "resources"

class Settings(BaseSettings):
    APP_NAME: str = "storefront-search-api"
    DEBUG: bool = False

    # 카탈로그/저장소 경로
    CATALOG_PATH: str = os.getenv('CATALOG_PATH', str(RESOURCES_DIR / "data" / "catalog.json"))
    STORAGE_DIR: str = os.getenv('STORAGE_DIR', str(RESOURCES_DIR / "storage"))
    HISTORY_STORAGE_KEY: str = "gsa-search-history"

    # 검색 동작
    MIN_QUERY_LENGTH: int = 2
    MAX_SUGGESTIONS: int = 8
    MAX_TRENDING_SUGGESTIONS: int = 3
    MAX_SEARCH_HISTORY: int = 10
    DEBOUNCE_DELAY_MS: int = 300
    DEFAULT_PER_PAGE: int = 12

    # 관련도 가중치 (튜닝 대상)
    RELEVANCE_NAME_WEIGHT: float = 3.0
    RELEVANCE_TAG_WEIGHT: float = 2.0
    RELEVANCE_DESCRIPTION_WEIGHT: float = 1.0

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"

settings = Settings()
