"""
file:// 경로나 로컬 경로의 JSON 파일에서 상품 카탈로그를 읽는 CatalogPort 구현체.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from search_server.app.domain.models import Product
from search_server.app.domain.ports import CatalogPort
from search_server.app.platform.exceptions import CatalogLoadFailed, ResourceNotFound

logger = logging.getLogger(__name__)

_products_adapter = TypeAdapter(list[Product])


class JsonCatalog(CatalogPort):
    def __init__(self, uri: str, default_encoding: str = "utf-8") -> None:
        self.uri = uri
        self.default_encoding = default_encoding

    def load(self) -> tuple[Product, ...]:
        """
        JSON 파일을 읽어 상품 목록을 반환한다.
        - 최상위가 배열이거나 {"items": [...]} / {"products": [...]} 형태를 허용
        - 상품 스키마 검증 실패, id 중복은 CatalogLoadFailed

        Returns:
            tuple[Product, ...]: 읽기 전용 스냅샷
        """
        path = self._convert_uri_to_path(self.uri)
        if not path.exists():
            raise ResourceNotFound("catalog", f"Catalog not found: {self.uri}")

        try:
            data = json.loads(path.read_text(encoding=self.default_encoding))
        except (UnicodeDecodeError, ValueError) as e:
            raise CatalogLoadFailed(self.uri, f"invalid json: {e}") from e

        records = self._extract_records(data)
        try:
            products = _products_adapter.validate_python(records)
        except ValidationError as e:
            raise CatalogLoadFailed(self.uri, f"{e.error_count()} invalid product record(s): {e}") from e

        seen: set[str] = set()
        for p in products:
            if p.id in seen:
                raise CatalogLoadFailed(self.uri, f"duplicate product id: {p.id}")
            seen.add(p.id)

        logger.info("catalog loaded: uri=%s products=%d", self.uri, len(products))
        return tuple(products)

    def _extract_records(self, data: Any) -> list:
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in ("items", "products"):
                if isinstance(data.get(key), list):
                    return data[key]
        raise CatalogLoadFailed(self.uri, "expected a list of products")

    def _convert_uri_to_path(self, uri: str) -> Path:
        """
        file:// prefix를 제거하고 ~, 상대 경로를 절대 경로로 변환한다.

        Args:
            uri: 'file:///abs/catalog.json' 또는 'data/catalog.json'
        Returns:
            Path: 절대 경로
        """
        path_str = uri
        if uri.startswith("file://"):
            path_str = uri.replace("file://", "", 1)
        return Path(path_str).expanduser().resolve()
