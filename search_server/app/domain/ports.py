"""
도메인 포트(추상 인터페이스).

검색 코어는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from typing import Protocol, Sequence
from .models import Product


class CatalogPort(Protocol):
    """상품 카탈로그 스냅샷을 한 번 읽어온다(파일, DB 덤프 등)."""

    def load(self) -> Sequence[Product]:
        """
        Returns:
            Sequence[Product]: 읽기 전용 상품 목록(id 고유)
        """
        ...


class StoragePort(Protocol):
    """
    로컬 키/값 저장소(브라우저 localStorage 대응).
    값은 JSON 문자열 그대로 저장한다.
    """

    def get_item(self, key: str) -> str | None:
        """
        Returns:
            str | None: 저장된 문자열, 없으면 None
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
