from __future__ import annotations

from search_server.app.domain.ports import StoragePort


class MemoryStorage(StoragePort):
    """프로세스 메모리 키/값 저장소. 테스트와 저장 경로가 없는 환경에서 사용."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
