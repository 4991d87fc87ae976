"""
디렉터리 하위에 키마다 파일 하나로 값을 저장하는 StoragePort 구현체.
(브라우저 localStorage의 서버측 대응)
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from search_server.app.domain.ports import StoragePort

logger = logging.getLogger(__name__)

_UNSAFE_KEY_RE = re.compile(r"[^A-Za-z0-9._-]")


class FileStorage(StoragePort):
    def __init__(self, base_dir: str, encoding: str = "utf-8") -> None:
        self.base_dir = Path(base_dir).expanduser().resolve()
        self.encoding = encoding

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            # 읽기 실패는 '값 없음'으로 취급
            logger.warning("storage read failed: key=%s error=%s", key, e)
            return None

    def set_item(self, key: str, value: str) -> None:
        """쓰기마다 고유한 임시 파일에 쓴 뒤 교체하여 부분 기록을 남기지 않는다."""
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding=self.encoding, dir=path.parent,
            prefix=path.name + ".", suffix=".tmp", delete=False,
        ) as tmp:
            tmp.write(value)
        try:
            os.replace(tmp.name, path)
        except OSError:
            Path(tmp.name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        return self.base_dir / f"{_UNSAFE_KEY_RE.sub('_', key)}.json"
