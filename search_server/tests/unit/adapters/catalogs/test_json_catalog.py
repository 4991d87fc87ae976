# search_server/tests/unit/adapters/catalogs/test_json_catalog.py

import json
from pathlib import Path

import pytest

from search_server.app.adapters.catalogs.json_catalog import JsonCatalog
from search_server.app.platform.exceptions import CatalogLoadFailed, ResourceNotFound

"""
경로 처리: file:// 스킴과 일반 경로를 모두 검증.
최상위 형태: 배열 / {"items": [...]} / {"products": [...]}.
에러 케이스: 없는 파일 → ResourceNotFound, 깨진 JSON/스키마 오류/id 중복 → CatalogLoadFailed.
"""

RECORD = {
    "id": "p-1",
    "name": "Matcha",
    "category": {"id": "c", "name": "Food", "slug": "food"},
    "origin": "japan",
    "status": "available",
    "type": "ready_stock",
    "sellingPrice": 420,
    "rating": {"average": 4.8, "count": 9},
    "createdAt": "2024-01-01T00:00:00Z",
}


def write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "payload",
    [
        [RECORD],
        {"items": [RECORD]},
        {"products": [RECORD]},
    ],
)
def test_load_accepts_supported_shapes(tmp_path: Path, payload):
    path = write(tmp_path / "catalog.json", payload)

    products = JsonCatalog(str(path)).load()

    assert isinstance(products, tuple)
    assert [p.id for p in products] == ["p-1"]
    assert products[0].selling_price == 420


def test_load_with_file_uri(tmp_path: Path):
    path = write(tmp_path / "catalog.json", [RECORD])

    products = JsonCatalog(f"file://{path}").load()

    assert len(products) == 1


def test_missing_file_raises_not_found(tmp_path: Path):
    with pytest.raises(ResourceNotFound):
        JsonCatalog(str(tmp_path / "nope.json")).load()


def test_invalid_json_raises(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text("{broken", encoding="utf-8")

    with pytest.raises(CatalogLoadFailed):
        JsonCatalog(str(path)).load()


@pytest.mark.parametrize(
    "payload",
    [
        {"unexpected": True},
        [dict(RECORD, origin="mars")],
        [RECORD, dict(RECORD, name="Duplicate")],
    ],
)
def test_bad_catalog_raises_catalog_load_failed(tmp_path: Path, payload):
    path = write(tmp_path / "catalog.json", payload)

    with pytest.raises(CatalogLoadFailed):
        JsonCatalog(str(path)).load()


def test_bundled_catalog_loads():
    root = Path(__file__).resolve().parents[4]
    products = JsonCatalog(str(root / "resources" / "data" / "catalog.json")).load()

    assert len(products) == len({p.id for p in products}) > 0
