import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from search_server.app.main import app
from search_server.app.domain.models import Product

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_product(**overrides) -> Product:
    """테스트용 최소 상품. overrides는 camelCase/snake_case 모두 허용."""
    idx = overrides.pop("idx", 0)
    data = {
        "id": f"p-{idx}",
        "name": "Alpha Product",
        "description": "Alpha description",
        "category": {"id": "cat-alpha", "name": "Alpha Category", "slug": "alpha-cat"},
        "tags": ["alpha"],
        "origin": "japan",
        "status": "available",
        "type": "ready_stock",
        "selling_price": 1000,
        "rating": {"average": 4.5, "count": 10},
        "created_at": BASE_TIME + timedelta(days=idx),
    }
    data.update(overrides)
    return Product.model_validate(data)


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def catalog():
    """패싯/정렬 검증용 소형 카탈로그(순서가 의미 있음)."""
    return (
        make_product(idx=1, name="Premium Japanese Sneakers", description="Running shoes from Osaka",
                     category={"id": "c-shoes", "name": "Shoes", "slug": "shoes"},
                     tags=["shoes", "japanese"], origin="japan", selling_price=2500,
                     rating={"average": 4.7, "count": 120}, brand={"id": "b1", "name": "Asics"}),
        make_product(idx=2, name="Korean Beauty Set", description="Skincare essentials",
                     category={"id": "c-beauty", "name": "Beauty", "slug": "beauty"},
                     tags=["beauty", "skin"], origin="korea", type="flash_deal", selling_price=900,
                     rating={"average": 4.5, "count": 300}, brand={"id": "b2", "name": "Innisfree"},
                     trending=True),
        make_product(idx=3, name="Matcha Powder", description="Japanese green tea",
                     category={"id": "c-food", "name": "Food", "slug": "food"},
                     tags=["tea"], origin="japan", status="preorder", type="pre_order",
                     selling_price=400, rating={"average": 4.9, "count": None}),
        make_product(idx=4, name="Vitamin Gummies", description="Daily vitamins",
                     category={"id": "c-health", "name": "Health", "slug": "health"},
                     tags=["vitamin", "japanese-style"], origin="usa", status="out_of_stock",
                     selling_price=500, rating={"average": 4.2, "count": 50}, featured=True),
    )


@pytest.fixture(scope="session")
def client():
    return TestClient(app)
