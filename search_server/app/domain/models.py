"""
도메인 모델 정의.

- Product/Category/Brand/Rating: 외부(애플리케이션 부트스트랩)에서 공급되는 읽기 전용 상품 레코드
- FilterState/SearchState: URL과 양방향으로 매핑되는 검색 상태
- SearchSuggestion/SearchHistoryItem: 자동완성 제안, 검색 기록
- Page/SearchResult/ScoredProduct: 검색 결과
- HistoryEntry/SuggestionEntry: 검색창 드롭다운의 태그드 유니온 항목

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
JSON 필드명은 camelCase(sellingPrice, createdAt ...)를 사용합니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Generic, Literal, TypeVar, Union
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")

DEFAULT_PRICE_RANGE: tuple[float, float] = (0, 100_000_000)
DEFAULT_PER_PAGE = 12


class CamelModel(BaseModel):
    """camelCase 별칭을 쓰는 공통 베이스."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Origin(str, Enum):
    japan = "japan"
    korea = "korea"
    usa = "usa"
    europe = "europe"

class ProductStatus(str, Enum):
    available = "available"
    preorder = "preorder"
    out_of_stock = "out_of_stock"
    discontinued = "discontinued"

class ProductType(str, Enum):
    ready_stock = "ready_stock"
    pre_order = "pre_order"
    flash_deal = "flash_deal"
    group_buy = "group_buy"

class SortOption(str, Enum):
    """검색 결과 정렬 모드."""
    relevance = "relevance"
    price_asc = "price-asc"
    price_desc = "price-desc"
    rating = "rating"
    popularity = "popularity"
    newest = "newest"

class SuggestionType(str, Enum):
    product = "product"
    category = "category"
    tag = "tag"
    brand = "brand"
    trending = "trending"


# ================= 상품 =================

class Category(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str


class Brand(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Rating(CamelModel):
    model_config = ConfigDict(frozen=True)

    average: float = Field(0.0, ge=0, le=5, description="평균 평점(0~5)")
    count: int | None = Field(0, ge=0, description="평가 수(없으면 0으로 취급)")


class Product(CamelModel):
    """카탈로그 상품 1건. 검색 코어는 읽기만 한다."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="카탈로그 내 고유 식별자")
    name: str
    description: str = ""
    category: Category
    brand: Brand | None = None
    tags: list[str] = Field(default_factory=list)
    origin: Origin
    status: ProductStatus
    type: ProductType
    selling_price: float = Field(..., gt=0)
    original_price: float | None = None
    rating: Rating = Field(default_factory=Rating)
    created_at: datetime
    featured: bool = False
    trending: bool = False
    stock: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_original_price(self) -> "Product":
        if self.original_price is not None and self.original_price < self.selling_price:
            raise ValueError(
                f"originalPrice({self.original_price}) must be >= sellingPrice({self.selling_price})"
            )
        return self


# ================= 검색 상태 =================

class FilterState(CamelModel):
    """패싯 필터 상태. 빈 패싯은 '제한 없음'을 뜻한다."""
    search: str = ""
    categories: list[str] = Field(default_factory=list)
    origins: list[str] = Field(default_factory=list)
    status: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    min_rating: float = Field(0.0, ge=0, le=5, description="최소 평균 평점(0이면 제한 없음)")
    price_range: tuple[float, float] = DEFAULT_PRICE_RANGE
    quick_filter: str = ""

    @model_validator(mode="after")
    def _check_price_range(self) -> "FilterState":
        lo, hi = self.price_range
        if lo < 0 or hi < 0 or lo > hi:
            raise ValueError(f"invalid price range: {self.price_range}")
        return self


class SearchState(CamelModel):
    """URL 쿼리스트링과 1:1로 대응하는 검색 상태."""
    query: str = ""
    filters: FilterState = Field(default_factory=FilterState)
    sort: SortOption = SortOption.relevance
    page: int = Field(1, ge=1)
    per_page: int = Field(DEFAULT_PER_PAGE, ge=1)

    @model_validator(mode="after")
    def _sync_search_text(self) -> "SearchState":
        # query가 자유 텍스트의 기준값, filters.search는 항상 같은 값을 갖는다
        if not self.query and self.filters.search:
            self.query = self.filters.search
        elif self.filters.search != self.query:
            self.filters = self.filters.model_copy(update={"search": self.query})
        return self


# ================= 제안/기록 =================

class SearchSuggestion(CamelModel):
    type: SuggestionType
    text: str
    count: int = Field(1, ge=1)


class SearchHistoryItem(CamelModel):
    query: str
    result_count: int = Field(0, ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HistoryEntry(CamelModel):
    """드롭다운의 '최근 검색' 항목."""
    kind: Literal["history"] = "history"
    query: str
    result_count: int = 0
    timestamp: datetime


class SuggestionEntry(CamelModel):
    """드롭다운의 '추천 검색어' 항목."""
    kind: Literal["suggestion"] = "suggestion"
    type: SuggestionType
    text: str
    count: int


DropdownEntry = Annotated[Union[HistoryEntry, SuggestionEntry], Field(discriminator="kind")]


# ================= 결과 =================

class Page(CamelModel, Generic[T]):
    """paginate() 결과. page는 항상 [1, pages] 범위."""
    page: int = Field(..., ge=1)
    pages: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    items: list[T]


class ScoredProduct(CamelModel):
    """explain 모드에서 돌려주는 점수 산출 근거."""
    id: str
    score: float
    matched_fields: list[str] = Field(default_factory=list)
    highlights: dict[str, str] = Field(default_factory=dict)


class SearchResult(CamelModel):
    items: list[Product]
    page: int = Field(..., ge=1)
    pages: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    explain: list[ScoredProduct] | None = None


