from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field
from search_server.app.api.deps import get_search_service, SearchService
from search_server.app.domain.services.state_codec import parse_query_items, serialize_state
from search_server.app.platform.config import settings
from typing import Dict, Any
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

class ApiResponse(BaseModel):
    """
    검색 응답
    """
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="결과 메시지")
    data: Dict[str, Any] = Field(
        ...,
        description="items/page/pages/total + 정규화된 state, queryString"
    )

@router.get(
    "",
    summary="상품 검색",
    description=(
        "URL 쿼리스트링(query|q|search, category, origin, status, type, brand, "
        "minPrice, maxPrice, quick, sort, page, perPage)으로 상품을 검색합니다. "
        "패싯은 값마다 키를 반복합니다(`category=a&category=b`). "
        "잘못된 값은 기본값으로 대체되며 오류를 내지 않습니다. "
        "`explain=true`면 각 결과에 점수 산출 근거를 포함하고, "
        "`record=true`면 검색어를 최근 검색에 기록합니다."
    ),
    operation_id="searchProducts",
    status_code=200,
    response_model=ApiResponse,
    responses={
        200: {
            "description": "검색 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": {
                                "success": True,
                                "message": "검색 성공",
                                "data": {
                                    "items": [{"id": "p-1", "name": "Korean Beauty Set"}],
                                    "page": 1,
                                    "pages": 1,
                                    "total": 1,
                                    "queryString": "query=korean&sort=price-asc",
                                }
                            }
                        }
                    }
                }
            },
        },
        500: {"description": "서버 내부 오류"},
    },
)
def search(
    request: Request,
    explain: bool = Query(False, description="점수 산출 근거 포함 여부"),
    record: bool = Query(False, description="최근 검색 기록 여부(submit)"),
    svc: SearchService = Depends(get_search_service),
):
    state = parse_query_items(
        request.query_params.multi_items(),
        default_per_page=settings.DEFAULT_PER_PAGE,
    )
    logger.info("SearchRequest: %s", request.url.query)
    result = svc.search(state, explain=explain, record_history=record)

    data = result.model_dump(
        mode="json", by_alias=True,
        exclude={"explain"} if result.explain is None else None)
    data["state"] = state.model_dump(mode="json", by_alias=True)
    data["queryString"] = serialize_state(state, default_per_page=settings.DEFAULT_PER_PAGE)
    return ApiResponse(success=True, message="검색 성공", data=data)
