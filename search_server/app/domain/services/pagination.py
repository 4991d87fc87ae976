from __future__ import annotations

import math
from typing import Sequence, TypeVar

from search_server.app.domain.models import Page

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    """
    정렬된 목록을 페이지 단위로 자른다.
    범위를 벗어난 page는 [1, pages]로 보정하고, per_page <= 0 은 1로 취급한다.

    Args:
        items: Sequence[T]
        page: int (1부터)
        per_page: int
    Returns:
        Page[T]: page, pages, total, items
    """
    per_page = max(1, per_page)
    total = len(items)
    pages = max(1, math.ceil(total / per_page))
    current = min(max(1, page), pages)
    start = (current - 1) * per_page
    return Page(page=current, pages=pages, total=total, items=list(items[start:start + per_page]))
