import math

import pytest

from search_server.app.domain.services.pagination import paginate


def test_last_partial_page():
    """
    items=[1..25], page=3, perPage=10 → 21~25 (5건), page=3 유지
    """
    result = paginate(list(range(1, 26)), page=3, per_page=10)

    assert result.pages == 3
    assert result.page == 3
    assert result.total == 25
    assert result.items == [21, 22, 23, 24, 25]


def test_page_beyond_range_clamps_to_last_page():
    """
    items=[1..5], page=99, perPage=10 → page=1 로 보정, 5건 모두 반환
    """
    result = paginate([1, 2, 3, 4, 5], page=99, per_page=10)

    assert result.page == 1
    assert result.pages == 1
    assert result.items == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("page", [0, -3])
def test_page_below_one_clamps_to_first_page(page):
    result = paginate(list(range(30)), page=page, per_page=10)

    assert result.page == 1
    assert result.items == list(range(10))


def test_empty_items_has_one_page():
    result = paginate([], page=2, per_page=10)

    assert result.total == 0
    assert result.pages == 1
    assert result.page == 1
    assert result.items == []


@pytest.mark.parametrize("per_page", [0, -5])
def test_non_positive_per_page_is_treated_as_one(per_page):
    result = paginate(["a", "b", "c"], page=2, per_page=per_page)

    assert result.pages == 3
    assert result.items == ["b"]


@pytest.mark.parametrize("total, per_page", [(0, 1), (1, 1), (7, 3), (25, 10), (30, 10), (100, 7)])
def test_pages_cover_all_items_exactly_once(total, per_page):
    """
    모든 페이지 길이의 합 == total, pages == ceil(total/perPage) (최소 1)
    """
    items = list(range(total))
    first = paginate(items, 1, per_page)

    collected = []
    for page in range(1, first.pages + 1):
        chunk = paginate(items, page, per_page)
        assert len(chunk.items) <= per_page
        collected.extend(chunk.items)

    assert first.pages == max(1, math.ceil(total / per_page))
    assert collected == items
