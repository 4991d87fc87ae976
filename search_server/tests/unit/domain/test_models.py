import pytest
from pydantic import TypeAdapter, ValidationError

from search_server.app.domain.models import (
    DropdownEntry,
    FilterState,
    HistoryEntry,
    Product,
    SearchState,
    SuggestionEntry,
)


def test_product_accepts_camel_case_json(product_factory):
    p = Product.model_validate({
        "id": "x",
        "name": "Tea",
        "category": {"id": "c", "name": "Food", "slug": "food"},
        "origin": "japan",
        "status": "available",
        "type": "ready_stock",
        "sellingPrice": 100,
        "originalPrice": 150,
        "rating": {"average": 4.0, "count": 3},
        "createdAt": "2024-01-01T00:00:00Z",
    })

    assert p.selling_price == 100
    assert p.original_price == 150
    assert p.model_dump(by_alias=True)["sellingPrice"] == 100


@pytest.mark.parametrize(
    "overrides",
    [
        {"selling_price": 0},
        {"selling_price": 100, "original_price": 50},
        {"rating": {"average": 5.5, "count": 1}},
        {"rating": {"average": 4.0, "count": -1}},
        {"origin": "mars"},
    ],
)
def test_product_invariants(product_factory, overrides):
    with pytest.raises(ValidationError):
        product_factory(**overrides)


def test_product_is_read_only(product_factory):
    p = product_factory()

    with pytest.raises(ValidationError):
        p.name = "changed"


def test_filter_state_rejects_inverted_price_range():
    with pytest.raises(ValidationError):
        FilterState(price_range=(500, 100))


def test_search_state_keeps_query_and_filter_search_in_sync():
    assert SearchState(query="tea").filters.search == "tea"
    assert SearchState(filters=FilterState(search="tea")).query == "tea"
    assert SearchState(query="tea", filters=FilterState(search="coffee")).filters.search == "tea"


def test_dropdown_entry_is_discriminated_by_kind():
    adapter = TypeAdapter(list[DropdownEntry])

    entries = adapter.validate_python([
        {"kind": "history", "query": "tea", "resultCount": 2, "timestamp": "2024-01-01T00:00:00Z"},
        {"kind": "suggestion", "type": "tag", "text": "matcha", "count": 4},
    ])

    assert isinstance(entries[0], HistoryEntry)
    assert isinstance(entries[1], SuggestionEntry)

    with pytest.raises(ValidationError):
        adapter.validate_python([{"kind": "other", "text": "x"}])
