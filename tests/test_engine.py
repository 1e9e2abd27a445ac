import logging
import math
from datetime import timedelta

import pytest

from inventory_analytics.engine import build_analytics, compute_inventory_analytics
from inventory_analytics.schemas import InventoryAnalytics


def _usage(make_movement):
    return [
        make_movement("i1", quantity=2, kind="usage", days_ago=1),
        make_movement("i1", quantity=2, kind="usage", days_ago=2),
    ]


def test_steady_usage_scenario(make_item, make_movement, now):
    result = build_analytics(
        [make_item("i1", currentStock=10, minStock=5, costPerUnit=2)],
        _usage(make_movement),
        4,
        now=now,
    )

    (prediction,) = result.stock_predictions
    assert prediction.daily_usage_rate == 1
    assert prediction.days_until_empty == 10
    assert prediction.status == "good"
    assert result.total_value == 20
    assert len(result.stock_movements) == 4


def test_nearly_empty_scenario(make_item, make_movement, now):
    result = build_analytics(
        [make_item("i1", currentStock=3, minStock=5, costPerUnit=2)],
        _usage(make_movement),
        4,
        now=now,
    )
    (prediction,) = result.stock_predictions
    assert prediction.days_until_empty == 3
    assert prediction.status == "urgent"


def test_empty_inputs(now):
    result = build_analytics([], [], 7, now=now)

    assert result.total_items == 0
    assert result.total_value == 0
    assert len(result.stock_movements) == 7
    assert all(d.movements == 0 for d in result.stock_movements)
    assert result.stock_predictions == []
    assert result.usage_analytics == []
    assert result.top_value_items == []
    assert result.category_breakdown == []


def test_malformed_costs(make_item, now):
    result = build_analytics(
        [
            make_item("parsed", costPerUnit="5", currentStock=10),
            make_item("garbage", costPerUnit="abc", currentStock=10),
        ],
        [],
        7,
        now=now,
    )
    assert result.total_value == 50
    assert not math.isnan(result.total_value)
    assert [i.id for i in result.top_value_items] == ["parsed"]


def test_aggregates_are_never_negative(make_item, now):
    result = build_analytics(
        [
            make_item("a", costPerUnit=None, currentStock="??", minStock=None),
            make_item("b", costPerUnit=float("nan"), currentStock=float("inf")),
        ],
        [],
        3,
        now=now,
    )
    for value in (
        result.total_items,
        result.total_value,
        result.low_stock_items,
        result.out_of_stock_items,
        result.average_stock_level,
    ):
        assert value >= 0
    assert result.total_value == 0


def test_identical_inputs_give_identical_output(make_item, make_movement, now):
    items = [make_item("i1"), make_item("i2", currentStock=0, status="out")]
    movements = _usage(make_movement) + [make_movement("i2", quantity=1, kind="add")]

    first = build_analytics(items, movements, 14, now=now)
    second = build_analytics(items, movements, 14, now=now)
    assert first.model_dump() == second.model_dump()


def test_movements_outside_window_are_ignored(make_item, make_movement, now):
    result = build_analytics(
        [make_item("i1", currentStock=10)],
        [make_movement("i1", quantity=50, days_ago=10), make_movement("i1", quantity=1, days_ago=-2)],
        5,
        now=now,
    )
    (prediction,) = result.stock_predictions
    assert prediction.daily_usage_rate == 0
    (usage,) = result.usage_analytics
    assert usage.total_movements == 0


def test_rejects_empty_window(now):
    with pytest.raises(ValueError):
        build_analytics([], [], 0, now=now)
    with pytest.raises(ValueError):
        compute_inventory_analytics("acme", 0, lambda scope: [], lambda scope, since: [])


def test_compute_passes_scope_and_window_start(make_item, make_movement, now, today):
    calls = {}

    def fetch_items(scope):
        calls["items"] = scope
        return [make_item("i1")]

    def fetch_movements(scope, since_date):
        calls["movements"] = (scope, since_date)
        return _usage(make_movement)

    result = compute_inventory_analytics("acme/branch-1", 4, fetch_items, fetch_movements, now=now)

    assert calls == {
        "items": "acme/branch-1",
        "movements": ("acme/branch-1", today - timedelta(days=3)),
    }
    assert result.total_items == 1
    assert result.stock_predictions[0].daily_usage_rate == 1


@pytest.mark.parametrize("failing", ["items", "movements"])
def test_fetch_failure_degrades_to_empty_result(failing, make_item, now, caplog):
    def fetch_items(scope):
        if failing == "items":
            raise ConnectionError("store unavailable")
        return [make_item()]

    def fetch_movements(scope, since_date):
        raise TimeoutError("log unavailable")

    with caplog.at_level(logging.ERROR, logger="inventory_analytics.engine"):
        result = compute_inventory_analytics("acme", 5, fetch_items, fetch_movements, now=now)

    assert isinstance(result, InventoryAnalytics)
    assert result.total_items == 0
    assert result.total_value == 0
    assert result.stock_predictions == []
    assert len(result.stock_movements) == 5
    assert "acme" in caplog.text


def test_empty_result_serializes_with_camel_case(today):
    payload = InventoryAnalytics.empty([today]).model_dump(by_alias=True)
    assert payload["totalItems"] == 0
    assert payload["stockMovements"][0]["totalQuantityChanged"] == 0


def test_numeric_item_ids_still_match_their_movements(make_item, make_movement, now):
    analytics = build_analytics(
        [make_item(1, currentStock=10, minStock=0), make_item(None)],
        [make_movement(1, quantity=5, days_ago=1)],
        window_days=5,
        now=now,
    )

    (prediction,) = analytics.stock_predictions
    assert prediction.item_id == "1"
    assert prediction.daily_usage_rate == 1
    assert prediction.days_until_empty == 10
    (usage,) = analytics.usage_analytics
    assert usage.total_quantity_used == 5
