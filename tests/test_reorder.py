import math
from datetime import date

import pytest

from inventory_analytics.components.reorder import generate_reorder_suggestions
from inventory_analytics.schemas import InventoryAnalytics, InventoryItem, StockPrediction


def _prediction(item_id, rate, days_left, status=None):
    if status is None:
        status = "urgent" if days_left <= 3 else "warning" if days_left <= 7 else "good"
    return StockPrediction(
        item_id=item_id,
        item_name=item_id.title(),
        current_stock=rate * days_left if math.isfinite(days_left) else 10,
        unit="kg",
        daily_usage_rate=rate,
        days_until_empty=days_left,
        recommended_reorder_date=date(2026, 10, 18),
        status=status,
    )


@pytest.fixture
def analytics():
    return InventoryAnalytics(
        stock_predictions=[
            _prediction("flour", 1.5, 2),
            _prediction("sugar", 0.7, 5),
            _prediction("salt", 1, 10),
            _prediction("rice", 1, 20),
            _prediction("idle", 0, math.inf),
        ]
    )


def test_tiers_quantities_and_costs(analytics):
    items = [
        InventoryItem(id="flour", cost_per_unit=2),
        InventoryItem(id="sugar", cost_per_unit=1.5),
    ]
    suggestions = generate_reorder_suggestions(analytics, items)

    assert [s.item_id for s in suggestions] == ["flour", "sugar"]
    flour, sugar = suggestions

    assert (flour.urgency, flour.suggested_order_quantity) == ("critical", 21)
    assert flour.cost_impact == 42
    assert (sugar.urgency, sugar.suggested_order_quantity) == ("high", 15)
    assert sugar.cost_impact == pytest.approx(22.5)


def test_healthy_items_are_not_suggested(analytics):
    suggested = {s.item_id for s in generate_reorder_suggestions(analytics, [])}

    assert "salt" not in suggested
    assert "rice" not in suggested
    assert "idle" not in suggested


def test_flagged_slow_movers_get_medium_and_low_tiers():
    analytics = InventoryAnalytics(
        stock_predictions=[
            _prediction("rice", 1, 20, status="warning"),
            _prediction("salt", 1, 10, status="warning"),
            _prediction("idle", 0, math.inf, status="warning"),
        ]
    )
    suggestions = generate_reorder_suggestions(analytics, [])

    assert [(s.item_id, s.urgency) for s in suggestions] == [
        ("salt", "medium"),
        ("rice", "low"),
    ]
    salt, rice = suggestions
    assert salt.suggested_order_quantity == 30
    # Unknown to the item list, so no cost estimate.
    assert salt.cost_impact == 0
    assert rice.reasoning.startswith("Low priority")


def test_no_predictions():
    assert generate_reorder_suggestions(InventoryAnalytics(), []) == []
