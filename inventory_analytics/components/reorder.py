import math

from inventory_analytics import settings
from inventory_analytics.schemas import (
    InventoryAnalytics,
    InventoryItem,
    ReorderSuggestion,
    StockPrediction,
)

URGENCY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}

REASONING = {
    "critical": "Critical: stock will run out in {days} days or less",
    "high": "High priority: stock will run out within {days} days",
    "medium": "Medium priority: stock will run out within {days} days",
    "low": "Low priority: proactive reordering recommended",
}


def reorder_tier(days_until_empty: float) -> tuple[str, int, str]:
    """(urgency, days of supply to order, reasoning) for a forecast."""
    for max_days, urgency, supply_days in settings.REORDER_TIERS:
        if days_until_empty <= max_days:
            return urgency, supply_days, REASONING[urgency].format(days=max_days)
    urgency, supply_days = settings.REORDER_FALLBACK_TIER
    return urgency, supply_days, REASONING[urgency]


def suggest_reorder(
    prediction: StockPrediction, cost_per_unit: float
) -> ReorderSuggestion:
    urgency, supply_days, reasoning = reorder_tier(prediction.days_until_empty)
    quantity = math.ceil(prediction.daily_usage_rate * supply_days)
    return ReorderSuggestion(
        item_id=prediction.item_id,
        item_name=prediction.item_name,
        current_stock=prediction.current_stock,
        suggested_order_quantity=quantity,
        estimated_days_until_empty=prediction.days_until_empty,
        urgency=urgency,
        reasoning=reasoning,
        cost_impact=cost_per_unit * quantity,
    )


def generate_reorder_suggestions(
    analytics: InventoryAnalytics, items: list[InventoryItem]
) -> list[ReorderSuggestion]:
    """
    Advisory reorder list built from the depletion forecasts. Only items already
    flagged urgent or warning are included; nothing is ordered here.
    """
    cost_by_item = {item.id: item.cost_per_unit for item in items}

    suggestions = [
        suggest_reorder(prediction, cost_by_item.get(prediction.item_id, 0.0))
        for prediction in analytics.stock_predictions
        if prediction.status != "good" and math.isfinite(prediction.days_until_empty)
    ]

    return sorted(
        suggestions,
        key=lambda s: (URGENCY_ORDER[s.urgency], s.estimated_days_until_empty),
    )
