import math
from datetime import date, timedelta
import pandas as pd

from inventory_analytics import settings
from inventory_analytics.schemas import InventoryItem, StockPrediction


def consumption_totals(movements_df: pd.DataFrame) -> pd.DataFrame:
    """
    Per item: number of consumption-type events and their summed quantity.
    Indexed by item_id; additions and corrections are ignored.
    """
    consumed = movements_df[
        movements_df["movement_kind"].isin(settings.CONSUMPTION_KINDS)
    ]
    return consumed.groupby("item_id").agg(
        events=("quantity", "size"), total_usage=("quantity", "sum")
    )


def urgency_tier(days_until_empty: float) -> str:
    if days_until_empty <= settings.URGENT_DAYS_THRESHOLD:
        return "urgent"
    if days_until_empty <= settings.WARNING_DAYS_THRESHOLD:
        return "warning"
    return "good"


def no_usage_reorder_date(today: date) -> date:
    """Far-future marker for "nothing to forecast"; sorts after every real reorder date."""
    return today + timedelta(days=settings.NO_USAGE_REORDER_HORIZON_DAYS)


def _no_usage_prediction(item: InventoryItem, today: date) -> StockPrediction:
    return StockPrediction(
        item_id=item.id,
        item_name=item.name,
        current_stock=item.current_stock,
        unit=item.unit,
        daily_usage_rate=0.0,
        days_until_empty=math.inf,
        recommended_reorder_date=no_usage_reorder_date(today),
        status="good",
    )


def predict_item(
    item: InventoryItem, events: int, total_usage: float, days: int, today: date
) -> StockPrediction:
    """Linear depletion forecast for one in-stock item."""
    if events == 0:
        return _no_usage_prediction(item, today)

    daily_usage_rate = total_usage / days
    if daily_usage_rate <= 0:
        return _no_usage_prediction(item, today)

    days_until_empty = item.current_stock / daily_usage_rate
    # Days until stock crosses the minimum; already below it means reorder today.
    days_until_reorder = max(
        0.0, days_until_empty - item.minimum_stock / daily_usage_rate
    )
    # Real forecasts stay strictly before the no-usage marker.
    reorder_offset = min(
        math.floor(days_until_reorder), settings.NO_USAGE_REORDER_HORIZON_DAYS - 1
    )

    return StockPrediction(
        item_id=item.id,
        item_name=item.name,
        current_stock=item.current_stock,
        unit=item.unit,
        daily_usage_rate=daily_usage_rate,
        days_until_empty=days_until_empty,
        recommended_reorder_date=today + timedelta(days=reorder_offset),
        status=urgency_tier(days_until_empty),
    )


def forecast_depletion(
    items: list[InventoryItem], movements_df: pd.DataFrame, days: int, today: date
) -> list[StockPrediction]:
    """
    One prediction per item with stock on hand, soonest to run out first.
    Items already at zero are depleted, not depleting, and get no prediction.
    """
    totals = consumption_totals(movements_df)
    events_by_item = totals["events"].to_dict()
    usage_by_item = totals["total_usage"].to_dict()

    predictions = []
    for item in items:
        if item.current_stock <= 0:
            continue
        predictions.append(
            predict_item(
                item,
                int(events_by_item.get(item.id, 0)),
                float(usage_by_item.get(item.id, 0.0)),
                days,
                today,
            )
        )

    return sorted(predictions, key=lambda p: p.days_until_empty)
