from datetime import datetime
import pandas as pd

from inventory_analytics import settings, utils
from inventory_analytics.components.forecasting import consumption_totals
from inventory_analytics.schemas import InventoryItem, MovementEvent, UsageAnalytics


def usage_frequency(total_movements: int, days: int) -> str:
    """Window-relative tier: the thresholds scale with the window length."""
    if total_movements >= days * settings.HIGH_FREQUENCY_RATIO:
        return "high"
    if total_movements >= days * settings.MEDIUM_FREQUENCY_RATIO:
        return "medium"
    return "low"


def latest_movements(movements: list[MovementEvent]) -> dict[str, datetime]:
    """Most recent event timestamp of any kind, per item id."""
    latest: dict[str, datetime] = {}
    for movement in movements:
        current = latest.get(movement.item_id)
        if current is None or utils.sortable_instant(
            movement.timestamp
        ) > utils.sortable_instant(current):
            latest[movement.item_id] = movement.timestamp
    return latest


def classify_usage(
    items: list[InventoryItem],
    movements: list[MovementEvent],
    movements_df: pd.DataFrame,
    days: int,
) -> list[UsageAnalytics]:
    """
    One entry per item, zero-stock items included, heaviest consumers first.
    """
    movement_counts = movements_df.groupby("item_id").size().to_dict()
    usage_by_item = consumption_totals(movements_df)["total_usage"].to_dict()
    last_seen = latest_movements(movements)

    analytics = []
    for item in items:
        total_movements = int(movement_counts.get(item.id, 0))
        total_quantity_used = float(usage_by_item.get(item.id, 0.0))
        analytics.append(
            UsageAnalytics(
                item_id=item.id,
                item_name=item.name,
                category=item.category,
                total_movements=total_movements,
                total_quantity_used=total_quantity_used,
                average_daily_usage=total_quantity_used / days,
                last_movement=last_seen.get(item.id, item.created_at),
                usage_frequency=usage_frequency(total_movements, days),
            )
        )

    return sorted(analytics, key=lambda a: a.total_quantity_used, reverse=True)
