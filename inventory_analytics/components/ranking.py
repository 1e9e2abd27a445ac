import pandas as pd

from inventory_analytics import settings
from inventory_analytics.components.valuation import stock_ratio, stock_value
from inventory_analytics.schemas import InventoryValueItem


def rank_top_value_items(
    items_df: pd.DataFrame, limit: int | None = None
) -> list[InventoryValueItem]:
    """
    Highest-value items that are both priced and in stock, best first.
    Unpriced or depleted items cannot rank by value and are left out.
    """
    limit = settings.TOP_VALUE_LIMIT if limit is None else limit
    if items_df.empty:
        return []

    priced = items_df[
        (items_df["cost_per_unit"] > 0) & (items_df["current_stock"] > 0)
    ]
    if priced.empty:
        return []

    ranked = priced.assign(
        total_value=stock_value(priced), stock_ratio=stock_ratio(priced)
    )
    ranked = ranked.sort_values("total_value", ascending=False, kind="stable").head(limit)

    return [
        InventoryValueItem(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            current_stock=row["current_stock"],
            unit=row["unit"],
            cost_per_unit=row["cost_per_unit"],
            total_value=row["total_value"],
            stock_ratio=row["stock_ratio"],
        )
        for row in ranked.to_dict("records")
    ]
