import pandas as pd

from inventory_analytics import settings
from inventory_analytics.components.valuation import stock_ratio, stock_value
from inventory_analytics.schemas import CategoryAnalytics


def build_category_breakdown(items_df: pd.DataFrame) -> list[CategoryAnalytics]:
    """
    One entry per distinct category label (case-sensitive, taken as-is),
    sorted by total value, highest first.
    """
    if items_df.empty:
        return []

    flagged_statuses = [*settings.LOW_STOCK_STATUSES, settings.OUT_OF_STOCK_STATUS]
    df = items_df.assign(
        value=stock_value(items_df),
        ratio=stock_ratio(items_df),
        is_low=items_df["status"].isin(flagged_statuses),
    )

    breakdown = (
        df.groupby("category", sort=False)
        .agg(
            item_count=("id", "size"),
            total_value=("value", "sum"),
            average_stock_level=("ratio", "mean"),
            low_stock_count=("is_low", "sum"),
        )
        .reset_index()
    )
    breakdown["total_value"] = breakdown["total_value"].fillna(0)
    # Stable sort keeps first-seen order between equal totals.
    breakdown = breakdown.sort_values("total_value", ascending=False, kind="stable")

    return [
        CategoryAnalytics(
            category=str(row["category"]),
            item_count=int(row["item_count"]),
            total_value=float(row["total_value"]),
            average_stock_level=float(row["average_stock_level"]),
            low_stock_count=int(row["low_stock_count"]),
        )
        for row in breakdown.to_dict("records")
    ]
