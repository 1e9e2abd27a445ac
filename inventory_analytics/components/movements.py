from datetime import date
import pandas as pd

from inventory_analytics import utils
from inventory_analytics.schemas import StockMovementData


def build_movement_series(
    movements_df: pd.DataFrame, days: int, today: date
) -> list[StockMovementData]:
    """
    One row per calendar day of the window, oldest first. Days without events
    are zero-filled so the series always has exactly `days` entries.
    Events for items missing from the snapshot still count here.
    """
    template_df = pd.DataFrame({"day": utils.window_dates(days, today)})

    if movements_df.empty:
        return [StockMovementData(date=day) for day in template_df["day"]]

    daily = (
        movements_df.assign(magnitude=movements_df["quantity"].abs())
        .groupby("day")
        .agg(
            movements=("item_id", "size"),
            total_quantity_changed=("magnitude", "sum"),
            items_affected=("item_id", "nunique"),
        )
        .reset_index()
    )

    # Left merge keeps the template shape; events outside the window drop out.
    merged_df = pd.merge(template_df, daily, on="day", how="left")
    merged_df["movements"] = merged_df["movements"].fillna(0).astype(int)
    merged_df["total_quantity_changed"] = merged_df["total_quantity_changed"].fillna(0)
    merged_df["items_affected"] = merged_df["items_affected"].fillna(0).astype(int)

    return [
        StockMovementData(
            date=row["day"],
            movements=row["movements"],
            total_quantity_changed=row["total_quantity_changed"],
            items_affected=row["items_affected"],
        )
        for row in merged_df.to_dict("records")
    ]
