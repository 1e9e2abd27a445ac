import numpy as np
import pandas as pd

from inventory_analytics import settings


def stock_value(items_df: pd.DataFrame) -> pd.Series:
    """cost_per_unit x current_stock per item."""
    return items_df["cost_per_unit"] * items_df["current_stock"]


def stock_ratio(items_df: pd.DataFrame) -> pd.Series:
    """current_stock / max(minimum_stock, 1), so a zero minimum never divides by zero."""
    return items_df["current_stock"] / items_df["minimum_stock"].clip(lower=1)


def safe_total(values: pd.Series) -> float:
    total = float(values.sum())
    return 0.0 if np.isnan(total) else total


def compute_valuation(items_df: pd.DataFrame) -> dict:
    """
    Snapshot-wide aggregates. Returns keys named after the InventoryAnalytics fields.
    Empty input gives all zeros.
    """
    if items_df.empty:
        return {
            "total_items": 0,
            "total_value": 0.0,
            "low_stock_items": 0,
            "out_of_stock_items": 0,
            "average_stock_level": 0.0,
        }

    status = items_df["status"]
    return {
        "total_items": len(items_df),
        "total_value": safe_total(stock_value(items_df)),
        "low_stock_items": int(status.isin(settings.LOW_STOCK_STATUSES).sum()),
        "out_of_stock_items": int((status == settings.OUT_OF_STOCK_STATUS).sum()),
        "average_stock_level": float(stock_ratio(items_df).mean()),
    }
