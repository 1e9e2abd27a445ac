"""
Inventory analytics and stock-depletion forecasting.

Everything in here is a pure computation over two already-fetched inputs:
the item snapshot and the movement log for a trailing window of days.
`compute_inventory_analytics` is the boundary the rest of the application
calls; it pulls the inputs through injected adapters and never lets a fetch
failure escape.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from . import parsers, utils
from .components.categories import build_category_breakdown
from .components.forecasting import forecast_depletion
from .components.movements import build_movement_series
from .components.ranking import rank_top_value_items
from .components.usage import classify_usage
from .components.valuation import compute_valuation
from .schemas import InventoryAnalytics

logger = logging.getLogger(__name__)

FetchItems = Callable[[Any], Iterable[Any]]
FetchMovements = Callable[[Any, date], Iterable[Any]]


def build_analytics(
    raw_items: Iterable[Any],
    raw_movements: Iterable[Any],
    window_days: int,
    now: Optional[datetime] = None,
) -> InventoryAnalytics:
    """
    Computes the full analytics snapshot from raw records or models.

    Inputs go through one normalization pass first, so every component can rely
    on numeric fields. Movements outside the window (by local calendar day) are
    ignored.
    """
    if window_days < 1:
        raise ValueError(f"window_days must be at least 1, got {window_days}")

    now = now or datetime.now()
    today = now.date()
    window = utils.window_dates(window_days, today)

    items = parsers.normalize_items(raw_items)
    movements = [
        m
        for m in parsers.normalize_movements(raw_movements)
        if window[0] <= utils.local_date(m.timestamp) <= today
    ]
    logger.debug(
        f"Analyzing {len(items)} items and {len(movements)} movements over {window_days} days."
    )

    items_df = parsers.items_frame(items)
    movements_df = parsers.movements_frame(movements)

    return InventoryAnalytics(
        **compute_valuation(items_df),
        top_value_items=rank_top_value_items(items_df),
        stock_movements=build_movement_series(movements_df, window_days, today),
        category_breakdown=build_category_breakdown(items_df),
        stock_predictions=forecast_depletion(items, movements_df, window_days, today),
        usage_analytics=classify_usage(items, movements, movements_df, window_days),
    )


def compute_inventory_analytics(
    tenant_scope: Any,
    window_days: int,
    fetch_items: FetchItems,
    fetch_movements: FetchMovements,
    now: Optional[datetime] = None,
) -> InventoryAnalytics:
    """
    Reads one tenant's items and movements through the adapters and analyzes them.

    `tenant_scope` is passed to the adapters untouched. Movements are requested
    from the first day of the window. If anything fails after argument checks,
    the error is logged and an all-zero result is returned instead.
    """
    if window_days < 1:
        raise ValueError(f"window_days must be at least 1, got {window_days}")

    now = now or datetime.now()
    window = utils.window_dates(window_days, now.date())

    try:
        raw_items = fetch_items(tenant_scope)
        raw_movements = fetch_movements(tenant_scope, window[0])
        return build_analytics(raw_items, raw_movements, window_days, now)
    except Exception:
        logger.exception(
            f"❌ Inventory analytics failed for '{tenant_scope}'. Returning empty result."
        )
        return InventoryAnalytics.empty(window)
