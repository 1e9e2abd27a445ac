from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class _CamelModel(BaseModel):
    class Config:
        # Build models from normalized DataFrame rows (snake_case) and
        # export snapshots with the camelCase names the dashboard reads.
        populate_by_name = True


# --- Inputs ---


class InventoryItem(_CamelModel):
    """One stock-keeping unit as read from the item store, after normalization."""

    id: str
    name: str = ""
    category: str = ""
    unit: str = ""
    current_stock: float = Field(default=0, alias="currentStock")
    minimum_stock: float = Field(default=0, alias="minimumStock")
    cost_per_unit: float = Field(default=0, alias="costPerUnit")
    # Opaque tag from the store ("good", "low", "critical", "out").
    status: str = "good"
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class MovementEvent(_CamelModel):
    """An append-only stock change. Direction lives in movement_kind, not the sign."""

    item_id: str = Field(..., alias="itemId")
    quantity: float = 0
    movement_kind: str = Field(..., alias="movementKind")
    timestamp: datetime


# --- Outputs ---


class InventoryValueItem(_CamelModel):
    id: str
    name: str
    category: str
    current_stock: float = Field(..., alias="currentStock")
    unit: str
    cost_per_unit: float = Field(..., alias="costPerUnit")
    total_value: float = Field(..., alias="totalValue")
    stock_ratio: float = Field(..., alias="stockRatio")


class StockMovementData(_CamelModel):
    date: date
    movements: int = 0
    total_quantity_changed: float = Field(default=0, alias="totalQuantityChanged")
    items_affected: int = Field(default=0, alias="itemsAffected")


class CategoryAnalytics(_CamelModel):
    category: str
    item_count: int = Field(..., alias="itemCount")
    total_value: float = Field(..., alias="totalValue")
    average_stock_level: float = Field(..., alias="averageStockLevel")
    low_stock_count: int = Field(..., alias="lowStockCount")


class StockPrediction(_CamelModel):
    item_id: str = Field(..., alias="itemId")
    item_name: str = Field(..., alias="itemName")
    current_stock: float = Field(..., alias="currentStock")
    unit: str
    daily_usage_rate: float = Field(..., alias="dailyUsageRate")
    # float("inf") when there is no usage to extrapolate from.
    days_until_empty: float = Field(..., alias="daysUntilEmpty")
    recommended_reorder_date: date = Field(..., alias="recommendedReorderDate")
    status: Literal["urgent", "warning", "good"]


class UsageAnalytics(_CamelModel):
    item_id: str = Field(..., alias="itemId")
    item_name: str = Field(..., alias="itemName")
    category: str
    total_movements: int = Field(..., alias="totalMovements")
    total_quantity_used: float = Field(..., alias="totalQuantityUsed")
    average_daily_usage: float = Field(..., alias="averageDailyUsage")
    last_movement: Optional[datetime] = Field(default=None, alias="lastMovement")
    usage_frequency: Literal["high", "medium", "low"] = Field(
        ..., alias="usageFrequency"
    )


class InventoryAnalytics(_CamelModel):
    """
    The full analytics snapshot handed to the presentation layer.
    Recomputed on every call; nothing here is persisted by the engine.
    """

    total_items: int = Field(default=0, alias="totalItems")
    total_value: float = Field(default=0, alias="totalValue")
    low_stock_items: int = Field(default=0, alias="lowStockItems")
    out_of_stock_items: int = Field(default=0, alias="outOfStockItems")
    average_stock_level: float = Field(default=0, alias="averageStockLevel")
    top_value_items: list[InventoryValueItem] = Field(
        default_factory=list, alias="topValueItems"
    )
    stock_movements: list[StockMovementData] = Field(
        default_factory=list, alias="stockMovements"
    )
    category_breakdown: list[CategoryAnalytics] = Field(
        default_factory=list, alias="categoryBreakdown"
    )
    stock_predictions: list[StockPrediction] = Field(
        default_factory=list, alias="stockPredictions"
    )
    usage_analytics: list[UsageAnalytics] = Field(
        default_factory=list, alias="usageAnalytics"
    )

    @classmethod
    def empty(cls, window: list[date]) -> "InventoryAnalytics":
        """All-zero result with a zero-filled series covering `window`."""
        return cls(stock_movements=[StockMovementData(date=day) for day in window])


class ReorderSuggestion(_CamelModel):
    item_id: str = Field(..., alias="itemId")
    item_name: str = Field(..., alias="itemName")
    current_stock: float = Field(..., alias="currentStock")
    suggested_order_quantity: int = Field(..., ge=0, alias="suggestedOrderQuantity")
    estimated_days_until_empty: float = Field(..., alias="estimatedDaysUntilEmpty")
    urgency: Literal["critical", "high", "medium", "low"]
    reasoning: str
    cost_impact: float = Field(default=0, alias="costImpact")
