import logging

from inventory_analytics import parsers
from inventory_analytics.components.reorder import generate_reorder_suggestions
from inventory_analytics.pipeline import DataPipeline
from inventory_analytics.schemas import InventoryAnalytics, ReorderSuggestion

logger = logging.getLogger(__name__)


class ReorderPipeline(DataPipeline):
    def __init__(self, **kwargs):
        super().__init__("reorder_suggestions", **kwargs)

    def transform(self, analytics: InventoryAnalytics) -> list[ReorderSuggestion]:
        logger.info("\n--- Building Reorder Suggestions ---")
        items = parsers.normalize_items(self.items)
        suggestions = generate_reorder_suggestions(analytics, items)

        for suggestion in suggestions:
            logger.info(
                f"  > {suggestion.urgency.upper()}: {suggestion.item_name} "
                f"x{suggestion.suggested_order_quantity} ({suggestion.reasoning})"
            )
        if not suggestions:
            logger.info("✅ Nothing needs reordering.")

        return suggestions
