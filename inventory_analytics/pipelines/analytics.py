import logging

from inventory_analytics import settings
from inventory_analytics.pipeline import DataPipeline
from inventory_analytics.schemas import InventoryAnalytics

logger = logging.getLogger(__name__)


class AnalyticsPipeline(DataPipeline):
    def __init__(self, **kwargs):
        super().__init__(settings.ANALYTICS_FILENAME_BASE, **kwargs)

    def transform(self, analytics: InventoryAnalytics) -> list[InventoryAnalytics]:
        logger.info("\n--- Analytics Summary ---")
        logger.info(f"Items: {analytics.total_items}")
        logger.info(f"Total value: {analytics.total_value:,.2f}")
        logger.info(
            f"Low stock: {analytics.low_stock_items} | Out of stock: {analytics.out_of_stock_items}"
        )

        urgent = [p for p in analytics.stock_predictions if p.status == "urgent"]
        for prediction in urgent:
            logger.warning(
                f"⚠️ {prediction.item_name}: {prediction.days_until_empty:.1f} days of stock left"
            )

        if analytics.total_items == 0:
            logger.warning("⚠️ No inventory data for this run.")

        return [analytics]
