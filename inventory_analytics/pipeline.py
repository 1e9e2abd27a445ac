import logging
import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Optional

from inventory_analytics import adapters, data_handler, engine, settings
from inventory_analytics.schemas import InventoryAnalytics, MovementEvent

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines (Analytics, Reorder, etc.).
    Follows an Extract -> Transform -> Load (ETL) pattern, with the analytics
    engine sitting between extract and transform.
    """

    def __init__(
        self,
        report_type: str,
        tenant_scope: Optional[Any] = None,
        window_days: Optional[int] = None,
        test_mode: bool = False,
        now: Optional[datetime] = None,
    ):
        self.report_type = report_type
        self.tenant_scope = (
            tenant_scope if tenant_scope is not None else settings.TENANT_SCOPE
        )
        self.window_days = (
            window_days if window_days is not None else settings.DEFAULT_WINDOW_DAYS
        )
        self.test_mode = test_mode
        self.now = now
        # Raw item records from the last extract, for transforms that need item fields.
        self.items: list[Any] = []

    def run(self) -> list[Any] | None:
        """
        Orchestrates the pipeline execution.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT ({self.tenant_scope})")
        logger.info("-" * 30)

        # --- 1. EXTRACT + ANALYZE ---
        analytics = engine.compute_inventory_analytics(
            self.tenant_scope,
            self.window_days,
            self.extract_items,
            self.extract_movements,
            now=self.now,
        )

        # --- 2. TRANSFORM ---
        validated_data = self.transform(analytics)
        if validated_data is None:
            logger.error(f"❌ Transformation failed for {self.report_type}.")
            return None

        # --- 3. LOAD ---
        self.load(validated_data)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return validated_data

    def extract_items(self, tenant_scope: Any) -> list[Any]:
        logger.info("\n-- Reading Items --")
        self.items = adapters.fetch_items(tenant_scope)
        return self.items

    def extract_movements(self, tenant_scope: Any, since_date: date) -> list[MovementEvent]:
        logger.info(f"\n-- Reading Movements since {since_date.isoformat()} --")
        return adapters.fetch_movements(tenant_scope, since_date)

    @abstractmethod
    def transform(self, analytics: InventoryAnalytics) -> list[Any] | None:
        """
        Shapes the analytics snapshot into the list of models this report saves.
        """
        pass

    def metadata(self, validated_data: list[Any]) -> dict[str, Any]:
        return {
            "tenantScope": str(self.tenant_scope),
            "windowDays": self.window_days,
            "generatedAt": (self.now or datetime.now()).isoformat(),
            "count": len(validated_data),
        }

    def load(self, validated_data: list[Any]):
        """
        Saves data to disk and posts to webhook.
        """
        # 1. Save Outputs (JSON)
        if validated_data:
            scope_slug = re.sub(r"[^A-Za-z0-9_-]+", "_", str(self.tenant_scope))
            data_handler.save_outputs(validated_data, f"{self.report_type}_{scope_slug}")
        else:
            logger.warning("No data to save to disk.")

        # 2. Post to Webhook
        if not self.test_mode:
            data_handler.post_to_webhook(
                validated_data=validated_data,
                metadata=self.metadata(validated_data),
                report_type=self.report_type,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
