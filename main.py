from inventory_analytics import settings
from inventory_analytics.logger import setup_logger
from inventory_analytics.pipelines.analytics import AnalyticsPipeline
from inventory_analytics.pipelines.reorder import ReorderPipeline

# --- Pipeline Registry ---
# Reports produced on every run, in order.
PIPELINE_REGISTRY = [
    AnalyticsPipeline,
    ReorderPipeline,
]


def run_process():
    """Main orchestration function: runs every report for the configured tenant."""
    logger = setup_logger()
    logger.info("--- Starting Inventory Analytics Process ---")
    logger.info(
        f"Tenant: '{settings.TENANT_SCOPE}' | Window: {settings.DEFAULT_WINDOW_DAYS} days"
    )

    for pipeline_cls in PIPELINE_REGISTRY:
        pipeline = pipeline_cls(
            tenant_scope=settings.TENANT_SCOPE,
            window_days=settings.DEFAULT_WINDOW_DAYS,
        )
        pipeline.run()

    logger.info("\n--- Process Finished Successfully ---")


if __name__ == "__main__":
    run_process()
