import logging
from datetime import date
from pathlib import Path
from typing import Any

from . import parsers, settings, utils
from .schemas import MovementEvent

logger = logging.getLogger(__name__)


def tenant_input_dir(tenant_scope: Any) -> Path:
    return settings.INPUT_DIR / str(tenant_scope)


def _latest_records(tenant_scope: Any, prefix: str) -> list[dict]:
    found_file_info = utils.find_latest_report(tenant_input_dir(tenant_scope), prefix)
    if not found_file_info:
        logger.warning(f"  > ⚠️ No '{prefix}' report for tenant '{tenant_scope}'.")
        return []

    path, report_date = found_file_info
    logger.info(f"  > Found: {path.name} (Date: {report_date})")

    # Read as text; numbers are parsed in the normalization pass and ids stay as written.
    df = utils.load_csv(path, dtype=str)
    if df is None or df.empty:
        return []
    return df.to_dict("records")


def fetch_items(tenant_scope: Any) -> list[dict]:
    """Current item snapshot for the tenant, as raw records from the latest export."""
    return _latest_records(tenant_scope, settings.ITEMS_FILENAME_PREFIX)


def fetch_movements(tenant_scope: Any, since_date: date) -> list[MovementEvent]:
    """Movement events on or after `since_date` (local calendar day)."""
    records = _latest_records(tenant_scope, settings.MOVEMENTS_FILENAME_PREFIX)
    movements = parsers.normalize_movements(records)
    return [m for m in movements if utils.local_date(m.timestamp) >= since_date]
