import json
import logging
from pathlib import Path
from typing import Any, Optional
import requests
from pydantic import BaseModel

from . import settings
from . import utils

logger = logging.getLogger(__name__)


def to_jsonable(validated_data: BaseModel | list[BaseModel]) -> Any:
    """Dumps models with their camelCase aliases. An infinite daysUntilEmpty becomes null."""
    if isinstance(validated_data, BaseModel):
        return json.loads(validated_data.model_dump_json(by_alias=True))
    return [json.loads(item.model_dump_json(by_alias=True)) for item in validated_data]


def save_outputs(
    validated_data: BaseModel | list[BaseModel], filename_base: str
) -> Optional[Path]:
    """Saves the report to a dated JSON file in OUTPUT_DIR, if enabled."""
    if not settings.SAVE_JSON_OUTPUT:
        logger.info("INFO: Skipping JSON file save as per configuration.")
        return None

    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    json_path = settings.OUTPUT_DIR / f"{filename_base}_{date_suffix}.json"

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(to_jsonable(validated_data), f, indent=2)
    logger.info(f"✅ JSON output saved to: {json_path}")
    return json_path


def post_to_webhook(
    validated_data: BaseModel | list[BaseModel],
    metadata: dict[str, Any],
    report_type: str,
) -> bool:
    """
    Posts the report AND its run metadata to the webhook.
    Returns True on success; failures are logged, never raised.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} report to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": to_jsonable(validated_data),
        "metadata": metadata,
    }

    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=payload, timeout=settings.WEBHOOK_TIMEOUT
        )
        response.raise_for_status()
        logger.info("✅ Report successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
