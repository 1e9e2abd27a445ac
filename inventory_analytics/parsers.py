import logging
from datetime import datetime
from typing import Any, Iterable, Optional
import numpy as np
import pandas as pd
from pydantic import BaseModel, ValidationError

from . import utils
from .schemas import InventoryItem, MovementEvent

logger = logging.getLogger(__name__)

# Raw store field names -> internal schema names.
ITEM_COLUMN_MAP = {
    "currentStock": "current_stock",
    "minStock": "minimum_stock",
    "minimumStock": "minimum_stock",
    "costPerUnit": "cost_per_unit",
    "createdAt": "created_at",
}
MOVEMENT_COLUMN_MAP = {
    "itemId": "item_id",
    "movementType": "movement_kind",
    "movementKind": "movement_kind",
    "kind": "movement_kind",
}

ITEM_NUMERIC_COLUMNS = ["current_stock", "minimum_stock", "cost_per_unit"]
ITEM_TEXT_DEFAULTS = {"name": "", "category": "", "unit": "", "status": "good"}

ITEM_FRAME_COLUMNS = [
    "id",
    "name",
    "category",
    "unit",
    "current_stock",
    "minimum_stock",
    "cost_per_unit",
    "status",
]
MOVEMENT_FRAME_COLUMNS = ["item_id", "quantity", "movement_kind", "day"]


def coerce_numeric(values: pd.Series) -> pd.Series:
    """
    Parses numeric strings, and turns anything non-numeric or non-finite into 0.
    '5' -> 5.0, 'abc' -> 0.0, None -> 0.0, inf -> 0.0
    """
    numbers = pd.to_numeric(values, errors="coerce")
    numbers = numbers.replace([np.inf, -np.inf], np.nan)
    return numbers.fillna(0).astype(float)


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if (
        isinstance(value, datetime)
        and not isinstance(value, pd.Timestamp)
        and not pd.isna(value)
    ):
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def _to_records(raw: Iterable[Any], key_fields: set[str]) -> list[dict]:
    """Plain dicts, with ids already as text so pandas never infers them as numbers."""
    records = []
    for entry in raw:
        record = entry.model_dump() if isinstance(entry, BaseModel) else dict(entry)
        for field in key_fields:
            if field in record and not _is_missing(record[field]):
                record[field] = str(record[field])
        records.append(record)
    return records


def _prepare_frame(
    raw: Iterable[Any], column_map: dict[str, str], key_column: str
) -> pd.DataFrame:
    key_fields = {key_column} | {
        source for source, target in column_map.items() if target == key_column
    }
    df = pd.DataFrame(_to_records(raw, key_fields))
    if df.empty:
        return df

    df = df.rename(columns=column_map)
    # A duplicated column after renaming (e.g. both minStock and minimumStock) keeps the first.
    df = df.loc[:, ~df.columns.duplicated()]

    if key_column not in df.columns:
        logger.warning(f"⚠️ Records have no '{key_column}' field. Nothing to analyze.")
        return pd.DataFrame()

    missing_key = df[key_column].isna()
    if missing_key.any():
        logger.warning(f"⚠️ Dropping {int(missing_key.sum())} records without '{key_column}'.")
        df = df[~missing_key].copy()

    return df


def normalize_items(raw_items: Iterable[Any]) -> list[InventoryItem]:
    """
    The single normalization pass over the item snapshot.
    Accepts dicts (store field names or schema names) or InventoryItem models.
    """
    df = _prepare_frame(raw_items, ITEM_COLUMN_MAP, "id")
    if df.empty:
        return []

    for col in ITEM_NUMERIC_COLUMNS:
        if col not in df.columns:
            df[col] = 0.0
        df[col] = coerce_numeric(df[col])

    for col, default in ITEM_TEXT_DEFAULTS.items():
        if col not in df.columns:
            df[col] = default
        df[col] = df[col].where(df[col].notna(), default).astype(str)

    if "created_at" not in df.columns:
        df["created_at"] = None

    items = []
    for row in df.to_dict("records"):
        row = {str(k): v for k, v in row.items()}
        row["created_at"] = _to_datetime(row["created_at"])
        try:
            items.append(InventoryItem(**row))
        except ValidationError as e:
            logger.warning(f"⚠️ Skipping item '{row['id']}': {e}")

    return items


def normalize_movements(raw_movements: Iterable[Any]) -> list[MovementEvent]:
    """
    Same pass for movement events. Quantities are coerced like item numbers;
    events without a readable timestamp cannot be placed in the window and are dropped.
    """
    df = _prepare_frame(raw_movements, MOVEMENT_COLUMN_MAP, "item_id")
    if df.empty:
        return []

    if "quantity" not in df.columns:
        df["quantity"] = 0.0
    df["quantity"] = coerce_numeric(df["quantity"])

    if "movement_kind" not in df.columns:
        df["movement_kind"] = ""
    df["movement_kind"] = (
        df["movement_kind"].where(df["movement_kind"].notna(), "").astype(str)
    )

    if "timestamp" not in df.columns:
        df["timestamp"] = None

    movements = []
    dropped = 0
    for row in df.to_dict("records"):
        row = {str(k): v for k, v in row.items()}
        row["timestamp"] = _to_datetime(row["timestamp"])
        if row["timestamp"] is None:
            dropped += 1
            continue
        try:
            movements.append(MovementEvent(**row))
        except ValidationError as e:
            dropped += 1
            logger.debug(f"Invalid movement for item '{row['item_id']}': {e}")

    if dropped:
        logger.warning(f"⚠️ Dropped {dropped} movement records with unusable data.")

    return movements


def items_frame(items: list[InventoryItem]) -> pd.DataFrame:
    """Normalized items as a DataFrame, one row per item, in snapshot order."""
    rows = [item.model_dump(include=set(ITEM_FRAME_COLUMNS)) for item in items]
    return pd.DataFrame(rows, columns=ITEM_FRAME_COLUMNS)


def movements_frame(movements: list[MovementEvent]) -> pd.DataFrame:
    """Movements as a DataFrame with the local calendar day of each event."""
    rows = [
        {
            "item_id": m.item_id,
            "quantity": m.quantity,
            "movement_kind": m.movement_kind,
            "day": utils.local_date(m.timestamp),
        }
        for m in movements
    ]
    return pd.DataFrame(rows, columns=MOVEMENT_FRAME_COLUMNS)
