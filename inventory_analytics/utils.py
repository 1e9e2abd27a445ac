import logging
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any
import pandas as pd

logger = logging.getLogger(__name__)

REPORT_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def local_date(timestamp: datetime) -> date:
    """Calendar date of `timestamp` in local time. Naive values are taken as local already."""
    if timestamp.tzinfo is not None:
        return timestamp.astimezone().date()
    return timestamp.date()


def sortable_instant(timestamp: datetime) -> datetime:
    """Aware version of `timestamp` so naive and aware values can be compared."""
    return timestamp.astimezone()


def window_dates(days: int, today: date) -> list[date]:
    """The `days` calendar days ending with `today`, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def find_latest_report(directory: Path, prefix: str) -> tuple[Path, date] | None:
    """
    Finds the newest '<prefix><YYYY-MM-DD>.csv' file in `directory`.
    Returns the path and the date parsed from its name, or None.
    """
    if not directory.is_dir():
        return None

    candidates = []
    for path in directory.glob(f"{prefix}*.csv"):
        match = REPORT_DATE_PATTERN.search(path.name[len(prefix):])
        if not match:
            continue
        try:
            report_date = datetime.strptime(match.group(1), "%Y-%m-%d").date()
        except ValueError:
            logger.warning(f"  > Ignoring {path.name}: bad date in filename.")
            continue
        candidates.append((report_date, path))

    if not candidates:
        return None

    report_date, path = max(candidates)
    return path, report_date


def load_csv(
    file_path: Path, skiprows: int = 0, dtype: Any = None
) -> pd.DataFrame | None:
    """
    A CSV loader with a multi-stage encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which never fails to decode but might misinterpret characters.
    """
    try:
        return pd.read_csv(
            file_path, encoding="utf-8-sig", skiprows=skiprows, dtype=dtype
        )

    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(
                file_path, encoding="latin-1", skiprows=skiprows, dtype=dtype
            )
        except (OSError, ValueError, pd.errors.ParserError) as e_latin1:
            logger.error(
                f"Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"Report not found at {file_path}, skipping.")
        return None

    except pd.errors.EmptyDataError:
        logger.info(f"Report {file_path.name} is empty.")
        return pd.DataFrame()
