import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Filename Configuration ---
ITEMS_FILENAME_PREFIX = os.getenv("ITEMS_FILENAME_PREFIX", "inventory_items_")
MOVEMENTS_FILENAME_PREFIX = os.getenv(
    "MOVEMENTS_FILENAME_PREFIX", "inventory_movements_"
)
ANALYTICS_FILENAME_BASE = os.getenv("ANALYTICS_FILENAME_BASE", "inventory_analytics")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() in ("1", "true", "yes")

# --- Run Configuration ---
TENANT_SCOPE = os.getenv("TENANT_SCOPE", "default")
DEFAULT_WINDOW_DAYS = int(os.getenv("DEFAULT_WINDOW_DAYS", "30"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = BASE_DIR / os.getenv("LOG_FILE", "logs/inventory_analytics.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = int(os.getenv("WEBHOOK_TIMEOUT", "15"))

# --- Shared Business Logic ---
# Movement kinds that take stock out of the shelf. Only these feed usage rates.
CONSUMPTION_KINDS = ("subtract", "usage")

# Status tags come from the item store as-is.
LOW_STOCK_STATUSES = ("low", "critical")
OUT_OF_STOCK_STATUS = "out"

TOP_VALUE_LIMIT = 10

# Depletion tiers, inclusive on the lower tier.
URGENT_DAYS_THRESHOLD = 3
WARNING_DAYS_THRESHOLD = 7

# Usage frequency as a fraction of the window length.
HIGH_FREQUENCY_RATIO = 0.5
MEDIUM_FREQUENCY_RATIO = 0.2

# Items with no usage get a reorder date this far out.
NO_USAGE_REORDER_HORIZON_DAYS = 365

# Reorder suggestions: (max days until empty, urgency, days of supply to order)
REORDER_TIERS = [
    (3, "critical", 14),
    (7, "high", 21),
    (14, "medium", 30),
]
REORDER_FALLBACK_TIER = ("low", 30)
