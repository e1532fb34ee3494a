# src/config/settings.py

"""Central configuration for the restock tracker."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Static configuration for the restock tracker."""

    # --- Storefront endpoints ---
    STOREFRONT_BASE_URL: str = "https://shop.amul.com"
    CATEGORY_PAGE_URL: str = "https://shop.amul.com/en/browse/protein"
    SESSION_INFO_URL: str = "https://shop.amul.com/user/info.js"
    PREFERENCES_URL: str = (
        "https://shop.amul.com/entity/ms.settings/_/setPreferences"
    )
    PRODUCTS_API_URL: str = "https://shop.amul.com/api/1/entity/ms.products"
    PRODUCT_PAGE_URL: str = "https://shop.amul.com/en/product/"

    # --- Catalog query ---
    CATEGORY_FILTER: str = "protein"
    PAGE_SIZE: int = 100
    CATALOG_FIELDS: list[str] = [
        "name",
        "brand",
        "categories",
        "collections",
        "alias",
        "sku",
        "price",
        "compare_price",
        "original_price",
        "images",
        "metafields",
        "discounts",
        "catalog_only",
        "is_catalog",
        "seller",
        "available",
        "inventory_quantity",
        "net_quantity",
        "num_reviews",
        "avg_rating",
        "inventory_low_stock_quantity",
        "inventory_allow_out_of_stock",
        "default_variant",
        "variants",
        "lp_seller_ids",
    ]

    # --- Region ---
    DEFAULT_SUBSTORE_ID: str = "6650600024e61363e088c526"  # West Bengal

    # --- Networking ---
    REQUEST_TIMEOUT: int = 30           # Seconds before a request times out
    COOKIE_MAX_AGE: int = 86400         # Cookie jar reuse window (secs)

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
    }

    # --- Notifications ---
    TELEGRAM_API_URL: str = "https://api.telegram.org/bot{token}/sendMessage"
    DEFAULT_NOTIFY_SKUS: list[str] = [
        "DBDCP41_30",   # Blueberry Shake
        "LASCP61_30",   # Plain Lassi
        "BTMCP11_30",   # Buttermilk
        "LASCP40_30",   # Rose Lassi
    ]
    DEFAULT_TIMEZONE: str = "Asia/Kolkata"

    # --- Logging ---
    LOG_RETENTION_DAYS: int = 2
    MAX_LOG_FILES: int = 5

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    STATE_FILE: Path = DATA_DIR / "stock_data.json"
    COOKIE_FILE: Path = DATA_DIR / "cookies.json"
    LOGS_DIR: Path = BASE_DIR / "logs"


def _split_csv(value: str | None) -> list[str]:
    """Split a comma-separated env value into trimmed, non-empty items."""
    return [
        item.strip() for item in (value or "").split(",") if item.strip()
    ]


@dataclass
class TrackerConfig:
    """Per-run configuration handed to the tracker pipeline.

    Built once at startup (usually via :meth:`from_env`) and passed
    explicitly to every component that needs it.
    """

    messaging_destination: str
    messaging_credential: str
    region_id: str
    state_file_path: Path
    allow_list: frozenset[str] = field(
        default_factory=lambda: frozenset[str]()
    )
    cookie_file_path: Path | None = None
    timezone: str = Settings.DEFAULT_TIMEZONE

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Build the config from environment variables (and ``.env``)."""
        raw_skus = os.getenv("NOTIFY_SKUS")
        allow_list = (
            _split_csv(raw_skus)
            if raw_skus is not None
            else Settings.DEFAULT_NOTIFY_SKUS
        )
        cookie_file = os.getenv("COOKIE_JAR_FILE")
        return cls(
            messaging_destination=os.getenv("TELEGRAM_CHAT_ID", "").strip(),
            messaging_credential=os.getenv("TELEGRAM_BOT_TOKEN", "").strip(),
            region_id=(
                os.getenv("AMUL_SUBSTORE_ID", "").strip()
                or Settings.DEFAULT_SUBSTORE_ID
            ),
            state_file_path=Path(
                os.getenv("STOCK_STATE_FILE") or Settings.STATE_FILE
            ),
            allow_list=frozenset(allow_list),
            cookie_file_path=Path(cookie_file or Settings.COOKIE_FILE),
            timezone=(
                os.getenv("NOTIFY_TIMEZONE", "").strip()
                or Settings.DEFAULT_TIMEZONE
            ),
        )
