# tradetracker/services/constants.py
"""
Centralized constants for the trade tracker services.

Single source of truth for the business constants shared by the ledger,
the pool calculator, the importer, the REST layer and the client.

Usage:
    from tradetracker.services.constants import (
        PRICE_PRECISION,
        CURRENCY_PRECISION,
        RATE_LIMIT_WRITE,
    )
"""

from decimal import Decimal


# =============================================================================
# DECIMAL PRECISION CONSTANTS
# =============================================================================
# All money is Decimal end to end; these are the quantization targets

# Unit prices and weighted-average cost: 4 decimal places
# Matches the NUMERIC(19, 4) storage of the trade and inventory tables
PRICE_PRECISION: Decimal = Decimal("0.0001")

# Summary money amounts: 2 decimal places (e.g., 1234.56)
# Used for: daily flows, pool summary totals, profit figures
CURRENCY_PRECISION: Decimal = Decimal("0.01")

# Ratios: 4 decimal places (e.g., 0.1234 = 12.34%)
# Used for: realReturnRate
RATE_PRECISION: Decimal = Decimal("0.0001")

# Exact running purchase cost of the units held: 10 decimal places
# Matches the NUMERIC(28, 10) storage of inventory.cost_total. BUYs add
# q x p exactly; only the pro-rata reduction on a SELL is ever rounded.
COST_TOTAL_PRECISION: Decimal = Decimal("0.0000000001")

# The same precisions as fixed-point digit counts, for display strings
PRICE_DECIMAL_PLACES: int = 4
CURRENCY_DECIMAL_PLACES: int = 2

# Type-safe zero for Decimal comparisons
ZERO: Decimal = Decimal("0")


# =============================================================================
# ITEM CATALOG
# =============================================================================

# Column widths of the item and trade tables
MAX_MARKET_HASH_NAME_LENGTH: int = 512
MAX_ITEM_NAME_LENGTH: int = 512
MAX_PLATFORM_LENGTH: int = 128
MAX_COUNTERPARTY_LENGTH: int = 128

# Only JSON documents are accepted by the bulk importer
ALLOWED_IMPORT_EXTENSIONS: tuple[str, ...] = (".json",)

# Keys every import entry must carry
IMPORT_ENTRY_FIELDS: tuple[str, ...] = ("en_name", "cn_name", "name_id")


# =============================================================================
# CLIENT SEARCH
# =============================================================================

# Trailing-edge debounce window for interactive item search (seconds)
SEARCH_DEBOUNCE_SECONDS: float = 0.3


# =============================================================================
# RATE LIMITING CONSTANTS
# =============================================================================
# Format follows slowapi/limits syntax: "100/minute", "10/hour", etc.

# Default rate limit for read endpoints (GET requests)
RATE_LIMIT_DEFAULT: str = "100/minute"

# Rate limit for trade and item writes (POST, DELETE)
RATE_LIMIT_WRITE: str = "30/minute"

# Rate limit for bulk import endpoints
# Imports parse up to 50 MB of JSON, keep this tight
RATE_LIMIT_UPLOAD: str = "5/minute"

# Rate limit for health check endpoints
# Higher limit for monitoring tools that poll frequently
RATE_LIMIT_HEALTH: str = "300/minute"
