from decimal import Decimal
from typing import Final

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%SZ"

# Display currency is fixed; only the symbol is ever rendered
CURRENCY_SYMBOL: Final[str] = "$"
CENTS: Final[Decimal] = Decimal("0.01")

# Used whenever a stored or requested province key is not recognised
FALLBACK_PROVINCE: Final[str] = "Ontario"

# Matched by exact name, independent of the editable category table
EXEMPT_CATEGORY_NAMES: Final[frozenset[str]] = frozenset({
    "Food",
    "Medication",
    "Basic Groceries",
    "Prescription Medication",
})

UNCATEGORIZED_LABEL: Final[str] = "Uncategorized"

MIN_QUANTITY: Final[int] = 1
MAX_QUANTITY: Final[int] = 99

# Upper bound for prices, budgets and calculator input; money input has at most 2 decimals
MAX_AMOUNT: Final[Decimal] = Decimal("999999.99")
MONEY_DECIMAL_PLACES: Final[int] = 2

DEFAULT_CATEGORY_COLOR: Final[str] = "#4CAF50"
DEFAULT_CATEGORY_ICON: Final[str] = "folder.fill"

# (name, color, icon, taxable) seeded on first run
DEFAULT_CATEGORIES: Final[tuple[tuple[str, str, str, bool], ...]] = (
    ("Food", "#4CAF50", "cart.fill", False),
    ("Medication", "#F44336", "pills.fill", False),
    ("Cleaning", "#2196F3", "sparkles", True),
    ("Electronics", "#9C27B0", "bolt.fill", True),
    ("Clothing", "#FF9800", "tshirt.fill", True),
    ("Household", "#795548", "house.fill", True),
)

CATEGORY_COLORS: Final[tuple[str, ...]] = (
    "#4CAF50", "#F44336", "#2196F3", "#9C27B0", "#FF9800",
    "#795548", "#607D8B", "#E91E63", "#00BCD4", "#8BC34A",
    "#FF5722", "#3F51B5", "#009688", "#FFEB3B", "#673AB7",
)

CATEGORY_ICONS: Final[tuple[str, ...]] = (
    "folder.fill", "cart.fill", "pills.fill", "sparkles", "bolt.fill",
    "tshirt.fill", "house.fill", "gift.fill", "leaf.fill", "drop.fill",
    "flame.fill", "snowflake", "star.fill", "heart.fill", "bag.fill",
)

# Amounts offered by the standalone calculator
QUICK_AMOUNTS: Final[tuple[int, ...]] = (5, 10, 20, 50, 100, 200, 500, 1000)

MAX_ALERT_EVENTS: Final[int] = 300
