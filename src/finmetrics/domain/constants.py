"""Static category tables and financial thresholds.

All tables are immutable module constants. Category keys are the lowercase,
hyphenated identifiers stored on transactions (e.g. "rent", "emergency-fund").
"""

from decimal import Decimal
from types import MappingProxyType


# Semantic budget bucket -> raw transaction category keys
_SEMANTIC_GROUPS = {
    "housing": ("rent", "mortgage", "home-maintenance", "home-improvement"),
    "utilities": ("electricity", "water", "internet", "phone", "cable-tv"),
    "food": ("groceries", "dining-out", "coffee-shops", "fast-food", "alcohol"),
    "transportation": (
        "fuel",
        "gas",
        "public-transport",
        "taxi-uber",
        "car-maintenance",
        "parking",
    ),
    "insurance": ("car-insurance", "health-insurance", "life-insurance", "home-insurance"),
    "travel": ("flights", "vacation", "hotels"),
    "healthcare": ("medical-visits", "prescriptions", "dental", "vision"),
    "entertainment": ("movies", "games", "music", "sports", "hobbies"),
    "fitness": ("gym",),
    "shopping": ("clothing", "household-items", "electronics"),
    "personal-care": ("personal-care",),
    "family": ("childcare", "family-activities"),
    "education": ("school-fees",),
    "pets": ("pet-food", "pet-care"),
    "financial": ("bank-fees",),
    "debt": ("debt-payment", "credit-card", "loans"),
    "gifts": ("gifts-given",),
    "donations": ("charity",),
    "subscriptions": ("streaming-services", "software-subscriptions"),
    "other": ("other-expense",),
    "savings": (
        "cash",
        "checking-account",
        "savings-account",
        "emergency-fund",
        "general-savings",
        "pension",
        "funds",
    ),
    "investments": ("stocks", "etf", "mutual-funds", "cryptocurrency", "real-estate"),
    "retirement": ("retirement-401k", "retirement-ira"),
}


def _build_category_map() -> dict[str, str]:
    mapping: dict[str, str] = {}
    for semantic, raw_keys in _SEMANTIC_GROUPS.items():
        mapping[semantic] = semantic
        for key in raw_keys:
            mapping[key] = semantic
    return mapping


CATEGORY_TO_BUDGET_TYPE = MappingProxyType(_build_category_map())

DEFAULT_BUDGET_TYPE = "other"

# Asset categories that count as saved money (not cash-flow savings)
SAVINGS_CATEGORIES = frozenset(
    {
        "savings-account",
        "general-savings",
        "emergency-fund",
        "pension",
        "mutual-funds",
        "cryptocurrency",
        "retirement-401k",
        "retirement-ira",
    }
)

EMERGENCY_FUND_CATEGORIES = frozenset({"emergency-fund", "savings-account", "general-savings"})
RETIREMENT_GOAL_CATEGORIES = frozenset({"retirement-401k", "retirement-ira", "pension"})

# Net worth asset allocation groups
LIQUID_CATEGORIES = frozenset(
    {
        "cash",
        "checking-account",
        "savings-account",
        "emergency-fund",
        "general-savings",
        "pension",
        "vacation-fund",
        "education-fund",
        "house-fund",
        "car-fund",
    }
)
INVESTMENT_CATEGORIES = frozenset(
    {"stocks", "bonds", "etf", "mutual-funds", "cryptocurrency", "commodities", "collectibles"}
)
REAL_ESTATE_CATEGORIES = frozenset({"real-estate"})
RETIREMENT_CATEGORIES = frozenset({"retirement-401k", "retirement-ira"})

# Expense buckets keyed on semantic category, checked in this order
EXPENSE_TYPE_BUCKETS = (
    ("essential", frozenset({"housing", "food", "healthcare", "utilities", "transportation"})),
    ("fixed", frozenset({"insurance", "debt", "financial", "subscriptions"})),
    ("variable", frozenset({"personal-care", "family", "pets", "fitness"})),
    (
        "discretionary",
        frozenset({"entertainment", "shopping", "travel", "education", "gifts", "donations"}),
    ),
)

# Income sources keyed on raw income category
INCOME_SOURCE_BUCKETS = (
    ("primary", frozenset({"salary", "business"})),
    ("secondary", frozenset({"freelance"})),
    ("passive", frozenset({"investments", "rental"})),
    ("one_time", frozenset({"gifts", "refunds", "other-income"})),
)

DEBT_PAYMENT_CATEGORIES = frozenset(
    {
        "debt-payment",
        "credit-card-payment",
        "loan-payment",
        "student-loan",
        "personal-loan",
        "auto-loan",
        "car-loan",
        "other-debt",
    }
)

# Budget method percentages (fractions of income)
FIFTY_THIRTY_TWENTY_SPLIT = (
    ("housing", Decimal("0.20")),
    ("utilities", Decimal("0.10")),
    ("food", Decimal("0.125")),
    ("transportation", Decimal("0.075")),
    ("entertainment", Decimal("0.10")),
    ("shopping", Decimal("0.10")),
    ("other", Decimal("0.10")),
    ("savings", Decimal("0.10")),
    ("retirement", Decimal("0.10")),
)
ZERO_BASED_CATEGORIES = ("housing", "food", "transportation", "other")

NEEDS_CATEGORIES = frozenset(
    {"housing", "utilities", "food", "transportation", "healthcare", "insurance", "debt"}
)
WANTS_CATEGORIES = frozenset(
    {"entertainment", "shopping", "fitness", "personal-care", "subscriptions", "travel", "gifts", "other"}
)
SAVINGS_BUDGET_CATEGORIES = frozenset({"savings", "investments", "retirement"})
METHOD_VARIANCE_TOLERANCE = Decimal("5")

# Savings goals
EMERGENCY_FUND_MINIMUM = Decimal("5000")
EMERGENCY_FUND_MONTHS = 6
RETIREMENT_TARGET = Decimal("500000")
EMERGENCY_FUND_ADEQUATE_MONTHS = 3

# Budget health
BUDGET_HEALTH_BANDS = ((85, "excellent"), (70, "good"), (55, "fair"))
MIN_SAVINGS_ALLOCATION = Decimal("0.10")

# Financial health
FINANCIAL_HEALTH_WEIGHTS = MappingProxyType(
    {"net_worth": Decimal("0.40"), "savings_rate": Decimal("0.35"), "debt_ratio": Decimal("0.25")}
)
FINANCIAL_HEALTH_BANDS = ((85, "excellent"), (70, "good"), (55, "fair"), (35, "needs-improvement"))
HIGH_DEBT_RATIO = Decimal("36")
TARGET_SAVINGS_RATE = Decimal("15")

INCOME_STABILITY_THRESHOLD = Decimal("0.70")
SAVINGS_STREAK_MAX_MONTHS = 24
