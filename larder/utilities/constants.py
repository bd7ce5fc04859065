from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DAYS_BEFORE_EXPIRY: Final[int] = 3
# Absolute tolerance used when comparing float quantities
QUANTITY_TOLERANCE: Final[float] = 1e-9
LOW_STOCK_THRESHOLD: Final[dict[str, float]] = {"g": 100, "kg": 0.2, "ml": 250, "l": 0.25, "pcs": 2}
