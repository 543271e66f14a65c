"""
Per-minute pricing and cost calculation.

Holds the single process-wide rate used for every cost computation.
"""

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PRICE_PER_MINUTE = 2.0


class InvalidPrice(ValueError):
    """Raised when a negative or non-finite price-per-minute is requested."""
    def __init__(self, price: float):
        if math.isfinite(price):
            message = f"Price per minute cannot be negative, got {price}"
        else:
            message = f"Price per minute must be a finite number, got {price}"
        super().__init__(message)
        self.price = price


def _validate_price(price: float) -> None:
    if not math.isfinite(price) or price < 0:
        logger.error("Rejected price per minute: %s", price)
        raise InvalidPrice(price)


@dataclass
class PricingPolicy:
    """Current billing rate in currency units per minute.

    Changes apply to subsequent calculations only. Costs already
    captured in visit records are never recomputed.
    """
    price_per_minute: float = DEFAULT_PRICE_PER_MINUTE

    def __post_init__(self):
        """Validate initial price is finite and non-negative."""
        _validate_price(self.price_per_minute)

    def set_price_per_minute(self, price: float) -> None:
        """Replace the current rate.

        Args:
            price: New rate, must be >= 0

        Raises:
            InvalidPrice: If price is negative or not finite (the rate is left
                unchanged)
        """
        _validate_price(price)
        self.price_per_minute = price
        logger.info("Price per minute set to %.2f", price)

    def calculate_cost(self, minutes: int) -> float:
        """Cost of ``minutes`` at the current rate.

        Raises:
            ValueError: If minutes is negative
        """
        if minutes < 0:
            raise ValueError("minutes cannot be negative")
        return minutes * self.price_per_minute
