"""
Occupancy and billing operations for the whole venue.

Ties together the table roster, the pricing policy and the visit ledger.
Every operation on a table number validates the number before touching
any state.
"""

import logging
from datetime import datetime
from typing import Iterator, Tuple

from .pricing import DEFAULT_PRICE_PER_MINUTE, PricingPolicy
from .tables import DEFAULT_TABLE_COUNT, Clock, Table, TableRoster
from anticafe.storage.ledger import VisitLedger
from anticafe.storage.models import VisitRecord

logger = logging.getLogger(__name__)

# Returned by release_table for a table that is already free.
# Costs are never negative, so this cannot collide with a real charge.
RELEASE_NOOP = -1.0


class Venue:
    """A time-billed venue with a fixed set of tables.

    The venue owns its roster, pricing policy and ledger. The clock is
    injected so elapsed time can be simulated in tests.
    """

    def __init__(
        self,
        price_per_minute: float = DEFAULT_PRICE_PER_MINUTE,
        table_count: int = DEFAULT_TABLE_COUNT,
        clock: Clock = datetime.now
    ):
        """Initialize the venue with all tables free.

        Args:
            price_per_minute: Initial billing rate
            table_count: Number of tables, numbered 1..table_count
            clock: Callable returning the current time

        Raises:
            InvalidPrice: If price_per_minute is negative or not finite
            ValueError: If table_count is less than 1
        """
        self._clock = clock
        self.pricing = PricingPolicy(price_per_minute)
        self.roster = TableRoster(table_count, clock=clock)
        self.ledger = VisitLedger()
        logger.info(
            "Venue initialized with %d tables at %.2f per minute",
            table_count, self.pricing.price_per_minute
        )

    @property
    def total_tables(self) -> int:
        return len(self.roster)

    @property
    def tables(self) -> Iterator[Table]:
        return iter(self.roster)

    @property
    def visit_history(self) -> Tuple[VisitRecord, ...]:
        return self.ledger.records()

    @property
    def price_per_minute(self) -> float:
        return self.pricing.price_per_minute

    def now(self) -> datetime:
        return self._clock()

    def set_price_per_minute(self, price: float) -> None:
        """Change the billing rate for all future calculations.

        Raises:
            InvalidPrice: If price is negative or not finite
        """
        self.pricing.set_price_per_minute(price)

    def calculate_cost(self, minutes: int) -> float:
        """Cost of ``minutes`` at the current rate."""
        return self.pricing.calculate_cost(minutes)

    def get_table(self, number: int) -> Table:
        """Look up a table.

        Raises:
            InvalidTableNumber: If number is outside 1..total_tables
        """
        return self.roster.get(number)

    def occupy_table(self, number: int) -> bool:
        """Seat guests at a table.

        Args:
            number: Table number

        Returns:
            True if the table was occupied, False if it was already taken

        Raises:
            InvalidTableNumber: If number is outside 1..total_tables
        """
        table = self.roster.get(number)
        if not table.occupy():
            logger.warning("Table %d is already occupied", number)
            return False
        logger.info("Table %d occupied", number)
        return True

    def release_table(self, number: int) -> float:
        """Free a table and bill the visit.

        The visit is charged for at least one minute. A record of the
        visit is appended to the ledger before the table is freed.

        Args:
            number: Table number

        Returns:
            The amount charged, or RELEASE_NOOP if the table was already free

        Raises:
            InvalidTableNumber: If number is outside 1..total_tables
        """
        table = self.roster.get(number)
        if not table.is_occupied:
            logger.warning("Table %d is already free", number)
            return RELEASE_NOOP

        now = self._clock()
        minutes = table.billable_minutes(now)
        cost = self.calculate_cost(minutes)
        # A clock stepped backwards still ends the visit at its start
        end_time = max(now, table.start_time)
        record = VisitRecord(
            table_number=number,
            start_time=table.start_time,
            end_time=end_time,
            duration_minutes=minutes,
            total_cost=cost
        )
        self.ledger.append(record)
        table.release()

        logger.info("Table %d released after %d min, charged %.2f", number, minutes, cost)
        return cost
