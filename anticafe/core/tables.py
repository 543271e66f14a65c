"""
Table occupancy state and the venue roster.

Tracks which tables are occupied and since when. Tables know nothing
about prices or the visit ledger.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_TABLE_COUNT = 10
MIN_BILLABLE_MINUTES = 1


class TableState(Enum):
    """Occupancy states of a single table."""
    FREE = "free"
    OCCUPIED = "occupied"


class InvalidTableNumber(ValueError):
    """Raised when a table number falls outside the roster range."""
    def __init__(self, number: int, total_tables: int):
        super().__init__(f"Table number must be between 1 and {total_tables}, got {number}")
        self.number = number
        self.total_tables = total_tables


@dataclass
class Table:
    """A single billable table.

    ``start_time`` is set if and only if the table is occupied.
    """
    number: int
    clock: Clock = field(default=datetime.now, repr=False, compare=False)
    state: TableState = TableState.FREE
    start_time: Optional[datetime] = None

    def __post_init__(self):
        """Validate table number is positive."""
        if self.number < 1:
            raise ValueError("table number must be >= 1")

    @property
    def is_occupied(self) -> bool:
        return self.state == TableState.OCCUPIED

    def occupy(self) -> bool:
        """Mark the table occupied starting now.

        Returns:
            True if the table was free, False if it was already occupied
            (in which case nothing changes)
        """
        if self.is_occupied:
            return False
        self.state = TableState.OCCUPIED
        self.start_time = self.clock()
        return True

    def release(self) -> bool:
        """Mark the table free and clear its start time.

        Returns:
            True if the table was occupied, False if it was already free
        """
        if not self.is_occupied:
            return False
        self.state = TableState.FREE
        self.start_time = None
        return True

    def _elapsed(self, now: Optional[datetime]) -> timedelta:
        if not self.is_occupied or self.start_time is None:
            return timedelta(0)
        if now is None:
            now = self.clock()
        return now - self.start_time

    def occupied_minutes(self, now: Optional[datetime] = None) -> int:
        """Whole minutes since occupation began, truncated. 0 when free."""
        return self._elapsed(now) // timedelta(minutes=1)

    def occupied_seconds(self, now: Optional[datetime] = None) -> int:
        """Whole seconds since occupation began, truncated. 0 when free."""
        return self._elapsed(now) // timedelta(seconds=1)

    def billable_minutes(self, now: Optional[datetime] = None) -> int:
        """Minutes to charge if the table were released at ``now``.

        Every visit bills for at least one minute, so an occupied table
        never reports less than ``MIN_BILLABLE_MINUTES``.
        """
        if not self.is_occupied:
            return 0
        return max(MIN_BILLABLE_MINUTES, self.occupied_minutes(now))


class TableRoster:
    """Fixed, ordered set of tables numbered 1..N."""

    def __init__(self, total_tables: int = DEFAULT_TABLE_COUNT, clock: Clock = datetime.now):
        """Create all tables in the free state.

        Args:
            total_tables: Number of tables in the venue
            clock: Time source shared by every table

        Raises:
            ValueError: If total_tables is less than 1
        """
        if total_tables < 1:
            raise ValueError("total_tables must be >= 1")
        self._tables: List[Table] = [
            Table(number=number, clock=clock) for number in range(1, total_tables + 1)
        ]
        logger.debug("Created %d tables", total_tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables)

    def validate_number(self, number: int) -> None:
        """Raise InvalidTableNumber unless ``number`` is within 1..N."""
        if number < 1 or number > len(self._tables):
            logger.error("Invalid table number: %s", number)
            raise InvalidTableNumber(number, len(self._tables))

    def get(self, number: int) -> Table:
        """Look up a table by its number.

        Raises:
            InvalidTableNumber: If number is outside 1..N
        """
        self.validate_number(number)
        return self._tables[number - 1]

    def occupied(self) -> List[Table]:
        return [table for table in self._tables if table.is_occupied]

    def free(self) -> List[Table]:
        return [table for table in self._tables if not table.is_occupied]
