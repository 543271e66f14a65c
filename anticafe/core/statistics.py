"""
Current and historical statistics for the venue.

Every function here is read-only and recomputes its result from the
roster and ledger on each call.

Ties for most popular / most profitable table are broken in favour of
the lowest table number.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from .venue import Venue
from anticafe.storage.models import VisitRecord

logger = logging.getLogger(__name__)

# Returned by most_popular_table / most_profitable_table when there is no history
NO_TABLE = -1


@dataclass(frozen=True)
class OccupiedTableSnapshot:
    """Billing state of one occupied table at a point in time."""
    number: int
    minutes: int
    cost: float


@dataclass
class CurrentStatistics:
    """What the venue looks like right now."""
    price_per_minute: float
    total_tables: int
    occupied_count: int
    occupied_tables: List[OccupiedTableSnapshot] = field(default_factory=list)
    projected_total: float = 0.0


@dataclass
class HistoryStatistics:
    """Aggregates over every completed visit."""
    total_earnings: float
    average_minutes: float
    total_visits: int
    most_popular_table: int = NO_TABLE
    most_popular_visits: int = 0
    most_profitable_table: int = NO_TABLE
    most_profitable_earnings: float = 0.0
    recent_visits: Tuple[VisitRecord, ...] = ()


def occupied_table_count(venue: Venue) -> int:
    """Number of tables currently occupied."""
    return len(venue.roster.occupied())


def current_total_cost(venue: Venue) -> float:
    """Total amount due if every occupied table were released now.

    Each occupied table is billed for at least one minute, exactly as
    release would bill it.
    """
    now = venue.now()
    total = sum(
        venue.calculate_cost(table.billable_minutes(now))
        for table in venue.roster.occupied()
    )
    logger.debug("Current total across occupied tables: %.2f", total)
    return total


def total_earnings(venue: Venue) -> float:
    """Sum of charges over all completed visits."""
    total = sum(record.total_cost for record in venue.ledger)
    logger.debug("Total earnings: %.2f", total)
    return total


def average_occupation_time(venue: Venue) -> float:
    """Mean billed minutes per visit, or 0.0 with no history."""
    if venue.ledger.is_empty:
        return 0.0
    average = sum(record.duration_minutes for record in venue.ledger) / len(venue.ledger)
    logger.debug("Average occupation time: %.1f min", average)
    return average


def table_visit_counts(venue: Venue) -> Dict[int, int]:
    """Number of completed visits per table (tables with none are absent)."""
    counts: Dict[int, int] = {}
    for record in venue.ledger:
        counts[record.table_number] = counts.get(record.table_number, 0) + 1
    return counts


def table_earnings(venue: Venue) -> Dict[int, float]:
    """Total charged per table (tables with no visits are absent)."""
    earnings: Dict[int, float] = {}
    for record in venue.ledger:
        earnings[record.table_number] = earnings.get(record.table_number, 0.0) + record.total_cost
    return earnings


def table_visit_count(venue: Venue, number: int) -> int:
    return table_visit_counts(venue).get(number, 0)


def table_total_earnings(venue: Venue, number: int) -> float:
    return table_earnings(venue).get(number, 0.0)


def _table_with_max(values: Mapping[int, float]) -> int:
    if not values:
        return NO_TABLE
    # Lowest table number wins among equal maxima
    return min(values, key=lambda number: (-values[number], number))


def most_popular_table(venue: Venue) -> int:
    """Table with the most visits, or NO_TABLE with no history."""
    table = _table_with_max(table_visit_counts(venue))
    logger.debug("Most popular table: %d", table)
    return table


def most_profitable_table(venue: Venue) -> int:
    """Table with the highest total earnings, or NO_TABLE with no history."""
    table = _table_with_max(table_earnings(venue))
    logger.debug("Most profitable table: %d", table)
    return table


def summarize_current(venue: Venue) -> CurrentStatistics:
    """Snapshot of occupancy and amounts currently due."""
    now = venue.now()
    occupied = []
    for table in venue.roster.occupied():
        minutes = table.billable_minutes(now)
        occupied.append(OccupiedTableSnapshot(
            number=table.number,
            minutes=minutes,
            cost=venue.calculate_cost(minutes)
        ))
    return CurrentStatistics(
        price_per_minute=venue.price_per_minute,
        total_tables=venue.total_tables,
        occupied_count=len(occupied),
        occupied_tables=occupied,
        projected_total=sum(snapshot.cost for snapshot in occupied)
    )


def summarize_history(venue: Venue, recent_limit: int = 5) -> HistoryStatistics:
    """Aggregate the ledger into a single report.

    Args:
        venue: Venue to report on
        recent_limit: How many of the latest visits to include

    Returns:
        HistoryStatistics with totals, averages and top tables
    """
    counts = table_visit_counts(venue)
    earnings = table_earnings(venue)
    popular = _table_with_max(counts)
    profitable = _table_with_max(earnings)

    return HistoryStatistics(
        total_earnings=total_earnings(venue),
        average_minutes=average_occupation_time(venue),
        total_visits=len(venue.ledger),
        most_popular_table=popular,
        most_popular_visits=counts.get(popular, 0),
        most_profitable_table=profitable,
        most_profitable_earnings=earnings.get(profitable, 0.0),
        recent_visits=venue.ledger.recent(recent_limit)
    )
