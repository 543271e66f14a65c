"""
Append-only visit ledger.

Keeps every completed visit in release order for the lifetime of the
process. Nothing is written to disk.
"""

import logging
from typing import Iterator, List, Tuple

from .models import VisitRecord

logger = logging.getLogger(__name__)


class VisitLedger:
    """In-memory ledger of completed visits.

    Records are only ever appended. They are never updated, reordered
    or removed, so iteration order is always release order.
    """

    def __init__(self):
        self._records: List[VisitRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[VisitRecord]:
        return iter(tuple(self._records))

    @property
    def is_empty(self) -> bool:
        return not self._records

    def append(self, record: VisitRecord) -> None:
        """Add a completed visit to the end of the ledger.

        Args:
            record: The visit to record
        """
        self._records.append(record)
        logger.debug(
            "Recorded visit #%d for table %d (%d min, %.2f)",
            len(self._records), record.table_number,
            record.duration_minutes, record.total_cost
        )

    def records(self) -> Tuple[VisitRecord, ...]:
        """Snapshot of all visits in release order."""
        return tuple(self._records)

    def recent(self, limit: int = 5) -> Tuple[VisitRecord, ...]:
        """Get the most recent visits.

        Args:
            limit: Maximum number of visits to return

        Returns:
            Up to ``limit`` of the latest visits, oldest first
        """
        if limit <= 0:
            return ()
        return tuple(self._records[-limit:])
