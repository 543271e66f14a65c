"""
Data models for storage layer.

Defines the visit record kept in the ledger.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VisitRecord:
    """Immutable record of one completed table occupancy.

    Created once when a table is released and appended to the ledger.
    Once written, these records must never be modified.
    """
    table_number: int
    start_time: datetime
    end_time: datetime
    duration_minutes: int  # Billed minutes, at least 1
    total_cost: float  # duration_minutes * price at release time

    def __post_init__(self):
        """Validate record values are consistent."""
        if self.table_number < 1:
            raise ValueError("table_number must be >= 1")
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        if self.duration_minutes < 1:
            raise ValueError("duration_minutes must be >= 1")
        if self.total_cost < 0:
            raise ValueError("total_cost cannot be negative")
