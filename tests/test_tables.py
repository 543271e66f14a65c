"""
Unit tests for table state and the roster.

Tests occupancy transitions, elapsed-time truncation and range checks.
"""

from datetime import datetime

import pytest

from anticafe.core.tables import (
    InvalidTableNumber,
    Table,
    TableRoster,
    TableState
)


class TestTable:
    """Test the single-table state machine."""

    def test_new_table_is_free(self, clock):
        """Verify tables start free with no start time."""
        table = Table(number=1, clock=clock)
        assert table.state == TableState.FREE
        assert not table.is_occupied
        assert table.start_time is None

    def test_occupy_records_start_time(self, clock):
        """Verify occupy sets the start time from the clock."""
        table = Table(number=1, clock=clock)
        assert table.occupy() is True
        assert table.state == TableState.OCCUPIED
        assert table.start_time == datetime(2024, 1, 1, 12, 0, 0)

    def test_occupy_twice_is_noop(self, clock):
        """Verify a second occupy keeps the first start time."""
        table = Table(number=1, clock=clock)
        table.occupy()
        clock.advance(minutes=5)

        assert table.occupy() is False
        assert table.is_occupied
        assert table.start_time == datetime(2024, 1, 1, 12, 0, 0)

    def test_release_clears_start_time(self, clock):
        """Verify release frees the table."""
        table = Table(number=1, clock=clock)
        table.occupy()
        assert table.release() is True
        assert table.state == TableState.FREE
        assert table.start_time is None

    def test_release_free_table_is_noop(self, clock):
        """Verify releasing a free table reports failure."""
        table = Table(number=1, clock=clock)
        assert table.release() is False
        assert table.state == TableState.FREE

    def test_invalid_number_rejected(self):
        """Verify non-positive table numbers are rejected."""
        with pytest.raises(ValueError, match="table number must be >= 1"):
            Table(number=0)


class TestElapsedTime:
    """Test elapsed minutes and seconds."""

    def test_free_table_reports_zero(self, clock):
        """Verify a free table has no elapsed time."""
        table = Table(number=1, clock=clock)
        assert table.occupied_minutes() == 0
        assert table.occupied_seconds() == 0
        assert table.billable_minutes() == 0

    def test_minutes_are_truncated(self, clock):
        """Verify 125 seconds counts as 2 minutes, not 3."""
        table = Table(number=1, clock=clock)
        table.occupy()
        clock.advance(seconds=125)
        assert table.occupied_minutes() == 2
        assert table.occupied_seconds() == 125

    def test_minutes_truncate_just_below_boundary(self, clock):
        """Verify 119 seconds still counts as 1 minute."""
        table = Table(number=1, clock=clock)
        table.occupy()
        clock.advance(seconds=119)
        assert table.occupied_minutes() == 1

    def test_billable_minutes_floor_is_one(self, clock):
        """Verify an occupied table bills at least one minute."""
        table = Table(number=1, clock=clock)
        table.occupy()
        assert table.occupied_minutes() == 0
        assert table.billable_minutes() == 1

        clock.advance(seconds=59)
        assert table.billable_minutes() == 1

    def test_explicit_now_overrides_clock(self, clock):
        """Verify callers can pin the instant used for elapsed time."""
        table = Table(number=1, clock=clock)
        table.occupy()
        later = datetime(2024, 1, 1, 12, 10, 30)
        assert table.occupied_minutes(later) == 10
        assert table.occupied_seconds(later) == 630


class TestTableRoster:
    """Test roster construction and lookup."""

    def test_default_roster_has_ten_free_tables(self):
        """Verify the default roster size and initial state."""
        roster = TableRoster()
        assert len(roster) == 10
        assert [table.number for table in roster] == list(range(1, 11))
        assert roster.occupied() == []
        assert len(roster.free()) == 10

    def test_configurable_size(self, clock):
        """Verify roster size follows the argument."""
        roster = TableRoster(3, clock=clock)
        assert len(roster) == 3
        assert roster.get(3).number == 3

    def test_empty_roster_rejected(self):
        """Verify a roster needs at least one table."""
        with pytest.raises(ValueError, match="total_tables must be >= 1"):
            TableRoster(0)

    @pytest.mark.parametrize("number", [0, -1, 11, 100])
    def test_out_of_range_lookup(self, number):
        """Verify lookups outside 1..N raise with the valid range."""
        roster = TableRoster(10)
        with pytest.raises(InvalidTableNumber, match="between 1 and 10") as excinfo:
            roster.get(number)
        assert excinfo.value.number == number
        assert excinfo.value.total_tables == 10

    def test_invalid_table_number_is_value_error(self):
        """Verify callers can catch validation errors as ValueError."""
        with pytest.raises(ValueError):
            TableRoster(10).get(11)

    def test_occupied_and_free_partition(self, clock):
        """Verify occupied/free split reflects table state."""
        roster = TableRoster(4, clock=clock)
        roster.get(2).occupy()
        roster.get(4).occupy()

        assert [table.number for table in roster.occupied()] == [2, 4]
        assert [table.number for table in roster.free()] == [1, 3]

    def test_tables_share_roster_clock(self, clock):
        """Verify every table reads the roster's clock."""
        roster = TableRoster(2, clock=clock)
        roster.get(1).occupy()
        clock.advance(minutes=3)
        assert roster.get(1).occupied_minutes() == 3
