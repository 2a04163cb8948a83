"""Tests for the transposition table."""

import pytest

from ida_planner.search.transposition import TranspositionEntry, TranspositionTable


@pytest.fixture
def table():
    """Create a table over list states keyed by tuple."""
    return TranspositionTable(get_key=tuple, are_equal=lambda a, b: list(a) == list(b))


@pytest.fixture
def colliding_table():
    """Create a table whose key function maps every state to the same key."""
    return TranspositionTable(get_key=lambda state: "same", are_equal=lambda a, b: a == b)


class TestTranspositionEntry:
    """Test TranspositionEntry functionality."""

    def test_dominates(self):
        """Test dominance over later visits."""
        entry = TranspositionEntry(world_model=[0], reaches=[(2, 2.0)])

        assert entry.dominates(2, 2.0)  # same reach
        assert entry.dominates(3, 5.0)  # deeper and dearer
        assert not entry.dominates(1, 2.0)  # shallower
        assert not entry.dominates(4, 1.0)  # cheaper

    def test_reaches_are_not_merged(self):
        """Test that a shallow dear reach and a deep cheap reach stay separate."""
        entry = TranspositionEntry(world_model=[0], reaches=[(3, 1.0)])

        assert entry.record(1, 5.0)

        assert sorted(entry.reaches) == [(1, 5.0), (3, 1.0)]
        assert not entry.dominates(2, 2.0)
        assert entry.dominates(3, 1.0)
        assert entry.dominates(1, 5.0)

    def test_record_drops_beaten_reaches(self):
        """Test that a reach better on both counts replaces the ones it beats."""
        entry = TranspositionEntry(world_model=[0], reaches=[(3, 1.0), (1, 5.0)])

        assert not entry.record(4, 6.0)
        assert entry.record(1, 1.0)

        assert entry.reaches == [(1, 1.0)]


class TestTranspositionTable:
    """Test TranspositionTable functionality."""

    def test_empty_table(self, table):
        """Test lookups on an empty table."""
        assert not table.has([0, 0, 0])
        assert table.get([0, 0, 0]) is None
        assert table.size() == 0

    def test_add_and_has(self, table):
        """Test that added states are found."""
        table.add([1, 0, 0], depth=1, path_cost=1.0)

        assert table.has([1, 0, 0])
        assert not table.has([0, 1, 0])
        entry = table.get([1, 0, 0])
        assert entry.depth == 1
        assert entry.path_cost == 1.0

    def test_depth_only_decreases(self, table):
        """Test that recorded depth is lowered but never raised."""
        table.add([1, 0, 0], depth=3)
        table.add([1, 0, 0], depth=5)
        assert table.get([1, 0, 0]).depth == 3

        table.add([1, 0, 0], depth=1)
        assert table.get([1, 0, 0]).depth == 1
        assert len(table) == 1

    def test_shallow_and_cheap_reaches_kept_apart(self, table):
        """Test that a child beaten by neither earlier reach is not dominated."""
        table.add([2, 0, 0], depth=1, path_cost=5.0)
        table.add([2, 0, 0], depth=3, path_cost=3.0)

        entry = table.get([2, 0, 0])
        assert entry.depth == 1
        assert entry.path_cost == 3.0
        assert not entry.dominates(2, 4.0)
        assert entry.dominates(3, 3.0)

    def test_key_collision_not_conflated(self, colliding_table):
        """Test that unequal states sharing a key are not reported as seen."""
        colliding_table.add("a", depth=2)

        assert colliding_table.has("a")
        assert not colliding_table.has("b")

    def test_key_collision_replaced_by_shallower_state(self, colliding_table):
        """Test that a colliding state only overwrites a deeper entry."""
        colliding_table.add("a", depth=2)

        colliding_table.add("b", depth=3)
        assert colliding_table.has("a")
        assert not colliding_table.has("b")

        colliding_table.add("b", depth=1)
        assert colliding_table.has("b")
        assert not colliding_table.has("a")
        assert colliding_table.size() == 1

    def test_hit_and_miss_counters(self, table):
        """Test lookup counters."""
        table.add([0, 0, 0], depth=0)

        table.has([0, 0, 0])
        table.has([1, 1, 1])
        table.get([0, 0, 0])

        assert table.hits == 2
        assert table.misses == 1

    def test_clear(self, table):
        """Test clearing the table."""
        table.add([0, 0, 0], depth=0)
        table.has([0, 0, 0])

        table.clear()

        assert table.size() == 0
        assert table.hits == 0
        assert not table.has([0, 0, 0])


if __name__ == "__main__":
    pytest.main([__file__])
