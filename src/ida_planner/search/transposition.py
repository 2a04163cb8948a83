"""Transposition table for duplicate and cycle pruning.

Maps a world-state key to every (depth, path cost) pair at which that state
has been reached and that no other recorded reach beats on both counts. The
bounded depth-first search consults it before descending into a freshly
generated child: a child is a dead end only when one actual earlier reach was
at least as shallow and at least as cheap.

Lookups re-verify equality against the stored state, so two different states
that happen to share a key are never treated as duplicates of each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from ida_planner.core.data_models import State

logger = logging.getLogger(__name__)


@dataclass
class TranspositionEntry:
    """Non-dominated reaches of one world state."""
    world_model: State
    reaches: List[Tuple[int, float]] = field(default_factory=list)

    @property
    def depth(self) -> int:
        """Shallowest recorded depth."""
        return min(depth for depth, _ in self.reaches)

    @property
    def path_cost(self) -> float:
        """Cheapest recorded path cost."""
        return min(cost for _, cost in self.reaches)

    def dominates(self, depth: int, path_cost: float) -> bool:
        """True when one recorded reach is no deeper and no dearer than (depth, path_cost)."""
        return any(d <= depth and c <= path_cost for d, c in self.reaches)

    def record(self, depth: int, path_cost: float) -> bool:
        """Add a reach unless an existing one dominates it.

        Returns:
            True if the reach was kept
        """
        if self.dominates(depth, path_cost):
            return False
        self.reaches = [(d, c) for d, c in self.reaches
                        if not (depth <= d and path_cost <= c)]
        self.reaches.append((depth, path_cost))
        return True


class TranspositionTable:
    """Key-indexed memo of visited world states."""

    def __init__(self,
                 get_key: Callable[[State], Hashable],
                 are_equal: Callable[[State, State], bool]) -> None:
        self.get_key = get_key
        self.are_equal = are_equal
        self._entries: Dict[Hashable, TranspositionEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, world_model: State) -> Optional[TranspositionEntry]:
        """Return the entry for ``world_model``, or None if it was never recorded."""
        entry = self._entries.get(self.get_key(world_model))
        if entry is None or not self.are_equal(entry.world_model, world_model):
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def has(self, world_model: State) -> bool:
        """Check whether ``world_model`` has been recorded."""
        return self.get(world_model) is not None

    def add(self, world_model: State, depth: int, path_cost: float = 0.0) -> None:
        """Record that ``world_model`` was reached at ``depth`` with ``path_cost``.

        Reaches beaten on both depth and cost by the new one are dropped. A
        different state stored under the same key is replaced only by one
        strictly shallower than its shallowest reach.
        """
        key = self.get_key(world_model)
        entry = self._entries.get(key)

        if entry is None:
            self._entries[key] = TranspositionEntry(world_model, [(depth, path_cost)])
            return

        if not self.are_equal(entry.world_model, world_model):
            if depth < entry.depth:
                logger.debug(f"Key collision on {key!r}, replacing entry at depth {entry.depth}")
                self._entries[key] = TranspositionEntry(world_model, [(depth, path_cost)])
            return

        entry.record(depth, path_cost)

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def size(self) -> int:
        """Number of recorded states."""
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
