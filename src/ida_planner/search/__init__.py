"""Search algorithms for the IDA* planner.

This module implements iterative-deepening A* over caller-defined world
models, with a transposition table for duplicate and cycle pruning.
"""

from .transposition import TranspositionTable, TranspositionEntry
from .ida_star import (
    IDAStarPlanner, PlannerConfig, PlanResult, PassResult, SearchFrame,
    SearchStatistics, plan_action, create_ida_star_planner
)

__all__ = [
    'TranspositionTable',
    'TranspositionEntry',
    'IDAStarPlanner',
    'PlannerConfig',
    'PlanResult',
    'PassResult',
    'SearchFrame',
    'SearchStatistics',
    'plan_action',
    'create_ida_star_planner'
]
