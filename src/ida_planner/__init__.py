"""IDA* action planner.

Computes an ordered sequence of actions that transforms an initial world state
into one satisfying a goal, using iterative-deepening A* with a transposition
table.
"""

from ida_planner.core.data_models import WorldModel, Goal, ActionSpace, PlanningProblem
from ida_planner.search.ida_star import (
    IDAStarPlanner, PlannerConfig, PlanResult, plan_action, create_ida_star_planner
)
from ida_planner.search.transposition import TranspositionTable

__version__ = "0.1.0"

__all__ = [
    'WorldModel',
    'Goal',
    'ActionSpace',
    'PlanningProblem',
    'IDAStarPlanner',
    'PlannerConfig',
    'PlanResult',
    'plan_action',
    'create_ida_star_planner',
    'TranspositionTable'
]
