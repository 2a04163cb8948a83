"""Reference planning domains.

Small world models that exercise the planner end to end: a combination lock
with list-of-int states and a sliding-tile puzzle over numpy boards.
"""

from .combination_lock import DigitAction, create_combination_lock_problem
from .sliding_puzzle import create_sliding_puzzle_problem, manhattan_distance, solved_board

__all__ = [
    'DigitAction',
    'create_combination_lock_problem',
    'create_sliding_puzzle_problem',
    'manhattan_distance',
    'solved_board'
]
