"""Callback contracts shared by the planner and its host domains."""

from .data_models import WorldModel, Goal, ActionSpace, PlanningProblem

__all__ = [
    'WorldModel',
    'Goal',
    'ActionSpace',
    'PlanningProblem'
]
