"""Core data models for the IDA* planner.

The planner never looks inside a world state or an action. Everything it
needs to know about them is supplied by the host through the callback
contracts defined here:

- ``WorldModel``: the initial state plus key / equality / clone operations
- ``Goal``: admissible cost-to-go estimate and fulfillment test
- ``ActionSpace``: per-state lazy action enumeration and action cost
- ``apply_action(state, action)``: mutates an already-cloned state in place

Preconditions such as heuristic admissibility, a non-aliasing ``clone`` or a
terminating ``actions_from`` are the host's responsibility and are not checked
at runtime.
"""

import copy
import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterable, List, Tuple

# Opaque caller-defined types
State = Any
Action = Any

ApplyAction = Callable[[State, Action], None]


@dataclass
class WorldModel:
    """Initial state and the operations the planner needs on states.

    Two states that are equal must produce the same key. ``clone`` must return
    a value that can be mutated without affecting the original.
    """
    initial: State
    get_key: Callable[[State], Hashable]
    are_equal: Callable[[State, State], bool] = operator.eq
    clone: Callable[[State], State] = copy.deepcopy


@dataclass
class Goal:
    """Cost-to-go estimate and fulfillment test over world states."""
    estimate_cost: Callable[[State], float]  # admissible, >= 0
    is_fulfilled: Callable[[State], bool]


@dataclass
class ActionSpace:
    """Lazy action enumeration and fixed action costs."""
    get_cost: Callable[[Action], float]  # >= 0
    actions_from: Callable[[State], Iterable[Action]]


@dataclass
class PlanningProblem:
    """All four contracts bundled together."""
    world_model: WorldModel
    goal: Goal
    action_space: ActionSpace
    apply_action: ApplyAction
    name: str = field(default="problem")

    def replay(self, actions: List[Action]) -> Tuple[State, float]:
        """Apply a plan to a clone of the initial state.

        Args:
            actions: Plan to apply, left to right

        Returns:
            (final_state, total_cost) after the whole plan
        """
        state = self.world_model.clone(self.world_model.initial)
        total_cost = 0.0
        for action in actions:
            self.apply_action(state, action)
            total_cost += self.action_space.get_cost(action)
        return state, total_cost

    def is_solved_by(self, actions: List[Action]) -> bool:
        """Check whether applying ``actions`` reaches a goal state."""
        final_state, _ = self.replay(actions)
        return self.goal.is_fulfilled(final_state)
