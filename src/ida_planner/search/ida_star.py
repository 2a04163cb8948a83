"""Iterative-deepening A* (IDA*) action planner.

This module implements a domain-independent IDA* planner. Each pass is a
depth-first search bounded both by plan length (``max_depth``) and by a cost
cutoff on f(n) = g(n) + h(n). When a pass fails, the cutoff is raised to the
smallest f-score that exceeded it and the search restarts from the initial
state. With an admissible heuristic the first plan found is cost-optimal among
plans of at most ``max_depth`` actions.

The depth-first search is iterative: a fixed array of ``max_depth + 1`` frames
is allocated per pass and reused by index while backtracking, so deep plans
never hit the interpreter's recursion limit.
"""

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ida_planner.core.data_models import (
    Action, ActionSpace, ApplyAction, Goal, PlanningProblem, State, WorldModel
)
from ida_planner.search.transposition import TranspositionTable

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


@dataclass
class SearchFrame:
    """One depth level of the explicit depth-first stack."""
    world_model: State = None
    actions: Optional[Iterator[Action]] = None
    path_cost: float = 0.0  # g(n) at this depth
    action: Action = None  # action taken from this frame to reach the next depth


@dataclass
class PassResult:
    """Outcome of one bounded depth-first pass."""
    success: bool
    actions: List[Action] = field(default_factory=list)
    path_cost: float = 0.0
    next_cutoff: Optional[float] = None  # None when nothing exceeded the cutoff


@dataclass
class SearchStatistics:
    """Counters collected over one planning call."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    nodes_pruned: int = 0  # children whose f-score exceeded the cutoff
    duplicate_states: int = 0  # children dropped by the transposition table
    max_depth_reached: int = 0
    iterations: int = 0
    transposition_entries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'nodes_pruned': self.nodes_pruned,
            'duplicate_states': self.duplicate_states,
            'max_depth_reached': self.max_depth_reached,
            'iterations': self.iterations,
            'transposition_entries': self.transposition_entries,
        }


@dataclass
class PlanResult:
    """Result from an IDA* planning call."""
    success: bool
    actions: List[Action] = field(default_factory=list)
    total_cost: float = 0.0
    iterations: int = 0
    cutoffs: List[float] = field(default_factory=list)
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    statistics: Optional[SearchStatistics] = None


@dataclass
class PlannerConfig:
    """Configuration for the IDA* planner."""
    max_depth: int = 32  # used when a call does not pass max_depth
    duplicate_detection: bool = True  # prune duplicate/cyclic states
    reuse_transposition_table: bool = False  # share one table across all cutoff passes

    @classmethod
    def from_config(cls, cfg: Optional[Any] = None) -> 'PlannerConfig':
        """Build a planner config from a Hydra config and environment overrides.

        Args:
            cfg: Loaded configuration with an optional ``planner`` section

        Returns:
            PlannerConfig with defaults for anything not configured
        """
        config = cls()

        if cfg is not None and 'planner' in cfg:
            pcfg = cfg.planner
            if 'max_depth' in pcfg:
                config.max_depth = int(pcfg.max_depth)
            if 'duplicate_detection' in pcfg:
                config.duplicate_detection = bool(pcfg.duplicate_detection)
            if 'reuse_transposition_table' in pcfg:
                config.reuse_transposition_table = bool(pcfg.reuse_transposition_table)

        # Environment variables can override for quick experiments
        if 'IDA_PLANNER_MAX_DEPTH' in os.environ:
            config.max_depth = int(os.environ['IDA_PLANNER_MAX_DEPTH'])
        if 'IDA_PLANNER_DUPLICATE_DETECTION' in os.environ:
            config.duplicate_detection = os.environ['IDA_PLANNER_DUPLICATE_DETECTION'].lower() == 'true'
        if 'IDA_PLANNER_REUSE_TT' in os.environ:
            config.reuse_transposition_table = os.environ['IDA_PLANNER_REUSE_TT'].lower() == 'true'

        return config


class IDAStarPlanner:
    """Iterative-deepening A* planner with a transposition table.

    The planner is synchronous and keeps no state between calls other than the
    statistics of the last run. It never mutates the caller's initial world
    model: every child state is a clone.
    """

    def __init__(self, config: Optional[PlannerConfig] = None):
        """Initialize IDA* planner.

        Args:
            config: Planner configuration. If None, the global Hydra config
                (when loaded) and environment overrides are used.
        """
        if config is None:
            from ida_planner.config import get_config as _get_cfg
            config = PlannerConfig.from_config(_get_cfg())
        self.config = config
        self.statistics = SearchStatistics()

        logger.info(f"IDA* planner initialized with max_depth={self.config.max_depth}, "
                    f"duplicate_detection={self.config.duplicate_detection}, "
                    f"reuse_transposition_table={self.config.reuse_transposition_table}")

    def plan(self,
             world_model: WorldModel,
             goal: Goal,
             action_space: ActionSpace,
             apply_action: ApplyAction,
             max_depth: Optional[int] = None) -> PlanResult:
        """Search for the cheapest plan of at most ``max_depth`` actions.

        Args:
            world_model: Initial state and state operations
            goal: Heuristic and goal test
            action_space: Action enumeration and costs
            apply_action: Mutates a cloned state in place
            max_depth: Maximum plan length; defaults to ``config.max_depth``

        Returns:
            PlanResult with the plan and statistics

        Raises:
            ValueError: If max_depth is negative
        """
        if max_depth is None:
            max_depth = self.config.max_depth
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        start_time = time.perf_counter()
        self.statistics = SearchStatistics()

        if goal.is_fulfilled(world_model.initial):
            return PlanResult(
                success=True,
                computation_time=time.perf_counter() - start_time,
                termination_reason="initial_match",
                statistics=self.statistics
            )

        cutoff: Optional[float] = goal.estimate_cost(world_model.initial)
        cutoffs: List[float] = []
        table = None
        if self.config.duplicate_detection and self.config.reuse_transposition_table:
            table = self._create_table(world_model)

        while cutoff is not None:
            cutoffs.append(cutoff)
            self.statistics.iterations += 1
            if self.config.duplicate_detection and not self.config.reuse_transposition_table:
                table = self._create_table(world_model)

            pass_result = self._bounded_search(
                world_model, goal, action_space, apply_action, cutoff, max_depth, table
            )
            if table is not None:
                self.statistics.transposition_entries = table.size()

            logger.debug(f"IDA* pass {self.statistics.iterations}: cutoff={cutoff}, "
                         f"success={pass_result.success}, next_cutoff={pass_result.next_cutoff}, "
                         f"expanded={self.statistics.nodes_expanded}")

            if pass_result.success:
                computation_time = time.perf_counter() - start_time
                logger.info(f"IDA* found plan of {len(pass_result.actions)} actions "
                            f"(cost {pass_result.path_cost}) after {self.statistics.iterations} passes")
                return PlanResult(
                    success=True,
                    actions=pass_result.actions,
                    total_cost=pass_result.path_cost,
                    iterations=self.statistics.iterations,
                    cutoffs=cutoffs,
                    computation_time=computation_time,
                    termination_reason="goal_reached",
                    statistics=self.statistics
                )

            cutoff = pass_result.next_cutoff

        computation_time = time.perf_counter() - start_time
        logger.info(f"IDA* exhausted search within max_depth={max_depth} "
                    f"after {self.statistics.iterations} passes")
        return PlanResult(
            success=False,
            iterations=self.statistics.iterations,
            cutoffs=cutoffs,
            computation_time=computation_time,
            termination_reason="search_exhausted",
            statistics=self.statistics
        )

    def plan_action(self,
                    world_model: WorldModel,
                    goal: Goal,
                    action_space: ActionSpace,
                    apply_action: ApplyAction,
                    max_depth: Optional[int] = None) -> List[Action]:
        """Return only the action list of :meth:`plan`.

        The list is empty both when the initial state already satisfies the
        goal and when no plan exists within ``max_depth``.
        """
        return self.plan(world_model, goal, action_space, apply_action, max_depth).actions

    def solve(self, problem: PlanningProblem, max_depth: Optional[int] = None) -> PlanResult:
        """Plan for a bundled :class:`PlanningProblem`."""
        return self.plan(
            problem.world_model,
            problem.goal,
            problem.action_space,
            problem.apply_action,
            max_depth
        )

    def _create_table(self, world_model: WorldModel) -> TranspositionTable:
        return TranspositionTable(world_model.get_key, world_model.are_equal)

    def _bounded_search(self,
                        world_model: WorldModel,
                        goal: Goal,
                        action_space: ActionSpace,
                        apply_action: ApplyAction,
                        cutoff: float,
                        max_depth: int,
                        table: Optional[TranspositionTable]) -> PassResult:
        """Run one depth-first pass bounded by ``cutoff`` and ``max_depth``.

        Returns:
            PassResult holding the plan on success, otherwise the smallest
            f-score seen above ``cutoff``
        """
        frames = [SearchFrame() for _ in range(max_depth + 1)]
        root = frames[0]
        root.world_model = world_model.initial
        root.path_cost = 0.0
        if table is not None:
            table.add(root.world_model, 0, 0.0)

        root_f = goal.estimate_cost(root.world_model)
        if root_f > cutoff:
            self.statistics.nodes_pruned += 1
            return PassResult(success=False, next_cutoff=root_f)
        # plan() has already goal-tested the root
        if max_depth == 0:
            return PassResult(success=False)

        root.actions = iter(action_space.actions_from(root.world_model))
        self.statistics.nodes_expanded += 1

        current_depth = 0
        smallest_cost_found: Optional[float] = None

        while current_depth >= 0:
            frame = frames[current_depth]
            next_action = next(frame.actions, _EXHAUSTED)
            if next_action is _EXHAUSTED:
                frame.actions = None
                current_depth -= 1
                continue

            child_depth = current_depth + 1
            child = frames[child_depth]
            child.world_model = world_model.clone(frame.world_model)
            apply_action(child.world_model, next_action)
            frame.action = next_action
            child.path_cost = frame.path_cost + action_space.get_cost(next_action)
            self.statistics.nodes_generated += 1
            if child_depth > self.statistics.max_depth_reached:
                self.statistics.max_depth_reached = child_depth

            if table is not None:
                entry = table.get(child.world_model)
                if entry is not None and entry.dominates(child_depth, child.path_cost):
                    self.statistics.duplicate_states += 1
                    continue
                table.add(child.world_model, child_depth, child.path_cost)

            f_score = goal.estimate_cost(child.world_model) + child.path_cost
            if f_score > cutoff:
                self.statistics.nodes_pruned += 1
                if smallest_cost_found is None or f_score < smallest_cost_found:
                    smallest_cost_found = f_score
                continue

            if goal.is_fulfilled(child.world_model):
                return PassResult(
                    success=True,
                    actions=[frames[depth].action for depth in range(child_depth)],
                    path_cost=child.path_cost
                )

            # Leaves at max_depth are goal-tested but never expanded
            if child_depth >= max_depth:
                continue

            child.actions = iter(action_space.actions_from(child.world_model))
            self.statistics.nodes_expanded += 1
            current_depth = child_depth

        return PassResult(success=False, next_cutoff=smallest_cost_found)

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the last planning call."""
        stats = self.statistics.to_dict()
        stats['config'] = {
            'max_depth': self.config.max_depth,
            'duplicate_detection': self.config.duplicate_detection,
            'reuse_transposition_table': self.config.reuse_transposition_table
        }
        return stats


def plan_action(world_model: WorldModel,
                goal: Goal,
                action_space: ActionSpace,
                apply_action: ApplyAction,
                max_depth: int) -> List[Action]:
    """Plan with a default-configured :class:`IDAStarPlanner`.

    Args:
        world_model: Initial state and state operations
        goal: Heuristic and goal test
        action_space: Action enumeration and costs
        apply_action: Mutates a cloned state in place
        max_depth: Maximum plan length

    Returns:
        Ordered list of actions; empty if already at goal or no plan was found
    """
    planner = IDAStarPlanner()
    return planner.plan_action(world_model, goal, action_space, apply_action, max_depth)


def create_ida_star_planner(max_depth: int = 32,
                            duplicate_detection: bool = True,
                            reuse_transposition_table: bool = False) -> IDAStarPlanner:
    """Factory function to create an IDA* planner with custom configuration.

    Args:
        max_depth: Default maximum plan length
        duplicate_detection: Prune duplicate and cyclic states
        reuse_transposition_table: Keep one transposition table across all
            cutoff passes of a call instead of a fresh one per pass

    Returns:
        Configured IDAStarPlanner instance
    """
    config = PlannerConfig(
        max_depth=max_depth,
        duplicate_detection=duplicate_detection,
        reuse_transposition_table=reuse_transposition_table
    )

    return IDAStarPlanner(config)
