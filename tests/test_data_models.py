"""Tests for the planner's callback contracts."""

import copy

import pytest

from ida_planner.core.data_models import ActionSpace, Goal, PlanningProblem, WorldModel
from ida_planner.domains.combination_lock import DigitAction, create_combination_lock_problem


class TestWorldModel:
    """Test WorldModel defaults."""

    def test_default_equality_and_clone(self):
        """Test that equality defaults to == and clone to a deep copy."""
        initial = {'pos': [0, 0]}
        world_model = WorldModel(initial=initial, get_key=lambda state: tuple(state['pos']))

        clone = world_model.clone(initial)
        clone['pos'][0] = 5

        assert world_model.are_equal({'pos': [0, 0]}, initial)
        assert initial['pos'] == [0, 0]
        assert world_model.clone is copy.deepcopy


class TestPlanningProblem:
    """Test PlanningProblem functionality."""

    @pytest.fixture
    def problem(self):
        """Create a combination lock problem."""
        return create_combination_lock_problem([0, 0, 0], [2, 1, 0])

    def test_replay(self, problem):
        """Test applying a plan to a clone of the initial state."""
        final_state, total_cost = problem.replay([
            DigitAction(digit=0, value=2),
            DigitAction(digit=1, value=1),
        ])

        assert final_state == [2, 1, 0]
        assert total_cost == 2.0
        assert problem.world_model.initial == [0, 0, 0]

    def test_replay_empty_plan(self, problem):
        """Test that an empty plan leaves the initial state."""
        final_state, total_cost = problem.replay([])

        assert final_state == [0, 0, 0]
        assert final_state is not problem.world_model.initial
        assert total_cost == 0.0

    def test_is_solved_by(self, problem):
        """Test goal checking of a plan."""
        assert problem.is_solved_by([DigitAction(0, 2), DigitAction(1, 1)])
        assert not problem.is_solved_by([DigitAction(0, 2)])

    def test_custom_problem(self):
        """Test building a problem from plain callables."""
        def step(state, action):
            state[0] += action

        problem = PlanningProblem(
            world_model=WorldModel(initial=[0], get_key=lambda state: state[0], clone=list),
            goal=Goal(estimate_cost=lambda state: max(0, 3 - state[0]),
                      is_fulfilled=lambda state: state[0] == 3),
            action_space=ActionSpace(get_cost=lambda action: action,
                                     actions_from=lambda state: iter([1, 2])),
            apply_action=step
        )

        assert problem.name == "problem"
        assert problem.is_solved_by([1, 2])
        assert problem.replay([2, 1]) == ([3], 3.0)


if __name__ == "__main__":
    pytest.main([__file__])
