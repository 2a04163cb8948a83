"""Combination lock ("safe cracker") planning domain.

A lock is a list of digits. Each action sets one digit to one value at unit
cost. The heuristic counts digits that differ from the target combination,
which is admissible because a single action fixes at most one digit.
"""

from dataclasses import dataclass
from typing import Iterator, List, Sequence

from ida_planner.core.data_models import ActionSpace, Goal, PlanningProblem, WorldModel

DEFAULT_DIGIT_VALUES = (0, 1, 2)


@dataclass(frozen=True)
class DigitAction:
    """Set ``digit`` of the lock to ``value``."""
    digit: int
    value: int


def count_wrong_digits(lock: Sequence[int], target: Sequence[int]) -> int:
    return sum(1 for current, wanted in zip(lock, target) if current != wanted)


def set_digit(lock: List[int], action: DigitAction) -> None:
    lock[action.digit] = action.value


def generate_digit_actions(lock: Sequence[int],
                           values: Sequence[int] = DEFAULT_DIGIT_VALUES) -> Iterator[DigitAction]:
    """Yield every set-one-digit action, grouped by value."""
    for value in values:
        for digit in range(len(lock)):
            yield DigitAction(digit=digit, value=value)


def create_combination_lock_problem(start: Sequence[int],
                                    target: Sequence[int],
                                    values: Sequence[int] = DEFAULT_DIGIT_VALUES) -> PlanningProblem:
    """Build a planning problem that turns ``start`` into ``target``.

    Args:
        start: Initial combination
        target: Combination that opens the lock
        values: Values each digit can take

    Returns:
        PlanningProblem over list-of-int lock states
    """
    if len(start) != len(target):
        raise ValueError(
            f"start and target must have the same number of digits, got {len(start)} and {len(target)}"
        )
    target = list(target)
    values = tuple(values)

    return PlanningProblem(
        world_model=WorldModel(
            initial=list(start),
            get_key=tuple,
            are_equal=lambda a, b: list(a) == list(b),
            clone=list
        ),
        goal=Goal(
            estimate_cost=lambda lock: count_wrong_digits(lock, target),
            is_fulfilled=lambda lock: list(lock) == target
        ),
        action_space=ActionSpace(
            get_cost=lambda action: 1,
            actions_from=lambda lock: generate_digit_actions(lock, values)
        ),
        apply_action=set_digit,
        name="combination_lock"
    )
