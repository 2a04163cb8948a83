"""Sliding-tile puzzle planning domain.

Boards are square ``np.ndarray`` grids holding the tiles ``1..n*n-1`` and a
blank ``0``. An action slides the blank one cell up, down, left or right at
unit cost. The heuristic is the Manhattan distance of every tile to its target
cell, which never overestimates the number of moves left.
"""

from typing import Dict, Iterator, Optional, Tuple
import numpy as np

from ida_planner.core.data_models import ActionSpace, Goal, PlanningProblem, WorldModel

BLANK = 0

# Direction the blank moves in
MOVES: Dict[str, Tuple[int, int]] = {
    'up': (-1, 0),
    'down': (1, 0),
    'left': (0, -1),
    'right': (0, 1),
}


def solved_board(size: int) -> np.ndarray:
    """Return the solved board: tiles in order, blank last."""
    tiles = np.arange(1, size * size + 1, dtype=np.int8) % (size * size)
    return tiles.reshape(size, size)


def find_blank(board: np.ndarray) -> Tuple[int, int]:
    row, col = np.argwhere(board == BLANK)[0]
    return int(row), int(col)


def manhattan_distance(board: np.ndarray, target: np.ndarray) -> int:
    """Sum of per-tile Manhattan distances between ``board`` and ``target``.

    The blank does not count.
    """
    size = board.shape[0]
    # argsort of a permutation maps tile value -> flat position
    board_pos = np.argsort(board.ravel(), kind='stable')[1:]
    target_pos = np.argsort(target.ravel(), kind='stable')[1:]
    rows = np.abs(board_pos // size - target_pos // size)
    cols = np.abs(board_pos % size - target_pos % size)
    return int(rows.sum() + cols.sum())


def legal_moves(board: np.ndarray) -> Iterator[str]:
    """Yield the moves that keep the blank on the board."""
    size = board.shape[0]
    row, col = find_blank(board)
    for name, (dr, dc) in MOVES.items():
        if 0 <= row + dr < size and 0 <= col + dc < size:
            yield name


def slide(board: np.ndarray, move: str) -> None:
    """Slide the blank in place."""
    dr, dc = MOVES[move]
    row, col = find_blank(board)
    board[row, col], board[row + dr, col + dc] = board[row + dr, col + dc], board[row, col]


def is_solvable(board: np.ndarray, target: np.ndarray) -> bool:
    """Check whether ``target`` is reachable from ``board``.

    Uses the permutation-parity invariant: each move is one transposition
    involving the blank, so the permutation parity and the blank's taxicab
    displacement must agree.
    """
    if board.shape != target.shape:
        return False
    target_index = {int(tile): i for i, tile in enumerate(target.ravel())}
    permutation = [target_index[int(tile)] for tile in board.ravel()]

    visited = [False] * len(permutation)
    transpositions = 0
    for start in range(len(permutation)):
        cycle_length = 0
        index = start
        while not visited[index]:
            visited[index] = True
            index = permutation[index]
            cycle_length += 1
        if cycle_length:
            transpositions += cycle_length - 1

    board_row, board_col = find_blank(board)
    target_row, target_col = find_blank(target)
    blank_distance = abs(board_row - target_row) + abs(board_col - target_col)
    return transpositions % 2 == blank_distance % 2


def create_sliding_puzzle_problem(start: np.ndarray,
                                  target: Optional[np.ndarray] = None) -> PlanningProblem:
    """Build a planning problem that slides ``start`` into ``target``.

    Args:
        start: Initial square board
        target: Goal board; defaults to the solved board of the same size

    Returns:
        PlanningProblem over ``np.ndarray`` boards
    """
    start = np.asarray(start, dtype=np.int8)
    if start.ndim != 2 or start.shape[0] != start.shape[1]:
        raise ValueError(f"Board must be square, got shape {start.shape}")
    if target is None:
        target = solved_board(start.shape[0])
    target = np.asarray(target, dtype=np.int8)
    if target.shape != start.shape:
        raise ValueError(f"Target shape {target.shape} does not match start shape {start.shape}")

    return PlanningProblem(
        world_model=WorldModel(
            initial=start,
            get_key=lambda board: board.tobytes(),
            are_equal=np.array_equal,
            clone=lambda board: board.copy()
        ),
        goal=Goal(
            estimate_cost=lambda board: manhattan_distance(board, target),
            is_fulfilled=lambda board: np.array_equal(board, target)
        ),
        action_space=ActionSpace(
            get_cost=lambda move: 1,
            actions_from=legal_moves
        ),
        apply_action=slide,
        name=f"sliding_puzzle_{start.shape[0]}x{start.shape[0]}"
    )
