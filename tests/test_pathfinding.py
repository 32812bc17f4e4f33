"""Test nearest-enemy pathfinding and its reading-order tie-breaks."""
import pytest
from engine.config import SimulationConfig
from engine.engine import new_game
from engine.errors import MissingUnitError
from engine.model import Direction, Position
from engine.parser import parse_map
from engine.pathfinding import find_enemy_direction


def direction_at(board: str, x: int, y: int):
    game = new_game(parse_map(board), SimulationConfig())
    return find_enemy_direction(game.grid, game.units, Position(x, y))


def test_find_steps():
    board = "#######\n#E..G.#\n#...#.#\n#.GE#G#\n#######\n"
    # several targets at equal distance: the reading-order-first one wins
    assert direction_at(board, 1, 1) is Direction.RIGHT
    # no enemy reachable
    assert direction_at(board, 5, 3) is None
    # already adjacent
    assert direction_at(board, 3, 3) is None


def test_tricky_movement():
    board = "#######\n#E....#\n#G.E.E#\n#######\n"
    assert direction_at(board, 1, 1) is None
    assert direction_at(board, 3, 2) is Direction.LEFT
    assert direction_at(board, 5, 2) is Direction.UP


def test_diagonal_prefers_earliest_step():
    board = "#####\n#..G#\n#...#\n#...#\n#E..#\n#####\n"
    assert direction_at(board, 3, 1) is Direction.LEFT


def test_target_chosen_before_step():
    # (2,2) via Left and (5,1) via Right are both two steps away; (5,1)
    # comes first in reading order so the later direction wins
    board = "########\n##.G..E#\n#E.#####\n########\n"
    assert direction_at(board, 3, 1) is Direction.RIGHT


def test_earlier_row_target_wins():
    board = "#####\n#.E.#\n#...#\n#..G#\n#####\n"
    # (2,2) and (3,1) are both two steps away; (3,1) is first in reading order
    assert direction_at(board, 3, 3) is Direction.UP


def test_up_before_left_for_same_target():
    board = "#####\n#...#\n#E..#\n#..G#\n#####\n"
    # target (2,2) is two steps away through (3,2) and through (2,3)
    assert direction_at(board, 3, 3) is Direction.UP


def test_missing_unit():
    board = "####\n#GE#\n#..#\n####\n"
    with pytest.raises(MissingUnitError):
        direction_at(board, 1, 2)
