from typing import Dict, List, Optional

from .errors import MissingUnitError
from .grid import Grid
from .model import DIRECTIONS, Direction, Position, Team, Tile, UnitRegistry, reading_order


def is_enemy_adjacent(grid: Grid, pos: Position, enemy: Team) -> bool:
    """Check if any orthogonal neighbor of pos holds an `enemy` unit."""
    marker = enemy.tile
    return any(grid.get(n) is marker for n in pos.neighbors())


def find_enemy_direction(grid: Grid, units: UnitRegistry, start: Position) -> Optional[Direction]:
    """First step from start towards the nearest reachable enemy-adjacent cell.

    Layered BFS over empty cells. The destination is the reading-order-least
    enemy-adjacent cell of the first layer that holds any; the step is the
    earliest of Up, Left, Right, Down lying on a shortest path to it.
    Returns None when already adjacent to an enemy or nothing is reachable.
    """
    unit = units.get(start)
    if unit is None:
        raise MissingUnitError("pathfinding from an empty cell", start)
    enemy = unit.team.enemy
    if is_enemy_adjacent(grid, start, enemy):
        return None

    # Each layer stays grouped by first-step direction in canonical order, so
    # the first discovery of a cell carries the earliest step among its
    # shortest paths.
    first_step: Dict[Position, Direction] = {}
    frontier: List[Position] = []
    for direction in DIRECTIONS:
        nxt = start.step(direction)
        if grid.get(nxt) is Tile.EMPTY:
            first_step[nxt] = direction
            frontier.append(nxt)

    while frontier:
        in_range = [p for p in frontier if is_enemy_adjacent(grid, p, enemy)]
        if in_range:
            target = min(in_range, key=reading_order)
            return first_step[target]
        next_frontier: List[Position] = []
        for pos in frontier:
            for nxt in pos.neighbors():
                if nxt == start or nxt in first_step:
                    continue
                if grid.get(nxt) is Tile.EMPTY:
                    first_step[nxt] = first_step[pos]
                    next_frontier.append(nxt)
        frontier = next_frontier
    return None
