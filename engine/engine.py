from collections import deque
from typing import List, Optional

from .config import SimulationConfig
from .errors import (GridDesyncError, MissingUnitError, OccupiedCellError,
                     SimulationStalled, StaleTurnError)
from .grid import Grid
from .model import (Battlefield, Direction, Event, Game, Position, Team, Tile,
                    Unit, UnitRegistry, reading_order)
from .pathfinding import find_enemy_direction, is_enemy_adjacent


def new_game(field: Battlefield, config: SimulationConfig) -> Game:
    """Build a fresh Game from the pristine battlefield."""
    grid = Grid.from_rows(field.rows)
    units = UnitRegistry()
    for spawn in field.spawns:
        units.insert(spawn.pos, Unit(team=spawn.team, hp=config.starting_hp,
                                     attack=config.attack_of(spawn.team)))
    game = Game(grid=grid, units=units)
    game.turn_queue = deque(sorted(units.positions(), key=reading_order))
    return game


class Engine:
    """Pure, deterministic turn engine. One call to step() is one unit turn."""

    def __init__(self, game: Game, max_rounds: int = 10_000):
        self.game = game
        self.max_rounds = max_rounds

    @classmethod
    def from_battlefield(cls, field: Battlefield, config: SimulationConfig) -> "Engine":
        return cls(new_game(field, config), max_rounds=config.max_rounds)

    def _check_tile(self, pos: Position, unit: Unit) -> None:
        tile = self.game.grid.get(pos)
        if tile is not unit.team.tile:
            raise GridDesyncError("map and unit registry are inconsistent", pos,
                                  expected=unit.team.tile, actual=tile)

    def _move_unit(self, pos: Position, direction: Direction) -> Position:
        """Move the unit at pos one step, updating registry and grid together."""
        grid, units = self.game.grid, self.game.units
        goal = pos.step(direction)
        if grid.get(goal) is not Tile.EMPTY or goal in units:
            raise OccupiedCellError("move onto non-empty cell", goal,
                                    expected=Tile.EMPTY, actual=grid.get(goal))
        unit = units.remove(pos)
        self._check_tile(pos, unit)
        grid.set(pos, Tile.EMPTY)
        grid.set(goal, unit.team.tile)
        units.insert(goal, unit)
        return goal

    def _select_target(self, pos: Position, enemy: Team) -> Optional[Position]:
        """Adjacent enemy with the lowest hp, ties broken by reading order."""
        candidates = []
        for n in pos.neighbors():
            other = self.game.units.get(n)
            if other is not None and other.team is enemy:
                candidates.append((other.hp, reading_order(n), n))
        if not candidates:
            return None
        return min(candidates)[2]

    def _attack(self, attacker_pos: Position, target_pos: Position) -> List[Event]:
        g = self.game
        attacker = g.units[attacker_pos]
        target = g.units.get(target_pos)
        if target is None:
            raise MissingUnitError("no unit to attack", target_pos)
        self._check_tile(target_pos, target)
        dealt = target.take_damage(attacker.attack)
        evts = [Event("Attack", g.completed_rounds,
                      {"attacker": list(attacker_pos), "target": list(target_pos),
                       "dmg": dealt, "hp": target.hp})]
        if target.defeated:
            g.units.remove(target_pos)
            g.grid.set(target_pos, Tile.EMPTY)
            g.losses[target.team] += 1
            g.kills[attacker.team] += 1
            # dead units never act
            if target_pos in g.turn_queue:
                g.turn_queue.remove(target_pos)
            evts.append(Event("Destroyed", g.completed_rounds,
                              {"pos": list(target_pos), "team": target.team.value,
                               "killer": list(attacker_pos)}))
        return evts

    def _start_new_round(self) -> Event:
        g = self.game
        g.completed_rounds += 1
        if g.completed_rounds > self.max_rounds:
            raise SimulationStalled(self.max_rounds)
        g.turn_queue = deque(sorted(g.units.positions(), key=reading_order))
        if not g.turn_queue:
            raise StaleTurnError("no units left to schedule")
        return Event("RoundCompleted", g.completed_rounds, {"total_hp": g.units.total_hp()})

    def step(self) -> List[Event]:
        """Run one unit turn and return the events it produced."""
        g = self.game
        if g.over:
            return []
        evts: List[Event] = []

        # select unit
        if not g.turn_queue:
            raise StaleTurnError("turn queue is empty")
        pos = g.turn_queue.popleft()
        unit = g.units.get(pos)
        if unit is None:
            raise StaleTurnError("turn queue references a dead unit", pos)
        self._check_tile(pos, unit)

        # check victory; the incomplete round is not counted
        if g.units.team_has_won(unit.team):
            g.over = True
            g.winner = unit.team
            evts.append(Event("GameOver", g.completed_rounds,
                              {"winner": unit.team.value, "total_hp": g.units.total_hp(),
                               "checksum": g.checksum()}))
            return evts

        # move
        enemy = unit.team.enemy
        if not is_enemy_adjacent(g.grid, pos, enemy):
            direction = find_enemy_direction(g.grid, g.units, pos)
            if direction is not None:
                new_pos = self._move_unit(pos, direction)
                evts.append(Event("UnitMoved", g.completed_rounds,
                                  {"from": list(pos), "to": list(new_pos), "team": unit.team.value}))
                pos = new_pos

        # select target and attack
        target_pos = self._select_target(pos, enemy)
        if target_pos is not None:
            evts += self._attack(pos, target_pos)

        # cleanup
        if not g.turn_queue:
            evts.append(self._start_new_round())
        return evts

    def play_round(self) -> List[Event]:
        """Step until the current round completes or the game ends."""
        evts: List[Event] = []
        start = self.game.completed_rounds
        while not self.game.over and self.game.completed_rounds == start:
            evts += self.step()
        return evts

    def run(self) -> List[Event]:
        """Step until one team is eliminated."""
        evts: List[Event] = []
        while not self.game.over:
            evts += self.step()
        return evts

    def snapshot(self) -> Game:
        """Return current state."""
        return self.game

    def render(self) -> str:
        """Board text with each row's units and hp appended."""
        lines = []
        for y, row in enumerate(self.game.grid.rows()):
            row_units = [(p, u) for p, u in self.game.units.items() if p.y == y]
            row_units.sort(key=lambda item: reading_order(item[0]))
            lines.append(row + "   " + ", ".join(str(u) for _, u in row_units))
        return "\n".join(line.rstrip() for line in lines)
