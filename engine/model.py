from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Deque, Dict, Iterator, List, NamedTuple, Optional, Tuple

from .errors import MissingUnitError, OccupiedCellError

if TYPE_CHECKING:
    from .grid import Grid


class Direction(Enum):
    """Single orthogonal step. Declaration order is the canonical trial order."""
    UP = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    DOWN = (0, 1)


DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction) -> "Position":
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)

    def neighbors(self) -> Iterator["Position"]:
        """Orthogonal neighbors, in reading order."""
        for direction in DIRECTIONS:
            yield self.step(direction)


def reading_order(pos: Position) -> Tuple[int, int]:
    """Sort key: top row to bottom row, left to right within a row."""
    return (pos.y, pos.x)


class Team(Enum):
    GOBLIN = "G"
    ELF = "E"

    @property
    def enemy(self) -> "Team":
        return Team.ELF if self is Team.GOBLIN else Team.GOBLIN

    @property
    def tile(self) -> "Tile":
        return Tile(self.value)


class Tile(Enum):
    """Grid cell marker. Occupied markers mirror the unit registry."""
    EMPTY = "."
    WALL = "#"
    GOBLIN = "G"
    ELF = "E"

    @property
    def team(self) -> Optional[Team]:
        if self in (Tile.GOBLIN, Tile.ELF):
            return Team(self.value)
        return None


@dataclass
class Unit:
    team: Team
    hp: int
    attack: int

    def take_damage(self, damage: int) -> int:
        """Apply damage floored at zero hp; return the damage actually dealt."""
        dealt = min(damage, self.hp)
        self.hp -= dealt
        return dealt

    @property
    def defeated(self) -> bool:
        return self.hp == 0

    def __str__(self) -> str:
        return f"{self.team.value}({self.hp})"


class UnitRegistry:
    """Position -> unit mapping; the single source of truth for occupancy."""

    def __init__(self, units: Optional[Dict[Position, Unit]] = None):
        self._units: Dict[Position, Unit] = dict(units or {})

    def insert(self, pos: Position, unit: Unit) -> None:
        if pos in self._units:
            raise OccupiedCellError("cell already holds a unit", pos,
                                    expected=None, actual=str(self._units[pos]))
        self._units[pos] = unit

    def remove(self, pos: Position) -> Unit:
        unit = self._units.pop(pos, None)
        if unit is None:
            raise MissingUnitError("no unit to remove", pos)
        return unit

    def get(self, pos: Position) -> Optional[Unit]:
        return self._units.get(pos)

    def __getitem__(self, pos: Position) -> Unit:
        unit = self._units.get(pos)
        if unit is None:
            raise MissingUnitError("no unit registered", pos)
        return unit

    def __contains__(self, pos: Position) -> bool:
        return pos in self._units

    def __len__(self) -> int:
        return len(self._units)

    def items(self):
        return self._units.items()

    def positions(self) -> List[Position]:
        return list(self._units.keys())

    def total_hp(self) -> int:
        return sum(u.hp for u in self._units.values())

    def team_has_won(self, team: Team) -> bool:
        """True iff every remaining unit belongs to `team`."""
        return all(u.team is team for u in self._units.values())

    def count(self, team: Team) -> int:
        return sum(1 for u in self._units.values() if u.team is team)


@dataclass
class Event:
    kind: str
    round: int
    data: Dict


@dataclass(frozen=True)
class Spawn:
    pos: Position
    team: Team


@dataclass(frozen=True)
class Battlefield:
    """Pristine starting map. Every simulation builds its own Game from it."""
    width: int
    height: int
    rows: Tuple[str, ...]
    spawns: Tuple[Spawn, ...]

    def count(self, team: Team) -> int:
        return sum(1 for s in self.spawns if s.team is team)


@dataclass
class Game:
    grid: "Grid"
    units: UnitRegistry
    turn_queue: Deque[Position] = field(default_factory=deque)
    completed_rounds: int = 0
    losses: Dict[Team, int] = field(default_factory=lambda: {t: 0 for t in Team})
    kills: Dict[Team, int] = field(default_factory=lambda: {t: 0 for t in Team})
    over: bool = False
    winner: Optional[Team] = None

    def checksum(self) -> int:
        return self.completed_rounds * self.units.total_hp()
