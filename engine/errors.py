from typing import Any, Optional, Tuple


class SkirmishError(Exception):
    """Base class for every error raised by the skirmish engine."""


class MapParseError(SkirmishError):
    """The starting map is malformed and cannot be simulated."""

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[int] = None):
        self.row = row
        self.column = column
        where = ""
        if row is not None:
            where = f" (row {row}" + (f", column {column})" if column is not None else ")")
        super().__init__(message + where)


class ConfigError(SkirmishError):
    """Configuration could not be loaded or validated."""


class InvariantViolation(SkirmishError):
    """Internal engine bug: grid, registry and turn queue disagree."""

    def __init__(self, message: str, pos: Optional[Tuple[int, int]] = None,
                 expected: Any = None, actual: Any = None):
        self.pos = pos
        self.expected = expected
        self.actual = actual
        details = []
        if pos is not None:
            details.append(f"at ({pos[0]}, {pos[1]})")
        if expected is not None or actual is not None:
            details.append(f"expected {expected!r}, got {actual!r}")
        super().__init__(" ".join([message] + details))


class OutOfBoundsError(InvariantViolation):
    """Write outside the grid."""


class GridDesyncError(InvariantViolation):
    """Tile marker does not match the unit registered at that cell."""


class MissingUnitError(InvariantViolation):
    """Move or attack referenced a cell with no unit."""


class OccupiedCellError(InvariantViolation):
    """Move or insert onto a cell that is not empty."""


class StaleTurnError(InvariantViolation):
    """Turn queue is empty or points at a dead unit."""


class SimulationStalled(SkirmishError):
    """Simulation exceeded the configured round cap without a winner."""

    def __init__(self, max_rounds: int):
        self.max_rounds = max_rounds
        super().__init__(f"no winner after {max_rounds} rounds")


class SearchExhausted(SkirmishError):
    """No attack power up to the configured maximum gives a perfect game."""

    def __init__(self, max_attack: int):
        self.max_attack = max_attack
        super().__init__(f"no perfect game with attack power up to {max_attack}")
