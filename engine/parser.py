"""Starting map parsing.

Maps are rectangular blocks of `.` (empty), `#` (wall), `G` (goblin) and
`E` (elf). Anything else is rejected before a simulation is ever built.
"""
from typing import List

from .errors import MapParseError
from .model import Battlefield, Position, Spawn, Team, Tile

_LEGAL = {t.value for t in Tile}


def parse_map(text: str) -> Battlefield:
    """Parse a map text block into a pristine Battlefield."""
    lines = text.replace("\r\n", "\n").split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    if not lines:
        raise MapParseError("map is empty")

    width = len(lines[0])
    if width == 0:
        raise MapParseError("map row is empty", row=0)

    spawns: List[Spawn] = []
    for y, line in enumerate(lines):
        if len(line) != width:
            raise MapParseError(f"row has width {len(line)}, expected {width}", row=y)
        for x, ch in enumerate(line):
            if ch not in _LEGAL:
                raise MapParseError(f"unknown character {ch!r}", row=y, column=x)
            team = Tile(ch).team
            if team is not None:
                spawns.append(Spawn(Position(x, y), team))

    field = Battlefield(width=width, height=len(lines), rows=tuple(lines), spawns=tuple(spawns))
    for team in Team:
        if field.count(team) == 0:
            raise MapParseError(f"map has no {team.name.lower()} units")
    return field
