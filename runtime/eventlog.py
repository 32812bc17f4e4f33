from typing import Iterator, List, Tuple
from engine.model import Event

class EventLog:
    """Append-only event storage for replaying and comparing simulation runs."""

    def __init__(self):
        self._log: List[Event] = []

    def append_many(self, evts: List[Event]) -> Tuple[int, int]:
        """Append events and return (start_offset, end_offset)."""
        start = len(self._log)
        self._log.extend(evts)
        end = len(self._log) - 1
        return start, end

    def since(self, offset: int, limit: int = 1000) -> Tuple[List[Event], int]:
        """Return events starting from offset, up to limit."""
        offset = max(0, offset)
        chunk = self._log[offset: offset + limit]
        return chunk, offset + len(chunk)

    def of_kind(self, kind: str) -> List[Event]:
        return [e for e in self._log if e.kind == kind]

    def moves(self) -> List[Tuple[int, Tuple[int, int], Tuple[int, int]]]:
        """Unit trajectory as (round, from, to) triples."""
        return [(e.round, tuple(e.data["from"]), tuple(e.data["to"]))
                for e in self.of_kind("UnitMoved")]

    def __len__(self) -> int:
        return len(self._log)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._log)
