import sys
from dataclasses import dataclass
from typing import Dict, Optional
from engine.config import SimulationConfig
from engine.engine import Engine
from engine.model import Battlefield, Team
from .eventlog import EventLog

@dataclass
class Outcome:
    """Final result of one full simulation."""
    rounds: int
    total_hp: int
    winner: Team
    losses: Dict[Team, int]
    goblin_attack: int
    elf_attack: int
    board: str = ""

    @property
    def checksum(self) -> int:
        return self.rounds * self.total_hp

    def losses_of(self, team: Team) -> int:
        return self.losses[team]


def simulate(field: Battlefield, config: SimulationConfig,
             log: Optional[EventLog] = None, verbose: bool = False) -> Outcome:
    """Run a fresh game on `field` to completion.

    Depends only on its arguments: the battlefield is never mutated, so
    repeated calls with the same inputs give identical outcomes.
    """
    engine = Engine.from_battlefield(field, config)
    game = engine.game
    while not game.over:
        evts = engine.step()
        if log is not None:
            log.append_many(evts)
        if verbose and evts and evts[-1].kind == "RoundCompleted":
            print(f"[Runner] round {game.completed_rounds} done, total hp {game.units.total_hp()}",
                  file=sys.stderr)

    outcome = Outcome(
        rounds=game.completed_rounds,
        total_hp=game.units.total_hp(),
        winner=game.winner,
        losses=dict(game.losses),
        goblin_attack=config.goblin_attack,
        elf_attack=config.elf_attack,
        board=engine.render(),
    )
    if verbose:
        print(f"[Runner] {outcome.winner.name.lower()}s win after {outcome.rounds} rounds "
              f"(G attack {outcome.goblin_attack}, E attack {outcome.elf_attack}), "
              f"checksum {outcome.checksum}", file=sys.stderr)
    return outcome
