"""Attack-power search driving repeated full simulations.

Every probe is an independent call to `simulate` on the pristine
battlefield, run strictly one after another.
"""
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from engine.config import SearchConfig, SimulationConfig
from engine.errors import SearchExhausted
from engine.model import Battlefield
from .runner import Outcome, simulate

@dataclass
class SearchReport:
    baseline: Outcome
    perfect: bool
    minimal_attack: Optional[int] = None
    boosted: Optional[Outcome] = None
    probes: List[Tuple[int, int]] = field(default_factory=list)  # (attack, boosted losses)


class OutcomeSearch:
    """Answers the baseline and minimal-boost questions for one map."""

    def __init__(self, battlefield: Battlefield, config: SimulationConfig,
                 search: Optional[SearchConfig] = None, verbose: bool = False):
        self.battlefield = battlefield
        self.config = config
        self.search = search or SearchConfig()
        self.verbose = verbose
        self.probes: List[Tuple[int, int]] = []

    def _log(self, msg: str):
        if self.verbose:
            print(f"[Search] {msg}", file=sys.stderr)

    def is_perfect(self, outcome: Outcome) -> bool:
        """Boosted team won without losing a unit."""
        team = self.config.boosted_team
        return outcome.losses_of(team) == 0 and outcome.winner is team

    def baseline(self) -> Outcome:
        return simulate(self.battlefield, self.config, verbose=self.verbose)

    def probe(self, power: int) -> Outcome:
        outcome = simulate(self.battlefield, self.config.with_boost(power))
        losses = outcome.losses_of(self.config.boosted_team)
        self.probes.append((power, losses))
        self._log(f"attack {power}: {losses} {self.config.boosted_team.name.lower()} losses, "
                  f"checksum {outcome.checksum}")
        return outcome

    def _linear(self) -> Tuple[int, Outcome]:
        for power in range(self.search.start_attack, self.search.max_attack + 1):
            outcome = self.probe(power)
            if self.is_perfect(outcome):
                return power, outcome
        raise SearchExhausted(self.search.max_attack)

    def _bisect(self) -> Tuple[int, Outcome]:
        # Assumes zero losses is monotonic in attack power.
        lo = self.search.start_attack - 1
        hi = self.search.start_attack
        if hi > self.search.max_attack:
            raise SearchExhausted(self.search.max_attack)
        while True:
            best = self.probe(hi)
            if self.is_perfect(best):
                break
            if hi >= self.search.max_attack:
                raise SearchExhausted(self.search.max_attack)
            lo, hi = hi, min(hi * 2, self.search.max_attack)

        while hi - lo > 1:
            mid = (lo + hi) // 2
            outcome = self.probe(mid)
            if self.is_perfect(outcome):
                hi, best = mid, outcome
            else:
                lo = mid
        return hi, best

    def minimal_boost(self) -> Tuple[int, Outcome]:
        """Smallest boosted attack power yielding a perfect game."""
        self.probes = []
        if self.search.strategy == "bisect":
            return self._bisect()
        return self._linear()

    def run(self) -> SearchReport:
        base = self.baseline()
        if self.is_perfect(base):
            self._log("baseline is already a perfect game")
            return SearchReport(baseline=base, perfect=True)
        power, boosted = self.minimal_boost()
        return SearchReport(baseline=base, perfect=False, minimal_attack=power,
                            boosted=boosted, probes=list(self.probes))
