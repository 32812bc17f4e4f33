from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field
from runtime.runner import Outcome
from runtime.search import SearchReport

class OutcomeOut(BaseModel):
    """Single simulation result schema."""
    rounds: int
    total_hp: int
    checksum: int
    winner: str
    losses: Dict[str, int]
    goblin_attack: int
    elf_attack: int

    @classmethod
    def from_outcome(cls, o: Outcome) -> "OutcomeOut":
        return cls(rounds=o.rounds, total_hp=o.total_hp, checksum=o.checksum,
                   winner=o.winner.value, losses={t.value: n for t, n in o.losses.items()},
                   goblin_attack=o.goblin_attack, elf_attack=o.elf_attack)

class ReportOut(BaseModel):
    """Full search report schema."""
    baseline: OutcomeOut
    perfect: bool
    minimal_attack: Optional[int] = None
    boosted: Optional[OutcomeOut] = None
    probes: List[Tuple[int, int]] = Field(default_factory=list)

    @classmethod
    def from_report(cls, r: SearchReport) -> "ReportOut":
        return cls(
            baseline=OutcomeOut.from_outcome(r.baseline),
            perfect=r.perfect,
            minimal_attack=r.minimal_attack,
            boosted=OutcomeOut.from_outcome(r.boosted) if r.boosted else None,
            probes=r.probes,
        )
