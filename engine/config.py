import json
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .model import Team


class SimulationConfig(BaseModel):
    """Per-run combat parameters."""
    starting_hp: int = Field(default=200, gt=0)
    goblin_attack: int = Field(default=3, gt=0)
    elf_attack: int = Field(default=3, gt=0)
    boosted_team: Team = Team.ELF
    max_rounds: int = Field(default=10_000, gt=0)  # cap before declaring the run stalled

    def attack_of(self, team: Team) -> int:
        return self.elf_attack if team is Team.ELF else self.goblin_attack

    def with_boost(self, power: int) -> "SimulationConfig":
        """Copy with the boosted team's attack power replaced."""
        key = "elf_attack" if self.boosted_team is Team.ELF else "goblin_attack"
        return self.model_copy(update={key: power})


class SearchConfig(BaseModel):
    """Minimal-boost search parameters."""
    strategy: Literal["linear", "bisect"] = "linear"
    start_attack: int = Field(default=4, gt=0)
    max_attack: int = Field(default=200, gt=0)


class Settings(BaseModel):
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)


def load_config(path: Union[str, Path]) -> Settings:
    """Load settings from a JSON file with optional `simulation`/`search` sections."""
    config_file = Path(path)
    if not config_file.exists():
        raise ConfigError(f"Configuration file not found: {config_file}")
    try:
        with open(config_file, "r", encoding="utf-8-sig") as f:
            raw = json.load(f)
        return Settings.model_validate(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_file}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e
