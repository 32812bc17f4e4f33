"""Test settings loading and validation."""
import json
import pytest
from pydantic import ValidationError
from engine.config import SearchConfig, SimulationConfig, load_config
from engine.errors import ConfigError
from engine.model import Team


def test_defaults():
    config = SimulationConfig()
    assert (config.starting_hp, config.goblin_attack, config.elf_attack) == (200, 3, 3)
    assert config.boosted_team is Team.ELF
    assert SearchConfig().strategy == "linear"


def test_boost_targets_boosted_team():
    config = SimulationConfig(goblin_attack=4)
    boosted = config.with_boost(12)
    assert boosted.attack_of(Team.ELF) == 12
    assert boosted.attack_of(Team.GOBLIN) == 4
    assert config.elf_attack == 3


def test_validation():
    with pytest.raises(ValidationError):
        SimulationConfig(max_rounds=0)
    with pytest.raises(ValidationError):
        SearchConfig(strategy="random")


def test_load_config(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"simulation": {"boosted_team": "G"}, "search": {"strategy": "bisect"}}))
    settings = load_config(path)
    assert settings.simulation.boosted_team is Team.GOBLIN
    assert settings.search.strategy == "bisect"
    assert settings.search.max_attack == 200


def test_load_config_errors(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.json")
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"simulation": {"elf_attack": -1}}))
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path)
