"""Test the command line entry point."""
import json
from cli.app import EXIT_INPUT, EXIT_NO_RESULT, main

COMBAT1 = "#######\n#.G...#\n#...EG#\n#.#.#G#\n#..G#E#\n#.....#\n#######\n"
DUEL = "#####\n#EG.#\n#####\n"


def write_map(tmp_path, text: str) -> str:
    path = tmp_path / "map.txt"
    path.write_text(text)
    return str(path)


def test_report_with_boost(tmp_path, capsys):
    assert main([write_map(tmp_path, COMBAT1)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "completed turns: 47",
        "checksum: 27730",
        "minimum power for perfect game: 15",
        "perfect checksum: 4988",
    ]


def test_perfect_game(tmp_path, capsys):
    assert main([write_map(tmp_path, DUEL)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["completed turns: 67", "checksum: 134", "perfect game!"]


def test_reads_stdin(monkeypatch, capsys):
    import io
    monkeypatch.setattr("sys.stdin", io.StringIO(DUEL))
    assert main(["-", "--show"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "#E..#   E(2)"
    assert out[-1] == "perfect game!"


def test_json_output(tmp_path, capsys):
    assert main([write_map(tmp_path, COMBAT1), "--json", "--strategy", "linear"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["baseline"]["checksum"] == 27730
    assert data["baseline"]["winner"] == "G"
    assert data["minimal_attack"] == 15
    assert data["boosted"]["losses"]["E"] == 0


def test_config_file_and_flag_override(tmp_path, capsys):
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"simulation": {"elf_attack": 15}, "search": {"max_attack": 20}}))
    assert main([write_map(tmp_path, COMBAT1), "--config", str(cfg)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["completed turns: 29", "checksum: 4988", "perfect game!"]

    assert main([write_map(tmp_path, COMBAT1), "--config", str(cfg), "--elf-attack", "3"]) == 0
    assert capsys.readouterr().out.splitlines()[1] == "checksum: 27730"


def test_bad_map_exits_with_input_error(tmp_path, capsys):
    assert main([write_map(tmp_path, "####\n#GX#\n####\n")]) == EXIT_INPUT
    assert "unknown character" in capsys.readouterr().err


def test_bad_config_exits_with_input_error(tmp_path, capsys):
    cfg = tmp_path / "settings.json"
    cfg.write_text("{not json")
    assert main([write_map(tmp_path, DUEL), "--config", str(cfg)]) == EXIT_INPUT
    assert main([write_map(tmp_path, DUEL), "--elf-attack", "0"]) == EXIT_INPUT


def test_round_cap_exits_without_result(tmp_path, capsys):
    assert main([write_map(tmp_path, COMBAT1), "--max-rounds", "5"]) == EXIT_NO_RESULT
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "no winner after 5 rounds" in captured.err


def test_verbose_traces_on_stderr(tmp_path, capsys):
    assert main([write_map(tmp_path, COMBAT1), "--verbose", "--strategy", "bisect", "--max-attack", "15"]) == 0
    captured = capsys.readouterr()
    assert "[Runner] round 47 done" in captured.err
    assert "[Search] attack 15: 0 elf losses" in captured.err
    assert captured.out.splitlines()[2] == "minimum power for perfect game: 15"
