import argparse
import sys
from typing import List, Optional
from engine.config import SearchConfig, Settings, SimulationConfig, load_config
from engine.errors import (ConfigError, InvariantViolation, MapParseError,
                           SearchExhausted, SimulationStalled)
from engine.parser import parse_map
from runtime.search import OutcomeSearch
from .schemas import ReportOut

EXIT_INPUT = 1
EXIT_INTERNAL = 2
EXIT_NO_RESULT = 3


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="skirmish",
        description="Simulate a goblins vs elves skirmish and find the minimal elf boost.",
    )
    p.add_argument("map", nargs="?", default="-", help="map file, or - for stdin")
    p.add_argument("--config", help="JSON settings file")
    p.add_argument("--goblin-attack", type=int)
    p.add_argument("--elf-attack", type=int)
    p.add_argument("--max-rounds", type=int)
    p.add_argument("--strategy", choices=["linear", "bisect"])
    p.add_argument("--max-attack", type=int)
    p.add_argument("--json", action="store_true", help="print the report as JSON")
    p.add_argument("--show", action="store_true", help="print the final board of the baseline run")
    p.add_argument("--verbose", action="store_true", help="trace rounds and probes on stderr")
    return p


def _settings(args: argparse.Namespace) -> Settings:
    """Config file values, overridden by explicit flags."""
    settings = load_config(args.config) if args.config else Settings()
    sim = {k: v for k, v in {
        "goblin_attack": args.goblin_attack,
        "elf_attack": args.elf_attack,
        "max_rounds": args.max_rounds,
    }.items() if v is not None}
    search = {k: v for k, v in {
        "strategy": args.strategy,
        "max_attack": args.max_attack,
    }.items() if v is not None}
    try:
        return Settings(
            simulation=SimulationConfig(**{**settings.simulation.model_dump(), **sim}),
            search=SearchConfig(**{**settings.search.model_dump(), **search}),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid option: {e}") from e


def _read_map(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise MapParseError(f"cannot read map {path}: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = _settings(args)
        battlefield = parse_map(_read_map(args.map))
        search = OutcomeSearch(battlefield, settings.simulation, settings.search,
                               verbose=args.verbose)
        report = search.run()
    except (MapParseError, ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT
    except InvariantViolation as e:
        print(f"internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL
    except (SimulationStalled, SearchExhausted) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NO_RESULT

    if args.json:
        print(ReportOut.from_report(report).model_dump_json(indent=2))
        return 0

    if args.show:
        print(report.baseline.board)
    print(f"completed turns: {report.baseline.rounds}")
    print(f"checksum: {report.baseline.checksum}")
    if report.perfect:
        print("perfect game!")
    else:
        print(f"minimum power for perfect game: {report.minimal_attack}")
        print(f"perfect checksum: {report.boosted.checksum}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
