"""Unified Testing CLI for the Pairing Engine.

This module provides an interactive command-line interface for simulating,
pairing and benchmarking tournaments of every supported format.
"""

# Pairing Engine
# Copyright (C) 2025  Pairing Engine developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import shlex
import sys
import time
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from pairingengine.exceptions import PairingEngineException
from pairingengine.models import PairingConfig
from pairingengine.pairing.dispatcher import (
    FORMAT_HANDLERS,
    TournamentFormat,
    calculate_max_rounds,
    generate_pairings,
)
from pairingengine.player import Player
from pairingengine.testing.rtg import (
    RandomTournamentGenerator,
    RatingDistribution,
    ResultPattern,
    RTGConfig,
    summarize_round_reports,
)
from pairingengine.utils import setup_logger
from pairingengine.validation.checker import PairingChecker

logger = setup_logger(__name__)

FORMAT_CHOICES = [f.value for f in TournamentFormat]
DISTRIBUTION_CHOICES = [d.value for d in RatingDistribution]
PATTERN_CHOICES = [p.value for p in ResultPattern]


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "simulate": {
        "description": "Simulate complete random tournaments (RTG)",
        "options": {
            "--format": "Tournament format (swiss/doubleSwiss/roundRobin/...)",
            "--players": "Number of players (default: 16)",
            "--rounds": "Number of rounds (default: the format's maximum)",
            "--distribution": "Rating distribution (uniform/normal/skewed/elite/club)",
            "--pattern": "Result pattern (realistic/balanced/upset_friendly/...)",
            "--seed": "Random seed for reproducibility",
            "--output": "Write the tournament as JSON to this path",
            "--no-validate": "Skip the per-round pairing checks",
        },
    },
    "pair": {
        "description": "Pair one round for players loaded from a JSON file",
        "options": {
            "--file": "JSON list of players",
            "--format": "Tournament format",
            "--round": "Round number to pair",
            "--seed": "Random seed",
        },
    },
    "formats": {
        "description": "List formats and their round ceilings",
        "options": {
            "--players": "Field size used for the ceilings (default: 16)",
        },
    },
    "benchmark": {
        "description": "Performance benchmarking",
        "options": {
            "--format": "Tournament format",
            "--size": "Tournament size to benchmark (default: 24)",
            "--rounds": "Number of rounds (default: the format's maximum)",
            "--iterations": "Number of iterations (default: 10)",
        },
    },
    "unit": {
        "description": "Run unit tests (pytest)",
        "options": {
            "--module": "Specific test module (e.g. formats, tiebreaks)",
            "--verbose": "Verbose output",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {
            "<command>": "Command name to get help for",
        },
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                  PAIRING ENGINE TEST - CLI                    ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None

    return NestedCompleter.from_nested_dict(completions)


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate (RTG) command."""
    print(f"\n{Colors.BOLD}Simulating tournament...{Colors.ENDC}")

    config = RTGConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        tournament_format=TournamentFormat.parse(args.format),
        rating_distribution=RatingDistribution(args.distribution),
        result_pattern=ResultPattern(args.pattern),
        seed=args.seed,
        validate=not args.no_validate,
    )
    rtg = RandomTournamentGenerator(config)
    tournament_data = rtg.generate_complete_tournament()

    if args.output:
        output_path = Path(args.output)
        content = rtg.export_json_format(tournament_data)
        output_path.write_text(content, encoding="utf-8")
        print(f"{Colors.OKGREEN}Tournament saved to: {output_path}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Tournament Simulated:{Colors.ENDC}")
    print(f"  Format: {config.tournament_format.value}")
    print(f"  Players: {len(tournament_data['players'])}")
    print(f"  Rounds: {len(tournament_data['rounds'])}")

    error = tournament_data["error"]
    if error is not None:
        print(f"  {Colors.WARNING}Stopped early: {error.message}{Colors.ENDC}")

    print(f"\n{Colors.BOLD}Standings:{Colors.ENDC}")
    for entry in tournament_data["standings"][:10]:
        print(
            f"  {entry.rank:3}. {entry.player.name:15} {entry.score:5.1f}"
            f"  ({entry.player.rating})"
        )

    counts = summarize_round_reports(tournament_data)
    if counts:
        print(f"\n{Colors.BOLD}Validation flags by criterion:{Colors.ENDC}")
        for criterion, count in sorted(counts.items()):
            print(f"  {criterion}: {count}")
    malformed = [
        r["round_number"]
        for r in tournament_data["rounds"]
        if r["report"] is not None and not r["report"].is_valid
    ]
    if malformed:
        print(f"{Colors.FAIL}Malformed rounds: {malformed}{Colors.ENDC}")
        return 1
    return 0


def run_pair_command(args: argparse.Namespace) -> int:
    """Pair one round for a field loaded from JSON."""
    file_path = Path(args.file)
    if not file_path.exists():
        print(f"{Colors.FAIL}Error: File not found: {file_path}{Colors.ENDC}")
        return 1

    with open(file_path, "r", encoding="utf-8") as f:
        players = [Player.from_dict(entry) for entry in json.load(f)]

    result = generate_pairings(
        args.format, players, args.round, random_seed=args.seed, config=PairingConfig()
    )
    if not result.ok:
        print(f"{Colors.FAIL}{result.error.kind}: {result.error.message}{Colors.ENDC}")
        return 1

    print(f"\n{Colors.BOLD}Round {args.round} ({args.format}):{Colors.ENDC}")
    for pairing in result.pairings:
        if pairing.is_bye:
            print(f"  {pairing.board:3}. {pairing.white_player.name} - BYE")
        else:
            flag = " (rematch)" if pairing.is_rematch else ""
            print(
                f"  {pairing.board:3}. {pairing.white_player.name} - "
                f"{pairing.black_player.name}{flag}"
            )

    report = PairingChecker().validate_round(result, players)
    print(f"\n  {report.summary}")
    return 0 if report.is_valid else 1


def run_formats_command(args: argparse.Namespace) -> int:
    """Print every format with its round ceiling."""
    print(f"\n{Colors.BOLD}Formats for {args.players} players:{Colors.ENDC}")
    for tournament_format, handler in FORMAT_HANDLERS.items():
        ceiling = calculate_max_rounds(tournament_format, args.players)
        shown = "unbounded" if ceiling is None else str(ceiling)
        print(f"  {tournament_format.value:18} {handler.display_name:20} {shown}")
    return 0


def run_unit_command(args: argparse.Namespace) -> int:
    """Run unit tests using pytest."""
    import subprocess

    print(f"\n{Colors.BOLD}Running unit tests...{Colors.ENDC}")

    pytest_args = ["pytest"]
    if args.module and args.module != "all":
        pytest_args.append(f"tests/test_{args.module}.py")
    else:
        pytest_args.append("tests/")
    if args.verbose:
        pytest_args.append("-v")

    result = subprocess.run(pytest_args)
    return result.returncode


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Run performance benchmarks."""
    print(f"\n{Colors.BOLD}Running performance benchmark...{Colors.ENDC}")
    print(f"Format: {args.format}, {args.size} players")
    print(f"Iterations: {args.iterations}\n")

    times = []
    for i in range(args.iterations):
        config = RTGConfig(
            num_players=args.size,
            num_rounds=args.rounds,
            tournament_format=TournamentFormat.parse(args.format),
            seed=42 + i,
            validate=False,
        )
        rtg = RandomTournamentGenerator(config)
        start = time.perf_counter()
        rtg.generate_complete_tournament()
        elapsed = time.perf_counter() - start
        times.append(elapsed)

        print(f"  Iteration {i+1}/{args.iterations}: {elapsed*1000:.2f}ms")

    avg_time = sum(times) / len(times)
    print(f"\n{Colors.BOLD}Results:{Colors.ENDC}")
    print(f"  Average: {avg_time*1000:.2f}ms")
    print(f"  Min: {min(times)*1000:.2f}ms")
    print(f"  Max: {max(times)*1000:.2f}ms")
    return 0


def _add_simulate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=FORMAT_CHOICES, default="swiss")
    parser.add_argument("--players", type=int, default=16, help="Number of players")
    parser.add_argument("--rounds", type=int, help="Number of rounds")
    parser.add_argument(
        "--distribution", choices=DISTRIBUTION_CHOICES, default="normal"
    )
    parser.add_argument("--pattern", choices=PATTERN_CHOICES, default="realistic")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--output", help="Output file path")
    parser.add_argument("--no-validate", action="store_true")


def _add_pair_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--file", required=True, help="Players file (JSON)")
    parser.add_argument("--format", choices=FORMAT_CHOICES, default="swiss")
    parser.add_argument("--round", type=int, default=1)
    parser.add_argument("--seed", type=int)


def _add_formats_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--players", type=int, default=16)


def _add_benchmark_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=FORMAT_CHOICES, default="swiss")
    parser.add_argument("--size", type=int, default=24, help="Tournament size")
    parser.add_argument("--rounds", type=int, help="Number of rounds")
    parser.add_argument(
        "--iterations", type=int, default=10, help="Number of iterations"
    )


def _add_unit_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--module", help="Specific test module")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")


SUBCOMMANDS = {
    "simulate": (_add_simulate_arguments, run_simulate_command),
    "pair": (_add_pair_arguments, run_pair_command),
    "formats": (_add_formats_arguments, run_formats_command),
    "benchmark": (_add_benchmark_arguments, run_benchmark_command),
    "unit": (_add_unit_arguments, run_unit_command),
}


def create_command_parser(command: str) -> argparse.ArgumentParser:
    """Create a standalone parser for one subcommand (interactive mode)."""
    add_arguments, _ = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(
        prog=command, description=COMMANDS[command]["description"]
    )
    add_arguments(parser)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="pairing-test",
        description="Unified testing CLI for the Pairing Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  pairing-test

  # Simulate a knockout
  pairing-test simulate --format knockout --players 16 --seed 7

  # Pair round 3 for a stored field
  pairing-test pair --file players.json --format monrad --round 3

  # Benchmark performance
  pairing-test benchmark --format doubleSwiss --size 64 --iterations 20
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command, (add_arguments, handler) in SUBCOMMANDS.items():
        sub_parser = subparsers.add_parser(
            command, help=COMMANDS[command]["description"]
        )
        add_arguments(sub_parser)
        sub_parser.set_defaults(func=handler)
    return parser


def execute_command(command: str, args_list: List[str]) -> Optional[int]:
    """Run one interactive command line; returns None for help output."""
    if command == "help":
        if args_list:
            print_command_help(args_list[0].lstrip("/"))
        else:
            print_commands_list()
        return None
    parser = create_command_parser(command)
    args = parser.parse_args(args_list)
    _, handler = SUBCOMMANDS[command]
    return handler(args)


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = session.prompt("pairing-test> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            if user_input in ["/help", "?", "/list"]:
                print_commands_list()
                continue

            parts = shlex.split(user_input)
            command = parts[0].lstrip("/")
            if command not in SUBCOMMANDS and command != "help":
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                execute_command(command, parts[1:])
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            except (PairingEngineException, OSError, ValueError) as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def run_standard_mode(argv: Optional[List[str]] = None) -> int:
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()

    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for pairing-test CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        return run_interactive_mode()
    return run_standard_mode(argv)


if __name__ == "__main__":
    sys.exit(main())
