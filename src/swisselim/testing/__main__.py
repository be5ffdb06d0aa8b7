"""Testing CLI for Swiss Elimination.

Plays simulated tournaments from the command line, either with a single
subcommand or in an interactive prompt with autocomplete.
"""

# Swiss Elimination
# Copyright (C) 2025  Swiss Elimination developers
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
import shlex
import sys
import time
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from swisselim.constants import DEFAULT_ALLOWED_LOSSES, SEED_PLACEMENT, SEED_RATING
from swisselim.testing.rtg import (
    RandomTournamentGenerator,
    RatingDistribution,
    ResultPattern,
    RTGConfig,
    summarize_violations,
    summarize_warnings,
)
from swisselim.utils import setup_logger

logger = setup_logger(__name__)


class Colors:
    BOLD = "\033[1m"
    OK = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    END = "\033[0m"


EXIT_WORDS = ("exit", "quit", "q")


def _rtg_config(args: argparse.Namespace) -> RTGConfig:
    return RTGConfig(
        num_contestants=args.contestants,
        allowed_losses=args.losses,
        rating_distribution=RatingDistribution[args.distribution.upper()],
        result_pattern=ResultPattern[args.pattern.upper()],
        seed=args.seed,
        seed_kind=args.seed_kind,
        track_first_move_advantage=not args.no_first_move,
        max_repeat_pairings=args.repeats,
    )


def run_simulate_command(args: argparse.Namespace) -> int:
    """Play one random tournament. Returns 1 when a round broke a rule."""
    rtg = RandomTournamentGenerator(_rtg_config(args))
    data = rtg.generate_complete_tournament()

    if args.output:
        Path(args.output).write_text(rtg.export_json_format(data), encoding="utf-8")
        print(f"Tournament saved to: {args.output}")

    print(
        f"\n{Colors.BOLD}{len(data['contestants'])} contestants, "
        f"{len(data['rounds'])} rounds{Colors.END}"
    )
    print(f"\n{Colors.BOLD}Final Standings:{Colors.END}")
    for standing in data["standings"][:10]:
        marker = " (eliminated)" if standing.eliminated else ""
        print(
            f"  {standing.rank:3}. {standing.name:15} "
            f"W{standing.win_count} L{standing.loss_count} "
            f"OWC {standing.opponent_win_count} SB {standing.sonneborn_berger}{marker}"
        )

    violations = summarize_violations(data["reports"])
    warnings = summarize_warnings(data["reports"])
    if violations:
        print(f"\n{Colors.FAIL}Violations: {violations}{Colors.END}")
    if warnings:
        print(f"\n{Colors.WARNING}Warnings: {warnings}{Colors.END}")
    if not violations and not warnings:
        print(f"\n{Colors.OK}Every round passed validation{Colors.END}")
    return 1 if violations else 0


def run_benchmark_command(args: argparse.Namespace) -> int:
    """Time complete simulated tournaments of one size."""
    times = []
    for i in range(args.iterations):
        rtg = RandomTournamentGenerator(
            RTGConfig(
                num_contestants=args.size,
                allowed_losses=args.losses,
                seed=42 + i,
                validate_rounds=False,
            )
        )
        start = time.perf_counter()
        data = rtg.generate_complete_tournament()
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(
            f"  Iteration {i+1}/{args.iterations}: {elapsed*1000:.2f}ms "
            f"({len(data['rounds'])} rounds)"
        )

    print(f"\n{Colors.BOLD}Results:{Colors.END}")
    print(f"  Average: {sum(times) / len(times) * 1000:.2f}ms")
    print(f"  Min: {min(times)*1000:.2f}ms")
    print(f"  Max: {max(times)*1000:.2f}ms")
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swisselim-test",
        description="Testing CLI for Swiss Elimination",
        epilog="Without arguments an interactive prompt is started.",
    )
    subparsers = parser.add_subparsers(dest="command")

    simulate = subparsers.add_parser("simulate", help="Play a random tournament")
    simulate.add_argument("--contestants", type=int, default=16)
    simulate.add_argument("--losses", type=int, default=DEFAULT_ALLOWED_LOSSES)
    simulate.add_argument(
        "--distribution", choices=["uniform", "normal", "club"], default="normal"
    )
    simulate.add_argument(
        "--pattern", choices=["realistic", "predictable", "random"], default="realistic"
    )
    simulate.add_argument(
        "--seed-kind", choices=[SEED_RATING, SEED_PLACEMENT], default=SEED_RATING
    )
    simulate.add_argument("--repeats", type=int, default=0)
    simulate.add_argument("--no-first-move", action="store_true")
    simulate.add_argument("--seed", type=int)
    simulate.add_argument("--output", help="Write the tournament as JSON")
    simulate.set_defaults(func=run_simulate_command)

    benchmark = subparsers.add_parser("benchmark", help="Time simulated tournaments")
    benchmark.add_argument("--size", type=int, default=32)
    benchmark.add_argument("--losses", type=int, default=DEFAULT_ALLOWED_LOSSES)
    benchmark.add_argument("--iterations", type=int, default=5)
    benchmark.set_defaults(func=run_benchmark_command)

    def run_help_command(args: argparse.Namespace) -> int:
        subparsers.choices.get(args.topic, parser).print_help()
        return 0

    help_parser = subparsers.add_parser("help", help="Show help for a command")
    help_parser.add_argument("topic", nargs="?")
    help_parser.set_defaults(func=run_help_command)

    return parser


def run_command(parser: argparse.ArgumentParser, argv: List[str]) -> int:
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args)


def run_interactive_mode() -> int:
    """Read commands from a prompt until the user leaves."""
    parser = create_main_parser()
    session = PromptSession(
        completer=WordCompleter(["simulate", "benchmark", "help", *EXIT_WORDS]),
        history=InMemoryHistory(),
    )
    print(f"Type {Colors.BOLD}help{Colors.END} for commands, exit to leave")

    while True:
        try:
            line = session.prompt("swisselim> ").strip()
        except KeyboardInterrupt:
            continue
        except EOFError:
            break
        if not line:
            continue
        if line in EXIT_WORDS:
            break
        try:
            run_command(parser, shlex.split(line))
        except SystemExit:
            # argparse exits on bad arguments, the prompt keeps running
            continue
        except Exception as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.END}")
            logger.exception("Command execution failed")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the testing CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        return run_interactive_mode()
    return run_command(create_main_parser(), argv)


if __name__ == "__main__":
    sys.exit(main())
