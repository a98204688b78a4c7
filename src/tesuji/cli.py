"""Command-line interface for the Tesuji engines.

Reads JSON from files and writes JSON to stdout::

    tesuji pair roster.json --rematch-penalty 500
    tesuji rate period.json
    tesuji simulate --players 12 --rounds 5 --seed 42
"""

# Tesuji
# Copyright (C) 2026  Tesuji developers
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
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence

from tesuji import __version__
from tesuji.exceptions import TesujiException
from tesuji.models.pairing import PairingOptions
from tesuji.models.player import SwissPlayer
from tesuji.models.rating import GlickoConfig, OpponentResult, Rating
from tesuji.pairing.swiss import generate_pairings
from tesuji.rating.glicko2 import rate_player
from tesuji.testing.simulator import (
    RatingDistribution,
    SimulationConfig,
    TournamentSimulator,
)
from tesuji.utils import configure_logging, setup_logger

logger = setup_logger(__name__)


def _read_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def run_pair(args: argparse.Namespace) -> int:
    """Pair one round from a roster file."""
    data = _read_json(args.roster)
    if isinstance(data, list):
        players_data, options_data = data, {}
    else:
        players_data = data.get("players", [])
        options_data = data.get("options", {})

    if args.options:
        options_data = {**options_data, **_read_json(args.options)}
    options = PairingOptions.from_dict(options_data).with_overrides(
        avoid_rematch_penalty=args.rematch_penalty,
        color_repeat_penalty=args.color_repeat_penalty,
        rating_gap_weight=args.rating_gap_weight,
        score_gap_weight=args.score_gap_weight,
    )

    roster = [SwissPlayer.from_dict(player) for player in players_data]
    logger.debug("Pairing %d players from %s", len(roster), args.roster)
    result = generate_pairings(roster, options)
    _print_json(result.to_dict())
    return 0


def run_rate(args: argparse.Namespace) -> int:
    """Close one rating period for a single player."""
    data = _read_json(args.input)
    config = GlickoConfig.from_dict(data.get("config", {}))
    if args.tau is not None:
        config = replace(config, tau=args.tau)

    player_data = data.get("player")
    current = Rating.from_dict(player_data) if player_data is not None else None
    results = [OpponentResult.from_dict(r) for r in data.get("results", [])]

    update = rate_player(current, results, config)
    _print_json(update.to_dict())
    return 0


def run_simulate(args: argparse.Namespace) -> int:
    """Simulate a complete tournament."""
    config = SimulationConfig(
        num_players=args.players,
        num_rounds=args.rounds,
        rating_distribution=RatingDistribution(args.distribution),
        seed=args.seed,
    )
    summary = TournamentSimulator(config).run()
    if args.full:
        _print_json(summary)
    else:
        _print_json({"standings": summary["standings"]})
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``tesuji``."""
    parser = argparse.ArgumentParser(
        prog="tesuji",
        description="Swiss pairing and Glicko-2 rating for Go tournaments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    pair = subparsers.add_parser("pair", help="Pair one Swiss round")
    pair.add_argument(
        "roster",
        help="JSON file with a list of players, or an object with 'players' and "
        "'options' ('-' for stdin)",
    )
    pair.add_argument("--options", help="JSON file with pairing penalty weights")
    pair.add_argument("--rematch-penalty", type=float, default=None)
    pair.add_argument("--color-repeat-penalty", type=float, default=None)
    pair.add_argument("--rating-gap-weight", type=float, default=None)
    pair.add_argument("--score-gap-weight", type=float, default=None)
    pair.set_defaults(func=run_pair)

    rate = subparsers.add_parser("rate", help="Rate one player's rating period")
    rate.add_argument(
        "input",
        help="JSON file with 'player', 'results' and optional 'config' ('-' for stdin)",
    )
    rate.add_argument("--tau", type=float, default=None, help="Glicko-2 tau")
    rate.set_defaults(func=run_rate)

    simulate = subparsers.add_parser("simulate", help="Simulate a tournament")
    simulate.add_argument(
        "--players",
        type=int,
        default=12,
        help="Number of players in the tournament (default: 12)",
    )
    simulate.add_argument(
        "--rounds", type=int, default=5, help="Number of rounds (default: 5)"
    )
    simulate.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    simulate.add_argument(
        "--distribution",
        choices=[d.value for d in RatingDistribution],
        default=RatingDistribution.NORMAL.value,
        help="Rating distribution of the generated players",
    )
    simulate.add_argument(
        "--full",
        action="store_true",
        help="Print rounds and players, not only standings",
    )
    simulate.set_defaults(func=run_simulate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``tesuji`` command."""
    parser = create_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.verbose:
        configure_logging(logging.DEBUG)

    try:
        return args.func(args)
    except TesujiException as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError, KeyError) as exc:
        # Unreadable file, malformed JSON or a missing field
        print(f"Error: invalid input: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
