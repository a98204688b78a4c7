"""In-memory tournament store tying the pairing and rating engines together."""

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

from typing import Any, Dict, List, Optional, Sequence

from tesuji.exceptions import (
    DuplicatePlayerException,
    PlayerNotFoundException,
    TournamentStateException,
)
from tesuji.models.player import Entrant
from tesuji.models.rating import OpponentResult, Rating, RatingUpdate
from tesuji.models.tournament import MatchResult, RoundData, TournamentConfig
from tesuji.rating.glicko2 import expected_score, rate_player
from tesuji.tournament.result_recorder import ResultRecorder
from tesuji.tournament.round_manager import RoundManager
from tesuji.type_hints import Forecast
from tesuji.utils import setup_logger
from tesuji.utils.validation import (
    validate_glicko_rating_strict,
    validate_player_id_strict,
)

logger = setup_logger(__name__)


class Tournament:
    """A Swiss tournament with Glicko-2 rated players.

    The lifecycle of a round is: :meth:`pair_next_round`, play the games,
    :meth:`record_results`, and, at the end of a rating period,
    :meth:`close_rating_period`. Ratings updated there feed the seeding of
    the next round.
    """

    def __init__(self, config: TournamentConfig) -> None:
        self.config = config
        self.entrants: Dict[str, Entrant] = {}
        self.round_manager = RoundManager(config.num_rounds, config.pairing_options)
        self.result_recorder = ResultRecorder(config.bye_score)
        self.rating_periods: List[Dict[str, RatingUpdate]] = []

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def rounds(self) -> List[RoundData]:
        return self.round_manager.rounds

    @property
    def is_over(self) -> bool:
        """True once the last round has results."""
        return self.round_manager.completed_rounds_count >= self.config.num_rounds

    # ========== Players ==========

    def add_player(
        self,
        player_id: str,
        name: Optional[str] = None,
        rating: Optional[Rating] = None,
    ) -> Entrant:
        """Register a player.

        Args:
            player_id: Unique id of the player
            name: Display name, the id when omitted
            rating: Current rating, the configured unrated rating when omitted

        Raises:
            DuplicatePlayerException: If the id is already registered
            InvalidRosterException: If the id is empty or reserved
            InvalidRatingException: If the rating is invalid
        """
        validate_player_id_strict(player_id)
        if player_id in self.entrants:
            raise DuplicatePlayerException(f"Player already registered: {player_id}")
        if rating is None:
            rating = self.config.glicko.unrated()
        validate_glicko_rating_strict(
            rating.rating, rating.deviation, rating.volatility
        )

        entrant = Entrant(player_id, name or player_id, rating)
        self.entrants[player_id] = entrant
        logger.info("Registered %s (%.0f)", entrant.name, rating.rating)
        return entrant

    def get_player(self, player_id: str) -> Entrant:
        """Look up a player.

        Raises:
            PlayerNotFoundException: If the id is not registered
        """
        try:
            return self.entrants[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"Unknown player: {player_id}") from None

    def withdraw_player(self, player_id: str) -> None:
        """Stop pairing a player from the next round on."""
        self.get_player(player_id).is_active = False
        logger.info("Withdrew %s", player_id)

    def reinstate_player(self, player_id: str) -> None:
        """Pair a withdrawn player again from the next round on."""
        self.get_player(player_id).is_active = True
        logger.info("Reinstated %s", player_id)

    # ========== Rounds ==========

    def pair_next_round(self) -> RoundData:
        """Pair the next round from the current standings.

        Raises:
            TournamentStateException: If the previous round has no results or
                every round has been paired
        """
        return self.round_manager.create_next_round(self.entrants)

    def record_results(
        self, round_number: int, results: Sequence[MatchResult]
    ) -> RoundData:
        """Record the results of every table of a round.

        Raises:
            RoundNotFoundException: If the round does not exist
            DuplicateResultException: If the round already has results
            InvalidResultException: If the results do not match the pairings
        """
        round_data = self.round_manager.require_round(round_number)
        self.result_recorder.record_round_results(round_data, results, self.entrants)
        return round_data

    def undo_last_round(self) -> bool:
        """Drop the last round if it has no results yet."""
        return self.round_manager.undo_last_round()

    def round_forecast(self, round_number: int) -> Forecast:
        """Expected score of black on each table of a round.

        Values near 0.5 mark balanced tables.
        """
        round_data = self.round_manager.require_round(round_number)
        forecast = []
        for pairing in round_data.pairings:
            black = self.get_player(pairing.black)
            white = self.get_player(pairing.white)
            forecast.append((pairing.table, expected_score(black.rating, white.rating)))
        return forecast

    # ========== Ratings ==========

    def close_rating_period(self) -> Dict[str, RatingUpdate]:
        """Rate every completed round not rated yet as one rating period.

        Opponent ratings are taken from the start of the period, so all games
        of the period count as simultaneous. Active players without games in
        the period only see their deviation grow. Byes are not rated.

        Returns:
            Rating update per player id

        Raises:
            TournamentStateException: If no completed round is waiting to be rated
        """
        pending = self.round_manager.pending_rating_rounds()
        if not pending:
            raise TournamentStateException("No completed rounds to rate")

        snapshot = {pid: entrant.rating for pid, entrant in self.entrants.items()}
        batches: Dict[str, List[OpponentResult]] = {pid: [] for pid in self.entrants}
        for round_data in pending:
            for result in round_data.results:
                batches[result.black_id].append(
                    OpponentResult(snapshot[result.white_id], result.black_score)
                )
                batches[result.white_id].append(
                    OpponentResult(snapshot[result.black_id], result.white_score)
                )

        updates = {}
        for pid, entrant in self.entrants.items():
            if entrant.is_active or batches[pid]:
                updates[pid] = rate_player(
                    snapshot[pid], batches[pid], self.config.glicko
                )

        for pid, update in updates.items():
            self.entrants[pid].rating = update.rating
        for round_data in pending:
            round_data.is_rated = True
        self.rating_periods.append(updates)

        logger.info(
            "Closed rating period %d covering round(s) %s for %d players",
            len(self.rating_periods),
            ", ".join(str(r.round_number) for r in pending),
            len(updates),
        )
        return updates

    # ========== Standings ==========

    def standings(self) -> List[Entrant]:
        """Players sorted by score, then rating (both descending)."""
        return sorted(
            self.entrants.values(), key=lambda e: (-e.score, -e.rating.rating)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the tournament state to dictionary."""
        return {
            "config": self.config.to_dict(),
            "players": [entrant.to_dict() for entrant in self.entrants.values()],
            "rounds": [round_data.to_dict() for round_data in self.rounds],
        }
