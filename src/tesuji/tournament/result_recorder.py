"""Result recording and validation for tournaments.

This module handles recording game results with proper validation and error checking.
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

from typing import Dict, Sequence

from tesuji.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    PlayerNotFoundException,
)
from tesuji.models.player import Entrant
from tesuji.models.tournament import MatchResult, RoundData
from tesuji.type_hints import BLACK, WHITE
from tesuji.utils import setup_logger
from tesuji.utils.validation import validate_game_score

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating game results.

    This class is responsible for:
    - Checking every table of a round is reported exactly once
    - Updating player scores, opponents and color history
    - Crediting the bye
    - Preventing duplicate result recording

    A round is validated as a whole before any player is updated, so a
    rejected submission leaves every entrant untouched.
    """

    def __init__(self, bye_score: float):
        self.bye_score = bye_score

    def record_round_results(
        self,
        round_data: RoundData,
        results: Sequence[MatchResult],
        entrants: Dict[str, Entrant],
    ) -> None:
        """Record results for all games in a round.

        Args:
            round_data: The round data to record results for
            results: One MatchResult per table
            entrants: Dictionary of all players (id -> Entrant)

        Raises:
            DuplicateResultException: If the round already has results
            InvalidResultException: If a result does not match the pairings
            PlayerNotFoundException: If a paired player is no longer registered
        """
        if round_data.is_completed:
            raise DuplicateResultException(
                f"Round {round_data.round_number} already has results"
            )

        round_number = round_data.round_number
        normalised = [
            self._validate_result_entry(result, round_data) for result in results
        ]

        reported = [result.table for result in normalised]
        duplicates = sorted({table for table in reported if reported.count(table) > 1})
        if duplicates:
            raise InvalidResultException(
                f"Round {round_number}: tables reported more than once: {duplicates}"
            )
        missing = sorted({p.table for p in round_data.pairings} - set(reported))
        if missing:
            raise InvalidResultException(
                f"Round {round_number}: no result for tables {missing}"
            )

        for result in normalised:
            for player_id in (result.black_id, result.white_id):
                if player_id not in entrants:
                    raise PlayerNotFoundException(f"Unknown player: {player_id}")
        if round_data.bye_player_id and round_data.bye_player_id not in entrants:
            raise PlayerNotFoundException(
                f"Unknown bye player: {round_data.bye_player_id}"
            )

        for result in normalised:
            self._record_game_result(result, entrants)
            logger.debug(
                "Round %d table %d: %s %s - %s %s",
                round_number,
                result.table,
                result.black_id,
                result.black_score,
                result.white_score,
                result.white_id,
            )

        if round_data.bye_player_id:
            entrants[round_data.bye_player_id].record_bye(self.bye_score)
            logger.debug(
                "Round %d: %s receives a bye worth %s",
                round_number,
                round_data.bye_player_id,
                self.bye_score,
            )

        round_data.results = normalised
        round_data.is_completed = True
        logger.info("Round %d results recorded", round_number)

    def _validate_result_entry(
        self, result: MatchResult, round_data: RoundData
    ) -> MatchResult:
        """Check a result against its pairing and normalise the score."""
        pairing = round_data.get_pairing(result.table)
        if pairing is None:
            raise InvalidResultException(
                f"Round {round_data.round_number} has no table {result.table}"
            )
        if (result.black_id, result.white_id) != (pairing.black, pairing.white):
            raise InvalidResultException(
                f"Table {result.table} is {pairing.black} (black) vs "
                f"{pairing.white} (white), got {result.black_id} vs {result.white_id}"
            )

        score_check = validate_game_score(result.black_score)
        if not score_check:
            raise InvalidResultException(
                f"Table {result.table}: {score_check.error_message}"
            )
        return MatchResult(
            table=result.table,
            black_id=result.black_id,
            white_id=result.white_id,
            black_score=score_check.sanitized_value,
        )

    def _record_game_result(
        self, result: MatchResult, entrants: Dict[str, Entrant]
    ) -> None:
        black = entrants[result.black_id]
        white = entrants[result.white_id]
        black.record_game(white.id, BLACK, result.black_score)
        white.record_game(black.id, WHITE, result.white_score)
