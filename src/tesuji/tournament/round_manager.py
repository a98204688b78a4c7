"""Round progression for tournaments.

This module owns the list of rounds and asks the Swiss pairing engine for the
next one.
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

from typing import Dict, List, Optional

from tesuji.exceptions import RoundNotFoundException, TournamentStateException
from tesuji.models.pairing import PairingOptions
from tesuji.models.player import Entrant
from tesuji.models.tournament import RoundData
from tesuji.pairing.swiss import generate_pairings
from tesuji.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for tournaments.

    This class is responsible for:
    - Generating pairings with the Swiss pairing engine
    - Keeping the rounds in order
    - Refusing to pair a round twice or before the previous one is recorded
    """

    def __init__(self, num_rounds: int, pairing_options: PairingOptions):
        """Initialize the round manager.

        Args:
            num_rounds: Rounds scheduled for the event
            pairing_options: Penalty weights for the pairing engine
        """
        self.num_rounds = num_rounds
        self.pairing_options = pairing_options
        self.rounds: List[RoundData] = []

    @property
    def current_round_number(self) -> int:
        """Number of the latest paired round, 0 before the first pairing."""
        return len(self.rounds)

    @property
    def completed_rounds_count(self) -> int:
        """Number of rounds that have had results recorded."""
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    def get_round(self, round_number: int) -> Optional[RoundData]:
        """Get data for a specific round, or None if invalid round number."""
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return None

    def require_round(self, round_number: int) -> RoundData:
        """Get data for a specific round.

        Raises:
            RoundNotFoundException: If the round has not been created
        """
        round_data = self.get_round(round_number)
        if round_data is None:
            raise RoundNotFoundException(f"Round {round_number} does not exist")
        return round_data

    def create_next_round(self, entrants: Dict[str, Entrant]) -> RoundData:
        """Generate pairings for the next round.

        Args:
            entrants: All tournament players (id -> Entrant) in registration
                order; withdrawn players are passed on as ineligible

        Returns:
            The new round

        Raises:
            TournamentStateException: If all rounds have been created or the
                previous round has no results yet
        """
        if len(self.rounds) >= self.num_rounds:
            raise TournamentStateException(
                f"Cannot create more rounds: already at {self.num_rounds} rounds"
            )
        if self.rounds and not self.rounds[-1].is_completed:
            raise TournamentStateException(
                f"Round {self.rounds[-1].round_number} has no results yet"
            )

        round_number = len(self.rounds) + 1
        roster = [entrant.to_swiss_player() for entrant in entrants.values()]
        active_count = sum(1 for player in roster if player.can_play)

        logger.info(
            "Creating round %d with %d active players", round_number, active_count
        )

        result = generate_pairings(roster, self.pairing_options)
        round_data = RoundData.from_pairing_result(round_number, result)
        self.rounds.append(round_data)

        logger.info(
            "Round %d: %d tables, bye: %s, penalty: %.2f",
            round_number,
            len(round_data.pairings),
            round_data.bye_player_id or "None",
            round_data.penalty,
        )
        return round_data

    def undo_last_round(self) -> bool:
        """Drop the latest round while it has no results.

        Returns:
            False when there is nothing to drop or the round is already played
        """
        if not self.rounds:
            logger.warning("Nothing to undo: no round has been paired")
            return False

        last_round = self.rounds[-1]
        if last_round.is_completed:
            logger.warning("Cannot undo completed round %d", last_round.round_number)
            return False

        self.rounds.pop()
        logger.info("Undid round %d", last_round.round_number)
        return True

    def pending_rating_rounds(self) -> List[RoundData]:
        """Completed rounds whose games have not been rated yet."""
        return [r for r in self.rounds if r.is_completed and not r.is_rated]
