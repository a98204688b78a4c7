"""Swiss System Pairing Implementation.

Pairs one round by exhaustive best-first search. Players are seeded by score
and rating, the top unpaired player is tried against every remaining player,
and the candidate whose own penalty plus the best penalty of the rest of the
round is smallest wins. A cheap pairing at the top of the field can force an
expensive one further down, so no candidate is committed greedily.

Pairs of players who already met are infeasible while a rematch-free
completion exists. When a search branch has none, that branch is searched
again with rematches charged at the rematch penalty instead.

The search is exponential in the number of players. Memoizing completions
by residual set keeps a round of 16 players well under a second, but the
cost still grows roughly ninefold with every four extra players, so rosters
beyond about 24 players take seconds per round.
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

import math
from dataclasses import dataclass
from operator import attrgetter
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from tesuji.constants import FLOAT_SCORE_THRESHOLD
from tesuji.exceptions import InvalidRosterException
from tesuji.models.pairing import Pairing, PairingOptions, PairingResult
from tesuji.models.player import SwissPlayer
from tesuji.type_hints import BLACK, FLOAT_DOWN, FLOAT_UP, WHITE, Residual
from tesuji.utils import setup_logger
from tesuji.utils.validation import (
    validate_player_id_strict,
    validate_player_number,
)

logger = setup_logger(__name__)


@dataclass(frozen=True)
class _PairCandidate:
    """A possible table between the lead player and one opponent.

    Players are referenced by their index in the seeded roster.
    """

    black: int
    white: int
    penalty: float
    float_direction: Optional[str] = None
    float_player: Optional[int] = None


class _SearchResult(NamedTuple):
    pairings: Tuple[_PairCandidate, ...]
    penalty: float
    floated: Tuple[int, ...]


_COMPLETE = _SearchResult((), 0.0, ())
_INFEASIBLE = _SearchResult((), math.inf, ())


def _validate_roster(roster: Sequence[SwissPlayer]) -> None:
    """Reject rosters with malformed ids, duplicates or non-finite numbers."""
    seen = set()
    for player in roster:
        validate_player_id_strict(player.id)
        if player.id in seen:
            raise InvalidRosterException(f"Duplicate player id in roster: {player.id}")
        seen.add(player.id)
        for label, value in (("score", player.score), ("rating", player.rating)):
            check = validate_player_number(f"{player.id} {label}", value)
            if not check:
                raise InvalidRosterException(check.error_message)


def _seed_players(roster: Sequence[SwissPlayer]) -> Tuple[SwissPlayer, ...]:
    """Eligible players sorted by score desc, then rating desc.

    ``sorted`` is stable, so equal players keep their roster order.
    """
    eligible = [player for player in roster if player.can_play]
    return tuple(sorted(eligible, key=lambda p: (-p.score, -p.rating)))


def _detach_bye(
    players: Tuple[SwissPlayer, ...],
) -> Tuple[Residual, Optional[int]]:
    """Split off the bye player when the number of players is odd.

    The lowest seed who has not had a bye yet sits out. When everybody had
    one, the lowest seed sits out again.

    Returns:
        Tuple of (indices left to pair, index of the bye player or None)
    """
    indices = tuple(range(len(players)))
    if len(players) % 2 == 0:
        return indices, None

    bye_index = indices[-1]
    for index in reversed(indices):
        if not players[index].has_received_bye:
            bye_index = index
            break
    else:
        logger.debug(
            "Every player has had a bye; %s sits out again", players[bye_index].id
        )

    return tuple(i for i in indices if i != bye_index), bye_index


def _colour_penalty(player: SwissPlayer, colour: str, options: PairingOptions) -> float:
    """Cost of giving ``player`` the stone ``colour`` this round."""
    if not player.color_history:
        return 0

    streak = player.trailing_streak(colour)
    imbalance = player.colour_imbalance

    penalty = options.color_repeat_penalty * streak if streak >= 2 else 0
    if colour == BLACK and imbalance > 0:
        penalty += imbalance
    if colour == WHITE and imbalance < 0:
        penalty += abs(imbalance)
    return penalty


def _assign_colours(
    a: SwissPlayer, b: SwissPlayer, options: PairingOptions
) -> Tuple[bool, float]:
    """Pick the cheaper color assignment for a pair.

    Returns:
        Tuple of (whether ``a`` takes black, color penalty). Ties give black
        to ``a``.
    """
    a_black = _colour_penalty(a, BLACK, options) + _colour_penalty(b, WHITE, options)
    a_white = _colour_penalty(a, WHITE, options) + _colour_penalty(b, BLACK, options)
    if a_black <= a_white:
        return True, a_black
    return False, a_white


class _PairingSearch:
    """Exhaustive pairing search over one seeded roster.

    The roster is an immutable tuple and each branch is described by the
    tuple of indices still to pair, so branches never share mutable state.
    The best completion of a residual set does not depend on how the branch
    reached it, so completions are memoized for the duration of one call.
    """

    def __init__(self, players: Tuple[SwissPlayer, ...], options: PairingOptions):
        self.players = players
        self.options = options
        self._memo: Dict[Residual, _SearchResult] = {}
        self._candidates: Dict[Tuple[int, int, bool], _PairCandidate] = {}
        self.relaxed_branches = 0

    def solve(self, residual: Residual) -> _SearchResult:
        """Return the minimal-penalty pairing of the given players."""
        if not residual:
            return _COMPLETE

        cached = self._memo.get(residual)
        if cached is not None:
            return cached

        lead, rest = residual[0], residual[1:]
        best = self._best_completion(lead, rest, relaxed=False)
        if not math.isfinite(best.penalty) and rest:
            # No rematch-free completion in this branch
            self.relaxed_branches += 1
            logger.debug(
                "No rematch-free pairing for %s among %d players, allowing rematches",
                self.players[lead].id,
                len(rest),
            )
            best = self._best_completion(lead, rest, relaxed=True)

        self._memo[residual] = best
        return best

    def _best_completion(
        self, lead: int, rest: Residual, relaxed: bool
    ) -> _SearchResult:
        candidates = sorted(
            (self._candidate(lead, other, relaxed) for other in rest),
            key=attrgetter("penalty"),
        )

        best = _INFEASIBLE
        for candidate in candidates:
            if not math.isfinite(candidate.penalty):
                # Sorted, so every remaining candidate is a forbidden rematch
                break
            partner = candidate.white if candidate.black == lead else candidate.black
            remaining = tuple(index for index in rest if index != partner)
            completion = self.solve(remaining)
            total = completion.penalty + candidate.penalty
            if total < best.penalty:
                floated = completion.floated
                if candidate.float_player is not None:
                    floated = (candidate.float_player,) + floated
                best = _SearchResult(
                    (candidate,) + completion.pairings, total, floated
                )
        return best

    def _candidate(self, lead: int, other: int, relaxed: bool) -> _PairCandidate:
        key = (lead, other, relaxed)
        candidate = self._candidates.get(key)
        if candidate is None:
            candidate = self._build_candidate(lead, other, relaxed)
            self._candidates[key] = candidate
        return candidate

    def _build_candidate(self, lead: int, other: int, relaxed: bool) -> _PairCandidate:
        a, b = self.players[lead], self.players[other]
        options = self.options

        already_played = a.has_played(b)
        if already_played and not relaxed:
            return _PairCandidate(black=lead, white=other, penalty=math.inf)
        rematch_penalty = options.avoid_rematch_penalty if already_played else 0

        lead_black, colour_penalty = _assign_colours(a, b, options)
        score_gap = abs(a.score - b.score) * options.score_gap_weight
        rating_gap = abs(a.rating - b.rating) * options.rating_gap_weight

        float_direction = None
        if a.score > b.score + FLOAT_SCORE_THRESHOLD:
            float_direction = FLOAT_DOWN
        elif b.score > a.score + FLOAT_SCORE_THRESHOLD:
            float_direction = FLOAT_UP

        penalty = rematch_penalty + colour_penalty + score_gap + rating_gap
        black, white = (lead, other) if lead_black else (other, lead)
        return _PairCandidate(
            black=black,
            white=white,
            penalty=penalty,
            float_direction=float_direction,
            float_player=lead if float_direction else None,
        )


def generate_pairings(
    roster: Sequence[SwissPlayer],
    options: Optional[PairingOptions] = None,
) -> PairingResult:
    """
    Create pairings for one Swiss-system round.

    - roster: list of SwissPlayer snapshots; players with ``can_play`` False
      sit out. The roster is never modified.
    - options: penalty weights, defaults when omitted

    Returns: PairingResult with tables numbered from 1 in the order they were
    resolved, the bye player id (odd rosters only), floated player ids and
    the total penalty of the round.

    Raises:
        InvalidRosterException: On duplicate, empty or reserved player ids
        InvalidPairingOptionsException: On negative or non-finite weights
    """
    options = (options if options is not None else PairingOptions()).validate()
    _validate_roster(roster)

    players = _seed_players(roster)
    working_set, bye_index = _detach_bye(players)

    search = _PairingSearch(players, options)
    outcome = search.solve(working_set)

    pairings: List[Pairing] = []
    rematches = 0
    for table, candidate in enumerate(outcome.pairings, start=1):
        black, white = players[candidate.black], players[candidate.white]
        if black.has_played(white):
            rematches += 1
        pairings.append(
            Pairing(
                table=table,
                black=black.id,
                white=white.id,
                float_direction=candidate.float_direction,
            )
        )

    if rematches:
        logger.warning(
            "Pairing %d players required %d rematch(es)", len(working_set), rematches
        )
    logger.debug(
        "Paired %d tables from %d eligible players (bye: %s, penalty: %.2f, "
        "relaxed branches: %d)",
        len(pairings),
        len(players),
        players[bye_index].id if bye_index is not None else None,
        outcome.penalty,
        search.relaxed_branches,
    )

    return PairingResult(
        pairings=tuple(pairings),
        bye=players[bye_index].id if bye_index is not None else None,
        floated=tuple(players[index].id for index in outcome.floated),
        penalty=outcome.penalty,
    )
