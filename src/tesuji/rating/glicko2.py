"""
Glicko-2 Rating System Implementation

Based on Professor Mark Glickman's paper:
"Example of the Glicko-2 system" (2013)
http://www.glicko.net/glicko/glicko2.pdf

All games passed to :func:`rate_player` in one call form a single rating
period and are treated as simultaneous, not as a sequence of updates.
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
from typing import List, NamedTuple, Optional, Sequence

from tesuji.constants import (
    CONVERGENCE_TOLERANCE,
    DEFAULT_RATING,
    GLICKO2_SCALE,
    MAX_BRACKET_STEPS,
    MAX_ROOT_ITERATIONS,
    Q,
)
from tesuji.exceptions import NumericDivergenceException
from tesuji.models.rating import GlickoConfig, OpponentResult, Rating, RatingUpdate
from tesuji.utils import setup_logger
from tesuji.utils.validation import (
    validate_game_score_strict,
    validate_glicko_rating_strict,
    validate_result_weight_strict,
    validate_tau,
)

logger = setup_logger(__name__)


class _GameSummary(NamedTuple):
    g_phi: float
    expected: float
    score: float
    weight: float


def _to_mu(rating: float, default_rating: float) -> float:
    return (rating - default_rating) / GLICKO2_SCALE


def _to_phi(deviation: float) -> float:
    return deviation / GLICKO2_SCALE


def _from_mu(mu: float, default_rating: float) -> float:
    return mu * GLICKO2_SCALE + default_rating


def _from_phi(phi: float) -> float:
    return phi * GLICKO2_SCALE


def g(phi: float) -> float:
    """
    Reduce the impact of an opponent's result by their uncertainty.

    g(φ) = 1 / √(1 + 3q²φ²/π²), q = ln 10 / 400
    """
    return 1 / math.sqrt(1 + ((3 * Q**2 * phi**2) / math.pi**2))


def e(mu: float, mu_j: float, phi_j: float) -> float:
    """
    Expected score against an opponent on the Glicko-2 scale.

    E(μ, μⱼ, φⱼ) = 1 / (1 + exp(-g(φⱼ)(μ - μⱼ)))
    """
    return 1 / (1 + math.exp(-g(phi_j) * (mu - mu_j)))


def _f(x: float, delta: float, phi: float, v: float, a: float, tau: float) -> float:
    ex = math.exp(x)
    numerator = ex * (delta**2 - phi**2 - v - ex)
    denominator = 2 * (phi**2 + v + ex) ** 2
    return numerator / denominator - (x - a) / (tau**2)


def _new_volatility(
    phi: float, delta: float, v: float, sigma: float, tau: float
) -> float:
    """
    Solve for the new volatility σ' (Step 5 of the Glicko-2 algorithm).

    Brackets the root of f between A = ln(σ²) and B, then narrows the bracket
    with the Illinois variant of regula falsi until |B - A| <= 1e-6.

    Raises:
        NumericDivergenceException: If bracketing or refinement exceeds its
            iteration bound or leaves the finite range
    """
    a = math.log(sigma**2)
    A = a

    delta_squared = delta**2
    phi_squared = phi**2

    if delta_squared > phi_squared + v:
        B = math.log(delta_squared - phi_squared - v)
    else:
        k = 1
        B = a - k * tau
        while _f(B, delta, phi, v, a, tau) < 0:
            k += 1
            if k > MAX_BRACKET_STEPS:
                raise NumericDivergenceException(
                    "Could not bracket the volatility root within "
                    f"{MAX_BRACKET_STEPS} steps"
                )
            B = a - k * tau

    f_a = _f(A, delta, phi, v, a, tau)
    f_b = _f(B, delta, phi, v, a, tau)

    iterations = 0
    while abs(B - A) > CONVERGENCE_TOLERANCE:
        iterations += 1
        if iterations > MAX_ROOT_ITERATIONS:
            raise NumericDivergenceException(
                f"Volatility did not converge within {MAX_ROOT_ITERATIONS} iterations"
            )
        if f_b == f_a:
            raise NumericDivergenceException("Volatility bracket collapsed")

        C = A + ((A - B) * f_a) / (f_b - f_a)
        f_c = _f(C, delta, phi, v, a, tau)
        if not (math.isfinite(C) and math.isfinite(f_c)):
            raise NumericDivergenceException(f"Volatility iteration diverged at {C}")

        if f_c * f_b <= 0:
            A, f_a = B, f_b
        else:
            f_a = f_a / 2
        B, f_b = C, f_c

    logger.debug("Volatility converged after %d iterations", iterations)
    return math.exp(A / 2)


def _summarise_games(
    mu: float, opponents: Sequence[OpponentResult], default_rating: float
) -> List[_GameSummary]:
    summaries = []
    for result in opponents:
        opp_rating, opp_deviation, _ = validate_glicko_rating_strict(
            result.opponent.rating,
            result.opponent.deviation,
            result.opponent.volatility,
        )
        score = validate_game_score_strict(result.score)
        weight = validate_result_weight_strict(result.weight)
        if weight == 0:
            continue

        mu_j = _to_mu(opp_rating, default_rating)
        phi_j = _to_phi(opp_deviation)
        summaries.append(_GameSummary(g(phi_j), e(mu, mu_j, phi_j), score, weight))
    return summaries


def rate_player(
    current: Optional[Rating],
    opponents: Sequence[OpponentResult],
    config: Optional[GlickoConfig] = None,
) -> RatingUpdate:
    """Compute a player's rating after one rating period.

    Args:
        current: Rating at the start of the period, None for an unrated player
        opponents: Games played in the period, each with the opponent's rating
            at the time of the game
        config: Glicko-2 settings, defaults when omitted

    Returns:
        RatingUpdate with the new rating and the change in each component

    Raises:
        InvalidRatingException: If a deviation or volatility is not positive
        InvalidResultException: If a score is not 0, 0.5 or 1, or a weight
            is negative
        InvalidConfigurationException: If tau is not positive
        NumericDivergenceException: If the volatility iteration fails
    """
    config = config if config is not None else GlickoConfig()
    tau = validate_tau(config.tau)
    if current is None:
        current = config.unrated()
    rating, deviation, volatility = validate_glicko_rating_strict(
        current.rating, current.deviation, current.volatility
    )

    mu = _to_mu(rating, config.default_rating)
    phi = _to_phi(deviation)

    try:
        games = _summarise_games(mu, opponents, config.default_rating)
    except OverflowError as exc:
        raise NumericDivergenceException(
            f"Expected score overflowed for rating {rating}"
        ) from exc

    if not games:
        # Inactive period: only the uncertainty grows
        phi_prime = math.sqrt(phi**2 + volatility**2)
        new_deviation = _from_phi(phi_prime)
        return RatingUpdate(
            rating=Rating(rating, new_deviation, volatility),
            rating_delta=0.0,
            deviation_delta=new_deviation - deviation,
            volatility_delta=0.0,
        )

    information = sum(
        game.weight * game.g_phi**2 * game.expected * (1 - game.expected)
        for game in games
    )
    if information == 0:
        raise NumericDivergenceException(
            "Games carry no rating information (expected scores saturated)"
        )
    v = 1 / information

    improvement = sum(
        game.weight * game.g_phi * (game.score - game.expected) for game in games
    )
    delta = v * improvement

    sigma_prime = _new_volatility(phi, delta, v, volatility, tau)
    phi_star = math.sqrt(phi**2 + sigma_prime**2)
    phi_prime = 1 / math.sqrt(1 / (phi_star**2) + (1 / v))
    mu_prime = mu + phi_prime**2 * improvement

    new_rating = _from_mu(mu_prime, config.default_rating)
    new_deviation = _from_phi(phi_prime)

    logger.debug(
        "Rated %d game(s): %.1f -> %.1f (deviation %.1f -> %.1f)",
        len(games),
        rating,
        new_rating,
        deviation,
        new_deviation,
    )
    return RatingUpdate(
        rating=Rating(new_rating, new_deviation, sigma_prime),
        rating_delta=new_rating - rating,
        deviation_delta=new_deviation - deviation,
        volatility_delta=sigma_prime - volatility,
    )


def advance_rating_period(
    current: Rating, volatility: Optional[float] = None
) -> Rating:
    """Grow a rating's deviation for a period without games.

    Args:
        current: Rating to age
        volatility: Volatility to apply, the rating's own by default

    Returns:
        Rating with deviation √(deviation² + volatility²)
    """
    if volatility is None:
        volatility = current.volatility
    rating, deviation, volatility = validate_glicko_rating_strict(
        current.rating, current.deviation, volatility
    )
    return Rating(
        rating=rating,
        deviation=math.sqrt(deviation**2 + volatility**2),
        volatility=volatility,
    )


def expected_score(player: Rating, opponent: Rating) -> float:
    """Probability-like expected score of ``player`` against ``opponent``.

    Only the opponent's deviation is taken into account. Used for display
    (e.g. how balanced a table is); it does not touch any rating.
    """
    player_rating, _, _ = validate_glicko_rating_strict(
        player.rating, player.deviation, player.volatility
    )
    opp_rating, opp_deviation, _ = validate_glicko_rating_strict(
        opponent.rating, opponent.deviation, opponent.volatility
    )
    mu = _to_mu(player_rating, DEFAULT_RATING)
    mu_j = _to_mu(opp_rating, DEFAULT_RATING)
    return e(mu, mu_j, _to_phi(opp_deviation))
