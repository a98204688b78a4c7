import pytest

from tesuji.constants import BYE_OPPONENT_ID
from tesuji.exceptions import InvalidPairingOptionsException, InvalidRosterException
from tesuji.models.pairing import PairingOptions, PairingResult
from tesuji.models.player import SwissPlayer
from tesuji.pairing.swiss import generate_pairings
from tesuji.type_hints import BLACK, FLOAT_DOWN, WHITE


def make_player(player_id, score=0.0, rating=1500.0, opponents=(), colors=(), **kwargs):
    return SwissPlayer(
        id=player_id,
        name=player_id.upper(),
        score=score,
        rating=rating,
        opponents=frozenset(opponents),
        color_history=tuple(colors),
        **kwargs,
    )


def make_roster(count, with_scores=False):
    return [
        make_player(
            f"p{i}",
            score=float((count - i) // 2) if with_scores else 0.0,
            rating=2000.0 - 37 * i,
        )
        for i in range(count)
    ]


def paired_ids(result):
    ids = []
    for pairing in result.pairings:
        ids.extend([pairing.black, pairing.white])
    return ids


def table_of(result, player_id):
    for pairing in result.pairings:
        if player_id in (pairing.black, pairing.white):
            return pairing
    return None


def opponent_of(result, player_id):
    pairing = table_of(result, player_id)
    return pairing.white if pairing.black == player_id else pairing.black


def test_empty_roster():
    result = generate_pairings([])
    assert result == PairingResult(pairings=(), bye=None, floated=(), penalty=0.0)


def test_single_player_gets_bye():
    result = generate_pairings([make_player("solo")])
    assert result.pairings == ()
    assert result.bye == "solo"
    assert result.penalty == 0.0


@pytest.mark.parametrize("count", [2, 4, 6, 8, 10, 12])
def test_even_roster_everyone_paired_once(count):
    roster = make_roster(count, with_scores=True)
    result = generate_pairings(roster)

    assert len(result.pairings) == count // 2
    assert result.bye is None
    ids = paired_ids(result)
    assert sorted(ids) == sorted(p.id for p in roster)
    for pairing in result.pairings:
        assert pairing.black != pairing.white


@pytest.mark.parametrize("count", [3, 5, 7, 9, 11])
def test_odd_roster_one_bye(count):
    roster = make_roster(count, with_scores=True)
    result = generate_pairings(roster)

    assert result.bye is not None
    assert len(result.pairings) == (count - 1) // 2
    ids = paired_ids(result)
    assert result.bye not in ids
    assert sorted(ids + [result.bye]) == sorted(p.id for p in roster)


def test_tables_numbered_contiguously():
    result = generate_pairings(make_roster(8))
    assert [p.table for p in result.pairings] == [1, 2, 3, 4]


def test_nine_players_bye_to_lowest_seed():
    scores = [3, 3, 2, 2, 2, 1, 1, 0, 0]
    ratings = [1700, 1650, 1800, 1600, 1500, 1900, 1400, 1550, 1450]
    roster = [
        make_player(f"p{i}", score=float(s), rating=float(r))
        for i, (s, r) in enumerate(zip(scores, ratings))
    ]
    # Shuffle the roster order; seeding must not depend on it
    roster = roster[4:] + roster[:4]

    result = generate_pairings(roster)

    # Lowest seed: score 0, rating 1450
    assert result.bye == "p8"
    assert len(result.pairings) == 4


def test_bye_skips_players_who_already_had_one():
    roster = [
        make_player("a", score=2.0, rating=1800),
        make_player("b", score=1.0, rating=1700),
        make_player("c", score=1.0, rating=1600, opponents=[BYE_OPPONENT_ID]),
    ]
    result = generate_pairings(roster)
    assert result.bye == "b"


def test_bye_falls_back_to_lowest_seed_when_everyone_had_one():
    roster = [
        make_player("a", score=2.0, rating=1800, opponents=[BYE_OPPONENT_ID]),
        make_player("b", score=1.0, rating=1700, opponents=[BYE_OPPONENT_ID]),
        make_player("c", score=1.0, rating=1600, opponents=[BYE_OPPONENT_ID]),
    ]
    result = generate_pairings(roster)

    assert result.bye == "c"
    assert len(result.pairings) == 1
    assert sorted(paired_ids(result)) == ["a", "b"]


def test_ineligible_players_sit_out():
    roster = make_roster(5)
    roster[0] = make_player("p0", rating=2000.0, can_play=False)
    result = generate_pairings(roster)

    assert "p0" not in paired_ids(result)
    assert result.bye is None
    assert len(result.pairings) == 2


def test_six_fresh_players_no_rematch_penalty():
    roster = make_roster(6)
    result = generate_pairings(roster)

    assert result.penalty < PairingOptions().avoid_rematch_penalty
    players = {p.id: p for p in roster}
    for pairing in result.pairings:
        assert not players[pairing.black].has_played(players[pairing.white])


def test_previous_opponents_not_paired_again():
    roster = [
        make_player("a", rating=1600, opponents=["b"]),
        make_player("b", rating=1590, opponents=["a"]),
        make_player("c", rating=1500),
        make_player("d", rating=1490),
    ]
    result = generate_pairings(roster)

    assert opponent_of(result, "a") != "b"
    assert result.penalty < 1000


def test_history_on_one_side_counts_as_played():
    roster = [
        make_player("a", rating=1600, opponents=["b"]),
        make_player("b", rating=1590),
        make_player("c", rating=1500),
        make_player("d", rating=1490),
    ]
    result = generate_pairings(roster)
    assert opponent_of(result, "a") != "b"


def test_search_is_not_greedy():
    # a-b is the cheapest table but would force the c-d rematch
    roster = [
        make_player("a", rating=1600),
        make_player("b", rating=1590),
        make_player("c", rating=1500, opponents=["d"]),
        make_player("d", rating=1400, opponents=["c"]),
    ]
    result = generate_pairings(roster)

    assert opponent_of(result, "a") in ("c", "d")
    assert opponent_of(result, "c") != "d"
    assert result.penalty < 1000


def test_forced_rematch_is_scored_not_refused():
    roster = [
        make_player("a", rating=1600, opponents=["b"]),
        make_player("b", rating=1500, opponents=["a"]),
    ]
    result = generate_pairings(roster)

    assert len(result.pairings) == 1
    assert result.penalty == pytest.approx(1000 + 100 * 0.05)


def test_relaxed_search_only_rematches_where_needed():
    # a has played everybody, the others are fresh
    roster = [
        make_player("a", rating=1700, opponents=["b", "c", "d"]),
        make_player("b", rating=1600, opponents=["a"]),
        make_player("c", rating=1500, opponents=["a"]),
        make_player("d", rating=1400, opponents=["a"]),
    ]
    result = generate_pairings(roster)
    players = {p.id: p for p in roster}

    rematches = [
        p for p in result.pairings if players[p.black].has_played(players[p.white])
    ]
    assert len(rematches) == 1
    assert "a" in (rematches[0].black, rematches[0].white)
    assert 1000 <= result.penalty < 2000


def test_custom_rematch_penalty_used_in_relaxed_search():
    roster = [
        make_player("a", rating=1500, opponents=["b"]),
        make_player("b", rating=1500, opponents=["a"]),
    ]
    result = generate_pairings(roster, PairingOptions(avoid_rematch_penalty=50))
    assert result.penalty == pytest.approx(50)


def test_colour_streak_is_broken():
    roster = [
        make_player("streak", rating=1600, colors=[BLACK, BLACK]),
        make_player("fresh", rating=1590),
    ]
    result = generate_pairings(roster)

    assert result.pairings[0].white == "streak"
    assert result.pairings[0].black == "fresh"


def test_colour_streak_kept_when_alternative_costs_more():
    # Both players come off two blacks: one of them must take a third
    roster = [
        make_player("a", rating=1600, colors=[BLACK, BLACK]),
        make_player("b", rating=1590, colors=[WHITE, BLACK, BLACK]),
    ]
    result = generate_pairings(roster)

    # a black: 20 + 2 = 22, b white: 0 -> 22
    # a white: 0, b black: 20 + 1 = 21 -> 21
    assert result.pairings[0].black == "b"


def test_colour_imbalance_is_evened_out():
    roster = [
        make_player("x", rating=1600, colors=[BLACK, WHITE, BLACK]),
        make_player("y", rating=1590),
    ]
    result = generate_pairings(roster)
    assert result.pairings[0].white == "x"


def test_colour_tie_gives_black_to_higher_seed():
    roster = [make_player("top", rating=1700), make_player("low", rating=1600)]
    result = generate_pairings(roster)
    assert result.pairings[0].black == "top"


def test_float_down_recorded_for_lead():
    roster = [
        make_player("leader", score=2.0, rating=1500),
        make_player("trailer", score=0.0, rating=1500),
    ]
    result = generate_pairings(roster)

    assert result.pairings[0].float_direction == FLOAT_DOWN
    assert result.floated == ("leader",)
    assert result.penalty == pytest.approx(2.0 * 5)


def test_half_point_difference_is_not_a_float():
    roster = [
        make_player("a", score=1.5, rating=1500),
        make_player("b", score=1.0, rating=1500),
    ]
    result = generate_pairings(roster)

    assert result.pairings[0].float_direction is None
    assert result.floated == ()


def test_score_groups_paired_together():
    roster = [
        make_player("a", score=2.0, rating=1500),
        make_player("b", score=0.0, rating=1800),
        make_player("c", score=2.0, rating=1400),
        make_player("d", score=0.0, rating=1700),
    ]
    result = generate_pairings(roster)

    assert opponent_of(result, "a") == "c"
    assert opponent_of(result, "b") == "d"
    assert result.floated == ()


def test_options_change_the_outcome():
    roster = [
        make_player("a", score=1.0, rating=1500),
        make_player("b", score=1.0, rating=1450),
        make_player("c", score=0.0, rating=1500),
        make_player("d", score=0.0, rating=1450),
    ]
    by_score = generate_pairings(roster)
    by_rating = generate_pairings(
        roster, PairingOptions(score_gap_weight=0.0, rating_gap_weight=1.0)
    )

    assert opponent_of(by_score, "a") == "b"
    assert opponent_of(by_rating, "a") == "c"


def test_deterministic():
    roster = make_roster(10, with_scores=True)
    first = generate_pairings(roster)
    second = generate_pairings(list(roster))

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_roster_not_modified():
    roster = make_roster(7, with_scores=True)
    snapshot = [p.to_dict() for p in roster]
    generate_pairings(roster)
    assert [p.to_dict() for p in roster] == snapshot


def test_duplicate_ids_rejected():
    roster = [make_player("a"), make_player("a", rating=1400)]
    with pytest.raises(InvalidRosterException):
        generate_pairings(roster)


def test_bye_sentinel_id_rejected():
    with pytest.raises(InvalidRosterException):
        generate_pairings([make_player(BYE_OPPONENT_ID), make_player("b")])


def test_negative_option_rejected():
    with pytest.raises(InvalidPairingOptionsException):
        generate_pairings(make_roster(2), PairingOptions(color_repeat_penalty=-1))
    # Option errors are roster errors for callers
    with pytest.raises(InvalidRosterException):
        generate_pairings(make_roster(2), PairingOptions(rating_gap_weight=-0.5))


def test_unknown_colour_rejected():
    with pytest.raises(InvalidRosterException):
        make_player("a", colors=["red"])


def test_sixteen_players_with_history():
    roster = []
    for i in range(16):
        opponents = {f"p{(i + 1) % 16}", f"p{(i - 1) % 16}"}
        colors = [BLACK, WHITE] if i % 2 else [WHITE, BLACK]
        roster.append(
            make_player(
                f"p{i}",
                score=float(i % 3),
                rating=1200.0 + 25 * i,
                opponents=opponents,
                colors=colors,
            )
        )
    result = generate_pairings(roster)
    players = {p.id: p for p in roster}

    assert len(result.pairings) == 8
    assert sorted(paired_ids(result)) == sorted(players)
    for pairing in result.pairings:
        assert not players[pairing.black].has_played(players[pairing.white])


def test_numeric_string_weight_is_coerced():
    roster = [make_player("a", score=1.0), make_player("b")]
    result = generate_pairings(roster, PairingOptions(score_gap_weight="5"))
    assert result.penalty == pytest.approx(5.0)


def test_non_numeric_weight_rejected():
    with pytest.raises(InvalidPairingOptionsException):
        generate_pairings(make_roster(2), PairingOptions(score_gap_weight="heavy"))


@pytest.mark.parametrize(
    "field, value",
    [
        ("rating", float("nan")),
        ("rating", float("inf")),
        ("score", float("nan")),
        ("score", float("-inf")),
        ("rating", "1500"),
    ],
)
def test_non_finite_player_numbers_rejected(field, value):
    roster = make_roster(4)
    roster[2] = make_player("p2", **{field: value})
    with pytest.raises(InvalidRosterException):
        generate_pairings(roster)


def test_lead_taking_white_leaves_the_table():
    roster = [
        make_player("a", rating=1600, colors=[BLACK, BLACK]),
        make_player("b", rating=1590),
        make_player("c", rating=1500),
        make_player("d", rating=1490),
    ]
    result = generate_pairings(roster)

    assert (result.pairings[0].black, result.pairings[0].white) == ("b", "a")
    assert (result.pairings[1].black, result.pairings[1].white) == ("c", "d")
    assert sorted(paired_ids(result)) == ["a", "b", "c", "d"]
    assert result.penalty == pytest.approx(10 * 0.05 + 10 * 0.05)


def test_float_recorded_on_forced_rematch():
    roster = [
        make_player("leader", score=2.0, rating=1500, opponents=["trailer"]),
        make_player("trailer", score=0.0, rating=1500, opponents=["leader"]),
    ]
    result = generate_pairings(roster)

    assert result.pairings[0].float_direction == FLOAT_DOWN
    assert result.floated == ("leader",)
    assert result.penalty == pytest.approx(1000 + 2.0 * 5)
