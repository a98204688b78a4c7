import json

import pytest

from tesuji import __version__
from tesuji.cli import main


def write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


def roster_data():
    return [
        {"id": "a", "name": "Alpha", "score": 1.0, "rating": 1800, "opponents": ["d"]},
        {"id": "b", "name": "Beta", "score": 1.0, "rating": 1700, "opponents": ["c"]},
        {"id": "c", "name": "Gamma", "score": 0.0, "rating": 1600, "opponents": ["b"]},
        {"id": "d", "name": "Delta", "score": 0.0, "rating": 1500, "opponents": ["a"]},
    ]


def test_pair_command(tmp_path, capsys):
    roster = write_json(tmp_path / "roster.json", roster_data())

    assert main(["pair", roster]) == 0
    output = json.loads(capsys.readouterr().out)

    assert len(output["pairings"]) == 2
    assert output["bye"] is None
    assert output["pairings"][0]["table"] == 1
    assert {output["pairings"][0]["black"], output["pairings"][0]["white"]} == {
        "a",
        "b",
    }


def test_pair_command_with_options_object(tmp_path, capsys):
    roster = write_json(
        tmp_path / "roster.json",
        {"players": roster_data(), "options": {"avoid_rematch_penalty": 1}},
    )

    assert main(["pair", roster, "--score-gap-weight", "0"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert len(output["pairings"]) == 2


def test_pair_command_rejects_duplicates(tmp_path, capsys):
    players = roster_data() + [{"id": "a", "rating": 1400}]
    roster = write_json(tmp_path / "roster.json", players)

    assert main(["pair", roster]) == 1
    assert "Duplicate player id" in capsys.readouterr().err


def test_pair_command_rejects_negative_weight(tmp_path, capsys):
    roster = write_json(tmp_path / "roster.json", roster_data())

    assert main(["pair", roster, "--rating-gap-weight", "-1"]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_rate_command(tmp_path, capsys):
    data = {
        "player": {"rating": 1500, "deviation": 200, "volatility": 0.06},
        "results": [
            {"opponent": {"rating": 1400, "deviation": 30}, "score": 1},
        ],
    }
    path = write_json(tmp_path / "period.json", data)

    assert main(["rate", path]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["rating"] > 1500
    assert output["deviation"] < 200
    assert output["rating_delta"] > 0


def test_rate_command_unrated_player(tmp_path, capsys):
    path = write_json(tmp_path / "period.json", {"player": None, "results": []})

    assert main(["rate", path]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["rating"] == 1500
    assert output["deviation"] > 350


def test_rate_command_invalid_tau(tmp_path, capsys):
    path = write_json(tmp_path / "period.json", {"player": None, "results": []})

    assert main(["rate", path, "--tau", "0"]) == 1
    assert "tau" in capsys.readouterr().err


def test_simulate_command(capsys):
    assert main(["simulate", "--players", "6", "--rounds", "2", "--seed", "3"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert len(output["standings"]) == 6
    assert "tournament" not in output


def test_simulate_command_full(capsys):
    assert main(["simulate", "--players", "5", "--rounds", "2", "--full"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert len(output["tournament"]["rounds"]) == 2


def test_missing_file(tmp_path, capsys):
    assert main(["pair", str(tmp_path / "missing.json")]) == 1
    assert "Error" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_pair_command_coerces_numeric_string_weight(tmp_path, capsys):
    roster = write_json(
        tmp_path / "roster.json",
        {"players": roster_data(), "options": {"score_gap_weight": "5"}},
    )

    assert main(["pair", roster]) == 0
    output = json.loads(capsys.readouterr().out)
    assert len(output["pairings"]) == 2


def test_pair_command_rejects_non_numeric_weight(tmp_path, capsys):
    roster = write_json(
        tmp_path / "roster.json",
        {"players": roster_data(), "options": {"score_gap_weight": "heavy"}},
    )

    assert main(["pair", roster]) == 1
    assert "score_gap_weight" in capsys.readouterr().err


def test_pair_command_rejects_nan_rating(tmp_path, capsys):
    path = tmp_path / "roster.json"
    path.write_text(
        '[{"id": "a", "rating": NaN}, {"id": "b", "rating": 1500},'
        ' {"id": "c"}, {"id": "d"}]'
    )

    assert main(["pair", str(path)]) == 1
    assert "must be finite" in capsys.readouterr().err
