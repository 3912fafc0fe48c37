import dataclasses

import pytest

from play2win.domain.plays import (
    Game,
    PlayEvent,
    coerce_distance,
    coerce_int,
    coerce_xg,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("45", 45), ("45'", 45), ("12.7", 12), (" 7", 7), ("-3", -3), ("\u0663", 0), ("", 0), ("abc", 0), (None, 0)],
)
def test_coerce_int_defaults_to_zero(raw, expected):
    assert coerce_int(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("0.3", 0.3), (".5", 0.5), ("0.3abc", 0.3), ("1e-2", 0.01), ("", 0.0), ("n/a", 0.0), ("inf", 0.0), ("\u0663", 0.0)],
)
def test_coerce_xg_defaults_to_zero(raw, expected):
    assert coerce_xg(raw) == pytest.approx(expected)


def test_coerce_distance_blank_and_garbage_are_none():
    assert coerce_distance("") is None
    assert coerce_distance("far") is None
    assert coerce_distance("18") == 18
    assert coerce_distance("18m") == 18


def test_play_event_from_record_applies_defaults():
    play = PlayEvent.from_record(
        {
            "Minute": "bad",
            "Play Type": "Counter",
            "Shot Attempt": "Yes",
            "Shot Distance": "",
            "Shot Outcome": "Goal",
            "xG": "",
            "Success": "yes",
            "Win Impact": "?",
        }
    )
    assert play.minute == 0
    assert play.xg == 0.0
    assert play.shot_distance is None
    assert play.win_impact == 0
    # success is case-sensitive against "Yes"
    assert play.success is False
    assert play.is_goal and play.is_shot_attempt
    assert play.location == "" and play.phase_of_match == ""


def test_play_event_is_immutable():
    play = PlayEvent.from_record({"Minute": "5"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        play.minute = 6


def test_game_to_dict_uses_wire_names():
    play = PlayEvent.from_record({"Minute": "5", "xG": "0.25", "Success": "Yes", "Shot Distance": "12"})
    game = Game(game_id="3", opponent="A", date="d", season="s", plays=(play,))
    payload = game.to_dict()
    assert payload["gameId"] == "3"
    assert payload["plays"][0] == {
        "minute": 5,
        "playType": "",
        "shotAttempt": "",
        "shotDistance": 12,
        "shotOutcome": "",
        "xG": 0.25,
        "playContext": "",
        "location": "",
        "outcome": "",
        "success": True,
        "winImpact": 0,
        "assistType": "",
        "phaseOfMatch": "",
    }
