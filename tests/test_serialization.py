"""Tests for Point-in-Time serialization, point of view and replay encoding."""

import pytest

from planetwars.errors import MalformedStateError
from planetwars.models import Fleet, GameState, Planet
from planetwars.utils.serialization import (
    load_game_state,
    parse_entities,
    parse_game_state,
    pov_switch,
    render_game_state,
    render_initial_playback,
    render_turn_playback,
)

MAP_TEXT = """# A small map
P 0 0 1 50 5
P 3 0 2 50 5   # enemy home

P 1.5 2.25 0 10 2
F 1 20 0 2 2 1
F 3 4 1 0 3 3
"""


def test_parse_entities():
    """Test planets get sequential ids and all fields are read."""
    planets, fleets = parse_entities(MAP_TEXT)

    assert [p.id for p in planets] == [0, 1, 2]
    assert planets[2] == Planet(id=2, owner=0, ships=10, growth_rate=2, x=1.5, y=2.25)
    assert planets[1].owner == 2
    assert fleets == [
        Fleet(owner=1, ships=20, source=0, dest=2, total_trip_length=2, turns_remaining=1),
        Fleet(owner=3, ships=4, source=1, dest=0, total_trip_length=3, turns_remaining=3),
    ]


def test_parse_empty_text():
    """Test comments and blank lines alone give an empty state."""
    assert parse_entities("# nothing\n\n   \n") == ([], [])


@pytest.mark.parametrize(
    "text, message",
    [
        ("P 0 0 1 50", "planet line needs 6 tokens"),
        ("P 0 0 1 50 5 7", "planet line needs 6 tokens"),
        ("F 1 20 0 1 2", "fleet line needs 7 tokens"),
        ("X 1 2 3", "unknown line type"),
        ("p 0 0 1 50 5", "unknown line type"),
        ("P zero 0 1 50 5", "could not convert"),
        ("P 0 0 1 fifty 5", "invalid literal"),
        ("P 0 0 1 -5 5", "Invalid ships"),
    ],
)
def test_parse_malformed_lines(text, message):
    """Test malformed lines are rejected."""
    with pytest.raises(MalformedStateError, match=message):
        parse_entities(text)


def test_parse_error_reports_line_number():
    """Test the offending line number is kept on the error."""
    with pytest.raises(MalformedStateError) as exc_info:
        parse_entities("P 0 0 1 50 5\n# comment\nP 1 1 0 3\n")
    assert exc_info.value.line_number == 3


def test_parse_fleet_to_unknown_planet():
    """Test fleets must reference existing planets."""
    with pytest.raises(MalformedStateError, match="unknown planet"):
        parse_entities("P 0 0 1 50 5\nF 1 10 0 4 3 3\n")


def test_load_missing_map_file(tmp_path):
    """Test an unreadable map file is a MalformedStateError."""
    with pytest.raises(MalformedStateError, match="cannot read map file"):
        load_game_state(str(tmp_path / "missing.txt"))


def test_load_map_file(tmp_path):
    """Test loading a map from disk."""
    path = tmp_path / "map.txt"
    path.write_text(MAP_TEXT)

    game = load_game_state(str(path))

    assert game.num_planets == 3
    assert len(game.fleets) == 2
    assert game.num_turns == 0


def test_render_parse_round_trip():
    """Test the canonical rendering parses back to the same entities."""
    planets, fleets = parse_entities(MAP_TEXT)
    game = GameState(planets=planets, fleets=fleets)
    game.planets[0].x = 0.1 + 0.2  # Not exactly representable in short form

    assert parse_entities(render_game_state(game)) == (game.planets, game.fleets)


def test_render_formats_whole_coordinates_without_decimals():
    """Test whole-number coordinates are written as integers."""
    game = parse_game_state("P 3 4.0 1 50 5\nP 1.5 0 0 1 1\n")

    assert render_game_state(game) == "P 3 4 1 50 5\nP 1.5 0 0 1 1\n"


def test_render_with_point_of_view():
    """Test owners are rotated so the viewer is player 1."""
    game = parse_game_state(MAP_TEXT)

    rendered = render_game_state(game, pov=3).splitlines()

    assert rendered == [
        "P 0 0 3 50 5",  # Real player 1 shown as 3
        "P 3 0 2 50 5",  # Player 2 unaffected
        "P 1.5 2.25 0 10 2",  # Neutral unaffected
        "F 3 20 0 2 2 1",
        "F 1 4 1 0 3 3",  # Viewer's own fleet
    ]


def test_render_pov_does_not_change_state():
    """Test rendering for a player leaves canonical owners untouched."""
    game = parse_game_state(MAP_TEXT)
    render_game_state(game, pov=2)
    assert [p.owner for p in game.planets] == [1, 2, 0]


class TestPovSwitch:
    """Test point-of-view owner rotation."""

    def test_no_pov(self):
        """Test negative pov leaves owners alone."""
        assert pov_switch(-1, 1) == 1
        assert pov_switch(-1, 2) == 2
        assert pov_switch(-1, 0) == 0

    def test_viewer_becomes_one(self):
        """Test the viewer always sees itself as player 1."""
        assert pov_switch(2, 2) == 1
        assert pov_switch(1, 1) == 1

    def test_player_one_takes_viewer_number(self):
        """Test the real player 1 is shown with the viewer's number."""
        assert pov_switch(3, 1) == 3

    def test_others_unchanged(self):
        """Test neutral and third parties keep their ids."""
        assert pov_switch(3, 0) == 0
        assert pov_switch(3, 2) == 2

    def test_involution(self):
        """Test switching twice with the same pov is the identity."""
        for pov in range(1, 6):
            for owner in range(0, 8):
                assert pov_switch(pov, pov_switch(pov, owner)) == owner


class TestPlayback:
    """Test replay encoding."""

    def test_initial_playback_lists_planets_only(self):
        """Test the replay header holds planets separated by colons."""
        game = parse_game_state(MAP_TEXT)

        assert render_initial_playback(game) == "0,0,1,50,5:3,0,2,50,5:1.5,2.25,0,10,2|"

    def test_parse_game_state_seeds_replay(self):
        """Test a fresh game starts its replay with the header."""
        game = parse_game_state(MAP_TEXT)

        assert game.playback == "0,0,1,50,5:3,0,2,50,5:1.5,2.25,0,10,2|"
        assert game.flush_playback() == game.playback

    def test_turn_playback(self):
        """Test a step segment lists planets then fleets."""
        game = parse_game_state(MAP_TEXT)

        assert render_turn_playback(game) == "1.50,2.50,0.10,1.20.0.2.2.1,3.4.1.0.3.3:"

    def test_turn_playback_without_fleets(self):
        """Test a step segment with planets only."""
        game = parse_game_state("P 0 0 1 7 1\n")
        assert render_turn_playback(game) == "1.7:"
