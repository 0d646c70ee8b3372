"""Tests for the player-side client kit and starter strategy."""

import io

import pytest

from planetwars.bot import PlanetWars, run
from planetwars.bot.starter import do_turn

STATE = (
    "P 0 0 1 34 2\n"
    "P 7 9 2 34 2\n"
    "P 3.5 4.5 0 5 1\n"
    "P 1 2 0 10 3\n"
    "F 1 15 0 1 12 2\n"
    "F 2 28 1 2 8 5\n"
)


@pytest.fixture
def pw():
    return PlanetWars(STATE, io.StringIO())


def test_planet_queries(pw):
    """Test planets are split by owner from the player's side."""
    assert len(pw.planets()) == 4
    assert [p.id for p in pw.my_planets()] == [0]
    assert [p.id for p in pw.enemy_planets()] == [1]
    assert [p.id for p in pw.neutral_planets()] == [2, 3]
    assert [p.id for p in pw.not_my_planets()] == [1, 2, 3]
    assert pw.get_planet(2).x == 3.5


def test_fleet_queries(pw):
    """Test fleets are split by owner."""
    assert len(pw.fleets()) == 2
    assert pw.my_fleets()[0].ships == 15
    assert pw.enemy_fleets()[0].ships == 28


def test_distance_and_totals(pw):
    """Test distance accepts planets or ids, and ship totals include fleets."""
    assert pw.distance(0, 1) == 12
    assert pw.distance(pw.get_planet(0), pw.get_planet(3)) == 3
    assert pw.num_ships(1) == 49
    assert pw.num_ships(2) == 62
    assert pw.is_alive(2)
    assert not pw.is_alive(3)


def test_orders_are_written(pw):
    """Test orders and the end-of-turn marker go to the output stream."""
    pw.issue_order(pw.get_planet(0), 3, 10)
    pw.issue_order(0, 2, 4)
    pw.finish_turn()

    assert pw._output.getvalue() == "0 3 10\n0 2 4\ngo\n"


def test_run_loop():
    """Test run() calls the strategy once per state and answers each one."""
    seen = []

    def strategy(pw):
        seen.append(len(pw.planets()))
        pw.issue_order(0, 1, 1)

    stdin = io.StringIO("P 0 0 1 5 1\nP 1 1 2 5 1\ngo\nP 0 0 1 6 1\nP 1 1 2 6 1\nGO\n")
    stdout = io.StringIO()

    run(strategy, stdin=stdin, stdout=stdout)

    assert seen == [2, 2]
    assert stdout.getvalue() == "0 1 1\ngo\n0 1 1\ngo\n"


def test_starter_attacks_weakest_planet():
    """Test the starter sends half its strongest planet to the weakest target."""
    out = io.StringIO()
    pw = PlanetWars("P 0 0 1 40 2\nP 1 0 1 61 2\nP 2 0 0 3 1\nP 3 0 2 30 2\n", out)

    do_turn(pw)

    assert out.getvalue() == "1 2 30\n"


def test_starter_waits_for_fleet():
    """Test the starter holds while one of its fleets is in flight."""
    out = io.StringIO()

    do_turn(PlanetWars(STATE, out))

    assert out.getvalue() == ""


def test_winner():
    """Test the player-side winner check."""
    assert PlanetWars(STATE).winner() == -1
    assert PlanetWars("P 0 0 1 5 1\nP 1 1 0 5 1\n").winner() == 1
    assert PlanetWars("P 0 0 0 5 1\n").winner() == 0
